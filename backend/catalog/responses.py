from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def respond(status_code: int, message: str, data: Any = None) -> JSONResponse:
    """Build the {"message", "data"} envelope every endpoint returns."""
    content = {"message": message}
    if data is not None:
        content["data"] = jsonable_encoder(data)
    return JSONResponse(status_code=status_code, content=content)
