import logging

from authlib.jose import JoseError, jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from catalog.config import Config
from catalog.errors import ErrorType
from catalog.exceptions import AppException

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def require_auth(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """Verify the bearer JWT on protected routes and return its claims.

    Raises:
        AppException: UNAUTHORIZED for a missing/invalid token, NOT_CONFIGURED without a secret
    """
    if not Config.JWT_SECRET:
        raise AppException(ErrorType.NOT_CONFIGURED, "Authentication not configured")

    if credentials is None:
        raise AppException(ErrorType.UNAUTHORIZED, "Authentication required")

    try:
        claims = jwt.decode(credentials.credentials, Config.JWT_SECRET)
        claims.validate()
    except (JoseError, ValueError) as exc:
        logger.warning(f"Rejected token: {exc}")
        raise AppException(ErrorType.UNAUTHORIZED, "Invalid or expired token")

    return dict(claims)
