import logging
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from catalog.config import Config
from catalog.db.database import db
from catalog.routers import health, offers, products
from catalog.services.storage_service import StorageService
from catalog.exceptions import (
    AppException,
    app_exception_handler,
    generic_exception_handler,
    validation_exception_handler,
)

# Configure logging
logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await db.connect()
    await db.create_tables()
    app.state.storage = StorageService.from_config()
    yield
    await db.disconnect()


app = FastAPI(
    title="Catalog API",
    version="1.0.0",
    description="Products and promotional offer images backed by Firebase Storage",
    lifespan=lifespan
)

# Register exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers; offer routes must precede /api/products/{product_id}
app.include_router(health.router)
app.include_router(offers.router)
app.include_router(products.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("catalog.main:app", host="0.0.0.0", port=8000)
