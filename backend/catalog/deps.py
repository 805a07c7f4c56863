from fastapi import Request

from catalog.services.storage_service import StorageService


def get_storage(request: Request) -> StorageService:
    """The storage gateway opened at startup."""
    return request.app.state.storage
