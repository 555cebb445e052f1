"""Health check API endpoint."""

from fastapi import APIRouter

from projectdocs.api.v1.deps import StoreDep
from projectdocs.errors import StorageUnavailable
from projectdocs.settings import settings

router = APIRouter(tags=["Health"])


@router.get("")
async def health_check(store: StoreDep):
    """Health check endpoint. Reports 503 when the storage backend is down."""
    if not store.backend.ping():
        raise StorageUnavailable(f"{settings.storage_type} storage is not reachable")
    return {"status": "healthy", "storage": settings.storage_type}
