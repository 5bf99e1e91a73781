from __future__ import annotations

from fastapi import APIRouter, Depends

from simpeg.core.config import settings
from simpeg.core.dependencies import get_repository
from simpeg.services.record_repository import RecordRepository

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check(repository: RecordRepository = Depends(get_repository)):  # noqa: B008
    remote = repository.remote
    services: dict[str, str] = {
        "remote_endpoint": remote.connectivity.value if remote.configured else "not_configured",
        "local_store": "enabled" if repository.store.enabled else "disabled",
    }

    return {
        "status": "degraded" if services["remote_endpoint"] == "offline" else "healthy",
        "version": settings.APP_VERSION,
        "services": services,
        "snapshot_source": repository.last_source.value if repository.last_source else None,
    }


@router.get("/ready")
async def readiness_check():
    return {"ready": True}
