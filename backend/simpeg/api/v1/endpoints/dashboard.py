from __future__ import annotations

from fastapi import APIRouter, Depends

from simpeg.core.dependencies import get_repository
from simpeg.models.employee import DashboardStats
from simpeg.services.record_repository import RecordRepository

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(repository: RecordRepository = Depends(get_repository)):  # noqa: B008
    return await repository.get_stats()
