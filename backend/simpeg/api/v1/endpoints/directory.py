from __future__ import annotations

from fastapi import APIRouter, Depends

from simpeg.core.dependencies import get_repository
from simpeg.models.directory import LoginEntry
from simpeg.services.record_repository import RecordRepository

router = APIRouter(prefix="/directory", tags=["directory"])


@router.get("/login", response_model=list[LoginEntry])
async def login_directory(repository: RecordRepository = Depends(get_repository)):  # noqa: B008
    return await repository.get_login_directory()
