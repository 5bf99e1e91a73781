from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from simpeg.api.v1.router import api_router
from simpeg.core.config import settings
from simpeg.services.document_service import DocumentService
from simpeg.services.record_repository import RecordRepository

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    # One repository per application session; routes receive it via app.state
    repository = RecordRepository.from_settings(settings)
    application.state.repository = repository
    application.state.document_service = DocumentService(repository, settings.MAX_UPLOAD_BYTES)
    logger.info(
        "RecordRepository ready (remote=%s, local_store=%s)",
        "configured" if repository.remote.configured else "offline",
        repository.store.path or "disabled",
    )
    yield


app = FastAPI(
    title="SIMPEG API",
    description="School personnel records with offline-tolerant sync",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "SIMPEG API"}
