from __future__ import annotations

from fastapi import Request

from simpeg.services.document_service import DocumentService
from simpeg.services.record_repository import RecordRepository


def get_repository(request: Request) -> RecordRepository:
    return request.app.state.repository


def get_document_service(request: Request) -> DocumentService:
    return request.app.state.document_service
