from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from simpeg.core.dependencies import get_document_service, get_repository
from simpeg.models.document import DocumentItem
from simpeg.models.employee import EmployeeRecord
from simpeg.services.document_service import (
    DocumentService,
    DocumentUploadError,
    EmployeeNotFoundError,
)
from simpeg.services.record_repository import RecordRepository, SaveOutcome

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=list[EmployeeRecord])
async def list_employees(
    repository: RecordRepository = Depends(get_repository),  # noqa: B008
):
    try:
        return await repository.list_all()
    except Exception as err:
        logger.exception("Failed to list employees")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve employees",
        ) from err


@router.put("", response_model=SaveOutcome)
async def save_employee(
    record: EmployeeRecord,
    repository: RecordRepository = Depends(get_repository),  # noqa: B008
):
    try:
        return await repository.save(record)
    except Exception as err:
        logger.exception("Failed to save employee %s", record.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save employee",
        ) from err


@router.get("/{employee_id}", response_model=EmployeeRecord)
async def get_employee(
    employee_id: str,
    repository: RecordRepository = Depends(get_repository),  # noqa: B008
):
    try:
        employee = await repository.get_by_id(employee_id)
    except Exception as err:
        logger.exception("Failed to get employee %s", employee_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve employee",
        ) from err

    if not employee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee '{employee_id}' not found",
        )

    return employee


@router.get("/{employee_id}/documents", response_model=list[DocumentItem])
async def list_documents(
    employee_id: str,
    documents: DocumentService = Depends(get_document_service),  # noqa: B008
):
    items = await documents.list_documents(employee_id)
    if items is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee '{employee_id}' not found",
        )
    return items


@router.post(
    "/{employee_id}/documents/{doc_type}",
    response_model=DocumentItem,
)
async def upload_document(
    employee_id: str,
    doc_type: str,
    file: UploadFile,
    documents: DocumentService = Depends(get_document_service),  # noqa: B008
):
    file_bytes = await file.read()

    if len(file_bytes) > documents.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large: {len(file_bytes)} bytes. Maximum: {documents.max_upload_bytes} bytes",
        )

    if not file_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty",
        )

    try:
        return await documents.upload_document(
            employee_id,
            doc_type,
            file.filename or doc_type,
            file.content_type or "application/octet-stream",
            file_bytes,
        )
    except EmployeeNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    except DocumentUploadError as e:
        logger.error("Upload failed for employee=%s doc=%s: %s", employee_id, doc_type, e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        ) from e
