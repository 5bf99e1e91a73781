"""Required-document tracking and uploads through the remote endpoint."""

from __future__ import annotations

import base64
import logging
from datetime import datetime
from typing import Iterable

from simpeg.core.errors import RemoteError
from simpeg.models.document import DocumentItem, DocumentStatus
from simpeg.services.record_repository import RecordRepository
from simpeg.services.remote_client import RemoteAction

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 2 * 1024 * 1024  # 2 MB, school Drive quota rule

REQUIRED_DOCUMENTS: tuple[DocumentItem, ...] = (
    DocumentItem(id="ktp", type="Identitas", label="KTP"),
    DocumentItem(id="kk", type="Identitas", label="Kartu Keluarga"),
    DocumentItem(id="sk", type="Kepegawaian", label="SK Pengangkatan / Kontrak"),
    DocumentItem(id="ijazah", type="Pendidikan", label="Ijazah Terakhir"),
    DocumentItem(id="npwp", type="Keuangan", label="NPWP"),
    DocumentItem(id="sertifikat", type="Kepegawaian", label="Sertifikat Pendidik"),
)


class DocumentUploadError(Exception):
    pass


class EmployeeNotFoundError(Exception):
    pass


def reconcile_documents(
    required: Iterable[DocumentItem],
    actual: Iterable[DocumentItem],
) -> list[DocumentItem]:
    """Merge the required template with what the employee actually has, keyed by id.

    Template entries come first in template order; actual items replace their
    template slot, and items outside the template are appended in their own order.
    """
    actual_by_id: dict[str, DocumentItem] = {}
    for item in actual:
        actual_by_id[item.id] = item

    merged: list[DocumentItem] = []
    seen: set[str] = set()
    for template in required:
        seen.add(template.id)
        found = actual_by_id.get(template.id)
        if found is None:
            merged.append(template.model_copy(update={"status": DocumentStatus.MISSING}))
        else:
            merged.append(
                found.model_copy(
                    update={
                        "type": found.type or template.type,
                        "label": found.label or template.label,
                    }
                )
            )

    for item_id, item in actual_by_id.items():
        if item_id not in seen:
            merged.append(item)
    return merged


def _format_size(num_bytes: int) -> str:
    return f"{num_bytes / 1024 / 1024:.2f} MB"


class DocumentService:
    def __init__(
        self,
        repository: RecordRepository,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        required: tuple[DocumentItem, ...] = REQUIRED_DOCUMENTS,
    ) -> None:
        self.repository = repository
        self.max_upload_bytes = max_upload_bytes
        self.required = required

    async def list_documents(self, employee_id: str) -> list[DocumentItem] | None:
        record = await self.repository.get_by_id(employee_id)
        if record is None:
            return None
        return reconcile_documents(self.required, record.documents)

    async def upload_document(
        self,
        employee_id: str,
        doc_type: str,
        file_name: str,
        mime_type: str,
        content: bytes,
    ) -> DocumentItem:
        if not content:
            raise DocumentUploadError("Uploaded file is empty")
        if len(content) > self.max_upload_bytes:
            raise DocumentUploadError(
                f"File too large: {len(content)} bytes. Maximum: {self.max_upload_bytes} bytes"
            )

        record = await self.repository.get_by_id(employee_id)
        if record is None:
            raise EmployeeNotFoundError(f"Employee '{employee_id}' not found")

        payload = {
            "employeeId": employee_id,
            "docType": doc_type,
            "fileName": file_name,
            "mimeType": mime_type,
            "base64Data": base64.b64encode(content).decode("ascii"),
        }
        try:
            result = await self.repository.remote.call(RemoteAction.UPLOAD_DOCUMENT, payload)
        except RemoteError as e:
            logger.error("Upload of %s for %s failed: %s", doc_type, employee_id, e)
            raise DocumentUploadError(f"Upload failed: {e}") from e

        url = result.get("url") if isinstance(result, dict) else None
        if not url:
            raise DocumentUploadError("Upload endpoint did not return a file URL")

        template = next((d for d in self.required if d.id == doc_type), None)
        item = DocumentItem(
            id=doc_type,
            type=template.type if template else "Uploaded Doc",
            label=template.label if template else file_name,
            status=DocumentStatus.UPLOADED,
            url=url,
            file_name=file_name,
            uploaded_at=datetime.now().strftime("%Y-%m-%d"),  # noqa: DTZ005
            size=_format_size(len(content)),
        )

        updated = record.model_copy(deep=True)
        updated.documents = [d for d in updated.documents if d.id != doc_type] + [item]
        outcome = await self.repository.save(updated)
        if outcome.local_only:
            logger.warning("Document link for %s stored locally only", employee_id)

        logger.info("Uploaded %s for %s (%s)", doc_type, employee_id, item.size)
        return item
