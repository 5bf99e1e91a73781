"""Document tracking models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DocumentStatus(str, Enum):
    MISSING = "missing"
    UPLOADED = "uploaded"
    VERIFIED = "verified"


class DocumentItem(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str
    type: str = ""
    label: str = ""
    url: str | None = None
    status: DocumentStatus = DocumentStatus.MISSING
    uploaded_at: str | None = None
    file_name: str | None = None
    size: str | None = None
