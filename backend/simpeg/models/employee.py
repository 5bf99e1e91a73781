"""Employee record models as exchanged with the remote endpoint and the local store.

Attributes are snake_case, the wire format is camelCase (``fullName``, ``asnData``).
Unknown wire fields are kept so a record survives a round trip unchanged.
"""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from simpeg.models.document import DocumentItem


class EmploymentStatus(str, Enum):
    PNS = "PNS"
    PPPK = "PPPK"
    HONORER = "Honorer"
    GTT = "GTT"
    PTT = "PTT"


CIVIL_SERVANT_STATUSES = frozenset({EmploymentStatus.PNS, EmploymentStatus.PPPK})
HONORARY_STATUSES = frozenset({EmploymentStatus.HONORER, EmploymentStatus.GTT, EmploymentStatus.PTT})


class Gender(str, Enum):
    MALE = "Laki-laki"
    FEMALE = "Perempuan"


class VerificationStatus(str, Enum):
    UNVERIFIED = "Belum Diverifikasi"
    APPROVED = "Disetujui"
    NEEDS_REVISION = "Perlu Perbaikan"


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="allow",
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


def _new_family_id() -> str:
    return f"fam-{uuid.uuid4().hex[:12]}"


class FamilyMember(WireModel):
    id: str = Field(default_factory=_new_family_id)
    name: str = ""
    relation: str = ""  # Suami/Istri, Anak, Ayah, Ibu
    nik: str | None = None
    birth_place: str | None = None
    birth_date: str | None = None
    education: str | None = None
    job: str | None = None
    is_dependent: bool = False
    status: str | None = None


class EducationData(WireModel):
    level: str = ""
    major: str = ""
    institution: str = ""
    graduation_year: str = ""
    certificate_number: str = ""


class AsnData(WireModel):
    """Civil-servant fields, active for PNS and PPPK."""

    asn_type: str = ""
    rank: str = ""
    pangkat: str = ""
    tmt_golongan: str = ""
    working_period_year: int = 0
    working_period_month: int = 0
    karpeg: str = ""
    taspen: str = ""
    bpjs_health: str = ""
    bpjs_labor: str = ""
    npwp: str = ""
    bank_account: str = ""
    bank_name: str = ""
    is_certified: bool = False
    cert_number: str | None = None
    nrg: str | None = None
    cert_year: str | None = None


class NonAsnData(WireModel):
    """Contract-worker fields, active for Honorer, GTT and PTT."""

    contract_number: str = ""
    contract_start: str = ""
    contract_end: str = ""
    honor_source: str = ""
    honor_amount: float = 0
    bank_account: str = ""
    bank_name: str = ""


class VerificationData(WireModel):
    is_verified: VerificationStatus = VerificationStatus.UNVERIFIED
    admin_notes: str = ""
    last_updated: str = ""


class EmployeeRecord(WireModel):
    id: str = ""

    full_name: str = ""
    front_title: str | None = None
    back_title: str | None = None
    nik: str = ""
    nip: str | None = None
    nuptk: str | None = None
    birth_place: str = ""
    birth_date: str = ""
    gender: Gender | None = None
    religion: str = ""
    marital_status: str = ""
    address: str = ""
    village: str | None = None
    district: str | None = None
    city: str | None = None
    province: str | None = None
    postal_code: str | None = None
    phone: str = ""
    email: str = ""

    status: EmploymentStatus | None = None
    employee_type: str = ""  # Guru or Tenaga Kependidikan
    position: str = ""
    main_task: str = ""
    unit: str = ""
    subject: str | None = None
    tmt_duty: str = ""
    teaching_hours: int = 0
    sk_number: str = ""
    sk_official: str = ""

    asn_data: AsnData | None = None
    non_asn_data: NonAsnData | None = None

    education: EducationData = Field(default_factory=EducationData)
    family: list[FamilyMember] = []
    verification: VerificationData = Field(default_factory=VerificationData)
    completeness: int = 0

    documents: list[DocumentItem] = []

    @field_validator("gender", "status", mode="before")
    @classmethod
    def _blank_enum_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_civil_servant(self) -> bool:
        return self.status in CIVIL_SERVANT_STATUSES

    def employment_details(self) -> AsnData | NonAsnData | None:
        """Return the employment sub-record selected by ``status``; the other one is ignored."""
        if self.status is None:
            return None
        if self.is_civil_servant:
            return self.asn_data
        return self.non_asn_data

    @property
    def display_name(self) -> str:
        parts = [self.front_title, self.full_name]
        name = " ".join(p for p in parts if p)
        if self.back_title:
            name = f"{name}, {self.back_title}"
        return name or self.id


class DashboardStats(BaseModel):
    total_employees: int = 0
    total_pns: int = 0
    total_pppk: int = 0
    total_honorer: int = 0
    documents_uploaded: int = 0
