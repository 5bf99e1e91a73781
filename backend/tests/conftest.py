from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest
from starlette.testclient import TestClient

from simpeg.core.dependencies import get_document_service, get_repository
from simpeg.main import app
from simpeg.models.employee import EmployeeRecord
from simpeg.services.document_service import DocumentService
from simpeg.services.local_store import LocalStore
from simpeg.services.record_repository import RecordRepository
from simpeg.services.remote_client import RemoteClient

TEST_ENDPOINT = "http://remote.test/exec"
TEST_STORE_KEY = "simpeg.employees.v1"

FULL_RECORD_WIRE: dict[str, Any] = {
    "id": "199001012015031002",
    "fullName": "Budi Santoso",
    "frontTitle": "Drs.",
    "backTitle": "M.Pd.",
    "nik": "3201011001900002",
    "nip": "199001012015031002",
    "nuptk": "1234567890123456",
    "birthPlace": "Bogor",
    "birthDate": "1990-01-01",
    "gender": "Laki-laki",
    "religion": "Islam",
    "maritalStatus": "Kawin",
    "address": "Jl. Melati No. 5",
    "city": "Cianjur",
    "phone": "081234567890",
    "email": "budi@smpn3.sch.id",
    "status": "PNS",
    "employeeType": "Guru",
    "position": "Guru Muda",
    "mainTask": "Mengajar",
    "unit": "SMPN 3 Pacet",
    "subject": "IPA",
    "tmtDuty": "2015-03-01",
    "teachingHours": 24,
    "skNumber": "813/2015",
    "skOfficial": "Bupati Cianjur",
    "asnData": {
        "asnType": "PNS",
        "rank": "III/c",
        "pangkat": "Penata",
        "tmtGolongan": "2019-04-01",
        "workingPeriodYear": 9,
        "workingPeriodMonth": 2,
        "karpeg": "K-001",
        "taspen": "T-001",
        "bpjsHealth": "0001",
        "bpjsLabor": "0002",
        "npwp": "12.345.678.9-000.000",
        "bankAccount": "1234567",
        "bankName": "BJB",
        "isCertified": True,
        "certNumber": "CERT-1",
        "nrg": "NRG-1",
        "certYear": "2018",
    },
    "nonAsnData": {"contractNumber": "stale", "honorAmount": 100},
    "education": {
        "level": "S2",
        "major": "Pendidikan IPA",
        "institution": "UPI",
        "graduationYear": "2014",
        "certificateNumber": "IJZ-42",
    },
    "family": [
        {"id": "fam-a1", "name": "Siti", "relation": "Suami/Istri", "isDependent": True},
        {"id": "fam-b2", "name": "Andi", "relation": "Anak", "birthDate": "2016-05-05", "status": "Kandung"},
    ],
    "verification": {"isVerified": "Disetujui", "adminNotes": "Lengkap", "lastUpdated": "2024-06-01"},
    "completeness": 95,
    "sheetRow": 7,
}


def make_record(**overrides: Any) -> EmployeeRecord:
    data: dict[str, Any] = {
        "id": "",
        "full_name": "Test User",
        "nik": "3201000000000099",
        "status": "Honorer",
    }
    data.update(overrides)
    return EmployeeRecord.model_validate(data)


def make_remote(*, side_effect: Any = None, return_value: Any = None) -> RemoteClient:
    """RemoteClient whose network step is mocked; connectivity tracking stays real."""
    remote = RemoteClient(TEST_ENDPOINT, timeout_seconds=0.5)
    remote._request = AsyncMock(side_effect=side_effect, return_value=return_value)
    return remote


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path):
    from simpeg.core.config import settings

    original_store = settings.LOCAL_STORE_PATH
    original_endpoint = settings.REMOTE_ENDPOINT_URL
    settings.LOCAL_STORE_PATH = str(tmp_path / "app_store.json")
    settings.REMOTE_ENDPOINT_URL = ""
    yield
    settings.LOCAL_STORE_PATH = original_store
    settings.REMOTE_ENDPOINT_URL = original_endpoint


@pytest.fixture
def store(tmp_path):
    return LocalStore(tmp_path / "local_store.json", TEST_STORE_KEY)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def override_repository():
    """Install a repository (and a document service over it) into the app."""

    def _install(repository: RecordRepository) -> None:
        documents = DocumentService(repository)
        app.dependency_overrides[get_repository] = lambda: repository
        app.dependency_overrides[get_document_service] = lambda: documents

    yield _install
    app.dependency_overrides.clear()
