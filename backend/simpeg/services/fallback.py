"""Built-in example records served when no real data source is reachable."""

from __future__ import annotations

from typing import Any

from simpeg.models.employee import EmployeeRecord

FALLBACK_EMPLOYEES: tuple[dict[str, Any], ...] = (
    {
        "id": "198501012010011001",
        "fullName": "Contoh Guru (Isi Data Dulu)",
        "frontTitle": "",
        "backTitle": "S.Pd.",
        "nik": "3201010101850001",
        "nip": "198501012010011001",
        "birthPlace": "Bogor",
        "birthDate": "1985-01-01",
        "gender": "Laki-laki",
        "religion": "Islam",
        "maritalStatus": "Kawin",
        "address": "Jl. Raya Pacet No. 1",
        "phone": "081200000001",
        "email": "contoh.guru@example.sch.id",
        "status": "PNS",
        "employeeType": "Guru",
        "position": "Guru Ahli Pertama",
        "mainTask": "Mengajar",
        "unit": "SMPN 3 Pacet",
        "subject": "Matematika",
        "tmtDuty": "2010-01-01",
        "teachingHours": 24,
        "skNumber": "800/001/2010",
        "skOfficial": "Bupati",
        "asnData": {
            "asnType": "PNS",
            "rank": "III/b",
            "pangkat": "Penata Muda Tingkat I",
            "tmtGolongan": "2014-04-01",
            "workingPeriodYear": 14,
            "workingPeriodMonth": 0,
            "isCertified": True,
        },
        "education": {
            "level": "S1",
            "major": "Pendidikan Matematika",
            "institution": "Universitas Contoh",
            "graduationYear": "2008",
            "certificateNumber": "S1-0001",
        },
        "family": [],
        "verification": {"isVerified": "Belum Diverifikasi", "adminNotes": "", "lastUpdated": ""},
        "completeness": 60,
    },
    {
        "id": "3201010202900002",
        "fullName": "Contoh Tenaga Kependidikan",
        "nik": "3201010202900002",
        "birthPlace": "Cianjur",
        "birthDate": "1990-02-02",
        "gender": "Perempuan",
        "religion": "Islam",
        "maritalStatus": "Belum Kawin",
        "address": "Jl. Raya Pacet No. 2",
        "phone": "081200000002",
        "email": "",
        "status": "Honorer",
        "employeeType": "Tenaga Kependidikan",
        "position": "Staf Tata Usaha",
        "mainTask": "Administrasi",
        "unit": "SMPN 3 Pacet",
        "tmtDuty": "2018-07-01",
        "nonAsnData": {
            "contractNumber": "421/015/2024",
            "contractStart": "2024-01-01",
            "contractEnd": "2024-12-31",
            "honorSource": "BOS",
            "honorAmount": 1500000,
        },
        "education": {"level": "D3", "major": "Administrasi Perkantoran"},
        "family": [],
        "verification": {"isVerified": "Belum Diverifikasi", "adminNotes": "", "lastUpdated": ""},
        "completeness": 40,
    },
)


def fallback_snapshot() -> list[EmployeeRecord]:
    """Fresh copies on every call; the dataset itself is never mutated."""
    return [EmployeeRecord.model_validate(row) for row in FALLBACK_EMPLOYEES]


FALLBACK_IDS = frozenset(row["id"] for row in FALLBACK_EMPLOYEES)
