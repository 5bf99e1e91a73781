"""Employee record repository: tiered reads and optimistic writes.

Reads resolve memory cache -> remote ``listEmployees`` -> local store -> built-in
fallback and never raise. Writes update the memory cache and the local store
before the remote ``saveEmployee`` call is attempted; a remote failure turns
into a "saved locally only" outcome instead of an exception.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from pydantic import BaseModel, ValidationError

from simpeg.core.config import Settings
from simpeg.core.errors import RemoteError, RemoteTransportError
from simpeg.models.directory import LoginEntry, Role
from simpeg.models.document import DocumentStatus
from simpeg.models.employee import (
    HONORARY_STATUSES,
    DashboardStats,
    EmployeeRecord,
    EmploymentStatus,
)
from simpeg.services.fallback import FALLBACK_IDS, fallback_snapshot
from simpeg.services.local_store import LocalStore
from simpeg.services.memory_cache import MemoryCache
from simpeg.services.remote_client import Connectivity, RemoteAction, RemoteClient

logger = logging.getLogger(__name__)

LOCAL_ONLY_WARNING = (
    "Data tersimpan di perangkat ini saja; server tidak dapat dihubungi. "
    "Perubahan belum terlihat di perangkat lain."
)


class SnapshotSource(str, Enum):
    MEMORY = "memory"
    REMOTE = "remote"
    LOCAL_STORE = "local_store"
    FALLBACK = "fallback"


@dataclass
class FetchResult:
    snapshot: list[EmployeeRecord] | None = None
    error: RemoteError | None = None

    @property
    def ok(self) -> bool:
        return self.snapshot is not None


class SaveOutcome(BaseModel):
    record: EmployeeRecord
    synced: bool
    warning: str | None = None

    @property
    def local_only(self) -> bool:
        return not self.synced


class RecordRepository:
    def __init__(
        self,
        remote: RemoteClient,
        store: LocalStore,
        cache: MemoryCache | None = None,
        *,
        admin_login_key: str = "admin",
        admin_display_name: str = "Administrator",
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.remote = remote
        self.store = store
        self.cache = cache if cache is not None else MemoryCache()
        self.admin_login_key = admin_login_key
        self.admin_display_name = admin_display_name
        self._clock = clock
        self.last_source: SnapshotSource | None = None
        # ids in the memory snapshot that came from the fallback dataset and were never saved
        self._fallback_ids: set[str] = set()
        self._persist_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> RecordRepository:
        return cls(
            RemoteClient.from_settings(settings),
            LocalStore.from_settings(settings),
            admin_login_key=settings.ADMIN_LOGIN_KEY,
            admin_display_name=settings.ADMIN_DISPLAY_NAME,
        )

    async def list_all(self) -> list[EmployeeRecord]:
        return [record.model_copy(deep=True) for record in await self._resolve_snapshot()]

    async def get_by_id(self, record_id: str) -> EmployeeRecord | None:
        for record in await self._resolve_snapshot():
            if record.id == record_id:
                return record.model_copy(deep=True)
        return None

    async def save(self, record: EmployeeRecord) -> SaveOutcome:
        record = record.model_copy(deep=True)
        if not record.id.strip():
            record.id = self._assign_id(record)

        if self.cache.get() is None:
            await self._resolve_snapshot()

        # read the cache again: other operations may have moved it on during the await
        self.cache.set(_upsert(self.cache.get() or [], record))
        self._fallback_ids.discard(record.id)
        await self._persist()

        try:
            await self.remote.call(RemoteAction.SAVE_EMPLOYEE, record.to_wire())
        except RemoteError as e:
            logger.warning("Employee %s saved locally only: %s", record.id, e)
            return SaveOutcome(
                record=record.model_copy(deep=True), synced=False, warning=LOCAL_ONLY_WARNING
            )

        logger.info("Employee %s saved", record.id)
        return SaveOutcome(record=record.model_copy(deep=True), synced=True)

    async def get_login_directory(self) -> list[LoginEntry]:
        snapshot = await self.list_all()

        admin_name = self.admin_display_name
        if self.remote.connectivity == Connectivity.OFFLINE:
            admin_name = f"{admin_name} (Offline)"
        entries = [LoginEntry(login_key=self.admin_login_key, display_name=admin_name, role=Role.ADMIN)]

        for record in snapshot:
            entries.append(
                LoginEntry(
                    login_key=record.email or record.nip or record.nik or record.id,
                    display_name=record.display_name,
                    role=Role.EMPLOYEE,
                )
            )
        return entries

    async def get_stats(self) -> DashboardStats:
        snapshot = await self.list_all()
        uploaded = (DocumentStatus.UPLOADED, DocumentStatus.VERIFIED)
        return DashboardStats(
            total_employees=len(snapshot),
            total_pns=sum(1 for r in snapshot if r.status == EmploymentStatus.PNS),
            total_pppk=sum(1 for r in snapshot if r.status == EmploymentStatus.PPPK),
            total_honorer=sum(1 for r in snapshot if r.status in HONORARY_STATUSES),
            documents_uploaded=sum(
                1 for r in snapshot for doc in r.documents if doc.status in uploaded
            ),
        )

    async def _resolve_snapshot(self) -> list[EmployeeRecord]:
        """Return the cached records themselves; public reads hand out copies."""
        cached = self.cache.get()
        if cached is not None:
            self.last_source = SnapshotSource.MEMORY
            return cached

        result = await self._fetch_remote()
        cached = self._cached_after_await()
        if cached is not None:
            return cached
        if result.ok:
            self._fallback_ids = set()
            self.cache.set(result.snapshot)
            self.last_source = SnapshotSource.REMOTE
            await self._persist()
            return self.cache.get() or []

        logger.warning("Remote listEmployees unavailable (%s) — trying local store", result.error)
        stored = await self.store.load()
        cached = self._cached_after_await()
        if cached is not None:
            return cached
        if stored:
            self._fallback_ids = set()
            self.cache.set(stored)
            self.last_source = SnapshotSource.LOCAL_STORE
            return self.cache.get() or []

        logger.warning("No local snapshot — serving built-in example records")
        self._fallback_ids = set(FALLBACK_IDS)
        self.cache.set(fallback_snapshot())
        self.last_source = SnapshotSource.FALLBACK
        return self.cache.get() or []

    def _cached_after_await(self) -> list[EmployeeRecord] | None:
        # a concurrent read or save may have filled the cache while we were suspended;
        # its snapshot is newer than anything this call fetched
        cached = self.cache.get()
        if cached is not None:
            logger.debug("Snapshot cached by a concurrent operation — discarding older fetch")
            self.last_source = SnapshotSource.MEMORY
        return cached

    async def _persist(self) -> None:
        # serialized so the last write to the file is always the latest cache state
        async with self._persist_lock:
            snapshot = self.cache.get()
            if snapshot is None:
                return
            await self.store.persist([r for r in snapshot if r.id not in self._fallback_ids])

    async def _fetch_remote(self) -> FetchResult:
        try:
            data = await self.remote.call(RemoteAction.LIST_EMPLOYEES)
        except RemoteError as e:
            return FetchResult(error=e)

        if not isinstance(data, list):
            return FetchResult(error=RemoteTransportError("listEmployees did not return a list"))

        snapshot: list[EmployeeRecord] = []
        for row in data:
            try:
                snapshot.append(EmployeeRecord.model_validate(row))
            except ValidationError as e:
                logger.warning("Skipping malformed employee row from remote: %s", e)
        return FetchResult(snapshot=snapshot)

    def _assign_id(self, record: EmployeeRecord) -> str:
        nip = (record.nip or "").strip()
        if nip:
            return nip
        nik = record.nik.strip()
        if nik:
            return nik
        return f"EMP-{int(self._clock() * 1000)}"


def _upsert(snapshot: list[EmployeeRecord], record: EmployeeRecord) -> list[EmployeeRecord]:
    updated = list(snapshot)
    for index, existing in enumerate(updated):
        if existing.id == record.id:
            updated[index] = record
            return updated
    updated.append(record)
    return updated
