"""Best-effort JSON file store holding the last known employee snapshot.

The file is a small key-value document; the snapshot lives under one
application-namespaced key and other keys are left alone. Nothing here raises:
failures are logged as ``StorageUnavailable`` and reads degrade to ``None``.
Malformed rows are skipped one by one so the rest of the snapshot survives.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from simpeg.core.config import Settings
from simpeg.core.errors import StorageUnavailable
from simpeg.models.employee import EmployeeRecord

logger = logging.getLogger(__name__)


class LocalStore:
    def __init__(self, path: str | Path | None, key: str = "simpeg.employees.v1") -> None:
        self.path = Path(path) if path else None
        self.key = key

    @classmethod
    def from_settings(cls, settings: Settings) -> LocalStore:
        if not settings.LOCAL_STORE_PATH:
            logger.warning("LOCAL_STORE_PATH empty — local persistence disabled")
        return cls(settings.LOCAL_STORE_PATH or None, settings.LOCAL_STORE_KEY)

    @property
    def enabled(self) -> bool:
        return self.path is not None

    async def persist(self, snapshot: list[EmployeeRecord]) -> bool:
        if self.path is None:
            return False
        try:
            rows = [record.to_wire() for record in snapshot]
            await asyncio.to_thread(self._write_key, rows)
        except (OSError, TypeError, ValueError, StorageUnavailable) as e:
            logger.warning("Local store write failed (%s): %s", self.path, e)
            return False
        logger.debug("Persisted %d records to %s", len(snapshot), self.path)
        return True

    async def load(self) -> list[EmployeeRecord] | None:
        if self.path is None:
            return None
        try:
            rows = await asyncio.to_thread(self._read_key)
        except (OSError, ValueError, StorageUnavailable) as e:
            logger.warning("Local store read failed (%s): %s", self.path, e)
            return None
        if rows is None:
            return None
        if not isinstance(rows, list):
            logger.warning("Local store key %s does not hold a list — ignoring", self.key)
            return None
        snapshot: list[EmployeeRecord] = []
        for row in rows:
            try:
                snapshot.append(EmployeeRecord.model_validate(row))
            except ValidationError as e:
                logger.warning("Skipping malformed employee row in local store: %s", e)
        return snapshot

    def _read_document(self) -> dict[str, Any]:
        assert self.path is not None
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as fh:
            document = json.load(fh)
        if not isinstance(document, dict):
            raise StorageUnavailable(f"{self.path} is not a key-value document")
        return document

    def _read_key(self) -> Any:
        return self._read_document().get(self.key)

    def _write_key(self, rows: list[dict[str, Any]]) -> None:
        assert self.path is not None
        try:
            document = self._read_document()
        except (ValueError, StorageUnavailable):
            logger.warning("Local store %s unreadable — rewriting from scratch", self.path)
            document = {}
        document[self.key] = rows

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(document, fh, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
