from __future__ import annotations

from simpeg.models.employee import EmployeeRecord


class MemoryCache:
    """Session-lifetime holder of the current snapshot. No eviction."""

    def __init__(self) -> None:
        self._snapshot: list[EmployeeRecord] | None = None

    def get(self) -> list[EmployeeRecord] | None:
        if self._snapshot is None:
            return None
        return list(self._snapshot)

    def set(self, snapshot: list[EmployeeRecord]) -> None:
        self._snapshot = list(snapshot)

    def clear(self) -> None:
        self._snapshot = None

    @property
    def populated(self) -> bool:
        return self._snapshot is not None
