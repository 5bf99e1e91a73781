"""Failure taxonomy shared by the remote client, the local store and the repository."""

from __future__ import annotations


class RemoteError(Exception):
    """Base class for any failed call against the remote endpoint."""


class RemoteTimeout(RemoteError):
    pass


class RemoteTransportError(RemoteError):
    pass


class RemoteRejected(RemoteError):
    """The endpoint answered but reported ``success: false``."""

    def __init__(self, message: str | None = None) -> None:
        self.message = message or "Remote endpoint rejected the request"
        super().__init__(self.message)


class StorageUnavailable(Exception):
    """Local persistence is inaccessible. Logged by the store, never raised to callers."""
