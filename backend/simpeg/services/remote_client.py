"""Single-shot, timeout-bounded client for the Apps Script endpoint."""

from __future__ import annotations

import asyncio
import json
import logging
from enum import Enum
from typing import Any

import aiohttp

from simpeg.core.config import Settings
from simpeg.core.errors import RemoteRejected, RemoteTimeout, RemoteTransportError

logger = logging.getLogger(__name__)


class RemoteAction(str, Enum):
    LIST_EMPLOYEES = "listEmployees"
    SAVE_EMPLOYEE = "saveEmployee"
    UPLOAD_DOCUMENT = "uploadDocument"


class Connectivity(str, Enum):
    UNKNOWN = "unknown"
    ONLINE = "online"
    OFFLINE = "offline"


class RemoteClient:
    """Issues exactly one POST per call. Retry policy belongs to the caller."""

    def __init__(self, endpoint: str = "", timeout_seconds: float = 10.0) -> None:
        self.endpoint = endpoint.strip()
        self.timeout_seconds = timeout_seconds
        self.connectivity = Connectivity.UNKNOWN

    @classmethod
    def from_settings(cls, settings: Settings) -> RemoteClient:
        if not settings.REMOTE_ENDPOINT_URL:
            logger.warning("REMOTE_ENDPOINT_URL missing — running in offline mode")
        return cls(settings.REMOTE_ENDPOINT_URL, settings.REMOTE_TIMEOUT_SECONDS)

    @property
    def configured(self) -> bool:
        return bool(self.endpoint)

    async def call(self, action: RemoteAction, payload: Any = None) -> Any:
        try:
            result = await self._request(action, payload if payload is not None else {})
        except Exception:
            self.connectivity = Connectivity.OFFLINE
            raise
        self.connectivity = Connectivity.ONLINE
        return result

    async def _request(self, action: RemoteAction, payload: Any) -> Any:
        if not self.configured:
            raise RemoteTransportError("Remote endpoint not configured")

        action_name = RemoteAction(action).value
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                # Apps Script only answers CORS-simple requests, so the JSON goes as text/plain
                async with session.post(
                    self.endpoint,
                    params={"action": action_name},
                    data=json.dumps(payload, ensure_ascii=False),
                    headers={"Content-Type": "text/plain;charset=utf-8"},
                ) as response:
                    if response.status < 200 or response.status >= 300:
                        error_text = await response.text()
                        raise RemoteTransportError(
                            f"{action_name} failed: {response.status} - {error_text[:200]}"
                        )
                    try:
                        body = await response.json(content_type=None)
                    except ValueError as e:
                        raise RemoteTransportError(f"{action_name} returned a non-JSON body") from e
        except asyncio.TimeoutError as e:
            logger.warning("Remote call %s timed out after %.1fs", action_name, self.timeout_seconds)
            raise RemoteTimeout(f"{action_name} timed out after {self.timeout_seconds}s") from e
        except aiohttp.ClientError as e:
            logger.warning("Remote call %s failed: %s", action_name, e)
            raise RemoteTransportError(f"{action_name} failed: {e}") from e

        return _unwrap(action_name, body)


def _unwrap(action_name: str, body: Any) -> Any:
    if not isinstance(body, dict) or "success" not in body:
        return body
    if not body.get("success"):
        message = body.get("message")
        logger.warning("Remote call %s rejected: %s", action_name, message)
        raise RemoteRejected(message)
    if "data" in body and body["data"] is not None:
        return body["data"]
    return body
