from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import requests

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersistResult:
    ok: bool
    error: Optional[str] = None

    @classmethod
    def success(cls) -> "PersistResult":
        return cls(True)

    @classmethod
    def failure(cls, error: str) -> "PersistResult":
        return cls(False, error)


class BlockPersister(Protocol):
    def save_block(self, block_id: str, content: dict) -> PersistResult: ...


class HttpBlockPersister:
    """Saves one block through the bulk patch route of the pages API."""

    def __init__(
        self,
        base_url: str,
        page_id: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ):
        self._url = f"{base_url.rstrip('/')}/pages/{page_id}/blocks"
        self._session = session or requests.Session()
        self._timeout = timeout

    def save_block(self, block_id: str, content: dict) -> PersistResult:
        try:
            response = self._session.patch(
                self._url,
                json={"blocks": [{"id": block_id, "content": content}]},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("saving block %s failed: %s", block_id, e)
            return PersistResult.failure(str(e))

        if not response.ok:
            try:
                data = response.json()
            except ValueError:
                data = None
            message = data.get("error") if isinstance(data, dict) else None
            logger.warning("saving block %s returned HTTP %s", block_id, response.status_code)
            return PersistResult.failure(message or f"HTTP {response.status_code}")
        return PersistResult.success()
