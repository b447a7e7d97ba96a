from __future__ import annotations

from typing import Optional

from ..common.kv_store import KeyValueStore
from ..core.constants import TYPING_TTL_SECONDS


def conversation_key(user_a: str, user_b: str) -> str:
    return "-".join(sorted([str(user_a), str(user_b)]))


class TypingService:
    """Who is currently typing to whom; entries fade out after a few seconds."""

    def __init__(self, store: KeyValueStore, *, ttl_seconds: float = TYPING_TTL_SECONDS):
        self._store = store
        self._ttl = ttl_seconds

    @staticmethod
    def _key(user_id, other_user_id, typist) -> str:
        return f"typing:{conversation_key(user_id, other_user_id)}:{typist}"

    def set_typing(self, *, user_id: int, user_name: Optional[str], other_user_id: str, is_typing: bool) -> None:
        key = self._key(user_id, other_user_id, user_id)
        if is_typing:
            self._store.set(key, {"userId": str(user_id), "userName": user_name or "Someone"}, self._ttl)
        else:
            self._store.expire(key)

    def is_typing(self, *, user_id: int, other_user_id: str) -> dict:
        data = self._store.get(self._key(user_id, other_user_id, other_user_id))
        if data:
            return {"isTyping": True, "userName": data.get("userName", "Someone")}
        return {"isTyping": False}
