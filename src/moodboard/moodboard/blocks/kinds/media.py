from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from ...common.datetime_utils import now_utc
from .base import BlockKind


class ImageKind(BlockKind):
    type_name = "image"
    default_width = 400
    default_height = 300

    def extra_defaults(self) -> dict:
        return {"url": ""}

    def render(self, content: Any) -> str:
        url = content.get("url") if isinstance(content, dict) else None
        return f"[image] {url}" if url else ""


class CalendarKind(BlockKind):
    type_name = "calendar"
    default_width = 300

    def __init__(self, clock: Callable[[], datetime] = now_utc):
        self._clock = clock

    def extra_defaults(self) -> dict:
        return {"date": self._clock().isoformat()}

    def render(self, content: Any) -> str:
        value = content.get("date") if isinstance(content, dict) else None
        return f"[calendar] {value[:10]}" if isinstance(value, str) and value else ""
