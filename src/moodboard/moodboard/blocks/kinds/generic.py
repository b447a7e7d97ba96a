from __future__ import annotations

from typing import Any

from .base import BlockKind, content_text


class GenericKind(BlockKind):
    """Fallback for block types this build does not know about."""

    def __init__(self, type_name: str):
        self.type_name = type_name

    def render(self, content: Any) -> str:
        return content_text(content)
