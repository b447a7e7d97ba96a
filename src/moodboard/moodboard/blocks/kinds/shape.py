from __future__ import annotations

from typing import Any

from .base import BlockKind


class ShapeKind(BlockKind):
    """Rectangles and circles: outline only, no text."""

    default_width = 200
    default_height = 200

    def __init__(self, type_name: str):
        self.type_name = type_name

    def extra_defaults(self) -> dict:
        return {"background": "transparent", "borderColor": "#fff"}

    def render(self, content: Any) -> str:
        return ""
