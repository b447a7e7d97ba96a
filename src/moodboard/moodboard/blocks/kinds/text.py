from __future__ import annotations

from typing import Any

from .base import BlockKind, content_text


class TextKind(BlockKind):
    type_name = "text"
    text_like = True

    def render(self, content: Any) -> str:
        return content_text(content)


class HeadingKind(TextKind):
    default_width = 400

    def __init__(self, level: int = 1):
        self.level = level
        self.type_name = f"heading{level}"


class HandTextKind(TextKind):
    type_name = "hand_text"
    default_width = 300


class CodeKind(TextKind):
    type_name = "code"

    def render(self, content: Any) -> str:
        # keep indentation, only trim surrounding blank lines
        if not isinstance(content, dict) or not isinstance(content.get("text"), str):
            return ""
        return content["text"].strip("\n")
