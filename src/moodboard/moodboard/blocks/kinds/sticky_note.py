from __future__ import annotations

from typing import Any

from .base import BlockKind, content_text

STICKY_NOTE_COLOR = "#fcd53f"


class StickyNoteKind(BlockKind):
    type_name = "sticky_note"
    default_width = 260
    default_height = 260
    text_like = True

    def extra_defaults(self) -> dict:
        return {"color": STICKY_NOTE_COLOR}

    def render(self, content: Any) -> str:
        return content_text(content)
