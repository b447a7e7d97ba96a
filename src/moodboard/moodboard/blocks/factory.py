from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from .kinds.base import BlockKind
from .kinds.generic import GenericKind
from .kinds.media import CalendarKind, ImageKind
from .kinds.shape import ShapeKind
from .kinds.sticky_note import StickyNoteKind
from .kinds.text import CodeKind, HandTextKind, HeadingKind, TextKind


def _default_kinds() -> Dict[str, BlockKind]:
    kinds = [
        TextKind(),
        HeadingKind(1),
        HeadingKind(2),
        HandTextKind(),
        CodeKind(),
        StickyNoteKind(),
        ShapeKind("shape_rect"),
        ShapeKind("shape_circle"),
        CalendarKind(),
        ImageKind(),
    ]
    return {k.type_name: k for k in kinds}


@dataclass
class BlockKindFactory:
    """Factory Pattern: pick the strategy for a block type (open set)."""

    kinds: Dict[str, BlockKind] = field(default_factory=_default_kinds)

    def for_type(self, block_type: str) -> BlockKind:
        kind = self.kinds.get(block_type)
        if kind is None:
            return GenericKind(block_type)
        return kind

    def register(self, kind: BlockKind) -> None:
        self.kinds[kind.type_name] = kind

    def known_types(self) -> list[str]:
        return sorted(self.kinds)
