from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence, Union

Height = Union[float, str]  # a number or "auto"


@dataclass(frozen=True)
class Position:
    """Where a block sits on the free-form canvas (world units)."""

    x: float
    y: float
    width: float
    height: Height = "auto"

    @classmethod
    def from_content(cls, content: Any) -> Optional["Position"]:
        if not isinstance(content, dict):
            return None
        x, y = content.get("x"), content.get("y")
        if not isinstance(x, (int, float)) or not isinstance(y, (int, float)):
            return None
        width = content.get("width")
        height = content.get("height", "auto")
        return cls(
            x=x,
            y=y,
            width=width if isinstance(width, (int, float)) else 0,
            height=height if isinstance(height, (int, float)) else "auto",
        )


@dataclass(frozen=True)
class Block:
    """Domain entity: one content unit owned by exactly one page."""

    block_id: str
    page_id: str
    type: str
    content: dict
    order: int
    created_at: datetime
    updated_at: datetime

    @property
    def position(self) -> Optional[Position]:
        return Position.from_content(self.content)


@dataclass(frozen=True)
class Page:
    """Domain entity: an owned, named collection of blocks."""

    page_id: str
    owner_id: int
    title: str
    icon: str
    order: int
    created_at: datetime
    updated_at: datetime
    blocks: Sequence[Block] = field(default_factory=tuple)


@dataclass(frozen=True)
class PageSummary:
    """Read-model for page lists (sidebar)."""

    page_id: str
    title: str
    icon: str
    updated_at: datetime
    block_count: int


@dataclass(frozen=True)
class NewBlock:
    type: str
    content: Any
    order: int = 0


@dataclass(frozen=True)
class BlockPatch:
    """Partial update of one block; None means "leave unchanged"."""

    block_id: str
    content: Any = None
    order: Optional[int] = None
    type: Optional[str] = None
