from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import TargetKind


@dataclass(frozen=True)
class PointerTarget:
    """The element a pointer-down landed on.

    ``block_id`` is set for everything inside a block, including its
    interactive children and its resize handle.
    """

    kind: TargetKind
    block_id: Optional[str] = None

    @classmethod
    def background(cls) -> "PointerTarget":
        return cls(TargetKind.BACKGROUND)

    @classmethod
    def block(cls, block_id: str) -> "PointerTarget":
        return cls(TargetKind.BLOCK, block_id)

    @classmethod
    def interactive(cls, block_id: Optional[str] = None) -> "PointerTarget":
        return cls(TargetKind.INTERACTIVE, block_id)

    @classmethod
    def resize_handle(cls, block_id: str) -> "PointerTarget":
        return cls(TargetKind.RESIZE_HANDLE, block_id)


@dataclass(frozen=True)
class PointerEvent:
    """Pointer position in screen pixels."""

    x: float
    y: float
    target: PointerTarget = PointerTarget(TargetKind.BACKGROUND)


@dataclass(frozen=True)
class WheelEvent:
    delta_y: float
    ctrl: bool = False
    meta: bool = False
