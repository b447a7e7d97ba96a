from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used by the inline role checks."""

    ADMIN = "admin"
    STAFF = "staff"


class InteractionState(str, Enum):
    """States of the canvas pointer state machine."""

    IDLE = "idle"
    PANNING = "panning"
    DRAGGING_OBJECT = "dragging-object"
    RESIZING_OBJECT = "resizing-object"


class TargetKind(str, Enum):
    """What a pointer-down landed on."""

    BACKGROUND = "background"
    BLOCK = "block"
    INTERACTIVE = "interactive"
    RESIZE_HANDLE = "resize_handle"


class TitleSource(str, Enum):
    AI = "ai"
    HEURISTIC = "heuristic"
    FALLBACK = "fallback"
    ERROR = "error"
