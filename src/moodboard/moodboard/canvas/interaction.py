from __future__ import annotations

import copy
import itertools
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from ..blocks.factory import BlockKindFactory
from ..core.constants import MIN_OBJECT_SIZE, TEMP_BLOCK_PREFIX
from ..core.enums import InteractionState, TargetKind
from ..pages.model import Block, Position
from .events import PointerEvent, WheelEvent
from .persistence import BlockPersister, PersistResult
from .viewport import Viewport

logger = logging.getLogger(__name__)


def is_temp_id(block_id: str) -> bool:
    return block_id.startswith(TEMP_BLOCK_PREFIX)


@dataclass
class _Gesture:
    start_x: float
    start_y: float
    block_id: Optional[str]
    snapshot: dict


class CanvasInteraction:
    """Pointer state machine of the mood board canvas.

    Moves only touch the in-memory content. The block is saved once, at
    pointer-up, from the gesture snapshot plus the total pointer delta.
    A failed save puts the snapshot back.
    """

    def __init__(
        self,
        persister: BlockPersister,
        viewport: Optional[Viewport] = None,
        kinds: Optional[BlockKindFactory] = None,
    ):
        self.persister = persister
        self.viewport = viewport or Viewport()
        self.kinds = kinds or BlockKindFactory()

        self.blocks: Dict[str, dict] = {}
        self.block_types: Dict[str, str] = {}
        self.state = InteractionState.IDLE
        self.selected_id: Optional[str] = None
        self.last_error: Optional[str] = None

        self._gesture: Optional[_Gesture] = None
        self._unsaved_temp: set[str] = set()
        self._temp_seq = itertools.count(1)

    def load(self, blocks: Iterable[Block]) -> None:
        for block in blocks:
            self.blocks[block.block_id] = copy.deepcopy(block.content)
            self.block_types[block.block_id] = block.type

    def position_of(self, block_id: str) -> Optional[Position]:
        return Position.from_content(self.blocks.get(block_id))

    # pointer events

    def pointer_down(self, event: PointerEvent) -> InteractionState:
        if self.state != InteractionState.IDLE:
            return self.state

        target = event.target
        if target.block_id is not None and target.block_id in self.blocks:
            self.selected_id = target.block_id

        if target.kind == TargetKind.INTERACTIVE:
            # text editing inside the block keeps working
            return self.state

        if target.kind == TargetKind.BACKGROUND:
            self.selected_id = None
            self._start(event, None, {"pan_x": self.viewport.pan_x, "pan_y": self.viewport.pan_y})
            self.state = InteractionState.PANNING
        elif target.block_id in self.blocks:
            self._start(event, target.block_id, copy.deepcopy(self.blocks[target.block_id]))
            if target.kind == TargetKind.RESIZE_HANDLE:
                self.state = InteractionState.RESIZING_OBJECT
            else:
                self.state = InteractionState.DRAGGING_OBJECT
        return self.state

    def pointer_move(self, event: PointerEvent) -> None:
        if self._gesture is not None:
            self._apply(event)

    def pointer_up(self, event: PointerEvent) -> Optional[PersistResult]:
        gesture = self._gesture
        if gesture is None:
            return None

        self._apply(event)
        state = self.state
        self.state = InteractionState.IDLE
        self._gesture = None

        if state == InteractionState.PANNING or gesture.block_id is None:
            return None
        return self._persist(gesture.block_id, gesture.snapshot)

    def pointer_cancel(self) -> None:
        """Abandon the gesture and restore what it started from."""
        gesture = self._gesture
        if gesture is None:
            return
        if self.state == InteractionState.PANNING:
            self.viewport.pan_x = gesture.snapshot["pan_x"]
            self.viewport.pan_y = gesture.snapshot["pan_y"]
        elif gesture.block_id in self.blocks:
            self.blocks[gesture.block_id] = copy.deepcopy(gesture.snapshot)
        self.state = InteractionState.IDLE
        self._gesture = None

    def wheel(self, event: WheelEvent) -> bool:
        return self.viewport.handle_wheel(event.delta_y, ctrl=event.ctrl, meta=event.meta)

    # local block lifecycle

    def add_block(self, block_type: str, viewport_width: float, viewport_height: float) -> str:
        """Place a new block at the visible center under a temporary id."""
        center_x, center_y = self.viewport.visible_center(viewport_width, viewport_height)
        temp_id = f"{TEMP_BLOCK_PREFIX}{next(self._temp_seq)}"
        self.blocks[temp_id] = self.kinds.for_type(block_type).default_content(center_x, center_y)
        self.block_types[temp_id] = block_type
        return temp_id

    def confirm_created(self, temp_id: str, server_block: Block) -> Optional[PersistResult]:
        """Swap a temporary id for the id the server assigned.

        The local content wins over the server copy. If the block was moved
        while it only existed locally, it is saved once now.
        """
        server_id = server_block.block_id
        content = self.blocks.pop(temp_id, None)
        if content is None:
            content = copy.deepcopy(server_block.content)
        self.blocks[server_id] = content
        self.block_types[server_id] = self.block_types.pop(temp_id, server_block.type)

        if self.selected_id == temp_id:
            self.selected_id = server_id
        if self._gesture is not None and self._gesture.block_id == temp_id:
            self._gesture.block_id = server_id

        if temp_id in self._unsaved_temp:
            self._unsaved_temp.discard(temp_id)
            return self._persist(server_id, copy.deepcopy(server_block.content))
        return None

    def remove_block(self, block_id: str) -> None:
        self.blocks.pop(block_id, None)
        self.block_types.pop(block_id, None)
        self._unsaved_temp.discard(block_id)
        if self.selected_id == block_id:
            self.selected_id = None

    # internals

    def _start(self, event: PointerEvent, block_id: Optional[str], snapshot: dict) -> None:
        self._gesture = _Gesture(start_x=event.x, start_y=event.y, block_id=block_id, snapshot=snapshot)

    def _apply(self, event: PointerEvent) -> None:
        gesture = self._gesture
        screen_dx = event.x - gesture.start_x
        screen_dy = event.y - gesture.start_y

        if self.state == InteractionState.PANNING:
            self.viewport.pan_x = gesture.snapshot["pan_x"] + screen_dx
            self.viewport.pan_y = gesture.snapshot["pan_y"] + screen_dy
            return

        if gesture.block_id not in self.blocks:
            return

        dx = screen_dx / self.viewport.zoom
        dy = screen_dy / self.viewport.zoom
        content = copy.deepcopy(gesture.snapshot)

        if self.state == InteractionState.DRAGGING_OBJECT:
            start = Position.from_content(gesture.snapshot)
            start_x, start_y = (start.x, start.y) if start else (0, 0)
            content["x"] = start_x + dx
            content["y"] = start_y + dy
        elif self.state == InteractionState.RESIZING_OBJECT:
            kind = self.kinds.for_type(self.block_types.get(gesture.block_id, ""))
            size = kind.measure(gesture.snapshot)
            content["width"] = max(MIN_OBJECT_SIZE, size.width + dx)
            if not size.is_auto_height:
                content["height"] = max(MIN_OBJECT_SIZE, size.numeric_height + dy)

        self.blocks[gesture.block_id] = content

    def _persist(self, block_id: str, snapshot: dict) -> Optional[PersistResult]:
        if is_temp_id(block_id):
            self._unsaved_temp.add(block_id)
            return None

        kind = self.kinds.for_type(self.block_types.get(block_id, ""))
        result = self.persister.save_block(block_id, kind.serialize(self.blocks[block_id]))
        if result.ok:
            self.last_error = None
        else:
            logger.warning("block %s not saved, restoring: %s", block_id, result.error)
            self.blocks[block_id] = copy.deepcopy(snapshot)
            self.last_error = result.error or "Failed to save block"
        return result
