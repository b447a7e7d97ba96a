from __future__ import annotations

from datetime import datetime

import pytest

from src.moodboard.moodboard.canvas.events import PointerEvent, PointerTarget, WheelEvent
from src.moodboard.moodboard.canvas.interaction import CanvasInteraction
from src.moodboard.moodboard.canvas.persistence import PersistResult
from src.moodboard.moodboard.canvas.viewport import Viewport
from src.moodboard.moodboard.core.enums import InteractionState
from src.moodboard.moodboard.pages.model import Block

NOW = datetime(2026, 2, 1, 9, 0, 0)


class RecordingPersister:
    def __init__(self, results=None):
        self.saved: list[tuple[str, dict]] = []
        self._results = list(results or [])

    def save_block(self, block_id, content):
        self.saved.append((block_id, dict(content)))
        return self._results.pop(0) if self._results else PersistResult.success()


def _block(block_id="b1", block_type="text", **content) -> Block:
    return Block(block_id, "p1", block_type, content, 0, NOW, NOW)


@pytest.fixture
def persister():
    return RecordingPersister()


@pytest.fixture
def canvas(persister):
    canvas = CanvasInteraction(persister)
    canvas.load([_block(text="hi", x=100, y=50, width=200, height="auto")])
    return canvas


def test_drag_persists_final_position_once(canvas, persister):
    assert canvas.pointer_down(PointerEvent(10, 10, PointerTarget.block("b1"))) == InteractionState.DRAGGING_OBJECT

    canvas.pointer_move(PointerEvent(20, 5))
    canvas.pointer_move(PointerEvent(35, 2))
    assert persister.saved == []
    assert (canvas.blocks["b1"]["x"], canvas.blocks["b1"]["y"]) == (125, 42)

    result = canvas.pointer_up(PointerEvent(40, 0))

    assert result.ok
    assert canvas.state == InteractionState.IDLE
    assert persister.saved == [("b1", {"text": "hi", "x": 130, "y": 40, "width": 200, "height": "auto"})]


def test_final_position_comes_from_snapshot_not_last_move(canvas, persister):
    canvas.pointer_down(PointerEvent(0, 0, PointerTarget.block("b1")))
    canvas.pointer_move(PointerEvent(500, 500))

    canvas.pointer_up(PointerEvent(30, -10))

    assert persister.saved[0][1]["x"] == 130
    assert persister.saved[0][1]["y"] == 40


def test_drag_delta_is_scaled_by_zoom(persister):
    canvas = CanvasInteraction(persister, viewport=Viewport(zoom=2.0))
    canvas.load([_block(x=100, y=50, width=200)])

    canvas.pointer_down(PointerEvent(0, 0, PointerTarget.block("b1")))
    canvas.pointer_up(PointerEvent(60, -20))

    assert canvas.position_of("b1").x == 130
    assert canvas.position_of("b1").y == 40


def test_interactive_child_keeps_idle_but_selects(canvas, persister):
    state = canvas.pointer_down(PointerEvent(5, 5, PointerTarget.interactive("b1")))

    assert state == InteractionState.IDLE
    assert canvas.selected_id == "b1"
    assert canvas.pointer_up(PointerEvent(50, 50)) is None
    assert persister.saved == []
    assert canvas.blocks["b1"]["x"] == 100


def test_background_pans_without_saving(canvas, persister):
    canvas.selected_id = "b1"

    assert canvas.pointer_down(PointerEvent(100, 100, PointerTarget.background())) == InteractionState.PANNING
    canvas.pointer_move(PointerEvent(110, 90))
    canvas.pointer_up(PointerEvent(130, 80))

    assert (canvas.viewport.pan_x, canvas.viewport.pan_y) == (30, -20)
    assert canvas.selected_id is None
    assert persister.saved == []


def test_resize_keeps_auto_height_and_minimum_width(canvas, persister):
    assert canvas.pointer_down(PointerEvent(0, 0, PointerTarget.resize_handle("b1"))) == InteractionState.RESIZING_OBJECT

    canvas.pointer_up(PointerEvent(-500, 80))

    saved = persister.saved[0][1]
    assert saved["width"] == 100
    assert saved["height"] == "auto"


def test_resize_numeric_height(persister):
    canvas = CanvasInteraction(persister)
    canvas.load([_block(block_type="sticky_note", x=0, y=0, width=260, height=260)])

    canvas.pointer_down(PointerEvent(0, 0, PointerTarget.resize_handle("b1")))
    canvas.pointer_move(PointerEvent(40, 40))
    canvas.pointer_up(PointerEvent(40, -400))

    assert persister.saved == [("b1", {"x": 0, "y": 0, "width": 300, "height": 100})]


def test_failed_save_restores_snapshot(persister):
    failing = RecordingPersister([PersistResult.failure("Failed to update blocks")])
    canvas = CanvasInteraction(failing)
    canvas.load([_block(x=100, y=50, width=200)])

    canvas.pointer_down(PointerEvent(0, 0, PointerTarget.block("b1")))
    result = canvas.pointer_up(PointerEvent(30, -10))

    assert not result.ok
    assert canvas.blocks["b1"] == {"x": 100, "y": 50, "width": 200}
    assert canvas.last_error == "Failed to update blocks"

    canvas.pointer_down(PointerEvent(0, 0, PointerTarget.block("b1")))
    canvas.pointer_up(PointerEvent(1, 1))
    assert canvas.last_error is None


def test_pointer_cancel_restores_without_saving(canvas, persister):
    canvas.pointer_down(PointerEvent(0, 0, PointerTarget.block("b1")))
    canvas.pointer_move(PointerEvent(70, 70))

    canvas.pointer_cancel()

    assert canvas.state == InteractionState.IDLE
    assert canvas.blocks["b1"]["x"] == 100
    assert persister.saved == []


def test_wheel_only_zooms_with_modifier(canvas):
    assert canvas.wheel(WheelEvent(100)) is False
    assert canvas.viewport.zoom == 1.0

    assert canvas.wheel(WheelEvent(100, ctrl=True)) is True
    assert canvas.viewport.zoom == pytest.approx(0.9)


def test_added_block_is_not_saved_until_confirmed(persister):
    canvas = CanvasInteraction(persister, viewport=Viewport(pan_x=0, pan_y=0, zoom=1.0))

    temp_id = canvas.add_block("sticky_note", 800, 600)

    assert temp_id.startswith("temp-")
    assert canvas.position_of(temp_id).x == 300
    assert canvas.position_of(temp_id).y == 250

    canvas.pointer_down(PointerEvent(0, 0, PointerTarget.block(temp_id)))
    assert canvas.pointer_up(PointerEvent(10, 10)) is None
    assert persister.saved == []

    server_block = _block("srv1", "sticky_note", text="", x=300, y=250, width=260, height=260, color="#fcd53f")
    result = canvas.confirm_created(temp_id, server_block)

    assert result.ok
    assert temp_id not in canvas.blocks
    assert canvas.selected_id == "srv1"
    assert persister.saved == [
        ("srv1", {"text": "", "x": 310, "y": 260, "width": 260, "height": 260, "color": "#fcd53f"})
    ]


def test_confirm_without_local_moves_does_not_save(persister):
    canvas = CanvasInteraction(persister)
    temp_id = canvas.add_block("text", 400, 400)

    assert canvas.confirm_created(temp_id, _block("srv2", text="", x=100, y=150, width=200, height="auto")) is None
    assert persister.saved == []
    assert canvas.block_types["srv2"] == "text"


def test_pointer_down_during_gesture_is_ignored(canvas):
    canvas.pointer_down(PointerEvent(0, 0, PointerTarget.block("b1")))

    assert canvas.pointer_down(PointerEvent(0, 0, PointerTarget.background())) == InteractionState.DRAGGING_OBJECT


def test_remove_block_clears_selection(canvas):
    canvas.pointer_down(PointerEvent(0, 0, PointerTarget.interactive("b1")))

    canvas.remove_block("b1")

    assert canvas.selected_id is None
    assert canvas.position_of("b1") is None
