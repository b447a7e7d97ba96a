from __future__ import annotations

import pytest

from src.moodboard.moodboard.canvas.viewport import Viewport


@pytest.mark.parametrize("requested, expected", [(12.0, 5.0), (0.01, 0.1), (2.5, 2.5)])
def test_zoom_to_clamps(requested, expected):
    viewport = Viewport()

    assert viewport.zoom_to(requested) == expected
    assert viewport.zoom == expected


def test_plain_wheel_is_ignored():
    viewport = Viewport(pan_x=10, pan_y=20, zoom=1.0)

    assert viewport.handle_wheel(120) is False
    assert (viewport.pan_x, viewport.pan_y, viewport.zoom) == (10, 20, 1.0)


def test_modifier_wheel_zooms_out_and_in():
    viewport = Viewport(zoom=1.0)

    assert viewport.handle_wheel(120, ctrl=True) is True
    assert viewport.zoom == pytest.approx(0.9)

    viewport.handle_wheel(-120, meta=True)
    assert viewport.zoom == pytest.approx(0.99)


def test_wheel_zoom_stops_at_limits():
    viewport = Viewport(zoom=4.9)
    viewport.handle_wheel(-1, ctrl=True)
    assert viewport.zoom == 5.0

    viewport = Viewport(zoom=0.105)
    viewport.handle_wheel(1, ctrl=True)
    assert viewport.zoom == 0.1


def test_screen_to_world_and_visible_center():
    viewport = Viewport(pan_x=100, pan_y=50, zoom=2.0)

    assert viewport.screen_to_world(300, 250) == (100, 100)
    assert viewport.visible_center(800, 600) == (150, 125)
