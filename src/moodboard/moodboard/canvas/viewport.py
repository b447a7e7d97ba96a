from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..core.constants import MAX_ZOOM, MIN_ZOOM, ZOOM_IN_FACTOR, ZOOM_OUT_FACTOR


def clamp_zoom(zoom: float) -> float:
    return min(max(MIN_ZOOM, zoom), MAX_ZOOM)


@dataclass
class Viewport:
    """Pan offset (screen pixels) and zoom of the canvas."""

    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = 1.0

    def zoom_to(self, zoom: float) -> float:
        self.zoom = clamp_zoom(zoom)
        return self.zoom

    def handle_wheel(self, delta_y: float, ctrl: bool = False, meta: bool = False) -> bool:
        """Zoom on ctrl/cmd + wheel. Plain wheel scrolling is ignored.

        Returns True when the event was consumed as a zoom gesture.
        """
        if not (ctrl or meta):
            return False
        factor = ZOOM_OUT_FACTOR if delta_y > 0 else ZOOM_IN_FACTOR
        self.zoom_to(self.zoom * factor)
        return True

    def screen_to_world(self, screen_x: float, screen_y: float) -> Tuple[float, float]:
        return (screen_x - self.pan_x) / self.zoom, (screen_y - self.pan_y) / self.zoom

    def visible_center(self, viewport_width: float, viewport_height: float) -> Tuple[float, float]:
        return self.screen_to_world(viewport_width / 2, viewport_height / 2)
