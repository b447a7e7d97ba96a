from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Union

from ...core.constants import AUTO_HEIGHT_FALLBACK

Height = Union[float, str]


@dataclass(frozen=True)
class Size:
    width: float
    height: Height = "auto"

    @property
    def is_auto_height(self) -> bool:
        return not isinstance(self.height, (int, float))

    @property
    def numeric_height(self) -> float:
        """Height to compute with; "auto" counts as the resize fallback."""
        return AUTO_HEIGHT_FALLBACK if self.is_auto_height else float(self.height)


class BlockKind(ABC):
    """Strategy Pattern: what a block type looks like on the canvas and in storage.

    Content shape is owned by the kind, never by the store, so every method
    tolerates payloads it does not recognise.
    """

    type_name: ClassVar[str] = ""
    default_width: ClassVar[float] = 200
    default_height: ClassVar[Height] = "auto"
    text_like: ClassVar[bool] = False

    def default_content(self, center_x: float, center_y: float) -> dict:
        """Content for a freshly added block placed around a canvas point."""
        content = {
            "text": "",
            "x": center_x - 100,
            "y": center_y - 50,
            "width": self.default_width,
            "height": self.default_height,
        }
        content.update(self.extra_defaults())
        return content

    def extra_defaults(self) -> dict:
        return {}

    def serialize(self, content: Any) -> dict:
        """Payload as it is sent to the server."""
        return dict(content) if isinstance(content, dict) else {}

    def measure(self, content: Any) -> Size:
        data = content if isinstance(content, dict) else {}
        width = data.get("width")
        height = data.get("height", self.default_height)
        return Size(
            width=width if isinstance(width, (int, float)) else self.default_width,
            height=height if isinstance(height, (int, float)) else "auto",
        )

    @abstractmethod
    def render(self, content: Any) -> str:
        """Plain-text rendering, used for titles and previews."""
        raise NotImplementedError


def content_text(content: Any) -> str:
    if not isinstance(content, dict):
        return ""
    text = content.get("text")
    return text.strip() if isinstance(text, str) else ""
