from __future__ import annotations

import logging
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _parse_level(value: Optional[str]) -> int:
    """Map 'DEBUG' / 'info' / ... to a logging constant (INFO when unknown)."""
    if not value:
        return logging.INFO
    level = getattr(logging, str(value).strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=DEFAULT_FORMAT)
    root.setLevel(_parse_level(level))
    return logging.getLogger("moodboard")
