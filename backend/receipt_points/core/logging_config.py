"""Process-wide logging setup."""

from __future__ import annotations

import logging

from receipt_points.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once, honouring ``settings.LOG_LEVEL``.

    Unknown level names fall back to ``INFO``.  Calling this again only
    adjusts the level; handlers installed by uvicorn or pytest are left
    alone.
    """
    name = (level or settings.LOG_LEVEL or "INFO").upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(level=resolved, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    logging.getLogger().setLevel(resolved)
