from __future__ import annotations

import logging
import os
from typing import Optional

from .config_loader import PipelineConfig

LOG_LEVEL_ENV = "ADDRESSBOOK_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _resolve_level(level_name: Optional[str]) -> int:
    """Numeric level for a name like ``"debug"`` or ``"10"``; unknown names map to INFO."""
    normalized = (level_name or "INFO").strip().upper()
    if normalized.isdigit():
        return int(normalized)
    level = logging.getLevelName(normalized)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(config: PipelineConfig, level_override: Optional[str] = None) -> None:
    """
    Set the root level from, in order: ``ADDRESSBOOK_LOG_LEVEL``, ``level_override``
    (the ``--log-level`` flag), ``config.logging.level``, then ``WARNING``.

    Existing handlers (for example pytest's) are left in place; only the level changes.
    """
    level_name = os.getenv(LOG_LEVEL_ENV) or level_override or config.logging.level or "WARNING"
    level_value = _resolve_level(level_name)

    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(level_value)
        return
    logging.basicConfig(level=level_value, format=LOG_FORMAT)
