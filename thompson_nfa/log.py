from __future__ import annotations

import logging
import os
from typing import Optional

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_LEVEL_ENV = "THOMPSON_NFA_LOG_LEVEL"


def configure_logging(level: Optional[str] = None) -> None:
    """Set the root log level for the thompson-nfa command.

    An explicit `level` wins; otherwise THOMPSON_NFA_LOG_LEVEL, then WARNING.
    Unknown level names fall back to WARNING. Library modules only emit DEBUG.
    """
    lvl = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    logging.basicConfig(level=getattr(logging, lvl, logging.WARNING), format=_DEFAULT_FORMAT)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
