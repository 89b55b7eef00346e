"""Logging setup for logipath."""

from __future__ import annotations

import logging

from logipath.config import DEFAULT_LOG_LEVEL, LOG_FORMAT

logger = logging.getLogger("logipath")


def setup_logging(level: str = DEFAULT_LOG_LEVEL, force: bool = False) -> None:
    """Configure logging without clobbering host-app handlers by default."""
    numeric_level = getattr(logging, level.upper(), None)
    invalid = not isinstance(numeric_level, int)
    if invalid:
        numeric_level = logging.WARNING

    root = logging.getLogger()
    if force or not root.handlers:
        logging.basicConfig(
            level=numeric_level,
            format=LOG_FORMAT,
            handlers=[logging.StreamHandler()],
            force=force,
        )
    # Embedded mode: only touch the logipath hierarchy.
    logger.setLevel(numeric_level)

    if invalid:
        logger.warning("Invalid log level %r, defaulting to WARNING", level)
