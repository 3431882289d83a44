from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"
)


def configure_logging(level: str = "INFO", sink=sys.stderr) -> int:
    """Replace loguru's default handler with a single sink. Returns the handler id."""
    logger.remove()
    return logger.add(sink, level=level.upper(), format=LOG_FORMAT)
