"""
Logging setup for the seqalign command. The library modules only create
loggers and leave their configuration to the application.
"""
import sys
import logging
from typing import Optional, TextIO


class LevelPrefixFormatter(logging.Formatter):
    """Prefix all messages except informational ones with the level name"""

    def format(self, record):
        message = super().format(record)
        if record.levelno == logging.INFO:
            return message
        return f"{record.levelname}: {message}"


def setup_logging(
    logger: logging.Logger,
    quiet: bool = False,
    debug: int = 0,
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """
    Attach a handler that writes to stderr (or the given stream) to the
    logger and return it.

    With debug > 0, debug messages are shown even if quiet is set. (The DP
    matrices that are logged for debug > 1 need to be enabled on the
    aligners by the caller.)
    """
    if debug > 0:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.INFO
    handler = logging.StreamHandler(sys.stderr if stream is None else stream)
    handler.setFormatter(LevelPrefixFormatter())
    handler.setLevel(level)
    logger.setLevel(level)
    logger.addHandler(handler)
    return handler
