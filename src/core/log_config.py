"""Logging setup for whatever process hosts the game (CLI, server, tests)."""

import logging

from src.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Attach a stream handler to the root logger. Level defaults to the configured one.

    Called once by the process hosting the controllers or the move-log service (CLI, server), never by the library code itself.
    """
    if level is None:
        level = get_settings().log_level
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)
