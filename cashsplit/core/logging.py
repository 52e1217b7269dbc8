"""Logging setup for the ``cashsplit`` namespace.

Every module logs through ``logging.getLogger(__name__)``; this installs a
single stderr handler on the package logger. Level comes from
``settings.LOG_LEVEL`` unless given explicitly.
"""
import logging
import sys

from cashsplit.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    global _configured

    if _configured:
        return

    level_name = (level or settings.LOG_LEVEL).upper()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("cashsplit")
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    logger.addHandler(handler)

    _configured = True
