# jeevanpath/utils/logger.py
"""
Centralised logging configuration for the entire application.

Everything goes to the console and to logs/jeevanpath.log. Loggers under
"jeevanpath.dispatch" additionally write to logs/dispatch.log so every
provider alert and contact attempt of an emergency can be audited on its own.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from jeevanpath.config import settings

LOG_LEVEL = settings.LOG_LEVEL.upper()
LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")
DISPATCH_LOGGER = "jeevanpath.dispatch"

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
_MAX_BYTES = 5 * 1024 * 1024
_BACKUPS = 10

_configured = False


def _rotating_handler(filename: str, fmt: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=os.path.join(LOG_DIR, filename),
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(LOG_LEVEL)
    handler.setFormatter(fmt)
    return handler


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    os.makedirs(LOG_DIR, exist_ok=True)
    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    console = logging.StreamHandler()
    console.setLevel(LOG_LEVEL)
    console.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)
    root.addHandler(console)
    root.addHandler(_rotating_handler("jeevanpath.log", fmt))

    # Audit trail for the alert pipeline; still propagates to the root handlers
    logging.getLogger(DISPATCH_LOGGER).addHandler(_rotating_handler("dispatch.log", fmt))

    # SQL echo is controlled by the engine, keep the library quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Call this at the top of every module."""
    _configure_root_logger()
    return logging.getLogger(name)


def get_dispatch_logger(component: str) -> logging.Logger:
    """Logger whose records also land in the dispatch audit file."""
    return get_logger(f"{DISPATCH_LOGGER}.{component}")
