# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Logging for the endeus service.

etc/logging.conf declares the handlers and formats.  ``configure_logging``
applies it with the values that vary per deployment taken from ``Settings``:
log directory, rotation size, backup count and the level of the ``endeus``
logger (``debug=True`` forces DEBUG).

Modules only ever need the handle:
    from core.logger import logger
"""

import configparser
import logging
import logging.config
from pathlib import Path

from core.config import Settings

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_LOGGING_CONF = _PROJECT_ROOT / "etc" / "logging.conf"
_LOG_FILE_NAME = "endeus.log"

logger = logging.getLogger("endeus")


def log_file_path(settings: Settings) -> Path:
    log_dir = Path(settings.log_dir) if settings.log_dir else _PROJECT_ROOT / "log"
    return log_dir / _LOG_FILE_NAME


def configure_logging(settings: Settings) -> None:
    """Apply etc/logging.conf, then override file location and level from *settings*."""
    log_file = log_file_path(settings)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # RawConfigParser: format strings carry %(asctime)s etc.
    parser = configparser.RawConfigParser()
    parser.read(_LOGGING_CONF, encoding="utf-8")
    parser.set(
        "handler_file",
        "args",
        repr((str(log_file), "a", settings.log_max_bytes, settings.log_backup_count, "utf-8")),
    )
    logging.config.fileConfig(parser, disable_existing_loggers=False)

    logger.setLevel(logging.DEBUG if settings.debug else settings.log_level.upper())
