# === FILE: schema_scout/logger.py ===
"""Logging setup for **SchemaScout**.

All modules log through the ``"SchemaScout"`` logger::

    from schema_scout.logger import logger
    logger.info("Crawl started")

Console output goes to *stderr*, so ``schema-scout crawl`` can print the run
summary as clean JSON on stdout. With a log directory two rotating files are
kept next to each other:

* ``app.log``   every record at the configured level;
* ``error.log`` ERROR and above only (failed pages, storage problems).
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Optional, Union

LOGGER_NAME: Final[str] = "SchemaScout"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _rotating(path: Path, formatter: logging.Formatter, level: _LevelT = logging.NOTSET) -> RotatingFileHandler:
    handler = RotatingFileHandler(str(path), maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def build_handlers(log_format: str = DEFAULT_FORMAT, log_dir: Optional[Union[str, Path]] = None) -> List[logging.Handler]:
    """Console handler plus, when *log_dir* is given, ``app.log`` and ``error.log``."""
    formatter = logging.Formatter(log_format)
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    handlers: List[logging.Handler] = [console]

    if log_dir is not None:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating(directory / "app.log", formatter))
        handlers.append(_rotating(directory / "error.log", formatter, logging.ERROR))
    return handlers


def configure(
    *,
    level: _LevelT = "INFO",
    log_dir: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """(Re)configure the project logger.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_dir
        Directory for ``app.log``/``error.log``; created when missing.
        *None* means console only.
    log_format
        Format string for :class:`logging.Formatter`.
    replace_handlers
        Close and drop the handlers installed by a previous call.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        for handler in list(lg.handlers):
            lg.removeHandler(handler)
            handler.close()

    for handler in build_handlers(log_format, log_dir):
        lg.addHandler(handler)

    lg.propagate = False
    return lg


def init_logging(level: _LevelT = "INFO", log_dir: Optional[Union[str, Path]] = None) -> logging.Logger:
    """Console-only setup applied at import time."""
    return configure(level=level, log_dir=log_dir)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "build_handlers", "LOGGER_NAME"]
