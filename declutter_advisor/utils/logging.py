"""
Logging setup for the Declutter Advisor CLI.

``configure_logging(config)`` is called once per CLI command, after the
config is loaded. Engine and store modules only create module loggers
(``logging.getLogger(__name__)``) and never install handlers.

Records go to stderr, so ``classify --json`` output on stdout stays
parseable, and optionally to ``config.log_file``.

With ``json_format = true`` each record is one JSON object::

    {"ts": "2026-10-18T15:00:00Z", "level": "WARNING",
     "logger": "declutter_advisor.models.settings", "msg": "..."}

Values passed through ``extra=`` are added as top-level keys.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from declutter_advisor.config import LoggingConfig

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Attributes every LogRecord carries; anything else came in via ``extra=``.
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class _JsonFormatter(logging.Formatter):
    """One JSON object per record: ``ts``, ``level``, ``logger``, ``msg``, extras."""

    converter = time.gmtime

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts":     self.formatTime(record, TIMESTAMP_FORMAT),
            "level":  record.levelname,
            "logger": record.name,
            "msg":    record.getMessage(),
        }
        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _text_formatter() -> logging.Formatter:
    formatter = logging.Formatter(TEXT_FORMAT, datefmt=TIMESTAMP_FORMAT)
    formatter.converter = time.gmtime
    return formatter


def configure_logging(config: "LoggingConfig") -> None:
    """Install stderr (and optional file) handlers on the root logger.

    Replaces any handlers already on the root logger, so calling it again
    with a different config takes effect.
    """
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    formatter = _JsonFormatter() if config.json_format else _text_formatter()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
