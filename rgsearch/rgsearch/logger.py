"""
Logger setup for rgsearch.

Console output always goes to stderr: stdout carries the MCP transport.
When a log directory is configured, rotating files are added:
- rgsearch.log: Main log with 5MB rotation, keeps 3 backups
- rgsearch.errors.log: Errors only, 2MB rotation, keeps 2 backups
- rgsearch.json: Structured JSON, 5MB rotation, keeps 2 backups
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rgsearch.config import Settings

ROOT_LOGGER = "rgsearch"
# Loggers that share the rgsearch handlers
LOGGER_NAMES = (ROOT_LOGGER, "rgkit", "rgsearch_mcp", "rgsearch_cli")

_HANDLER_MARK = "_rgsearch_handler"


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def _file_handlers(log_dir: Path, formatter: logging.Formatter) -> list:
    log_dir.mkdir(parents=True, exist_ok=True)

    main_handler = RotatingFileHandler(
        log_dir / "rgsearch.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    main_handler.setLevel(logging.DEBUG)
    main_handler.setFormatter(formatter)

    error_handler = RotatingFileHandler(
        log_dir / "rgsearch.errors.log",
        maxBytes=2 * 1024 * 1024,
        backupCount=2,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(formatter)

    json_handler = RotatingFileHandler(
        log_dir / "rgsearch.json",
        maxBytes=5 * 1024 * 1024,
        backupCount=2,
        encoding="utf-8",
    )
    json_handler.setLevel(logging.INFO)
    json_handler.setFormatter(JsonFormatter())

    return [main_handler, error_handler, json_handler]


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Install handlers on the rgsearch loggers.

    Safe to call more than once; earlier rgsearch handlers are replaced.

    Args:
        settings: Source of log level and log directory

    Returns:
        The rgsearch root logger
    """
    settings = settings or Settings()

    text_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers = []
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(text_formatter)
    handlers.append(console_handler)

    if settings.log_dir is not None:
        try:
            handlers.extend(_file_handlers(Path(settings.log_dir), text_formatter))
        except OSError as e:
            print(f"rgsearch: file logging disabled: {e}", file=sys.stderr)

    for handler in handlers:
        setattr(handler, _HANDLER_MARK, True)

    level = settings.effective_log_level
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for existing in list(logger.handlers):
            if getattr(existing, _HANDLER_MARK, False):
                logger.removeHandler(existing)
                existing.close()
        for handler in handlers:
            logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False

    return logging.getLogger(ROOT_LOGGER)
