"""
Logging setup for applications that embed the projection engine.

Engine modules only call logging.getLogger(__name__). An application calls
setup_logging() once; its defaults come from the CARTOPROJ_LOG_* settings.
LogContext tags every record emitted inside a block (ShapeLayer.project()
tags records with the layer and projection names).
"""

import json
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from cartoproj.core.config import settings

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else was added by extra= or LogContext
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Contextual fields (layer, projection, duration_ms, ...) are emitted
    next to the standard ones.
    """

    def format(self, record: logging.LogRecord) -> str:
        data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }
        data.update(
            (key, value) for key, value in vars(record).items() if key not in _STANDARD_ATTRS
        )
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        # Other handlers share the record
        levelname = record.levelname
        record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def get_log_level(level_name: str) -> int:
    """
    Convert a level name to its logging constant.

    Unrecognized names map to INFO.
    """
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else logging.INFO


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if settings.environment == "development":
        handler.setFormatter(
            ColoredFormatter("%(levelname)s | %(asctime)s | %(name)s | %(message)s", _DATE_FORMAT)
        )
    else:
        handler.setFormatter(
            logging.Formatter("%(levelname)s - %(asctime)s - %(name)s - %(message)s", _DATE_FORMAT)
        )
    return handler


def _file_handler(log_file: Path, level: int, json_logs: bool) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    # 10MB per file, keep 5 backups
    handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"
    )
    handler.setLevel(level)
    if json_logs:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(levelname)s - %(name)s:%(funcName)s:%(lineno)d - %(message)s",
                _DATE_FORMAT,
            )
        )
    return handler


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    json_logs: Optional[bool] = None,
    enable_console: bool = True,
) -> None:
    """
    Configure the root logger.

    Replaces any handlers already on the root logger.

    Args:
        log_level: Level name, defaults to settings.log_level
        log_file: Rotating log file, defaults to settings.log_file
        json_logs: Write the file as JSON lines, defaults to settings.json_logs
        enable_console: Also log to stdout
    """
    log_level = log_level or settings.log_level
    log_file = log_file if log_file is not None else settings.log_file
    json_logs = settings.json_logs if json_logs is None else json_logs
    level = get_log_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if enable_console:
        root_logger.addHandler(_console_handler(level))
    if log_file is not None:
        root_logger.addHandler(_file_handler(Path(log_file), level, json_logs))

    # pyproj logs grid and network lookups at INFO
    logging.getLogger("pyproj").setLevel(logging.WARNING)

    root_logger.debug(
        f"Logging configured: level={log_level}, file={log_file}, json_logs={json_logs}"
    )


class LogContext:
    """
    Add fields to every log record created inside a with-block.

    Example:
        with LogContext(layer="basins", projection="UTM"):
            logger.info("Projecting layer")
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._previous_factory: Optional[Any] = None

    def __enter__(self) -> "LogContext":
        previous = logging.getLogRecordFactory()
        fields = self.fields

        def factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = previous(*args, **kwargs)
            for key, value in fields.items():
                setattr(record, key, value)
            return record

        self._previous_factory = previous
        logging.setLogRecordFactory(factory)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._previous_factory is not None:
            logging.setLogRecordFactory(self._previous_factory)
            self._previous_factory = None
