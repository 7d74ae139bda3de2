"""Centralized logging configuration for streamfmt.

The library itself only creates module loggers; applications that want
console/file output call setup_logging() once at startup.

Usage:
    # At startup
    from streamfmt.utilities.logging import setup_logging
    setup_logging()

    # In any module (standard Python pattern)
    import logging
    logger = logging.getLogger(__name__)
    logger.info("[MODULE] Something happened: %s", value)

Environment variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
    LOG_DIR: Directory for log files (default: no file logging)
    LOG_FORMAT: "text" or "json" (default: text)
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Track if logging has been configured
_configured = False


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Useful for log aggregation systems (ELK, Loki, etc.)
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def _get_log_level() -> int:
    """Get log level from environment."""
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _get_log_dir() -> Path | None:
    """File logging is opt-in through LOG_DIR."""
    if env_dir := os.getenv("LOG_DIR"):
        return Path(env_dir)
    return None


def _get_formatter(use_json: bool = False) -> logging.Formatter:
    """Get the appropriate formatter."""
    if use_json:
        return JSONFormatter()

    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging(
    log_level: str | None = None,
    log_dir: str | Path | None = None,
    use_json: bool | None = None,
) -> None:
    """Initialize the logging system.

    Call this once at application startup. Safe to call multiple times
    (subsequent calls are no-ops).

    Args:
        log_level: Override LOG_LEVEL env var
        log_dir: Override LOG_DIR env var (enables the rotating log file)
        use_json: Override LOG_FORMAT env var (True for JSON output)
    """
    global _configured
    if _configured:
        return

    level = getattr(logging, (log_level or "").upper(), None) or _get_log_level()
    log_path = Path(log_dir) if log_dir else _get_log_dir()

    if use_json is None:
        use_json = os.getenv("LOG_FORMAT", "text").lower() == "json"

    formatter = _get_formatter(use_json)

    # === Console Handler ===
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    logger = logging.getLogger("streamfmt")
    logger.setLevel(logging.DEBUG)  # Handlers filter from here
    logger.handlers.clear()
    logger.addHandler(console_handler)

    # === Log File (rotating, optional) ===
    if log_path is not None:
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path / "streamfmt.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _configured = True

    from streamfmt.config import VERSION

    logger.info("[STARTUP] streamfmt %s", VERSION)
    logger.info("[STARTUP] Log level: %s", logging.getLevelName(level))
    logger.info("[STARTUP] Log file: %s", log_path / "streamfmt.log" if log_path else "disabled")
    logger.info("[STARTUP] Log format: %s", "JSON" if use_json else "text")
