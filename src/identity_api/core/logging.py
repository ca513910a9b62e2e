"""Loguru logging configuration.

Every record goes to a human-readable stderr sink; records carrying a bound
``request_id`` are prefixed with it so request, audit and service lines of
one call can be correlated.  Records bound with ``json_output=True`` (the
request/response lines and audit entries) are additionally emitted as JSON.
An optional rotating file sink mirrors the text sink.
"""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

_BASE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | "
LOG_FILE_NAME = "identity-api.log"


def _text_format(record: dict[str, Any]) -> str:
    """Loguru format callable: prefix the message with the request id when bound."""
    request_prefix = "{extra[request_id]} | " if record["extra"].get("request_id") else ""
    return _BASE_FORMAT + request_prefix + "{message}\n{exception}"


def _is_json_record(record: dict[str, Any]) -> bool:
    return bool(record["extra"].get("json_output", False))


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Configure Loguru sinks for the service.

    Args:
        log_level: Minimum log level to emit (case-insensitive).
        log_dir: Optional directory for log files.  When set, a text file
            sink is added (rotated every 24 hours, retained 7 days).
    """
    level = log_level.upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=_text_format)
    logger.add(sys.stderr, level=level, serialize=True, filter=_is_json_record)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / LOG_FILE_NAME,
            level=level,
            format=_text_format,
            rotation="24h",
            retention="7 days",
        )
