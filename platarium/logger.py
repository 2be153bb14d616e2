"""Structured event logging for Platarium.

Nothing in this module touches handlers or the filesystem on import;
call :func:`configure_logging` explicitly to route records somewhere.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

__all__ = [
    "EventLogger",
    "JsonLineFormatter",
    "configure_logging",
    "reset_logging",
    "utc_timestamp",
]

logger = logging.getLogger(__name__)

ROOT_LOGGER_NAME = "platarium"

_installed_handlers: List[logging.Handler] = []


def utc_timestamp() -> str:
    """Current time as ISO-8601 UTC."""
    return datetime.now(timezone.utc).isoformat()


class EventLogger:
    """
    Logger collaborator used by the key generator and correlation check.

    Records are fire-and-forget: they go through the standard ``logging``
    machinery, whose handlers report their own failures without raising
    into the caller.

    Never pass mnemonics, companion codes, seeds or private keys in
    ``details``.
    """

    def __init__(self, name: str = ROOT_LOGGER_NAME) -> None:
        self._logger = logging.getLogger(name)

    @property
    def name(self) -> str:
        return self._logger.name

    def log_error(self, context: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Record a failure with its context."""
        payload = self._payload("error", details, context)
        self._logger.error("%s: %s", context, _dumps(payload), extra={"event": payload})

    def log_info(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        context: str = ""
    ) -> None:
        """Record an informational event."""
        payload = self._payload("info", details, context)
        payload["message"] = message
        self._logger.info("%s: %s", context or message, _dumps(payload), extra={"event": payload})

    @staticmethod
    def _payload(level: str, details: Optional[Dict[str, Any]], context: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "level": level,
            "timestamp": utc_timestamp(),
            "context": context,
        }
        if details:
            payload.update(details)
        return payload


class JsonLineFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        event = getattr(record, "event", None)
        if event is None:
            event = {
                "level": record.levelname.lower(),
                "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
                "context": record.name,
                "message": record.getMessage(),
            }
        return _dumps(event)


def configure_logging(
    level: int = logging.INFO,
    log_dir: Optional[str] = None,
    stream: bool = True
) -> logging.Logger:
    """
    Attach handlers to the ``platarium`` logger.

    Handlers from an earlier call are removed first, so repeated calls
    never stack duplicates.

    Args:
        level: Minimum level to emit
        log_dir: Directory for daily ``YYYY-MM-DD.log`` JSON-lines files
        stream: Also log to stderr

    Returns:
        The configured package logger
    """
    reset_logging()
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(level)

    if stream:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        _install(package_logger, handler)

    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        date = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        handler = logging.FileHandler(os.path.join(log_dir, f"{date}.log"), encoding="utf-8")
        handler.setFormatter(JsonLineFormatter())
        _install(package_logger, handler)

    logger.debug("Logging configured (level=%s, log_dir=%s)", level, log_dir)
    return package_logger


def reset_logging() -> None:
    """Remove and close every handler added by :func:`configure_logging`."""
    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    while _installed_handlers:
        handler = _installed_handlers.pop()
        package_logger.removeHandler(handler)
        handler.close()


def _install(target: logging.Logger, handler: logging.Handler) -> None:
    target.addHandler(handler)
    _installed_handlers.append(handler)


def _dumps(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, default=str, sort_keys=True)
