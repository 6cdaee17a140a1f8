"""
Logging setup for the EventHub client.

Every module logs through the standard library:

    from eventhub.logging import get_logger
    logger = get_logger(__name__)

A stdout handler is installed on import so library code logs sensibly before
the application starts; `configure_logging()` is called again from the FastAPI
lifespan with the loaded settings.

Anything that identifies a person or a row (user ids, order ids, emails) goes
through `sanitize_id_for_logging` / `sanitize_string_for_logging` first, and
checkout lines are tagged with the acting user via `actor_logger`.
"""

import logging
import os
import sys
from functools import cache
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Chatty transports under supabase-py
QUIET_LOGGERS = ("httpx", "httpcore", "hpack")

ID_LOG_LENGTH = 8

_HANDLER_NAME = "eventhub-stdout"


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(level: Optional[str] = None, compact: Optional[bool] = None) -> None:
    """
    Install (or update) the EventHub stdout handler on the root logger.

    Safe to call repeatedly: the handler is added once and later calls only
    change its level and format. A root logger already configured by someone
    else (pytest, an ASGI server) is left alone apart from the quiet loggers.

    Args:
        level: Level name; defaults to LOG_LEVEL, then INFO
        compact: Drop timestamps; defaults to EVENTHUB_ENV == "production"
    """
    root = logging.getLogger()
    resolved = _resolve_level(level)
    if compact is None:
        compact = os.environ.get("EVENTHUB_ENV") == "production"

    handler = next((h for h in root.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None and not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        root.addHandler(handler)

    if handler is not None:
        root.setLevel(resolved)
        handler.setLevel(resolved)
        handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if compact else LOG_FORMAT))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    """Module logger (cached per name)."""
    return logging.getLogger(name)


class ActorLogger(logging.LoggerAdapter):
    """Prefixes every message with the (truncated) acting user id."""

    def process(self, msg, kwargs):
        return f"[{self.extra['actor']}] {msg}", kwargs


def actor_logger(logger: logging.Logger, actor_id: Optional[str]) -> ActorLogger:
    """
    Wrap `logger` so its lines name the actor.

    Args:
        logger: Module logger
        actor_id: Signed-in user id (may be None)

    Returns:
        Adapter logging as `[<first 8 chars of id>] message`
    """
    return ActorLogger(logger, {"actor": sanitize_id_for_logging(actor_id)})


def _escape_control_chars(value: str) -> str:
    # Keeps one log record on one line (CWE-117)
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_id_for_logging(id_value: Optional[str]) -> str:
    """
    Shorten an identifier for log output.

    Args:
        id_value: User, order or event id

    Returns:
        First 8 characters with control characters escaped, or "N/A"
    """
    if not id_value:
        return "N/A"
    return _escape_control_chars(str(id_value))[:ID_LOG_LENGTH]


def sanitize_string_for_logging(value: Optional[str], max_length: int = 50) -> str:
    """Escape and cap free text (emails, event names)."""
    if not value:
        return "N/A"
    safe_value = _escape_control_chars(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "ActorLogger",
    "actor_logger",
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
