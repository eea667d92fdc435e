"""Process logging configuration shared by the HTTP apps and CLI."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_NOISY_LOGGERS = ("aiosqlite", "asyncio", "sqlalchemy.engine")


def resolve_log_level(level: str) -> int:
    """Map a level name to its numeric value, defaulting to INFO."""

    normalized_level = level.strip().upper() if level.strip() else "INFO"
    resolved = logging.getLevelName(normalized_level)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(*, level: str) -> None:
    """Configure root logging with the shared format; keep driver chatter at WARNING."""

    resolved_level = resolve_log_level(level)
    logging.basicConfig(level=resolved_level, format=_LOG_FORMAT)

    if resolved_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
