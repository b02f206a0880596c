"""Centralized logging configuration.

The library only creates module-level loggers; host applications and scripts
call :func:`setup_logging` once to get a consistent format.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

# httpx logs every request line at INFO, and OAuth1 authorize/callback URLs
# carry oauth_token in the query string.
NOISY_LOGGERS = ("httpx", "httpcore", "authlib")


def setup_logging(
    name: str = "oauth_bridge",
    level: str | None = None,
    log_file: Path | None = None,
    quiet_loggers: Iterable[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """Configure logging with consistent format.

    Args:
        name: Logger name (typically __name__ from the calling module)
        level: Log level (defaults to settings.log_level, i.e. OAUTH_BRIDGE_LOG_LEVEL)
        log_file: Optional file path for logging output
        quiet_loggers: Third-party loggers capped at WARNING

    Returns:
        Configured logger instance
    """
    if level is None:
        from ..core.config import settings

        level = settings.log_level

    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,  # Override any existing configuration
    )

    for logger_name in quiet_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    return logging.getLogger(name)
