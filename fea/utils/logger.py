"""Logging configuration helpers for FEA."""

import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LOGGING_CONFIGURED = False


def _resolve_level(level: str | int | None) -> int:
    """Resolves an explicit level, then LOG_LEVEL, then INFO."""
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level {level!r}.")
    return resolved


def configure_logging(level: str | int | None = None) -> int:
    """Configures the root logger and returns the applied level."""
    global _LOGGING_CONFIGURED

    applied_level = _resolve_level(level)
    root_logger = logging.getLogger()
    if not _LOGGING_CONFIGURED and not root_logger.handlers:
        logging.basicConfig(format=LOG_FORMAT, level=applied_level)
        for handler in root_logger.handlers:
            handler.setLevel(applied_level)
    root_logger.setLevel(applied_level)
    _LOGGING_CONFIGURED = True
    return applied_level


def get_logger(name: str) -> logging.Logger:
    """Returns a module logger, configuring logging on first use."""
    if not _LOGGING_CONFIGURED:
        configure_logging()
    return logging.getLogger(name)
