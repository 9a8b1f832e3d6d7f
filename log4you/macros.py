"""Logging helpers that prefix every message with a log id."""

from __future__ import annotations

import logging
from typing import Any

from .log_id import new_log_id
from .logger import Logger

__all__ = [
    "log_info",
    "log_warn",
    "log_error",
    "log_debug",
    "log_info_with_id",
    "log_warn_with_id",
    "log_error_with_id",
    "log_debug_with_id",
]


def _emit(level: int, log_id: str, message: str, args: tuple[Any, ...]) -> None:
    text = message % args if args else message
    target = Logger.target().replace("::", ".")
    logging.getLogger(target).log(level, "log_id=%s, %s", log_id, text, stacklevel=3)


def log_info(message: str, *args: Any) -> None:
    """Log at INFO level with a freshly generated log id."""
    _emit(logging.INFO, new_log_id(), message, args)


def log_warn(message: str, *args: Any) -> None:
    """Log at WARNING level with a freshly generated log id."""
    _emit(logging.WARNING, new_log_id(), message, args)


def log_error(message: str, *args: Any) -> None:
    """Log at ERROR level with a freshly generated log id."""
    _emit(logging.ERROR, new_log_id(), message, args)


def log_debug(message: str, *args: Any) -> None:
    """Log at DEBUG level with a freshly generated log id."""
    _emit(logging.DEBUG, new_log_id(), message, args)


def log_info_with_id(log_id: Any, message: str, *args: Any) -> None:
    """Log at INFO level with the given log id."""
    _emit(logging.INFO, log_id, message, args)


def log_warn_with_id(log_id: Any, message: str, *args: Any) -> None:
    """Log at WARNING level with the given log id."""
    _emit(logging.WARNING, log_id, message, args)


def log_error_with_id(log_id: Any, message: str, *args: Any) -> None:
    """Log at ERROR level with the given log id."""
    _emit(logging.ERROR, log_id, message, args)


def log_debug_with_id(log_id: Any, message: str, *args: Any) -> None:
    """Log at DEBUG level with the given log id."""
    _emit(logging.DEBUG, log_id, message, args)