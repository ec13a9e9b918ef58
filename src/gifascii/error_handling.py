"""Standardized Error Handling Utilities

Provides the gifascii error taxonomy and consistent error handling patterns
so every failure reaches the caller as a descriptive, typed exception.
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum


class ErrorLevel(Enum):
    """Levels a wrapped failure can be logged at."""

    WARNING = logging.WARNING
    ERROR = logging.ERROR


class GifAsciiError(Exception):
    """Base exception class for all gifascii errors."""

    def __init__(
        self, message: str, cause: Exception | None = None, context: dict | None = None
    ):
        super().__init__(message)
        self.cause = cause
        self.context = context or {}

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.cause:
            return f"{base_msg} (caused by: {self.cause})"
        return base_msg


class DecodeError(GifAsciiError):
    """Raised when a file cannot be opened or is not a valid GIF."""

    pass


class CacheBuildError(GifAsciiError):
    """Raised when building luminance tensors fails."""

    pass


class LockContention(GifAsciiError):
    """Raised when the application state lock cannot be acquired in time."""

    pass


class NotCached(GifAsciiError):
    """Raised when no tensor exists for the requested width."""

    pass


class NoMediaLoaded(NotCached):
    """Raised when rendering or previewing before a successful load.

    Subclasses NotCached because an empty cache holds no width at all.
    """

    pass


class ExportError(GifAsciiError):
    """Raised when rendered frames cannot be written."""

    pass


class ConfigurationError(GifAsciiError):
    """Raised when configuration is invalid or missing."""

    pass


def format_context(context: dict | None, skip: tuple[str, ...] = ()) -> str:
    """Render context as `` (context: k=v, ...)``, or an empty string."""
    pairs = [f"{key}={value}" for key, value in (context or {}).items() if key not in skip]
    return f" (context: {', '.join(pairs)})" if pairs else ""


def handle_error(
    error: Exception,
    operation: str,
    error_type: type[GifAsciiError] = CacheBuildError,
    level: ErrorLevel = ErrorLevel.ERROR,
    context: dict | None = None,
    logger: logging.Logger | None = None,
    reraise: bool = True,
) -> GifAsciiError | None:
    """Wrap a foreign exception in the gifascii taxonomy and log it once.

    Args:
        error: Exception raised by the failed step
        operation: What was being attempted, e.g. "decode cat.gif"
        error_type: GifAsciiError subclass to produce
        level: Level the failure is logged at
        context: Extra details attached to the new error
        logger: Logger of the calling module
        reraise: Raise the wrapped error instead of returning it

    Raises:
        GifAsciiError: The wrapped error, chained to ``error``, when reraise=True
    """
    logger = logger or logging.getLogger(__name__)

    details = {
        **(context or {}),
        "operation": operation,
        "original_error_type": type(error).__name__,
    }
    wrapped = error_type(f"Failed to {operation}: {error}", cause=error, context=details)

    logger.log(
        level.value,
        f"{operation.capitalize()} failed: {error}{format_context(details, skip=('operation',))}",
    )
    if level is ErrorLevel.ERROR:
        logger.debug(f"Traceback for {operation}: {traceback.format_exc()}")

    if reraise:
        raise wrapped from error
    return wrapped


@contextmanager
def error_context(
    operation: str,
    error_type: type[GifAsciiError] = CacheBuildError,
    level: ErrorLevel = ErrorLevel.ERROR,
    context: dict | None = None,
    logger: logging.Logger | None = None,
) -> Iterator[None]:
    """Run a block, converting foreign exceptions with handle_error.

    Usage:
        with error_context("decode GIF", DecodeError, context={"file": "a.gif"}):
            risky_operation()

    gifascii errors raised inside the block pass through unchanged.
    """
    try:
        yield
    except GifAsciiError:
        raise
    except Exception as e:
        handle_error(e, operation, error_type, level, context, logger, reraise=True)


def log_warning_with_context(
    message: str, context: dict | None = None, logger: logging.Logger | None = None
) -> None:
    """Log a warning followed by its context."""
    (logger or logging.getLogger(__name__)).warning(message + format_context(context))


def log_info_with_context(
    message: str, context: dict | None = None, logger: logging.Logger | None = None
) -> None:
    """Log an info message followed by its context."""
    (logger or logging.getLogger(__name__)).info(message + format_context(context))
