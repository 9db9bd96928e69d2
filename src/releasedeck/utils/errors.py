"""
Error handling utilities and boundaries for releasedeck.

Provides the exception hierarchy shared by the update pipeline and the
dashboard host, plus a decorator for logging error boundaries.
"""

import logging
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

# Type variable for generic function decoration
F = TypeVar("F", bound=Callable[..., Any])


def error_boundary(
    *,
    reraise: bool = False,
    default_return: Any = None,
    log_level: int = logging.ERROR,
) -> Callable[[F], F]:
    """
    Decorator to create consistent error boundaries around functions.

    Args:
        reraise: If True, re-raise the exception after logging
        default_return: Value to return if error occurs and not reraising
        log_level: Logging level for the error (default: ERROR)

    Returns:
        Decorated function with error handling

    Example:
        >>> @error_boundary(default_return="")
        ... def render(widget):
        ...     return widget.render_text()
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.log(
                    log_level,
                    f"Error in {func.__name__}: {e}",
                    exc_info=True,
                    extra={"function": func.__name__},
                )

                if reraise:
                    raise

                return default_return

        return wrapper  # type: ignore

    return decorator


class ReleaseDeckError(Exception):
    """Base exception for all releasedeck errors."""

    pass


class ConfigurationError(ReleaseDeckError):
    """Raised when configuration is missing or invalid."""

    pass


class UpdateError(ReleaseDeckError):
    """Base class for failures of a single widget update cycle."""

    pass


class TransportError(UpdateError):
    """Raised when a request could not be sent or the connection failed."""

    pass


class RequestCancelled(TransportError):
    """Raised when the caller's cancel event fires during a request."""

    pass


class StatusError(UpdateError):
    """
    Raised when the remote answers with an unexpected HTTP status.

    Attributes:
        code: HTTP status code returned by the server
    """

    def __init__(self, code: int, message: Optional[str] = None):
        self.code = code
        super().__init__(message or f"unexpected HTTP status {code}")


class DecodeError(UpdateError):
    """Raised when a response body does not match the expected JSON shape."""

    pass
