"""
Utility modules for releasedeck.
"""

from .errors import (
    ConfigurationError,
    DecodeError,
    ReleaseDeckError,
    RequestCancelled,
    StatusError,
    TransportError,
    UpdateError,
    error_boundary,
)

__all__ = [
    "ReleaseDeckError",
    "ConfigurationError",
    "UpdateError",
    "TransportError",
    "RequestCancelled",
    "StatusError",
    "DecodeError",
    "error_boundary",
]
