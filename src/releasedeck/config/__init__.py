"""
Configuration loading for releasedeck.
"""

from .loader import ConfigLoader

__all__ = ["ConfigLoader"]
