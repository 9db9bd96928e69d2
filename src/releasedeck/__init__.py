"""
releasedeck - A YAML-driven dashboard widget for Spotify new releases
"""

__version__ = "0.1.0"

from .controller import DashboardController

__all__ = ["DashboardController"]
