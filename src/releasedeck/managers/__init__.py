"""
Managers for handling specific aspects of the dashboard.

- WidgetManager: Widget setup, scheduled updates and rendering
- WidgetRegistry: Widget type discovery
"""

from .widget import WidgetManager, WidgetRegistry

__all__ = [
    "WidgetManager",
    "WidgetRegistry",
]
