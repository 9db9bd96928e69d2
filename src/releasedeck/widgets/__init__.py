"""
Widget system for dashboard data sources.

Widgets own a configuration, periodically refresh their content from a
remote source and render it for the dashboard. Concrete widget modules in
this package are picked up by WidgetRegistry.auto_discover().
"""

from .base import BaseWidget, RenderMetadata

__all__ = ["BaseWidget", "RenderMetadata"]
