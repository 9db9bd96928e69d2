"""
Widget management for dashboard data sources.

This module manages the lifecycle of widgets including setup, update
scheduling and rendering.
"""

import logging
import threading
import time
from typing import Any, Dict, List, Optional

from ..utils.errors import ConfigurationError, error_boundary

logger = logging.getLogger(__name__)


class WidgetManager:
    """
    Manages configured widgets.

    Responsibilities:
    - Widget lifecycle management
    - Scheduled updates based on each widget's cache duration
    - Rendering the current content of every widget
    """

    def __init__(self, session: Any = None):
        """
        Initialize the widget manager.

        Args:
            session: Shared HTTP session handed to every widget
        """
        self.session = session
        self.widget_registry = WidgetRegistry()
        self.active_widgets: Dict[int, Any] = {}  # {position: widget}
        self._widget_lock = threading.Lock()  # One update pass at a time

    def setup_widget(self, index: int, widget_config: Dict[str, Any]) -> bool:
        """
        Set up a widget from its configuration.

        Args:
            index: Zero-based position of the widget on the dashboard
            widget_config: Widget section from YAML

        Returns:
            True if widget was set up successfully, False otherwise
        """
        widget_type = widget_config.get("type")
        if not widget_type:
            logger.error(f"Widget {index + 1} is missing 'type'")
            return False

        widget_class = self.widget_registry.get_widget_class(widget_type)
        if not widget_class:
            logger.error(f"Unknown widget type: {widget_type}")
            return False

        try:
            widget = widget_class(widget_config, session=self.session)
        except ConfigurationError as e:
            logger.error(f"Invalid config for {widget_type} widget {index + 1}: {e}")
            return False

        with self._widget_lock:
            self.active_widgets[index] = widget

        logger.info(f"Initialized {widget_type} widget {index + 1} ({widget.metadata.title})")
        return True

    def update_widgets(
        self,
        cancel_event: Optional[threading.Event] = None,
        current_time: Optional[float] = None,
        force: bool = False,
    ) -> Dict[int, bool]:
        """
        Update all widgets whose cache duration has elapsed.

        Args:
            cancel_event: Aborts outstanding network calls when set
            current_time: Timestamp used for scheduling (default: now)
            force: Update every widget regardless of schedule

        Returns:
            Dictionary of {index: succeeded} for widgets that were updated
        """
        with self._widget_lock:
            current_time = current_time if current_time is not None else time.time()
            results = {}

            for index, widget in self.active_widgets.items():
                if cancel_event is not None and cancel_event.is_set():
                    break
                if force or widget.should_update(current_time):
                    results[index] = widget.safe_update(cancel_event, current_time)

            return results

    def render_widgets(self) -> List[str]:
        """Render every widget's text in dashboard order."""
        return [self._render(widget) for _, widget in sorted(self.active_widgets.items())]

    @error_boundary(default_return="")
    def _render(self, widget: Any) -> str:
        return widget.render_text()

    def next_update_in(self, current_time: Optional[float] = None) -> Optional[float]:
        """
        Seconds until the next widget is due, or None without widgets.
        """
        if not self.active_widgets:
            return None
        current_time = current_time if current_time is not None else time.time()
        return min(w.seconds_until_update(current_time) for w in self.active_widgets.values())

    def clear_widgets(self) -> None:
        """Close and clear all widgets."""
        with self._widget_lock:
            for widget in self.active_widgets.values():
                widget.close()
            self.active_widgets.clear()
            logger.debug("Cleared all widgets")

    def has_widgets(self) -> bool:
        """Check if any widgets are active."""
        return len(self.active_widgets) > 0

    def get_widget_count(self) -> int:
        """Get the count of active widgets."""
        return len(self.active_widgets)


class WidgetRegistry:
    """
    Registry for auto-discovering widget types.
    """

    def __init__(self):
        """Initialize empty registry."""
        self._widgets: Dict[str, type] = {}

    def register(self, widget_class: type) -> None:
        """
        Register a widget class.

        Args:
            widget_class: Widget class to register

        Raises:
            TypeError: If widget_class doesn't inherit from BaseWidget
            ValueError: If widget_type is not defined
        """
        from releasedeck.widgets.base import BaseWidget

        if not isinstance(widget_class, type) or not issubclass(widget_class, BaseWidget):
            raise TypeError(f"{widget_class} must inherit from BaseWidget")

        widget_type = widget_class.widget_type

        if not widget_type:
            raise ValueError(f"{widget_class.__name__} must define widget_type class attribute")

        if widget_type in self._widgets:
            logger.warning(f"Overwriting existing widget type: {widget_type}")

        self._widgets[widget_type] = widget_class
        logger.debug(f"Registered widget type: {widget_type}")

    def get_widget_class(self, widget_type: str):
        """
        Get widget class by type.

        Returns:
            Widget class or None if not found
        """
        return self._widgets.get(widget_type)

    def list_widgets(self) -> list:
        """List all registered widget types."""
        return list(self._widgets.keys())

    def auto_discover(self) -> None:
        """Auto-discover and register all widget modules."""
        import importlib
        import pkgutil

        from releasedeck.widgets.base import BaseWidget

        try:
            import releasedeck.widgets as widgets_pkg
        except ImportError:
            logger.warning("Widgets package not found, skipping auto-discovery")
            return

        for _importer, modname, _ispkg in pkgutil.iter_modules(widgets_pkg.__path__):
            if modname in ["base", "__init__"]:
                continue

            try:
                module = importlib.import_module(f"releasedeck.widgets.{modname}")

                for attr_name in dir(module):
                    attr = getattr(module, attr_name)
                    if (
                        isinstance(attr, type)
                        and issubclass(attr, BaseWidget)
                        and attr is not BaseWidget
                        and attr.widget_type
                    ):
                        self.register(attr)
                        logger.info(f"Auto-registered widget: {attr.widget_type}")

            except Exception as e:
                logger.error(f"Failed to load widget module {modname}: {e}")
