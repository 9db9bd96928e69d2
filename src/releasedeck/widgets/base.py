"""
Base classes for all dashboard widget types.
"""

import logging
import math
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


class RenderMetadata:
    """
    Host-owned display settings shared with a widget's update pipeline.

    Attributes:
        title: Heading shown above the widget
        cache_duration: Seconds a successful update stays fresh
    """

    def __init__(self, title: str, cache_duration: float):
        self.title = title
        self.cache_duration = cache_duration

    def __repr__(self) -> str:
        return f"<RenderMetadata(title={self.title!r}, cache_duration={self.cache_duration})>"


class BaseWidget(ABC):
    """
    Base class for all dashboard widgets.

    A widget owns its configuration, its RenderMetadata and the lifecycle
    flags the host reads: whether content is available, the last error and
    when the last update ran. Subclasses implement ``update`` (one update
    cycle returning a result object with ``ok`` and ``error``) and
    ``render_text``.

    Class Attributes:
        widget_type: Unique identifier for this widget type (e.g., "spotify")
        default_title: Title used when the config sets none
        default_cache_duration: Seconds between updates when the config sets none

    Example:
        >>> class MyWidget(BaseWidget):
        ...     widget_type = "my_widget"
        ...
        ...     def update(self, cancel_event=None):
        ...         return MyResult(ok=True)
        ...
        ...     def render_text(self):
        ...         return "Hello"
    """

    # Widget type identifier (must be unique)
    widget_type: str = None

    default_title: str = ""

    default_cache_duration: float = 300.0

    def __init__(self, config: Dict[str, Any], session: Any = None):
        """
        Initialize widget with configuration.

        Args:
            config: Widget configuration from YAML
            session: Shared HTTP session for widgets that talk to remote APIs

        Raises:
            ValueError: If widget_type is not defined
            ConfigurationError: If a required parameter is missing or invalid
        """
        if not self.widget_type:
            raise ValueError(f"{self.__class__.__name__} must define widget_type")

        self.config = config
        self.session = session

        missing = [p for p in self.get_required_params() if not self.config.get(p)]
        if missing:
            raise ConfigurationError(
                f"{self.widget_type} widget requires: {', '.join(missing)}"
            )

        self.metadata = RenderMetadata(
            title=self.config.get("title") or self.default_title or self.widget_type,
            cache_duration=self.get_positive_number("cache-duration", self.default_cache_duration),
        )

        self.content_available = False
        self.last_error: Optional[Exception] = None
        self.last_updated: Optional[float] = None
        self._last_attempt = 0.0

    @abstractmethod
    def update(self, cancel_event: Optional[threading.Event] = None) -> Any:
        """
        Run one update cycle.

        Args:
            cancel_event: Aborts outstanding network calls when set

        Returns:
            Result object exposing ``ok`` and ``error``
        """
        pass

    @abstractmethod
    def render_text(self) -> str:
        """
        Render the widget's current content as plain text.

        Returns:
            Formatted text string (supports multiline with \\n)
        """
        pass

    def get_required_params(self) -> list:
        """
        Return list of required configuration parameters.

        Returns:
            List of required parameter names
        """
        return []

    def get_positive_number(self, key: str, default: float, cast: type = float) -> Any:
        """
        Read an optional positive number from the configuration.

        Args:
            key: Configuration key
            default: Value used when the key is absent
            cast: ``int`` or ``float``

        Raises:
            ConfigurationError: If the value is not a positive number
        """
        value = self.config.get(key)
        if value is None:
            return default

        if isinstance(value, bool):
            raise ConfigurationError(f"'{key}' must be a number, got {value!r}")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"'{key}' must be a number, got {value!r}")

        if not math.isfinite(number) or number <= 0:
            raise ConfigurationError(f"'{key}' must be a positive finite number, got {value!r}")
        result = cast(number)
        if result <= 0:
            raise ConfigurationError(f"'{key}' must be positive, got {value!r}")
        return result

    def should_update(self, current_time: float) -> bool:
        """
        Check if the cache duration has elapsed since the last attempt.

        Args:
            current_time: Current timestamp from time.time()
        """
        if not self._last_attempt:
            return True
        return current_time - self._last_attempt >= self.metadata.cache_duration

    def seconds_until_update(self, current_time: float) -> float:
        """Seconds left until ``should_update`` turns true (0 if already due)."""
        if not self._last_attempt:
            return 0.0
        return max(0.0, self._last_attempt + self.metadata.cache_duration - current_time)

    def apply_result(self, result: Any, current_time: Optional[float] = None) -> None:
        """
        Record the outcome of an update cycle in the widget's lifecycle state.

        A failed cycle keeps ``content_available`` from the last success so
        stale content keeps being shown.
        """
        current_time = current_time if current_time is not None else time.time()
        self._last_attempt = current_time

        if result.ok:
            self.content_available = True
            self.last_error = None
            self.last_updated = current_time
        else:
            self.last_error = result.error

    def safe_update(
        self,
        cancel_event: Optional[threading.Event] = None,
        current_time: Optional[float] = None,
    ) -> bool:
        """
        Run ``update`` and apply its result, containing unexpected errors.

        Returns:
            True if the cycle succeeded, False otherwise
        """
        current_time = current_time if current_time is not None else time.time()
        try:
            result = self.update(cancel_event)
        except Exception as e:
            logger.error(f"Error updating {self.widget_type} widget: {e}", exc_info=True)
            self._last_attempt = current_time
            self.last_error = e
            return False

        self.apply_result(result, current_time)
        return result.ok

    def close(self) -> None:
        """Release resources held by the widget. Override if needed."""
        pass

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<{self.__class__.__name__}(type={self.widget_type}, "
            f"title={self.metadata.title!r}, cache={self.metadata.cache_duration})>"
        )
