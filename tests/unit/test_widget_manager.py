"""
Tests for WidgetManager and WidgetRegistry.
"""

import threading
import unittest
from unittest.mock import Mock

from releasedeck.managers.widget import WidgetManager, WidgetRegistry
from releasedeck.spotify.orchestrator import UpdateResult
from releasedeck.utils.errors import ConfigurationError
from releasedeck.widgets.base import BaseWidget
from releasedeck.widgets.spotify import SpotifyWidget


class MockWidget(BaseWidget):
    """Mock widget for testing."""

    widget_type = "mock"
    default_cache_duration = 10.0

    def __init__(self, config, session=None):
        super().__init__(config, session)
        self.update_calls = 0

    def update(self, cancel_event=None):
        self.update_calls += 1
        return UpdateResult.success([])

    def render_text(self):
        return f"{self.metadata.title}: {self.update_calls}"

    def get_required_params(self):
        return ["name"]


class BrokenWidget(MockWidget):
    """Widget whose rendering always fails."""

    widget_type = "broken"

    def render_text(self):
        raise RuntimeError("render failed")


class InvalidWidget:
    """Invalid widget that doesn't inherit from BaseWidget."""

    widget_type = "invalid"


class TestWidgetRegistry(unittest.TestCase):
    """Test WidgetRegistry functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.registry = WidgetRegistry()

    def test_register_valid_widget(self):
        """Test registering a valid widget."""
        self.registry.register(MockWidget)
        self.assertIn("mock", self.registry.list_widgets())
        self.assertEqual(self.registry.get_widget_class("mock"), MockWidget)

    def test_register_invalid_widget(self):
        """Test that registering invalid widget raises TypeError."""
        with self.assertRaises(TypeError):
            self.registry.register(InvalidWidget)

    def test_register_duplicate_widget(self):
        """Test registering duplicate widget type."""
        self.registry.register(MockWidget)
        self.registry.register(MockWidget)
        self.assertEqual(self.registry.get_widget_class("mock"), MockWidget)

    def test_get_nonexistent_widget(self):
        """Test getting a widget that doesn't exist."""
        self.assertIsNone(self.registry.get_widget_class("nonexistent"))

    def test_list_widgets_empty(self):
        """Test listing widgets when registry is empty."""
        self.assertEqual(self.registry.list_widgets(), [])

    def test_auto_discover(self):
        """Test auto-discovery finds the Spotify widget."""
        self.registry.auto_discover()
        self.assertIs(self.registry.get_widget_class("spotify"), SpotifyWidget)


class TestWidgetManager(unittest.TestCase):
    """Test WidgetManager functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.session = Mock()
        self.manager = WidgetManager(self.session)
        self.manager.widget_registry.register(MockWidget)
        self.manager.widget_registry.register(BrokenWidget)

    def test_setup_widget(self):
        """Test setting up a known widget type."""
        self.assertTrue(self.manager.setup_widget(0, {"type": "mock", "name": "a"}))
        self.assertEqual(self.manager.get_widget_count(), 1)
        self.assertIs(self.manager.active_widgets[0].session, self.session)

    def test_setup_missing_type(self):
        """Test widget config without type is rejected."""
        self.assertFalse(self.manager.setup_widget(0, {"name": "a"}))
        self.assertFalse(self.manager.has_widgets())

    def test_setup_unknown_type(self):
        """Test unknown widget types are rejected."""
        self.assertFalse(self.manager.setup_widget(0, {"type": "nope"}))

    def test_setup_invalid_config(self):
        """Test configuration errors are logged and the widget skipped."""
        self.assertFalse(self.manager.setup_widget(0, {"type": "mock"}))
        self.assertFalse(self.manager.has_widgets())

    def test_setup_propagates_unexpected_errors(self):
        """Test programming errors in widgets are not hidden."""

        class Exploding(MockWidget):
            widget_type = "exploding"

            def __init__(self, config, session=None):
                raise KeyError("bug")

        self.manager.widget_registry.register(Exploding)
        with self.assertRaises(KeyError):
            self.manager.setup_widget(0, {"type": "exploding", "name": "x"})

    def test_update_only_due_widgets(self):
        """Test widgets update according to their cache duration."""
        self.manager.setup_widget(0, {"type": "mock", "name": "a"})
        self.manager.setup_widget(1, {"type": "mock", "name": "b", "cache-duration": 100})

        self.assertEqual(self.manager.update_widgets(current_time=1000.0), {0: True, 1: True})
        self.assertEqual(self.manager.update_widgets(current_time=1005.0), {})
        self.assertEqual(self.manager.update_widgets(current_time=1010.0), {0: True})
        self.assertEqual(self.manager.next_update_in(1010.0), 10.0)

    def test_force_update(self):
        """Test force updates widgets that are not due."""
        self.manager.setup_widget(0, {"type": "mock", "name": "a"})
        self.manager.update_widgets(current_time=1000.0)

        self.assertEqual(self.manager.update_widgets(current_time=1001.0, force=True), {0: True})
        self.assertEqual(self.manager.active_widgets[0].update_calls, 2)

    def test_cancelled_update_pass(self):
        """Test a set cancel event stops the update pass."""
        self.manager.setup_widget(0, {"type": "mock", "name": "a"})
        cancel = threading.Event()
        cancel.set()

        self.assertEqual(self.manager.update_widgets(cancel, current_time=1000.0), {})
        self.assertEqual(self.manager.active_widgets[0].update_calls, 0)

    def test_render_widgets_in_order(self):
        """Test rendering keeps dashboard order and contains failures."""
        self.manager.setup_widget(1, {"type": "mock", "name": "b", "title": "Second"})
        self.manager.setup_widget(0, {"type": "broken", "name": "a"})
        self.manager.setup_widget(2, {"type": "mock", "name": "c", "title": "Third"})

        self.assertEqual(self.manager.render_widgets(), ["", "Second: 0", "Third: 0"])

    def test_next_update_without_widgets(self):
        """Test scheduling with no widgets."""
        self.assertIsNone(self.manager.next_update_in())

    def test_clear_widgets(self):
        """Test clearing widgets."""
        self.manager.setup_widget(0, {"type": "mock", "name": "a"})
        self.manager.clear_widgets()
        self.assertEqual(self.manager.get_widget_count(), 0)

    def test_clear_widgets_closes_them(self):
        """Test clearing widgets releases their resources."""
        self.manager.setup_widget(0, {"type": "mock", "name": "a"})
        widget = self.manager.active_widgets[0]
        widget.close = Mock()

        self.manager.clear_widgets()

        widget.close.assert_called_once()


class TestConfigurationErrorHierarchy(unittest.TestCase):
    """Test configuration errors share the package base class."""

    def test_base_class(self):
        from releasedeck.utils.errors import ReleaseDeckError

        self.assertTrue(issubclass(ConfigurationError, ReleaseDeckError))
