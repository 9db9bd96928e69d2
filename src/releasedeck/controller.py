"""
Main controller for the releasedeck dashboard.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

import requests

from .config.loader import ConfigLoader
from .managers import WidgetManager

logger = logging.getLogger(__name__)


class DashboardController:
    """
    Main controller orchestrating dashboard widgets.

    Loads the YAML configuration, sets up every configured widget through
    the WidgetManager and drives update cycles until asked to stop. All
    widgets share one HTTP session.
    """

    def __init__(self, config_path: str, session: Optional[requests.Session] = None) -> None:
        """
        Initialize the controller.

        Args:
            config_path: Path to YAML configuration file
            session: HTTP session to share between widgets (created if omitted)
        """
        self.config_path: str = config_path
        self.config: Optional[Dict[str, Any]] = None
        self.running: bool = False

        self._owns_session = session is None
        self.session: requests.Session = session if session is not None else requests.Session()

        self.config_loader: ConfigLoader = ConfigLoader()
        self.widget_manager = WidgetManager(self.session)

        self.widget_manager.widget_registry.auto_discover()
        logger.info(f"Registered widgets: {self.widget_manager.widget_registry.list_widgets()}")

    def load_config(self) -> bool:
        """
        Load configuration from file.

        Returns:
            True if successful, False otherwise
        """
        try:
            self.config = self.config_loader.load(self.config_path)
            return True
        except Exception as e:
            logger.error(f"Failed to load config: {e}")
            return False

    def setup(self) -> bool:
        """
        Load the configuration and set up its widgets.

        Returns:
            True if at least one widget is ready
        """
        if not self.load_config():
            return False

        self.widget_manager.clear_widgets()
        for index, widget_config in enumerate(self.config["widgets"]):
            self.widget_manager.setup_widget(index, widget_config)

        if not self.widget_manager.has_widgets():
            logger.error("No widgets could be set up")
            return False
        return True

    def run_once(self, cancel_event: Optional[threading.Event] = None) -> List[str]:
        """
        Update every widget once and return their rendered text.
        """
        self.widget_manager.update_widgets(cancel_event, force=True)
        return self.widget_manager.render_widgets()

    def run(self, stop_event: Optional[threading.Event] = None) -> None:
        """
        Main run loop.

        Updates due widgets, then sleeps until the next widget is due (at
        most ``refresh_interval`` seconds). Setting ``stop_event`` ends the
        loop and cancels any request in flight.
        """
        stop_event = stop_event or threading.Event()
        if self.config is None and not self.setup():
            logger.error("Cannot start without valid configuration")
            return

        refresh_interval = self.config["refresh_interval"]
        self.running = True
        logger.info("releasedeck is running. Press Ctrl+C to exit.")

        try:
            while self.running and not stop_event.is_set():
                results = self.widget_manager.update_widgets(stop_event)
                if results:
                    for text in self.widget_manager.render_widgets():
                        logger.info(f"\n{text}")

                wait = self.widget_manager.next_update_in()
                if wait is None or wait > refresh_interval:
                    wait = refresh_interval
                stop_event.wait(wait)

        except Exception as e:
            logger.error(f"Unexpected error in main loop: {e}", exc_info=True)
        finally:
            self.shutdown()

    def shutdown(self) -> None:
        """Stop the loop and release the HTTP session if we created it."""
        logger.info("Shutting down releasedeck...")
        self.running = False
        self.widget_manager.clear_widgets()
        if self._owns_session:
            self.session.close()
