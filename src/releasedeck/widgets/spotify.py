"""
Spotify new releases widget.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

import requests

from ..spotify.auth import TOKEN_URL, CredentialExchanger
from ..spotify.client import NEW_RELEASES_URL, ResourceFetcher
from ..spotify.models import Album, Credentials
from ..spotify.orchestrator import UpdateOrchestrator, UpdateResult
from ..spotify.presenter import present
from ..utils.errors import ConfigurationError
from .base import BaseWidget

logger = logging.getLogger(__name__)

NEW_RELEASES = "new-releases"


class SpotifyWidget(BaseWidget):
    """
    Display the latest album releases from the Spotify catalog.

    Configuration:
        client-id: Spotify application client id (required)
        client-secret: Spotify application client secret (required)
        country: Market code (default: "US")
        limit: Number of albums (default: 10)
        content-type: Listing to show, only "new-releases" (default)
        image-size: Preferred cover width in pixels (default: 300)
        timeout: Per-request timeout in seconds (default: 10)
        token-url: Token endpoint (default: Spotify accounts service)
        api-url: New releases endpoint (default: Spotify Web API)

    Example:
        widgets:
          - type: spotify
            client-id: "${SPOTIFY_CLIENT_ID}"
            client-secret: "${SPOTIFY_CLIENT_SECRET}"
            country: GB
            limit: 12
    """

    widget_type = "spotify"
    default_title = "Spotify"
    default_cache_duration = 3600.0  # 1 hour, like other API widgets

    def __init__(self, config: Dict[str, Any], session: Optional[requests.Session] = None):
        super().__init__(config, session)

        self.credentials = Credentials(
            str(self.config.get("client-id")), str(self.config.get("client-secret"))
        )
        self.country = str(self.config.get("country") or "US")
        self.limit = self._read_limit()

        self.content_type = self.config.get("content-type") or NEW_RELEASES
        if self.content_type != NEW_RELEASES:
            logger.warning(
                f"Spotify widget content-type '{self.content_type}' is not supported, "
                f"showing {NEW_RELEASES}"
            )

        self.image_size = self.get_positive_number("image-size", 300, cast=int)
        timeout = self.get_positive_number("timeout", 10.0)

        self._owns_session = self.session is None
        if self.session is None:
            self.session = requests.Session()

        self.orchestrator = UpdateOrchestrator(
            credentials=self.credentials,
            exchanger=CredentialExchanger(
                self.session, self.config.get("token-url") or TOKEN_URL, timeout
            ),
            fetcher=ResourceFetcher(
                self.session, self.config.get("api-url") or NEW_RELEASES_URL, timeout
            ),
            metadata=self.metadata,
            country=self.country,
            limit=self.limit,
        )

    def close(self) -> None:
        """Close the HTTP session if this widget created it."""
        if self._owns_session:
            self.session.close()

    def _read_limit(self) -> int:
        limit = self.config.get("limit")
        if limit is None:
            return 10
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ConfigurationError(f"'limit' must be an integer, got {limit!r}")
        if limit <= 0:
            logger.warning(f"Spotify widget limit {limit} is not positive, using 10")
            return 10
        return limit

    def get_required_params(self) -> list:
        """Return required configuration parameters."""
        return ["client-id", "client-secret"]

    @property
    def albums(self) -> List[Album]:
        """Albums from the last successful update."""
        return self.orchestrator.albums

    def update(self, cancel_event: Optional[threading.Event] = None) -> UpdateResult:
        """Fetch a fresh new releases listing."""
        return self.orchestrator.update(cancel_event)

    def render_items(self) -> List[Dict[str, Any]]:
        """Return render-ready fields for every stored album."""
        return [present(album, self.image_size) for album in self.albums]

    def render_text(self) -> str:
        """Format the listing as one line per album."""
        if not self.content_available:
            if self.last_error is not None:
                return f"{self.metadata.title}\nNo data ({self.last_error})"
            return f"{self.metadata.title}\nNo data"

        lines = [self.metadata.title]
        for item in self.render_items():
            lines.append(f"{item['name']} - {item['artist']}")
        return "\n".join(lines)
