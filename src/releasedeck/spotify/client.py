"""
Browse endpoint client for the new releases listing.
"""

import logging
import threading
from typing import List, Optional

import requests

from .models import Album, parse_new_releases
from .transport import DEFAULT_TIMEOUT, request_json

logger = logging.getLogger(__name__)

NEW_RELEASES_URL = "https://api.spotify.com/v1/browse/new-releases"


class ResourceFetcher:
    """Fetches a bounded listing of albums with a bearer token."""

    def __init__(
        self,
        session: requests.Session,
        api_url: str = NEW_RELEASES_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.session = session
        self.api_url = api_url
        self.timeout = timeout

    def fetch_listing(
        self,
        cancel_event: Optional[threading.Event],
        token: str,
        limit: int,
        country: str,
    ) -> List[Album]:
        """
        Fetch the new releases listing.

        Args:
            cancel_event: Aborts the request when set
            token: Bearer token value
            limit: Maximum number of albums to return
            country: ISO 3166-1 alpha-2 market code

        Returns:
            Albums in API order

        Raises:
            TransportError: Request failed or was cancelled
            StatusError: API answered with a non-200 status
            DecodeError: Response body is not a new releases envelope
        """
        data = request_json(
            self.session,
            "GET",
            self.api_url,
            cancel_event=cancel_event,
            timeout=self.timeout,
            headers={"Authorization": f"Bearer {token}"},
            params={"limit": limit, "country": country},
        )
        albums = parse_new_releases(data)
        logger.debug(f"Fetched {len(albums)} new releases for {country}")
        return albums
