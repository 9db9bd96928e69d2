"""
Update cycle for the Spotify widget: authenticate, fetch, commit.
"""

import logging
import threading
from typing import List, Optional

from ..utils.errors import UpdateError
from ..widgets.base import RenderMetadata
from .auth import CredentialExchanger
from .client import ResourceFetcher
from .models import Album, Credentials

logger = logging.getLogger(__name__)


class UpdateResult:
    """
    Outcome of one update cycle.

    Exactly one of ``listing`` and ``error`` is set.
    """

    def __init__(self, listing: Optional[List[Album]] = None, error: Optional[UpdateError] = None):
        self.listing = listing
        self.error = error

    @classmethod
    def success(cls, listing: List[Album]) -> "UpdateResult":
        return cls(listing=listing)

    @classmethod
    def failure(cls, error: UpdateError) -> "UpdateResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self) -> str:
        if self.ok:
            return f"<UpdateResult(ok, {len(self.listing)} items)>"
        return f"<UpdateResult(failed: {self.error})>"


class UpdateOrchestrator:
    """
    Runs the two-stage update cycle and owns the committed album list.

    The stored list is only ever replaced as a whole after both stages
    succeed; on any failure the previous list stays in place.
    """

    def __init__(
        self,
        credentials: Credentials,
        exchanger: CredentialExchanger,
        fetcher: ResourceFetcher,
        metadata: RenderMetadata,
        country: str = "US",
        limit: int = 10,
    ):
        self.credentials = credentials
        self.exchanger = exchanger
        self.fetcher = fetcher
        self.metadata = metadata
        self.country = country
        self.limit = limit
        self.albums: List[Album] = []

    def update(self, cancel_event: Optional[threading.Event] = None) -> UpdateResult:
        """
        Run one update cycle.

        Args:
            cancel_event: Aborts any outstanding request when set

        Returns:
            UpdateResult carrying the new listing or the error that stopped the cycle
        """
        try:
            token = self.exchanger.exchange_token(
                cancel_event, self.credentials.client_id, self.credentials.client_secret
            )
        except UpdateError as e:
            logger.error(f"{self.metadata.title}: token exchange failed: {e}")
            return UpdateResult.failure(e)

        try:
            albums = self.fetcher.fetch_listing(cancel_event, token.value, self.limit, self.country)
        except UpdateError as e:
            logger.error(f"{self.metadata.title}: fetching new releases failed: {e}")
            return UpdateResult.failure(e)

        self.albums = albums
        logger.info(f"{self.metadata.title}: loaded {len(albums)} albums")
        return UpdateResult.success(albums)
