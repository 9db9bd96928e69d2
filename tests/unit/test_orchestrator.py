"""
Tests for the Spotify update cycle.
"""

import threading
import unittest
from unittest.mock import Mock

from releasedeck.spotify.models import AccessToken, Album, Credentials
from releasedeck.spotify.orchestrator import UpdateOrchestrator, UpdateResult
from releasedeck.utils.errors import RequestCancelled, StatusError, TransportError
from releasedeck.widgets.base import RenderMetadata


class TestUpdateOrchestrator(unittest.TestCase):
    """Test authenticate, fetch, commit sequencing."""

    def setUp(self):
        """Set up test fixtures."""
        self.exchanger = Mock()
        self.exchanger.exchange_token.return_value = AccessToken("abc", "Bearer", 3600)
        self.fetcher = Mock()
        self.previous = [Album(id="old")]
        self.orchestrator = UpdateOrchestrator(
            credentials=Credentials("id", "secret"),
            exchanger=self.exchanger,
            fetcher=self.fetcher,
            metadata=RenderMetadata("Spotify", 3600),
            country="GB",
            limit=5,
        )
        self.orchestrator.albums = self.previous

    def test_success_replaces_listing(self):
        """Test a successful cycle replaces the stored albums wholesale."""
        fetched = [Album(id="a"), Album(id="b")]
        self.fetcher.fetch_listing.return_value = fetched
        cancel = threading.Event()

        result = self.orchestrator.update(cancel)

        self.assertTrue(result.ok)
        self.assertIs(result.listing, fetched)
        self.assertIs(self.orchestrator.albums, fetched)
        self.exchanger.exchange_token.assert_called_once_with(cancel, "id", "secret")
        self.fetcher.fetch_listing.assert_called_once_with(cancel, "abc", 5, "GB")

    def test_auth_failure_skips_fetch(self):
        """Test token failure keeps old data and never fetches."""
        error = StatusError(401)
        self.exchanger.exchange_token.side_effect = error

        result = self.orchestrator.update()

        self.assertFalse(result.ok)
        self.assertIs(result.error, error)
        self.assertIsNone(result.listing)
        self.assertIs(self.orchestrator.albums, self.previous)
        self.fetcher.fetch_listing.assert_not_called()

    def test_fetch_failure_keeps_listing(self):
        """Test fetch failure keeps the previous albums."""
        self.fetcher.fetch_listing.side_effect = StatusError(500)

        result = self.orchestrator.update()

        self.assertFalse(result.ok)
        self.assertEqual(result.error.code, 500)
        self.assertIs(self.orchestrator.albums, self.previous)

    def test_cancellation_reported_as_failure(self):
        """Test a cancelled request ends the cycle as a failure."""
        self.fetcher.fetch_listing.side_effect = RequestCancelled("GET cancelled")

        result = self.orchestrator.update()

        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, TransportError)
        self.assertIs(self.orchestrator.albums, self.previous)

    def test_fresh_exchange_every_cycle(self):
        """Test tokens are not reused between cycles."""
        self.fetcher.fetch_listing.return_value = []

        self.orchestrator.update()
        self.orchestrator.update()

        self.assertEqual(self.exchanger.exchange_token.call_count, 2)

    def test_empty_listing_is_committed(self):
        """Test an empty successful listing still replaces the old one."""
        self.fetcher.fetch_listing.return_value = []

        result = self.orchestrator.update()

        self.assertTrue(result.ok)
        self.assertEqual(self.orchestrator.albums, [])


class TestUpdateResult(unittest.TestCase):
    """Test the result type."""

    def test_success(self):
        result = UpdateResult.success([])
        self.assertTrue(result.ok)
        self.assertIsNone(result.error)

    def test_failure(self):
        result = UpdateResult.failure(TransportError("down"))
        self.assertFalse(result.ok)
        self.assertIn("down", repr(result))
