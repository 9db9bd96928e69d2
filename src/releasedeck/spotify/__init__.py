"""
Spotify new releases pipeline: token exchange, listing fetch, presentation.
"""

from .auth import CredentialExchanger
from .client import ResourceFetcher
from .models import AccessToken, Album, Artist, Credentials, Image
from .orchestrator import UpdateOrchestrator, UpdateResult
from .presenter import UNKNOWN_ARTIST, present, primary_author, select_image

__all__ = [
    "AccessToken",
    "Album",
    "Artist",
    "Credentials",
    "Image",
    "CredentialExchanger",
    "ResourceFetcher",
    "UpdateOrchestrator",
    "UpdateResult",
    "UNKNOWN_ARTIST",
    "present",
    "primary_author",
    "select_image",
]
