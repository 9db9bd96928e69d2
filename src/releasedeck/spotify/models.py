"""
Data model for the Spotify Web API payloads used by the widget.

Parsing is lenient about missing fields (they take empty/zero values) but
strict about structure: a payload of the wrong JSON type raises DecodeError.
"""

from typing import Any, Dict, List, Optional

from ..utils.errors import ConfigurationError, DecodeError


def _as_int(value: Any) -> int:
    # Spotify reports null dimensions for some images
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"expected a number, got {type(value).__name__}")
    return int(value)


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"expected a string, got {type(value).__name__}")
    return value


def _as_dict(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"{what} must be a JSON object")
    return value


def _as_list(value: Any, what: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"{what} must be a JSON array")
    return value


class Credentials:
    """
    Client id/secret pair for the client-credentials grant.

    Immutable once constructed; both values are required.
    """

    __slots__ = ("_client_id", "_client_secret")

    def __init__(self, client_id: str, client_secret: str):
        if not client_id:
            raise ConfigurationError("client-id is required")
        if not client_secret:
            raise ConfigurationError("client-secret is required")
        self._client_id = client_id
        self._client_secret = client_secret

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def client_secret(self) -> str:
        return self._client_secret

    def __repr__(self) -> str:
        # Never leak the secret into logs
        return f"<Credentials(client_id={self._client_id!r})>"


class AccessToken:
    """Bearer token returned by the token endpoint, valid for one update cycle."""

    def __init__(self, value: str, token_type: str = "Bearer", expires_in: int = 0):
        self.value = value
        self.token_type = token_type
        self.expires_in = expires_in

    @classmethod
    def from_dict(cls, data: Any) -> "AccessToken":
        data = _as_dict(data, "token response")
        value = data.get("access_token")
        if not isinstance(value, str) or not value:
            raise DecodeError("token response is missing 'access_token'")
        return cls(
            value=value,
            token_type=_as_str(data.get("token_type")),
            expires_in=_as_int(data.get("expires_in")),
        )

    def __repr__(self) -> str:
        return f"<AccessToken(type={self.token_type}, expires_in={self.expires_in})>"


class Artist:
    """An album author as listed by the API."""

    def __init__(self, id: str = "", name: str = "", type: str = ""):
        self.id = id
        self.name = name
        self.type = type

    @classmethod
    def from_dict(cls, data: Any) -> "Artist":
        data = _as_dict(data, "artist")
        return cls(
            id=_as_str(data.get("id")),
            name=_as_str(data.get("name")),
            type=_as_str(data.get("type")),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Artist):
            return NotImplemented
        return (self.id, self.name, self.type) == (other.id, other.name, other.type)

    def __repr__(self) -> str:
        return f"<Artist(name={self.name!r})>"


class Image:
    """Cover art rendition. Width and height are 0 when the API omits them."""

    def __init__(self, url: str = "", width: int = 0, height: int = 0):
        self.url = url
        self.width = width
        self.height = height

    @classmethod
    def from_dict(cls, data: Any) -> "Image":
        data = _as_dict(data, "image")
        return cls(
            url=_as_str(data.get("url")),
            width=_as_int(data.get("width")),
            height=_as_int(data.get("height")),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return (self.url, self.width, self.height) == (other.url, other.width, other.height)

    def __repr__(self) -> str:
        return f"<Image({self.width}x{self.height})>"


class Album:
    """
    A catalog item from the new releases listing.

    Attributes:
        id: Spotify album id
        name: Album title
        album_type: "album", "single" or "compilation"
        release_date: Release date as reported (precision varies)
        total_tracks: Number of tracks
        external_url: Link to the album on open.spotify.com
        artists: Authors in API order
        images: Cover renditions in API order
    """

    def __init__(
        self,
        id: str = "",
        name: str = "",
        album_type: str = "",
        release_date: str = "",
        total_tracks: int = 0,
        external_url: str = "",
        artists: Optional[List[Artist]] = None,
        images: Optional[List[Image]] = None,
    ):
        self.id = id
        self.name = name
        self.album_type = album_type
        self.release_date = release_date
        self.total_tracks = total_tracks
        self.external_url = external_url
        self.artists = list(artists or [])
        self.images = list(images or [])

    @classmethod
    def from_dict(cls, data: Any) -> "Album":
        data = _as_dict(data, "album")
        external_urls = data.get("external_urls") or {}
        return cls(
            id=_as_str(data.get("id")),
            name=_as_str(data.get("name")),
            album_type=_as_str(data.get("album_type")),
            release_date=_as_str(data.get("release_date")),
            total_tracks=_as_int(data.get("total_tracks")),
            external_url=_as_str(_as_dict(external_urls, "external_urls").get("spotify")),
            artists=[Artist.from_dict(a) for a in _as_list(data.get("artists"), "artists")],
            images=[Image.from_dict(i) for i in _as_list(data.get("images"), "images")],
        )

    def __repr__(self) -> str:
        return f"<Album(id={self.id!r}, name={self.name!r})>"


def parse_new_releases(data: Any) -> List[Album]:
    """
    Extract the album list from a new releases response envelope.

    Args:
        data: Decoded JSON body, ``{"albums": {"items": [...]}}``

    Returns:
        Albums in the order the API returned them

    Raises:
        DecodeError: If the envelope or an item has the wrong shape
    """
    envelope = _as_dict(data, "new releases response")
    albums = _as_dict(envelope.get("albums"), "'albums'")
    items = _as_list(albums.get("items"), "'albums.items'")
    return [Album.from_dict(item) for item in items]
