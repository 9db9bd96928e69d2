"""
Pure helpers that turn an Album into render-ready fields.
"""

from typing import Any, Dict

from .models import Album

UNKNOWN_ARTIST = "Unknown Artist"


def select_image(album: Album, preferred_width: int) -> str:
    """
    Return the URL of the image whose width is closest to ``preferred_width``.

    Images are scanned in API order and ties keep the earlier image.
    Returns an empty string when the album has no images.
    """
    if not album.images:
        return ""

    best = album.images[0]
    best_diff = abs(best.width - preferred_width)
    for image in album.images[1:]:
        diff = abs(image.width - preferred_width)
        if diff < best_diff:
            best = image
            best_diff = diff

    return best.url


def primary_author(album: Album) -> str:
    """Return the first artist's name, or UNKNOWN_ARTIST."""
    if not album.artists:
        return UNKNOWN_ARTIST
    return album.artists[0].name


def present(album: Album, preferred_width: int) -> Dict[str, Any]:
    """Collect the fields a template needs to draw one album."""
    return {
        "name": album.name,
        "artist": primary_author(album),
        "image_url": select_image(album, preferred_width),
        "url": album.external_url,
        "release_date": album.release_date,
        "album_type": album.album_type,
        "total_tracks": album.total_tracks,
    }
