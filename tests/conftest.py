"""
Pytest configuration and fixtures
"""

import json

import pytest
import yaml
from unittest.mock import Mock


TOKEN_BODY = {"access_token": "abc", "token_type": "Bearer", "expires_in": 3600}


def album_payload(album_id, name, artists=None, images=None):
    """Build one album object as the browse endpoint returns it."""
    return {
        "id": album_id,
        "name": name,
        "album_type": "album",
        "artists": artists if artists is not None else [
            {"id": f"{album_id}-artist", "name": f"{name} Artist", "type": "artist"}
        ],
        "images": images if images is not None else [
            {"height": 640, "width": 640, "url": f"https://i.scdn.co/{album_id}/640"},
            {"height": 300, "width": 300, "url": f"https://i.scdn.co/{album_id}/300"},
            {"height": 64, "width": 64, "url": f"https://i.scdn.co/{album_id}/64"},
        ],
        "release_date": "2024-03-01",
        "total_tracks": 11,
        "external_urls": {"spotify": f"https://open.spotify.com/album/{album_id}"},
    }


def releases_body(*albums):
    return {
        "albums": {
            "href": "https://api.spotify.com/v1/browse/new-releases",
            "limit": len(albums),
            "offset": 0,
            "total": len(albums),
            "items": list(albums),
        }
    }


def make_response(status_code=200, body=None, raw=None):
    """Mock requests.Response streaming ``body`` as JSON (or ``raw`` bytes)."""
    if raw is None:
        raw = json.dumps(body if body is not None else {}).encode("utf-8")
    response = Mock()
    response.status_code = status_code
    response.iter_content.return_value = [raw[:5], raw[5:]] if len(raw) > 5 else [raw]
    return response


@pytest.fixture
def mock_session():
    """Mock HTTP session; set ``request.side_effect`` / ``return_value`` per test"""
    return Mock()


@pytest.fixture
def spotify_config():
    """Minimal valid Spotify widget configuration"""
    return {
        "type": "spotify",
        "client-id": "my-client",
        "client-secret": "my-secret",
    }


@pytest.fixture
def sample_config(spotify_config):
    """Sample dashboard configuration for testing"""
    return {
        "refresh_interval": 30,
        "widgets": [dict(spotify_config, title="New Releases", country="GB", limit=2)],
    }


@pytest.fixture
def config_file(tmp_path, sample_config):
    """Create a temporary config file"""
    config_path = tmp_path / "test_config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(name="make_response")
def make_response_fixture():
    """Factory for mock responses"""
    return make_response


@pytest.fixture(name="album_payload")
def album_payload_fixture():
    """Factory for album JSON objects"""
    return album_payload


@pytest.fixture(name="releases_body")
def releases_body_fixture():
    """Factory for new releases envelopes"""
    return releases_body


@pytest.fixture
def token_body():
    """Successful token endpoint body"""
    return dict(TOKEN_BODY)
