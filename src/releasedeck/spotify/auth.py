"""
OAuth2 client-credentials exchange against the Spotify accounts service.
"""

import base64
import logging
import threading
from typing import Optional

import requests

from .models import AccessToken
from .transport import DEFAULT_TIMEOUT, request_json

logger = logging.getLogger(__name__)

TOKEN_URL = "https://accounts.spotify.com/api/token"


def basic_credential(client_id: str, client_secret: str) -> str:
    """Return ``base64(client_id:client_secret)`` for an HTTP Basic header."""
    raw = f"{client_id}:{client_secret}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


class CredentialExchanger:
    """
    Turns a client id/secret pair into a short-lived bearer token.

    Holds no per-call state; a single instance may be shared across threads.
    """

    def __init__(
        self,
        session: requests.Session,
        token_url: str = TOKEN_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.session = session
        self.token_url = token_url
        self.timeout = timeout

    def exchange_token(
        self,
        cancel_event: Optional[threading.Event],
        client_id: str,
        client_secret: str,
    ) -> AccessToken:
        """
        Perform one client-credentials exchange.

        Args:
            cancel_event: Aborts the request when set
            client_id: Spotify application client id
            client_secret: Spotify application client secret

        Returns:
            AccessToken parsed from the 200 response

        Raises:
            TransportError: Request failed or was cancelled
            StatusError: Token endpoint answered with a non-200 status
            DecodeError: Response body is not a token object
        """
        headers = {
            "Authorization": f"Basic {basic_credential(client_id, client_secret)}",
            "Content-Type": "application/x-www-form-urlencoded",
        }
        data = request_json(
            self.session,
            "POST",
            self.token_url,
            cancel_event=cancel_event,
            timeout=self.timeout,
            headers=headers,
            data={"grant_type": "client_credentials"},
        )
        token = AccessToken.from_dict(data)
        logger.debug(f"Obtained {token.token_type or 'bearer'} token, expires in {token.expires_in}s")
        return token
