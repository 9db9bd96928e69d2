"""
Shared request helper for the Spotify calls.

The outbound ``requests.Session`` is injected by the caller and never
mutated here, so one session can serve every widget concurrently.
"""

import json
import logging
import threading
from typing import Any, Optional

import requests

from ..utils.errors import DecodeError, RequestCancelled, StatusError, TransportError

logger = logging.getLogger(__name__)

# Body chunk size; the cancel event is polled between chunks
CHUNK_SIZE = 16 * 1024

DEFAULT_TIMEOUT = 10.0

# How often a pending request checks the cancel event
CANCEL_POLL_INTERVAL = 0.05


def _check_cancelled(cancel_event: Optional[threading.Event], what: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise RequestCancelled(f"{what} cancelled")


class _PendingRequest:
    """
    Runs ``session.request`` on a worker thread so the caller can stop
    waiting as soon as the cancel event fires.

    An abandoned request keeps running until the session's timeout; its
    response is closed by the worker when it finally arrives.
    """

    def __init__(self, session: requests.Session, method: str, url: str, **kwargs: Any):
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._abandoned = False
        self._response = None
        self._error: Optional[BaseException] = None
        self._thread = threading.Thread(
            target=self._run,
            args=(session, method, url),
            kwargs=kwargs,
            name=f"request {method} {url}",
            daemon=True,
        )

    def _run(self, session: requests.Session, method: str, url: str, **kwargs: Any) -> None:
        try:
            response = session.request(method, url, **kwargs)
        except Exception as e:
            self._error = e
            self._done.set()
            return

        with self._lock:
            abandoned = self._abandoned
            self._response = response
        if abandoned:
            response.close()
        self._done.set()

    def wait(self, cancel_event: threading.Event, what: str) -> Any:
        """Return the response, or raise RequestCancelled once the event fires."""
        self._thread.start()
        while not self._done.wait(CANCEL_POLL_INTERVAL):
            if cancel_event.is_set():
                with self._lock:
                    self._abandoned = True
                    response = self._response
                if response is not None:
                    response.close()
                raise RequestCancelled(f"{what} cancelled")

        if self._error is not None:
            raise self._error
        return self._response


def _send(
    session: requests.Session,
    method: str,
    url: str,
    cancel_event: Optional[threading.Event],
    what: str,
    **kwargs: Any,
) -> Any:
    if cancel_event is None:
        return session.request(method, url, **kwargs)
    return _PendingRequest(session, method, url, **kwargs).wait(cancel_event, what)


def request_json(
    session: requests.Session,
    method: str,
    url: str,
    *,
    cancel_event: Optional[threading.Event] = None,
    timeout: float = DEFAULT_TIMEOUT,
    **kwargs: Any,
) -> Any:
    """
    Send a request and decode the JSON body of a 200 response.

    Args:
        session: Shared HTTP session
        method: HTTP method
        url: Target URL
        cancel_event: Aborts the request when set; waiting for the response
            stops within CANCEL_POLL_INTERVAL, a stalled body read within ``timeout``
        timeout: Connect/read timeout in seconds
        **kwargs: Passed through to ``session.request`` (headers, data, params)

    Returns:
        Decoded JSON value

    Raises:
        TransportError: Request could not be sent or the connection failed
        RequestCancelled: ``cancel_event`` fired
        StatusError: Status was anything but 200
        DecodeError: Body is not valid JSON
    """
    what = f"{method} {url}"
    _check_cancelled(cancel_event, what)

    try:
        response = _send(
            session, method, url, cancel_event, what, timeout=timeout, stream=True, **kwargs
        )
    except requests.RequestException as e:
        raise TransportError(f"{what} failed: {e}") from e

    try:
        _check_cancelled(cancel_event, what)

        if response.status_code != 200:
            logger.debug(f"{what} returned status {response.status_code}")
            raise StatusError(response.status_code)

        chunks = []
        try:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                _check_cancelled(cancel_event, what)
                chunks.append(chunk)
        except requests.RequestException as e:
            raise TransportError(f"{what} failed while reading body: {e}") from e
    finally:
        response.close()

    try:
        return json.loads(b"".join(chunks))
    except ValueError as e:
        raise DecodeError(f"invalid JSON from {what}: {e}") from e
