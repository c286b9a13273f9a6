import gzip
import threading
import time
import uuid

import pytest
import requests

FIXED_ID = uuid.UUID("00000000-0000-0000-0000-000000000000")


class FakeResponse:
    """Minimal stand-in for a streamed requests.Response."""

    def __init__(self, body: bytes = b"", status_code: int = 200):
        self.body = body
        self.status_code = status_code
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.body), chunk_size):
            yield self.body[i:i + chunk_size]

    def close(self):
        self.closed = True


class FakeSession:
    """
    Thread-safe stand-in for requests.Session serving canned bodies by URL.
    Route values: bytes -> 200 with that body, int -> that status code, Exception -> raised.
    Unknown URLs raise ConnectionError, like an unresolvable host.
    """

    def __init__(self, routes=None, delay: float = 0.0):
        self.routes = dict(routes or {})
        self.delay = delay
        self.headers = {}
        self.calls = []
        self.closed = False
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def get(self, url, **kwargs):
        with self._lock:
            self.calls.append(url)
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                time.sleep(self.delay)
            route = self.routes.get(url)
            if route is None:
                raise requests.exceptions.ConnectionError(f"Failed to resolve host for {url}")
            if isinstance(route, Exception):
                raise route
            if isinstance(route, int):
                return FakeResponse(b"", status_code=route)
            return FakeResponse(route)
        finally:
            with self._lock:
                self.active -= 1

    def close(self):
        self.closed = True


@pytest.fixture
def fixed_id():
    return FIXED_ID


@pytest.fixture
def make_session():
    """Factory for FakeSession instances."""
    def _make(routes=None, delay=0.0):
        return FakeSession(routes, delay)
    return _make


@pytest.fixture
def gz():
    """gzip-compresses a str or bytes payload."""
    def _gz(content):
        if isinstance(content, str):
            content = content.encode()
        return gzip.compress(content)
    return _gz
