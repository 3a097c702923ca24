"""
Common test fixtures and utilities for the vCenter client tests.
"""

import base64
import io
import json
import threading
from datetime import datetime, timezone
from urllib.parse import urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from vccli.infrastructure.api_clients.session_api import SESSION_ID_HEADER
from vccli.infrastructure.api_clients.vcenter_client import VCenterClient

BASE_URL = "https://vcenter.example.com"
USERNAME = "administrator@vsphere.local"
PASSWORD = "s3cret!"

SESSION_INFO_BODY = json.dumps({
    "user": USERNAME,
    "created_time": "2024-05-01T10:00:00.000Z",
})


def make_response(request, status_code, body="", headers=None):
    """Build a requests.Response for a prepared request."""
    response = requests.Response()
    response.status_code = status_code
    content = body.encode("utf-8") if isinstance(body, str) else body
    response._content = content
    response._content_consumed = True
    response.raw = io.BytesIO(content)
    response.encoding = "utf-8"
    response.headers = CaseInsensitiveDict(headers or {"Content-Type": "application/json"})
    response.url = request.url
    response.request = request
    return response


class FakeTransport(BaseAdapter):
    """Transport adapter that answers from registered handlers.

    Handlers are keyed by (method, path) and receive the prepared request.
    A handler may return a Response, a (status, body) tuple, or raise.
    Every request is recorded together with the send options and whether
    the client lock was held while it was sent.
    """

    def __init__(self):
        super().__init__()
        self.handlers = {}
        self.calls = []
        self.client = None
        self.closed = False
        self._calls_lock = threading.Lock()

    def on(self, method, path, handler):
        self.handlers[(method.upper(), path)] = handler
        return self

    def calls_to(self, method, path):
        return [c for c in self.calls if c["method"] == method and c["path"] == path]

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        path = urlsplit(request.url).path
        with self._calls_lock:
            self.calls.append({
                "method": request.method,
                "url": request.url,
                "path": path,
                "headers": CaseInsensitiveDict(request.headers),
                "timeout": timeout,
                "stream": stream,
                "lock_held": self.client.lock.locked() if self.client is not None else None,
            })

        handler = self.handlers.get((request.method, path))
        if handler is None:
            return make_response(request, 404, '{"error":"not found"}')

        result = handler(request)
        if isinstance(result, requests.Response):
            return result
        status_code, body = result
        return make_response(request, status_code, body)

    def close(self):
        self.closed = True


class FakeVCenter:
    """Minimal stateful session endpoint backed by a FakeTransport."""

    def __init__(self, transport, username=USERNAME, password=PASSWORD):
        self.transport = transport
        self.username = username
        self.password = password
        self.live_tokens = set()
        self.issued = []
        self.quote_tokens = True
        self._lock = threading.Lock()

        transport.on("GET", "/api/session", self.session_info)
        transport.on("POST", "/api/session", self.create_session)

    def session_info(self, request):
        token = request.headers.get(SESSION_ID_HEADER, "")
        with self._lock:
            live = token in self.live_tokens
        if live:
            return 200, SESSION_INFO_BODY
        return 401, '{"error_type":"UNAUTHENTICATED"}'

    def create_session(self, request):
        expected = base64.b64encode(f"{self.username}:{self.password}".encode()).decode()
        if request.headers.get("authorization") != f"Basic {expected}":
            return 401, '{"error_type":"UNAUTHENTICATED"}'

        with self._lock:
            token = f"token-{len(self.issued) + 1}"
            self.issued.append(token)
            self.live_tokens.add(token)
        return 201, f'"{token}"' if self.quote_tokens else token

    def expire_all(self):
        with self._lock:
            self.live_tokens.clear()


@pytest.fixture
def transport():
    """A fake transport with no handlers registered."""
    return FakeTransport()


@pytest.fixture
def vcenter(transport):
    """A fake vCenter session endpoint plus an echo business endpoint."""
    server = FakeVCenter(transport)
    transport.on("GET", "/api/vcenter/vm", lambda request: (200, '[{"vm":"vm-42"}]'))
    return server


@pytest.fixture
def client(transport):
    """A VCenterClient wired to the fake transport."""
    cli = VCenterClient(BASE_URL, USERNAME, PASSWORD, transport=transport)
    transport.client = cli
    yield cli
    cli.close()


@pytest.fixture
def session_created_time():
    return datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
