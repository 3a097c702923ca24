"""
vCenter client module.

VCenterClient is a requests.Session whose http:// and https:// traffic goes
through SessionAuthAdapter, so callers issue ordinary requests and never log
in or out themselves.
"""

import base64
import threading
from typing import Optional
from urllib.parse import urlsplit

import requests
from requests.adapters import BaseAdapter, HTTPAdapter

from vccli.infrastructure.api_clients.auth_adapter import SessionAuthAdapter
from vccli.infrastructure.api_clients.session_api import join_url
from vccli.utils.config import ClientConfig, get_config
from vccli.utils.logging import configure_logging, get_logger, log_with_context

logger = get_logger(__name__)


class VCenterClient(requests.Session):
    """Authenticated session against one vCenter endpoint."""

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        transport: Optional[BaseAdapter] = None,
        timeout: Optional[float] = None,
        verify: bool = True,
    ):
        """Initialize a new vCenter client.

        Args:
            base_url: Base URL of the vCenter API.
            username: Account used to create sessions.
            password: Password for the account.
            transport: Adapter that sends requests on the wire. Defaults to
                a plain HTTPAdapter; tests pass a fake here.
            timeout: Default request timeout in seconds.
            verify: Whether to verify TLS certificates.

        Raises:
            ValueError: If base_url is not an absolute http(s) URL.
        """
        super().__init__()

        parts = urlsplit(base_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"invalid base URL: {base_url!r}")

        self.base_url = base_url.rstrip("/")
        self._username = username
        self._password = password
        self.token = ""
        self.lock = threading.Lock()
        self.timeout = timeout
        self.verify = verify

        self.auth_adapter = SessionAuthAdapter(self, transport)
        self.mount("https://", self.auth_adapter)
        self.mount("http://", self.auth_adapter)

        log_with_context(logger, "info", "Initialized vCenter client", base_url=self.base_url)

    def basic_auth_value(self) -> str:
        """Return base64 of ``username:password`` for the authorization header."""
        credentials = f"{self._username}:{self._password}"
        return base64.b64encode(credentials.encode("utf-8")).decode("ascii")

    def api_url(self, path: str) -> str:
        """Join an API path onto the base URL."""
        return join_url(self.base_url, path)

    def request(self, method, url, *args, **kwargs):
        if not urlsplit(url).scheme:
            url = self.api_url(url)
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().request(method, url, *args, **kwargs)

    def __repr__(self):
        return f"<VCenterClient {self.base_url}>"


def create_vcenter_client(config: Optional[ClientConfig] = None) -> VCenterClient:
    """Create a vCenter client from configuration.

    Args:
        config: Client settings, loaded with get_config() when omitted. Its
            log_level is applied through configure_logging().

    Returns:
        Configured VCenterClient instance.
    """
    config = config or get_config()
    configure_logging(config.log_level)

    transport = HTTPAdapter(pool_maxsize=config.pool_maxsize)
    return VCenterClient(
        config.base_url,
        config.username,
        config.password.get_secret_value(),
        transport=transport,
        timeout=config.timeout_seconds,
        verify=config.verify_ssl,
    )
