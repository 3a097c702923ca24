"""
Authentication adapter for the vCenter REST API.

SessionAuthAdapter wraps a transport adapter and makes sure every outgoing
request carries a live session token. The token is validated against the
session endpoint under the client's lock and recreated from the client's
credentials when the API reports it is no longer authenticated.
"""

import logging
from typing import Optional

from requests.adapters import BaseAdapter, HTTPAdapter

from vccli.exceptions import (
    NotAuthenticatedError,
    SessionCreateError,
    SessionInfoError,
    VCenterClientError,
)
from vccli.infrastructure.api_clients.session_api import (
    SESSION_ID_HEADER,
    create_session_key,
    get_session_info,
)
from vccli.utils.logging import LogMetrics, get_logger, log_with_context, mask_token

logger = get_logger(__name__)


class SessionAuthAdapter(BaseAdapter):
    """Transport adapter that attaches a valid session token to each request.

    The lock is held while the token is validated, recreated and read. It is
    released before the caller's request is sent, so requests that already
    carry a token proceed in parallel.
    """

    def __init__(self, client, transport: Optional[BaseAdapter] = None):
        """Initialize the adapter.

        Args:
            client: The VCenterClient owning the token, lock and credentials.
            transport: Adapter that actually sends requests. A plain
                HTTPAdapter is used when omitted.
        """
        super().__init__()
        self.client = client
        self.transport = transport or HTTPAdapter()

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        send_kwargs = {
            "timeout": timeout,
            "verify": verify,
            "cert": cert,
            "proxies": proxies,
        }

        with self.client.lock:
            token = self._ensure_session(**send_kwargs)
            request.headers[SESSION_ID_HEADER] = token

        return self.transport.send(request, stream=stream, **send_kwargs)

    def close(self):
        self.transport.close()

    def _ensure_session(self, **send_kwargs) -> str:
        """Return a live token, creating a new session if needed.

        Must be called with ``client.lock`` held.
        """
        client = self.client

        try:
            get_session_info(self.transport, client.base_url, client.token, **send_kwargs)
            return client.token
        except NotAuthenticatedError:
            log_with_context(
                logger,
                logging.DEBUG,
                "Session is not authenticated, creating a new one",
                token=mask_token(client.token),
            )
        except VCenterClientError as e:
            log_with_context(logger, logging.ERROR, "Session validation failed", error=str(e))
            raise SessionInfoError(f"can't get session info: {e}", cause=e) from e

        try:
            with LogMetrics(logger, "session creation", base_url=client.base_url):
                token = create_session_key(
                    self.transport,
                    client.base_url,
                    client.basic_auth_value(),
                    **send_kwargs,
                )
        except VCenterClientError as e:
            raise SessionCreateError(f"can't create session: {e}", cause=e) from e

        log_with_context(logger, logging.INFO, "new session created", token=mask_token(token))
        client.token = token
        return token
