"""
Session endpoint calls for the vCenter REST API.

This module checks whether a session token is still live and exchanges basic
credentials for a new token. Both calls are sent through a transport adapter
supplied by the caller, so they never pass through the authentication adapter.
"""

import json
from datetime import datetime
from typing import Optional

import requests
from pydantic import BaseModel, ValidationError
from requests.adapters import BaseAdapter

from vccli.exceptions import (
    NotAuthenticatedError,
    SessionProtocolError,
    SessionTimeoutError,
    SessionTransportError,
)
from vccli.utils.logging import get_logger, log_with_context, mask_token

logger = get_logger(__name__)

SESSION_ID_HEADER = "vmware-api-session-id"
SESSION_PATH = "/api/session"


class SessionInfo(BaseModel):
    """Owner and creation time of a live session."""
    user: str
    created_time: datetime


def join_url(base_url: str, *parts: str) -> str:
    """Append path segments to a base URL, keeping any path prefix it has.

    >>> join_url("https://vc.example.com/prefix/", "/api/session")
    'https://vc.example.com/prefix/api/session'
    """
    url = base_url.rstrip("/")
    for part in parts:
        part = part.strip("/")
        if part:
            url = f"{url}/{part}"
    return url


def _send(transport: BaseAdapter, request: requests.Request, **send_kwargs) -> requests.Response:
    """Prepare and send a session request, mapping failures onto our errors."""
    send_kwargs["stream"] = False
    try:
        request = request.prepare()
        return transport.send(request, **send_kwargs)
    except requests.Timeout as e:
        raise SessionTimeoutError(f"{request.method} {request.url} timed out: {e}") from e
    except requests.RequestException as e:
        raise SessionTransportError(f"{request.method} {request.url} failed: {e}") from e


def _unexpected_response(response: requests.Response) -> SessionProtocolError:
    """Build the error for a status the endpoint should not have returned."""
    body = response.text
    try:
        json.loads(body)
    except ValueError:
        return SessionProtocolError(
            f"can't decode body of unsuccessful response with status code {response.status_code}",
            status_code=response.status_code,
            body=body,
        )
    return SessionProtocolError(
        f"incorrect response, status {response.status_code}, body {body}",
        status_code=response.status_code,
        body=body,
    )


def get_session_info(
    transport: BaseAdapter,
    base_url: str,
    token: Optional[str],
    **send_kwargs,
) -> SessionInfo:
    """Ask the API who owns a session token.

    Args:
        transport: Adapter used to send the request.
        base_url: vCenter base URL.
        token: Session token to check, may be empty.
        **send_kwargs: Options forwarded to ``transport.send`` (timeout, verify, ...).

    Returns:
        SessionInfo for the live session.

    Raises:
        NotAuthenticatedError: If the token is absent, expired or unknown.
        SessionProtocolError: On any other status or an undecodable body.
        SessionTransportError: If the request could not be delivered.
    """
    request = requests.Request(
        "GET",
        join_url(base_url, SESSION_PATH),
        headers={SESSION_ID_HEADER: token or ""},
    )

    response = _send(transport, request, **send_kwargs)
    try:
        if response.status_code == 200:
            try:
                info = SessionInfo.model_validate_json(response.content)
            except ValidationError as e:
                raise SessionProtocolError(
                    f"can't decode response body: {e}",
                    status_code=response.status_code,
                    body=response.text,
                ) from e
            log_with_context(logger, "debug", "Session is valid", user=info.user, token=mask_token(token))
            return info

        if response.status_code == 401:
            raise NotAuthenticatedError()

        raise _unexpected_response(response)
    finally:
        response.close()


def create_session_key(
    transport: BaseAdapter,
    base_url: str,
    basic_auth_value: str,
    **send_kwargs,
) -> str:
    """Exchange basic credentials for a new session token.

    Args:
        transport: Adapter used to send the request.
        base_url: vCenter base URL.
        basic_auth_value: base64 of ``username:password``.
        **send_kwargs: Options forwarded to ``transport.send`` (timeout, verify, ...).

    Returns:
        The new session token, without surrounding quotes.

    Raises:
        SessionProtocolError: If the API does not answer 201 Created.
        SessionTransportError: If the request could not be delivered.
    """
    request = requests.Request(
        "POST",
        join_url(base_url, SESSION_PATH),
        headers={
            "authorization": f"Basic {basic_auth_value}",
            "Content-type": "application/json",
        },
    )

    response = _send(transport, request, **send_kwargs)
    try:
        if response.status_code != 201:
            raise _unexpected_response(response)

        try:
            token = response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SessionProtocolError(
                f"can't decode session token: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

        # The API answers with a JSON string literal; only the quotes matter
        return token.strip('"')
    finally:
        response.close()
