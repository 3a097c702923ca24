"""
API client modules for the vCenter REST API.

This package contains the session endpoint calls, the authentication adapter
and the client that ties them together.
"""

from vccli.infrastructure.api_clients.auth_adapter import SessionAuthAdapter
from vccli.infrastructure.api_clients.session_api import (
    SESSION_ID_HEADER,
    SessionInfo,
    create_session_key,
    get_session_info,
)
from vccli.infrastructure.api_clients.vcenter_client import (
    VCenterClient,
    create_vcenter_client,
)

__all__ = [
    "SESSION_ID_HEADER",
    "SessionAuthAdapter",
    "SessionInfo",
    "VCenterClient",
    "create_session_key",
    "create_vcenter_client",
    "get_session_info",
]
