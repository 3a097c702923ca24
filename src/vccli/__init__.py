"""
vCenter session client package.

This package provides a requests-based client for the vCenter REST API that
creates and refreshes its session token transparently.
"""

# Package version
__version__ = "0.1.0"

from vccli.exceptions import (
    AuthenticationError,
    NotAuthenticatedError,
    SessionCreateError,
    SessionInfoError,
    SessionProtocolError,
    SessionTimeoutError,
    SessionTransportError,
    VCenterClientError,
)
from vccli.infrastructure.api_clients import (
    SESSION_ID_HEADER,
    SessionAuthAdapter,
    SessionInfo,
    VCenterClient,
    create_session_key,
    create_vcenter_client,
    get_session_info,
)
from vccli.utils.config import ClientConfig, get_config
from vccli.utils.logging import configure_logging, get_logger, log_with_context

__all__ = [
    "__version__",
    # Client
    "VCenterClient",
    "create_vcenter_client",
    "SessionAuthAdapter",
    "SESSION_ID_HEADER",
    # Session endpoint
    "SessionInfo",
    "get_session_info",
    "create_session_key",
    # Errors
    "VCenterClientError",
    "NotAuthenticatedError",
    "SessionProtocolError",
    "SessionTransportError",
    "SessionTimeoutError",
    "AuthenticationError",
    "SessionInfoError",
    "SessionCreateError",
    # Configuration
    "ClientConfig",
    "get_config",
    # Logging
    "configure_logging",
    "get_logger",
    "log_with_context",
]
