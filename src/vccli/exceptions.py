"""
Exception hierarchy for the vCenter session client.

Everything raised by this package derives from VCenterClientError. The
NotAuthenticatedError sentinel is consumed by the authentication adapter and
never reaches callers of the client.
"""

from typing import Optional


class VCenterClientError(Exception):
    """Base class for all errors raised by vccli."""


class NotAuthenticatedError(VCenterClientError):
    """The session endpoint reported that the token designates no live session."""

    def __init__(self, message: str = "unauthorized"):
        super().__init__(message)


class SessionProtocolError(VCenterClientError):
    """Unexpected status or undecodable body from a session endpoint.

    Attributes:
        status_code: HTTP status code of the response.
        body: Raw response body, kept for diagnostics.
    """

    def __init__(self, message: str, status_code: int, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class SessionTransportError(VCenterClientError):
    """The underlying transport failed to deliver a session request."""


class SessionTimeoutError(SessionTransportError):
    """A session request was aborted by its deadline."""


class AuthenticationError(VCenterClientError):
    """Authenticating an outgoing request failed.

    The original error is chained as ``__cause__`` and kept on ``cause``.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class SessionInfoError(AuthenticationError):
    """Session validation failed for a reason other than an expired session."""


class SessionCreateError(AuthenticationError):
    """A new session could not be created."""
