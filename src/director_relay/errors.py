"""
Error taxonomy for Director Relay.

Every failure carries the HTTP status the inbound API answers with, so the
API layer can report it without knowing which component raised it.
"""

from typing import Optional


class RelayError(Exception):
    """Base class for all relay failures."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(RelayError):
    """A required input was missing or empty. Raised before any network call."""

    status_code = 400


class AuthenticationError(RelayError):
    """Cloud login was rejected or returned no account token."""

    status_code = 401


class ServerError(RelayError):
    """A cloud call failed or returned a body of the wrong shape."""

    status_code = 500


class TransportError(RelayError):
    """The connection could not be established or was interrupted."""

    status_code = 502

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class RedirectLimitError(TransportError):
    """More redirect hops were requested than the client allows."""


class HTTPStatusError(RelayError):
    """The remote endpoint answered with a status >= 400."""

    status_code = 502

    def __init__(self, status: int, body: str):
        super().__init__(f"HTTP {status}: {body}")
        self.status = status
        self.body = body


class UpstreamGatewayError(RelayError):
    """A director call failed between this relay and the director device."""

    status_code = 502

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class DiscoveryError(RelayError):
    """The discovery socket could not be set up or the search could not be sent."""

    status_code = 500
