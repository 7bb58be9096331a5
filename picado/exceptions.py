"""
Exception hierarchy for the Picado client.

All custom exceptions inherit from PicadoError base class.
"""

from typing import Optional


class PicadoError(Exception):
    """Base exception for all Picado client errors."""
    pass


# Configuration Errors
class ConfigurationError(PicadoError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass


# Session Errors
class SessionError(PicadoError):
    """Raised when the session store cannot be read or written."""
    pass


# Request Errors
class RequestError(PicadoError):
    """
    Classified failure of a single request.

    ``status`` is the HTTP status of the response, or 0 when no response
    was received (network unreachable, cancelled).
    """

    def __init__(
        self,
        message: str,
        status: int = 0,
        method: Optional[str] = None,
        path: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.method = method
        self.path = path

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, message={self.message!r})"


class RouteNotFoundError(RequestError):
    """Raised on 404. The only kind a fallback chain may continue past."""
    pass


class UnauthorizedError(RequestError):
    """Raised on 401."""
    pass


class ServerOrClientError(RequestError):
    """Raised on any other 4xx/5xx status."""
    pass


class TransportError(RequestError):
    """Raised when no response was received (status 0)."""
    pass


class FallbackExhaustedError(RequestError):
    """Raised when a fallback chain ends without recording any error."""
    pass


def request_error_for(
    status: int,
    message: str,
    method: Optional[str] = None,
    path: Optional[str] = None,
) -> RequestError:
    """
    Build the RequestError subclass matching a status code.

    Args:
        status: HTTP status, or 0 for transport failures
        message: Human-readable message
        method: HTTP method of the failed request
        path: Relative path of the failed request

    Returns:
        Classified RequestError instance
    """
    if status == 0:
        cls = TransportError
    elif status == 401:
        cls = UnauthorizedError
    elif status == 404:
        cls = RouteNotFoundError
    else:
        cls = ServerOrClientError
    return cls(message, status=status, method=method, path=path)
