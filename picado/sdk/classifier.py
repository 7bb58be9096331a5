"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

Error classification.

Converts non-success responses and transport failures into
:class:`~picado.exceptions.RequestError` values carrying the numeric
status and a human-readable message.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Optional

from picado.exceptions import RequestError, request_error_for

if TYPE_CHECKING:
    from picado.sdk.adapters.base import SDKResponse

CANCELLED_MESSAGE = "Request cancelled"


def parse_json_safe(response: SDKResponse) -> Optional[Any]:
    """Parse the response body as JSON, or return ``None`` if it isn't."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _body_message(data: Any) -> Optional[str]:
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


def classify_response(method: str, path: str, response: SDKResponse) -> RequestError:
    """Classify a non-success response."""
    message = _body_message(parse_json_safe(response))
    if message is None:
        message = f"{method} {path} failed ({response.status_code})"
    return request_error_for(response.status_code, message, method=method, path=path)


def classify_transport_error(
    method: str, path: str, exc: Optional[BaseException] = None
) -> RequestError:
    """Classify a failure where no response was received (status 0)."""
    if exc is None or isinstance(exc, asyncio.CancelledError):
        message = CANCELLED_MESSAGE
    else:
        message = str(exc) or type(exc).__name__
    return request_error_for(0, message, method=method, path=path)
