"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

SDK Lifecycle Hook Registry.

Provides a centralized registry of lifecycle hooks that extensions
can subscribe to in order to observe and augment request execution
without modifying the request layer.

Available hooks:
- on_initialize: Fired once when the client finishes setup
- on_before_request: Fired before every outbound request
- on_after_response: Fired after every response, success or not
- on_error: Fired on every classified request error
- on_session_invalidated: Fired when an authorization failure clears the session
"""

from __future__ import annotations

from typing import Any, Callable, List

from picado.exceptions import UnauthorizedError
from picado.logging_config import get_logger
from picado.sdk.adapters.base import SDKRequest, SDKResponse

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Hook callback type aliases
# ---------------------------------------------------------------------------

InitializeCallback = Callable[..., None]
BeforeRequestCallback = Callable[[SDKRequest], SDKRequest]
AfterResponseCallback = Callable[[SDKRequest, SDKResponse], None]
ErrorCallback = Callable[[Exception], None]
SessionInvalidatedCallback = Callable[[UnauthorizedError], None]


# ---------------------------------------------------------------------------
# HookRegistry
# ---------------------------------------------------------------------------

class HookRegistry:
    """
    Manages lifecycle hooks for the Picado client.

    Extensions register callbacks via the ``on_*`` methods. The request
    layer fires hooks at the appropriate points. Multiple callbacks per
    hook are supported and executed in registration order. A failing
    callback is logged and reported to ``on_error`` callbacks; it never
    breaks the request that fired it.
    """

    def __init__(self) -> None:
        self._initialize_callbacks: List[InitializeCallback] = []
        self._before_request_callbacks: List[BeforeRequestCallback] = []
        self._after_response_callbacks: List[AfterResponseCallback] = []
        self._error_callbacks: List[ErrorCallback] = []
        self._session_invalidated_callbacks: List[SessionInvalidatedCallback] = []

    # -- Registration methods ------------------------------------------------

    def on_initialize(self, callback: InitializeCallback) -> None:
        """Register a callback fired once when the client finishes setup."""
        self._initialize_callbacks.append(callback)
        logger.debug("Registered on_initialize hook")

    def on_before_request(self, callback: BeforeRequestCallback) -> None:
        """Register a callback fired before every outbound request.

        The callback receives the request and **must** return an
        ``SDKRequest``. Requests are frozen; use ``dataclasses.replace``
        to derive a modified one.
        """
        self._before_request_callbacks.append(callback)
        logger.debug("Registered on_before_request hook")

    def on_after_response(self, callback: AfterResponseCallback) -> None:
        """Register a callback fired after every response."""
        self._after_response_callbacks.append(callback)
        logger.debug("Registered on_after_response hook")

    def on_error(self, callback: ErrorCallback) -> None:
        """Register a callback fired on every request error."""
        self._error_callbacks.append(callback)
        logger.debug("Registered on_error hook")

    def on_session_invalidated(self, callback: SessionInvalidatedCallback) -> None:
        """Register a callback fired when a 401 clears the session."""
        self._session_invalidated_callbacks.append(callback)
        logger.debug("Registered on_session_invalidated hook")

    # -- Firing methods (called by the request layer) ------------------------

    def fire_initialize(self, **kwargs: Any) -> None:
        """Fire all registered on_initialize callbacks."""
        for cb in self._initialize_callbacks:
            try:
                cb(**kwargs)
            except Exception as exc:
                logger.error(f"on_initialize hook error: {exc}", exc_info=True)
                self.fire_error(exc)

    def fire_before_request(self, request: SDKRequest) -> SDKRequest:
        """Fire all on_before_request callbacks in order.

        Each callback receives the request returned by the previous one,
        forming a pipeline.
        """
        current = request
        for cb in self._before_request_callbacks:
            try:
                result = cb(current)
            except Exception as exc:
                logger.error(f"on_before_request hook error: {exc}", exc_info=True)
                self.fire_error(exc)
                continue
            if isinstance(result, SDKRequest):
                current = result
            else:
                logger.warning("on_before_request hook returned no request; ignored")
        return current

    def fire_after_response(self, request: SDKRequest, response: SDKResponse) -> None:
        """Fire all on_after_response callbacks."""
        for cb in self._after_response_callbacks:
            try:
                cb(request, response)
            except Exception as exc:
                logger.error(f"on_after_response hook error: {exc}", exc_info=True)
                self.fire_error(exc)

    def fire_error(self, error: Exception) -> None:
        """Fire all on_error callbacks."""
        for cb in self._error_callbacks:
            try:
                cb(error)
            except Exception:
                # No recursion into fire_error from here
                logger.error("on_error hook itself raised an exception", exc_info=True)

    def fire_session_invalidated(self, error: UnauthorizedError) -> None:
        """Fire all on_session_invalidated callbacks."""
        for cb in self._session_invalidated_callbacks:
            try:
                cb(error)
            except Exception as exc:
                logger.error(f"on_session_invalidated hook error: {exc}", exc_info=True)
                self.fire_error(exc)
