"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

SDK Auth Operations.

Credential flows go out without an Authorization header and try the
``/api/``-prefixed route before the legacy one.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from picado.exceptions import RequestError
from picado.logging_config import get_logger
from picado.sdk.executor import RequestExecutor
from picado.sdk.fallback import EndpointAttempt, FallbackChain
from picado.sdk.session import SessionStore

logger = get_logger(__name__)

LOGIN_ROUTES = ("/api/auth/login", "/auth/login")
REGISTER_ROUTES = ("/api/auth/register", "/auth/register")
PASSWORD_RESET_ROUTES = ("/api/auth/forgot-password", "/auth/forgot-password")


@dataclass
class RegistrationResult:
    """Identity issued by registration, plus the route that served it."""
    token: Optional[str]
    endpoint: str
    data: Dict[str, Any] = field(default_factory=dict)


def _extract_token(data: Any, path: str) -> str:
    token = data.get("token") if isinstance(data, dict) else None
    if not isinstance(token, str) or not token:
        raise RequestError(f"POST {path} returned no token", status=200, method="POST", path=path)
    return token


class AuthOperations:
    """Login, registration, password reset and logout."""

    def __init__(self, executor: RequestExecutor, store: SessionStore) -> None:
        self._executor = executor
        self._store = store

    @property
    def is_authenticated(self) -> bool:
        return self._store.has_session

    async def login(
        self, email: str, password: str, signal: Optional[asyncio.Event] = None
    ) -> str:
        """Authenticate and persist the issued token.

        Returns:
            The bearer token.
        """
        payload = {"email": email, "password": password}
        chain = FallbackChain(
            [
                EndpointAttempt.of(self._executor.post_no_auth, route, payload, signal=signal)
                for route in LOGIN_ROUTES
            ],
            name="login",
        )
        data, endpoint = await chain.run_with_label()
        token = _extract_token(data, endpoint)
        self._store.set(token)
        logger.info(f"Logged in via {endpoint}")
        return token

    async def register(
        self, email: str, password: str, signal: Optional[asyncio.Event] = None
    ) -> RegistrationResult:
        """Create an account. The session is not touched."""
        payload = {"email": email, "password": password}
        chain = FallbackChain(
            [
                EndpointAttempt.of(self._executor.post_no_auth, route, payload, signal=signal)
                for route in REGISTER_ROUTES
            ],
            name="register",
        )
        data, endpoint = await chain.run_with_label()
        data = data if isinstance(data, dict) else {}
        logger.info(f"Registered account via {endpoint}")
        return RegistrationResult(token=data.get("token"), endpoint=endpoint, data=data)

    async def request_password_reset(
        self, email: str, signal: Optional[asyncio.Event] = None
    ) -> Any:
        """Ask the backend to send a password reset message."""
        chain = FallbackChain(
            [
                EndpointAttempt.of(
                    self._executor.post_no_auth, route, {"email": email}, signal=signal
                )
                for route in PASSWORD_RESET_ROUTES
            ],
            name="password_reset",
        )
        return await chain.run()

    def logout(self) -> None:
        """Destroy the local session."""
        self._store.clear()
        logger.info("Logged out")
