"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

Session storage, navigation and the session guard.

The session is a single bearer token. Its presence is the only
authentication signal; there is no expiry tracking here. The guard reacts
to authorization failures by clearing the token and sending the caller to
the public entry point, unless the caller is already on a public screen.
"""

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable, List, NoReturn, Optional

from picado.exceptions import SessionError, UnauthorizedError
from picado.logging_config import get_logger, log_session_invalidated

if TYPE_CHECKING:
    from picado.sdk.hooks import HookRegistry

logger = get_logger(__name__)

DEFAULT_PUBLIC_PATHS = ("/login", "/register", "/forgot")
DEFAULT_ENTRY_POINT = "/login"


# ---------------------------------------------------------------------------
# Session stores
# ---------------------------------------------------------------------------

class SessionStore(ABC):
    """Single-value cell holding the current bearer token."""

    @abstractmethod
    def get(self) -> Optional[str]:
        """Return the current token, or ``None`` when there is no session."""
        ...

    @abstractmethod
    def set(self, token: str) -> None:
        """Replace the current token."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Destroy the current session."""
        ...

    @property
    def has_session(self) -> bool:
        return bool(self.get())


class MemorySessionStore(SessionStore):
    """Process-local store, for tests and embedding."""

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token or None

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileSessionStore(SessionStore):
    """Durable store keeping ``{"token": "..."}`` in a JSON file.

    The file is read on every :meth:`get` so that a login or logout from
    another process is picked up.

    Args:
        path: Location of the session file.
    """

    def __init__(self, path: str) -> None:
        self.path = Path(os.path.expanduser(path))

    def get(self) -> Optional[str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise SessionError(f"Failed to read session file '{self.path}': {e}") from e

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning(f"Ignoring malformed session file {self.path}")
            return None
        token = data.get("token") if isinstance(data, dict) else None
        return token if isinstance(token, str) and token else None

    def set(self, token: str) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump({"token": token}, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise SessionError(f"Failed to write session file '{self.path}': {e}") from e
        logger.debug(f"Session stored at {self.path}")

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise SessionError(f"Failed to remove session file '{self.path}': {e}") from e
        logger.debug(f"Session removed from {self.path}")


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------

class Navigator(ABC):
    """Where the caller currently is, and how to send it elsewhere."""

    @abstractmethod
    def current_location(self) -> Optional[str]:
        ...

    @abstractmethod
    def navigate(self, destination: str) -> None:
        ...


class NullNavigator(Navigator):
    """Navigator for headless use: no location, navigation is a no-op."""

    def current_location(self) -> Optional[str]:
        return None

    def navigate(self, destination: str) -> None:
        logger.debug(f"Navigation to {destination} ignored (headless)")


class CallbackNavigator(Navigator):
    """Adapts two callables to the :class:`Navigator` interface."""

    def __init__(
        self,
        navigate: Callable[[str], None],
        current_location: Optional[Callable[[], Optional[str]]] = None,
    ) -> None:
        self._navigate = navigate
        self._current_location = current_location

    def current_location(self) -> Optional[str]:
        if self._current_location is None:
            return None
        return self._current_location()

    def navigate(self, destination: str) -> None:
        self._navigate(destination)


class RecordingNavigator(Navigator):
    """Test double that records navigations instead of performing them."""

    def __init__(self, location: Optional[str] = None) -> None:
        self.location = location
        self.navigations: List[str] = []

    def current_location(self) -> Optional[str]:
        return self.location

    def navigate(self, destination: str) -> None:
        self.navigations.append(destination)
        self.location = destination


# ---------------------------------------------------------------------------
# Session guard
# ---------------------------------------------------------------------------

class SessionGuard:
    """Invalidates the session on authorization failure.

    Args:
        store: Session store holding the token.
        navigator: Navigation capability.
        public_paths: Destinations reachable without a session.
        entry_point: Where to send the caller after invalidation.
        hooks: Optional hook registry notified on invalidation.
    """

    def __init__(
        self,
        store: SessionStore,
        navigator: Optional[Navigator] = None,
        public_paths: Iterable[str] = DEFAULT_PUBLIC_PATHS,
        entry_point: str = DEFAULT_ENTRY_POINT,
        hooks: Optional[HookRegistry] = None,
    ) -> None:
        self.store = store
        self.navigator = navigator or NullNavigator()
        self.public_paths = frozenset(public_paths)
        self.entry_point = entry_point
        self.hooks = hooks

    def is_public(self, location: Optional[str]) -> bool:
        return location is not None and location in self.public_paths

    def handle_unauthorized(self, error: UnauthorizedError) -> NoReturn:
        """Clear the session, redirect unless on a public screen, re-raise."""
        self.store.clear()

        location = self.navigator.current_location()
        redirect = not self.is_public(location)
        if redirect:
            self.navigator.navigate(self.entry_point)

        log_session_invalidated(
            logger, path=error.path or "", location=location, redirected=redirect
        )
        if self.hooks is not None:
            self.hooks.fire_session_invalidated(error)
        raise error
