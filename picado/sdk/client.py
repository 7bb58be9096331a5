"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

Picado SDK Client & Builder.

Provides two entry points to initialize the SDK:
    - ``PicadoClient(base_url=...)``: quick start with sensible defaults
    - ``PicadoBuilder().set_base_url(...).use(...).build()``: advanced config
"""

from __future__ import annotations

from typing import List, Optional

from picado.config.settings import PicadoConfig, resolve_base_url
from picado.exceptions import ConfigurationError
from picado.logging_config import get_logger
from picado.sdk.adapters.base import BaseAdapter
from picado.sdk.adapters.http import HttpAdapter
from picado.sdk.auth import AuthOperations
from picado.sdk.executor import RequestExecutor
from picado.sdk.extensions import PicadoExtension
from picado.sdk.groups import GroupOperations
from picado.sdk.hooks import HookRegistry
from picado.sdk.matches import MatchOperations
from picado.sdk.players import PlayerOperations
from picado.sdk.session import (
    DEFAULT_ENTRY_POINT,
    DEFAULT_PUBLIC_PATHS,
    FileSessionStore,
    MemorySessionStore,
    Navigator,
    SessionGuard,
    SessionStore,
)
from picado.sdk.urls import UrlResolver

logger = get_logger(__name__)


def session_store_from_config(config: PicadoConfig) -> SessionStore:
    """Create the session store selected by configuration."""
    if config.session.store == "memory":
        return MemorySessionStore()
    if config.session.store == "file":
        return FileSessionStore(config.session.path)
    raise ConfigurationError(f"Unknown session store '{config.session.store}'")


class PicadoClient:
    """SDK client for the Picado backend.

    Quick start::

        async with PicadoClient(base_url="https://picado.example/api") as client:
            await client.auth.login("ana@example.com", "secret")
            groups = await client.groups.list()

    Args:
        base_url: Backend base address. Defaults to the ``PICADO_API_URL``
            environment variable (or legacy ``PICADO_API_BASE_URL``).
        adapter: Optional custom transport adapter.
        session_store: Token store. Defaults to an in-memory store.
        navigator: Navigation capability used by the session guard.
        public_paths: Destinations that never trigger a redirect on 401.
        entry_point: Destination the session guard redirects to.
        timeout: Transport timeout in seconds for the default adapter.
        debug_url_normalization: Log duplicated ``/api`` prefix corrections.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        adapter: Optional[BaseAdapter] = None,
        session_store: Optional[SessionStore] = None,
        navigator: Optional[Navigator] = None,
        public_paths: Optional[List[str]] = None,
        entry_point: str = DEFAULT_ENTRY_POINT,
        timeout: float = 30,
        debug_url_normalization: bool = False,
    ) -> None:
        self.base_url = resolve_base_url() if base_url is None else base_url.strip().rstrip("/")

        self._hooks = HookRegistry()
        self._adapter = adapter or HttpAdapter(timeout=timeout)
        self._store = session_store or MemorySessionStore()
        self._guard = SessionGuard(
            store=self._store,
            navigator=navigator,
            public_paths=public_paths or DEFAULT_PUBLIC_PATHS,
            entry_point=entry_point,
            hooks=self._hooks,
        )
        self._executor = RequestExecutor(
            adapter=self._adapter,
            resolver=UrlResolver(self.base_url, debug=debug_url_normalization),
            store=self._store,
            guard=self._guard,
            hooks=self._hooks,
        )

        self.auth = AuthOperations(self._executor, self._store)
        self.groups = GroupOperations(self._executor)
        self.players = PlayerOperations(self._executor)
        self.matches = MatchOperations(self._executor)

        self._extensions: List[PicadoExtension] = []
        logger.info(f"PicadoClient initialized (base_url={self.base_url or '<same-origin>'})")

    @classmethod
    def from_config(
        cls,
        config: PicadoConfig,
        adapter: Optional[BaseAdapter] = None,
        navigator: Optional[Navigator] = None,
    ) -> PicadoClient:
        """Build a client from loaded configuration."""
        return cls(
            base_url=config.api.base_url,
            adapter=adapter,
            session_store=session_store_from_config(config),
            navigator=navigator,
            public_paths=list(config.navigation.public_paths),
            entry_point=config.navigation.entry_point,
            timeout=config.api.timeout,
            debug_url_normalization=config.api.debug_url_normalization,
        )

    # -- Extension registration --------------------------------------------

    def use(self, extension: PicadoExtension) -> PicadoClient:
        """Register an extension plugin.

        Returns:
            ``self`` for method chaining.
        """
        extension.install(self._hooks)
        self._extensions.append(extension)
        logger.info(f"Extension installed: {extension.name} v{extension.version}")
        return self

    # -- Accessors ---------------------------------------------------------

    @property
    def hooks(self) -> HookRegistry:
        return self._hooks

    @property
    def executor(self) -> RequestExecutor:
        """Low-level request executor, for endpoints without a typed operation."""
        return self._executor

    @property
    def session_store(self) -> SessionStore:
        return self._store

    # -- Lifecycle ---------------------------------------------------------

    async def aclose(self) -> None:
        """Release all resources."""
        await self._adapter.aclose()
        logger.info("PicadoClient closed")

    async def __aenter__(self) -> PicadoClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


# ---------------------------------------------------------------------------
# PicadoBuilder (advanced initialization)
# ---------------------------------------------------------------------------

class PicadoBuilder:
    """Fluent builder for advanced PicadoClient configuration.

    Example::

        client = (
            PicadoBuilder()
            .set_base_url("https://picado.example/api")
            .set_session_store(FileSessionStore("~/.picado/session.json"))
            .use(UserAgentExtension())
            .build()
        )
    """

    def __init__(self) -> None:
        self._base_url: Optional[str] = None
        self._adapter: Optional[BaseAdapter] = None
        self._store: Optional[SessionStore] = None
        self._navigator: Optional[Navigator] = None
        self._extensions: List[PicadoExtension] = []

    def set_base_url(self, url: str) -> PicadoBuilder:
        """Set the backend base address."""
        self._base_url = url
        return self

    def set_transport(self, adapter: BaseAdapter) -> PicadoBuilder:
        """Override the default HTTP adapter with a custom transport."""
        self._adapter = adapter
        return self

    def set_session_store(self, store: SessionStore) -> PicadoBuilder:
        self._store = store
        return self

    def set_navigator(self, navigator: Navigator) -> PicadoBuilder:
        self._navigator = navigator
        return self

    def use(self, extension: PicadoExtension) -> PicadoBuilder:
        """Queue an extension for installation after build."""
        self._extensions.append(extension)
        return self

    def build(self) -> PicadoClient:
        """Construct the PicadoClient and install all queued extensions."""
        client = PicadoClient(
            base_url=self._base_url,
            adapter=self._adapter,
            session_store=self._store,
            navigator=self._navigator,
        )

        for ext in self._extensions:
            client.use(ext)

        # Fire initialize hooks after all extensions are installed
        client.hooks.fire_initialize()

        logger.info(
            f"PicadoBuilder: built client with {len(self._extensions)} extension(s)"
        )
        return client
