"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

SDK Extension base class.

Extensions register callbacks on the :class:`HookRegistry` during
:meth:`install` and are activated via ``client.use(extension)``.

Example::

    from picado.sdk.extensions import PicadoExtension
    from picado.sdk.hooks import HookRegistry

    class UserAgentExtension(PicadoExtension):
        @property
        def name(self) -> str:
            return "user-agent"

        @property
        def version(self) -> str:
            return "1.0.0"

        def install(self, hooks: HookRegistry) -> None:
            hooks.on_before_request(self._inject_header)

        def _inject_header(self, request):
            headers = {**request.headers, "User-Agent": "picado-bot/1.0"}
            return dataclasses.replace(request, headers=headers)
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from picado.sdk.hooks import HookRegistry


class PicadoExtension(ABC):
    """Base class for all Picado client extensions."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique, human-readable extension name."""
        ...

    @property
    @abstractmethod
    def version(self) -> str:
        """SemVer version string (e.g. ``"1.0.0"``)."""
        ...

    @abstractmethod
    def install(self, hooks: HookRegistry) -> None:
        """Register callbacks on lifecycle hooks.

        Called exactly once when the extension is attached to a
        :class:`PicadoClient` via ``.use()``.

        Args:
            hooks: The client's hook registry.
        """
        ...
