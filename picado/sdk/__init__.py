"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

Picado SDK: public API surface.

Quick start::

    from picado.sdk import PicadoClient
    client = PicadoClient(base_url="https://picado.example/api")

Advanced::

    from picado.sdk import PicadoBuilder
    client = PicadoBuilder().set_base_url("/api").use(MyExtension()).build()
"""

from picado.sdk.client import PicadoBuilder, PicadoClient
from picado.sdk.hooks import HookRegistry
from picado.sdk.extensions import PicadoExtension
from picado.sdk.auth import AuthOperations, RegistrationResult
from picado.sdk.groups import GroupOperations
from picado.sdk.players import PlayerOperations
from picado.sdk.matches import MatchOperations
from picado.sdk.executor import RequestExecutor
from picado.sdk.fallback import (
    AttemptOutcome,
    AttemptResult,
    ChainState,
    EndpointAttempt,
    FallbackChain,
    first_ok,
    is_route_not_found,
)
from picado.sdk.session import (
    CallbackNavigator,
    FileSessionStore,
    MemorySessionStore,
    Navigator,
    NullNavigator,
    RecordingNavigator,
    SessionGuard,
    SessionStore,
)
from picado.sdk.urls import UrlResolver, resolve_url
from picado.sdk.adapters import (
    BaseAdapter,
    HttpAdapter,
    MockAdapter,
    SDKRequest,
    SDKResponse,
)

__all__ = [
    # client
    "PicadoClient",
    "PicadoBuilder",
    # operations
    "AuthOperations",
    "RegistrationResult",
    "GroupOperations",
    "PlayerOperations",
    "MatchOperations",
    # request layer
    "RequestExecutor",
    "UrlResolver",
    "resolve_url",
    "FallbackChain",
    "EndpointAttempt",
    "AttemptResult",
    "AttemptOutcome",
    "ChainState",
    "first_ok",
    "is_route_not_found",
    # session
    "SessionStore",
    "MemorySessionStore",
    "FileSessionStore",
    "SessionGuard",
    "Navigator",
    "NullNavigator",
    "CallbackNavigator",
    "RecordingNavigator",
    # infra
    "HookRegistry",
    "PicadoExtension",
    "BaseAdapter",
    "HttpAdapter",
    "MockAdapter",
    "SDKRequest",
    "SDKResponse",
]
