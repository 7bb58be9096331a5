"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

SDK Transport Adapter base class and data structures.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

# (filename, content, content_type)
FileField = Tuple[str, bytes, str]


@dataclass(frozen=True)
class SDKRequest:
    """Outbound request, fully resolved. Never mutated after dispatch."""
    method: str
    url: str
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None
    params: Optional[Dict[str, Any]] = None
    files: Optional[Dict[str, FileField]] = None


@dataclass
class SDKResponse:
    """Inbound response representation."""
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    content: bytes = b""
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def content_type(self) -> str:
        for key, value in self.headers.items():
            if key.lower() == "content-type":
                return value
        return ""

    def json(self) -> Any:
        """Decode the body as JSON. Raises ``ValueError`` on bad content."""
        return json.loads(self.content.decode("utf-8"))

    @classmethod
    def from_json(
        cls,
        status_code: int,
        payload: Any,
        headers: Optional[Dict[str, str]] = None,
    ) -> SDKResponse:
        """Build a JSON response, mainly for mock transports."""
        merged = {"Content-Type": "application/json"}
        merged.update(headers or {})
        return cls(
            status_code=status_code,
            headers=merged,
            content=json.dumps(payload).encode("utf-8"),
        )


class BaseAdapter(ABC):
    """Abstract base for all transport adapters.

    Implementations return an :class:`SDKResponse` for every response the
    server produced, whatever its status, and raise
    :class:`picado.exceptions.TransportError` when no response was received.
    """

    @abstractmethod
    async def send(self, request: SDKRequest) -> SDKResponse:
        """Send a request and return the response."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release adapter resources."""
        ...

    async def aclose(self) -> None:
        """Release adapter resources from async code."""
        self.close()

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether the adapter is in a usable state."""
        ...
