"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

HTTP/REST transport adapter (default).
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import httpx

from picado.logging_config import get_logger
from picado.sdk.adapters.base import BaseAdapter, SDKRequest, SDKResponse
from picado.sdk.classifier import classify_transport_error

logger = get_logger(__name__)


class HttpAdapter(BaseAdapter):
    """Default HTTP transport using ``httpx.AsyncClient``.

    Requests arrive with absolute (or site-relative) URLs already resolved,
    so the client is created without a ``base_url``.

    Args:
        timeout: Request timeout in seconds.
        transport: Optional custom ``httpx`` transport (e.g. ``httpx.MockTransport``).
    """

    def __init__(
        self,
        timeout: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._connected = False

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            )
            self._connected = True
        return self._client

    async def send(self, request: SDKRequest) -> SDKResponse:
        client = self._ensure_client()
        start = time.monotonic()

        kwargs: Dict[str, Any] = {
            "headers": request.headers,
            "params": request.params,
        }
        if request.files is not None:
            kwargs["files"] = request.files
        elif request.body is not None:
            kwargs["json"] = request.body

        try:
            resp = await client.request(request.method, request.url, **kwargs)
        except httpx.HTTPError as exc:
            raise classify_transport_error(request.method, request.path, exc) from exc

        elapsed = (time.monotonic() - start) * 1000
        logger.debug(
            f"{request.method} {request.url} -> {resp.status_code} ({elapsed:.1f}ms)"
        )

        return SDKResponse(
            status_code=resp.status_code,
            headers=dict(resp.headers),
            content=resp.content,
            elapsed_ms=round(elapsed, 2),
        )

    def close(self) -> None:
        """Sync teardown, valid only before the first request.

        An open ``httpx.AsyncClient`` can only release its connection pool
        from async code, so use :meth:`aclose` once a request has been sent.
        """
        if self._client is not None:
            raise RuntimeError("HttpAdapter has an open connection pool; await aclose() instead")
        self._connected = False

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
        self._client = None
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected
