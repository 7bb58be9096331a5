"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

Request Executor.

One coroutine per HTTP verb. Each call resolves the URL, builds headers,
dispatches through the transport adapter and either decodes the payload
or raises a classified :class:`~picado.exceptions.RequestError`.
Authenticated calls hand 401s to the :class:`SessionGuard` first.

No call retries. Trying alternate routes is the fallback chain's job.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

from picado.exceptions import RequestError
from picado.logging_config import get_logger, log_request_failure
from picado.sdk.adapters.base import BaseAdapter, FileField, SDKRequest, SDKResponse
from picado.sdk.classifier import classify_response, classify_transport_error
from picado.sdk.headers import build_headers, build_headers_no_auth
from picado.sdk.hooks import HookRegistry
from picado.sdk.session import SessionGuard, SessionStore
from picado.sdk.urls import UrlResolver

logger = get_logger(__name__)

UPLOAD_FIELD = "file"


class RequestExecutor:
    """Executes single requests against the backend.

    Args:
        adapter: Transport adapter.
        resolver: URL resolver bound to the configured base address.
        store: Session store read when building authenticated headers.
        guard: Session guard engaged on authenticated 401s.
        hooks: Lifecycle hook registry.
    """

    def __init__(
        self,
        adapter: BaseAdapter,
        resolver: UrlResolver,
        store: SessionStore,
        guard: SessionGuard,
        hooks: Optional[HookRegistry] = None,
    ) -> None:
        self.adapter = adapter
        self.resolver = resolver
        self.store = store
        self.guard = guard
        self.hooks = hooks or HookRegistry()

    # -- Dispatch ------------------------------------------------------------

    async def _send(
        self, request: SDKRequest, signal: Optional[asyncio.Event]
    ) -> SDKResponse:
        if signal is None:
            return await self.adapter.send(request)
        if signal.is_set():
            raise classify_transport_error(request.method, request.path)

        send_task = asyncio.ensure_future(self.adapter.send(request))
        cancel_task = asyncio.ensure_future(signal.wait())
        try:
            done, _ = await asyncio.wait(
                {send_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            cancel_task.cancel()
            if not send_task.done():
                send_task.cancel()

        if send_task in done:
            return send_task.result()
        # Let the abandoned send unwind before reporting the cancellation
        await asyncio.gather(send_task, return_exceptions=True)
        raise classify_transport_error(request.method, request.path)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, FileField]] = None,
        json: bool = True,
        auth: bool = True,
        signal: Optional[asyncio.Event] = None,
    ) -> SDKResponse:
        headers = build_headers(self.store, json) if auth else build_headers_no_auth(json)
        request = SDKRequest(
            method=method,
            url=self.resolver.resolve(path),
            path=path,
            headers=headers,
            body=body,
            params=params,
            files=files,
        )
        request = self.hooks.fire_before_request(request)

        try:
            response = await self._send(request, signal)
        except RequestError as error:
            log_request_failure(logger, method, path, error.status, error.message)
            self.hooks.fire_error(error)
            raise

        self.hooks.fire_after_response(request, response)
        if response.ok:
            return response

        error = classify_response(method, path, response)
        log_request_failure(logger, method, path, error.status, error.message)
        self.hooks.fire_error(error)
        if auth and error.status == 401:
            self.guard.handle_unauthorized(error)
        raise error

    @staticmethod
    def _decode(method: str, path: str, response: SDKResponse) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RequestError(
                f"{method} {path} returned an undecodable body",
                status=response.status_code,
                method=method,
                path=path,
            ) from e

    # -- Verbs -----------------------------------------------------------------

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> Any:
        """GET a JSON resource."""
        response = await self._request("GET", path, params=params, signal=signal)
        return self._decode("GET", path, response)

    async def get_files(self, path: str, signal: Optional[asyncio.Event] = None) -> bytes:
        """GET a binary resource."""
        response = await self._request("GET", path, json=False, signal=signal)
        return response.content

    async def post(
        self,
        path: str,
        payload: Any = None,
        params: Optional[Dict[str, Any]] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> Any:
        """POST a JSON payload."""
        response = await self._request(
            "POST", path, body=payload, params=params, signal=signal
        )
        return self._decode("POST", path, response)

    async def post_no_auth(
        self,
        path: str,
        payload: Any = None,
        signal: Optional[asyncio.Event] = None,
    ) -> Any:
        """POST without credentials, for login, registration and password reset.

        A 401 here is raised as a classified error; the session is left
        untouched and no navigation happens.
        """
        response = await self._request(
            "POST", path, body=payload, auth=False, signal=signal
        )
        return self._decode("POST", path, response)

    async def post_files(
        self,
        path: str,
        blob: bytes,
        filename: str = "upload",
        content_type: str = "application/octet-stream",
        signal: Optional[asyncio.Event] = None,
    ) -> Any:
        """POST a binary blob as multipart form data under the ``file`` field."""
        files = {UPLOAD_FIELD: (filename, blob, content_type)}
        response = await self._request(
            "POST", path, files=files, json=False, signal=signal
        )
        return self._decode("POST", path, response)

    async def put(
        self,
        path: str,
        payload: Any = None,
        signal: Optional[asyncio.Event] = None,
    ) -> Any:
        """PUT a JSON payload, replacing the resource."""
        response = await self._request("PUT", path, body=payload, signal=signal)
        return self._decode("PUT", path, response)

    async def patch(
        self,
        path: str,
        payload: Any = None,
        signal: Optional[asyncio.Event] = None,
    ) -> Any:
        """PATCH a JSON payload, updating part of the resource."""
        response = await self._request("PATCH", path, body=payload, signal=signal)
        return self._decode("PATCH", path, response)

    async def delete(self, path: str, signal: Optional[asyncio.Event] = None) -> Any:
        """DELETE a resource.

        Returns the decoded body only when the server labels it as JSON.
        """
        response = await self._request("DELETE", path, signal=signal)
        if response.status_code == 204:
            return None
        if "application/json" not in response.content_type:
            return None
        return self._decode("DELETE", path, response)
