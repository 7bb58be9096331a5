"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

Tests for the request executor.
"""

import asyncio
import dataclasses

import httpx
import pytest

from picado.exceptions import (
    RequestError,
    RouteNotFoundError,
    ServerOrClientError,
    TransportError,
    UnauthorizedError,
)
from picado.sdk.adapters.base import BaseAdapter, SDKResponse
from picado.sdk.classifier import CANCELLED_MESSAGE, classify_transport_error


class HangingAdapter(BaseAdapter):
    """Adapter whose requests never complete on their own."""

    def __init__(self):
        self.started = 0
        self.cancelled = 0

    async def send(self, request):
        self.started += 1
        try:
            await asyncio.sleep(60)
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        return SDKResponse(status_code=200)

    def close(self):
        pass

    @property
    def is_connected(self):
        return True


class TestVerbs:
    @pytest.mark.asyncio
    async def test_get_decodes_json(self, executor, adapter, api_url):
        adapter.add("GET", api_url("/groups"), SDKResponse.from_json(200, [{"id": "g1"}]))
        assert await executor.get("/groups") == [{"id": "g1"}]

    @pytest.mark.asyncio
    async def test_get_passes_query_params(self, executor, adapter, api_url):
        adapter.add("GET", api_url("/players"), SDKResponse.from_json(200, []))
        await executor.get("/players", params={"spaceId": "s1"})
        assert adapter.sent_requests[0].params == {"spaceId": "s1"}

    @pytest.mark.asyncio
    async def test_post_sends_payload_and_json_header(self, executor, adapter, api_url):
        adapter.add("POST", api_url("/groups"), SDKResponse.from_json(201, {"id": "g1"}))
        result = await executor.post("/groups", {"name": "Grupo A"})

        assert result == {"id": "g1"}
        sent = adapter.sent_requests[0]
        assert sent.method == "POST"
        assert sent.body == {"name": "Grupo A"}
        assert sent.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_put_and_patch(self, executor, adapter, api_url):
        adapter.add("PUT", api_url("/players/p1"), SDKResponse.from_json(200, {"v": "put"}))
        adapter.add("PATCH", api_url("/players/p1"), SDKResponse.from_json(200, {"v": "patch"}))

        assert await executor.put("/players/p1", {"name": "Ana"}) == {"v": "put"}
        assert await executor.patch("/players/p1", {"nickname": "A"}) == {"v": "patch"}
        assert [r.method for r in adapter.sent_requests] == ["PUT", "PATCH"]

    @pytest.mark.asyncio
    async def test_no_content_yields_none(self, executor, adapter, api_url):
        adapter.add("POST", api_url("/groups/g1/join"), SDKResponse(status_code=204))
        assert await executor.post("/groups/g1/join") is None

    @pytest.mark.asyncio
    async def test_empty_success_body_yields_none(self, executor, adapter, api_url):
        adapter.add("PUT", api_url("/players/p1"), SDKResponse(status_code=200))
        assert await executor.put("/players/p1", {}) is None

    @pytest.mark.asyncio
    async def test_undecodable_success_body(self, executor, adapter, api_url):
        adapter.add("GET", api_url("/groups"), SDKResponse(status_code=200, content=b"<html>"))
        with pytest.raises(RequestError) as exc_info:
            await executor.get("/groups")
        assert exc_info.value.status == 200
        assert "undecodable" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_get_files_returns_bytes_without_json_header(self, executor, adapter, api_url):
        adapter.add("GET", api_url("/exports/1"), SDKResponse(status_code=200, content=b"\x00\x01"))
        assert await executor.get_files("/exports/1") == b"\x00\x01"
        assert "Content-Type" not in adapter.sent_requests[0].headers


class TestDelete:
    @pytest.mark.asyncio
    async def test_json_body_is_decoded(self, executor, adapter, api_url):
        adapter.add("DELETE", api_url("/groups/g1"), SDKResponse.from_json(200, {"deleted": True}))
        assert await executor.delete("/groups/g1") == {"deleted": True}

    @pytest.mark.asyncio
    async def test_non_json_body_is_ignored(self, executor, adapter, api_url):
        adapter.add(
            "DELETE",
            api_url("/groups/g1"),
            SDKResponse(status_code=200, headers={"content-type": "text/plain"}, content=b"ok"),
        )
        assert await executor.delete("/groups/g1") is None

    @pytest.mark.asyncio
    async def test_no_content(self, executor, adapter, api_url):
        adapter.add("DELETE", api_url("/groups/g1"), SDKResponse(status_code=204))
        assert await executor.delete("/groups/g1") is None


class TestMultipart:
    @pytest.mark.asyncio
    async def test_blob_under_file_field(self, executor, adapter, api_url, store):
        store.set("tok")
        adapter.add("POST", api_url("/players/p1/photo"), SDKResponse.from_json(200, {"ok": True}))

        result = await executor.post_files(
            "/players/p1/photo", b"PNGDATA", filename="me.png", content_type="image/png"
        )

        assert result == {"ok": True}
        sent = adapter.sent_requests[0]
        assert sent.files == {"file": ("me.png", b"PNGDATA", "image/png")}
        assert sent.body is None
        # The transport sets the multipart boundary itself
        assert "Content-Type" not in sent.headers
        assert sent.headers["Authorization"] == "Bearer tok"


class TestAuthorization:
    @pytest.mark.asyncio
    async def test_bearer_token_attached(self, executor, adapter, api_url, store):
        store.set("abc.123.token")
        adapter.add("GET", api_url("/groups"), SDKResponse.from_json(200, []))
        await executor.get("/groups")
        assert adapter.sent_requests[0].headers["Authorization"] == "Bearer abc.123.token"

    @pytest.mark.asyncio
    async def test_no_header_without_session(self, executor, adapter, api_url):
        adapter.add("GET", api_url("/groups"), SDKResponse.from_json(200, []))
        await executor.get("/groups")
        assert "Authorization" not in adapter.sent_requests[0].headers

    @pytest.mark.asyncio
    async def test_post_no_auth_never_sends_token(self, executor, adapter, api_url, store):
        store.set("stale")
        adapter.add("POST", api_url("/auth/login"), SDKResponse.from_json(200, {"token": "t"}))
        await executor.post_no_auth("/auth/login", {"email": "a@b.c"})
        assert "Authorization" not in adapter.sent_requests[0].headers

    @pytest.mark.asyncio
    async def test_401_invalidates_session_once(self, executor, adapter, api_url, store, navigator):
        store.set("tok")
        adapter.add("GET", api_url("/groups"), SDKResponse.from_json(401, {"message": "Unauthorized"}))

        with pytest.raises(UnauthorizedError) as exc_info:
            await executor.get("/groups")

        assert exc_info.value.status == 401
        assert exc_info.value.message == "Unauthorized"
        assert store.get() is None
        assert store.clear_calls == 1
        assert navigator.navigations == ["/login"]

    @pytest.mark.asyncio
    async def test_401_on_public_screen_does_not_navigate(
        self, executor, adapter, api_url, store, navigator
    ):
        navigator.location = "/login"
        store.set("tok")
        adapter.add("GET", api_url("/groups"), SDKResponse(status_code=401))

        with pytest.raises(UnauthorizedError):
            await executor.get("/groups")

        assert store.get() is None
        assert navigator.navigations == []

    @pytest.mark.asyncio
    async def test_401_without_auth_leaves_session(
        self, executor, adapter, api_url, store, navigator
    ):
        store.set("tok")
        store.set_calls = 0
        adapter.add("POST", api_url("/auth/login"), SDKResponse.from_json(401, {"message": "Bad credentials"}))

        with pytest.raises(UnauthorizedError) as exc_info:
            await executor.post_no_auth("/auth/login", {"email": "a@b.c", "password": "x"})

        assert exc_info.value.message == "Bad credentials"
        assert store.get() == "tok"
        assert store.clear_calls == 0
        assert navigator.navigations == []


class TestErrors:
    @pytest.mark.asyncio
    async def test_404_is_route_not_found(self, executor, adapter, api_url):
        with pytest.raises(RouteNotFoundError) as exc_info:
            await executor.get("/nowhere")
        assert exc_info.value.status == 404

    @pytest.mark.asyncio
    async def test_server_error_message_synthesized(self, executor, adapter, api_url, store):
        store.set("tok")
        adapter.add("POST", api_url("/groups"), SDKResponse(status_code=500))

        with pytest.raises(ServerOrClientError) as exc_info:
            await executor.post("/groups", {"name": "x"})

        assert exc_info.value.message == "POST /groups failed (500)"
        assert store.get() == "tok"

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, executor, adapter, api_url):
        adapter.add(
            "GET",
            api_url("/groups"),
            classify_transport_error("GET", "/groups", httpx.ConnectError("Connection refused")),
        )
        with pytest.raises(TransportError) as exc_info:
            await executor.get("/groups")
        assert exc_info.value.status == 0

    @pytest.mark.asyncio
    async def test_does_not_retry(self, executor, adapter, api_url):
        adapter.add("GET", api_url("/groups"), SDKResponse(status_code=503))
        with pytest.raises(ServerOrClientError):
            await executor.get("/groups")
        assert len(adapter.sent_requests) == 1


class TestCancellation:
    @pytest.mark.asyncio
    async def test_signal_set_before_dispatch(self, executor, adapter, api_url):
        signal = asyncio.Event()
        signal.set()
        with pytest.raises(TransportError) as exc_info:
            await executor.get("/groups", signal=signal)
        assert exc_info.value.message == CANCELLED_MESSAGE
        assert adapter.sent_requests == []

    @pytest.mark.asyncio
    async def test_signal_set_in_flight(self, executor, store, navigator):
        hanging = HangingAdapter()
        executor.adapter = hanging
        store.set("tok")
        signal = asyncio.Event()
        asyncio.get_running_loop().call_later(0.01, signal.set)

        with pytest.raises(TransportError) as exc_info:
            await executor.get("/groups", signal=signal)

        assert exc_info.value.status == 0
        assert exc_info.value.message == CANCELLED_MESSAGE
        assert hanging.started == 1
        assert hanging.cancelled == 1
        assert store.get() == "tok"
        assert navigator.navigations == []

    @pytest.mark.asyncio
    async def test_unset_signal_does_not_interfere(self, executor, adapter, api_url):
        adapter.add("GET", api_url("/groups"), SDKResponse.from_json(200, []))
        assert await executor.get("/groups", signal=asyncio.Event()) == []


class TestHooks:
    @pytest.mark.asyncio
    async def test_before_request_can_rewrite(self, executor, adapter, hooks, api_url):
        hooks.on_before_request(
            lambda r: dataclasses.replace(r, headers={**r.headers, "X-Client": "picado"})
        )
        adapter.add("GET", api_url("/groups"), SDKResponse.from_json(200, []))
        await executor.get("/groups")
        assert adapter.sent_requests[0].headers["X-Client"] == "picado"

    @pytest.mark.asyncio
    async def test_after_response_and_error_fire(self, executor, adapter, hooks, api_url):
        responses, errors = [], []
        hooks.on_after_response(lambda req, resp: responses.append(resp.status_code))
        hooks.on_error(errors.append)
        adapter.add("GET", api_url("/groups"), SDKResponse(status_code=500))

        with pytest.raises(ServerOrClientError):
            await executor.get("/groups")

        assert responses == [500]
        assert len(errors) == 1
        assert errors[0].status == 500

    @pytest.mark.asyncio
    async def test_transport_error_fires_error_hook(self, executor, adapter, hooks, api_url):
        errors = []
        hooks.on_error(errors.append)
        adapter.add("GET", api_url("/groups"), classify_transport_error("GET", "/groups", OSError("boom")))

        with pytest.raises(TransportError):
            await executor.get("/groups")
        assert [e.status for e in errors] == [0]
