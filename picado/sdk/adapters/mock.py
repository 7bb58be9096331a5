"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

Mock transport adapter for local testing.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Optional, Tuple, Union

from picado.sdk.adapters.base import BaseAdapter, SDKRequest, SDKResponse

MockReply = Union[SDKResponse, BaseException]


class MockAdapter(BaseAdapter):
    """In-memory mock adapter for unit tests.

    Replies are keyed by ``(method, url)``. A key can be given several
    replies with :meth:`add`; they are served in order and the last one
    repeats. A reply that is an exception is raised instead of returned.

    Args:
        responses: Mapping from ``(method, url)`` tuples to replies.

    Example::

        adapter = MockAdapter({
            ("GET", "/api/groups"): SDKResponse.from_json(200, []),
        })
    """

    def __init__(
        self,
        responses: Optional[Dict[Tuple[str, str], MockReply]] = None,
    ) -> None:
        self._responses: Dict[Tuple[str, str], Deque[MockReply]] = {}
        for key, reply in (responses or {}).items():
            self.add(key[0], key[1], reply)
        self._sent: list[SDKRequest] = []

    def add(self, method: str, url: str, reply: MockReply) -> MockAdapter:
        """Queue a reply for ``(method, url)``."""
        key = (method.upper(), url)
        self._responses.setdefault(key, deque()).append(reply)
        return self

    async def send(self, request: SDKRequest) -> SDKResponse:
        self._sent.append(request)
        queue = self._responses.get((request.method.upper(), request.url))
        if not queue:
            return SDKResponse.from_json(404, {"message": "not mocked"})
        reply = queue.popleft() if len(queue) > 1 else queue[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply

    def close(self) -> None:
        self._responses.clear()
        self._sent.clear()

    @property
    def is_connected(self) -> bool:
        return True

    @property
    def sent_requests(self) -> list[SDKRequest]:
        """All requests that have been sent through this adapter."""
        return list(self._sent)
