"""
Pytest configuration and shared fixtures for Picado client tests.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from picado.sdk.adapters.mock import MockAdapter
from picado.sdk.client import PicadoClient
from picado.sdk.executor import RequestExecutor
from picado.sdk.hooks import HookRegistry
from picado.sdk.session import MemorySessionStore, RecordingNavigator, SessionGuard
from picado.sdk.urls import UrlResolver


BASE_URL = "https://picado.test"


def url(path: str) -> str:
    """Absolute URL the resolver produces for ``path`` under BASE_URL."""
    return f"{BASE_URL}/{path.lstrip('/')}"


class CountingSessionStore(MemorySessionStore):
    """Memory store that counts mutations."""

    def __init__(self, token=None):
        super().__init__(token)
        self.set_calls = 0
        self.clear_calls = 0

    def set(self, token):
        self.set_calls += 1
        super().set(token)

    def clear(self):
        self.clear_calls += 1
        super().clear()


@pytest.fixture
def api_url():
    """Factory mapping a relative path to the URL requested under BASE_URL."""
    return url


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def store() -> CountingSessionStore:
    return CountingSessionStore()


@pytest.fixture
def navigator() -> RecordingNavigator:
    """Navigator positioned on an authenticated screen."""
    return RecordingNavigator(location="/groups")


@pytest.fixture
def hooks() -> HookRegistry:
    return HookRegistry()


@pytest.fixture
def adapter() -> MockAdapter:
    return MockAdapter()


@pytest.fixture
def executor(adapter, store, navigator, hooks) -> RequestExecutor:
    guard = SessionGuard(store=store, navigator=navigator, hooks=hooks)
    return RequestExecutor(
        adapter=adapter,
        resolver=UrlResolver(BASE_URL),
        store=store,
        guard=guard,
        hooks=hooks,
    )


@pytest.fixture
def client(adapter, store, navigator) -> PicadoClient:
    return PicadoClient(
        base_url=BASE_URL,
        adapter=adapter,
        session_store=store,
        navigator=navigator,
    )
