"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

SDK Group Operations.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from picado.sdk.executor import RequestExecutor
from picado.sdk.fallback import EndpointAttempt, first_ok


class GroupOperations:
    """Group management for the authenticated user."""

    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    async def list(self, signal: Optional[asyncio.Event] = None) -> List[Dict[str, Any]]:
        """List groups visible to the current user."""
        return await first_ok(
            EndpointAttempt.of(self._executor.get, "/api/groups", signal=signal),
            EndpointAttempt.of(self._executor.get, "/groups", signal=signal),
            name="groups.list",
        )

    async def get(self, group_id: str, signal: Optional[asyncio.Event] = None) -> Dict[str, Any]:
        """Fetch a single group."""
        return await first_ok(
            EndpointAttempt.of(self._executor.get, f"/api/groups/{group_id}", signal=signal),
            EndpointAttempt.of(self._executor.get, f"/groups/{group_id}", signal=signal),
            name="groups.get",
        )

    async def create(self, name: str, description: Optional[str] = None) -> Dict[str, Any]:
        """Create a group. A blank description is left out of the payload."""
        body: Dict[str, Any] = {"name": name}
        if description and description.strip():
            body["description"] = description
        return await self._executor.post("/groups", body)

    async def add_player(
        self, group_id: str, player_id: str, signal: Optional[asyncio.Event] = None
    ) -> Any:
        return await self._executor.post(
            f"/api/groups/{group_id}/players", {"playerId": player_id}, signal=signal
        )

    async def add_players(self, group_id: str, player_ids: List[str]) -> Dict[str, Any]:
        """Add several players at once. Returns the updated group."""
        return await self._executor.post(
            f"/groups/{group_id}/players", {"playerIds": list(player_ids)}
        )

    async def join(self, group_id: str) -> Any:
        """Make the current user a member of the group."""
        return await self._executor.post(f"/groups/{group_id}/join")

    async def delete(self, group_id: str) -> Optional[Dict[str, Any]]:
        return await self._executor.delete(f"/groups/{group_id}")
