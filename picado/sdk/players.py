"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

SDK Player Operations.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from picado.sdk.executor import RequestExecutor
from picado.sdk.fallback import EndpointAttempt, first_ok


class PlayerOperations:
    """Player management for the authenticated user."""

    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    async def list(
        self, space_id: Optional[str] = None, signal: Optional[asyncio.Event] = None
    ) -> List[Dict[str, Any]]:
        """List players. With ``space_id`` each player carries its group membership."""
        params = {"spaceId": space_id} if space_id else None
        return await self._executor.get("/players", params=params, signal=signal)

    async def list_all(self, signal: Optional[asyncio.Event] = None) -> List[Dict[str, Any]]:
        return await self._executor.get("/api/players/all", signal=signal)

    async def get(self, player_id: str, signal: Optional[asyncio.Event] = None) -> Dict[str, Any]:
        return await first_ok(
            EndpointAttempt.of(self._executor.get, f"/api/players/{player_id}", signal=signal),
            EndpointAttempt.of(self._executor.get, f"/players/{player_id}", signal=signal),
            name="players.get",
        )

    async def create(
        self,
        name: str,
        nickname: Optional[str] = None,
        abilities: Optional[Dict[str, int]] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"name": name, "abilities": dict(abilities or {})}
        if nickname:
            body["nickname"] = nickname
        return await self._executor.post("/players", body, signal=signal)

    async def update_skills(
        self,
        player_id: str,
        abilities: Dict[str, int],
        signal: Optional[asyncio.Event] = None,
    ) -> Dict[str, Any]:
        """Partially update a player's abilities, modern route first."""
        body = {"abilities": dict(abilities)}
        return await first_ok(
            EndpointAttempt.of(
                self._executor.patch, f"/api/players/{player_id}/abilities", body, signal=signal
            ),
            EndpointAttempt.of(self._executor.patch, f"/players/{player_id}", body, signal=signal),
            name="players.update_skills",
        )

    async def delete(self, player_id: str) -> Optional[Dict[str, Any]]:
        return await self._executor.delete(f"/players/{player_id}")
