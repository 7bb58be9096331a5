"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Picado, a product of Garudex Labs

SDK Match Operations.

Team generation, vote tallying and rating updates happen server-side;
these calls only trigger them.
"""

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from picado.sdk.executor import RequestExecutor

VALID_VOTES = ("up", "neutral", "down")


def to_iso_utc(value: Union[str, datetime]) -> str:
    """Normalize a timestamp to ISO-8601 UTC with millisecond precision."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class MatchOperations:
    """Match lifecycle: scheduling, teams, feedback and ratings."""

    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    async def list_by_group(
        self, group_id: str, signal: Optional[asyncio.Event] = None
    ) -> Dict[str, Any]:
        """List a group's matches. Returns ``{"matches": [...], "meta": {...}}``."""
        return await self._executor.get(f"/matches/group/{group_id}", signal=signal)

    async def get(self, match_id: str, signal: Optional[asyncio.Event] = None) -> Dict[str, Any]:
        return await self._executor.get(f"/matches/{match_id}", signal=signal)

    async def create(
        self,
        group_id: str,
        participants: List[str],
        scheduled_at: Optional[Union[str, datetime]] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"groupId": group_id, "participants": list(participants)}
        if scheduled_at:
            body["scheduledAt"] = to_iso_utc(scheduled_at)
        return await self._executor.post("/matches", body)

    async def delete(self, match_id: str, signal: Optional[asyncio.Event] = None) -> Any:
        return await self._executor.delete(f"/matches/{match_id}", signal=signal)

    async def add_participant(
        self, match_id: str, player_id: str, signal: Optional[asyncio.Event] = None
    ) -> Any:
        return await self._executor.post(
            f"/matches/{match_id}/participants", {"playerId": player_id}, signal=signal
        )

    async def generate_teams(
        self, match_id: str, ai: bool = False, seed: Optional[int] = None
    ) -> Dict[str, Any]:
        """Ask the backend to split participants into teams.

        ``seed`` defaults to the current time in milliseconds so that
        repeated calls give different splits.
        """
        if seed is None:
            seed = int(time.time() * 1000)
        params = {"ai": "1" if ai else "0", "seed": seed}
        return await self._executor.post(
            f"/matches/{match_id}/generate-teams", params=params
        )

    async def send_feedback(
        self,
        match_id: str,
        player_id: str,
        vote: str,
        note: Optional[str] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> Any:
        """Vote on a player's performance in a match."""
        if vote not in VALID_VOTES:
            raise ValueError(f"vote must be one of {VALID_VOTES}, got '{vote}'")
        body: Dict[str, Any] = {"playerId": player_id, "vote": vote}
        if note:
            body["note"] = note
        return await self._executor.post(f"/matches/{match_id}/feedback", body, signal=signal)

    async def finalize(self, match_id: str, score_a: int, score_b: int) -> Dict[str, Any]:
        return await self._executor.post(
            f"/matches/{match_id}/finalize", {"scoreA": score_a, "scoreB": score_b}
        )

    async def apply_ratings(self, match_id: str) -> Dict[str, Any]:
        """Apply rating changes from collected votes. Returns ``{applied, changes}``."""
        return await self._executor.post(f"/matches/{match_id}/apply-ratings")

    async def my_votes(self, match_id: str, signal: Optional[asyncio.Event] = None) -> Dict[str, Any]:
        return await self._executor.get(f"/api/matches/{match_id}/my-votes", signal=signal)

    async def vote_progress(
        self, match_id: str, signal: Optional[asyncio.Event] = None
    ) -> Dict[str, Any]:
        return await self._executor.get(f"/api/matches/{match_id}/vote-progress", signal=signal)
