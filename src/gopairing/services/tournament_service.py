"""Tournament service.

The entry point for callers: each operation loads the tournament, applies
one lifecycle operation and saves the result. Mutations of one tournament
are serialised by a per-tournament lock; different tournaments proceed
in parallel.
"""

# Go Pairing
# Copyright (C) 2025  Go Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import asyncio
import contextlib
from typing import Any, Callable, Dict, List, Optional, Union

from gopairing.controllers.tournament import LifecycleManager
from gopairing.exceptions import GoPairingException
from gopairing.models.tournament import (
    StandingEntry,
    Tournament,
    TournamentConfig,
    config_from_dict,
)
from gopairing.storage import PlayerRegistry, TournamentRepository
from gopairing.utils import setup_logger

logger = setup_logger(__name__)


class TournamentService:
    """Async facade over the lifecycle manager.

    Args:
        registry: Where players are looked up
        repository: Where tournaments are loaded and saved
        lifecycle: Lifecycle manager, a default one when omitted
    """

    def __init__(
        self,
        registry: PlayerRegistry,
        repository: TournamentRepository,
        lifecycle: Optional[LifecycleManager] = None,
    ) -> None:
        self.registry = registry
        self.repository = repository
        self.lifecycle = lifecycle or LifecycleManager()
        self._locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}

    @contextlib.asynccontextmanager
    async def _locked(self, tournament_id: str):
        """Hold the tournament's lock; it is dropped once nobody waits on it."""
        lock = self._locks.setdefault(tournament_id, asyncio.Lock())
        self._lock_users[tournament_id] = self._lock_users.get(tournament_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[tournament_id] -= 1
            if not self._lock_users[tournament_id]:
                del self._lock_users[tournament_id]
                del self._locks[tournament_id]

    async def _mutate(
        self,
        tournament_id: str,
        operation: str,
        apply: Callable[[Tournament], Tournament],
    ) -> Tournament:
        """Load, apply and save under the tournament's lock."""
        async with self._locked(tournament_id):
            try:
                tournament = await self.repository.load(tournament_id)
                updated = apply(tournament)
                await self.repository.save(updated)
            except GoPairingException as e:
                logger.warning(f"{operation} failed for {tournament_id}: {e}")
                raise
            return updated

    # ========== Commands ==========

    async def create_tournament(
        self, params: Union[TournamentConfig, Dict[str, Any]]
    ) -> Tournament:
        """Create and store an UPCOMING tournament.

        Args:
            params: A configuration object, or a dict with a ``format`` key

        Raises:
            ValidationException: If the configuration is invalid
        """
        if isinstance(params, TournamentConfig):
            config = params
        else:
            config = config_from_dict(params)
        tournament = self.lifecycle.create_tournament(config)
        async with self._locked(tournament.id):
            await self.repository.save(tournament)
        return tournament

    async def update_tournament(
        self, tournament_id: str, params: Union[TournamentConfig, Dict[str, Any]]
    ) -> Tournament:
        """Replace the settings of a tournament that has not started.

        Args:
            tournament_id: Tournament to edit
            params: A configuration object, or a dict with a ``format`` key

        Raises:
            TournamentAlreadyStartedException: Tournament is not UPCOMING
            ValidationException: If the configuration is invalid
        """
        if isinstance(params, TournamentConfig):
            config = params
        else:
            config = config_from_dict(params)
        return await self._mutate(
            tournament_id,
            "update_tournament",
            lambda t: self.lifecycle.update_tournament(t, config),
        )

    async def add_player(self, tournament_id: str, player_id: str) -> Tournament:
        """Register a player from the registry in a tournament."""
        player = await self.registry.get_player(player_id)
        return await self._mutate(
            tournament_id,
            "add_player",
            lambda t: self.lifecycle.add_player(t, player),
        )

    async def generate_next_round(self, tournament_id: str) -> Tournament:
        return await self._mutate(
            tournament_id, "generate_next_round", self.lifecycle.generate_next_round
        )

    async def record_result(
        self,
        tournament_id: str,
        match_id: str,
        winner_id: Optional[str],
        draw: bool = False,
    ) -> Tournament:
        return await self._mutate(
            tournament_id,
            "record_result",
            lambda t: self.lifecycle.record_result(t, match_id, winner_id, draw),
        )

    async def update_result(
        self,
        tournament_id: str,
        match_id: str,
        winner_id: Optional[str],
        draw: bool = False,
    ) -> Tournament:
        return await self._mutate(
            tournament_id,
            "update_result",
            lambda t: self.lifecycle.update_result(t, match_id, winner_id, draw),
        )

    async def delete_round(self, tournament_id: str, round_number: int) -> Tournament:
        return await self._mutate(
            tournament_id,
            "delete_round",
            lambda t: self.lifecycle.delete_round(t, round_number),
        )

    async def end_tournament(self, tournament_id: str) -> Tournament:
        return await self._mutate(
            tournament_id, "end_tournament", self.lifecycle.end_tournament
        )

    # ========== Queries ==========

    async def get_tournament(self, tournament_id: str) -> Tournament:
        return await self.repository.load(tournament_id)

    async def list_tournaments(self) -> List[Tournament]:
        ids = await self.repository.list_ids()
        return [await self.repository.load(tournament_id) for tournament_id in ids]

    async def get_standings(self, tournament_id: str) -> List[StandingEntry]:
        tournament = await self.repository.load(tournament_id)
        return self.lifecycle.get_standings(tournament)
