"""Tournament lifecycle.

Every operation takes a tournament, works on a deep copy and returns the
updated copy; the input is never modified, so a rejected operation leaves
no trace. Player states are rebuilt from scratch after every change.

Status moves UPCOMING -> ONGOING when the first round is generated and
ONGOING -> COMPLETED when the tournament is ended. Deleting rounds moves a
tournament back to ONGOING, or to UPCOMING when no rounds remain.
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

from typing import List, Optional

from gopairing.exceptions import (
    DuplicatePlayerException,
    EndConditionsNotMetException,
    TournamentAlreadyStartedException,
    TournamentStateException,
)
from gopairing.models.enums import TournamentStatus
from gopairing.models.player import Player, RosterEntry
from gopairing.models.tournament import StandingEntry, Tournament, TournamentConfig
from gopairing.pairing.elimination import MAX_LOSSES, active_players
from gopairing.tournament.standings import StandingsCalculator
from gopairing.utils import setup_logger

from .result_recorder import ResultRecorder
from .round_manager import RoundManager

logger = setup_logger(__name__)


class LifecycleManager:
    """Coordinates tournament operations through specialized managers:
    - RoundManager: round creation and deletion
    - ResultRecorder: result entry and validation
    - StandingsCalculator: player states and standings
    """

    def __init__(
        self,
        round_manager: Optional[RoundManager] = None,
        result_recorder: Optional[ResultRecorder] = None,
        standings_calculator: Optional[StandingsCalculator] = None,
    ) -> None:
        self.round_manager = round_manager or RoundManager()
        self.result_recorder = result_recorder or ResultRecorder()
        self.standings_calculator = standings_calculator or StandingsCalculator()

    # ========== Creation and Roster ==========

    def create_tournament(
        self, config: TournamentConfig, tournament_id: Optional[str] = None
    ) -> Tournament:
        """Create an UPCOMING tournament.

        Raises:
            ValidationException: If the configuration is invalid
        """
        config.validate()
        tournament = Tournament(config=config)
        if tournament_id is not None:
            tournament.id = tournament_id
        logger.info(
            f"Created {config.format.value} tournament {tournament.id}: {config.name}"
        )
        return tournament

    def update_tournament(
        self, tournament: Tournament, config: TournamentConfig
    ) -> Tournament:
        """Replace the configuration of a tournament that has not started.

        Name, format and format options may all change; the roster is kept.

        Raises:
            TournamentAlreadyStartedException: Tournament is not UPCOMING
            ValidationException: If the new configuration is invalid
        """
        if tournament.status != TournamentStatus.UPCOMING:
            raise TournamentAlreadyStartedException(
                f"Tournament {tournament.id} can only be edited before the first "
                f"round (it is {tournament.status.value})"
            )
        config.validate()

        updated = tournament.copy()
        updated.config = config
        self._refresh(updated)
        logger.info(
            f"Updated tournament {updated.id}: {config.name} ({config.format.value})"
        )
        return updated

    def add_player(self, tournament: Tournament, player: Player) -> Tournament:
        """Add a player to the roster.

        Raises:
            TournamentAlreadyStartedException: Tournament is not UPCOMING
            DuplicatePlayerException: Player already on the roster
            InvalidRankFormatException: Player rank does not parse
        """
        if tournament.status != TournamentStatus.UPCOMING:
            logger.warning(
                f"Rejected player {player.id}: {tournament.id} is {tournament.status.value}"
            )
            raise TournamentAlreadyStartedException(
                f"Players can only be added before the first round "
                f"(tournament {tournament.id} is {tournament.status.value})"
            )
        if tournament.has_player(player.id):
            raise DuplicatePlayerException(
                f"Player {player.id} is already registered in {tournament.id}"
            )

        updated = tournament.copy()
        updated.roster.append(RosterEntry.from_player(player))
        self._refresh(updated)
        logger.info(f"Added player {player.name} ({player.id}) to {tournament.id}")
        return updated

    # ========== Rounds ==========

    def generate_next_round(self, tournament: Tournament) -> Tournament:
        """Pair and append the next round; UPCOMING becomes ONGOING."""
        updated = tournament.copy()
        self._refresh(updated)
        self.round_manager.create_next_round(updated)
        if updated.status == TournamentStatus.UPCOMING:
            updated.status = TournamentStatus.ONGOING
            logger.info(f"Tournament {updated.id} started")
        self._refresh(updated)
        return updated

    def delete_round(self, tournament: Tournament, round_number: int) -> Tournament:
        """Remove a round and every later round.

        Raises:
            RoundNotFoundException: If the round does not exist
        """
        updated = tournament.copy()
        self.round_manager.delete_round(updated, round_number)
        updated.status = (
            TournamentStatus.ONGOING if updated.rounds else TournamentStatus.UPCOMING
        )
        updated.final_standings = None
        self._refresh(updated)
        return updated

    # ========== Results ==========

    def record_result(
        self,
        tournament: Tournament,
        match_id: str,
        winner_id: Optional[str],
        draw: bool = False,
    ) -> Tournament:
        """Record the outcome of a pending match; see ResultRecorder."""
        updated = tournament.copy()
        self.result_recorder.record_result(updated, match_id, winner_id, draw)
        self._refresh(updated)
        return updated

    def update_result(
        self,
        tournament: Tournament,
        match_id: str,
        winner_id: Optional[str],
        draw: bool = False,
    ) -> Tournament:
        """Overwrite the outcome of a match; see ResultRecorder."""
        updated = tournament.copy()
        self.result_recorder.update_result(updated, match_id, winner_id, draw)
        self._refresh(updated)
        return updated

    # ========== End and Standings ==========

    def end_conditions_unmet(self, tournament: Tournament) -> Optional[str]:
        """Why the tournament cannot end yet, or None if it can."""
        current = tournament.current_round
        if current is None:
            return "no rounds have been played"
        if not current.is_completed:
            return f"round {current.round_number} has pending matches"

        if tournament.format.is_elimination:
            states = self.standings_calculator.recompute_player_states(tournament)
            remaining = active_players(
                tournament, states, MAX_LOSSES[tournament.format]
            )
            if len(remaining) > 1:
                return f"{len(remaining)} players are still in contention"
            return None

        planned = self.round_manager.planned_round_count(tournament)
        if planned is not None and len(tournament.rounds) < planned:
            return f"{len(tournament.rounds)} of {planned} rounds played"
        return None

    def end_tournament(self, tournament: Tournament) -> Tournament:
        """Mark the tournament COMPLETED and freeze its standings.

        Raises:
            TournamentStateException: Already completed
            EndConditionsNotMetException: The format's end conditions do not hold
        """
        if tournament.status == TournamentStatus.COMPLETED:
            raise TournamentStateException(f"Tournament {tournament.id} already ended")

        reason = self.end_conditions_unmet(tournament)
        if reason is not None:
            logger.warning(f"Cannot end {tournament.id}: {reason}")
            raise EndConditionsNotMetException(
                f"Tournament {tournament.id} cannot end: {reason}"
            )

        updated = tournament.copy()
        self._refresh(updated)
        updated.final_standings = self.standings_calculator.compute_standings(updated)
        updated.status = TournamentStatus.COMPLETED
        logger.info(f"Tournament {updated.id} completed")
        return updated

    def get_standings(self, tournament: Tournament) -> List[StandingEntry]:
        """Current standings; the frozen ones once the tournament has ended."""
        if (
            tournament.status == TournamentStatus.COMPLETED
            and tournament.final_standings is not None
        ):
            return list(tournament.final_standings)
        return self.standings_calculator.compute_standings(tournament)

    def _refresh(self, tournament: Tournament) -> None:
        tournament.player_states = self.standings_calculator.recompute_player_states(
            tournament
        )
