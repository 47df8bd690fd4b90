"""Round Robin Tournament Pairing System

Pairings follow the circle method: the first player in roster order stays
fixed and the others rotate one seat per round. With an even number of
players there are N - 1 rounds; with an odd number an empty seat is added,
giving N rounds in which every player sits out exactly once.

The schedule guarantees that:
- Each player meets every other player exactly once
- At most one bye per round, and no player gets two
- The schedule depends only on roster order

Example:
    >>> rr = RoundRobin(["alice", "bob", "carol"])
    >>> rr.number_of_rounds
    3
    >>> rr.get_round_pairings(1)
    [('alice', None), ('bob', 'carol')]
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

from typing import Dict, Iterable, List, Optional, Tuple

from gopairing.exceptions import NoPairingAvailableException
from gopairing.models.enums import TournamentFormat
from gopairing.models.player import PlayerTournamentState
from gopairing.models.tournament import Tournament
from gopairing.pairing.base import PairingSystem
from gopairing.type_hints import Boards
from gopairing.utils import setup_logger

logger = setup_logger(__name__)


class RoundRobin:
    """
    Complete round-robin schedule for a fixed list of players.

    Attributes:
        players: Immutable tuple of player ids in roster order
        number_of_rounds: Total number of rounds in the schedule
        round_pairings: Boards for each round; a bye is (player, None)
    """

    def __init__(self, players: Iterable[str]) -> None:
        """
        Build the schedule.

        Args:
            players: Player ids in roster order
        """
        self.players = tuple(players)
        seats: List[Optional[str]] = list(self.players)
        if len(seats) % 2 != 0:
            seats.append(None)
        self._seats = seats
        self.number_of_rounds = max(len(seats) - 1, 0)
        self.round_pairings: List[Boards] = [
            self._generate_round_pairings(round_idx)
            for round_idx in range(self.number_of_rounds)
        ]
        logger.debug(
            f"Generated round robin schedule: {len(self.players)} players, "
            f"{self.number_of_rounds} rounds"
        )

    def _generate_round_pairings(self, round_idx: int) -> Boards:
        """
        Boards for a 0-indexed round.

        Seat 0 is fixed; seats 1..n-1 rotate right by ``round_idx``.
        """
        fixed, rotating = self._seats[0], self._seats[1:]
        shift = round_idx % len(rotating)
        if shift:
            rotating = rotating[-shift:] + rotating[:-shift]
        arrangement = [fixed] + rotating

        boards: Boards = []
        half = len(arrangement) // 2
        for i in range(half):
            first, second = arrangement[i], arrangement[-1 - i]
            if first is None:
                boards.append((second, None))
            elif second is None:
                boards.append((first, None))
            else:
                boards.append((first, second))
        return boards

    def get_round_pairings(self, round_number: int) -> Boards:
        """
        Get pairings for a specific round.

        Args:
            round_number: 1-indexed round number

        Returns:
            Boards of the round

        Raises:
            NoPairingAvailableException: If the schedule has no such round
        """
        if not (1 <= round_number <= self.number_of_rounds):
            raise NoPairingAvailableException(
                f"Round {round_number} is not valid. Schedule has "
                f"{self.number_of_rounds} rounds"
            )
        return list(self.round_pairings[round_number - 1])

    def get_bye_player(self, round_number: int) -> Optional[str]:
        for player1_id, player2_id in self.get_round_pairings(round_number):
            if player2_id is None:
                return player1_id
        return None

    def get_player_schedule(self, player_id: str) -> List[Tuple[int, Optional[str]]]:
        """
        Get the complete schedule for a specific player.

        Args:
            player_id: The player to get the schedule for

        Returns:
            List of (round_number, opponent_id), opponent_id None for a bye

        Raises:
            ValueError: If the player is not in the schedule
        """
        if player_id not in self.players:
            raise ValueError(f"Player {player_id} is not in this schedule")

        schedule = []
        for round_idx, boards in enumerate(self.round_pairings):
            for player1_id, player2_id in boards:
                if player_id == player1_id:
                    schedule.append((round_idx + 1, player2_id))
                    break
                if player_id == player2_id:
                    schedule.append((round_idx + 1, player1_id))
                    break
        return schedule

    def __str__(self) -> str:
        lines = [
            f"Round Robin: {len(self.players)} players, {self.number_of_rounds} rounds"
        ]
        for round_idx, boards in enumerate(self.round_pairings):
            lines.append(f"\nRound {round_idx + 1}:")
            for player1_id, player2_id in boards:
                if player2_id is None:
                    lines.append(f"  {player1_id} - bye")
                else:
                    lines.append(f"  {player1_id} vs {player2_id}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"RoundRobin(players={len(self.players)}, rounds={self.number_of_rounds})"


def scheduled_round_count(player_count: int) -> int:
    """Rounds in a round robin of ``player_count`` players."""
    if player_count < 2:
        return 0
    return player_count - 1 if player_count % 2 == 0 else player_count


class RoundRobinPairing(PairingSystem):
    """Round robin pairing system; the schedule is rebuilt from the roster."""

    FORMATS = (TournamentFormat.ROUND_ROBIN,)

    def pair(
        self,
        tournament: Tournament,
        states: Dict[str, PlayerTournamentState],
        round_number: int,
    ) -> Boards:
        schedule = RoundRobin(tournament.player_ids)
        if round_number > schedule.number_of_rounds:
            logger.warning(
                f"Round robin {tournament.id} finished after "
                f"{schedule.number_of_rounds} rounds"
            )
        boards = schedule.get_round_pairings(round_number)
        # bye on the last board
        return sorted(boards, key=lambda board: board[1] is None)
