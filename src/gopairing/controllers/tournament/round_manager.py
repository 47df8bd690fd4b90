"""Round management for tournaments.

This module handles round generation through the format's pairing system
and round deletion with renumbering.
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

from typing import Optional

from gopairing.exceptions import RoundNotFoundException
from gopairing.models.enums import TournamentFormat
from gopairing.models.tournament import (
    McMahonConfig,
    RoundData,
    SwissConfig,
    Tournament,
)
from gopairing.pairing import get_pairing_system
from gopairing.pairing.round_robin import scheduled_round_count
from gopairing.utils import setup_logger

logger = setup_logger(__name__)


class RoundManager:
    """Manages round progression for tournaments.

    This class is responsible for:
    - Generating the next round with the tournament's pairing system
    - Deleting a round and every round after it
    - Keeping round numbers contiguous from 1

    Both operations modify the tournament they are given; callers pass a copy.
    """

    def create_next_round(self, tournament: Tournament) -> RoundData:
        """Pair and append the next round.

        Args:
            tournament: The tournament to extend (modified in place)

        Returns:
            The new round

        Raises:
            TournamentNotOngoingOrUpcomingException: Tournament is completed
            InsufficientPlayersException: Fewer than two players
            PreviousRoundIncompleteException: Latest round not decided
            NoPairingAvailableException: The format has nothing left to pair
        """
        round_number = len(tournament.rounds) + 1
        pairing_system = get_pairing_system(tournament.format)
        matches = pairing_system.generate_round(tournament)

        round_data = RoundData(round_number=round_number, matches=matches)
        tournament.rounds.append(round_data)

        logger.info(
            f"Created round {round_number} for {tournament.id} with "
            f"{len(matches)} boards"
        )
        if round_data.is_completed:
            logger.info(f"Round {round_number} has no games to play")
        return round_data

    def delete_round(self, tournament: Tournament, round_number: int) -> int:
        """Remove ``round_number`` and every later round.

        Args:
            tournament: The tournament to truncate (modified in place)
            round_number: First round to remove (1-indexed)

        Returns:
            Number of rounds removed

        Raises:
            RoundNotFoundException: If the round does not exist
        """
        if not (1 <= round_number <= len(tournament.rounds)):
            logger.warning(
                f"Cannot delete round {round_number} of {tournament.id}: "
                f"{len(tournament.rounds)} rounds exist"
            )
            raise RoundNotFoundException(
                f"Round {round_number} does not exist in tournament {tournament.id}"
            )

        removed = len(tournament.rounds) - round_number + 1
        del tournament.rounds[round_number - 1 :]
        for index, round_data in enumerate(tournament.rounds, start=1):
            round_data.round_number = index

        logger.info(
            f"Deleted rounds {round_number}-{round_number + removed - 1} "
            f"of {tournament.id}"
        )
        return removed

    def planned_round_count(self, tournament: Tournament) -> Optional[int]:
        """Rounds the format plans to play, None for elimination formats."""
        if tournament.format == TournamentFormat.ROUND_ROBIN:
            return scheduled_round_count(len(tournament.roster))
        if isinstance(tournament.config, (SwissConfig, McMahonConfig)):
            return tournament.config.round_count
        return None
