"""Result recording for tournament matches."""

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

from gopairing.exceptions import (
    InvalidWinnerException,
    ResultAlreadyRecordedException,
    TournamentStateException,
)
from gopairing.models.enums import MatchResult, TournamentStatus
from gopairing.models.tournament import Match, RoundData, Tournament
from gopairing.utils import setup_logger

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating the submitted outcome against the match
    - Rejecting a second submission for a decided match
    - Overwriting a result through the explicit update path

    Methods modify the tournament they are given; callers pass a copy.
    """

    def record_result(
        self,
        tournament: Tournament,
        match_id: str,
        winner_id: Optional[str],
        draw: bool = False,
    ) -> Match:
        """Record the outcome of a pending match.

        Args:
            tournament: The tournament holding the match (modified in place)
            match_id: Match to decide
            winner_id: Winning player, None for a draw
            draw: True to record a draw

        Returns:
            The decided match

        Raises:
            MatchNotFoundException: No such match
            InvalidWinnerException: Outcome does not fit the match
            ResultAlreadyRecordedException: Match already decided
        """
        round_data, match = tournament.find_match(match_id)
        self._validate_outcome(tournament, match, winner_id, draw)

        if match.is_decided:
            logger.warning(
                f"Result for match {match_id} in round {round_data.round_number} "
                "already recorded"
            )
            raise ResultAlreadyRecordedException(
                f"Match {match_id} already has a result ({match.result.value})"
            )

        self._apply_outcome(match, winner_id, draw)
        self._log_round_progress(round_data)
        return match

    def update_result(
        self,
        tournament: Tournament,
        match_id: str,
        winner_id: Optional[str],
        draw: bool = False,
    ) -> Match:
        """Overwrite the outcome of a match.

        Only allowed while no later round has been paired, since later
        pairings were made from this result.

        Raises:
            MatchNotFoundException: No such match
            InvalidWinnerException: Outcome does not fit the match
            TournamentStateException: Tournament completed or later round exists
        """
        round_data, match = tournament.find_match(match_id)
        self._validate_outcome(tournament, match, winner_id, draw)

        if tournament.status == TournamentStatus.COMPLETED:
            raise TournamentStateException(
                f"Tournament {tournament.id} is completed; delete a round to reopen it"
            )
        if round_data.round_number < len(tournament.rounds):
            raise TournamentStateException(
                f"Round {round_data.round_number} has later rounds; "
                f"delete round {round_data.round_number + 1} first"
            )

        previous = match.result
        self._apply_outcome(match, winner_id, draw)
        logger.info(
            f"Updated match {match_id}: {previous.value} -> {match.result.value}"
        )
        self._log_round_progress(round_data)
        return match

    def _validate_outcome(
        self,
        tournament: Tournament,
        match: Match,
        winner_id: Optional[str],
        draw: bool,
    ) -> None:
        if match.is_bye:
            raise InvalidWinnerException(
                f"Match {match.id} is a bye; its result is fixed"
            )
        if draw:
            if tournament.format.is_elimination:
                raise InvalidWinnerException(
                    f"Draws are not allowed in {tournament.format.value} tournaments"
                )
            if winner_id is not None:
                raise InvalidWinnerException("A draw cannot have a winner")
            return
        if winner_id is None or not match.involves(winner_id):
            logger.warning(f"Rejected winner {winner_id} for match {match.id}")
            raise InvalidWinnerException(
                f"Winner {winner_id} is not a player of match {match.id}"
            )

    @staticmethod
    def _apply_outcome(match: Match, winner_id: Optional[str], draw: bool) -> None:
        if draw:
            match.winner_id = None
            match.result = MatchResult.DRAW
        else:
            match.winner_id = winner_id
            match.result = MatchResult.WIN
        logger.debug(
            f"Recorded match {match.id}: {match.result.value}, winner {match.winner_id}"
        )

    @staticmethod
    def _log_round_progress(round_data: RoundData) -> None:
        if round_data.is_completed:
            logger.info(f"Round {round_data.round_number} completed")
