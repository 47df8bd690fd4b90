"""Single and double elimination pairing.

A player is eliminated after ``max_losses`` losses. The remaining players
are shuffled every round and paired inside their loss bracket first
(unbeaten players together, one-loss players together); leftovers cross
brackets. An odd field gives one player a bye, preferring a player who
has not had one yet.
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

import random
from typing import Dict, List, Optional, Sequence

from gopairing.constants import (
    DOUBLE_ELIMINATION_MAX_LOSSES,
    SINGLE_ELIMINATION_MAX_LOSSES,
)
from gopairing.exceptions import NoPairingAvailableException
from gopairing.models.enums import TournamentFormat
from gopairing.models.player import PlayerTournamentState
from gopairing.models.tournament import Tournament
from gopairing.pairing.base import PairingSystem, pair_with_optional_bye
from gopairing.type_hints import Boards, PlayerIds
from gopairing.utils import setup_logger

logger = setup_logger(__name__)

MAX_LOSSES = {
    TournamentFormat.SINGLE_ELIMINATION: SINGLE_ELIMINATION_MAX_LOSSES,
    TournamentFormat.DOUBLE_ELIMINATION: DOUBLE_ELIMINATION_MAX_LOSSES,
}


def active_players(
    tournament: Tournament,
    states: Dict[str, PlayerTournamentState],
    max_losses: int,
) -> PlayerIds:
    """Players with fewer than ``max_losses`` losses, in roster order."""
    return [pid for pid in tournament.player_ids if states[pid].losses < max_losses]


class EliminationPairing(PairingSystem):
    """Knock-out pairing.

    Args:
        max_losses: Losses that eliminate a player (1 single, 2 double)
    """

    FORMATS = (TournamentFormat.SINGLE_ELIMINATION,)

    def __init__(self, max_losses: int = SINGLE_ELIMINATION_MAX_LOSSES) -> None:
        self.max_losses = max_losses

    def pair(
        self,
        tournament: Tournament,
        states: Dict[str, PlayerTournamentState],
        round_number: int,
    ) -> Boards:
        active = active_players(tournament, states, self.max_losses)
        if len(active) < 2:
            winner = active[0] if active else None
            raise NoPairingAvailableException(
                f"Elimination finished in {tournament.id}: "
                f"{len(active)} player(s) left (winner: {winner})"
            )

        rng = self._rng(tournament.config.seed, round_number)
        order = list(active)
        rng.shuffle(order)
        # stable: shuffled order kept inside each loss bracket
        order.sort(key=lambda pid: states[pid].losses)

        def _same_bracket_first(player: str, remaining: Sequence[str]) -> List[str]:
            losses = states[player].losses
            same = [pid for pid in remaining if states[pid].losses == losses]
            other = [pid for pid in remaining if states[pid].losses != losses]
            return same + other

        pairs, bye_id = pair_with_optional_bye(
            order, states, _same_bracket_first, tournament.played_pairs()
        )
        logger.info(
            f"Elimination round {round_number}: {len(active)} active, bye: {bye_id}"
        )
        return self.boards_from_pairs(pairs, bye_id)

    @staticmethod
    def _rng(seed: Optional[int], round_number: int) -> random.Random:
        if seed is None:
            return random.Random()
        return random.Random(f"{seed}:{round_number}")


class DoubleEliminationPairing(EliminationPairing):
    """Knock-out on the second loss."""

    FORMATS = (TournamentFormat.DOUBLE_ELIMINATION,)

    def __init__(self) -> None:
        super().__init__(max_losses=DOUBLE_ELIMINATION_MAX_LOSSES)
