"""Swiss pairing.

Players are ordered by score, then rank, then roster order, and paired
down the list with the first opponent they have not met. A bounded
backtracking search keeps the round free of rematches whenever such a
pairing exists; otherwise rematches are allowed. The bye goes to the
lowest placed player without a previous bye.
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

from typing import Dict

from gopairing.models.enums import TournamentFormat
from gopairing.models.player import PlayerTournamentState
from gopairing.models.rank import rank_value
from gopairing.models.tournament import Tournament
from gopairing.pairing.base import PairingSystem, in_order, pair_with_optional_bye
from gopairing.type_hints import Boards, PlayerIds


def score_order(
    tournament: Tournament, states: Dict[str, PlayerTournamentState]
) -> PlayerIds:
    """Score descending, stronger rank first, then roster order."""
    index = PairingSystem.roster_index(tournament)
    return sorted(
        tournament.player_ids,
        key=lambda pid: (
            -states[pid].score,
            -rank_value(states[pid].rank),
            index[pid],
        ),
    )


class SwissPairing(PairingSystem):
    """Swiss system pairing."""

    FORMATS = (TournamentFormat.SWISS,)

    def pair(
        self,
        tournament: Tournament,
        states: Dict[str, PlayerTournamentState],
        round_number: int,
    ) -> Boards:
        order = score_order(tournament, states)
        pairs, bye_id = pair_with_optional_bye(
            order, states, in_order, tournament.played_pairs()
        )
        return self.boards_from_pairs(pairs, bye_id)
