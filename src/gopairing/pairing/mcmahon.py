"""McMahon pairing.

Players start on a score derived from their rank (see
:func:`gopairing.models.rank.mcmahon_initial_score`) and are grouped by
current score. Walking the groups from the top, each player prefers:

1. an opponent from the same score group,
2. an opponent from another group whose rank is within
   ``max_rank_distance`` steps (a float, nearest group first),
3. any other opponent,

never meeting the same opponent twice when that can be avoided. The player
left over in an odd field gets the bye.
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

from typing import Dict, List, Sequence

from gopairing.constants import DEFAULT_MAX_RANK_DISTANCE
from gopairing.models.enums import TournamentFormat
from gopairing.models.player import PlayerTournamentState
from gopairing.models.rank import is_within_distance
from gopairing.models.tournament import McMahonConfig, Tournament
from gopairing.pairing.base import PairingSystem, pair_with_optional_bye
from gopairing.pairing.swiss import score_order
from gopairing.type_hints import Boards
from gopairing.utils import setup_logger

logger = setup_logger(__name__)

SAME_GROUP = 0
NEAR_RANK = 1
ANY_GROUP = 2


class McMahonPairing(PairingSystem):
    """McMahon system pairing."""

    FORMATS = (TournamentFormat.MCMAHON,)

    def pair(
        self,
        tournament: Tournament,
        states: Dict[str, PlayerTournamentState],
        round_number: int,
    ) -> Boards:
        config = tournament.config
        max_distance = (
            config.max_rank_distance
            if isinstance(config, McMahonConfig)
            else DEFAULT_MAX_RANK_DISTANCE
        )
        order = score_order(tournament, states)
        position = {pid: i for i, pid in enumerate(order)}

        def _tier(player: str, candidate: str) -> int:
            if states[player].score == states[candidate].score:
                return SAME_GROUP
            if is_within_distance(
                states[player].rank, states[candidate].rank, max_distance
            ):
                return NEAR_RANK
            return ANY_GROUP

        def _preference(player: str, remaining: Sequence[str]) -> List[str]:
            return sorted(
                remaining,
                key=lambda pid: (
                    _tier(player, pid),
                    abs(position[pid] - position[player]),
                ),
            )

        pairs, bye_id = pair_with_optional_bye(
            order, states, _preference, tournament.played_pairs()
        )

        for player1_id, player2_id in pairs:
            if states[player1_id].score != states[player2_id].score:
                logger.debug(
                    f"Round {round_number}: {player1_id} ({states[player1_id].score}) "
                    f"floats against {player2_id} ({states[player2_id].score})"
                )
        return self.boards_from_pairs(pairs, bye_id)
