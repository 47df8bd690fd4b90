"""The tournament aggregate.

A :class:`Tournament` holds the configuration, the roster snapshot, the
rounds played so far and the player states derived from them. It carries
no pairing or scoring logic; the lifecycle manager in
:mod:`gopairing.controllers.tournament` works on copies of it.
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

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from gopairing.exceptions import (
    MatchNotFoundException,
    PlayerNotFoundException,
    RoundNotFoundException,
)
from gopairing.models.enums import TournamentFormat, TournamentStatus
from gopairing.models.player import PlayerTournamentState, RosterEntry
from gopairing.models.tournament.match import Match
from gopairing.models.tournament.round_data import RoundData
from gopairing.models.tournament.standing import StandingEntry
from gopairing.models.tournament.tournament_config import (
    TournamentConfig,
    config_from_dict,
)
from gopairing.type_hints import PlayedPair
from gopairing.utils import generate_id


@dataclass
class Tournament:
    """Tournament state.

    Attributes
    ----------
    config : TournamentConfig
        Format-specific settings.
    id : str
        Unique identifier.
    status : TournamentStatus
        UPCOMING until the first round is generated, ONGOING while playing,
        COMPLETED once ended.
    roster : list of RosterEntry
        Players in registration order.
    rounds : list of RoundData
        Rounds in order; ``rounds[i].round_number == i + 1``.
    player_states : dict of str to PlayerTournamentState
        Derived per-player state.
    final_standings : list of StandingEntry or None
        Standings frozen when the tournament ended.
    """

    config: TournamentConfig
    id: str = field(default_factory=lambda: generate_id("tournament_"))
    status: TournamentStatus = TournamentStatus.UPCOMING
    roster: List[RosterEntry] = field(default_factory=list)
    rounds: List[RoundData] = field(default_factory=list)
    player_states: Dict[str, PlayerTournamentState] = field(default_factory=dict)
    final_standings: Optional[List[StandingEntry]] = None

    # ========== Properties ==========

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def format(self) -> TournamentFormat:
        return self.config.format

    @property
    def current_round(self) -> Optional[RoundData]:
        """The latest round, or None if no rounds exist."""
        return self.rounds[-1] if self.rounds else None

    @property
    def current_round_number(self) -> int:
        return len(self.rounds)

    @property
    def completed_rounds_count(self) -> int:
        return sum(1 for round_data in self.rounds if round_data.is_completed)

    @property
    def player_ids(self) -> List[str]:
        return [entry.player_id for entry in self.roster]

    # ========== Lookups ==========

    def has_player(self, player_id: str) -> bool:
        return any(entry.player_id == player_id for entry in self.roster)

    def get_roster_entry(self, player_id: str) -> RosterEntry:
        for entry in self.roster:
            if entry.player_id == player_id:
                return entry
        raise PlayerNotFoundException(
            f"Player {player_id} is not registered in tournament {self.id}"
        )

    def get_round(self, round_number: int) -> RoundData:
        """Get data for a specific round.

        Raises
        ------
        RoundNotFoundException
            If the round does not exist.
        """
        if 1 <= round_number <= len(self.rounds):
            return self.rounds[round_number - 1]
        raise RoundNotFoundException(
            f"Round {round_number} does not exist in tournament {self.id}"
        )

    def find_match(self, match_id: str) -> Tuple[RoundData, Match]:
        """Locate a match and the round holding it.

        Raises
        ------
        MatchNotFoundException
            If no round holds the match.
        """
        for round_data in self.rounds:
            match = round_data.get_match(match_id)
            if match is not None:
                return round_data, match
        raise MatchNotFoundException(
            f"Match {match_id} not found in tournament {self.id}"
        )

    def played_pairs(self) -> Set[PlayedPair]:
        """Every pair of players that has been paired, byes excluded."""
        pairs = set()
        for round_data in self.rounds:
            for match in round_data.matches:
                if not match.is_bye:
                    pairs.add(frozenset({match.player1_id, match.player2_id}))
        return pairs

    def copy(self) -> "Tournament":
        """Independent deep copy, used for copy-on-write updates."""
        return copy.deepcopy(self)

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        return {
            "id": self.id,
            "config": self.config.to_dict(),
            "status": self.status.value,
            "roster": [entry.to_dict() for entry in self.roster],
            "rounds": [round_data.to_dict() for round_data in self.rounds],
            "player_states": {
                pid: state.to_dict() for pid, state in self.player_states.items()
            },
            "final_standings": (
                [entry.to_dict() for entry in self.final_standings]
                if self.final_standings is not None
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary."""
        final_standings = data.get("final_standings")
        return cls(
            id=data["id"],
            config=config_from_dict(data["config"]),
            status=TournamentStatus(data.get("status", TournamentStatus.UPCOMING.value)),
            roster=[RosterEntry.from_dict(e) for e in data.get("roster", [])],
            rounds=[RoundData.from_dict(r) for r in data.get("rounds", [])],
            player_states={
                pid: PlayerTournamentState.from_dict(state)
                for pid, state in data.get("player_states", {}).items()
            },
            final_standings=(
                [StandingEntry.from_dict(e) for e in final_standings]
                if final_standings is not None
                else None
            ),
        )
