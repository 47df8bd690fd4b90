"""Player records."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from gopairing.models.rank import normalize_rank
from gopairing.utils import generate_id


@dataclass
class Player:
    """A player as held by the player registry.

    Attributes
    ----------
    id : str
        Unique identifier.
    name : str
        Display name.
    rank : str
        Go rank, for example ``"3d"`` or ``"12k"``.
    wins, losses, draws : int
        Career tallies across all tournaments. They belong to the registry and
        are stored and returned unchanged; tournament results never update
        them, see ``PlayerTournamentState`` for per-tournament counts.
    """

    name: str
    rank: str
    id: str = field(default_factory=lambda: generate_id("player_"))
    wins: int = 0
    losses: int = 0
    draws: int = 0

    def __post_init__(self) -> None:
        self.rank = normalize_rank(self.rank)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "rank": self.rank,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        return cls(
            id=data["id"],
            name=data["name"],
            rank=data["rank"],
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            draws=data.get("draws", 0),
        )


@dataclass
class RosterEntry:
    """Snapshot of a player taken when they joined a tournament."""

    player_id: str
    name: str
    rank: str

    @classmethod
    def from_player(cls, player: Player) -> "RosterEntry":
        return cls(player_id=player.id, name=player.name, rank=player.rank)

    def to_dict(self) -> Dict[str, Any]:
        return {"player_id": self.player_id, "name": self.name, "rank": self.rank}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RosterEntry":
        return cls(player_id=data["player_id"], name=data["name"], rank=data["rank"])


@dataclass
class PlayerTournamentState:
    """Per-tournament state of one player.

    Always derived from the roster and the match history; never edited
    in place by the lifecycle operations.

    Attributes
    ----------
    player_id : str
        Roster id of the player.
    rank : str
        Rank snapshot.
    score : int
        Current score, including ``initial_score``.
    initial_score : int
        McMahon starting score; 0 for the other formats.
    opponents : list of str
        Opponents played, in round order. Byes are not listed.
    wins, losses, draws, byes : int
        Tallies for this tournament.
    group : str or None
        McMahon band label, ``None`` for the other formats.
    """

    player_id: str
    rank: str
    score: int = 0
    initial_score: int = 0
    opponents: List[str] = field(default_factory=list)
    wins: int = 0
    losses: int = 0
    draws: int = 0
    byes: int = 0
    group: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "rank": self.rank,
            "score": self.score,
            "initial_score": self.initial_score,
            "opponents": list(self.opponents),
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "byes": self.byes,
            "group": self.group,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerTournamentState":
        return cls(
            player_id=data["player_id"],
            rank=data["rank"],
            score=data.get("score", 0),
            initial_score=data.get("initial_score", 0),
            opponents=list(data.get("opponents", [])),
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            draws=data.get("draws", 0),
            byes=data.get("byes", 0),
            group=data.get("group"),
        )
