"""Data model for a standings row."""

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

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class StandingEntry:
    """One row of the standings table.

    Attributes
    ----------
    position : int
        1-based place.
    player_id, name, rank : str
        Roster snapshot of the player.
    score : int
        Tournament score.
    opponent_score : int
        Sum of the scores of every opponent met in a decided game.
    total_score : float
        Score adjusted by the strength of the opposition; used for ranking.
    wins, losses, draws, byes : int
        Tallies for this tournament.
    group : str or None
        McMahon band label.
    """

    position: int
    player_id: str
    name: str
    rank: str
    score: int
    opponent_score: int
    total_score: float
    wins: int = 0
    losses: int = 0
    draws: int = 0
    byes: int = 0
    group: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StandingEntry":
        return cls(**data)
