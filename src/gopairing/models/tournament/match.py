"""Data model for a single match."""

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
from typing import Any, Dict, Optional, Tuple

from gopairing.models.enums import MatchResult
from gopairing.utils import generate_id


@dataclass
class Match:
    """One board of a round.

    A bye is a match without a second player. It is created already decided,
    with the bye recipient as winner and the ``BYE`` result tag.

    Attributes
    ----------
    player1_id : str
        First player.
    player2_id : str or None
        Second player, ``None`` for a bye.
    winner_id : str or None
        Winner once decided; ``None`` while pending and for draws.
    result : MatchResult
        Outcome tag.
    player1_score, player2_score : int or None
        Scores of the two players when the match was paired.
    id : str
        Unique identifier.
    """

    player1_id: str
    player2_id: Optional[str] = None
    winner_id: Optional[str] = None
    result: MatchResult = MatchResult.PENDING
    player1_score: Optional[int] = None
    player2_score: Optional[int] = None
    id: str = field(default_factory=lambda: generate_id("match_"))

    @classmethod
    def bye(cls, player_id: str, score: Optional[int] = None) -> "Match":
        """Create a decided bye match for ``player_id``."""
        return cls(
            player1_id=player_id,
            winner_id=player_id,
            result=MatchResult.BYE,
            player1_score=score,
        )

    @property
    def is_bye(self) -> bool:
        return self.player2_id is None

    @property
    def is_draw(self) -> bool:
        return self.result == MatchResult.DRAW

    @property
    def is_decided(self) -> bool:
        return self.result != MatchResult.PENDING

    @property
    def player_ids(self) -> Tuple[str, ...]:
        if self.player2_id is None:
            return (self.player1_id,)
        return (self.player1_id, self.player2_id)

    @property
    def loser_id(self) -> Optional[str]:
        if self.result != MatchResult.WIN:
            return None
        return self.opponent_of(self.winner_id)

    def involves(self, player_id: str) -> bool:
        return player_id in self.player_ids

    def opponent_of(self, player_id: str) -> Optional[str]:
        """The other player of the match, ``None`` for a bye."""
        if player_id == self.player1_id:
            return self.player2_id
        if player_id == self.player2_id:
            return self.player1_id
        raise ValueError(f"Player {player_id} is not part of match {self.id}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "winner_id": self.winner_id,
            "result": self.result.value,
            "player1_score": self.player1_score,
            "player2_score": self.player2_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        return cls(
            id=data["id"],
            player1_id=data["player1_id"],
            player2_id=data.get("player2_id"),
            winner_id=data.get("winner_id"),
            result=MatchResult(data.get("result", MatchResult.PENDING.value)),
            player1_score=data.get("player1_score"),
            player2_score=data.get("player2_score"),
        )
