"""Data model for tournament round."""

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

from gopairing.models.tournament.match import Match


@dataclass
class RoundData:
    """Container for all data related to a single tournament round.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed, contiguous).
    matches : list of Match
        Boards of the round in pairing order, byes included.
    """

    round_number: int
    matches: List[Match] = field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        """Every match has a winner, a draw or is a bye."""
        return all(match.is_decided for match in self.matches)

    @property
    def pending_matches(self) -> List[Match]:
        return [m for m in self.matches if not m.is_decided]

    @property
    def bye_player_ids(self) -> List[str]:
        return [m.player1_id for m in self.matches if m.is_bye]

    def get_match(self, match_id: str) -> Optional[Match]:
        for match in self.matches:
            if match.id == match_id:
                return match
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "round_number": self.round_number,
            "matches": [m.to_dict() for m in self.matches],
            "is_completed": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundData":
        """Deserialize round data from dictionary."""
        return cls(
            round_number=data["round_number"],
            matches=[Match.from_dict(m) for m in data.get("matches", [])],
        )
