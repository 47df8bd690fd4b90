"""Enumerations shared by the tournament models."""

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

from enum import Enum

from gopairing.constants import (
    FORMAT_DOUBLE_ELIMINATION,
    FORMAT_MCMAHON,
    FORMAT_ROUND_ROBIN,
    FORMAT_SINGLE_ELIMINATION,
    FORMAT_SWISS,
)


class TournamentFormat(Enum):
    """Pairing format of a tournament."""

    ROUND_ROBIN = FORMAT_ROUND_ROBIN
    SINGLE_ELIMINATION = FORMAT_SINGLE_ELIMINATION
    DOUBLE_ELIMINATION = FORMAT_DOUBLE_ELIMINATION
    SWISS = FORMAT_SWISS
    MCMAHON = FORMAT_MCMAHON

    @property
    def is_elimination(self) -> bool:
        return self in (
            TournamentFormat.SINGLE_ELIMINATION,
            TournamentFormat.DOUBLE_ELIMINATION,
        )


class TournamentStatus(Enum):
    """Lifecycle status of a tournament."""

    UPCOMING = "UPCOMING"
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"


class MatchResult(Enum):
    """Outcome tag of a match."""

    PENDING = "PENDING"
    WIN = "WIN"
    DRAW = "DRAW"
    BYE = "BYE"


class RankBand(Enum):
    """Strength band used to label McMahon groups."""

    OPEN = "Open"
    DAN = "Dan"
    HIGH_KYU = "High-Kyu"
    LOW_KYU = "Low-Kyu"
