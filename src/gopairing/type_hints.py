"""Type hints used in Go Pairing."""

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

from typing import Dict, FrozenSet, List, Optional, Tuple

PlayerId = str
# Ordered player ids, in roster order
PlayerIds = List[PlayerId]
# One board: (player1_id, player2_id); player2_id None means a bye
Board = Tuple[PlayerId, Optional[PlayerId]]
# Boards for one round
Boards = List[Board]
# Unordered pair of players who met
PlayedPair = FrozenSet[PlayerId]
# Player id -> score
ScoreTable = Dict[PlayerId, int]

#  LocalWords:  PlayedPair ScoreTable
