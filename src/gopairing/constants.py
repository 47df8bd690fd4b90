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

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"
PLAYERS_FILE_NAME = "players.json"

# Game outcome scores
WIN_SCORE = 2
DRAW_SCORE = 1
LOSS_SCORE = 0

# A bye is worth half a win
BYE_SCORE = WIN_SCORE // 2

# Minimum roster size for any pairing
MIN_PLAYERS = 2

# Standings: total scores closer than this are tied
TOTAL_SCORE_EPSILON = 0.001

# Rank limits
MIN_DAN = 1
MAX_DAN = 9
MIN_KYU = 1
MAX_KYU = 30
# Numeric value of 1 dan; 1 kyu is one step below
DAN_BASE_VALUE = 29
KYU_BASE_VALUE = 30

# McMahon defaults
DEFAULT_UPPER_BAR = "5d"
DEFAULT_MCMAHON_INITIAL_SCORE = 6
DEFAULT_MCMAHON_MINIMUM_SCORE = -12
DEFAULT_MAX_RANK_DISTANCE = 3

# McMahon starting score per rank band
MCMAHON_STRONG_DAN_SCORE = 6  # 5d and above
MCMAHON_DAN_SCORE = 0  # 1d - 4d
MCMAHON_HIGH_KYU_SCORE = -6  # 1k - 5k
MCMAHON_LOW_KYU_SCORE = -12  # 6k and below
MCMAHON_STRONG_DAN_FROM = 5
MCMAHON_HIGH_KYU_UNTIL = 5

# Rank bands
OPEN_BAND_FROM_DAN = 6
OPEN_BAND_MIN_STRONG_PLAYERS = 8

# Swiss
DEFAULT_SWISS_ROUNDS = 4

# Maximum number of nodes visited by the backtracking pairing search
PAIRING_SEARCH_LIMIT = 20000

# Format identifiers (serialized)
FORMAT_ROUND_ROBIN = "ROUND_ROBIN"
FORMAT_SINGLE_ELIMINATION = "SINGLE_ELIMINATION"
FORMAT_DOUBLE_ELIMINATION = "DOUBLE_ELIMINATION"
FORMAT_SWISS = "SWISS"
FORMAT_MCMAHON = "MCMAHON"

# Elimination: losses that knock a player out
SINGLE_ELIMINATION_MAX_LOSSES = 1
DOUBLE_ELIMINATION_MAX_LOSSES = 2
