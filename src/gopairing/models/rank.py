"""Go ranks.

Ranks are written as a number followed by ``d`` (dan) or ``k`` (kyu), for
example ``5d`` or ``12k``. Dan ranks count up from 1d, kyu ranks count down
towards 1k, and every dan rank is stronger than every kyu rank.

The numeric scale used for comparisons places adjacent ranks one step apart::

    30k = 0, ..., 1k = 29, 1d = 30, ..., 9d = 38
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

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from gopairing.constants import (
    DAN_BASE_VALUE,
    DEFAULT_MCMAHON_INITIAL_SCORE,
    DEFAULT_MCMAHON_MINIMUM_SCORE,
    DEFAULT_UPPER_BAR,
    KYU_BASE_VALUE,
    MAX_DAN,
    MAX_KYU,
    MCMAHON_DAN_SCORE,
    MCMAHON_HIGH_KYU_SCORE,
    MCMAHON_HIGH_KYU_UNTIL,
    MCMAHON_LOW_KYU_SCORE,
    MCMAHON_STRONG_DAN_FROM,
    MCMAHON_STRONG_DAN_SCORE,
    MIN_DAN,
    MIN_KYU,
    OPEN_BAND_FROM_DAN,
    OPEN_BAND_MIN_STRONG_PLAYERS,
)
from gopairing.exceptions import InvalidRankFormatException
from gopairing.models.enums import RankBand

DAN = "d"
KYU = "k"

_RANK_RE = re.compile(r"^\s*(\d{1,2})\s*([dDkK])\s*$")


@dataclass(frozen=True)
class Rank:
    """A parsed go rank.

    Attributes
    ----------
    level : int
        The number part of the rank (1-9 for dan, 1-30 for kyu).
    kind : str
        ``"d"`` for dan, ``"k"`` for kyu.
    """

    level: int
    kind: str

    @property
    def is_dan(self) -> bool:
        return self.kind == DAN

    @property
    def value(self) -> int:
        """Position on the total order; higher is stronger."""
        if self.is_dan:
            return DAN_BASE_VALUE + self.level
        return KYU_BASE_VALUE - self.level

    def __str__(self) -> str:
        return f"{self.level}{self.kind}"


RankLike = Union[str, Rank]


def parse_rank(rank: RankLike) -> Rank:
    """Parse a rank string such as ``"5d"`` or ``"12K"``.

    Parameters
    ----------
    rank : str or Rank
        The rank to parse. A :class:`Rank` is returned unchanged.

    Returns
    -------
    Rank
        The parsed rank, with ``kind`` normalised to lower case.

    Raises
    ------
    InvalidRankFormatException
        If the string is malformed or out of range.
    """
    if isinstance(rank, Rank):
        return rank
    if not isinstance(rank, str):
        raise InvalidRankFormatException(f"Rank must be a string, got {rank!r}")

    match = _RANK_RE.match(rank)
    if match is None:
        raise InvalidRankFormatException(f"Invalid rank format: {rank!r}")

    level = int(match.group(1))
    kind = match.group(2).lower()
    if kind == DAN and not (MIN_DAN <= level <= MAX_DAN):
        raise InvalidRankFormatException(
            f"Dan rank must be between {MIN_DAN}d and {MAX_DAN}d, got {rank!r}"
        )
    if kind == KYU and not (MIN_KYU <= level <= MAX_KYU):
        raise InvalidRankFormatException(
            f"Kyu rank must be between {MIN_KYU}k and {MAX_KYU}k, got {rank!r}"
        )
    return Rank(level=level, kind=kind)


def normalize_rank(rank: RankLike) -> str:
    """Canonical string form of a rank (``" 3 D "`` -> ``"3d"``)."""
    return str(parse_rank(rank))


def rank_value(rank: RankLike) -> int:
    """Numeric value of a rank; every dan is above every kyu."""
    return parse_rank(rank).value


def rank_distance(a: RankLike, b: RankLike) -> int:
    """Number of rank steps between two ranks."""
    return abs(rank_value(a) - rank_value(b))


def is_within_distance(a: RankLike, b: RankLike, max_distance: int) -> bool:
    return rank_distance(a, b) <= max_distance


def band(rank: RankLike, roster_ranks: Optional[Iterable[RankLike]] = None) -> RankBand:
    """Strength band of a rank.

    5d players play in the Open band only while the field has fewer than
    ``OPEN_BAND_MIN_STRONG_PLAYERS`` players of 6d and above.

    Parameters
    ----------
    rank : str or Rank
        The rank to classify.
    roster_ranks : iterable, optional
        Ranks of the whole field. Without it 5d counts as Open.

    Returns
    -------
    RankBand
    """
    parsed = parse_rank(rank)
    if parsed.is_dan:
        if parsed.level >= OPEN_BAND_FROM_DAN:
            return RankBand.OPEN
        if parsed.level == OPEN_BAND_FROM_DAN - 1:
            if roster_ranks is None:
                return RankBand.OPEN
            strong = sum(
                1
                for other in roster_ranks
                if parse_rank(other).is_dan
                and parse_rank(other).level >= OPEN_BAND_FROM_DAN
            )
            if strong < OPEN_BAND_MIN_STRONG_PLAYERS:
                return RankBand.OPEN
        return RankBand.DAN
    if parsed.level <= MCMAHON_HIGH_KYU_UNTIL:
        return RankBand.HIGH_KYU
    return RankBand.LOW_KYU


def default_initial_score(rank: RankLike) -> int:
    """McMahon starting score of a rank band.

    5d and above start at 6, 1d-4d at 0, 1k-5k at -6, 6k and below at -12.
    """
    parsed = parse_rank(rank)
    if parsed.is_dan:
        if parsed.level >= MCMAHON_STRONG_DAN_FROM:
            return MCMAHON_STRONG_DAN_SCORE
        return MCMAHON_DAN_SCORE
    if parsed.level <= MCMAHON_HIGH_KYU_UNTIL:
        return MCMAHON_HIGH_KYU_SCORE
    return MCMAHON_LOW_KYU_SCORE


def mcmahon_initial_score(
    rank: RankLike,
    upper_bar: RankLike = DEFAULT_UPPER_BAR,
    initial_score: int = DEFAULT_MCMAHON_INITIAL_SCORE,
    minimum_score: int = DEFAULT_MCMAHON_MINIMUM_SCORE,
) -> int:
    """McMahon starting score of a player.

    Players at or above the upper bar all start on ``initial_score``. Below
    the bar the band score applies, capped at ``initial_score`` and never
    lower than ``minimum_score``.
    """
    if rank_value(rank) >= rank_value(upper_bar):
        score = initial_score
    else:
        score = min(default_initial_score(rank), initial_score)
    return max(score, minimum_score)


def rank_from_value(value: int) -> str:
    """Inverse of :func:`rank_value`, clamped to 30k-9d."""
    lowest = KYU_BASE_VALUE - MAX_KYU
    highest = DAN_BASE_VALUE + MAX_DAN
    value = max(lowest, min(highest, value))
    if value > DAN_BASE_VALUE:
        return f"{value - DAN_BASE_VALUE}{DAN}"
    return f"{KYU_BASE_VALUE - value}{KYU}"
