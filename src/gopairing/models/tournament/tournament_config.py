"""Tournament configuration settings.

Each format has its own configuration class, so fields that only make
sense for one format (the McMahon bar and scores, the Swiss round count)
cannot be set on another.
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

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Dict, Optional, Type, Union

from dateutil import parser as date_parser

from gopairing.constants import (
    DEFAULT_MAX_RANK_DISTANCE,
    DEFAULT_MCMAHON_INITIAL_SCORE,
    DEFAULT_MCMAHON_MINIMUM_SCORE,
    DEFAULT_SWISS_ROUNDS,
    DEFAULT_UPPER_BAR,
)
from gopairing.exceptions import (
    InvalidConfigurationException,
    InvalidRankFormatException,
    MissingConfigurationException,
)
from gopairing.models.enums import TournamentFormat
from gopairing.models.rank import normalize_rank

DateLike = Union[str, datetime, None]


def parse_date(value: DateLike, field_name: str) -> Optional[datetime]:
    """Parse an ISO-8601 date or datetime string.

    Raises
    ------
    InvalidConfigurationException
        If the string is not a valid ISO-8601 date.
    """
    if value is None or isinstance(value, datetime):
        return value
    try:
        return date_parser.isoparse(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationException(
            f"{field_name} must be an ISO-8601 date, got {value!r}"
        ) from e


def _format_date(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass
class TournamentConfig:
    """Settings shared by every format.

    Attributes
    ----------
    name : str
        Tournament name.
    description : str
        Free text description.
    start_date, end_date : datetime or None
        Planned dates; strings are parsed as ISO-8601.
    seed : int or None
        Seed for the elimination shuffles, ``None`` for a fresh shuffle.
    """

    FORMAT: ClassVar[TournamentFormat]

    name: str = "Untitled Tournament"
    description: str = ""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self.start_date = parse_date(self.start_date, "start_date")
        self.end_date = parse_date(self.end_date, "end_date")

    @property
    def format(self) -> TournamentFormat:
        return self.FORMAT

    def validate(self) -> None:
        """Check the settings.

        Raises
        ------
        InvalidConfigurationException
            If a value is out of range or inconsistent.
        MissingConfigurationException
            If a value the format needs is missing.
        """
        if not self.name or not self.name.strip():
            raise MissingConfigurationException("Tournament name is required")
        if self.start_date is not None and self.end_date is not None:
            try:
                ends_early = self.end_date < self.start_date
            except TypeError as e:
                # naive vs aware datetimes
                raise InvalidConfigurationException(
                    "start_date and end_date must both carry a timezone or neither"
                ) from e
            if ends_early:
                raise InvalidConfigurationException(
                    "Tournament end date must not be before its start date"
                )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "format": self.FORMAT.value,
            "name": self.name,
            "description": self.description,
            "start_date": _format_date(self.start_date),
            "end_date": _format_date(self.end_date),
            "seed": self.seed,
        }

    @classmethod
    def _common_kwargs(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "name": data.get("name", "Untitled Tournament"),
            "description": data.get("description", ""),
            "start_date": data.get("start_date"),
            "end_date": data.get("end_date"),
            "seed": data.get("seed"),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(**cls._common_kwargs(data))


@dataclass
class RoundRobinConfig(TournamentConfig):
    """Every player meets every other player once."""

    FORMAT: ClassVar[TournamentFormat] = TournamentFormat.ROUND_ROBIN


@dataclass
class SingleEliminationConfig(TournamentConfig):
    """Knock-out on the first loss."""

    FORMAT: ClassVar[TournamentFormat] = TournamentFormat.SINGLE_ELIMINATION


@dataclass
class DoubleEliminationConfig(TournamentConfig):
    """Knock-out on the second loss."""

    FORMAT: ClassVar[TournamentFormat] = TournamentFormat.DOUBLE_ELIMINATION


@dataclass
class SwissConfig(TournamentConfig):
    """Swiss system settings.

    Attributes
    ----------
    round_count : int
        Number of rounds to play before the tournament can end.
    """

    FORMAT: ClassVar[TournamentFormat] = TournamentFormat.SWISS

    round_count: int = DEFAULT_SWISS_ROUNDS

    def validate(self) -> None:
        super().validate()
        if not isinstance(self.round_count, int) or self.round_count < 1:
            raise InvalidConfigurationException(
                f"round_count must be at least 1, got {self.round_count!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["round_count"] = self.round_count
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SwissConfig":
        return cls(
            round_count=data.get("round_count", DEFAULT_SWISS_ROUNDS),
            **cls._common_kwargs(data),
        )


@dataclass
class McMahonConfig(TournamentConfig):
    """McMahon system settings.

    Attributes
    ----------
    round_count : int or None
        Number of rounds; required.
    upper_bar : str
        Rank at and above which every player starts on ``initial_score``.
    initial_score : int
        Starting score of the players at or above the bar.
    minimum_score : int
        Floor for every starting score.
    max_rank_distance : int
        Largest rank gap allowed for a preferred cross-group pairing.
    """

    FORMAT: ClassVar[TournamentFormat] = TournamentFormat.MCMAHON

    round_count: Optional[int] = None
    upper_bar: str = DEFAULT_UPPER_BAR
    initial_score: int = DEFAULT_MCMAHON_INITIAL_SCORE
    minimum_score: int = DEFAULT_MCMAHON_MINIMUM_SCORE
    max_rank_distance: int = DEFAULT_MAX_RANK_DISTANCE

    def validate(self) -> None:
        super().validate()
        if self.round_count is None:
            raise MissingConfigurationException(
                "McMahon tournament requires: round_count"
            )
        if not isinstance(self.round_count, int) or self.round_count < 1:
            raise InvalidConfigurationException(
                f"round_count must be at least 1, got {self.round_count!r}"
            )
        try:
            self.upper_bar = normalize_rank(self.upper_bar)
        except InvalidRankFormatException as e:
            raise InvalidConfigurationException(f"Invalid upper_bar: {e}") from e
        if self.minimum_score > self.initial_score:
            raise InvalidConfigurationException(
                "minimum_score cannot be greater than initial_score"
            )
        if self.max_rank_distance < 0:
            raise InvalidConfigurationException(
                f"max_rank_distance must not be negative, got {self.max_rank_distance}"
            )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "round_count": self.round_count,
                "upper_bar": self.upper_bar,
                "initial_score": self.initial_score,
                "minimum_score": self.minimum_score,
                "max_rank_distance": self.max_rank_distance,
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "McMahonConfig":
        return cls(
            round_count=data.get("round_count"),
            upper_bar=data.get("upper_bar", DEFAULT_UPPER_BAR),
            initial_score=data.get("initial_score", DEFAULT_MCMAHON_INITIAL_SCORE),
            minimum_score=data.get("minimum_score", DEFAULT_MCMAHON_MINIMUM_SCORE),
            max_rank_distance=data.get(
                "max_rank_distance", DEFAULT_MAX_RANK_DISTANCE
            ),
            **cls._common_kwargs(data),
        )


CONFIG_CLASSES: Dict[TournamentFormat, Type[TournamentConfig]] = {
    TournamentFormat.ROUND_ROBIN: RoundRobinConfig,
    TournamentFormat.SINGLE_ELIMINATION: SingleEliminationConfig,
    TournamentFormat.DOUBLE_ELIMINATION: DoubleEliminationConfig,
    TournamentFormat.SWISS: SwissConfig,
    TournamentFormat.MCMAHON: McMahonConfig,
}


def _resolve_format(value: Union[str, TournamentFormat, None]) -> TournamentFormat:
    if isinstance(value, TournamentFormat):
        return value
    if value is None:
        raise MissingConfigurationException("Tournament format is required")
    try:
        return TournamentFormat(str(value).upper())
    except ValueError as e:
        raise InvalidConfigurationException(
            f"Unknown tournament format: {value!r}"
        ) from e


def config_from_dict(data: Dict[str, Any]) -> TournamentConfig:
    """Build the configuration class matching ``data["format"]``.

    Raises
    ------
    MissingConfigurationException
        If the format is absent.
    InvalidConfigurationException
        If the format is unknown or a date does not parse.
    """
    tournament_format = _resolve_format(data.get("format"))
    return CONFIG_CLASSES[tournament_format].from_dict(data)
