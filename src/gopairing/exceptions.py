"""Exceptions for use in Go Pairing"""

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


# ========== Base Application Exception ==========


class GoPairingException(Exception):
    """Base exception for all Go Pairing errors.

    All custom exceptions in the package inherit from this class, so every
    engine error can be caught with a single except clause.
    """

    pass


class NotFoundException(GoPairingException):
    """Base exception for lookups of an entity that does not exist."""

    pass


# ========== Pairing Exceptions ==========


class PairingException(GoPairingException):
    """Base exception for pairing-related errors."""

    pass


class NoPairingAvailableException(PairingException):
    """Raised when the format has nothing left to pair."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(GoPairingException):
    """Base exception for tournament-related errors."""

    pass


class TournamentNotFoundException(TournamentException, NotFoundException):
    """Raised when a tournament id is unknown to the repository."""

    pass


class TournamentStateException(TournamentException):
    """Raised when an operation is not allowed in the tournament's current state."""

    pass


class TournamentAlreadyStartedException(TournamentStateException):
    """Raised when the roster is changed after the tournament has started."""

    pass


class TournamentNotOngoingOrUpcomingException(TournamentStateException):
    """Raised when pairing is requested for a completed tournament."""

    pass


class PreviousRoundIncompleteException(TournamentStateException):
    """Raised when a new round is requested while results are still pending."""

    pass


class InsufficientPlayersException(TournamentStateException):
    """Raised when the roster is too small to pair."""

    pass


class EndConditionsNotMetException(TournamentStateException):
    """Raised when a tournament is ended before its format allows it."""

    pass


class EmptyRosterException(TournamentStateException):
    """Raised when standings are requested for a tournament without players."""

    pass


class RoundNotFoundException(TournamentException, NotFoundException):
    """Raised when a round number does not exist."""

    pass


class MatchNotFoundException(TournamentException, NotFoundException):
    """Raised when a match id does not exist in any round."""

    pass


class DuplicatePlayerException(TournamentException):
    """Raised when adding a player that is already on the roster."""

    pass


# ========== Player Exceptions ==========


class PlayerException(GoPairingException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException, NotFoundException):
    """Raised when a player id is unknown to the registry."""

    pass


# ========== Result Exceptions ==========


class ResultException(GoPairingException):
    """Base exception for result recording errors."""

    pass


class InvalidWinnerException(ResultException):
    """Raised when the submitted winner or outcome does not fit the match."""

    pass


class ResultAlreadyRecordedException(ResultException):
    """Raised when a result is submitted for a match that is already decided."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(GoPairingException):
    """Base exception for validation errors."""

    pass


class InvalidRankFormatException(ValidationException):
    """Raised when a rank string is not of the form ``<n>d`` or ``<n>k``."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(GoPairingException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a save file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a save file cannot be written."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(ValidationException):
    """Base exception for tournament configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when a configuration value is out of range or inconsistent."""

    pass


class MissingConfigurationException(ConfigurationException):
    """Raised when a configuration value required by the format is absent."""

    pass
