"""Pairing systems, one per tournament format."""

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

from typing import Dict

from gopairing.models.enums import TournamentFormat
from gopairing.pairing.base import PairingSystem, check_can_pair
from gopairing.pairing.elimination import DoubleEliminationPairing, EliminationPairing
from gopairing.pairing.mcmahon import McMahonPairing
from gopairing.pairing.round_robin import RoundRobin, RoundRobinPairing
from gopairing.pairing.swiss import SwissPairing

PAIRING_SYSTEMS: Dict[TournamentFormat, PairingSystem] = {
    TournamentFormat.ROUND_ROBIN: RoundRobinPairing(),
    TournamentFormat.SINGLE_ELIMINATION: EliminationPairing(),
    TournamentFormat.DOUBLE_ELIMINATION: DoubleEliminationPairing(),
    TournamentFormat.SWISS: SwissPairing(),
    TournamentFormat.MCMAHON: McMahonPairing(),
}


def get_pairing_system(tournament_format: TournamentFormat) -> PairingSystem:
    """The pairing system for a format."""
    return PAIRING_SYSTEMS[tournament_format]


__all__ = [
    "DoubleEliminationPairing",
    "EliminationPairing",
    "McMahonPairing",
    "PAIRING_SYSTEMS",
    "PairingSystem",
    "RoundRobin",
    "RoundRobinPairing",
    "SwissPairing",
    "check_can_pair",
    "get_pairing_system",
]
