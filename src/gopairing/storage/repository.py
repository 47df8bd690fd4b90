"""Tournament persistence."""

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

import copy
import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Union

from gopairing.constants import SAVE_FILE_EXTENSION
from gopairing.exceptions import (
    FileLoadException,
    FileSaveException,
    TournamentNotFoundException,
)
from gopairing.models.tournament import Tournament
from gopairing.utils import setup_logger

logger = setup_logger(__name__)


class TournamentRepository(ABC):
    """Load and save tournaments by id."""

    @abstractmethod
    async def load(self, tournament_id: str) -> Tournament:
        """Load a tournament.

        Raises:
            TournamentNotFoundException: If the id is unknown
        """

    @abstractmethod
    async def save(self, tournament: Tournament) -> None:
        """Store a tournament, replacing any previous version."""

    @abstractmethod
    async def list_ids(self) -> List[str]:
        """Ids of every stored tournament."""


class InMemoryTournamentRepository(TournamentRepository):
    """Repository holding deep copies in a dict."""

    def __init__(self) -> None:
        self._tournaments: Dict[str, Tournament] = {}

    async def load(self, tournament_id: str) -> Tournament:
        tournament = self._tournaments.get(tournament_id)
        if tournament is None:
            raise TournamentNotFoundException(f"Tournament {tournament_id} not found")
        return copy.deepcopy(tournament)

    async def save(self, tournament: Tournament) -> None:
        self._tournaments[tournament.id] = copy.deepcopy(tournament)

    async def list_ids(self) -> List[str]:
        return list(self._tournaments)


class JsonFileTournamentRepository(TournamentRepository):
    """One ``<id>.json`` file per tournament in a directory.

    Files are written to a temporary file first and moved into place, so a
    failed save leaves the previous version intact.
    """

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)

    def _path(self, tournament_id: str) -> Path:
        return self.directory / f"{tournament_id}{SAVE_FILE_EXTENSION}"

    async def load(self, tournament_id: str) -> Tournament:
        path = self._path(tournament_id)
        if not path.exists():
            raise TournamentNotFoundException(f"Tournament {tournament_id} not found")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return Tournament.from_dict(data)
        except (OSError, ValueError, KeyError) as e:
            logger.error(f"Could not load tournament from {path}: {e}")
            raise FileLoadException(f"Could not load {path}: {e}") from e

    async def save(self, tournament: Tournament) -> None:
        path = self._path(tournament.id)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.directory, suffix=SAVE_FILE_EXTENSION + ".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(tournament.to_dict(), f, indent=2)
                os.replace(tmp_path, path)
            finally:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
        except OSError as e:
            logger.error(f"Could not save tournament to {path}: {e}")
            raise FileSaveException(f"Could not save {path}: {e}") from e
        logger.debug(f"Saved tournament {tournament.id} to {path}")

    async def list_ids(self) -> List[str]:
        if not self.directory.exists():
            return []
        return sorted(
            p.name[: -len(SAVE_FILE_EXTENSION)]
            for p in self.directory.iterdir()
            if p.name.endswith(SAVE_FILE_EXTENSION)
        )
