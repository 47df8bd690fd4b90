"""Player registry: where tournaments look players up."""

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

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from gopairing.constants import PLAYERS_FILE_NAME
from gopairing.exceptions import (
    DuplicatePlayerException,
    FileLoadException,
    FileSaveException,
    PlayerNotFoundException,
)
from gopairing.models.player import Player
from gopairing.utils import setup_logger

logger = setup_logger(__name__)


class PlayerRegistry(ABC):
    """Read access to registered players."""

    @abstractmethod
    async def get_player(self, player_id: str) -> Player:
        """Look a player up.

        Raises:
            PlayerNotFoundException: If the id is unknown
        """

    @abstractmethod
    async def list_players(self) -> List[Player]:
        """Every registered player."""


class InMemoryPlayerRegistry(PlayerRegistry):
    """Registry backed by a dict."""

    def __init__(self, players: Optional[Iterable[Player]] = None) -> None:
        self._players: Dict[str, Player] = {}
        for player in players or []:
            self.add_player(player)

    def add_player(self, player: Player) -> Player:
        if player.id in self._players:
            raise DuplicatePlayerException(f"Player {player.id} already registered")
        self._players[player.id] = player
        return player

    async def get_player(self, player_id: str) -> Player:
        player = self._players.get(player_id)
        if player is None:
            raise PlayerNotFoundException(f"Player {player_id} not found")
        return player

    async def list_players(self) -> List[Player]:
        return list(self._players.values())


class JsonFilePlayerRegistry(InMemoryPlayerRegistry):
    """Registry persisted as a single JSON file.

    Args:
        path: JSON file, or a directory holding ``players.json``
    """

    def __init__(self, path: Union[str, Path]) -> None:
        path = Path(path)
        self.path = path / PLAYERS_FILE_NAME if path.is_dir() else path
        super().__init__()
        self._players = {player.id: player for player in self._load()}

    def _load(self) -> List[Player]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return [Player.from_dict(item) for item in data.get("players", [])]
        except (OSError, ValueError, KeyError) as e:
            logger.error(f"Could not load players from {self.path}: {e}")
            raise FileLoadException(f"Could not load {self.path}: {e}") from e

    def add_player(self, player: Player) -> Player:
        super().add_player(player)
        self.save()
        return player

    def save(self) -> None:
        payload = {"players": [p.to_dict() for p in self._players.values()]}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
        except OSError as e:
            logger.error(f"Could not save players to {self.path}: {e}")
            raise FileSaveException(f"Could not save {self.path}: {e}") from e
