"""Shared pairing machinery.

Every pairing system takes a tournament and returns the matches of its next
round. All state used while pairing (who is still unpaired, the candidate
lists, the search budget) lives inside a single call.
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

from abc import ABC, abstractmethod
from typing import Callable, ClassVar, Dict, List, Optional, Sequence, Set, Tuple

from gopairing.constants import MIN_PLAYERS, PAIRING_SEARCH_LIMIT
from gopairing.exceptions import (
    InsufficientPlayersException,
    PairingException,
    PreviousRoundIncompleteException,
    TournamentNotOngoingOrUpcomingException,
)
from gopairing.models.enums import TournamentFormat, TournamentStatus
from gopairing.models.player import PlayerTournamentState
from gopairing.models.tournament import Match, Tournament
from gopairing.tournament.standings import recompute_player_states
from gopairing.type_hints import Boards, PlayedPair
from gopairing.utils import setup_logger

logger = setup_logger(__name__)

# (player, remaining unpaired players) -> candidates in preference order
PreferenceFn = Callable[[str, Sequence[str]], List[str]]
PairList = List[Tuple[str, str]]


def check_can_pair(tournament: Tournament) -> None:
    """Preconditions shared by every pairing system.

    Raises
    ------
    TournamentNotOngoingOrUpcomingException
        If the tournament is completed.
    InsufficientPlayersException
        If fewer than two players are registered.
    PreviousRoundIncompleteException
        If the latest round still has pending matches.
    """
    if tournament.status not in (TournamentStatus.UPCOMING, TournamentStatus.ONGOING):
        raise TournamentNotOngoingOrUpcomingException(
            f"Tournament {tournament.id} is {tournament.status.value}"
        )
    if len(tournament.roster) < MIN_PLAYERS:
        raise InsufficientPlayersException(
            f"At least {MIN_PLAYERS} players are needed, "
            f"tournament has {len(tournament.roster)}"
        )
    current = tournament.current_round
    if current is not None and not current.is_completed:
        raise PreviousRoundIncompleteException(
            f"Round {current.round_number} has "
            f"{len(current.pending_matches)} pending matches"
        )


def search_pairing(
    players: Sequence[str],
    preference: PreferenceFn,
    allowed: Callable[[str, str], bool],
    limit: int = PAIRING_SEARCH_LIMIT,
) -> Optional[PairList]:
    """Depth-first search for a perfect pairing of ``players``.

    The first unpaired player is always paired next, trying candidates in
    the order given by ``preference``; the first complete pairing found is
    returned. The search gives up after ``limit`` nodes.

    Args:
        players: Even number of player ids in pairing order
        preference: Orders the candidates for a player
        allowed: Whether two players may meet
        limit: Node budget

    Returns:
        List of (player, opponent) tuples, or None if nothing was found
    """
    if len(players) % 2 != 0:
        raise ValueError(f"Cannot pair an odd number of players ({len(players)})")

    budget = [limit]

    def _search(remaining: List[str]) -> Optional[PairList]:
        if not remaining:
            return []
        budget[0] -= 1
        if budget[0] < 0:
            return None
        player, rest = remaining[0], remaining[1:]
        for opponent in preference(player, rest):
            if not allowed(player, opponent):
                continue
            tail = _search([p for p in rest if p != opponent])
            if tail is not None:
                return [(player, opponent)] + tail
            if budget[0] < 0:
                return None
        return None

    return _search(list(players))


def greedy_pairing(players: Sequence[str], preference: PreferenceFn) -> PairList:
    """Pair each player with their first preferred candidate, rematches allowed."""
    remaining = list(players)
    pairs: PairList = []
    while len(remaining) >= 2:
        player, rest = remaining[0], remaining[1:]
        opponent = preference(player, rest)[0]
        pairs.append((player, opponent))
        remaining = [p for p in rest if p != opponent]
    return pairs


def bye_candidates(
    order: Sequence[str], states: Dict[str, PlayerTournamentState]
) -> List[str]:
    """Bye candidates, lowest placed first; players without a bye come first."""
    reversed_order = list(reversed(order))
    fresh = [pid for pid in reversed_order if states[pid].byes == 0]
    repeat = [pid for pid in reversed_order if states[pid].byes > 0]
    return fresh + repeat


def pair_with_optional_bye(
    order: Sequence[str],
    states: Dict[str, PlayerTournamentState],
    preference: PreferenceFn,
    played: Set[PlayedPair],
) -> Tuple[PairList, Optional[str]]:
    """Pair ``order`` without rematches when possible.

    With an odd count a bye is chosen from :func:`bye_candidates`, taking
    the first candidate whose removal leaves a rematch-free pairing. When
    no such pairing exists the greedy pass is used and rematches happen.

    Returns:
        Tuple of (pairs, bye player id or None)
    """

    def _not_played(a: str, b: str) -> bool:
        return frozenset({a, b}) not in played

    if len(order) % 2 == 0:
        pairs = search_pairing(order, preference, _not_played)
        if pairs is not None:
            return pairs, None
        logger.warning(
            f"No rematch-free pairing for {len(order)} players, allowing rematches"
        )
        return greedy_pairing(order, preference), None

    candidates = bye_candidates(order, states)
    for bye_id in candidates:
        rest = [pid for pid in order if pid != bye_id]
        pairs = search_pairing(rest, preference, _not_played)
        if pairs is not None:
            return pairs, bye_id

    bye_id = candidates[0]
    logger.warning(
        f"No rematch-free pairing for {len(order)} players, allowing rematches"
    )
    rest = [pid for pid in order if pid != bye_id]
    return greedy_pairing(rest, preference), bye_id


def in_order(player: str, remaining: Sequence[str]) -> List[str]:
    """Default preference: remaining players in pairing order."""
    return list(remaining)


class PairingSystem(ABC):
    """Base class of the pairing systems.

    Subclasses implement :meth:`pair`, returning the boards of the next round
    as (player1_id, player2_id) tuples, with ``None`` as second player for a
    bye.
    """

    FORMATS: ClassVar[Tuple[TournamentFormat, ...]] = ()

    def generate_round(self, tournament: Tournament) -> List[Match]:
        """Produce the matches of the next round.

        Args:
            tournament: The tournament to pair; it is not modified

        Returns:
            Matches in board order; byes are already decided

        Raises:
            TournamentNotOngoingOrUpcomingException: Tournament is completed
            InsufficientPlayersException: Fewer than two players
            PreviousRoundIncompleteException: Latest round not decided
            NoPairingAvailableException: The format has nothing left to pair
        """
        check_can_pair(tournament)
        round_number = len(tournament.rounds) + 1
        states = recompute_player_states(tournament)

        boards = self.pair(tournament, states, round_number)
        self._check_boards(boards)

        matches = []
        for player1_id, player2_id in boards:
            if player2_id is None:
                matches.append(Match.bye(player1_id, states[player1_id].score))
            else:
                matches.append(
                    Match(
                        player1_id=player1_id,
                        player2_id=player2_id,
                        player1_score=states[player1_id].score,
                        player2_score=states[player2_id].score,
                    )
                )

        logger.info(
            f"Paired round {round_number} of {tournament.id}: "
            f"{len(matches)} boards, byes: {[m.player1_id for m in matches if m.is_bye]}"
        )
        return matches

    @abstractmethod
    def pair(
        self,
        tournament: Tournament,
        states: Dict[str, PlayerTournamentState],
        round_number: int,
    ) -> Boards:
        """Boards of round ``round_number``."""

    @staticmethod
    def _check_boards(boards: Boards) -> None:
        seen: Set[str] = set()
        byes = 0
        for player1_id, player2_id in boards:
            if player1_id == player2_id:
                raise PairingException(f"Player {player1_id} paired with themself")
            for pid in (player1_id, player2_id):
                if pid is None:
                    continue
                if pid in seen:
                    raise PairingException(f"Player {pid} paired twice in one round")
                seen.add(pid)
            if player2_id is None:
                byes += 1
        if byes > 1:
            raise PairingException(f"{byes} byes in one round")

    @staticmethod
    def boards_from_pairs(pairs: PairList, bye_id: Optional[str]) -> Boards:
        boards: Boards = list(pairs)
        if bye_id is not None:
            boards.append((bye_id, None))
        return boards

    @staticmethod
    def roster_index(tournament: Tournament) -> Dict[str, int]:
        return {pid: index for index, pid in enumerate(tournament.player_ids)}
