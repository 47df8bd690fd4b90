"""Player state reducer and standings calculator.

Player states are never patched incrementally: every mutation of a
tournament is followed by :func:`recompute_player_states`, which rebuilds
them from the roster and the full match history.
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

import functools
from typing import Dict, List, Optional

from gopairing.constants import (
    BYE_SCORE,
    DRAW_SCORE,
    LOSS_SCORE,
    TOTAL_SCORE_EPSILON,
    WIN_SCORE,
)
from gopairing.exceptions import EmptyRosterException
from gopairing.models.enums import MatchResult, TournamentFormat
from gopairing.models.player import PlayerTournamentState
from gopairing.models.rank import band, mcmahon_initial_score
from gopairing.models.tournament import McMahonConfig, StandingEntry, Tournament
from gopairing.type_hints import ScoreTable
from gopairing.utils import setup_logger

logger = setup_logger(__name__)


class StandingsCalculator:
    """Derives player states and ranked standings from a tournament.

    Scoring:
    - Win: ``WIN_SCORE`` (2)
    - Draw: ``DRAW_SCORE`` (1) each
    - Bye: ``BYE_SCORE`` (1), counted in ``byes`` and not in ``wins``
    - Loss: ``LOSS_SCORE`` (0)

    Ranking uses the total score::

        total = score + (opponent_score / (max_score / 2) - rounds_played)

    where ``score`` counts result points only (a McMahon start score is
    left out), ``max_score`` is the best score in the field, never below 0, and
    ``rounds_played`` the number of rounds in the tournament. Totals within
    ``TOTAL_SCORE_EPSILON`` are tied; ties go to the winner of a direct
    game, otherwise roster order is kept.
    """

    # ========== Player States ==========

    def recompute_player_states(
        self, tournament: Tournament
    ) -> Dict[str, PlayerTournamentState]:
        """Rebuild every player state from the roster and match history.

        Args:
            tournament: The tournament to reduce

        Returns:
            Mapping of player id to a fresh PlayerTournamentState
        """
        states = self._initial_states(tournament)

        for round_data in tournament.rounds:
            for match in round_data.matches:
                missing = [pid for pid in match.player_ids if pid not in states]
                if missing:
                    logger.error(
                        f"Round {round_data.round_number}: match {match.id} "
                        f"references players outside the roster: {missing}"
                    )
                    continue

                player1 = states[match.player1_id]
                if match.is_bye:
                    if match.result == MatchResult.BYE:
                        player1.byes += 1
                        player1.score += BYE_SCORE
                    continue

                player2 = states[match.player2_id]
                player1.opponents.append(player2.player_id)
                player2.opponents.append(player1.player_id)

                if match.result == MatchResult.DRAW:
                    for state in (player1, player2):
                        state.draws += 1
                        state.score += DRAW_SCORE
                elif match.result == MatchResult.WIN:
                    winner = states[match.winner_id]
                    loser = states[match.loser_id]
                    winner.wins += 1
                    winner.score += WIN_SCORE
                    loser.losses += 1
                    loser.score += LOSS_SCORE

        return states

    def _initial_states(
        self, tournament: Tournament
    ) -> Dict[str, PlayerTournamentState]:
        config = tournament.config
        is_mcmahon = tournament.format == TournamentFormat.MCMAHON
        roster_ranks = [entry.rank for entry in tournament.roster]

        states: Dict[str, PlayerTournamentState] = {}
        for entry in tournament.roster:
            initial_score = 0
            group = None
            if is_mcmahon and isinstance(config, McMahonConfig):
                initial_score = mcmahon_initial_score(
                    entry.rank,
                    upper_bar=config.upper_bar,
                    initial_score=config.initial_score,
                    minimum_score=config.minimum_score,
                )
                group = band(entry.rank, roster_ranks).value
            states[entry.player_id] = PlayerTournamentState(
                player_id=entry.player_id,
                rank=entry.rank,
                score=initial_score,
                initial_score=initial_score,
                group=group,
            )
        return states

    # ========== Standings ==========

    def compute_standings(self, tournament: Tournament) -> List[StandingEntry]:
        """Rank the roster.

        Args:
            tournament: The tournament to rank

        Returns:
            Standings rows, best first

        Raises:
            EmptyRosterException: If the tournament has no players
        """
        if not tournament.roster:
            raise EmptyRosterException(
                f"Tournament {tournament.id} has no players to rank"
            )

        states = self.recompute_player_states(tournament)
        # result points only; McMahon start scores are for pairing
        points = {
            pid: state.score - state.initial_score for pid, state in states.items()
        }
        opponent_scores = self._opponent_scores(tournament, points)
        max_score = max([0] + list(points.values()))
        rounds_played = len(tournament.rounds)

        rows: List[StandingEntry] = []
        for entry in tournament.roster:
            state = states[entry.player_id]
            opponent_score = opponent_scores[entry.player_id]
            rows.append(
                StandingEntry(
                    position=0,
                    player_id=entry.player_id,
                    name=entry.name,
                    rank=entry.rank,
                    score=points[entry.player_id],
                    opponent_score=opponent_score,
                    total_score=self.total_score(
                        points[entry.player_id], opponent_score, max_score, rounds_played
                    ),
                    wins=state.wins,
                    losses=state.losses,
                    draws=state.draws,
                    byes=state.byes,
                    group=state.group,
                )
            )

        head_to_head = self._head_to_head_wins(tournament)
        compare = functools.partial(self._compare_players, head_to_head=head_to_head)
        # sorted is stable: unresolved ties keep roster order
        ranked = sorted(rows, key=functools.cmp_to_key(compare))
        for position, row in enumerate(ranked, start=1):
            row.position = position
        return ranked

    @staticmethod
    def total_score(
        score: int, opponent_score: int, max_score: int, rounds_played: int
    ) -> float:
        """Score adjusted by opposition strength; no adjustment when max_score is 0."""
        if max_score == 0:
            return float(score)
        return score + (opponent_score / (max_score / 2) - rounds_played)

    def _opponent_scores(
        self, tournament: Tournament, points: ScoreTable
    ) -> ScoreTable:
        """Sum of final opponent points over decided, non-bye games."""
        totals = {pid: 0 for pid in points}
        for round_data in tournament.rounds:
            for match in round_data.matches:
                if match.is_bye or not match.is_decided:
                    continue
                if match.player1_id not in points or match.player2_id not in points:
                    continue
                totals[match.player1_id] += points[match.player2_id]
                totals[match.player2_id] += points[match.player1_id]
        return totals

    def _head_to_head_wins(
        self, tournament: Tournament
    ) -> Dict[frozenset, Dict[str, int]]:
        """Wins per player for every pair that met in a decided game."""
        records: Dict[frozenset, Dict[str, int]] = {}
        for round_data in tournament.rounds:
            for match in round_data.matches:
                if match.result != MatchResult.WIN or match.is_bye:
                    continue
                pair = frozenset({match.player1_id, match.player2_id})
                wins = records.setdefault(pair, {})
                wins[match.winner_id] = wins.get(match.winner_id, 0) + 1
        return records

    def _compare_players(
        self,
        a: StandingEntry,
        b: StandingEntry,
        head_to_head: Optional[Dict[frozenset, Dict[str, int]]] = None,
    ) -> int:
        """Comparison function for sorting; negative when ``a`` ranks higher."""
        if abs(a.total_score - b.total_score) >= TOTAL_SCORE_EPSILON:
            return -1 if a.total_score > b.total_score else 1

        if head_to_head:
            wins = head_to_head.get(frozenset({a.player_id, b.player_id}), {})
            a_wins = wins.get(a.player_id, 0)
            b_wins = wins.get(b.player_id, 0)
            if a_wins != b_wins:
                return -1 if a_wins > b_wins else 1

        return 0


_calculator = StandingsCalculator()


def recompute_player_states(tournament: Tournament) -> Dict[str, PlayerTournamentState]:
    """Rebuild player states from scratch; see StandingsCalculator."""
    return _calculator.recompute_player_states(tournament)


def compute_standings(tournament: Tournament) -> List[StandingEntry]:
    """Ranked standings; see StandingsCalculator."""
    return _calculator.compute_standings(tournament)
