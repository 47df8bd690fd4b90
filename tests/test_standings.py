import pytest

from gopairing.controllers.tournament import LifecycleManager
from gopairing.exceptions import EmptyRosterException
from gopairing.models.enums import MatchResult
from gopairing.models.player import Player
from gopairing.models.tournament import Match, McMahonConfig, RoundData, SwissConfig
from gopairing.tournament.standings import (
    StandingsCalculator,
    compute_standings,
    recompute_player_states,
)


def _roster(player_ids, rank="1d", config=None):
    lifecycle = LifecycleManager()
    tournament = lifecycle.create_tournament(config or SwissConfig(name="Standings"))
    for pid in player_ids:
        tournament = lifecycle.add_player(tournament, Player(id=pid, name=pid, rank=rank))
    return tournament


def _win(winner, loser):
    return Match(
        player1_id=winner, player2_id=loser, winner_id=winner, result=MatchResult.WIN
    )


def test_total_score_formula():
    assert StandingsCalculator.total_score(4, 6, 4, 2) == pytest.approx(5.0)
    assert StandingsCalculator.total_score(2, 3, 4, 2) == pytest.approx(1.5)
    assert StandingsCalculator.total_score(3, 5, 0, 2) == 3.0


def test_head_to_head_breaks_equal_totals():
    tournament = _roster(["p2", "p1", "p4", "p3"])
    tournament.rounds = [RoundData(1, [_win("p1", "p2"), _win("p3", "p4")])]

    standings = compute_standings(tournament)
    totals = {row.player_id: row.total_score for row in standings}
    assert all(total == pytest.approx(1.0) for total in totals.values())

    order = [row.player_id for row in standings]
    assert order.index("p1") < order.index("p2")
    assert order.index("p3") < order.index("p4")
    assert [row.position for row in standings] == [1, 2, 3, 4]


def test_opponent_score_uses_final_scores():
    tournament = _roster(["a", "b", "c", "d"])
    tournament.rounds = [
        RoundData(1, [_win("a", "b"), _win("c", "d")]),
        RoundData(2, [_win("a", "c"), _win("b", "d")]),
    ]
    rows = {row.player_id: row for row in compute_standings(tournament)}
    assert rows["a"].score == 4
    assert rows["a"].opponent_score == 2 + 2
    assert rows["d"].opponent_score == 2 + 2
    assert rows["a"].total_score == pytest.approx(4 + (4 / 2 - 2))
    assert rows["a"].position == 1
    assert rows["d"].position == 4


def test_pending_games_do_not_count():
    tournament = _roster(["a", "b", "c", "d"])
    tournament.rounds = [
        RoundData(1, [_win("a", "b"), Match(player1_id="c", player2_id="d")])
    ]
    states = recompute_player_states(tournament)
    assert states["c"].opponents == ["d"]
    assert states["c"].score == 0

    rows = {row.player_id: row for row in compute_standings(tournament)}
    assert rows["c"].opponent_score == 0
    assert rows["b"].opponent_score == 2


def test_bye_counts_as_one_point_not_a_win():
    tournament = _roster(["a", "b", "c"])
    tournament.rounds = [RoundData(1, [_win("a", "b"), Match.bye("c")])]
    states = recompute_player_states(tournament)
    assert states["c"].score == 1
    assert states["c"].byes == 1
    assert states["c"].wins == 0
    assert states["c"].opponents == []

    rows = {row.player_id: row for row in compute_standings(tournament)}
    assert rows["c"].byes == 1
    assert rows["c"].opponent_score == 0


def test_no_points_means_no_adjustment():
    tournament = _roster(["a", "b"])
    tournament.rounds = [RoundData(1, [Match(player1_id="a", player2_id="b")])]
    standings = compute_standings(tournament)
    assert [row.total_score for row in standings] == [0.0, 0.0]
    assert [row.player_id for row in standings] == ["a", "b"]


def test_empty_roster_has_no_standings():
    tournament = _roster([])
    with pytest.raises(EmptyRosterException):
        compute_standings(tournament)


def test_mcmahon_start_scores_stay_out_of_standings():
    config = McMahonConfig(name="McMahon", round_count=2)
    tournament = _roster(["strong"], rank="6d", config=config)
    tournament = LifecycleManager().add_player(
        tournament, Player(id="club", name="club", rank="3d")
    )
    assert tournament.player_states["strong"].score == 6

    standings = compute_standings(tournament)
    assert [(row.score, row.total_score) for row in standings] == [(0, 0.0), (0, 0.0)]


def test_kyu_mcmahon_field_rewards_stronger_opposition():
    config = McMahonConfig(name="Kyu McMahon", round_count=2)
    tournament = _roster(["a", "b", "d", "c"], rank="9k", config=config)
    tournament.rounds = [
        RoundData(1, [_win("a", "b"), _win("c", "d")]),
        RoundData(2, [_win("a", "c"), _win("d", "b")]),
    ]
    rows = {row.player_id: row for row in compute_standings(tournament)}

    assert [rows[p].score for p in "abcd"] == [4, 0, 2, 2]
    assert rows["c"].opponent_score == 2 + 4
    assert rows["d"].opponent_score == 2 + 0
    assert rows["c"].total_score == pytest.approx(2 + (6 / 2 - 2))
    assert rows["d"].total_score == pytest.approx(2 + (2 / 2 - 2))
    assert rows["c"].position < rows["d"].position
