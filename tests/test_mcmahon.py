import pytest

from gopairing.controllers.tournament import LifecycleManager
from gopairing.exceptions import (
    InvalidConfigurationException,
    MissingConfigurationException,
)
from gopairing.models.player import Player, PlayerTournamentState
from gopairing.models.tournament import McMahonConfig
from gopairing.pairing.mcmahon import McMahonPairing


def _mcmahon(ranks, **config_kwargs):
    config_kwargs.setdefault("round_count", 3)
    lifecycle = LifecycleManager()
    tournament = lifecycle.create_tournament(
        McMahonConfig(name="McMahon", **config_kwargs)
    )
    for name, rank in ranks:
        tournament = lifecycle.add_player(
            tournament, Player(id=name, name=name, rank=rank)
        )
    return lifecycle, tournament


def _pairs(round_data):
    return {frozenset(m.player_ids) for m in round_data.matches if not m.is_bye}


def _pair_with_scores(players):
    _, tournament = _mcmahon(
        [(name, rank) for name, rank, _ in players], max_rank_distance=2
    )
    states = {
        name: PlayerTournamentState(player_id=name, rank=rank, score=score)
        for name, rank, score in players
    }
    boards = McMahonPairing().pair(tournament, states, 1)
    return {frozenset(board) for board in boards}


def test_initial_scores_and_groups_come_from_rank():
    _, tournament = _mcmahon([("A", "6d"), ("B", "3d"), ("C", "2k"), ("D", "14k")])
    states = tournament.player_states
    assert [states[p].initial_score for p in "ABCD"] == [6, 0, -6, -12]
    assert [states[p].score for p in "ABCD"] == [6, 0, -6, -12]
    assert [states[p].group for p in "ABCD"] == ["Open", "Dan", "High-Kyu", "Low-Kyu"]


def test_pairs_within_groups_and_avoids_rematches():
    lifecycle, tournament = _mcmahon(
        [("A", "5d"), ("B", "3d"), ("C", "2k"), ("D", "10k")]
    )

    tournament = lifecycle.generate_next_round(tournament)
    assert _pairs(tournament.current_round) == {
        frozenset({"A", "B"}),
        frozenset({"C", "D"}),
    }
    for match in tournament.current_round.matches:
        winner = "A" if match.involves("A") else "C"
        tournament = lifecycle.record_result(tournament, match.id, winner)

    states = tournament.player_states
    assert [states[p].score for p in "ABCD"] == [8, 0, -4, -12]

    tournament = lifecycle.generate_next_round(tournament)
    assert _pairs(tournament.current_round) == {
        frozenset({"A", "C"}),
        frozenset({"B", "D"}),
    }


def test_odd_field_bye_goes_to_bottom_of_field():
    lifecycle, tournament = _mcmahon(
        [("A", "5d"), ("B", "3d"), ("C", "2k"), ("D", "10k"), ("E", "20k")]
    )
    tournament = lifecycle.generate_next_round(tournament)
    assert tournament.current_round.bye_player_ids == ["E"]
    assert tournament.player_states["E"].score == -12 + 1


def test_match_records_scores_at_pairing_time():
    lifecycle, tournament = _mcmahon([("A", "5d"), ("B", "3d")])
    tournament = lifecycle.generate_next_round(tournament)
    match = tournament.current_round.matches[0]
    assert {match.player1_score, match.player2_score} == {6, 0}


def test_round_count_is_required():
    lifecycle = LifecycleManager()
    with pytest.raises(MissingConfigurationException):
        lifecycle.create_tournament(McMahonConfig(name="No rounds"))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"round_count": 0},
        {"round_count": 3, "upper_bar": "12x"},
        {"round_count": 3, "initial_score": 2, "minimum_score": 4},
        {"round_count": 3, "max_rank_distance": -1},
    ],
)
def test_invalid_settings_are_rejected(kwargs):
    lifecycle = LifecycleManager()
    with pytest.raises(InvalidConfigurationException):
        lifecycle.create_tournament(McMahonConfig(name="Bad", **kwargs))


def test_custom_bar_changes_starting_scores():
    _, tournament = _mcmahon(
        [("A", "3d"), ("B", "1d"), ("C", "8k")],
        upper_bar="3d",
        initial_score=4,
        minimum_score=-5,
    )
    states = tournament.player_states
    assert [states[p].score for p in "ABC"] == [4, 0, -5]


def test_near_rank_beats_closer_score_across_groups():
    pairs = _pair_with_scores(
        [("A", "5d", 10), ("B", "1k", 8), ("C", "4d", 6), ("D", "2k", 6)]
    )
    assert pairs == {frozenset({"A", "C"}), frozenset({"B", "D"})}


def test_falls_back_to_nearest_position_when_no_rank_is_near():
    pairs = _pair_with_scores(
        [("A", "5d", 10), ("B", "5k", 8), ("C", "10k", 6), ("D", "12k", 6)]
    )
    assert pairs == {frozenset({"A", "B"}), frozenset({"C", "D"})}
