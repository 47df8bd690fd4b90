import pytest

from gopairing.controllers.tournament import LifecycleManager
from gopairing.exceptions import (
    EndConditionsNotMetException,
    InvalidWinnerException,
    NoPairingAvailableException,
)
from gopairing.models.player import Player
from gopairing.models.rank import rank_value
from gopairing.models.tournament import DoubleEliminationConfig, SingleEliminationConfig

RANKS = ["6d", "4d", "2d", "1k", "3k", "5k", "8k", "12k"]


def _knockout(config, ranks):
    lifecycle = LifecycleManager()
    tournament = lifecycle.create_tournament(config)
    for i, rank in enumerate(ranks, start=1):
        tournament = lifecycle.add_player(
            tournament, Player(id=f"p{i}", name=f"Player {i}", rank=rank)
        )
    return lifecycle, tournament


def _play_stronger_wins(lifecycle, tournament):
    for match in tournament.current_round.pending_matches:
        rank1 = tournament.get_roster_entry(match.player1_id).rank
        rank2 = tournament.get_roster_entry(match.player2_id).rank
        winner = (
            match.player1_id
            if rank_value(rank1) >= rank_value(rank2)
            else match.player2_id
        )
        tournament = lifecycle.record_result(tournament, match.id, winner)
    return tournament


def _round_players(round_data):
    return sorted(pid for m in round_data.matches for pid in m.player_ids)


def test_single_elimination_halves_the_field():
    lifecycle, tournament = _knockout(SingleEliminationConfig(seed=7), RANKS)

    expected_sizes = [8, 4, 2]
    for size in expected_sizes:
        tournament = lifecycle.generate_next_round(tournament)
        round_data = tournament.current_round
        assert len(_round_players(round_data)) == size
        assert all(not m.is_bye for m in round_data.matches)
        losers = [
            pid for pid, s in tournament.player_states.items() if s.losses > 0
        ]
        assert not set(losers) & set(_round_players(round_data))
        tournament = _play_stronger_wins(lifecycle, tournament)

    with pytest.raises(NoPairingAvailableException):
        lifecycle.generate_next_round(tournament)

    finished = lifecycle.end_tournament(tournament)
    assert finished.final_standings[0].player_id == "p1"
    assert finished.final_standings[0].wins == 3


def test_same_seed_gives_same_draw():
    _, first = _knockout(SingleEliminationConfig(seed=42), RANKS)
    lifecycle, second = _knockout(SingleEliminationConfig(seed=42), RANKS)
    first = lifecycle.generate_next_round(first)
    second = lifecycle.generate_next_round(second)
    assert [m.player_ids for m in first.current_round.matches] == [
        m.player_ids for m in second.current_round.matches
    ]


def test_odd_field_bye_advances_without_loss():
    lifecycle, tournament = _knockout(SingleEliminationConfig(seed=3), RANKS[:5])
    tournament = lifecycle.generate_next_round(tournament)
    byes = tournament.current_round.bye_player_ids
    assert len(byes) == 1
    tournament = _play_stronger_wins(lifecycle, tournament)

    tournament = lifecycle.generate_next_round(tournament)
    assert byes[0] in _round_players(tournament.current_round)


def test_cannot_end_while_players_remain():
    lifecycle, tournament = _knockout(SingleEliminationConfig(seed=1), RANKS[:4])
    tournament = lifecycle.generate_next_round(tournament)
    tournament = _play_stronger_wins(lifecycle, tournament)
    with pytest.raises(EndConditionsNotMetException):
        lifecycle.end_tournament(tournament)


def test_draws_are_rejected():
    lifecycle, tournament = _knockout(SingleEliminationConfig(seed=1), RANKS[:4])
    tournament = lifecycle.generate_next_round(tournament)
    match = tournament.current_round.matches[0]
    with pytest.raises(InvalidWinnerException):
        lifecycle.record_result(tournament, match.id, None, draw=True)


def test_double_elimination_keeps_one_loss_players():
    lifecycle, tournament = _knockout(DoubleEliminationConfig(seed=5), RANKS[:4])
    tournament = lifecycle.generate_next_round(tournament)
    tournament = _play_stronger_wins(lifecycle, tournament)
    tournament = lifecycle.generate_next_round(tournament)
    assert _round_players(tournament.current_round) == ["p1", "p2", "p3", "p4"]

    # winners meet winners, losers meet losers
    states = tournament.player_states
    for match in tournament.current_round.matches:
        assert states[match.player1_id].losses == states[match.player2_id].losses


def test_double_elimination_runs_to_a_single_survivor():
    lifecycle, tournament = _knockout(DoubleEliminationConfig(seed=11), RANKS)
    for _ in range(20):
        try:
            tournament = lifecycle.generate_next_round(tournament)
        except NoPairingAvailableException:
            break
        tournament = _play_stronger_wins(lifecycle, tournament)

    survivors = [pid for pid, s in tournament.player_states.items() if s.losses < 2]
    assert survivors == ["p1"]
    finished = lifecycle.end_tournament(tournament)
    assert finished.final_standings[0].player_id == "p1"
