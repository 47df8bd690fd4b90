import pytest

from gopairing.controllers.tournament import LifecycleManager
from gopairing.exceptions import (
    DuplicatePlayerException,
    InsufficientPlayersException,
    MissingConfigurationException,
    InvalidRankFormatException,
    InvalidWinnerException,
    MatchNotFoundException,
    PreviousRoundIncompleteException,
    ResultAlreadyRecordedException,
    RoundNotFoundException,
    TournamentAlreadyStartedException,
    TournamentNotOngoingOrUpcomingException,
    TournamentStateException,
)
from gopairing.models.enums import MatchResult, TournamentFormat, TournamentStatus
from gopairing.models.player import Player
from gopairing.models.tournament import McMahonConfig, SwissConfig
from gopairing.tournament.standings import compute_standings, recompute_player_states

RANKS = ["5d", "3d", "1d", "2k", "6k", "11k"]


def _tournament(ranks=RANKS, round_count=3):
    lifecycle = LifecycleManager()
    tournament = lifecycle.create_tournament(
        SwissConfig(name="Lifecycle", round_count=round_count)
    )
    for i, rank in enumerate(ranks, start=1):
        tournament = lifecycle.add_player(
            tournament, Player(id=f"p{i}", name=f"Player {i}", rank=rank)
        )
    return lifecycle, tournament


def _play_round(lifecycle, tournament):
    tournament = lifecycle.generate_next_round(tournament)
    for match in tournament.current_round.pending_matches:
        tournament = lifecycle.record_result(tournament, match.id, match.player1_id)
    return tournament


def _first_pending(tournament):
    return tournament.current_round.pending_matches[0]


# ========== Roster ==========


def test_new_tournament_is_upcoming():
    lifecycle, tournament = _tournament()
    assert tournament.status == TournamentStatus.UPCOMING
    assert tournament.player_ids == ["p1", "p2", "p3", "p4", "p5", "p6"]
    assert set(tournament.player_states) == set(tournament.player_ids)


def test_add_player_returns_new_tournament():
    lifecycle, tournament = _tournament(RANKS[:2])
    updated = lifecycle.add_player(tournament, Player(id="p9", name="Late", rank="4K"))
    assert len(tournament.roster) == 2
    assert len(updated.roster) == 3
    assert updated.get_roster_entry("p9").rank == "4k"


def test_duplicate_player_is_rejected():
    lifecycle, tournament = _tournament(RANKS[:2])
    with pytest.raises(DuplicatePlayerException):
        lifecycle.add_player(tournament, Player(id="p1", name="Again", rank="1d"))


def test_malformed_rank_is_rejected():
    with pytest.raises(InvalidRankFormatException):
        Player(id="x", name="Nobody", rank="strong")


def test_players_cannot_join_after_start():
    lifecycle, tournament = _tournament()
    tournament = lifecycle.generate_next_round(tournament)
    assert tournament.status == TournamentStatus.ONGOING
    with pytest.raises(TournamentAlreadyStartedException):
        lifecycle.add_player(tournament, Player(id="p9", name="Late", rank="4k"))


def test_settings_can_change_before_start():
    lifecycle, tournament = _tournament()
    updated = lifecycle.update_tournament(
        tournament, McMahonConfig(name="Renamed", round_count=4)
    )
    assert updated.name == "Renamed"
    assert updated.format == TournamentFormat.MCMAHON
    assert updated.player_ids == tournament.player_ids
    assert updated.player_states["p1"].score == 6
    assert tournament.format == TournamentFormat.SWISS


def test_invalid_settings_are_rejected():
    lifecycle, tournament = _tournament()
    with pytest.raises(MissingConfigurationException):
        lifecycle.update_tournament(tournament, McMahonConfig(name="No rounds"))
    assert tournament.name == "Lifecycle"


def test_settings_are_frozen_after_start():
    lifecycle, tournament = _tournament()
    tournament = lifecycle.generate_next_round(tournament)
    with pytest.raises(TournamentAlreadyStartedException):
        lifecycle.update_tournament(tournament, SwissConfig(name="Late", round_count=5))


def test_single_player_cannot_be_paired():
    lifecycle, tournament = _tournament(RANKS[:1])
    with pytest.raises(InsufficientPlayersException):
        lifecycle.generate_next_round(tournament)


# ========== Rounds and results ==========


def test_next_round_needs_previous_round_decided():
    lifecycle, tournament = _tournament()
    tournament = lifecycle.generate_next_round(tournament)
    with pytest.raises(PreviousRoundIncompleteException):
        lifecycle.generate_next_round(tournament)


def test_result_is_recorded_exactly_once():
    lifecycle, tournament = _tournament()
    tournament = lifecycle.generate_next_round(tournament)
    match = _first_pending(tournament)

    tournament = lifecycle.record_result(tournament, match.id, match.player2_id)
    before = [row.to_dict() for row in lifecycle.get_standings(tournament)]
    assert tournament.player_states[match.player2_id].wins == 1
    assert tournament.player_states[match.player2_id].score == 2
    assert tournament.player_states[match.player1_id].losses == 1

    with pytest.raises(ResultAlreadyRecordedException):
        lifecycle.record_result(tournament, match.id, match.player2_id)
    with pytest.raises(ResultAlreadyRecordedException):
        lifecycle.record_result(tournament, match.id, match.player1_id)

    after = [row.to_dict() for row in lifecycle.get_standings(tournament)]
    assert after == before


def test_failed_operations_leave_the_input_untouched():
    lifecycle, tournament = _tournament()
    tournament = lifecycle.generate_next_round(tournament)
    match = _first_pending(tournament)

    recorded = lifecycle.record_result(tournament, match.id, match.player1_id)
    assert tournament.find_match(match.id)[1].result == MatchResult.PENDING
    assert recorded.find_match(match.id)[1].result == MatchResult.WIN

    with pytest.raises(InvalidWinnerException):
        lifecycle.record_result(tournament, match.id, "p-unknown")
    assert tournament.find_match(match.id)[1].result == MatchResult.PENDING


def test_unknown_match_is_reported():
    lifecycle, tournament = _tournament()
    tournament = lifecycle.generate_next_round(tournament)
    with pytest.raises(MatchNotFoundException):
        lifecycle.record_result(tournament, "match_missing", "p1")


def test_draw_scores_one_point_each():
    lifecycle, tournament = _tournament()
    tournament = lifecycle.generate_next_round(tournament)
    match = _first_pending(tournament)
    with pytest.raises(InvalidWinnerException):
        lifecycle.record_result(tournament, match.id, match.player1_id, draw=True)

    tournament = lifecycle.record_result(tournament, match.id, None, draw=True)
    for pid in match.player_ids:
        assert tournament.player_states[pid].draws == 1
        assert tournament.player_states[pid].score == 1


def test_update_result_overwrites_current_round_only():
    lifecycle, tournament = _tournament()
    tournament = lifecycle.generate_next_round(tournament)
    match = _first_pending(tournament)
    tournament = lifecycle.record_result(tournament, match.id, match.player1_id)

    tournament = lifecycle.update_result(tournament, match.id, match.player2_id)
    assert tournament.player_states[match.player2_id].wins == 1
    assert tournament.player_states[match.player1_id].wins == 0

    for pending in tournament.current_round.pending_matches:
        tournament = lifecycle.record_result(tournament, pending.id, pending.player1_id)
    tournament = lifecycle.generate_next_round(tournament)
    with pytest.raises(TournamentStateException):
        lifecycle.update_result(tournament, match.id, match.player1_id)


def test_wins_and_losses_balance():
    lifecycle, tournament = _tournament()
    for _ in range(3):
        tournament = _play_round(lifecycle, tournament)
    states = tournament.player_states.values()
    assert sum(s.wins for s in states) == sum(s.losses for s in states) == 9


# ========== Deleting rounds ==========


def test_delete_round_truncates_and_recomputes():
    lifecycle, tournament = _tournament()
    for _ in range(3):
        tournament = _play_round(lifecycle, tournament)

    trimmed = lifecycle.delete_round(tournament, 2)
    assert [r.round_number for r in trimmed.rounds] == [1]
    assert trimmed.status == TournamentStatus.ONGOING
    assert trimmed.player_states == recompute_player_states(trimmed)
    assert len(tournament.rounds) == 3

    regenerated = lifecycle.generate_next_round(trimmed)
    assert [r.round_number for r in regenerated.rounds] == [1, 2]


def test_deleting_first_round_reopens_registration():
    lifecycle, tournament = _tournament()
    tournament = _play_round(lifecycle, tournament)
    tournament = lifecycle.delete_round(tournament, 1)
    assert tournament.rounds == []
    assert tournament.status == TournamentStatus.UPCOMING
    assert all(s.score == 0 for s in tournament.player_states.values())
    lifecycle.add_player(tournament, Player(id="p9", name="Late", rank="4k"))


def test_delete_unknown_round():
    lifecycle, tournament = _tournament()
    tournament = _play_round(lifecycle, tournament)
    with pytest.raises(RoundNotFoundException):
        lifecycle.delete_round(tournament, 5)
    with pytest.raises(RoundNotFoundException):
        lifecycle.delete_round(tournament, 0)


# ========== Ending ==========


def test_end_tournament_freezes_standings():
    lifecycle, tournament = _tournament(round_count=2)
    for _ in range(2):
        tournament = _play_round(lifecycle, tournament)

    finished = lifecycle.end_tournament(tournament)
    assert finished.status == TournamentStatus.COMPLETED
    assert [r.to_dict() for r in finished.final_standings] == [
        r.to_dict() for r in compute_standings(finished)
    ]
    assert lifecycle.get_standings(finished) == finished.final_standings

    with pytest.raises(TournamentStateException):
        lifecycle.end_tournament(finished)
    with pytest.raises(TournamentNotOngoingOrUpcomingException):
        lifecycle.generate_next_round(finished)


def test_deleting_a_round_reopens_a_completed_tournament():
    lifecycle, tournament = _tournament(round_count=2)
    for _ in range(2):
        tournament = _play_round(lifecycle, tournament)
    finished = lifecycle.end_tournament(tournament)

    reopened = lifecycle.delete_round(finished, 2)
    assert reopened.status == TournamentStatus.ONGOING
    assert reopened.final_standings is None
    assert lifecycle.end_conditions_unmet(reopened) == "1 of 2 rounds played"
