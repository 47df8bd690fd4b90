import pytest

from gopairing.exceptions import InvalidRankFormatException
from gopairing.models.enums import RankBand
from gopairing.models.rank import (
    Rank,
    band,
    mcmahon_initial_score,
    normalize_rank,
    parse_rank,
    rank_distance,
    rank_from_value,
    rank_value,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("5d", Rank(5, "d")),
        ("12K", Rank(12, "k")),
        (" 3 d ", Rank(3, "d")),
        ("30k", Rank(30, "k")),
        ("9D", Rank(9, "d")),
    ],
)
def test_parse_rank_accepts_common_spellings(text, expected):
    assert parse_rank(text) == expected


@pytest.mark.parametrize("text", ["", "d5", "0d", "10d", "0k", "31k", "5x", "5 dan", "-3k"])
def test_parse_rank_rejects_malformed(text):
    with pytest.raises(InvalidRankFormatException):
        parse_rank(text)


def test_parse_rank_rejects_non_strings():
    with pytest.raises(InvalidRankFormatException):
        parse_rank(5)


def test_normalize_rank():
    assert normalize_rank(" 3 D ") == "3d"
    assert normalize_rank("15K") == "15k"


def test_rank_values_are_contiguous_across_dan_kyu_boundary():
    assert rank_value("30k") == 0
    assert rank_value("1k") == 29
    assert rank_value("1d") == 30
    assert rank_value("9d") == 38
    assert rank_distance("1k", "1d") == 1
    assert rank_distance("2d", "1k") == 2
    assert rank_distance("5d", "2k") == 6


def test_every_dan_is_above_every_kyu():
    weakest_dan = min(rank_value(f"{d}d") for d in range(1, 10))
    strongest_kyu = max(rank_value(f"{k}k") for k in range(1, 31))
    assert weakest_dan > strongest_kyu


def test_rank_from_value_inverts_rank_value():
    for rank in ["30k", "10k", "1k", "1d", "5d", "9d"]:
        assert rank_from_value(rank_value(rank)) == rank
    assert rank_from_value(-4) == "30k"
    assert rank_from_value(99) == "9d"


def test_band_boundaries():
    assert band("7d") == RankBand.OPEN
    assert band("6d") == RankBand.OPEN
    assert band("4d") == RankBand.DAN
    assert band("1d") == RankBand.DAN
    assert band("1k") == RankBand.HIGH_KYU
    assert band("5k") == RankBand.HIGH_KYU
    assert band("6k") == RankBand.LOW_KYU
    assert band("10k") == RankBand.LOW_KYU
    assert band("30k") == RankBand.LOW_KYU


def test_five_dan_band_depends_on_strong_field():
    assert band("5d") == RankBand.OPEN
    seven_strong = ["6d"] * 7 + ["5d", "2k"]
    eight_strong = ["6d"] * 8 + ["5d", "2k"]
    assert band("5d", seven_strong) == RankBand.OPEN
    assert band("5d", eight_strong) == RankBand.DAN


def test_default_mcmahon_initial_scores():
    assert mcmahon_initial_score("6d") == 6
    assert mcmahon_initial_score("5d") == 6
    assert mcmahon_initial_score("3d") == 0
    assert mcmahon_initial_score("2k") == -6
    assert mcmahon_initial_score("5k") == -6
    assert mcmahon_initial_score("6k") == -12
    assert mcmahon_initial_score("25k") == -12


def test_custom_mcmahon_bar_and_floor():
    kwargs = {"upper_bar": "3d", "initial_score": 4, "minimum_score": -5}
    assert mcmahon_initial_score("6d", **kwargs) == 4
    assert mcmahon_initial_score("3d", **kwargs) == 4
    assert mcmahon_initial_score("1d", **kwargs) == 0
    assert mcmahon_initial_score("3k", **kwargs) == -5
    assert mcmahon_initial_score("15k", **kwargs) == -5
