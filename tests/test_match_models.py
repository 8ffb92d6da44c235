import pytest
from pydantic import ValidationError

from groupties.models import (
    PENDING,
    Decided,
    GroupRecord,
    MalformedRecordError,
    MatchRecord,
    PlayerPair,
    normalize_player_id,
    outcome_from_placements,
)


def test_normalize_player_id_accepts_numbers_and_strings():
    assert normalize_player_id(1234) == "1234"
    assert normalize_player_id(" 1234 ") == "1234"

    with pytest.raises(ValueError):
        normalize_player_id("  ")
    with pytest.raises(ValueError):
        normalize_player_id(True)
    with pytest.raises(ValueError):
        normalize_player_id(12.5)


def test_player_pair_is_unordered():
    assert PlayerPair.of("b", "a") == PlayerPair.of("a", "b")
    pair = PlayerPair.of("b", "a")
    assert (pair.first, pair.second) == ("a", "b")
    assert pair.other("a") == "b"
    assert "a" in pair

    with pytest.raises(MalformedRecordError):
        pair.other("c")


def test_player_pair_rejects_self_pairing():
    with pytest.raises(ValueError):
        PlayerPair.of("a", "a")
    with pytest.raises(ValueError):
        PlayerPair("b", "a")


def test_outcome_from_placements():
    assert outcome_from_placements("a", "b", 1, 2) == Decided("a")
    assert outcome_from_placements("a", "b", 2, 1) == Decided("b")
    assert outcome_from_placements("a", "b", 0, 0) is PENDING


def test_match_record_normalizes_and_is_frozen():
    record = MatchRecord.from_placements(7, 101, "99", 2, 1, player_a_name="Alpha", player_b_name="Beta")

    assert record.group_id == "7"
    assert record.player_a == "101"
    assert record.winner == "99"
    assert record.pair == PlayerPair.of("99", "101")
    assert record.outcome == Decided("99")

    with pytest.raises((TypeError, ValidationError)):
        record.winner = "101"  # type: ignore[misc]


def test_match_record_pending_when_placements_tie():
    record = MatchRecord.from_placements("1", "a", "b", 0, 0)
    assert record.winner is None
    assert record.outcome is PENDING


def test_match_record_rejects_inconsistent_players():
    with pytest.raises(ValidationError):
        MatchRecord(group_id="1", player_a="a", player_b="a")
    with pytest.raises(ValidationError):
        MatchRecord(group_id="1", player_a="a", player_b="b", winner="c")


def test_group_record_derives_players_and_is_read_only():
    record = GroupRecord(
        group_id="1",
        results={
            PlayerPair.of("c", "b"): PENDING,
            PlayerPair.of("a", "b"): Decided("a"),
            PlayerPair.of("a", "c"): Decided("c"),
        },
    )

    assert record.players == ("a", "b", "c")
    assert list(record.results) == [PlayerPair.of("a", "b"), PlayerPair.of("a", "c"), PlayerPair.of("b", "c")]
    assert record.decided_pairs == (PlayerPair.of("a", "b"), PlayerPair.of("a", "c"))
    assert record.pending_pairs == (PlayerPair.of("b", "c"),)
    assert record.match_count == 3

    with pytest.raises(TypeError):
        record.results[PlayerPair.of("a", "d")] = PENDING  # type: ignore[index]


def test_group_record_rejects_winner_outside_pair():
    with pytest.raises(MalformedRecordError):
        GroupRecord(group_id="1", results={PlayerPair.of("a", "b"): Decided("z")})
