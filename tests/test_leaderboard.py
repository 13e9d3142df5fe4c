from datetime import datetime, timedelta, timezone

import pytest

import config
from leaderboard import (SAMPLE_NAMES, LeaderboardEntry, build_daily_mock_leaderboard,
                         clean_nickname, format_duration, format_utc_time, insert_entry,
                         rank_of)

DAY = datetime(2024, 1, 1, tzinfo=timezone.utc)


def entry(name, minutes, duration_ms=60000):
    return LeaderboardEntry(name, DAY + timedelta(minutes=minutes), duration_ms)


def test_mock_board_is_deterministic():
    assert build_daily_mock_leaderboard("2024-01-01") == build_daily_mock_leaderboard("2024-01-01")
    assert build_daily_mock_leaderboard("2024-01-01") != build_daily_mock_leaderboard("2024-01-02")


def test_mock_board_contents():
    board = build_daily_mock_leaderboard("2024-01-01")
    assert len(board) == 6
    times = [e.completed_at for e in board]
    assert times == sorted(times)
    for e in board:
        assert e.nickname in SAMPLE_NAMES
        assert DAY <= e.completed_at < DAY + timedelta(hours=12)
        assert 45000 <= e.duration_ms < 285000
        assert e.duration_ms % 1000 == 0


def test_insert_orders_by_finish_then_duration():
    board = [entry("A", 10), entry("B", 30)]
    tied = entry("C", 10, duration_ms=30000)
    updated = insert_entry(board, entry("D", 20))
    updated = insert_entry(updated, tied)
    assert [e.nickname for e in updated] == ["C", "A", "D", "B"]
    assert rank_of(updated, tied) == 1
    # The input list is not modified
    assert [e.nickname for e in board] == ["A", "B"]


def test_insert_is_bounded():
    board = [entry(f"P{i}", i) for i in range(config.LEADERBOARD_LIMIT)]
    late = entry("Late", 999)
    updated = insert_entry(board, late)
    assert len(updated) == config.LEADERBOARD_LIMIT
    assert rank_of(updated, late) is None

    early = entry("Early", -1)
    updated = insert_entry(board, early)
    assert rank_of(updated, early) == 1
    assert updated[-1].nickname == f"P{config.LEADERBOARD_LIMIT - 2}"


@pytest.mark.parametrize("ms, expected", [
    (None, "00:00.0"),
    (0, "00:00.0"),
    (-5, "00:00.0"),
    (999, "00:00.9"),
    (61500, "01:01.5"),
    (3599999, "59:59.9"),
])
def test_format_duration(ms, expected):
    assert format_duration(ms) == expected


def test_format_utc_time():
    assert format_utc_time(None) == "-"
    plus_two = timezone(timedelta(hours=2))
    assert format_utc_time(datetime(2024, 1, 1, 14, 5, 9, tzinfo=plus_two)) == "12:05:09"


def test_clean_nickname():
    assert clean_nickname("  Orbit ") == "Orbit"
    assert len(clean_nickname("x" * 50)) == config.NICKNAME_MAX_LENGTH
    with pytest.raises(ValueError):
        clean_nickname("")
