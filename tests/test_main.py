import pytest

from game_state import DailyChallenge
from leaderboard import build_daily_mock_leaderboard
from main import parse_args, roll_over


def test_day_argument_accepts_iso_date():
    assert parse_args(["--day", "2024-01-01"]).day == "2024-01-01"
    assert parse_args([]).day is None


@pytest.mark.parametrize("value", ["hello", "2024-13-01", "01/02/2024", ""])
def test_day_argument_rejects_non_dates(value):
    with pytest.raises(SystemExit):
        parse_args(["--day", value])


def test_roll_over_same_day_keeps_run():
    challenge = DailyChallenge(4, "2024-01-01")
    assert roll_over(challenge, "Flux", "2024-01-01") is None


def test_roll_over_starts_new_run_and_board():
    challenge = DailyChallenge(4, "2024-01-01")
    old_run = challenge.start_run("Flux")

    run, board = roll_over(challenge, "Flux", "2024-01-02")

    assert run is not old_run
    assert run.maze is challenge.maze
    assert old_run.maze is not challenge.maze
    assert run.nickname == "Flux"
    assert not run.completed
    assert board == build_daily_mock_leaderboard("2024-01-02")
