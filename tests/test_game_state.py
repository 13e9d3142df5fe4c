import math
from datetime import datetime, timedelta, timezone

import pytest

import config
from game_state import DailyChallenge, InputState, Pose, Run, start_pose, update_pose
from maze import build_maze
from solver import solve

T0 = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def test_input_from_keys():
    assert InputState.from_keys({"up", "left"}) == InputState(1, -1)
    assert InputState.from_keys({"s", "d"}) == InputState(-1, 1)
    assert InputState.from_keys({"up", "down", "left", "right"}).idle
    assert InputState.from_keys(set()).idle


def test_update_pose_is_pure(east_corridor):
    pose = start_pose()
    moved = update_pose(pose, InputState(forward=1), 0.1, east_corridor)
    assert pose == Pose(0.5, 0.5, 0.0)
    assert moved.x == pytest.approx(0.5 + config.MOVE_SPEED * 0.1)
    assert moved.y == pytest.approx(0.5)


def test_update_pose_idle_returns_same(east_corridor):
    pose = Pose(1.2, 0.4, 1.0)
    assert update_pose(pose, InputState(), 0.1, east_corridor) is pose


def test_turning_wraps_heading(east_corridor):
    pose = Pose(0.5, 0.5, 0.0)
    turned = update_pose(pose, InputState(turn=-1), 0.1, east_corridor)
    assert turned.angle == pytest.approx(2 * math.pi - config.TURN_SPEED * 0.1)
    assert (turned.x, turned.y) == (0.5, 0.5)


def test_long_ticks_are_clamped(east_corridor):
    moved = update_pose(start_pose(), InputState(forward=1), 5.0, east_corridor)
    assert moved.x == pytest.approx(0.5 + config.MOVE_SPEED * config.MAX_DELTA_SECONDS)
    still = update_pose(start_pose(), InputState(forward=1), -1.0, east_corridor)
    assert still.x == pytest.approx(0.5)


def test_backward_into_wall(east_corridor):
    moved = update_pose(start_pose(), InputState(forward=-1), 0.1, east_corridor)
    assert moved.x == pytest.approx(0.5 - config.MOVE_SPEED * 0.1)
    for _ in range(20):
        moved = update_pose(moved, InputState(forward=-1), 0.1, east_corridor)
    assert moved.x == pytest.approx(config.CLAMP_EPSILON)


def test_run_completes_once(two_by_two):
    run = Run(two_by_two, "  Nova  ", started_at=T0)
    assert run.nickname == "Nova"
    run.pose = Pose(1.5, 0.95, math.pi / 2)

    finished = T0 + timedelta(seconds=12.3)
    assert run.step(InputState(forward=1), 0.1, now=finished)
    assert run.completed
    assert run.cell == (1, 1)
    assert run.duration_ms == 12300

    pose = run.pose
    assert not run.step(InputState(forward=1), 0.1)
    assert not run.step(InputState(turn=1), 0.1)
    assert run.pose == pose
    assert run.duration_ms == 12300

    entry = run.result()
    assert entry.nickname == "Nova"
    assert entry.completed_at == finished
    assert entry.duration_ms == 12300


def test_run_not_complete_outside_goal(two_by_two):
    run = Run(two_by_two, "Echo", started_at=T0)
    assert not run.step(InputState(forward=1), 0.1)
    assert run.cell == (0, 0)
    assert run.result() is None
    assert run.duration_ms is None
    assert run.elapsed_ms(now=T0 + timedelta(seconds=2)) == 2000


def test_reset_restarts_run(two_by_two):
    run = Run(two_by_two, "Halo", started_at=T0)
    run.pose = Pose(1.5, 0.95, math.pi / 2)
    assert run.step(InputState(forward=1), 0.1)
    run.reset(started_at=T0 + timedelta(minutes=5))
    assert not run.completed
    assert run.pose == start_pose()
    assert run.cell == (0, 0)


def test_single_cell_maze_completes_on_first_tick():
    run = Run(build_maze(1, "solo"), "Ion")
    assert run.step(InputState(), 0.016)
    assert not run.step(InputState(), 0.016)


def test_blank_nickname_rejected(two_by_two):
    with pytest.raises(ValueError):
        Run(two_by_two, "   ")


def _heading(a, b):
    (r0, c0), (r1, c1) = a, b
    return math.atan2(r1 - r0, c1 - c0)


def test_follow_solution_reaches_goal():
    maze = build_maze(6, "2024-01-01")
    path = solve(maze)
    run = Run(maze, "Kite", started_at=T0)
    completions = 0

    # Walk cell centre to cell centre along the solution
    for a, b in zip(path, path[1:]):
        run.pose = Pose(run.pose.x, run.pose.y, _heading(a, b) % (2 * math.pi))
        for _ in range(10):
            completions += run.step(InputState(forward=1), 0.1)

    assert completions == 1
    assert run.completed
    assert run.cell == maze.goal


def test_daily_challenge_rollover():
    challenge = DailyChallenge(6, "2024-01-01")
    old_maze = challenge.maze
    old_layout = old_maze.wall_layout()
    run = challenge.start_run("Flux")

    assert not challenge.refresh("2024-01-01")
    assert challenge.maze is old_maze

    assert challenge.refresh("2024-01-02")
    assert challenge.key == "2024-01-02"
    assert challenge.maze is not old_maze
    assert run.maze is old_maze
    assert old_maze.wall_layout() == old_layout
    assert challenge.maze.wall_layout() == build_maze(6, "2024-01-02").wall_layout()


def test_daily_challenge_solution_cached():
    challenge = DailyChallenge(5, "2024-01-01")
    first = challenge.solution()
    first.clear()
    assert challenge.solution() == solve(challenge.maze)
    challenge.refresh("2024-03-03")
    assert challenge.solution() == solve(challenge.maze)


def test_empty_day_key_is_not_replaced_by_today():
    with pytest.raises(ValueError):
        DailyChallenge(4, "")

    challenge = DailyChallenge(4, "2024-01-01")
    with pytest.raises(ValueError):
        challenge.refresh("")
    assert challenge.key == "2024-01-01"
