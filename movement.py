"""Continuous, collision-aware player motion through a maze."""

import math
from typing import NamedTuple, Optional, Tuple

import config
from maze import EAST, NORTH, SOUTH, WEST, Maze


class AxisMove(NamedTuple):
    """Result of moving along one axis."""
    value: float
    hit: bool
    wall: Optional[str]


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def normalize_angle(angle: float) -> float:
    """Wrap an angle into [0, 2*pi)."""
    normalized = angle % (2 * math.pi)
    # -1e-17 % 2pi rounds up to exactly 2pi
    if normalized >= 2 * math.pi:
        normalized = 0.0
    return normalized


def attempt_horizontal(x: float, y: float, delta_x: float, maze: Maze) -> AxisMove:
    """Move along X, stopping just short of a closed east/west wall."""
    if delta_x == 0:
        return AxisMove(x, False, None)

    eps = config.CLAMP_EPSILON
    size = maze.size
    row = int(math.floor(y))
    col = int(math.floor(x))
    new_x = x + delta_x
    hit = False
    wall = None

    if delta_x > 0:
        boundary = col + 1
        if boundary >= size or maze.has_wall(row, col, EAST):
            new_x = min(new_x, boundary - eps)
            hit = True
            wall = EAST
    else:
        if col <= 0 or maze.has_wall(row, col, WEST):
            new_x = max(new_x, col + eps)
            hit = True
            wall = WEST

    return AxisMove(_clamp(new_x, eps, size - eps), hit, wall)


def attempt_vertical(x: float, y: float, delta_y: float, maze: Maze) -> AxisMove:
    """Move along Y, stopping just short of a closed north/south wall."""
    if delta_y == 0:
        return AxisMove(y, False, None)

    eps = config.CLAMP_EPSILON
    size = maze.size
    row = int(math.floor(y))
    col = int(math.floor(x))
    new_y = y + delta_y
    hit = False
    wall = None

    if delta_y > 0:
        boundary = row + 1
        if boundary >= size or maze.has_wall(row, col, SOUTH):
            new_y = min(new_y, boundary - eps)
            hit = True
            wall = SOUTH
    else:
        if row <= 0 or maze.has_wall(row, col, NORTH):
            new_y = max(new_y, row + eps)
            hit = True
            wall = NORTH

    return AxisMove(_clamp(new_y, eps, size - eps), hit, wall)


def _clamp_step(delta: float, max_step: float) -> float:
    if not math.isfinite(delta):
        return 0.0
    return math.copysign(min(abs(delta), max_step), delta)


def integrate_motion(position: Tuple[float, float], dx: float, dy: float,
                     maze: Maze) -> Tuple[float, float]:
    """
    Move a continuous position by (dx, dy), resolving wall collisions.

    The displacement is split into sub-steps no longer than MAX_SUB_STEP per
    axis so a large request cannot tunnel through a wall. X is resolved before
    Y in every sub-step. The loop is capped at MAX_SUB_STEPS iterations; when
    the cap is reached the partial result is returned.

    Args:
        position: (x, y) in grid units; x is the column axis.
        dx: Requested displacement along X.
        dy: Requested displacement along Y.
        maze: Maze to collide against (not modified).

    Returns:
        New (x, y) strictly inside a cell reachable without crossing a wall.
    """
    size = maze.size
    x, y = position
    if size == 0:
        return (x, y)

    eps = config.CLAMP_EPSILON
    # Floating-point drift can leave the start outside the grid
    x = _clamp(x, eps, size - eps) if math.isfinite(x) else config.START_POSITION[0]
    y = _clamp(y, eps, size - eps) if math.isfinite(y) else config.START_POSITION[1]

    remaining_x = dx if math.isfinite(dx) else 0.0
    remaining_y = dy if math.isfinite(dy) else 0.0
    guard = 0

    while ((abs(remaining_x) > config.MOTION_EPSILON or abs(remaining_y) > config.MOTION_EPSILON)
           and guard < config.MAX_SUB_STEPS):
        guard += 1

        step_x = _clamp_step(remaining_x, config.MAX_SUB_STEP)
        horizontal = attempt_horizontal(x, y, step_x, maze)
        actual_dx = horizontal.value - x
        x = horizontal.value
        remaining_x -= actual_dx

        step_y = _clamp_step(remaining_y, config.MAX_SUB_STEP)
        vertical = attempt_vertical(x, y, step_y, maze)
        actual_dy = vertical.value - y
        y = vertical.value
        remaining_y -= actual_dy

        if (step_x != 0 and abs(actual_dx) < config.MOTION_EPSILON and
                step_y != 0 and abs(actual_dy) < config.MOTION_EPSILON):
            break

    return (x, y)
