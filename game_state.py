"""Game state management: player pose, timed runs and the daily challenge."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import AbstractSet, List, Optional

import config
from leaderboard import LeaderboardEntry, clean_nickname
from maze import Coord, Maze, build_maze, day_key
from movement import integrate_motion, normalize_angle
from solver import solve

logger = logging.getLogger(__name__)

FORWARD_KEYS = {"up", "w"}
BACKWARD_KEYS = {"down", "s"}
LEFT_KEYS = {"left", "a"}
RIGHT_KEYS = {"right", "d"}


@dataclass(frozen=True)
class Pose:
    """Player position and viewing angle."""
    x: float
    y: float
    angle: float  # in radians, 0 = facing +X (east), pi/2 = facing +Y (south)

    @property
    def cell(self) -> Coord:
        """(row, col) of the occupied cell."""
        return (int(math.floor(self.y)), int(math.floor(self.x)))


def start_pose() -> Pose:
    x, y = config.START_POSITION
    return Pose(x, y, config.START_ANGLE)


@dataclass(frozen=True)
class InputState:
    """Movement intent for one tick; each axis is -1, 0 or 1."""
    forward: int = 0
    turn: int = 0  # positive turns clockwise on screen (toward +Y)

    @classmethod
    def from_keys(cls, pressed: AbstractSet[str]) -> 'InputState':
        """Build intent from a set of held key names."""
        forward = int(bool(pressed & FORWARD_KEYS)) - int(bool(pressed & BACKWARD_KEYS))
        turn = int(bool(pressed & RIGHT_KEYS)) - int(bool(pressed & LEFT_KEYS))
        return cls(forward, turn)

    @property
    def idle(self) -> bool:
        return self.forward == 0 and self.turn == 0


def update_pose(pose: Pose, intent: InputState, dt: float, maze: Maze) -> Pose:
    """Advance a pose by one tick. Returns a new Pose; the input is untouched."""
    if intent.idle or maze.size == 0:
        return pose

    dt = min(max(dt, 0.0), config.MAX_DELTA_SECONDS)
    angle = normalize_angle(pose.angle + intent.turn * config.TURN_SPEED * dt)

    x, y = pose.x, pose.y
    if intent.forward != 0:
        distance = intent.forward * config.MOVE_SPEED * dt
        x, y = integrate_motion((x, y), math.cos(angle) * distance,
                                math.sin(angle) * distance, maze)

    return Pose(x, y, angle)


class Run:
    """A single timed attempt at a maze."""

    def __init__(self, maze: Maze, nickname: str, started_at: Optional[datetime] = None):
        self.maze = maze
        self.nickname = clean_nickname(nickname)
        self.reset(started_at)

    def reset(self, started_at: Optional[datetime] = None) -> None:
        """Put the player back on the start cell and restart the clock."""
        self.pose = start_pose()
        self.cell = self.pose.cell
        self.started_at = started_at or datetime.now(timezone.utc)
        self.finished_at: Optional[datetime] = None

    @property
    def completed(self) -> bool:
        return self.finished_at is not None

    def step(self, intent: InputState, dt: float, now: Optional[datetime] = None) -> bool:
        """
        Advance the run by one tick.

        Returns:
            True on the single tick the goal cell is entered, else False.
        """
        if self.completed:
            return False

        self.pose = update_pose(self.pose, intent, dt, self.maze)
        self.cell = self.pose.cell
        if self.cell != self.maze.goal:
            return False

        self.finished_at = now or datetime.now(timezone.utc)
        logger.info("%s reached the goal in %d ms", self.nickname, self.duration_ms)
        return True

    def elapsed_ms(self, now: Optional[datetime] = None) -> int:
        """Time since the run started, frozen once it is complete."""
        end = self.finished_at or now or datetime.now(timezone.utc)
        return max(0, int((end - self.started_at).total_seconds() * 1000))

    @property
    def duration_ms(self) -> Optional[int]:
        if self.finished_at is None:
            return None
        return self.elapsed_ms()

    def result(self) -> Optional[LeaderboardEntry]:
        """Leaderboard entry for a completed run."""
        if self.finished_at is None:
            return None
        return LeaderboardEntry(self.nickname, self.finished_at, self.duration_ms)


class DailyChallenge:
    """The maze of the day, rebuilt whenever the day key changes."""

    def __init__(self, size: int = config.MAZE_SIZE, key: Optional[str] = None):
        self.size = size
        self.key = key if key is not None else day_key()
        self.maze = build_maze(size, self.key)
        self._solution: Optional[List[Coord]] = None

    def refresh(self, key: Optional[str] = None) -> bool:
        """
        Switch to a new day key.

        A new Maze is built and substituted; the previous one is left as it
        was so runs already holding it are unaffected.

        Returns:
            True if the maze changed.
        """
        key = key if key is not None else day_key()
        if key == self.key:
            return False
        maze = build_maze(self.size, key)
        logger.info("Day rolled over from %s to %s", self.key, key)
        self.key = key
        self.maze = maze
        self._solution = None
        return True

    def solution(self) -> List[Coord]:
        """Shortest path for the current maze, computed once per maze."""
        if self._solution is None:
            path = solve(self.maze)
            if not path:
                logger.error("Maze for %s has no solution", self.key)
            self._solution = path
        return list(self._solution)

    def start_run(self, nickname: str, started_at: Optional[datetime] = None) -> Run:
        return Run(self.maze, nickname, started_at)
