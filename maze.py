"""Maze grid types and the daily maze builder."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple, Union

from seeding import hash_to_seed, make_generator, random_index

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]  # (row, col)

NORTH = "north"
EAST = "east"
SOUTH = "south"
WEST = "west"

# Fixed enumeration order. The builder consumes random draws in this order,
# so changing it changes which maze a given seed produces.
DIRECTIONS = (NORTH, EAST, SOUTH, WEST)

DIRECTION_DELTAS = {
    NORTH: (-1, 0),
    EAST: (0, 1),
    SOUTH: (1, 0),
    WEST: (0, -1),
}

START: Coord = (0, 0)


def opposite(direction: str) -> str:
    """Direction facing back across the same wall."""
    return DIRECTIONS[(DIRECTIONS.index(direction) + 2) % len(DIRECTIONS)]


def _closed_walls() -> Dict[str, bool]:
    return {direction: True for direction in DIRECTIONS}


@dataclass
class Cell:
    """A grid cell with four wall flags (True = closed)."""
    row: int
    col: int
    walls: Dict[str, bool] = field(default_factory=_closed_walls)


class Maze:
    """Square grid of cells. Walls only change through open_passage()."""

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"Maze size must not be negative (got {size})")
        self.size = size
        self.cells: List[List[Cell]] = [
            [Cell(row, col) for col in range(size)] for row in range(size)
        ]
        self._frozen = False

    @property
    def goal(self) -> Coord:
        return (self.size - 1, self.size - 1)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make the maze read-only."""
        self._frozen = True

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def has_wall(self, row: int, col: int, direction: str) -> bool:
        """Check a cell's wall. Out-of-bounds cells are solid."""
        if not self.in_bounds(row, col):
            return True
        return self.cells[row][col].walls[direction]

    def neighbor(self, row: int, col: int, direction: str) -> Optional[Coord]:
        """Get the in-bounds neighbour in a direction, or None."""
        d_row, d_col = DIRECTION_DELTAS[direction]
        n_row, n_col = row + d_row, col + d_col
        if self.in_bounds(n_row, n_col):
            return (n_row, n_col)
        return None

    def open_neighbors(self, row: int, col: int) -> List[Coord]:
        """Neighbours reachable through an open wall, in DIRECTIONS order."""
        result = []
        for direction in DIRECTIONS:
            if self.has_wall(row, col, direction):
                continue
            nb = self.neighbor(row, col, direction)
            if nb is not None:
                result.append(nb)
        return result

    def open_passage(self, a: Coord, b: Coord) -> None:
        """Open the wall between two adjacent cells on both sides."""
        if self._frozen:
            raise RuntimeError("Maze is frozen; walls can no longer change")
        if not (self.in_bounds(*a) and self.in_bounds(*b)):
            raise ValueError(f"Cells {a} and {b} must both be inside the grid")

        delta = (b[0] - a[0], b[1] - a[1])
        for direction, d in DIRECTION_DELTAS.items():
            if d == delta:
                self.cells[a[0]][a[1]].walls[direction] = False
                self.cells[b[0]][b[1]].walls[opposite(direction)] = False
                return
        raise ValueError(f"Cells {a} and {b} are not adjacent")

    def count_open_edges(self) -> int:
        """Count open walls between adjacent cells (each counted once)."""
        count = 0
        for row in range(self.size):
            for col in range(self.size):
                if col + 1 < self.size and not self.cells[row][col].walls[EAST]:
                    count += 1
                if row + 1 < self.size and not self.cells[row][col].walls[SOUTH]:
                    count += 1
        return count

    def wall_layout(self) -> List[List[Tuple[bool, bool, bool, bool]]]:
        """Snapshot of every cell's walls in DIRECTIONS order."""
        return [
            [tuple(cell.walls[d] for d in DIRECTIONS) for cell in row]
            for row in self.cells
        ]


def carve_maze(size: int, generator: Callable[[], float]) -> Maze:
    """
    Carve a perfect maze with a randomized depth-first backtracker.

    Args:
        size: Cells per side.
        generator: Seeded random source; one draw per carved passage.

    Returns:
        A frozen Maze whose open passages form a spanning tree.
    """
    maze = Maze(size)
    if size == 0:
        maze.freeze()
        return maze

    visited = [[False] * size for _ in range(size)]
    stack: List[Coord] = [START]
    visited[0][0] = True

    while stack:
        row, col = stack[-1]
        candidates = []
        for direction in DIRECTIONS:
            nb = maze.neighbor(row, col, direction)
            if nb is not None and not visited[nb[0]][nb[1]]:
                candidates.append(nb)

        if not candidates:
            stack.pop()
            continue

        nxt = candidates[random_index(generator, len(candidates))]
        maze.open_passage((row, col), nxt)
        visited[nxt[0]][nxt[1]] = True
        stack.append(nxt)

    if not all(all(row) for row in visited):
        raise RuntimeError("Maze carving finished with unvisited cells")

    maze.freeze()
    return maze


def build_maze(size: int, seed_text: str) -> Maze:
    """Build the maze for a size and seed text (e.g. a day key)."""
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ValueError(f"Maze size must be a positive integer (got {size!r})")
    if not isinstance(seed_text, str) or not seed_text.strip():
        raise ValueError("Seed text must be a non-empty string")

    seed = hash_to_seed(seed_text)
    maze = carve_maze(size, make_generator(seed))
    logger.debug("Built %dx%d maze for seed %r (hash %d)", size, size, seed_text, seed)
    return maze


def day_key(when: Optional[Union[date, datetime]] = None) -> str:
    """ISO calendar date used as the daily seed. Defaults to today in UTC."""
    if when is None:
        when = datetime.now(timezone.utc)
    if isinstance(when, datetime):
        if when.tzinfo is not None:
            when = when.astimezone(timezone.utc)
        when = when.date()
    return when.isoformat()
