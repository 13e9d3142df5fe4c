import pytest

from maze import Maze


def open_path(size, cells):
    """Maze with passages opened along consecutive cells."""
    maze = Maze(size)
    for a, b in zip(cells, cells[1:]):
        maze.open_passage(a, b)
    return maze


def open_room(size):
    """Maze with every interior wall open."""
    maze = Maze(size)
    for row in range(size):
        for col in range(size):
            if col + 1 < size:
                maze.open_passage((row, col), (row, col + 1))
            if row + 1 < size:
                maze.open_passage((row, col), (row + 1, col))
    return maze


@pytest.fixture
def two_by_two():
    # Only (0,0)-(0,1) and (0,1)-(1,1) are open
    return open_path(2, [(0, 0), (0, 1), (1, 1)])


@pytest.fixture
def east_corridor():
    # Row 0 of a 4x4 grid is one straight corridor
    return open_path(4, [(0, 0), (0, 1), (0, 2), (0, 3)])


@pytest.fixture
def south_corridor():
    return open_path(4, [(0, 0), (1, 0), (2, 0), (3, 0)])


@pytest.fixture
def room3():
    return open_room(3)
