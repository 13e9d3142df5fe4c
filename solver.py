"""Shortest-path solver for built mazes."""

import logging
from collections import deque
from typing import Dict, List, Optional

from maze import START, Coord, Maze

logger = logging.getLogger(__name__)


def solve(maze: Maze) -> List[Coord]:
    """
    Find the shortest route from the start cell to the goal cell.

    Breadth-first search over open walls; every edge has unit weight, so the
    first time the goal is dequeued its parent chain is a shortest path.

    Returns:
        A new list of (row, col) from (0, 0) to the goal, or an empty list
        when the maze has no cells or the goal cannot be reached.
    """
    size = maze.size
    if size == 0:
        return []

    goal = maze.goal
    visited = [[False] * size for _ in range(size)]
    parent: Dict[Coord, Optional[Coord]] = {START: None}
    queue = deque([START])
    visited[0][0] = True

    while queue:
        current = queue.popleft()
        if current == goal:
            break
        for nb in maze.open_neighbors(*current):
            if visited[nb[0]][nb[1]]:
                continue
            visited[nb[0]][nb[1]] = True
            parent[nb] = current
            queue.append(nb)

    if not visited[goal[0]][goal[1]]:
        logger.error("No path from %s to %s in %dx%d maze", START, goal, size, size)
        return []

    path = []
    cursor: Optional[Coord] = goal
    while cursor is not None:
        path.append(cursor)
        cursor = parent[cursor]
    path.reverse()
    return path
