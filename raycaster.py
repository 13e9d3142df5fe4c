"""First-person projection of a maze using DDA raycasting."""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

import config
from game_state import Pose
from maze import EAST, NORTH, SOUTH, WEST, Coord, Maze

VERTICAL = "vertical"  # wall on a column boundary (x = const)
HORIZONTAL = "horizontal"  # wall on a row boundary (y = const)
NO_HIT = "none"


@dataclass(frozen=True)
class RayHit:
    """Result of a single ray."""
    distance: float
    orientation: str
    goal_visible: bool
    goal_distance: Optional[float]


@dataclass(frozen=True)
class ColumnSample:
    """One screen column of a projection."""
    angle: float
    distance: float
    corrected_distance: float
    orientation: str
    shade: int
    goal_distance: Optional[float] = None  # fish-eye corrected


@dataclass(frozen=True)
class Projection:
    columns: List[ColumnSample] = field(default_factory=list)
    goal_column: Optional[int] = None


def shade_index(distance: float, levels: int, max_depth: float = config.MAX_DEPTH) -> int:
    """Map a corrected distance to a palette index; nearer walls get lower indices."""
    if levels <= 0:
        return 0
    ratio = max(0.0, distance) / max_depth
    return min(levels - 1, int(ratio * levels))


def cast_ray(maze: Maze, start: Tuple[float, float], angle: float,
             max_distance: Optional[float] = None) -> RayHit:
    """
    Cast one ray from a continuous position through the maze.

    Args:
        maze: Maze to trace.
        start: (x, y) origin in grid units.
        angle: Ray direction in radians, 0 = +X (east).
        max_distance: Give up after this distance. Defaults to the grid diagonal.

    Returns:
        RayHit with the distance to the first closed wall, which kind of
        boundary stopped the ray, and the goal distance if the ray entered
        the goal cell.
    """
    size = maze.size
    if size == 0:
        return RayHit(0.0, NO_HIT, False, None)

    if max_distance is None:
        max_distance = size * math.sqrt(2)

    start_x, start_y = start
    dir_x = math.cos(angle)
    dir_y = math.sin(angle)

    step_x = 0 if dir_x == 0 else (1 if dir_x > 0 else -1)
    step_y = 0 if dir_y == 0 else (1 if dir_y > 0 else -1)

    # Length of ray from one x/y side to next
    delta_dist_x = abs(1 / dir_x) if dir_x != 0 else float('inf')
    delta_dist_y = abs(1 / dir_y) if dir_y != 0 else float('inf')

    if step_x > 0:
        side_dist_x = (math.floor(start_x) + 1 - start_x) * delta_dist_x
    elif step_x < 0:
        side_dist_x = (start_x - math.floor(start_x)) * delta_dist_x
    else:
        side_dist_x = float('inf')

    if step_y > 0:
        side_dist_y = (math.floor(start_y) + 1 - start_y) * delta_dist_y
    elif step_y < 0:
        side_dist_y = (start_y - math.floor(start_y)) * delta_dist_y
    else:
        side_dist_y = float('inf')

    map_x = min(max(int(math.floor(start_x)), 0), size - 1)
    map_y = min(max(int(math.floor(start_y)), 0), size - 1)

    goal_row, goal_col = maze.goal
    goal_visible = map_y == goal_row and map_x == goal_col
    goal_distance = 0.0 if goal_visible else None
    distance = None
    orientation = NO_HIT

    # DDA loop
    for _ in range(config.RAY_ITERATION_FACTOR * size * size):
        crosses_vertical = side_dist_x < side_dist_y
        boundary = side_dist_x if crosses_vertical else side_dist_y

        if boundary > max_distance:
            distance = max_distance
            break

        if crosses_vertical:
            if step_x == 0 or maze.has_wall(map_y, map_x, EAST if step_x > 0 else WEST):
                distance = boundary
                orientation = VERTICAL
                break
            map_x += step_x
            side_dist_x += delta_dist_x
        else:
            if step_y == 0 or maze.has_wall(map_y, map_x, SOUTH if step_y > 0 else NORTH):
                distance = boundary
                orientation = HORIZONTAL
                break
            map_y += step_y
            side_dist_y += delta_dist_y

        if not goal_visible and map_y == goal_row and map_x == goal_col:
            to_center_x = goal_col + 0.5 - start_x
            to_center_y = goal_row + 0.5 - start_y
            projected = to_center_x * dir_x + to_center_y * dir_y
            if projected > 0:
                goal_visible = True
                goal_distance = min(projected, max_distance)

    if distance is None:
        distance = max_distance

    return RayHit(distance, orientation, goal_visible, goal_distance)


def column_angle(heading: float, fov: float, index: int, column_count: int) -> float:
    """Ray angle for a screen column, symmetric around the heading."""
    return heading + fov * ((index + 0.5) / column_count - 0.5)


def _angle_between(a: float, b: float) -> float:
    diff = (a - b) % (2 * math.pi)
    return min(diff, 2 * math.pi - diff)


def project(maze: Maze, pose: Pose, fov: float = config.FOV,
            column_count: int = config.RENDER_WIDTH) -> Projection:
    """
    Cast one ray per screen column for a viewer pose.

    Args:
        maze: Maze to view.
        pose: Viewer position and heading.
        fov: Horizontal field of view in radians.
        column_count: Number of evenly spaced rays.

    Returns:
        Projection with per-column samples and the index of the column that
        best shows the goal, or None when no column sees it.
    """
    if maze.size == 0 or column_count <= 0:
        return Projection()

    start = (pose.x, pose.y)
    goal_row, goal_col = maze.goal
    goal_bearing = math.atan2(goal_row + 0.5 - pose.y, goal_col + 0.5 - pose.x)
    levels = len(config.VERTICAL_WALL_SHADES)

    columns = []
    goal_column = None
    best_offset = None

    for i in range(column_count):
        angle = column_angle(pose.angle, fov, i, column_count)
        hit = cast_ray(maze, start, angle)

        # Fish-eye correction
        cos_offset = math.cos(angle - pose.angle)
        corrected = hit.distance * cos_offset
        goal_distance = None
        if hit.goal_visible and hit.goal_distance is not None:
            goal_distance = hit.goal_distance * cos_offset

        columns.append(ColumnSample(
            angle=angle,
            distance=hit.distance,
            corrected_distance=corrected,
            orientation=hit.orientation,
            shade=shade_index(corrected, levels),
            goal_distance=goal_distance,
        ))

        if goal_distance is not None and hit.goal_distance <= hit.distance:
            offset = _angle_between(angle, goal_bearing)
            if best_offset is None or offset < best_offset:
                best_offset = offset
                goal_column = i

    return Projection(columns, goal_column)


def render_frame(projection: Projection, height: int = config.RENDER_HEIGHT) -> np.ndarray:
    """
    Render a projection to an RGB frame.

    Returns:
        numpy array of shape (height, len(projection.columns), 3), uint8.
    """
    width = len(projection.columns)
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    if width == 0:
        return frame

    half = height // 2
    # Ceiling gets slightly lighter toward horizon, floor darker away from it
    for y in range(half):
        ceil_factor = 0.7 + 0.3 * (y / max(1, half))
        frame[y, :] = [int(c * ceil_factor) for c in config.CEILING_COLOR]
    for y in range(half, height):
        floor_factor = 0.7 + 0.3 * (1 - (y - half) / max(1, height - half))
        frame[y, :] = [int(c * floor_factor) for c in config.FLOOR_COLOR]

    for x, column in enumerate(projection.columns):
        if column.orientation == NO_HIT:
            continue
        dist = max(0.001, column.corrected_distance)
        wall_height = int(height / dist)
        draw_start = max(0, half - wall_height // 2)
        draw_end = min(height - 1, half + wall_height // 2)

        palette = (config.VERTICAL_WALL_SHADES if column.orientation == VERTICAL
                   else config.HORIZONTAL_WALL_SHADES)
        frame[draw_start:draw_end + 1, x] = palette[min(column.shade, len(palette) - 1)]

    if projection.goal_column is not None:
        _draw_goal_flag(frame, projection.columns[projection.goal_column], projection.goal_column)

    return frame


def _draw_goal_flag(frame: np.ndarray, column: ColumnSample, x: int) -> None:
    """Draw a pole and pennant standing on the floor at the goal distance."""
    height, width = frame.shape[:2]
    half = height // 2
    dist = max(0.25, column.goal_distance or 0.25)
    cell_height = height / dist

    pole_bottom = min(height - 1, int(half + cell_height * 0.4))
    pole_top = max(0, int(pole_bottom - cell_height * 0.5))
    flag_width = max(2, int(cell_height * 0.2))
    flag_height = max(2, int(cell_height * 0.12))

    frame[pole_top:pole_bottom + 1, x] = config.GOAL_COLOR
    for dx in range(1, flag_width + 1):
        px = x + dx
        if px >= width:
            break
        # Pennant narrows toward its tip
        span = max(1, int(flag_height * (1 - dx / (flag_width + 1))))
        frame[pole_top:min(height, pole_top + span), px] = config.GOAL_COLOR


def render_overview(maze: Maze, pose: Optional[Pose] = None,
                    path: Optional[Sequence[Coord]] = None,
                    cell_px: int = config.OVERVIEW_CELL_PX) -> np.ndarray:
    """
    Render a top-down map of the maze.

    Args:
        maze: Maze to draw.
        pose: Optional viewer pose, drawn as a marker.
        path: Optional solution cells to highlight.
        cell_px: Pixels per cell side.

    Returns:
        numpy array of shape (size * cell_px + 1, size * cell_px + 1, 3), uint8.
    """
    side = maze.size * cell_px + 1
    image = np.zeros((side, side, 3), dtype=np.uint8)
    image[:, :] = config.OVERVIEW_FLOOR_COLOR
    if maze.size == 0:
        return image

    def fill_cell(row: int, col: int, color) -> None:
        top, left = row * cell_px, col * cell_px
        image[top + 1:top + cell_px, left + 1:left + cell_px] = color

    if path:
        for row, col in path:
            fill_cell(row, col, config.OVERVIEW_SOLUTION_COLOR)
    fill_cell(0, 0, config.OVERVIEW_START_COLOR)
    fill_cell(maze.size - 1, maze.size - 1, config.GOAL_COLOR)

    wall = config.OVERVIEW_WALL_COLOR
    for row in range(maze.size):
        for col in range(maze.size):
            top, left = row * cell_px, col * cell_px
            walls = maze.cell(row, col).walls
            if walls[NORTH]:
                image[top, left:left + cell_px + 1] = wall
            if walls[SOUTH]:
                image[top + cell_px, left:left + cell_px + 1] = wall
            if walls[WEST]:
                image[top:top + cell_px + 1, left] = wall
            if walls[EAST]:
                image[top:top + cell_px + 1, left + cell_px] = wall

    if pose is not None:
        px = min(side - 1, max(0, int(pose.x * cell_px)))
        py = min(side - 1, max(0, int(pose.y * cell_px)))
        r = max(1, cell_px // 3)
        image[max(0, py - r):py + r + 1, max(0, px - r):px + r + 1] = config.OVERVIEW_PLAYER_COLOR
        # Heading tick
        hx = min(side - 1, max(0, int(px + math.cos(pose.angle) * cell_px * 0.8)))
        hy = min(side - 1, max(0, int(py + math.sin(pose.angle) * cell_px * 0.8)))
        image[hy, hx] = config.OVERVIEW_PLAYER_COLOR

    return image
