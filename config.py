"""Configuration constants for a-mazing-today."""

import math
import os

# Maze settings
MAZE_SIZE = 40  # cells per side of the daily maze
START_POSITION = (0.5, 0.5)  # centre of the start cell, (x, y)
START_ANGLE = 0.0  # facing +X (east)

# Display settings
RENDER_WIDTH = 240  # one ray per column
RENDER_HEIGHT = 160
DISPLAY_WIDTH = 960
DISPLAY_HEIGHT = 640
FPS_CAP = 60
OVERVIEW_CELL_PX = 6

# Player settings
MOVE_SPEED = 1.0  # cells per second
TURN_SPEED = math.pi * 1.4  # radians per second
FOV = math.radians(66)
MAX_DELTA_SECONDS = 0.12  # longest tick the integrator will accept

# Collision settings
MAX_SUB_STEP = 0.05  # grid units per axis per sub-step
CLAMP_EPSILON = 1e-4  # gap kept between the player and a closed wall
MOTION_EPSILON = 1e-6
MAX_SUB_STEPS = 200  # hard cap on sub-steps per integration call

# Raycaster settings
MAX_DEPTH = 12.0  # reference distance for depth shading
RAY_ITERATION_FACTOR = 4  # iterations per cell before a ray gives up

# Wall shades, nearest first. Vertical (E/W facing) and horizontal (N/S facing)
# faces get separate palettes so perpendicular walls are distinguishable.
VERTICAL_WALL_SHADES = [
    (47, 61, 91),
    (40, 53, 82),
    (33, 45, 72),
    (28, 38, 64),
]
HORIZONTAL_WALL_SHADES = [
    (31, 42, 68),
    (27, 37, 61),
    (24, 33, 55),
    (22, 30, 50),
]

FLOOR_COLOR = (100, 111, 130)
CEILING_COLOR = (11, 18, 33)
GOAL_COLOR = (250, 204, 21)  # flag yellow

# Overview map colours
OVERVIEW_FLOOR_COLOR = (229, 231, 235)
OVERVIEW_WALL_COLOR = (31, 41, 55)
OVERVIEW_SOLUTION_COLOR = (147, 197, 253)
OVERVIEW_START_COLOR = (134, 239, 172)
OVERVIEW_PLAYER_COLOR = (239, 68, 68)

# Leaderboard settings
LEADERBOARD_LIMIT = 10
NICKNAME_MAX_LENGTH = 20

# Logging
LOG_LEVEL = os.environ.get("AMAZING_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
