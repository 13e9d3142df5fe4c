"""Main entry point for a-mazing-today."""

import argparse
import logging
import sys
from datetime import date

import numpy as np
import pygame

import config
from game_state import DailyChallenge, InputState
from leaderboard import (build_daily_mock_leaderboard, format_duration, format_utc_time,
                         insert_entry, rank_of)
from raycaster import project, render_frame, render_overview

logger = logging.getLogger(__name__)

KEY_NAMES = {
    pygame.K_UP: "up",
    pygame.K_w: "w",
    pygame.K_DOWN: "down",
    pygame.K_s: "s",
    pygame.K_LEFT: "left",
    pygame.K_a: "a",
    pygame.K_RIGHT: "right",
    pygame.K_d: "d",
}


def day_arg(value: str) -> str:
    """argparse type for --day: an ISO calendar date, normalized."""
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Daily seeded first-person maze.")
    parser.add_argument("--size", type=int, default=config.MAZE_SIZE,
                        help="cells per side (default: %(default)s)")
    parser.add_argument("--day", type=day_arg, default=None,
                        help="day key (YYYY-MM-DD) to play instead of today (UTC)")
    parser.add_argument("--nickname", default="Player", help="name recorded on the leaderboard")
    parser.add_argument("--snapshot", default=None, metavar="PATH",
                        help="render the starting view to an image file and exit")
    return parser.parse_args(argv)


def pressed_key_names() -> set:
    """Names of the held movement keys."""
    keys = pygame.key.get_pressed()
    return {name for code, name in KEY_NAMES.items() if keys[code]}


def save_snapshot(challenge: DailyChallenge, nickname: str, path: str) -> None:
    """Render the first-person view from the start pose and save it."""
    from PIL import Image

    run = challenge.start_run(nickname)
    frame = render_frame(project(challenge.maze, run.pose))
    Image.fromarray(frame).save(path)
    logger.info("Saved snapshot of %s to %s", challenge.key, path)


def roll_over(challenge: DailyChallenge, nickname: str, key=None):
    """
    Switch to a new day if the key changed.

    The run in progress belongs to the old day, so it is replaced along with
    the board rather than finishing onto the new day's leaderboard.

    Returns:
        (run, board) for the new day, or None if the day is unchanged.
    """
    if not challenge.refresh(key):
        return None
    return challenge.start_run(nickname), build_daily_mock_leaderboard(challenge.key)


def main(argv=None):
    """Main game loop."""
    args = parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    try:
        challenge = DailyChallenge(args.size, args.day)
        run = challenge.start_run(args.nickname)
        board = build_daily_mock_leaderboard(challenge.key)
    except ValueError as e:
        logger.error("Cannot start: %s", e)
        return 2

    if args.snapshot:
        save_snapshot(challenge, args.nickname, args.snapshot)
        return 0

    # Initialize pygame
    pygame.init()
    screen = pygame.display.set_mode((config.DISPLAY_WIDTH, config.DISPLAY_HEIGHT))
    pygame.display.set_caption(f"A-Mazing Today - {challenge.key}")
    clock = pygame.time.Clock()

    font = pygame.font.Font(None, 36)
    small_font = pygame.font.Font(None, 24)

    result = None
    show_solution = False
    show_overview = True

    running = True
    while running:
        # Handle events
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_h:
                    show_solution = not show_solution
                elif event.key == pygame.K_m:
                    show_overview = not show_overview
                elif event.key == pygame.K_r:
                    # A fresh run always picks up the current day's maze
                    run = challenge.start_run(args.nickname)
                    result = None

        # A new day starts a new run on the new maze
        rolled = roll_over(challenge, args.nickname) if args.day is None else None
        if rolled is not None:
            run, board = rolled
            result = None
            pygame.display.set_caption(f"A-Mazing Today - {challenge.key}")

        # Delta time for movement (capped by update_pose)
        dt = clock.tick(config.FPS_CAP) / 1000.0
        intent = InputState.from_keys(pressed_key_names())

        if run.step(intent, dt):
            result = run.result()
            board = insert_entry(board, result)

        projection = project(run.maze, run.pose)
        frame = render_frame(projection)

        # Convert numpy array to pygame surface
        surface = pygame.surfarray.make_surface(frame.swapaxes(0, 1))
        scaled_surface = pygame.transform.scale(
            surface,
            (config.DISPLAY_WIDTH, config.DISPLAY_HEIGHT)
        )
        screen.blit(scaled_surface, (0, 0))

        if show_overview:
            path = challenge.solution() if show_solution and run.maze is challenge.maze else None
            overview = render_overview(run.maze, run.pose, path)
            overview_surface = pygame.surfarray.make_surface(np.ascontiguousarray(overview.swapaxes(0, 1)))
            screen.blit(overview_surface, (config.DISPLAY_WIDTH - overview.shape[1] - 10, 10))

        status = f"{run.nickname} | {format_duration(run.elapsed_ms())} | seed {challenge.key}"
        screen.blit(font.render(status, True, (255, 255, 255)), (10, 10))

        if result is not None:
            rank = rank_of(board, result)
            lines = [
                f"Maze complete in {format_duration(result.duration_ms)}",
                f"Finished at {format_utc_time(result.completed_at)} UTC"
                + (f" - rank #{rank}" if rank else ""),
                "[R] run it again",
            ]
            for i, line in enumerate(lines):
                text = font.render(line, True, config.GOAL_COLOR)
                screen.blit(text, (10, config.DISPLAY_HEIGHT // 2 - 40 + i * 34))

        controls = small_font.render(
            "Arrows/WASD: Move & turn | H: Solution | M: Map | R: Restart | ESC: Quit",
            True, (200, 200, 200))
        screen.blit(controls, (10, config.DISPLAY_HEIGHT - 30))

        pygame.display.flip()

    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
