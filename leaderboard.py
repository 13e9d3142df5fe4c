"""Daily leaderboard entries, ranking and display formatting."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

import config
from seeding import hash_to_seed, make_generator

SAMPLE_NAMES = [
    "Astra", "Blitz", "Comet", "Drift", "Echo", "Flux", "Glint", "Halo",
    "Ion", "Jolt", "Kite", "Lumen", "Nova", "Orbit", "Pulse",
]

MOCK_ENTRY_COUNT = 6


@dataclass(frozen=True)
class LeaderboardEntry:
    nickname: str
    completed_at: datetime  # UTC
    duration_ms: int


def clean_nickname(nickname: str) -> str:
    """Trim and shorten a nickname. Blank names are rejected."""
    cleaned = (nickname or "").strip()[:config.NICKNAME_MAX_LENGTH]
    if not cleaned:
        raise ValueError("Nickname must not be blank")
    return cleaned


def _sort_key(entry: LeaderboardEntry):
    return (entry.completed_at, entry.duration_ms)


def build_daily_mock_leaderboard(key: str) -> List[LeaderboardEntry]:
    """
    Build a deterministic placeholder board for a day key.

    Every caller gets the same six entries for the same day, finishing
    within the first twelve hours of that day (UTC).
    """
    random = make_generator(hash_to_seed(f"leaderboard-{key}"))
    start_of_day = datetime.fromisoformat(key).replace(tzinfo=timezone.utc)

    entries = []
    for index in range(MOCK_ENTRY_COUNT):
        minutes_after_start = int(random() * 12 * 60)
        additional_seconds = int(random() * 60)
        completed_at = start_of_day + timedelta(minutes=minutes_after_start,
                                                seconds=additional_seconds)
        duration_seconds = 45 + int(random() * 240)
        name = SAMPLE_NAMES[(index + int(random() * len(SAMPLE_NAMES))) % len(SAMPLE_NAMES)]
        entries.append(LeaderboardEntry(name, completed_at, duration_seconds * 1000))

    entries.sort(key=lambda e: e.completed_at)
    return entries


def insert_entry(entries: Sequence[LeaderboardEntry],
                 entry: LeaderboardEntry) -> List[LeaderboardEntry]:
    """Return a new board with entry inserted, earliest finish first."""
    updated = sorted([*entries, entry], key=_sort_key)
    return updated[:config.LEADERBOARD_LIMIT]


def rank_of(entries: Sequence[LeaderboardEntry], entry: LeaderboardEntry) -> Optional[int]:
    """1-based rank of an entry, or None if it did not make the board."""
    for index, candidate in enumerate(entries):
        if candidate == entry:
            return index + 1
    return None


def format_duration(ms: Optional[int]) -> str:
    """Format milliseconds as MM:SS.t"""
    if not ms or ms < 0:
        return "00:00.0"
    total_seconds = ms // 1000
    minutes, seconds = divmod(total_seconds, 60)
    tenths = (ms % 1000) // 100
    return f"{minutes:02d}:{seconds:02d}.{tenths}"


def format_utc_time(when: Optional[datetime]) -> str:
    if when is None:
        return "-"
    if when.tzinfo is not None:
        when = when.astimezone(timezone.utc)
    return when.strftime("%H:%M:%S")
