"""Deterministic seeding: string hashing and a seeded PRNG."""

from typing import Callable

MASK_32 = 0xFFFFFFFF

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193


def hash_to_seed(text: str) -> int:
    """Hash text to a 32-bit seed using FNV-1a over its UTF-8 bytes."""
    h = FNV_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        h ^= byte
        h = (h * FNV_PRIME) & MASK_32
    return h


def make_generator(seed: int) -> Callable[[], float]:
    """
    Create a mulberry32 generator.

    Args:
        seed: Any integer, reduced to 32 bits.

    Returns:
        A zero-argument function returning floats in [0, 1). Two generators
        made from the same seed produce the same sequence.
    """
    state = seed & MASK_32

    def generator() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & MASK_32
        t = state
        t = ((t ^ (t >> 15)) * (t | 1)) & MASK_32
        t ^= (t + ((t ^ (t >> 7)) * (t | 61))) & MASK_32
        return ((t ^ (t >> 14)) & MASK_32) / 4294967296.0

    return generator


def random_index(generator: Callable[[], float], count: int) -> int:
    """Draw an index in [0, count) from a generator."""
    return min(int(generator() * count), count - 1)
