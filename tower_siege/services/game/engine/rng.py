"""Injectable random source for combat and spawn outcomes."""

import logging
import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    """The subset of random.Random the engine draws from.

    Any seeded random.Random instance satisfies it; tests may pass a scripted
    stand-in to force outcomes.
    """

    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...


def create_rng(seed: int | None = None) -> random.Random:
    """Create a random source, reproducible when a seed is given."""
    logger.debug("Creating random source: seed=%s", seed)
    return random.Random(seed)
