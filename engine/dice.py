"""Dice rolling utilities and injectable randomness sources."""

from __future__ import annotations

import random
import re
from collections import deque
from typing import Iterable, Protocol

from pydantic import BaseModel


class RandomSource(Protocol):
    """Anything that can draw uniform integers and floats.

    ``random.Random`` satisfies this protocol. A source reused across
    sessions must not be drawn from concurrently.
    """

    def randint(self, a: int, b: int) -> int: ...

    def random(self) -> float: ...


class DiceResult(BaseModel):
    """Result of a dice roll."""
    total: int
    rolls: list[int]
    modifier: int
    notation: str


def seeded_random(seed: int | None = None) -> random.Random:
    """Return a deterministic Random for reproducible simulation."""
    return random.Random(seed)


class ScriptedRandom:
    """Forced-roll randomness source.

    Integers and floats are served from separate queues in the order given.
    Queued integers are clamped into the requested range so a forced 20 on
    a d6 still reads as a maximum roll. Once a queue runs dry the draw goes
    to ``fallback``; without one, ``IndexError`` is raised.
    """

    def __init__(
        self,
        ints: Iterable[int] = (),
        floats: Iterable[float] = (),
        fallback: RandomSource | None = None,
    ) -> None:
        self._ints = deque(ints)
        self._floats = deque(floats)
        self._fallback = fallback

    @property
    def remaining_ints(self) -> int:
        return len(self._ints)

    @property
    def remaining_floats(self) -> int:
        return len(self._floats)

    def randint(self, a: int, b: int) -> int:
        if self._ints:
            return min(max(self._ints.popleft(), a), b)
        if self._fallback is None:
            raise IndexError("ScriptedRandom ran out of integer rolls")
        return self._fallback.randint(a, b)

    def random(self) -> float:
        if self._floats:
            return self._floats.popleft()
        if self._fallback is None:
            raise IndexError("ScriptedRandom ran out of float rolls")
        return self._fallback.random()


def roll(notation: str, rng: RandomSource | None = None) -> DiceResult:
    """Parse and roll dice notation like '2d6+3', '1d20', '4d6-1'.

    Args:
        notation: Dice notation string (e.g. "2d6+3").
        rng: Optional randomness source for seeded/testing rolls.

    Returns:
        DiceResult with total, individual rolls, modifier, and notation.
    """
    rng = rng or random.Random()
    notation = notation.strip().lower()

    match = re.match(r"^(\d+)d(\d+)([+-]\d+)?$", notation)
    if not match:
        raise ValueError(f"Invalid dice notation: {notation}")

    num_dice = int(match.group(1))
    die_size = int(match.group(2))
    modifier = int(match.group(3)) if match.group(3) else 0
    if num_dice < 1 or die_size < 1:
        raise ValueError(f"Invalid dice notation: {notation}")

    rolls = [rng.randint(1, die_size) for _ in range(num_dice)]
    total = sum(rolls) + modifier

    return DiceResult(
        total=total,
        rolls=rolls,
        modifier=modifier,
        notation=notation,
    )


def roll_d20(rng: RandomSource | None = None) -> int:
    """Roll a single d20."""
    rng = rng or random.Random()
    return rng.randint(1, 20)


def roll_die(size: int, rng: RandomSource | None = None) -> int:
    """Roll one die of the given size. Sizes below 2 roll as a d2."""
    rng = rng or random.Random()
    return rng.randint(1, max(size, 2))
