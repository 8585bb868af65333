"""Tests for dice rolling utilities and randomness sources."""

import random

import pytest

from engine.dice import DiceResult, ScriptedRandom, roll, roll_d20, roll_die, seeded_random


class TestRoll:
    """Tests for the roll() function."""

    def test_basic_roll(self):
        """Roll 1d6 with a seeded RNG produces expected result."""
        rng = random.Random(42)
        result = roll("1d6", rng=rng)
        assert isinstance(result, DiceResult)
        assert len(result.rolls) == 1
        assert 1 <= result.rolls[0] <= 6
        assert result.modifier == 0
        assert result.total == result.rolls[0]

    def test_multiple_dice(self):
        """Roll 3d6 produces 3 individual rolls."""
        rng = random.Random(42)
        result = roll("3d6", rng=rng)
        assert len(result.rolls) == 3
        assert all(1 <= r <= 6 for r in result.rolls)
        assert result.total == sum(result.rolls)

    def test_positive_modifier(self):
        """Roll 1d8+3 adds modifier correctly."""
        result = roll("1d8+3", rng=random.Random(42))
        assert result.modifier == 3
        assert result.total == result.rolls[0] + 3

    def test_negative_modifier(self):
        """Roll 1d8-2 subtracts modifier correctly."""
        result = roll("1d8-2", rng=random.Random(42))
        assert result.modifier == -2
        assert result.total == result.rolls[0] - 2

    def test_notation_stored(self):
        """Notation string is normalised and preserved in result."""
        result = roll(" 2D6+3 ")
        assert result.notation == "2d6+3"

    def test_invalid_notation(self):
        """Invalid notation raises ValueError."""
        for bad in ("bad", "d6", "2d", "0d6", "1d0"):
            with pytest.raises(ValueError):
                roll(bad)

    def test_seeded_determinism(self):
        """Same seed produces same results."""
        result1 = roll("4d6", rng=seeded_random(123))
        result2 = roll("4d6", rng=seeded_random(123))
        assert result1.rolls == result2.rolls
        assert result1.total == result2.total


class TestSingleDice:
    """Tests for roll_d20() and roll_die()."""

    def test_d20_in_range(self):
        rng = random.Random(7)
        assert all(1 <= roll_d20(rng) <= 20 for _ in range(200))

    def test_die_in_range(self):
        rng = random.Random(7)
        assert all(1 <= roll_die(4, rng) <= 4 for _ in range(200))

    def test_tiny_die_rolls_as_d2(self):
        """Sizes below 2 still produce a 1..2 roll."""
        rng = ScriptedRandom(ints=[5])
        assert roll_die(1, rng) == 2


class TestScriptedRandom:
    """Tests for forced-roll injection."""

    def test_serves_ints_in_order(self):
        rng = ScriptedRandom(ints=[3, 17, 1])
        assert [roll_d20(rng) for _ in range(3)] == [3, 17, 1]
        assert rng.remaining_ints == 0

    def test_clamps_into_range(self):
        """A forced 20 on a d6 reads as a 6; a forced 0 reads as a 1."""
        rng = ScriptedRandom(ints=[20, 0])
        assert rng.randint(1, 6) == 6
        assert rng.randint(1, 6) == 1

    def test_floats_are_separate_queue(self):
        rng = ScriptedRandom(ints=[4], floats=[0.25])
        assert rng.random() == 0.25
        assert rng.randint(1, 20) == 4

    def test_exhausted_without_fallback_raises(self):
        rng = ScriptedRandom()
        with pytest.raises(IndexError):
            rng.randint(1, 20)
        with pytest.raises(IndexError):
            rng.random()

    def test_fallback_after_script(self):
        """Once the script runs dry, draws come from the fallback."""
        rng = ScriptedRandom(ints=[20], fallback=random.Random(5))
        check = random.Random(5)
        assert rng.randint(1, 20) == 20
        assert rng.randint(1, 20) == check.randint(1, 20)
        assert rng.random() == check.random()

    def test_dice_notation_uses_script(self):
        result = roll("2d8+1", rng=ScriptedRandom(ints=[3, 8]))
        assert result.rolls == [3, 8]
        assert result.total == 12
