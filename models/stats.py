"""Attribute bundles, derived stats, and additive modifiers."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict


class Attribute(str, Enum):
    """The seven base attributes."""
    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    INTELLIGENCE = "intelligence"
    VITALITY = "vitality"
    CHARISMA = "charisma"
    PERCEPTION = "perception"
    LUCK = "luck"


def ability_modifier(score: int) -> int:
    """Calculate the d20-style modifier for an attribute score.

    Args:
        score: The attribute score (e.g. 16).

    Returns:
        The modifier (e.g. +3 for score 16, -1 for score 8).
    """
    return (score - 10) // 2


class AttributeDelta(BaseModel):
    """Additive signed modifiers, e.g. gear bonuses."""
    model_config = ConfigDict(frozen=True)

    strength: int = 0
    dexterity: int = 0
    intelligence: int = 0
    vitality: int = 0
    charisma: int = 0
    perception: int = 0
    luck: int = 0

    def __add__(self, other: AttributeDelta) -> AttributeDelta:
        return AttributeDelta(
            **{attr.value: getattr(self, attr.value) + getattr(other, attr.value) for attr in Attribute}
        )


def sum_deltas(deltas: Iterable[AttributeDelta]) -> AttributeDelta:
    """Pointwise sum of any number of deltas."""
    total = AttributeDelta()
    for delta in deltas:
        total = total + delta
    return total


class Attributes(BaseModel):
    """Immutable bundle of the seven base attributes."""
    model_config = ConfigDict(frozen=True)

    strength: int = 10
    dexterity: int = 10
    intelligence: int = 10
    vitality: int = 10
    charisma: int = 10
    perception: int = 10
    luck: int = 10

    @classmethod
    def uniform(cls, value: int) -> Attributes:
        return cls(**{attr.value: value for attr in Attribute})

    @property
    def max_hp(self) -> int:
        return self.vitality * 10 + self.strength * 2

    @property
    def max_resource(self) -> int:
        return self.intelligence * 5 + self.perception * 2

    @property
    def crit_chance(self) -> int:
        return self.luck + self.dexterity // 2

    def get(self, attr: Attribute) -> int:
        return getattr(self, attr.value)

    def modifier(self, attr: Attribute) -> int:
        return ability_modifier(self.get(attr))

    def __add__(self, delta: AttributeDelta) -> Attributes:
        return Attributes(
            **{attr.value: self.get(attr) + getattr(delta, attr.value) for attr in Attribute}
        )
