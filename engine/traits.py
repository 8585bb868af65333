"""Race/class/specialization tags: stat seasoning and weapon proficiency."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from models.characters import CharacterState
from models.items import WeaponCategory
from models.stats import Attributes, AttributeDelta

# Tutorial build (human warrior champion) keeps its hand-tuned baseline.
LEGACY_BASELINE = Attributes(
    strength=12,
    dexterity=10,
    intelligence=8,
    vitality=12,
    charisma=8,
    perception=10,
    luck=10,
)
NEUTRAL_BASELINE = Attributes()


class Race(str, Enum):
    HUMAN = "human"
    ELF = "elf"


class CharacterClass(str, Enum):
    WARRIOR = "warrior"
    MAGE = "mage"
    ROGUE = "rogue"


class Specialization(str, Enum):
    CHAMPION = "champion"
    BERSERKER = "berserker"
    TEMPLAR = "templar"
    ELEMENTAL = "elemental"
    DRUID = "druid"
    WARLOCK = "warlock"
    RANGER = "ranger"
    THIEF = "thief"
    TRICKSTER = "trickster"


class StatModifier(NamedTuple):
    """A named attribute adjustment granted by a tag."""
    name: str
    tag: Race | CharacterClass | Specialization
    delta: AttributeDelta


# Applied in order: race, class, specialization.
SEASONING: tuple[StatModifier, ...] = (
    StatModifier("elven grace", Race.ELF, AttributeDelta(
        dexterity=2, intelligence=2, perception=1, strength=-1, vitality=-1,
    )),
    StatModifier("human resolve", Race.HUMAN, AttributeDelta(strength=1, vitality=1, luck=1)),
    StatModifier("arcane study", CharacterClass.MAGE, AttributeDelta(intelligence=2)),
    StatModifier("quick hands", CharacterClass.ROGUE, AttributeDelta(dexterity=2)),
    StatModifier("martial drill", CharacterClass.WARRIOR, AttributeDelta(strength=2)),
    StatModifier("champion", Specialization.CHAMPION, AttributeDelta(vitality=1)),
    StatModifier("berserker", Specialization.BERSERKER, AttributeDelta(strength=1)),
    StatModifier("templar", Specialization.TEMPLAR, AttributeDelta(perception=1)),
    StatModifier("elemental", Specialization.ELEMENTAL, AttributeDelta(intelligence=1)),
    StatModifier("druid", Specialization.DRUID, AttributeDelta(perception=1)),
    StatModifier("warlock", Specialization.WARLOCK, AttributeDelta(luck=1)),
    StatModifier("ranger", Specialization.RANGER, AttributeDelta(dexterity=1)),
    StatModifier("thief", Specialization.THIEF, AttributeDelta(dexterity=1)),
    StatModifier("trickster", Specialization.TRICKSTER, AttributeDelta(charisma=1)),
)


class Traits(NamedTuple):
    """Recognised tags parsed from a character's flags."""
    races: frozenset[Race]
    classes: frozenset[CharacterClass]
    specializations: frozenset[Specialization]
    primary_class: CharacterClass | None

    def has(self, tag: Race | CharacterClass | Specialization) -> bool:
        return tag in self.races or tag in self.classes or tag in self.specializations

    @property
    def is_legacy_build(self) -> bool:
        return (
            Race.HUMAN in self.races
            and CharacterClass.WARRIOR in self.classes
            and Specialization.CHAMPION in self.specializations
        )

    @property
    def is_specialist(self) -> bool:
        """Specialised builds crit on a natural 19."""
        return Specialization.CHAMPION in self.specializations


def _parse_tag(flag: str, prefix: str, enum_cls):
    if not flag.startswith(prefix):
        return None
    try:
        return enum_cls(flag[len(prefix):])
    except ValueError:
        return None


def parse_traits(character: CharacterState) -> Traits:
    """Extract race/class/spec tags from flags. Unknown flags are ignored.

    Flags are matched case-insensitively. The primary class comes from the
    first ``class.*`` flag in sorted order, even one naming no known class
    (which leaves it None). The archetype is consulted only when there is
    no ``class.*`` flag at all.
    """
    races: set[Race] = set()
    classes: set[CharacterClass] = set()
    specs: set[Specialization] = set()
    primary: CharacterClass | None = None
    class_flag_seen = False

    for flag in sorted(f.strip().lower() for f in character.flags):
        if flag.startswith("class."):
            klass = _parse_tag(flag, "class.", CharacterClass)
            if klass is not None:
                classes.add(klass)
            if not class_flag_seen:
                primary = klass
                class_flag_seen = True
        elif (race := _parse_tag(flag, "race.", Race)) is not None:
            races.add(race)
        elif (spec := _parse_tag(flag, "spec.", Specialization)) is not None:
            specs.add(spec)

    if not class_flag_seen and character.archetype:
        try:
            primary = CharacterClass(character.archetype.strip().lower())
        except ValueError:
            primary = None

    return Traits(frozenset(races), frozenset(classes), frozenset(specs), primary)


def seasoned_baseline(traits: Traits) -> Attributes:
    """Starting attributes before equipment, derived from tags."""
    if traits.is_legacy_build:
        return LEGACY_BASELINE

    stats = NEUTRAL_BASELINE
    for modifier in SEASONING:
        if traits.has(modifier.tag):
            stats = stats + modifier.delta
    return stats


def is_proficient(character_class: CharacterClass | None, category: WeaponCategory) -> bool:
    """Whether a class wields a weapon category at full effectiveness."""
    if category is WeaponCategory.UNARMED:
        return True

    match character_class:
        case CharacterClass.WARRIOR:
            return True
        case _:
            return category in (WeaponCategory.DAGGER, WeaponCategory.ONE_HANDED, WeaponCategory.RANGED)
