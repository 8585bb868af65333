"""Derive combat-ready profiles from character flags, gear, and the catalog.

Everything here is a pure function of (flags, equipped items, catalog).
Unknown or malformed item references contribute nothing rather than
failing the whole computation.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

import config
from engine.catalog import ItemCatalog
from engine.traits import Traits, is_proficient, parse_traits, seasoned_baseline
from models.characters import CharacterState, OpponentDef
from models.items import ArmorCategory, EquipmentSlot, ItemDef, ItemType, WeaponCategory
from models.stats import Attribute, Attributes, sum_deltas

logger = logging.getLogger(__name__)

DEFAULT_OPPONENT_STATS = Attributes.uniform(8)


class WeaponProfile(BaseModel):
    """How the equipped weapon (or bare fists) deals damage."""
    category: WeaponCategory
    die: int
    attribute: Attribute
    penetration: int

    @property
    def label(self) -> str:
        return self.category.value.replace("_", "-").title()


class PlayerProfile(BaseModel):
    """Derived player stats a combat session runs on."""
    attributes: Attributes
    max_hp: int
    armor_class: int
    damage_reduction: int
    weapon: WeaponProfile
    proficient: bool
    attack_bonus: int
    damage_modifier: int
    crit_min: int
    extra_crit_chance: float
    has_shield: bool
    block_chance: float


class OpponentProfile(BaseModel):
    """Derived opponent stats a combat session runs on."""
    name: str
    level: int
    attributes: Attributes
    hp: int
    resource: int
    armor_class: int
    damage_reduction: int
    attack_bonus: int
    damage_modifier: int


def equipped_item(character: CharacterState, catalog: ItemCatalog, slot: EquipmentSlot) -> ItemDef | None:
    """Resolve the item in a slot, or None if empty or unknown."""
    item_id = character.equipment.get(slot)
    item = catalog.try_get(item_id)
    if item_id and item is None:
        logger.debug("Ignoring unknown item %r in slot %s", item_id, slot.value)
    return item


def effective_attributes(
    character: CharacterState,
    catalog: ItemCatalog,
    traits: Traits | None = None,
) -> Attributes:
    """Seasoned baseline plus the bonuses of every resolvable equipped item."""
    traits = traits or parse_traits(character)
    bonuses = []
    for slot in character.equipment:
        item = equipped_item(character, catalog, slot)
        if item is not None and item.bonuses is not None:
            bonuses.append(item.bonuses)
    return seasoned_baseline(traits) + sum_deltas(bonuses)


def weapon_table(category: WeaponCategory) -> tuple[int, Attribute]:
    """Damage die and governing attribute for a weapon category."""
    match category:
        case WeaponCategory.UNARMED:
            return 4, Attribute.STRENGTH
        case WeaponCategory.DAGGER:
            return 4, Attribute.DEXTERITY
        case WeaponCategory.ONE_HANDED:
            return 6, Attribute.STRENGTH
        case WeaponCategory.TWO_HANDED:
            return 10, Attribute.STRENGTH
        case WeaponCategory.RANGED:
            return 8, Attribute.DEXTERITY
        case WeaponCategory.STAFF:
            return 6, Attribute.INTELLIGENCE


def penetration(category: WeaponCategory) -> int:
    """DR ignored by a weapon category."""
    match category:
        case WeaponCategory.TWO_HANDED:
            return 2
        case WeaponCategory.ONE_HANDED:
            return 1
        case _:
            return 0


def resolve_weapon(character: CharacterState, catalog: ItemCatalog) -> WeaponProfile:
    """Weapon profile for the weapon slot; unarmed if empty or not a weapon."""
    item = equipped_item(character, catalog, EquipmentSlot.WEAPON)
    if item is None or item.type is not ItemType.WEAPON:
        category = WeaponCategory.UNARMED
    else:
        category = item.weapon_category or WeaponCategory.ONE_HANDED

    die, attribute = weapon_table(category)
    return WeaponProfile(
        category=category,
        die=die,
        attribute=attribute,
        penetration=penetration(category),
    )


def _armor_category(item: ItemDef | None) -> ArmorCategory | None:
    if item is None or item.type is not ItemType.ARMOR:
        return None
    return item.armor_category


def head_armor_bonus(category: ArmorCategory | None) -> int:
    match category:
        case ArmorCategory.PLATE:
            return 1
        case _:
            return 0


def chest_armor_bonus(category: ArmorCategory | None) -> int:
    match category:
        case ArmorCategory.PLATE:
            return 2
        case ArmorCategory.LEATHER:
            return 1
        case _:
            return 0


def chest_damage_reduction(category: ArmorCategory | None) -> int:
    match category:
        case ArmorCategory.PLATE:
            return 3
        case ArmorCategory.LEATHER:
            return 1
        case _:
            return 0


def has_shield(character: CharacterState, catalog: ItemCatalog) -> bool:
    item = equipped_item(character, catalog, EquipmentSlot.OFFHAND)
    return item is not None and item.type is ItemType.SHIELD


def armor_class(character: CharacterState, catalog: ItemCatalog, attributes: Attributes) -> int:
    """10 + DEX mod + head and chest armor + flat shield bonus."""
    ac = 10 + attributes.modifier(Attribute.DEXTERITY)
    ac += head_armor_bonus(_armor_category(equipped_item(character, catalog, EquipmentSlot.HEAD)))
    ac += chest_armor_bonus(_armor_category(equipped_item(character, catalog, EquipmentSlot.CHEST)))
    if has_shield(character, catalog):
        ac += config.SHIELD_AC_BONUS
    return ac


def damage_reduction(character: CharacterState, catalog: ItemCatalog) -> int:
    """Chest armor DR plus one for a shield."""
    dr = chest_damage_reduction(_armor_category(equipped_item(character, catalog, EquipmentSlot.CHEST)))
    if has_shield(character, catalog):
        dr += 1
    return dr


def crit_threshold(traits: Traits, category: WeaponCategory) -> int:
    """Lowest natural d20 roll that counts as a critical hit."""
    base = config.SPECIALIST_CRIT_THRESHOLD if traits.is_specialist else config.BASE_CRIT_THRESHOLD
    if category is WeaponCategory.DAGGER:
        base -= 1
    return max(config.MIN_CRIT_THRESHOLD, base)


def extra_crit_chance(traits: Traits, attributes: Attributes) -> float:
    """Independent chance to upgrade a normal hit, from Luck and spec."""
    chance = (attributes.luck - 10) * 0.01
    if traits.is_specialist:
        chance += 0.05
    return min(max(chance, 0.0), config.CRIT_CHANCE_CAP)


def build_player_profile(character: CharacterState, catalog: ItemCatalog) -> PlayerProfile:
    """Compute everything a session needs to know about the player."""
    traits = parse_traits(character)
    attributes = effective_attributes(character, catalog, traits)
    weapon = resolve_weapon(character, catalog)
    proficient = is_proficient(traits.primary_class, weapon.category)
    shield = has_shield(character, catalog)
    stat_mod = attributes.modifier(weapon.attribute)

    derived_max = attributes.max_hp if attributes.max_hp > 0 else character.current_hp
    max_hp = max(1, derived_max)

    return PlayerProfile(
        attributes=attributes,
        max_hp=max_hp,
        armor_class=armor_class(character, catalog, attributes),
        damage_reduction=damage_reduction(character, catalog),
        weapon=weapon,
        proficient=proficient,
        attack_bonus=(config.PROFICIENCY_BONUS if proficient else 0) + stat_mod,
        damage_modifier=stat_mod,
        crit_min=crit_threshold(traits, weapon.category),
        extra_crit_chance=extra_crit_chance(traits, attributes),
        has_shield=shield,
        block_chance=config.SHIELD_BLOCK_CHANCE if shield else 0.0,
    )


def build_opponent_profile(opponent: OpponentDef) -> OpponentProfile:
    """Opponent stats, falling back to attribute formulas for missing overrides."""
    attributes = opponent.base_stats or DEFAULT_OPPONENT_STATS
    hp = opponent.hp if opponent.hp is not None else attributes.max_hp // 2 + 4
    resource = opponent.resource if opponent.resource is not None else attributes.max_resource
    str_mod = attributes.modifier(Attribute.STRENGTH)

    return OpponentProfile(
        name=opponent.name,
        level=opponent.level,
        attributes=attributes,
        hp=max(1, hp),
        resource=max(0, resource),
        armor_class=10 + attributes.modifier(Attribute.DEXTERITY) + opponent.level,
        damage_reduction=max(0, attributes.vitality // 5),
        attack_bonus=opponent.level + str_mod,
        damage_modifier=str_mod,
    )
