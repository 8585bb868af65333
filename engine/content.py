"""Built-in sample content: starter items, a small bestiary, the tutorial hero."""

from __future__ import annotations

from engine.catalog import Bestiary, ItemCatalog
from models.characters import CharacterState, OpponentDef
from models.items import (
    ArmorCategory,
    EquipmentSlot,
    ItemDef,
    ItemStack,
    ItemType,
    WeaponCategory,
)
from models.stats import Attributes, AttributeDelta

# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------

STARTER_ITEMS: list[ItemDef] = [
    ItemDef(id="ITM_SWORD_SHORT", name="Short Sword", type=ItemType.WEAPON, value=10,
            slot=EquipmentSlot.WEAPON, weapon_category=WeaponCategory.ONE_HANDED),
    ItemDef(id="ITM_DAGGER", name="Dagger", type=ItemType.WEAPON, value=4,
            slot=EquipmentSlot.WEAPON, weapon_category=WeaponCategory.DAGGER,
            bonuses=AttributeDelta(dexterity=1)),
    ItemDef(id="ITM_GREATAXE", name="Greataxe", type=ItemType.WEAPON, value=30,
            slot=EquipmentSlot.WEAPON, weapon_category=WeaponCategory.TWO_HANDED),
    ItemDef(id="ITM_BOW_HUNTING", name="Hunting Bow", type=ItemType.WEAPON, value=20,
            slot=EquipmentSlot.WEAPON, weapon_category=WeaponCategory.RANGED),
    ItemDef(id="ITM_STAFF_OAK", name="Oak Staff", type=ItemType.WEAPON, value=8,
            slot=EquipmentSlot.WEAPON, weapon_category=WeaponCategory.STAFF,
            bonuses=AttributeDelta(intelligence=1)),
    ItemDef(id="ITM_SHIELD_WOOD", name="Wooden Shield", type=ItemType.SHIELD, value=6,
            slot=EquipmentSlot.OFFHAND),
    ItemDef(id="ITM_CAP_CLOTH", name="Cloth Cap", type=ItemType.ARMOR, value=1,
            slot=EquipmentSlot.HEAD, armor_category=ArmorCategory.CLOTH),
    ItemDef(id="ITM_HELM_PLATE", name="Plate Helm", type=ItemType.ARMOR, value=25,
            slot=EquipmentSlot.HEAD, armor_category=ArmorCategory.PLATE),
    ItemDef(id="ITM_ARMOR_LEATHER", name="Leather Jerkin", type=ItemType.ARMOR, value=12,
            slot=EquipmentSlot.CHEST, armor_category=ArmorCategory.LEATHER),
    ItemDef(id="ITM_ARMOR_PLATE", name="Plate Cuirass", type=ItemType.ARMOR, value=60,
            slot=EquipmentSlot.CHEST, armor_category=ArmorCategory.PLATE,
            bonuses=AttributeDelta(dexterity=-1)),
    ItemDef(id="ITM_HEALTH_POTION_MINOR", name="Minor Health Potion", type=ItemType.CONSUMABLE,
            value=5, stackable=True, max_stack=10, heal=8),
    ItemDef(id="ITM_HEALTH_POTION", name="Health Potion", type=ItemType.CONSUMABLE,
            value=15, stackable=True, max_stack=5, heal=16),
    ItemDef(id="ITM_BREAD", name="Bread", type=ItemType.CONSUMABLE, value=1,
            stackable=True, max_stack=20, heal=2),
    ItemDef(id="ITM_WOLF_PELT", name="Wolf Pelt", type=ItemType.MATERIAL, value=3,
            stackable=True, max_stack=10),
    ItemDef(id="ITM_COIN_POUCH", name="Coin Pouch", type=ItemType.MISC, value=12,
            stackable=True, max_stack=99),
]

# ---------------------------------------------------------------------------
# Opponents
# ---------------------------------------------------------------------------

OPPONENTS: list[OpponentDef] = [
    OpponentDef(
        id="ENEMY_RAT",
        name="Bilge Rat",
        level=0,
        base_stats=Attributes(strength=6, dexterity=12, intelligence=2, vitality=4,
                              charisma=2, perception=10, luck=8),
        hp=5,
    ),
    OpponentDef(
        id="ENEMY_BANDIT",
        name="Bandit",
        level=1,
        base_stats=Attributes(strength=12, dexterity=12, intelligence=9, vitality=10,
                              charisma=8, perception=10, luck=10),
        loot=["ITM_COIN_POUCH", "ITM_DAGGER"],
    ),
    OpponentDef(
        id="ENEMY_WOLF",
        name="Grey Wolf",
        level=2,
        base_stats=Attributes(strength=13, dexterity=14, intelligence=3, vitality=11,
                              charisma=6, perception=14, luck=10),
        loot=["ITM_WOLF_PELT"],
    ),
    OpponentDef(
        id="ENEMY_DROWNED_KNIGHT",
        name="Drowned Knight",
        level=4,
        base_stats=Attributes(strength=16, dexterity=8, intelligence=8, vitality=16,
                              charisma=6, perception=9, luck=8),
        hp=48,
        loot=["ITM_ARMOR_PLATE", "ITM_HEALTH_POTION"],
    ),
]


def default_catalog() -> ItemCatalog:
    return ItemCatalog.from_items(STARTER_ITEMS)


def default_bestiary() -> Bestiary:
    return Bestiary(OPPONENTS)


def tutorial_character() -> CharacterState:
    """The starting human warrior champion with the starter kit equipped."""
    return CharacterState(
        name="Mykhel",
        archetype="Warrior",
        flags={"race.human", "class.warrior", "spec.champion"},
        equipment={
            EquipmentSlot.WEAPON: "ITM_SWORD_SHORT",
            EquipmentSlot.OFFHAND: "ITM_SHIELD_WOOD",
            EquipmentSlot.CHEST: "ITM_ARMOR_LEATHER",
            EquipmentSlot.HEAD: "ITM_CAP_CLOTH",
        },
        inventory=[
            ItemStack(item_id="ITM_HEALTH_POTION_MINOR", quantity=3),
            ItemStack(item_id="ITM_BREAD", quantity=2),
        ],
        current_hp=20,
        current_resource=10,
    )
