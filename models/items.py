"""Item definitions and equipment enums."""

from enum import Enum

from pydantic import BaseModel

from models.stats import AttributeDelta


class ItemType(str, Enum):
    """Broad item kinds."""
    WEAPON = "weapon"
    ARMOR = "armor"
    SHIELD = "shield"
    CONSUMABLE = "consumable"
    MATERIAL = "material"
    QUEST = "quest"
    MISC = "misc"


class EquipmentSlot(str, Enum):
    """Places an item can be worn or wielded."""
    WEAPON = "weapon"
    OFFHAND = "offhand"
    HEAD = "head"
    CHEST = "chest"


class WeaponCategory(str, Enum):
    """Weapon families; each maps to a damage die and governing attribute."""
    UNARMED = "unarmed"
    DAGGER = "dagger"
    ONE_HANDED = "one_handed"
    TWO_HANDED = "two_handed"
    RANGED = "ranged"
    STAFF = "staff"


class ArmorCategory(str, Enum):
    """Armor weights, lightest first."""
    CLOTH = "cloth"
    LEATHER = "leather"
    PLATE = "plate"


class ItemDef(BaseModel):
    """Catalog entry for an item."""
    id: str                                     # e.g., "ITM_SWORD_SHORT"
    name: str
    type: ItemType
    value: int = 0
    weight: float = 0.0
    stackable: bool = False
    max_stack: int = 1
    slot: EquipmentSlot | None = None
    armor_category: ArmorCategory | None = None
    weapon_category: WeaponCategory | None = None
    bonuses: AttributeDelta | None = None
    heal: int = 0                               # HP restored when consumed


class ItemStack(BaseModel):
    """A quantity of one item held in an inventory."""
    item_id: str
    quantity: int
