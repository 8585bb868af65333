"""Player character state and opponent definitions."""

from pydantic import BaseModel, Field

from models.items import EquipmentSlot, ItemStack
from models.stats import Attributes


class CharacterState(BaseModel):
    """The slice of the player's persistent state that combat reads.

    Combat never writes to this model; callers apply a CombatOutcome
    themselves once the session returns.
    """
    name: str = "Adventurer"
    archetype: str | None = None    # e.g., "Warrior"; used when no class flag is set
    flags: set[str] = set()         # e.g., {"race.elf", "class.rogue", "spec.thief"}
    equipment: dict[EquipmentSlot, str] = {}  # slot -> item id
    inventory: list[ItemStack] = []
    current_hp: int = 20
    current_resource: int = 10


class OpponentDef(BaseModel):
    """A foe the player can fight."""
    id: str                         # e.g., "ENEMY_BANDIT"
    name: str
    level: int = Field(default=1, ge=0)
    base_stats: Attributes | None = None
    hp: int | None = None           # Optional override
    resource: int | None = None     # Optional override
    loot: list[str] = []            # Item ids dropped on defeat
