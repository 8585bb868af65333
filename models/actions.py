"""Combat action requests and action-source payloads."""

from enum import Enum

from pydantic import BaseModel


class CombatAction(str, Enum):
    """Actions the player can choose on their turn."""
    ATTACK = "attack"
    GUARD = "guard"                 # +AC and damage cut until the foe's next attack
    SECOND_WIND = "second_wind"     # Once-per-session self heal below half HP
    USE_ITEM = "use_item"
    FLEE = "flee"


class TurnPrompt(BaseModel):
    """What the action source receives when it's the player's turn."""
    round_number: int
    player_hp: int
    player_max_hp: int
    opponent_hp: int
    opponent_name: str
    armor_class: int                # Current AC, including any active guard
    can_second_wind: bool


class HealingItemUse(BaseModel):
    """Report from the action source after consuming a healing item."""
    amount: int
    label: str
