"""Combat session states, events, outcomes, and snapshots."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class CombatPhase(str, Enum):
    """Where a session is in its lifecycle."""
    INITIATIVE = "initiative"
    PLAYER_TURN = "player_turn"
    OPPONENT_TURN = "opponent_turn"
    CONCLUDED = "concluded"


class CombatStatus(str, Enum):
    """How a concluded session ended."""
    VICTORY = "victory"
    DEFEAT = "defeat"
    FLED = "fled"
    DRAW = "draw"                   # Round cap reached under the "draw" policy


class CombatEvent(BaseModel):
    """A logged event from a combat session."""
    round: int
    actor: str                      # "player", "opponent", or "system"
    kind: str                       # e.g., "attack", "guard", "flee"
    description: str
    details: dict = {}              # Rolls, damage, etc.


class CombatOutcome(BaseModel):
    """Final result of a session. The caller applies it to persistent state."""
    status: CombatStatus
    player_won: bool
    player_hp: int
    opponent_hp: int
    loot: list[str] = []
    rounds: int = 0
    round_cap_reached: bool = False
    events: list[CombatEvent] = []


class PlayerSnapshot(BaseModel):
    """Read-only projection of derived combat stats for a character sheet."""
    model_config = ConfigDict(frozen=True)

    max_hp: int
    current_hp: int
    strength: int
    dexterity: int
    intelligence: int
    vitality: int
    charisma: int
    perception: int
    luck: int
    armor_class: int
    damage_reduction: int
    weapon_label: str
    weapon_die: int
    crit_min: int
    penetration: int
    proficient: bool
    has_shield: bool
    shield_block_chance: float
