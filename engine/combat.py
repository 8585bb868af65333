"""Combat entry points: auto-resolve, interactive sessions, and snapshots."""

from __future__ import annotations

import logging

from engine.catalog import ItemCatalog
from engine.dice import RandomSource
from engine.equipment import build_opponent_profile, build_player_profile
from engine.inventory import Inventory
from engine.session import CombatSession
from engine.sources import ActionSource, AutoPilot
from models.characters import CharacterState, OpponentDef
from models.combat import CombatOutcome, PlayerSnapshot

logger = logging.getLogger(__name__)


def create_session(
    character: CharacterState,
    opponent: OpponentDef,
    catalog: ItemCatalog,
    source: ActionSource,
    rng: RandomSource | None = None,
    **options,
) -> CombatSession:
    """Build a fresh session from the character's current state.

    Args:
        character: Current player state (read only).
        opponent: The foe to fight.
        catalog: Item catalog used to resolve equipment.
        source: Supplies player actions and receives display text.
        rng: Optional randomness source for seeded/testing rolls.
        **options: ``round_cap`` / ``round_cap_policy`` overrides.

    Returns:
        A CombatSession in the INITIATIVE phase.
    """
    return CombatSession(
        build_player_profile(character, catalog),
        build_opponent_profile(opponent),
        source,
        starting_hp=character.current_hp,
        loot=opponent.loot,
        rng=rng,
        **options,
    )


def start_combat(
    character: CharacterState,
    opponent: OpponentDef,
    catalog: ItemCatalog,
    rng: RandomSource | None = None,
    **options,
) -> CombatOutcome:
    """Auto-resolve a fight without per-round decisions.

    The player attacks every turn and takes a second wind once eligible.
    """
    session = create_session(character, opponent, catalog, AutoPilot(), rng, **options)
    return session.run()


def start_combat_interactive(
    character: CharacterState,
    opponent: OpponentDef,
    catalog: ItemCatalog,
    source: ActionSource,
    rng: RandomSource | None = None,
    **options,
) -> CombatOutcome:
    """Resolve a fight round by round, asking ``source`` for each action."""
    session = create_session(character, opponent, catalog, source, rng, **options)
    return session.run()


def get_player_snapshot(character: CharacterState, catalog: ItemCatalog) -> PlayerSnapshot:
    """Read-only projection of derived combat stats for a character sheet."""
    profile = build_player_profile(character, catalog)
    stats = profile.attributes
    return PlayerSnapshot(
        max_hp=profile.max_hp,
        current_hp=max(1, character.current_hp),
        strength=stats.strength,
        dexterity=stats.dexterity,
        intelligence=stats.intelligence,
        vitality=stats.vitality,
        charisma=stats.charisma,
        perception=stats.perception,
        luck=stats.luck,
        armor_class=profile.armor_class,
        damage_reduction=profile.damage_reduction,
        weapon_label=profile.weapon.label,
        weapon_die=profile.weapon.die,
        crit_min=profile.crit_min,
        penetration=profile.weapon.penetration,
        proficient=profile.proficient,
        has_shield=profile.has_shield,
        shield_block_chance=profile.block_chance,
    )


def apply_outcome(
    character: CharacterState,
    outcome: CombatOutcome,
    inventory: Inventory | None = None,
) -> CharacterState:
    """Apply a finished fight to the character, exactly once.

    Returns an updated copy with the residual HP. Loot goes into
    ``inventory`` when one is given; items it rejects are logged and skipped.
    """
    if inventory is not None:
        for item_id in outcome.loot:
            result = inventory.try_add(item_id, 1)
            if not result.success:
                logger.warning("Could not add loot %s: %s", item_id, result.reason)
    return character.model_copy(update={"current_hp": outcome.player_hp})
