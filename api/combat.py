"""Encounter resolution and character sheet endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

import config
from engine.catalog import Bestiary, ItemCatalog
from engine.combat import apply_outcome, get_player_snapshot, start_combat, start_combat_interactive
from engine.content import tutorial_character
from engine.dice import seeded_random
from engine.inventory import MemoryInventory
from engine.sources import InventoryHealer, ScriptedActionSource
from models.actions import CombatAction
from models.characters import CharacterState, OpponentDef
from models.combat import CombatOutcome, PlayerSnapshot

logger = logging.getLogger(__name__)

router = APIRouter()


class EncounterRequest(BaseModel):
    """Request body for resolving a fight."""
    character: CharacterState = Field(default_factory=tutorial_character)
    opponent_id: str | None = None          # Bestiary id
    opponent: OpponentDef | None = None     # Or an inline definition
    seed: int | None = None                 # Seed for a reproducible fight
    round_cap: int | None = Field(default=None, ge=1, le=config.ROUND_CAP_LIMIT)  # Lowers the default cap


class ScriptedEncounterRequest(EncounterRequest):
    """Request body for a round-by-round fight driven by a fixed action list."""
    actions: list[CombatAction] = []
    default_action: CombatAction = CombatAction.ATTACK


class EncounterResponse(BaseModel):
    """The outcome plus the character with the outcome applied."""
    outcome: CombatOutcome
    character: CharacterState


def _get_catalog(request: Request) -> ItemCatalog:
    """Get the item catalog from app state."""
    return request.app.state.catalog


def _get_bestiary(request: Request) -> Bestiary:
    """Get the opponent bestiary from app state."""
    return request.app.state.bestiary


def _resolve_opponent(body: EncounterRequest, request: Request) -> OpponentDef:
    if body.opponent is not None:
        return body.opponent
    if body.opponent_id is None:
        raise HTTPException(status_code=400, detail="Provide either opponent_id or opponent")
    opponent = _get_bestiary(request).try_get(body.opponent_id)
    if opponent is None:
        raise HTTPException(status_code=404, detail=f"Unknown opponent '{body.opponent_id}'")
    return opponent


def _options(body: EncounterRequest) -> dict:
    return {"round_cap": body.round_cap} if body.round_cap is not None else {}


def _respond(
    character: CharacterState,
    outcome: CombatOutcome,
    inventory: MemoryInventory,
) -> EncounterResponse:
    updated = apply_outcome(character, outcome, inventory)
    updated = updated.model_copy(update={"inventory": inventory.stacks})
    return EncounterResponse(outcome=outcome, character=updated)


@router.post("/resolve", response_model=EncounterResponse)
def resolve_encounter(body: EncounterRequest, request: Request) -> EncounterResponse:
    """Auto-resolve a fight: attack every turn, second wind when eligible."""
    catalog = _get_catalog(request)
    opponent = _resolve_opponent(body, request)
    rng = seeded_random(body.seed) if body.seed is not None else None

    logger.info("Auto-resolving %s vs %s (seed=%s)", body.character.name, opponent.name, body.seed)
    outcome = start_combat(body.character, opponent, catalog, rng, **_options(body))
    return _respond(body.character, outcome, MemoryInventory(catalog, body.character.inventory))


@router.post("/scripted", response_model=EncounterResponse)
def scripted_encounter(body: ScriptedEncounterRequest, request: Request) -> EncounterResponse:
    """Resolve a fight round by round using the posted actions in order.

    Healing items are drawn from the character's inventory.
    """
    catalog = _get_catalog(request)
    opponent = _resolve_opponent(body, request)
    rng = seeded_random(body.seed) if body.seed is not None else None

    inventory = MemoryInventory(catalog, body.character.inventory)
    healer = InventoryHealer(inventory, catalog, inventory.item_ids())
    source = ScriptedActionSource(body.actions, body.default_action, healer=healer)

    outcome = start_combat_interactive(body.character, opponent, catalog, source, rng, **_options(body))
    return _respond(body.character, outcome, inventory)


@router.post("/sheet", response_model=PlayerSnapshot)
def character_sheet(character: CharacterState, request: Request) -> PlayerSnapshot:
    """Derived combat stats for a character, for display."""
    return get_player_snapshot(character, _get_catalog(request))
