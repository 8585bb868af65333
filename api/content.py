"""Read-only listings of the loaded bestiary and item catalog."""

from fastapi import APIRouter, HTTPException, Request

from models.characters import OpponentDef
from models.items import ItemDef

router = APIRouter()


@router.get("/opponents", response_model=list[OpponentDef])
def list_opponents(request: Request) -> list[OpponentDef]:
    """All opponents a fight can be started against."""
    return list(request.app.state.bestiary.all.values())


@router.get("/opponents/{opponent_id}", response_model=OpponentDef)
def get_opponent(opponent_id: str, request: Request) -> OpponentDef:
    """A single opponent definition."""
    opponent = request.app.state.bestiary.try_get(opponent_id)
    if opponent is None:
        raise HTTPException(status_code=404, detail=f"Unknown opponent '{opponent_id}'")
    return opponent


@router.get("/items", response_model=list[ItemDef])
def list_items(request: Request) -> list[ItemDef]:
    """Every item in the catalog."""
    return list(request.app.state.catalog.all.values())
