"""In-memory item catalog and opponent bestiary."""

from __future__ import annotations

from typing import Iterable

from models.characters import OpponentDef
from models.items import ItemDef


class ItemCatalog:
    """Resolves item ids to their definitions."""

    def __init__(self, items: dict[str, ItemDef] | None = None) -> None:
        self._all: dict[str, ItemDef] = dict(items or {})

    @classmethod
    def from_items(cls, items: Iterable[ItemDef]) -> ItemCatalog:
        return cls({item.id: item for item in items})

    @property
    def all(self) -> dict[str, ItemDef]:
        return dict(self._all)

    def try_get(self, item_id: str | None) -> ItemDef | None:
        """Look up an item. Blank or unknown ids return None."""
        if not item_id or not item_id.strip():
            return None
        return self._all.get(item_id)

    def get_required(self, item_id: str) -> ItemDef:
        item = self.try_get(item_id)
        if item is None:
            raise KeyError(f"Unknown item id '{item_id}'")
        return item

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._all

    def __len__(self) -> int:
        return len(self._all)


class Bestiary:
    """Opponent definitions keyed by id."""

    def __init__(self, opponents: Iterable[OpponentDef] = ()) -> None:
        self._all: dict[str, OpponentDef] = {o.id: o for o in opponents}

    @property
    def all(self) -> dict[str, OpponentDef]:
        return dict(self._all)

    def try_get(self, opponent_id: str) -> OpponentDef | None:
        return self._all.get(opponent_id)

    def get_required(self, opponent_id: str) -> OpponentDef:
        opponent = self._all.get(opponent_id)
        if opponent is None:
            raise KeyError(f"Unknown opponent id '{opponent_id}'")
        return opponent
