"""Action sources: the player-facing side of a combat session.

A session asks its source for an action every player turn, pushes
display text to it, and asks it to consume a healing item on demand.
It never touches storage or rendering itself.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from engine.catalog import ItemCatalog
from engine.inventory import Inventory
from models.actions import CombatAction, HealingItemUse, TurnPrompt
from models.items import ItemType

logger = logging.getLogger(__name__)


class ActionSource(Protocol):
    """Contract between a combat session and whatever drives the player."""

    def choose_action(self, prompt: TurnPrompt) -> CombatAction: ...

    def show(self, message: str) -> None: ...

    def try_use_healing_item(self) -> HealingItemUse | None: ...


class InventoryHealer:
    """Consumes the strongest healing consumable from an inventory."""

    def __init__(self, inventory: Inventory, catalog: ItemCatalog, item_ids: Iterable[str]) -> None:
        self._inventory = inventory
        self._catalog = catalog
        self._item_ids = list(item_ids)

    def _candidates(self):
        for item_id in self._item_ids:
            item = self._catalog.try_get(item_id)
            if item is None or item.type is not ItemType.CONSUMABLE or item.heal <= 0:
                continue
            if self._inventory.quantity(item_id) > 0:
                yield item

    def has_usable_item(self) -> bool:
        return any(True for _ in self._candidates())

    def try_use_healing_item(self) -> HealingItemUse | None:
        best = max(self._candidates(), key=lambda item: item.heal, default=None)
        if best is None:
            return None
        result = self._inventory.try_remove(best.id, 1)
        if not result.success:
            logger.debug("Could not consume %s: %s", best.id, result.reason)
            return None
        return HealingItemUse(amount=best.heal, label=best.name)


class AutoPilot:
    """Non-interactive source: second wind when eligible, otherwise attack.

    Second wind is an ordinary action here and takes the whole turn; the
    attack comes on the following turn.
    """

    def choose_action(self, prompt: TurnPrompt) -> CombatAction:
        if prompt.can_second_wind:
            return CombatAction.SECOND_WIND
        return CombatAction.ATTACK

    def show(self, message: str) -> None:
        pass

    def try_use_healing_item(self) -> HealingItemUse | None:
        return None


class ScriptedActionSource:
    """Plays a fixed list of actions, then repeats ``default``.

    Every prompt and shown message is recorded for inspection. Healing
    goes through ``healer`` when given, otherwise ``heals`` is served in
    order; an exhausted list means none left.
    """

    def __init__(
        self,
        actions: Iterable[CombatAction | str],
        default: CombatAction | str = CombatAction.ATTACK,
        heals: Iterable[HealingItemUse] = (),
        healer: InventoryHealer | None = None,
    ) -> None:
        self._actions = list(actions)
        self._default = default
        self._heals = list(heals)
        self._healer = healer
        self.prompts: list[TurnPrompt] = []
        self.messages: list[str] = []

    def choose_action(self, prompt: TurnPrompt) -> CombatAction | str:
        self.prompts.append(prompt)
        if self._actions:
            return self._actions.pop(0)
        return self._default

    def show(self, message: str) -> None:
        self.messages.append(message)

    def try_use_healing_item(self) -> HealingItemUse | None:
        if self._healer is not None:
            return self._healer.try_use_healing_item()
        if not self._heals:
            return None
        return self._heals.pop(0)
