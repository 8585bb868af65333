"""Inventory collaborator: add/remove item quantities with reasons on failure."""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel

from engine.catalog import ItemCatalog
from models.items import ItemStack


class InventoryResult(BaseModel):
    """Outcome of an inventory operation."""
    success: bool
    reason: str | None = None


class Inventory(Protocol):
    """What combat needs from an inventory: counts and consumption."""

    def quantity(self, item_id: str) -> int: ...

    def try_add(self, item_id: str, qty: int = 1) -> InventoryResult: ...

    def try_remove(self, item_id: str, qty: int = 1) -> InventoryResult: ...


class MemoryInventory:
    """List-of-stacks inventory backed by an item catalog.

    Stackable items fill existing stacks up to ``max_stack`` before opening
    new ones; everything else is held one per stack.
    """

    def __init__(self, catalog: ItemCatalog, stacks: list[ItemStack] | None = None) -> None:
        self._catalog = catalog
        self.stacks: list[ItemStack] = [s.model_copy() for s in stacks or []]

    def quantity(self, item_id: str) -> int:
        return sum(s.quantity for s in self.stacks if s.item_id == item_id)

    def item_ids(self) -> list[str]:
        """Distinct held item ids in first-seen order."""
        return list(dict.fromkeys(s.item_id for s in self.stacks))

    def try_add(self, item_id: str, qty: int = 1) -> InventoryResult:
        if not item_id or qty <= 0:
            return InventoryResult(success=False, reason="invalid args")
        item = self._catalog.try_get(item_id)
        if item is None:
            return InventoryResult(success=False, reason=f"unknown item '{item_id}'")

        if not item.stackable:
            self.stacks.extend(ItemStack(item_id=item_id, quantity=1) for _ in range(qty))
            return InventoryResult(success=True)

        remaining = qty
        max_stack = max(1, item.max_stack)
        for stack in self.stacks:
            if remaining <= 0:
                break
            if stack.item_id != item_id:
                continue
            add = min(max(0, max_stack - stack.quantity), remaining)
            stack.quantity += add
            remaining -= add
        while remaining > 0:
            add = min(max_stack, remaining)
            self.stacks.append(ItemStack(item_id=item_id, quantity=add))
            remaining -= add
        return InventoryResult(success=True)

    def try_remove(self, item_id: str, qty: int = 1) -> InventoryResult:
        if not item_id or qty <= 0:
            return InventoryResult(success=False, reason="invalid args")
        if self.quantity(item_id) < qty:
            return InventoryResult(success=False, reason="not enough")

        remaining = qty
        for stack in [s for s in self.stacks if s.item_id == item_id]:
            if remaining <= 0:
                break
            take = min(stack.quantity, remaining)
            stack.quantity -= take
            remaining -= take
            if stack.quantity <= 0:
                self.stacks.remove(stack)
        return InventoryResult(success=True)
