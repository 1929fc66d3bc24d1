"""Boundary for granting loot to the player's inventory."""

from __future__ import annotations

from collections import Counter
from typing import Protocol


class InventorySink(Protocol):
    """Receives items granted by destroyed resource nodes."""

    def add_item(self, item_id: str, quantity: int) -> object:
        """Add ``quantity`` of ``item_id``; the return value is ignored."""


class InMemoryInventory:
    """Counter-backed inventory used by the CLI and tests."""

    def __init__(self) -> None:
        self._items: Counter[str] = Counter()

    def add_item(self, item_id: str, quantity: int) -> bool:
        if quantity <= 0:
            return False
        self._items[item_id] += quantity
        return True

    def quantity(self, item_id: str) -> int:
        return self._items[item_id]

    def snapshot(self) -> dict[str, int]:
        return dict(self._items)
