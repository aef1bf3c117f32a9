"""Character inventory: carried items, equipped slots, expert-trait gating."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from .models import EquipmentSlot, ItemDefinition, ItemType
from .registry import ItemRegistry

logger = logging.getLogger(__name__)

# Weapon skill keyword / item type -> expertise that unlocks expert traits
_GENERIC_EXPERTISE: dict[str, str] = {
    "light-weaponry": "Light Weaponry",
    "heavy-weaponry": "Heavy Weaponry",
}
ARMOR_EXPERTISE = "Armor Proficiency"


@dataclass(frozen=True)
class ExpertiseCheck:
    can_use: bool
    missing_expertises: tuple[str, ...] = ()


def required_expertises(item: ItemDefinition) -> list[str]:
    """Expertises any one of which unlocks the item's expert traits."""
    candidates: list[str] = []
    if item.expertise:
        candidates.append(item.expertise)
    if item.weapon is not None and item.weapon.skill in _GENERIC_EXPERTISE:
        candidates.append(_GENERIC_EXPERTISE[item.weapon.skill])
    elif item.type == ItemType.ARMOR:
        candidates.append(ARMOR_EXPERTISE)
    return candidates


@dataclass
class Inventory:
    registry: ItemRegistry
    items: dict[str, int] = field(default_factory=dict)  # item_id -> quantity
    equipped: dict[EquipmentSlot, str] = field(default_factory=dict)  # slot -> item_id

    def add_item(self, item_id: str, quantity: int = 1) -> bool:
        if quantity <= 0:
            return False
        if self.registry.get(item_id) is None:
            logger.warning("Unknown item id, not added: %s", item_id)
            return False
        self.items[item_id] = self.items.get(item_id, 0) + quantity
        return True

    def remove_item(self, item_id: str, quantity: int = 1) -> bool:
        held = self.items.get(item_id, 0)
        if quantity <= 0 or held < quantity:
            return False
        if held == quantity:
            del self.items[item_id]
            for slot, equipped_id in list(self.equipped.items()):
                if equipped_id == item_id:
                    del self.equipped[slot]
        else:
            self.items[item_id] = held - quantity
        return True

    def equip_item(self, item_id: str) -> bool:
        """Equip a carried item into its slot, replacing the occupant.

        Equipping never requires expertise; only expert traits are gated.
        """
        if item_id not in self.items:
            return False
        item = self.registry.get(item_id)
        if item is None or item.slot is None:
            return False
        replaced = self.equipped.get(item.slot)
        if replaced is not None and replaced != item_id:
            logger.debug("Slot %s: %s replaced by %s", item.slot.value, replaced, item_id)
        self.equipped[item.slot] = item_id
        return True

    def unequip_slot(self, slot: EquipmentSlot) -> Optional[str]:
        return self.equipped.pop(slot, None)

    def get_equipped(self, slot: EquipmentSlot) -> Optional[ItemDefinition]:
        item_id = self.equipped.get(slot)
        return self.registry.get(item_id) if item_id is not None else None

    def get_all_equipped_items(self) -> list[tuple[str, ItemDefinition]]:
        """(inventory item id, definition) for every occupied slot."""
        result: list[tuple[str, ItemDefinition]] = []
        for item_id in self.equipped.values():
            item = self.registry.get(item_id)
            if item is not None:
                result.append((item_id, item))
        return result

    def can_use_expert_traits(
        self, item_id: str, has_expertise: Callable[[str], bool]
    ) -> ExpertiseCheck:
        item = self.registry.get(item_id)
        if item is None or not item.expert_traits:
            return ExpertiseCheck(can_use=True)

        candidates = required_expertises(item)
        if not candidates or any(has_expertise(name) for name in candidates):
            return ExpertiseCheck(can_use=True)
        return ExpertiseCheck(can_use=False, missing_expertises=tuple(candidates))
