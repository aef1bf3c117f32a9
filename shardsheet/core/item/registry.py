"""Item definition registry: JSON load + dynamic registration"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..enums import DamageType
from .models import (
    ArmorProperties,
    EquipmentSlot,
    ItemDefinition,
    ItemType,
    WeaponProperties,
    base_item_id,
)

logger = logging.getLogger(__name__)


def item_from_dict(raw: dict[str, Any]) -> ItemDefinition:
    weapon = raw.get("weapon")
    armor = raw.get("armor")
    slot = raw.get("slot")
    return ItemDefinition(
        id=raw["id"],
        name=raw["name"],
        type=ItemType(raw["type"]),
        slot=EquipmentSlot(slot) if slot else None,
        weight=float(raw.get("weight", 0)),
        price=int(raw.get("price", 0)),
        description=raw.get("description", ""),
        expertise=raw.get("expertise"),
        tags=tuple(raw.get("tags", [])),
        weapon=(
            WeaponProperties(
                skill=weapon["skill"],
                damage=weapon["damage"],
                damage_type=DamageType(weapon["damage_type"]),
                range=weapon.get("range", "Melee"),
                traits=tuple(weapon.get("traits", [])),
                expert_traits=tuple(weapon.get("expert_traits", [])),
            )
            if weapon
            else None
        ),
        armor=(
            ArmorProperties(
                deflect=int(armor["deflect"]),
                traits=tuple(armor.get("traits", [])),
                expert_traits=tuple(armor.get("expert_traits", [])),
            )
            if armor
            else None
        ),
    )


class ItemRegistry:
    """
    Item definition store.
    Seed data (JSON) plus definitions registered at runtime.
    """

    def __init__(self) -> None:
        self._items: dict[str, ItemDefinition] = {}

    def load_from_json(self, path: str | Path) -> int:
        """Load items.json. Returns the number of definitions loaded."""
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            raw_list: list[dict] = json.load(f)

        count = 0
        for raw in raw_list:
            try:
                item = item_from_dict(raw)
                self._items[item.id] = item
                count += 1
            except (KeyError, ValueError, TypeError) as e:
                logger.warning("Failed to load item: %s (%s)", raw.get("id", "?"), e)

        logger.info("Loaded %d items from %s", count, path)
        return count

    def register(self, item: ItemDefinition) -> None:
        """Overwrites an existing id with a warning."""
        if item.id in self._items:
            logger.warning("Overwriting existing item: %s", item.id)
        self._items[item.id] = item

    def get(self, item_id: str) -> Optional[ItemDefinition]:
        """Lookup by id; quantity-suffixed ids resolve to their base item."""
        item = self._items.get(item_id)
        if item is None:
            item = self._items.get(base_item_id(item_id))
        return item

    def get_all(self) -> list[ItemDefinition]:
        return list(self._items.values())

    def count(self) -> int:
        return len(self._items)
