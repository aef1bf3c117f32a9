"""Item domain models"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..enums import DamageType


class ItemType(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    EQUIPMENT = "equipment"
    CONSUMABLE = "consumable"
    FABRIAL = "fabrial"


class EquipmentSlot(str, Enum):
    MAIN_HAND = "main_hand"
    OFF_HAND = "off_hand"
    ARMOR = "armor"
    ACCESSORY = "accessory"


@dataclass(frozen=True)
class WeaponProperties:
    skill: str  # "light-weaponry" | "heavy-weaponry" | "athletics"
    damage: str  # "1d6"
    damage_type: DamageType
    range: str  # "Melee", "Ranged[80/320]"
    traits: tuple[str, ...] = ()
    expert_traits: tuple[str, ...] = ()

    @property
    def is_ranged(self) -> bool:
        return self.range.lower().startswith("ranged")


@dataclass(frozen=True)
class ArmorProperties:
    deflect: int
    traits: tuple[str, ...] = ()
    expert_traits: tuple[str, ...] = ()


@dataclass(frozen=True)
class ItemDefinition:
    """Item template. Immutable, loaded from items.json."""

    id: str  # "knife"
    name: str
    type: ItemType
    slot: Optional[EquipmentSlot] = None  # None = not equipable
    weight: float = 0.0
    price: int = 0  # marks
    description: str = ""
    expertise: Optional[str] = None  # item-specific expertise, "Knives"
    tags: tuple[str, ...] = ()
    weapon: Optional[WeaponProperties] = None
    armor: Optional[ArmorProperties] = None

    @property
    def expert_traits(self) -> tuple[str, ...]:
        if self.weapon is not None:
            return self.weapon.expert_traits
        if self.armor is not None:
            return self.armor.expert_traits
        return ()


_QUANTITY_SUFFIX = re.compile(r"-\d+$")


def base_item_id(item_id: str) -> str:
    """Strip a trailing quantity suffix: knife-2 -> knife."""
    return _QUANTITY_SUFFIX.sub("", item_id)
