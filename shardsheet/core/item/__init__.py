"""Item definitions and inventory"""

from .inventory import ExpertiseCheck, Inventory, required_expertises
from .models import (
    ArmorProperties,
    EquipmentSlot,
    ItemDefinition,
    ItemType,
    WeaponProperties,
    base_item_id,
)
from .registry import ItemRegistry, item_from_dict

__all__ = [
    "ItemType",
    "EquipmentSlot",
    "ItemDefinition",
    "WeaponProperties",
    "ArmorProperties",
    "base_item_id",
    "ItemRegistry",
    "item_from_dict",
    "Inventory",
    "ExpertiseCheck",
    "required_expertises",
]
