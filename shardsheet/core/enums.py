"""Shared rule enums"""

from enum import Enum


class DefenseType(str, Enum):
    PHYSICAL = "Physical"
    COGNITIVE = "Cognitive"
    SPIRITUAL = "Spiritual"


class DamageType(str, Enum):
    KEEN = "keen"
    IMPACT = "impact"
    ENERGY = "energy"
    VITAL = "vital"
    SPIRIT = "spirit"


class ResourceType(str, Enum):
    FOCUS = "focus"
    INVESTITURE = "investiture"


def tier_for_level(level: int) -> int:
    """Levels 1-5 are tier 1, 6-10 tier 2, and so on."""
    return (max(level, 1) - 1) // 5 + 1
