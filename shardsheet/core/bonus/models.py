"""Bonus effect models"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class BonusType(str, Enum):
    ATTRIBUTE = "attribute"
    SKILL = "skill"
    DEFENSE = "defense"
    RESOURCE = "resource"
    DERIVED = "derived"
    DEFLECT = "deflect"


# Targets read by the attack engine
DAMAGE_PER_ACTION = "damage_per_action"
RANGED_DAMAGE = "ranged_damage"


@dataclass(frozen=True)
class BonusEffect:
    """A numeric modifier authored on a talent. Either value or formula."""

    type: BonusType
    target: str  # "damage_per_action", "physical", "all", ...
    value: Optional[int] = None
    formula: Optional[str] = None  # "1 + tier", "perception.ranks"
    scaling: bool = False
    condition: Optional[str] = None  # free text, never evaluated


@dataclass(frozen=True)
class FormulaContext:
    """Derived numeric facts a formula may reference."""

    tier: int
    skill_ranks: dict[str, int] = field(default_factory=dict)  # lower-case keys
