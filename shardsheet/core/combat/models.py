"""Attack and stance output models (rebuilt on every query)"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..enums import DamageType, DefenseType
from ..talent.models import ActionCost, ResourceCost


class AttackSource(str, Enum):
    WEAPON = "weapon"
    TALENT = "talent"


class ModifierType(str, Enum):
    DAMAGE = "damage"
    ATTACK_BONUS = "attack_bonus"
    TRAIT = "trait"
    ADVANTAGE = "advantage"
    OTHER = "other"


@dataclass(frozen=True)
class AttackModifier:
    source: str  # "talent:mighty", "stance:vigilant_stance"
    type: ModifierType
    description: str
    value: Optional[Union[int, str]] = None
    condition: Optional[str] = None


@dataclass(frozen=True)
class Attack:
    id: str  # "weapon_knife", "talent_fatal_thrust"
    name: str
    source: AttackSource
    attack_bonus: int
    damage: str  # "1d6", "1d6+3", "0"
    damage_type: DamageType
    range: str  # "Melee", "Ranged[80/320]", "Special"
    target_defense: DefenseType
    action_cost: ActionCost
    description: str
    traits: tuple[str, ...] = ()
    weapon_id: Optional[str] = None
    talent_id: Optional[str] = None
    resource_cost: Optional[ResourceCost] = None
    custom_modifiers: tuple[AttackModifier, ...] = ()


@dataclass(frozen=True)
class Stance:
    id: str
    name: str
    description: str
    talent_id: str
    activation_cost: ActionCost
    effects: tuple[str, ...] = ()
    bonuses: tuple[AttackModifier, ...] = ()
    grants_advantage: tuple[str, ...] = ()
