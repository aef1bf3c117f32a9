"""Talent domain models (immutable once loaded)"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from ..bonus.models import BonusEffect
from ..enums import DamageType, DefenseType, ResourceType


# ── Action cost ──────────────────────────────────────────────


class ActionCostKind(str, Enum):
    ACTIONS = "actions"
    FREE = "free"
    REACTION = "reaction"
    SPECIAL = "special"
    PASSIVE = "passive"


@dataclass(frozen=True)
class ActionCost:
    """Tagged action cost. `actions` is only meaningful for ACTIONS."""

    kind: ActionCostKind
    actions: int = 0

    @classmethod
    def of(cls, actions: int) -> ActionCost:
        if actions < 0:
            raise ValueError(f"action count must be non-negative: {actions}")
        return cls(ActionCostKind.ACTIONS, actions)

    @classmethod
    def free(cls) -> ActionCost:
        return cls(ActionCostKind.FREE)

    @classmethod
    def reaction(cls) -> ActionCost:
        return cls(ActionCostKind.REACTION)

    @classmethod
    def special(cls) -> ActionCost:
        return cls(ActionCostKind.SPECIAL)

    @classmethod
    def passive(cls) -> ActionCost:
        return cls(ActionCostKind.PASSIVE)

    @classmethod
    def parse(cls, raw: Union[int, str]) -> ActionCost:
        """Authored form: an int (N actions) or free/reaction/special/passive."""
        if isinstance(raw, bool):
            raise ValueError(f"invalid action cost: {raw!r}")
        if isinstance(raw, int):
            return cls.of(raw)
        kind = ActionCostKind(str(raw).strip().lower())
        if kind == ActionCostKind.ACTIONS:
            raise ValueError("'actions' needs a count; author an integer instead")
        return cls(kind)

    @property
    def is_activatable(self) -> bool:
        """Passive and Special costs never produce an attack action."""
        return self.kind not in (ActionCostKind.PASSIVE, ActionCostKind.SPECIAL)

    def label(self) -> str:
        if self.kind == ActionCostKind.ACTIONS:
            return f"{self.actions} action" + ("" if self.actions == 1 else "s")
        return self.kind.value


# ── Prerequisites ────────────────────────────────────────────


class PrerequisiteType(str, Enum):
    TALENT = "talent"
    SKILL = "skill"
    ATTRIBUTE = "attribute"
    LEVEL = "level"
    IDEAL = "ideal"


class PrerequisiteOperator(str, Enum):
    AND = "AND"
    OR = "OR"


@dataclass(frozen=True)
class Prerequisite:
    type: PrerequisiteType
    target: str  # talent id, skill, attribute, "character", or "first".."fourth"
    value: Optional[int] = None  # threshold for skill/attribute/level
    operator: PrerequisiteOperator = PrerequisiteOperator.AND


# ── Structured grants ────────────────────────────────────────


class ExpertiseGrantKind(str, Enum):
    FIXED = "fixed"
    CHOICE = "choice"
    CATEGORY = "category"


@dataclass(frozen=True)
class ExpertiseGrantSpec:
    """Authored expertise grant. Which fields apply depends on kind."""

    kind: ExpertiseGrantKind
    expertises: tuple[str, ...] = ()  # FIXED
    options: tuple[str, ...] = ()  # CHOICE
    choice_count: Optional[int] = None  # CHOICE
    category: Optional[str] = None  # CATEGORY: weapon|armor|utility|crafting|cultural


@dataclass(frozen=True)
class TraitTarget:
    """Which items a trait grant applies to.

    Exactly one of: `item_ids` (explicit list), `all_items`, `category`.
    """

    item_ids: tuple[str, ...] = ()
    all_items: bool = False
    category: Optional[str] = None


@dataclass(frozen=True)
class TraitGrant:
    target: TraitTarget
    traits: tuple[str, ...]
    expert: bool = False  # gated on the wielder's expertise


# ── Attack definition ────────────────────────────────────────


class WeaponType(str, Enum):
    LIGHT = "light"
    HEAVY = "heavy"
    UNARMED = "unarmed"
    ANY = "any"


class RangeClass(str, Enum):
    MELEE = "melee"
    RANGED = "ranged"
    SPECIAL = "special"


@dataclass(frozen=True)
class DamageScaling:
    tier: int
    damage: str  # "2d4"


@dataclass(frozen=True)
class ConditionalAdvantage:
    condition: str
    value: int


@dataclass(frozen=True)
class ResourceCost:
    type: ResourceType
    amount: int


@dataclass(frozen=True)
class AttackDefinition:
    target_defense: DefenseType
    range: RangeClass
    weapon_type: Optional[WeaponType] = None  # None behaves like ANY
    base_damage: Optional[str] = None
    damage_type: Optional[DamageType] = None
    damage_scaling: tuple[DamageScaling, ...] = ()
    conditional_advantages: tuple[ConditionalAdvantage, ...] = ()
    resource_cost: Optional[ResourceCost] = None
    special_mechanics: tuple[str, ...] = ()


# ── Talent ───────────────────────────────────────────────────


@dataclass(frozen=True)
class TalentRecord:
    """One talent node. Owned by the TalentCatalog."""

    id: str  # "killing_edge"
    name: str
    description: str
    action_cost: ActionCost
    tier: int = 0  # 0 = key talent, always available on its path
    prerequisites: tuple[Prerequisite, ...] = ()
    bonuses: tuple[BonusEffect, ...] = ()

    # Narrative
    other_effects: tuple[str, ...] = ()  # legacy free text
    special_activation: Optional[str] = None
    grants_advantage: tuple[str, ...] = ()
    grants_disadvantage: tuple[str, ...] = ()
    stance: Optional[bool] = None  # explicit stance flag; None = infer from name

    # Structured
    expertise_grants: tuple[ExpertiseGrantSpec, ...] = ()
    trait_grants: tuple[TraitGrant, ...] = ()
    attack_definition: Optional[AttackDefinition] = None


def is_stance(talent: TalentRecord) -> bool:
    """A talent is a stance if flagged, or if its name says so."""
    if talent.stance is not None:
        return talent.stance
    return "stance" in talent.name.lower()


# ── Talent tree data (catalog input) ─────────────────────────


@dataclass(frozen=True)
class TalentTree:
    path_name: str
    nodes: tuple[TalentRecord, ...] = ()


@dataclass(frozen=True)
class TalentPath:
    name: str
    trees: tuple[TalentTree, ...] = ()
    talent_nodes: tuple[TalentRecord, ...] = ()  # nodes not in any tree
