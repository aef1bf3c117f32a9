"""Talent records, catalog and prerequisites"""

from .catalog import ANCESTRY_TREES, TalentCatalog
from .loader import path_from_dict, talent_from_dict, tree_from_dict
from .models import (
    ActionCost,
    ActionCostKind,
    AttackDefinition,
    ConditionalAdvantage,
    DamageScaling,
    ExpertiseGrantKind,
    ExpertiseGrantSpec,
    Prerequisite,
    PrerequisiteOperator,
    PrerequisiteType,
    RangeClass,
    ResourceCost,
    TalentPath,
    TalentRecord,
    TalentTree,
    TraitGrant,
    TraitTarget,
    WeaponType,
    is_stance,
)
from .prerequisites import can_unlock, check_prerequisite, missing_prerequisites

__all__ = [
    "ActionCost",
    "ActionCostKind",
    "AttackDefinition",
    "ConditionalAdvantage",
    "DamageScaling",
    "ExpertiseGrantKind",
    "ExpertiseGrantSpec",
    "Prerequisite",
    "PrerequisiteOperator",
    "PrerequisiteType",
    "RangeClass",
    "ResourceCost",
    "TalentPath",
    "TalentRecord",
    "TalentTree",
    "TraitGrant",
    "TraitTarget",
    "WeaponType",
    "is_stance",
    "TalentCatalog",
    "ANCESTRY_TREES",
    "talent_from_dict",
    "tree_from_dict",
    "path_from_dict",
    "can_unlock",
    "check_prerequisite",
    "missing_prerequisites",
]
