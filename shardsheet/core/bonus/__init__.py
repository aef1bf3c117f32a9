"""Bonus effects and formula evaluation"""

from .formula import evaluate_bonus, evaluate_formula, substitute_references
from .models import (
    DAMAGE_PER_ACTION,
    RANGED_DAMAGE,
    BonusEffect,
    BonusType,
    FormulaContext,
)

__all__ = [
    "BonusEffect",
    "BonusType",
    "FormulaContext",
    "DAMAGE_PER_ACTION",
    "RANGED_DAMAGE",
    "evaluate_bonus",
    "evaluate_formula",
    "substitute_references",
]
