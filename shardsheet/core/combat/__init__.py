"""Attack and stance resolution"""

from .engine import AttackResolutionEngine, format_damage, select_scaled_damage
from .models import Attack, AttackModifier, AttackSource, ModifierType, Stance
from .narrative import NarrativeAttack, describes_attack, parse_narrative_attack
from .traits import (
    GENERIC_WEAPON_EXPERTISES,
    ITEM_EXPERTISE,
    TraitGrantResolver,
    target_matches,
)

__all__ = [
    "AttackResolutionEngine",
    "format_damage",
    "select_scaled_damage",
    "Attack",
    "AttackModifier",
    "AttackSource",
    "ModifierType",
    "Stance",
    "NarrativeAttack",
    "describes_attack",
    "parse_narrative_attack",
    "TraitGrantResolver",
    "target_matches",
    "ITEM_EXPERTISE",
    "GENERIC_WEAPON_EXPERTISES",
]
