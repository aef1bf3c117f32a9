"""Character snapshot"""

from .models import (
    Attributes,
    Character,
    CharacterSheet,
    ExpertiseSource,
    ExpertiseSourceType,
)
from .skills import (
    GOVERNING_ATTRIBUTE,
    MAX_SKILL_RANK,
    SURGES,
    AttributeName,
    Skill,
    parse_skill,
    skill_for_weapon_keyword,
)

__all__ = [
    "Character",
    "CharacterSheet",
    "Attributes",
    "ExpertiseSource",
    "ExpertiseSourceType",
    "AttributeName",
    "Skill",
    "SURGES",
    "GOVERNING_ATTRIBUTE",
    "MAX_SKILL_RANK",
    "parse_skill",
    "skill_for_weapon_keyword",
]
