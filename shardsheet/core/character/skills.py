"""Skills, attributes and the governing-attribute table."""

from __future__ import annotations

from enum import Enum


class AttributeName(str, Enum):
    STRENGTH = "strength"
    SPEED = "speed"
    INTELLECT = "intellect"
    WILLPOWER = "willpower"
    AWARENESS = "awareness"
    PRESENCE = "presence"


class Skill(str, Enum):
    # Physical
    AGILITY = "agility"
    ATHLETICS = "athletics"
    HEAVY_WEAPONRY = "heavy_weaponry"
    LIGHT_WEAPONRY = "light_weaponry"
    STEALTH = "stealth"
    THIEVERY = "thievery"

    # Cognitive
    CRAFTING = "crafting"
    DEDUCTION = "deduction"
    DISCIPLINE = "discipline"
    INTIMIDATION = "intimidation"
    LORE = "lore"
    MEDICINE = "medicine"

    # Spiritual
    DECEPTION = "deception"
    INSIGHT = "insight"
    LEADERSHIP = "leadership"
    PERCEPTION = "perception"
    PERSUASION = "persuasion"
    SURVIVAL = "survival"

    # Surges
    ADHESION = "adhesion"
    GRAVITATION = "gravitation"
    DIVISION = "division"
    ABRASION = "abrasion"
    PROGRESSION = "progression"
    ILLUMINATION = "illumination"
    TRANSFORMATION = "transformation"
    TRANSPORTATION = "transportation"
    COHESION = "cohesion"
    TENSION = "tension"


SURGES: tuple[Skill, ...] = (
    Skill.ADHESION,
    Skill.GRAVITATION,
    Skill.DIVISION,
    Skill.ABRASION,
    Skill.PROGRESSION,
    Skill.ILLUMINATION,
    Skill.TRANSFORMATION,
    Skill.TRANSPORTATION,
    Skill.COHESION,
    Skill.TENSION,
)

GOVERNING_ATTRIBUTE: dict[Skill, AttributeName] = {
    Skill.AGILITY: AttributeName.SPEED,
    Skill.LIGHT_WEAPONRY: AttributeName.SPEED,
    Skill.STEALTH: AttributeName.SPEED,
    Skill.THIEVERY: AttributeName.SPEED,
    Skill.ATHLETICS: AttributeName.STRENGTH,
    Skill.HEAVY_WEAPONRY: AttributeName.STRENGTH,
    Skill.CRAFTING: AttributeName.INTELLECT,
    Skill.DEDUCTION: AttributeName.INTELLECT,
    Skill.LORE: AttributeName.INTELLECT,
    Skill.MEDICINE: AttributeName.INTELLECT,
    Skill.DISCIPLINE: AttributeName.WILLPOWER,
    Skill.INTIMIDATION: AttributeName.WILLPOWER,
    Skill.DECEPTION: AttributeName.PRESENCE,
    Skill.LEADERSHIP: AttributeName.PRESENCE,
    Skill.PERSUASION: AttributeName.PRESENCE,
    Skill.INSIGHT: AttributeName.AWARENESS,
    Skill.PERCEPTION: AttributeName.AWARENESS,
    Skill.SURVIVAL: AttributeName.AWARENESS,
    **{surge: AttributeName.WILLPOWER for surge in SURGES},
}

MAX_SKILL_RANK = 5

# Weapon skill keyword (item data) -> skill
_WEAPON_SKILL_KEYWORDS: dict[str, Skill] = {
    "light-weaponry": Skill.LIGHT_WEAPONRY,
    "heavy-weaponry": Skill.HEAVY_WEAPONRY,
    "athletics": Skill.ATHLETICS,
}


def skill_for_weapon_keyword(keyword: str) -> Skill:
    """Unknown keywords fall back to Athletics."""
    return _WEAPON_SKILL_KEYWORDS.get(keyword.lower(), Skill.ATHLETICS)


def parse_skill(name: str) -> Skill | None:
    """Accepts display names, keywords or enum values; None when unknown."""
    key = name.strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return Skill(key)
    except ValueError:
        return None
