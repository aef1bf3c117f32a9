"""Talent prerequisite checks (acquisition flow, not the attack engine)"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..character.skills import parse_skill
from .models import Prerequisite, PrerequisiteOperator, PrerequisiteType, TalentRecord

if TYPE_CHECKING:
    from ..character.models import Character

logger = logging.getLogger(__name__)

IDEAL_ORDINALS: dict[str, int] = {
    "first": 1,
    "second": 2,
    "third": 3,
    "fourth": 4,
    "fifth": 5,
}

_ATTRIBUTE_NAMES = ("strength", "speed", "intellect", "willpower", "awareness", "presence")


def check_prerequisite(prereq: Prerequisite, character: Character) -> bool:
    threshold = prereq.value if prereq.value is not None else 0

    if prereq.type == PrerequisiteType.TALENT:
        return character.has_talent(prereq.target)

    if prereq.type == PrerequisiteType.SKILL:
        skill = parse_skill(prereq.target)
        if skill is None:
            logger.debug("Unknown skill in prerequisite: %s", prereq.target)
            return False
        return character.skill_rank(skill) >= threshold

    if prereq.type == PrerequisiteType.ATTRIBUTE:
        key = prereq.target.lower()
        if key not in _ATTRIBUTE_NAMES:
            return False
        return character.attributes.get(key) >= threshold

    if prereq.type == PrerequisiteType.LEVEL:
        return character.level >= threshold

    if prereq.type == PrerequisiteType.IDEAL:
        ordinal = IDEAL_ORDINALS.get(prereq.target.lower())
        return ordinal is not None and character.spoken_ideals >= ordinal

    return False


def can_unlock(talent: TalentRecord, character: Character) -> bool:
    """Every AND prerequisite passes, and one OR prerequisite if any exist."""
    and_group = [p for p in talent.prerequisites if p.operator != PrerequisiteOperator.OR]
    or_group = [p for p in talent.prerequisites if p.operator == PrerequisiteOperator.OR]

    and_pass = all(check_prerequisite(p, character) for p in and_group)
    or_pass = not or_group or any(check_prerequisite(p, character) for p in or_group)
    return and_pass and or_pass


def missing_prerequisites(talent: TalentRecord, character: Character) -> list[Prerequisite]:
    """Failing AND prerequisites, plus the whole OR group if none of it passes."""
    missing = [
        p
        for p in talent.prerequisites
        if p.operator != PrerequisiteOperator.OR and not check_prerequisite(p, character)
    ]
    or_group = [p for p in talent.prerequisites if p.operator == PrerequisiteOperator.OR]
    if or_group and not any(check_prerequisite(p, character) for p in or_group):
        missing.extend(or_group)
    return missing
