"""Best-effort attack extraction from talent prose.

Deprecated: only used for talents without an `attack_definition`. Every
call logs a warning so unconverted talents show up in the logs.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from ..character.skills import SURGES, Skill
from ..enums import DamageType, DefenseType, ResourceType
from ..talent.models import ResourceCost, TalentRecord

logger = logging.getLogger(__name__)

_DAMAGE = re.compile(r"(\d+)d(\d+) damage", re.I)
_RESOURCE = re.compile(r"spend (\d+) (focus|investiture)", re.I)

# Identifier-specific tier tables: (tier 1-2, tier 3, tier 4, tier 5+) dice counts
_DICE_BY_TIER: dict[str, tuple[tuple[int, int, int, int], int]] = {
    "fatal_thrust": ((4, 6, 8, 10), 4),
    "devastating_blow": ((2, 3, 4, 5), 8),
}


@dataclass(frozen=True)
class NarrativeAttack:
    attack_bonus: int
    damage: str
    damage_type: DamageType
    range: str
    target_defense: DefenseType
    resource_cost: Optional[ResourceCost] = None


def describes_attack(talent: TalentRecord) -> bool:
    description = talent.description.lower()
    return "attack" in description or "strike" in description


def _defense(description: str) -> DefenseType:
    # Spiritual wins when both are named
    if "spiritual defense" in description:
        return DefenseType.SPIRITUAL
    if "cognitive defense" in description:
        return DefenseType.COGNITIVE
    return DefenseType.PHYSICAL


def _range(description: str) -> str:
    if "ranged" in description:
        return "Ranged"
    if "melee" in description:
        return "Melee"
    return "Special"


def _attack_bonus(description: str, skill_total: Callable[[Skill], int]) -> int:
    if "light weapon" in description:
        return skill_total(Skill.LIGHT_WEAPONRY)
    if "heavy weapon" in description:
        return skill_total(Skill.HEAVY_WEAPONRY)
    if "melee weapon" in description or "unarmed" in description:
        return max(
            skill_total(Skill.LIGHT_WEAPONRY),
            skill_total(Skill.HEAVY_WEAPONRY),
            skill_total(Skill.ATHLETICS),
        )
    for surge in SURGES:
        if surge.value in description:
            return skill_total(surge)
    return 0


def _damage(talent: TalentRecord, tier: int) -> str:
    table = _DICE_BY_TIER.get(talent.id)
    if table is not None:
        counts, die = table
        if tier >= 5:
            count = counts[3]
        elif tier >= 4:
            count = counts[2]
        elif tier >= 3:
            count = counts[1]
        else:
            count = counts[0]
        return f"{count}d{die}"

    match = _DAMAGE.search(talent.description)
    if match:
        return f"{match.group(1)}d{match.group(2)}"
    return "0"


def _resource_cost(description: str) -> Optional[ResourceCost]:
    match = _RESOURCE.search(description)
    if match is None:
        return None
    return ResourceCost(type=ResourceType(match.group(2).lower()), amount=int(match.group(1)))


def parse_narrative_attack(
    talent: TalentRecord, tier: int, skill_total: Callable[[Skill], int]
) -> Optional[NarrativeAttack]:
    """None when the description does not read as an attack."""
    if not describes_attack(talent):
        return None

    logger.warning(
        "Talent %s has no attack_definition; falling back to deprecated text parsing",
        talent.id,
    )
    description = talent.description.lower()
    return NarrativeAttack(
        attack_bonus=_attack_bonus(description, skill_total),
        damage=_damage(talent, tier),
        damage_type=DamageType.IMPACT,
        range=_range(description),
        target_defense=_defense(description),
        resource_cost=_resource_cost(talent.description),
    )
