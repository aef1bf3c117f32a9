"""Talent trait grants onto weapons"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from ..character.skills import skill_for_weapon_keyword
from ..item.models import ItemDefinition, base_item_id
from ..talent.models import TalentRecord, TraitGrant, TraitTarget

logger = logging.getLogger(__name__)

# Base item id (or lower-case name) -> expertise gating expert trait grants
ITEM_EXPERTISE: dict[str, str] = {
    "knife": "Knives",
    "sling": "Slings",
    "axe": "Heavy Weaponry",
    "sword": "Light Weaponry",
}

GENERIC_WEAPON_EXPERTISES: tuple[str, ...] = (
    "Light Weaponry",
    "Heavy Weaponry",
    "Special Weapons",
)


def _category_keys(item: ItemDefinition) -> set[str]:
    """Names an item answers to for category selectors."""
    keys = {item.type.value}
    keys.update(tag.lower() for tag in item.tags)
    if item.weapon is not None:
        skill = skill_for_weapon_keyword(item.weapon.skill)
        keys.add(item.weapon.skill.lower())
        keys.add(skill.value)
        # "light-weaponry" also answers to "light"
        keys.add(item.weapon.skill.lower().split("-")[0])
        keys.add("ranged" if item.weapon.is_ranged else "melee")
    return keys


def target_matches(target: TraitTarget, item_id: str, item: ItemDefinition) -> bool:
    if target.all_items:
        return True
    if target.item_ids:
        return base_item_id(item_id) in target.item_ids or item.name.lower() in target.item_ids
    if target.category:
        return target.category.lower() in _category_keys(item)
    return False


class TraitGrantResolver:
    """Collects talent-granted traits for a weapon."""

    def __init__(self, has_expertise: Callable[[str], bool]) -> None:
        self._has_expertise = has_expertise

    def holds_expertise_for(self, item_id: str, item: ItemDefinition) -> bool:
        expertise = ITEM_EXPERTISE.get(base_item_id(item_id)) or ITEM_EXPERTISE.get(
            item.name.lower()
        )
        if expertise is None:
            return any(self._has_expertise(name) for name in GENERIC_WEAPON_EXPERTISES)
        return self._has_expertise(expertise)

    def _grant_applies(self, grant: TraitGrant, item_id: str, item: ItemDefinition) -> bool:
        if not target_matches(grant.target, item_id, item):
            return False
        return not grant.expert or self.holds_expertise_for(item_id, item)

    def traits_for(
        self, item_id: str, item: ItemDefinition, talents: Iterable[TalentRecord]
    ) -> list[str]:
        traits: list[str] = []
        for talent in talents:
            for grant in talent.trait_grants:
                if self._grant_applies(grant, item_id, item):
                    traits.extend(grant.traits)
        return traits
