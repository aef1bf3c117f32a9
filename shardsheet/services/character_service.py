"""Character Service: CharacterSheet -> Character, then core resolution calls.

Service -> Core only; no state is kept between requests.
"""

from __future__ import annotations

from shardsheet.core.character.models import (
    Character,
    CharacterSheet,
    ExpertiseSourceType,
)
from shardsheet.core.character.skills import parse_skill
from shardsheet.core.combat.engine import AttackResolutionEngine
from shardsheet.core.combat.models import Attack, Stance
from shardsheet.core.expertise.models import ExpertiseGrant
from shardsheet.core.expertise.resolver import ExpertiseGrantResolver
from shardsheet.core.item.registry import ItemRegistry
from shardsheet.core.logging import get_logger
from shardsheet.core.talent.catalog import TalentCatalog
from shardsheet.core.talent.models import Prerequisite, TalentRecord
from shardsheet.core.talent.prerequisites import can_unlock, missing_prerequisites

logger = get_logger(__name__)


def describe_prerequisite(prereq: Prerequisite) -> str:
    if prereq.value is None:
        return f"{prereq.type.value}:{prereq.target}"
    return f"{prereq.type.value}:{prereq.target}>={prereq.value}"


class CharacterService:
    """Builds characters from character sheets and runs the engine."""

    def __init__(self, catalog: TalentCatalog, registry: ItemRegistry) -> None:
        self._catalog = catalog
        self._registry = registry
        self._grants = ExpertiseGrantResolver()

    @property
    def catalog(self) -> TalentCatalog:
        return self._catalog

    @property
    def registry(self) -> ItemRegistry:
        return self._registry

    def build_character(self, sheet: CharacterSheet) -> Character:
        character = Character(
            name=sheet.name,
            registry=self._registry,
            level=sheet.level,
            attributes=sheet.attributes,
            spoken_ideals=sheet.spoken_ideals,
        )

        for name, rank in sheet.skills.items():
            skill = parse_skill(name)
            if skill is None:
                logger.warning("Unknown skill on sheet, skipped: %s", name)
                continue
            character.set_skill_rank(skill, rank)

        for talent_id in sheet.talents:
            character.unlock_talent(talent_id)

        for expertise in sheet.expertises:
            character.add_expertise(expertise, ExpertiseSourceType.MANUAL)

        for item_id in sheet.items:
            character.inventory.add_item(item_id)
        for item_id in sheet.equipped:
            if item_id not in character.inventory.items:
                if not character.inventory.add_item(item_id):
                    continue
            if not character.inventory.equip_item(item_id):
                logger.warning("Item is not equipable, skipped: %s", item_id)

        return character

    def attacks_for(self, sheet: CharacterSheet) -> list[Attack]:
        engine = AttackResolutionEngine(self.build_character(sheet), self._catalog)
        return engine.get_available_attacks()

    def stances_for(self, sheet: CharacterSheet) -> list[Stance]:
        engine = AttackResolutionEngine(self.build_character(sheet), self._catalog)
        return engine.get_available_stances()

    def get_talent(self, talent_id: str) -> TalentRecord | None:
        return self._catalog.lookup(talent_id)

    def expertise_grants(self, talent: TalentRecord) -> list[ExpertiseGrant]:
        return self._grants.resolve(talent)

    def eligibility(
        self, talent: TalentRecord, sheet: CharacterSheet
    ) -> tuple[bool, list[str]]:
        character = self.build_character(sheet)
        if can_unlock(talent, character):
            return True, []
        missing = missing_prerequisites(talent, character)
        return False, [describe_prerequisite(p) for p in missing]
