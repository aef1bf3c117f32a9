"""Character snapshot read by the resolution engine"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..bonus.models import FormulaContext
from ..enums import tier_for_level
from ..item.inventory import Inventory
from ..item.registry import ItemRegistry
from .skills import GOVERNING_ATTRIBUTE, MAX_SKILL_RANK, AttributeName, Skill


class ExpertiseSourceType(str, Enum):
    CULTURE = "culture"
    TALENT = "talent"
    GM = "gm"
    MANUAL = "manual"


@dataclass(frozen=True)
class ExpertiseSource:
    name: str  # "Knives"
    source: ExpertiseSourceType
    source_id: Optional[str] = None  # talent id / culture id


@dataclass
class Attributes:
    strength: int = 0
    speed: int = 0
    intellect: int = 0
    willpower: int = 0
    awareness: int = 0
    presence: int = 0

    def get(self, name: AttributeName | str) -> int:
        key = name.value if isinstance(name, AttributeName) else str(name).lower()
        return int(getattr(self, key, 0))


@dataclass(frozen=True)
class CharacterSheet:
    """Plain build data as authored or submitted, before any resolution."""

    name: str
    level: int = 1
    attributes: Attributes = field(default_factory=Attributes)
    skills: dict[str, int] = field(default_factory=dict)  # skill name -> rank
    talents: tuple[str, ...] = ()
    expertises: tuple[str, ...] = ()
    items: tuple[str, ...] = ()  # carried
    equipped: tuple[str, ...] = ()  # added if not carried
    spoken_ideals: int = 0


@dataclass
class Character:
    name: str
    registry: ItemRegistry
    level: int = 1
    attributes: Attributes = field(default_factory=Attributes)
    skill_ranks: dict[Skill, int] = field(default_factory=dict)
    unlocked_talents: set[str] = field(default_factory=set)
    expertises: list[ExpertiseSource] = field(default_factory=list)
    spoken_ideals: int = 0  # 0..4
    inventory: Inventory = field(init=False)

    def __post_init__(self) -> None:
        self.inventory = Inventory(self.registry)
        for skill, rank in list(self.skill_ranks.items()):
            self.set_skill_rank(skill, rank)

    @property
    def tier(self) -> int:
        return tier_for_level(self.level)

    # ── Skills ────────────────────────────────────────────────

    def set_skill_rank(self, skill: Skill, rank: int) -> None:
        self.skill_ranks[skill] = max(0, min(MAX_SKILL_RANK, rank))

    def skill_rank(self, skill: Skill) -> int:
        return self.skill_ranks.get(skill, 0)

    def skill_total(self, skill: Skill) -> int:
        """Rank plus the governing attribute score."""
        return self.skill_rank(skill) + self.attributes.get(GOVERNING_ATTRIBUTE[skill])

    def formula_context(self) -> FormulaContext:
        return FormulaContext(
            tier=self.tier,
            skill_ranks={skill.value: rank for skill, rank in self.skill_ranks.items()},
        )

    # ── Expertise ─────────────────────────────────────────────

    def has_expertise(self, name: str) -> bool:
        wanted = name.strip().lower()
        return any(e.name.lower() == wanted for e in self.expertises)

    def add_expertise(
        self,
        name: str,
        source: ExpertiseSourceType = ExpertiseSourceType.MANUAL,
        source_id: Optional[str] = None,
    ) -> bool:
        """False if the expertise is already held."""
        if self.has_expertise(name):
            return False
        self.expertises.append(ExpertiseSource(name, source, source_id))
        return True

    def remove_expertises_from(self, source_id: str) -> int:
        """Drop every expertise granted by a source (e.g. a removed talent)."""
        before = len(self.expertises)
        self.expertises = [e for e in self.expertises if e.source_id != source_id]
        return before - len(self.expertises)

    # ── Talents ───────────────────────────────────────────────

    def unlock_talent(self, talent_id: str) -> None:
        self.unlocked_talents.add(talent_id)

    def has_talent(self, talent_id: str) -> bool:
        return talent_id in self.unlocked_talents
