"""API request/response schemas."""

from typing import Optional, Union

from pydantic import BaseModel, Field


# === Request Schemas ===


class AttributesIn(BaseModel):
    """Attribute scores"""

    strength: int = Field(0, ge=0)
    speed: int = Field(0, ge=0)
    intellect: int = Field(0, ge=0)
    willpower: int = Field(0, ge=0)
    awareness: int = Field(0, ge=0)
    presence: int = Field(0, ge=0)


class CharacterSnapshot(BaseModel):
    """Character state the engine resolves against"""

    name: str = Field(..., min_length=1, max_length=100)
    level: int = Field(1, ge=1, le=30)
    attributes: AttributesIn = Field(default_factory=AttributesIn)
    skills: dict[str, int] = Field(
        default_factory=dict, description="skill name -> rank (clamped to 0..5)"
    )
    talents: list[str] = Field(default_factory=list, description="unlocked talent ids")
    expertises: list[str] = Field(default_factory=list)
    items: list[str] = Field(default_factory=list, description="carried item ids")
    equipped: list[str] = Field(
        default_factory=list, description="item ids to equip (added if not carried)"
    )
    spoken_ideals: int = Field(0, ge=0, le=5)


# === Response Schemas ===


class ResourceCostOut(BaseModel):
    type: str
    amount: int


class ModifierOut(BaseModel):
    source: str
    type: str
    description: str
    value: Optional[Union[int, str]] = None
    condition: Optional[str] = None


class AttackOut(BaseModel):
    """One usable attack"""

    id: str
    name: str
    source: str
    weapon_id: Optional[str] = None
    talent_id: Optional[str] = None
    attack_bonus: int
    damage: str
    damage_type: str
    range: str
    target_defense: str
    action_cost: str
    traits: list[str] = []
    description: str
    resource_cost: Optional[ResourceCostOut] = None
    custom_modifiers: list[ModifierOut] = []


class StanceOut(BaseModel):
    id: str
    name: str
    description: str
    talent_id: str
    activation_cost: str
    effects: list[str] = []
    bonuses: list[ModifierOut] = []
    grants_advantage: list[str] = []


class AttacksResponse(BaseModel):
    attacks: list[AttackOut]


class StancesResponse(BaseModel):
    stances: list[StanceOut]


class TalentSummary(BaseModel):
    id: str
    name: str
    description: str
    action_cost: str
    tier: int
    is_stance: bool
    has_attack_definition: bool


class ExpertiseGrantOut(BaseModel):
    type: str
    expertises: list[str]
    choice_count: Optional[int] = None


class ExpertiseGrantsResponse(BaseModel):
    talent_id: str
    grants: list[ExpertiseGrantOut]
    options: list[str] = Field(default_factory=list, description="all named expertises")


class EligibilityResponse(BaseModel):
    talent_id: str
    eligible: bool
    missing: list[str] = []


class ErrorResponse(BaseModel):
    """Error response"""

    detail: str
