"""Character resolution endpoints: attacks, stances, talent eligibility."""

from fastapi import APIRouter, Depends, HTTPException

from shardsheet.api.deps import get_character_service
from shardsheet.api.schemas import (
    AttackOut,
    AttacksResponse,
    CharacterSnapshot,
    EligibilityResponse,
    ErrorResponse,
    ModifierOut,
    ResourceCostOut,
    StanceOut,
    StancesResponse,
)
from shardsheet.core.character.models import Attributes, CharacterSheet
from shardsheet.core.combat.models import Attack, AttackModifier, Stance
from shardsheet.core.logging import get_logger
from shardsheet.services.character_service import CharacterService

logger = get_logger(__name__)

router = APIRouter(prefix="/characters", tags=["characters"])


def _to_sheet(snapshot: CharacterSnapshot) -> CharacterSheet:
    """CharacterSnapshot -> CharacterSheet"""
    return CharacterSheet(
        name=snapshot.name,
        level=snapshot.level,
        attributes=Attributes(**snapshot.attributes.model_dump()),
        skills=dict(snapshot.skills),
        talents=tuple(snapshot.talents),
        expertises=tuple(snapshot.expertises),
        items=tuple(snapshot.items),
        equipped=tuple(snapshot.equipped),
        spoken_ideals=snapshot.spoken_ideals,
    )


def _build_modifier(modifier: AttackModifier) -> ModifierOut:
    return ModifierOut(
        source=modifier.source,
        type=modifier.type.value,
        description=modifier.description,
        value=modifier.value,
        condition=modifier.condition,
    )


def _build_attack(attack: Attack) -> AttackOut:
    """Attack -> AttackOut"""
    resource = attack.resource_cost
    return AttackOut(
        id=attack.id,
        name=attack.name,
        source=attack.source.value,
        weapon_id=attack.weapon_id,
        talent_id=attack.talent_id,
        attack_bonus=attack.attack_bonus,
        damage=attack.damage,
        damage_type=attack.damage_type.value,
        range=attack.range,
        target_defense=attack.target_defense.value,
        action_cost=attack.action_cost.label(),
        traits=list(attack.traits),
        description=attack.description,
        resource_cost=(
            ResourceCostOut(type=resource.type.value, amount=resource.amount)
            if resource
            else None
        ),
        custom_modifiers=[_build_modifier(m) for m in attack.custom_modifiers],
    )


def _build_stance(stance: Stance) -> StanceOut:
    """Stance -> StanceOut"""
    return StanceOut(
        id=stance.id,
        name=stance.name,
        description=stance.description,
        talent_id=stance.talent_id,
        activation_cost=stance.activation_cost.label(),
        effects=list(stance.effects),
        bonuses=[_build_modifier(m) for m in stance.bonuses],
        grants_advantage=list(stance.grants_advantage),
    )


@router.post("/attacks", response_model=AttacksResponse)
def list_attacks(
    snapshot: CharacterSnapshot,
    service: CharacterService = Depends(get_character_service),
) -> AttacksResponse:
    """Attacks available to the character right now."""
    attacks = service.attacks_for(_to_sheet(snapshot))
    logger.debug("Resolved %d attacks for %s", len(attacks), snapshot.name)
    return AttacksResponse(attacks=[_build_attack(a) for a in attacks])


@router.post("/stances", response_model=StancesResponse)
def list_stances(
    snapshot: CharacterSnapshot,
    service: CharacterService = Depends(get_character_service),
) -> StancesResponse:
    stances = service.stances_for(_to_sheet(snapshot))
    return StancesResponse(stances=[_build_stance(s) for s in stances])


@router.post(
    "/talents/{talent_id}/eligibility",
    response_model=EligibilityResponse,
    responses={404: {"model": ErrorResponse}},
)
def check_eligibility(
    talent_id: str,
    snapshot: CharacterSnapshot,
    service: CharacterService = Depends(get_character_service),
) -> EligibilityResponse:
    """Whether the character meets the talent's prerequisites."""
    talent = service.get_talent(talent_id)
    if talent is None:
        raise HTTPException(status_code=404, detail=f"Talent not found: {talent_id}")
    eligible, missing = service.eligibility(talent, _to_sheet(snapshot))
    return EligibilityResponse(talent_id=talent_id, eligible=eligible, missing=missing)
