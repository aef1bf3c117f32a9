"""Talent lookup endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from shardsheet.api.deps import get_character_service
from shardsheet.api.schemas import (
    ErrorResponse,
    ExpertiseGrantOut,
    ExpertiseGrantsResponse,
    TalentSummary,
)
from shardsheet.core.expertise.text_parser import all_expertise_options
from shardsheet.core.logging import get_logger
from shardsheet.core.talent.models import TalentRecord, is_stance
from shardsheet.services.character_service import CharacterService

logger = get_logger(__name__)

router = APIRouter(prefix="/talents", tags=["talents"])


def _require_talent(service: CharacterService, talent_id: str) -> TalentRecord:
    talent = service.get_talent(talent_id)
    if talent is None:
        raise HTTPException(status_code=404, detail=f"Talent not found: {talent_id}")
    return talent


@router.get(
    "/{talent_id}",
    response_model=TalentSummary,
    responses={404: {"model": ErrorResponse}},
)
def get_talent(
    talent_id: str,
    service: CharacterService = Depends(get_character_service),
) -> TalentSummary:
    talent = _require_talent(service, talent_id)
    return TalentSummary(
        id=talent.id,
        name=talent.name,
        description=talent.description,
        action_cost=talent.action_cost.label(),
        tier=talent.tier,
        is_stance=is_stance(talent),
        has_attack_definition=talent.attack_definition is not None,
    )


@router.get(
    "/{talent_id}/expertise-grants",
    response_model=ExpertiseGrantsResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_expertise_grants(
    talent_id: str,
    service: CharacterService = Depends(get_character_service),
) -> ExpertiseGrantsResponse:
    """Normalized expertise grants (structured data first, then legacy text)."""
    talent = _require_talent(service, talent_id)
    grants = service.expertise_grants(talent)
    return ExpertiseGrantsResponse(
        talent_id=talent.id,
        grants=[
            ExpertiseGrantOut(
                type=g.type.value,
                expertises=list(g.expertises),
                choice_count=g.choice_count,
            )
            for g in grants
        ],
        options=all_expertise_options(grants),
    )
