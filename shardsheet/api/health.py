"""Health check endpoint."""

from fastapi import APIRouter, Depends

from shardsheet.api.deps import get_character_service
from shardsheet.services.character_service import CharacterService

router = APIRouter()


@router.get("/health")
def health_check(
    service: CharacterService = Depends(get_character_service),
) -> dict[str, str | int]:
    """Return application status and loaded content counts."""
    return {
        "status": "ok",
        "talents": service.catalog.count(),
        "items": service.registry.count(),
    }
