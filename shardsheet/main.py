"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from shardsheet.api.characters import router as characters_router
from shardsheet.api.health import router as health_router
from shardsheet.api.talents import router as talents_router
from shardsheet.config import settings
from shardsheet.core.item.registry import ItemRegistry
from shardsheet.core.logging import get_logger, setup_logging
from shardsheet.core.talent.catalog import TalentCatalog
from shardsheet.services.character_service import CharacterService

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Loading talent catalog...")
    catalog = TalentCatalog()
    catalog.load_from_json(settings.TALENT_DATA_PATH)

    logger.info("Loading item registry...")
    registry = ItemRegistry()
    registry.load_from_json(settings.ITEM_DATA_PATH)

    app.state.character_service = CharacterService(catalog, registry)
    logger.info(
        "CharacterService initialized (%d talents, %d items).",
        catalog.count(),
        registry.count(),
    )

    yield

    logger.info("Shutting down...")


app = FastAPI(title="Shardsheet", debug=settings.DEBUG, lifespan=lifespan)

app.include_router(health_router)
app.include_router(talents_router)
app.include_router(characters_router)
