"""Shared test fixtures."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from shardsheet.core.item.registry import ItemRegistry
from shardsheet.core.talent.catalog import TalentCatalog
from shardsheet.main import app

DATA_DIR = Path(__file__).resolve().parent.parent / "shardsheet" / "data"
TALENT_DATA_PATH = DATA_DIR / "talents.json"
ITEM_DATA_PATH = DATA_DIR / "items.json"


@pytest.fixture()
def registry() -> ItemRegistry:
    """Item registry loaded from the bundled items.json."""
    reg = ItemRegistry()
    reg.load_from_json(ITEM_DATA_PATH)
    return reg


@pytest.fixture()
def catalog() -> TalentCatalog:
    """Talent catalog loaded from the bundled talents.json."""
    cat = TalentCatalog()
    cat.load_from_json(TALENT_DATA_PATH)
    return cat


@pytest.fixture()
def client() -> TestClient:
    """FastAPI TestClient with the lifespan (data loading) run."""
    with TestClient(app) as test_client:
        yield test_client
