import asyncio
import os
import sys
from pathlib import Path

import pytest
import sentry_sdk
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Disable outbound Sentry calls during tests
sentry_sdk.init = lambda *args, **kwargs: None  # type: ignore[assignment]
os.environ["SENTRY_DSN"] = ""
test_data_dir = ROOT / "artifacts" / "test-data"
test_data_dir.mkdir(parents=True, exist_ok=True)
test_db = test_data_dir / "campus_eats_test.db"
if test_db.exists():
    test_db.unlink()
os.environ["DATA_DIR"] = str(test_data_dir)
os.environ["DATABASE_URL"] = f"sqlite:///{test_db}"
os.environ["SEED_DEMO_DATA"] = "false"

from backend.app.contracts import PlaceCreate  # noqa: E402
from backend.app.db.core import drop_db, init_db  # noqa: E402
from backend.app.main import app  # noqa: E402
from backend.app.storage import DB  # noqa: E402

CATALOG = [
    {
        "name": "Ayam Bakar Cisitu",
        "description": "Grilled chicken with sambal",
        "price": 18000,
        "region": "GANESHA",
        "distance": 0.9,
        "rating": 4.6,
        "category": "ayam;nasi",
        "platform": "gofood;grabfood",
        "payment_method": "cash;qris",
    },
    {
        "name": "Crisbar",
        "description": "Crispy chicken rice bowls",
        "price": 22000,
        "region": "GANESHA",
        "distance": 1.4,
        "rating": 4.4,
        "category": "ayam;nasi",
        "platform": "gofood;shopeefood",
        "payment_method": "cash;qris;ovo",
    },
    {
        "name": "Warung Kopi Dago",
        "description": "Coffee and toast",
        "price": 15000,
        "region": "GANESHA",
        "distance": 0.5,
        "rating": 4.2,
        "category": "kopi;snack",
        "platform": "grabfood",
        "payment_method": "cash",
    },
    {
        "name": "Sate Bakar Dago",
        "description": "Satay skewers over charcoal",
        "price": 30000,
        "region": "GANESHA",
        "distance": 2.0,
        "rating": 4.8,
        "category": "sate",
        "platform": "gofood",
        "payment_method": "qris",
    },
    {
        "name": "Mie Kocok Tamansari",
        "price": 12000,
        "region": "GANESHA",
        "distance": 1.0,
        "rating": 3.9,
        "category": "mie;bakar-bakaran",
        "payment_method": "cash",
    },
    {
        "name": "Bakso Jatinangor",
        "description": "Meatball soup near the east gate",
        "price": 14000,
        "region": "JATINANGOR",
        "distance": 0.8,
        "rating": 4.5,
        "category": "bakso;mie",
        "platform": "gofood",
        "payment_method": "cash;qris",
    },
    {
        "name": "Nasi Goreng Sayati",
        "description": "Fried rice cooked to order",
        "price": 16000,
        "region": "JATINANGOR",
        "distance": 1.1,
        "rating": 4.3,
        "category": "nasi",
        "platform": "shopeefood",
        "payment_method": "cash;dana",
    },
]


async def _reset_schema() -> None:
    await drop_db()
    await init_db()


async def _load_catalog() -> dict[str, str]:
    await _reset_schema()
    ids: dict[str, str] = {}
    for raw in CATALOG:
        place = await DB.create_place(PlaceCreate(**raw))
        ids[place["name"]] = place["id"]
    return ids


@pytest.fixture(scope="session")
def client() -> TestClient:
    return TestClient(app, base_url="http://api.testserver")


@pytest.fixture
def catalog() -> dict[str, str]:
    """Fresh schema holding CATALOG; returns place ids by name."""
    return asyncio.run(_load_catalog())


@pytest.fixture
def empty_catalog() -> None:
    asyncio.run(_reset_schema())
