import asyncio

from .contracts import PlaceCreate
from .logging_config import get_logger
from .storage import DB

logger = get_logger(__name__)

DEMO_PLACES = [
    {
        "name": "Ayam Bakar Cisitu",
        "description": "Grilled chicken with sambal and warm rice",
        "price": 18000,
        "region": "GANESHA",
        "address": "Jl. Cisitu Lama",
        "latitude": -6.8785,
        "longitude": 107.6118,
        "time_open": "10:00",
        "time_close": "21:00",
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
        "address": "Jl. Tubagus Ismail",
        "latitude": -6.8851,
        "longitude": 107.6157,
        "time_open": "09:00",
        "time_close": "22:00",
        "distance": 1.4,
        "rating": 4.4,
        "category": "ayam;nasi",
        "platform": "gofood;shopeefood",
        "payment_method": "cash;qris;ovo",
    },
    {
        "name": "Warung Kopi Dago",
        "description": "Coffee, toast and late night snacks",
        "price": 15000,
        "region": "GANESHA",
        "address": "Jl. Ir. H. Juanda",
        "latitude": -6.8866,
        "longitude": 107.6132,
        "time_open": "07:00",
        "time_close": "23:00",
        "distance": 0.5,
        "rating": 4.2,
        "category": "kopi;snack",
        "platform": "grabfood",
        "payment_method": "cash",
    },
    {
        "name": "Bakso Jatinangor",
        "description": "Meatball soup near the east gate",
        "price": 14000,
        "region": "JATINANGOR",
        "address": "Jl. Raya Jatinangor",
        "latitude": -6.9275,
        "longitude": 107.7697,
        "time_open": "11:00",
        "time_close": "20:00",
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
        "address": "Jl. Sayati",
        "latitude": -6.9302,
        "longitude": 107.7731,
        "time_open": "17:00",
        "time_close": "23:59",
        "distance": 1.1,
        "rating": 4.3,
        "category": "nasi",
        "platform": "shopeefood",
        "payment_method": "cash;dana",
    },
]


async def seed() -> int:
    """Insert the demo catalog if the store is empty. Returns the number of places added."""
    if await DB.count_places():
        return 0
    for raw in DEMO_PLACES:
        await DB.create_place(PlaceCreate(**raw))
    logger.info("demo_catalog_seeded", places=len(DEMO_PLACES))
    return len(DEMO_PLACES)


if __name__ == "__main__":
    asyncio.run(seed())
