"""
Каталог по умолчанию: флот лодок и пакеты допов.

Данные в формате внешнего каталога (camelCase, сезоны BAJA/MEDIA/ALTA,
цены допов строками). Используется для наполнения БД и когда БД
не инициализирована.
"""

from typing import Any, Dict, List

from boat_rental.engine.catalog import Catalog, build_catalog


PERIOD_BAJA = "Abril-Junio, Septiembre-Cierre"
PERIOD_MEDIA = "Julio"
PERIOD_ALTA = "Agosto"

DEFAULT_EXTRAS = [
    {"name": "Parking", "price": "10€", "icon": "CircleParking"},
    {"name": "Nevera", "price": "5€", "icon": "Snowflake"},
    {"name": "Bebidas", "price": "2,5€/ud", "icon": "Beer"},
    {"name": "Snorkel", "price": "7,5€", "icon": "Eye"},
    {"name": "Paddle Surf", "price": "25€", "icon": "Waves"},
    {"name": "Seascooter", "price": "50€", "icon": "Zap"},
]

NO_LICENSE_KEYS = ("1h", "2h", "3h", "4h", "6h", "8h")
LICENSE_KEYS = ("2h", "4h", "8h")


def _boat(boat_id: str, name: str, requires_license: bool, capacity: str, deposit: str,
          baja, media, alta) -> Dict[str, Any]:
    keys = LICENSE_KEYS if requires_license else NO_LICENSE_KEYS
    return {
        "id": boat_id,
        "name": name,
        "requiresLicense": requires_license,
        "capacity": capacity,
        "deposit": deposit,
        "pricing": {
            "BAJA": {"period": PERIOD_BAJA, "prices": dict(zip(keys, baja))},
            "MEDIA": {"period": PERIOD_MEDIA, "prices": dict(zip(keys, media))},
            "ALTA": {"period": PERIOD_ALTA, "prices": dict(zip(keys, alta))},
        },
        "extras": [dict(extra) for extra in DEFAULT_EXTRAS],
    }


# Цены по сезонам: BAJA, MEDIA, ALTA
_SOLAR_PRICES = (
    (75, 115, 130, 150, 190, 220),
    (85, 130, 160, 180, 230, 270),
    (95, 140, 170, 195, 240, 290),
)

DEFAULT_BOATS: List[Dict[str, Any]] = [
    # Без лицензии
    _boat("solar-450", "Solar 450", False, "5 Personas", "250€", *_SOLAR_PRICES),
    _boat("remus-450", "Remus 450", False, "5 Personas", "200€", *_SOLAR_PRICES),
    _boat("remus-450-ii", "Remus 450 II", False, "5 Personas", "200€", *_SOLAR_PRICES),
    _boat(
        "astec-400", "Astec 400", False, "4 Personas", "200€",
        (70, 105, 120, 135, 170, 200),
        (80, 120, 145, 165, 210, 250),
        (90, 130, 155, 180, 220, 270),
    ),
    _boat(
        "astec-480", "Astec 480", False, "5 Personas", "300€",
        (80, 130, 155, 180, 230, 270),
        (90, 150, 190, 220, 270, 310),
        (100, 170, 200, 230, 290, 340),
    ),
    # С лицензией: только 2, 4 и 8 часов
    _boat(
        "mingolla-brava-19", "Mingolla Brava 19", True, "6 Personas", "500€",
        (150, 230, 280), (160, 240, 300), (180, 250, 390),
    ),
    _boat(
        "trimarchi-57s", "Trimarchi 57S", True, "7 Personas", "500€",
        (160, 240, 290), (180, 260, 340), (200, 280, 390),
    ),
    _boat(
        "pacific-craft-625", "Pacific Craft 625", True, "7 Personas", "500€",
        (180, 250, 300), (200, 280, 360), (220, 300, 420),
    ),
]

DEFAULT_PACKS: List[Dict[str, Any]] = [
    {
        "id": "pack-basic",
        "name": "Pack Basic",
        "nameEN": "Basic Pack",
        "extras": ["Nevera", "Snorkel"],
        "price": 10,
        "originalPrice": 12.5,
        "icon": "Package",
    },
    {
        "id": "pack-premium",
        "name": "Pack Premium",
        "nameEN": "Premium Pack",
        "extras": ["Nevera", "Snorkel", "Paddle Surf"],
        "price": 30,
        "originalPrice": 37.5,
        "icon": "Crown",
    },
    {
        "id": "pack-aventura",
        "name": "Pack Aventura",
        "nameEN": "Adventure Pack",
        "extras": ["Nevera", "Snorkel", "Paddle Surf", "Seascooter"],
        "price": 75,
        "originalPrice": 87.5,
        "icon": "Zap",
    },
]


def default_catalog() -> Catalog:
    """Собрать каталог по умолчанию"""
    return build_catalog(DEFAULT_BOATS, DEFAULT_PACKS)
