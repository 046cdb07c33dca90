import argparse
import asyncio
import sys
from datetime import date

from boat_rental.catalog_data import default_catalog
from boat_rental.clients.promo_api import PromoApiClient
from boat_rental.config import LoggingConfig, PromoApiConfig
from boat_rental.database.gateway import DatabasePromotionGateway
from boat_rental.database.managers import CatalogManager
from boat_rental.database.models import init_models
from boat_rental.database.session import async_session
from boat_rental.engine.booking_session import BookingSession
from boat_rental.engine.catalog import Catalog
from boat_rental.engine.durations import legal_durations
from boat_rental.exceptions import InvalidCode, RentalEngineError
from boat_rental.schemas.catalog import LicenseFilter
from boat_rental.utils.logging_config import setup_logging

logger = setup_logging(
    level=LoggingConfig.LOG_LEVEL,
    console=LoggingConfig.ENABLE_CONSOLE_LOGGING,
    file_logging=LoggingConfig.ENABLE_FILE_LOGGING,
    log_dir=LoggingConfig.LOG_DIR,
    max_size_mb=LoggingConfig.ROTATION_MAX_SIZE_MB,
    backup_count=LoggingConfig.ROTATION_BACKUP_COUNT
)


async def load_catalog() -> Catalog:
    """Каталог из БД, а если в БД нет лодок - каталог по умолчанию"""
    async with async_session() as session:
        catalog = await CatalogManager(session).load_catalog()

    if not catalog.boats:
        logger.warning("Каталог в БД пуст, используется каталог по умолчанию")
        return default_catalog()
    return catalog


def make_gateway():
    if PromoApiConfig.BASE_URL:
        return PromoApiClient()
    return DatabasePromotionGateway(async_session)


async def cmd_init_db(args) -> int:
    await init_models()
    async with async_session() as session:
        added = await CatalogManager(session).seed_defaults()
    print("Каталог заполнен" if added else "Каталог уже заполнен")
    return 0


async def cmd_quote(args) -> int:
    catalog = await load_catalog()
    gateway = make_gateway()

    try:
        booking = BookingSession(catalog, gateway)
        booking.select_boat(args.boat)
        booking.set_date(args.date)
        booking.set_duration(args.duration)
        if args.pack:
            booking.select_pack(args.pack)
        for extra in args.extra or []:
            booking.toggle_extra(extra)

        if args.code:
            try:
                await booking.apply_code(args.code)
            except InvalidCode as e:
                logger.warning(e.message)

        print(booking.summary().model_dump_json(indent=2))
    finally:
        if isinstance(gateway, PromoApiClient):
            await gateway.close()

    return 0


async def cmd_durations(args) -> int:
    catalog = await load_catalog()
    license_filter = LicenseFilter(args.license) if args.license else None

    for option in legal_durations(catalog, args.boat, license_filter, args.date):
        print(f"{option.key.value:>3}  {option.display_label}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Расчет цены аренды лодок")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_db = subparsers.add_parser("init-db", help="Создать таблицы и заполнить каталог")
    init_db.set_defaults(handler=cmd_init_db)

    quote = subparsers.add_parser("quote", help="Рассчитать стоимость аренды")
    quote.add_argument("--boat", required=True)
    quote.add_argument("--date", required=True, type=date.fromisoformat, help="ГГГГ-ММ-ДД")
    quote.add_argument("--duration", required=True, help="1h, 2h, 3h, 4h, 6h или 8h")
    quote.add_argument("--extra", action="append", help="Доп (можно указать несколько раз)")
    quote.add_argument("--pack")
    quote.add_argument("--code", help="Подарочная карта или код скидки")
    quote.set_defaults(handler=cmd_quote)

    durations = subparsers.add_parser("durations", help="Доступные длительности")
    group = durations.add_mutually_exclusive_group()
    group.add_argument("--boat")
    group.add_argument("--license", choices=[f.value for f in LicenseFilter])
    durations.add_argument("--date", type=date.fromisoformat)
    durations.set_defaults(handler=cmd_durations)

    return parser


async def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return await args.handler(args)
    except RentalEngineError as e:
        logger.error(e.message)
        print(e.message, file=sys.stderr)
        return 1


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Получен сигнал KeyboardInterrupt")
