"""
Логирование движка: консоль, общий файл, файл ошибок и отдельные
файлы для подсистем (БД, промокоды, внешний сервис)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Tuple


APP_LOGGER_NAME = "boat_rental"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# (логгер, файл, размер в МБ, описание)
SUBSYSTEM_LOGS: Tuple[Tuple[str, str, int, str], ...] = (
    ("boat_rental.database", "database.log", 30, "каталог и БД"),
    ("boat_rental.engine.promotions", "promotions.log", 20, "проверка промокодов и подарочных карт"),
    ("boat_rental.clients", "promo_api.log", 20, "запросы к сервису проверки кодов"),
)

# Сторонние библиотеки пишут только предупреждения и ошибки
QUIET_LOGGERS = ('aiosqlite', 'sqlalchemy', 'sqlalchemy.engine', 'sqlalchemy.pool', 'asyncio', 'aiohttp')


class PrefixFilter(logging.Filter):
    """Пропускает записи логгера и его потомков"""

    def __init__(self, prefix: str):
        super().__init__()
        self.prefix = prefix

    def filter(self, record: logging.LogRecord) -> bool:
        return record.name == self.prefix or record.name.startswith(f"{self.prefix}.")


class LevelRangeFilter(logging.Filter):
    """Пропускает записи с уровнем от low до high включительно"""

    def __init__(self, low: int, high: Optional[int] = None):
        super().__init__()
        self.low = low
        self.high = high

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno < self.low:
            return False
        return self.high is None or record.levelno <= self.high


def _rotating_handler(
    log_path: Path,
    filename: str,
    level: int,
    max_mb: int,
    backup_count: int,
    formatter: logging.Formatter
) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=log_path / filename,
        maxBytes=max_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.name = Path(filename).stem
    return handler


def setup_logging(
    level: str = "INFO",
    console: bool = True,
    file_logging: bool = True,
    log_dir: str = "logs",
    max_size_mb: int = 10,
    backup_count: int = 5
) -> logging.Logger:
    """
    Настроить логгеры движка

    Главный логгер не пропагирует в корневой. Логгеры подсистем пишут
    в свой файл и передают записи главному (консоль, engine.log).

    Args:
        level: уровень логирования
        console: вывод в stdout
        file_logging: запись в файлы в log_dir
        log_dir: директория для логов
        max_size_mb: размер engine.log до ротации
        backup_count: количество архивных файлов

    Returns:
        Главный логгер
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(log_level)
    app_logger.propagate = False
    app_logger.handlers.clear()

    if console:
        stream = logging.StreamHandler(sys.stdout)
        stream.setLevel(log_level)
        stream.setFormatter(formatter)
        stream.name = "console"
        app_logger.addHandler(stream)

    log_path = Path(log_dir)
    if file_logging:
        log_path.mkdir(parents=True, exist_ok=True)

        app_logger.addHandler(
            _rotating_handler(log_path, "engine.log", log_level, max_size_mb, backup_count, formatter)
        )

        errors = _rotating_handler(log_path, "errors.log", logging.ERROR, 20, backup_count, formatter)
        errors.addFilter(LevelRangeFilter(logging.ERROR))
        app_logger.addHandler(errors)

        if log_level == logging.DEBUG:
            debug = _rotating_handler(log_path, "debug.log", logging.DEBUG, 100, backup_count, formatter)
            debug.addFilter(LevelRangeFilter(logging.DEBUG, logging.DEBUG))
            app_logger.addHandler(debug)

    for name, filename, max_mb, _ in SUBSYSTEM_LOGS:
        subsystem = logging.getLogger(name)
        subsystem.setLevel(log_level)
        subsystem.handlers.clear()
        subsystem.propagate = True

        if file_logging:
            handler = _rotating_handler(log_path, filename, log_level, max_mb, backup_count, formatter)
            handler.addFilter(PrefixFilter(name))
            subsystem.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    app_logger.info(
        f"Логирование настроено: уровень={level}, "
        f"консоль={'ВКЛ' if console else 'ВЫКЛ'}, файлы={'ВКЛ' if file_logging else 'ВЫКЛ'}"
    )
    if file_logging:
        for _, filename, _, description in SUBSYSTEM_LOGS:
            app_logger.info(f"  {filename}: {description}")

    return app_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Логгер модуля под главным логгером движка

    Имена вне пакета (например, "database.BoatRepository") получают
    префикс boat_rental.
    """
    if not name:
        return logging.getLogger(APP_LOGGER_NAME)

    if name == APP_LOGGER_NAME or name.startswith(f"{APP_LOGGER_NAME}."):
        return logging.getLogger(name)

    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")
