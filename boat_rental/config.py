"""
Конфигурация движка из переменных окружения (.env поддерживается)
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() == 'true'


class LoggingConfig:
    """Настройки логирования"""

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
    ENABLE_CONSOLE_LOGGING = _env_bool('ENABLE_CONSOLE_LOGGING', True)
    ENABLE_FILE_LOGGING = _env_bool('ENABLE_FILE_LOGGING', False)
    LOG_DIR = os.getenv('LOG_DIR', 'logs')
    ROTATION_MAX_SIZE_MB = int(os.getenv('ROTATION_MAX_SIZE_MB', '10'))
    ROTATION_BACKUP_COUNT = int(os.getenv('ROTATION_BACKUP_COUNT', '5'))


class DatabaseConfig:
    """Конфигурация базы данных каталога"""

    DB_URL = os.getenv('DB_URL', 'sqlite+aiosqlite:///catalog.db')
    CONNECT_ARGS = {
        'check_same_thread': False,
        'timeout': 15,
    }

    WAL_SETTINGS = [
        ("PRAGMA journal_mode=WAL", "WAL режим"),
        ("PRAGMA synchronous=NORMAL", "Баланс скорость/безопасность"),
        ("PRAGMA busy_timeout=5000", "Таймаут блокировки"),
    ]


class PromoApiConfig:
    """Внешний сервис проверки подарочных карт и кодов скидки"""

    # Если не задан - проверка идет по таблицам в БД
    BASE_URL = os.getenv('PROMO_API_BASE_URL') or None
    TIMEOUT = float(os.getenv('PROMO_API_TIMEOUT', '10'))
    GIFT_CARD_PATH = '/api/gift-cards/validate'
    DISCOUNT_PATH = '/api/discounts/validate'
