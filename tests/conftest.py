import os
import sys
import warnings
from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# ========== НАСТРОЙКА ПУТЕЙ ИМПОРТА ==========
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from boat_rental.catalog_data import default_catalog
from boat_rental.database.models import Base
from boat_rental.schemas.promotion import GatewayResponse


# ========== ГЛОБАЛЬНЫЕ ПРОВЕРКИ БЕЗОПАСНОСТИ ==========

def pytest_configure(config):
    """Конфигурация pytest перед запуском тестов."""

    # Проверка безопасности: предупреждение о рабочей БД
    if os.path.exists("catalog.db"):
        warnings.warn(
            "Обнаружен файл catalog.db. Убедитесь, что тесты используют :memory: БД.",
            RuntimeWarning
        )

    config.addinivalue_line("markers", "integration: интеграционные тесты")
    config.addinivalue_line("markers", "slow: медленные тесты")
    config.addinivalue_line("markers", "database: тесты, работающие с базой данных")


# ========== Фикстуры для базы данных ==========

@pytest.fixture
async def async_engine():
    """
    Асинхронный движок для тестовой БД.
    SQLite в памяти, одно соединение на весь тест.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine):
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    """Тестовая сессия БД"""
    async with session_factory() as session:
        yield session


# ========== Фикстуры каталога ==========

@pytest.fixture(scope="session")
def catalog():
    """Каталог по умолчанию (неизменяемый, общий для всех тестов)"""
    return default_catalog()


@pytest.fixture
def today():
    """Фиксированная дата 'сегодня' для проверок формы"""
    return date(2026, 4, 1)


@pytest.fixture
def mock_gateway():
    """Мок сервиса проверки кодов: по умолчанию ни один код не найден"""
    gateway = AsyncMock()
    gateway.check_gift_card = AsyncMock(return_value=GatewayResponse(status=404, payload={"valid": False}))
    gateway.check_discount_code = AsyncMock(return_value=GatewayResponse(status=200, payload={"valid": False}))
    return gateway


# ========== Настройки pytest ==========

def pytest_collection_modifyitems(items):
    """Изменяем имена тестов для лучшего отображения."""
    for item in items:
        if hasattr(item, 'cls') and item.cls:
            item._nodeid = item.nodeid.replace(f"{item.cls.__name__}.", "")
