import enum
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Enum, Integer, Numeric, String, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncAttrs, AsyncEngine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from boat_rental.config import DatabaseConfig
from boat_rental.database.session import engine as default_engine
from boat_rental.utils.logging_config import get_logger

logger = get_logger(__name__)


class Base(AsyncAttrs, DeclarativeBase):
    """Декларативная база моделей каталога и промокодов"""
    pass


class GiftCardStatus(enum.Enum):
    """Статусы подарочных карт"""
    pending = "pending"
    active = "active"
    used = "used"
    expired = "expired"
    cancelled = "cancelled"


class GiftCardPaymentStatus(enum.Enum):
    """Статусы оплаты подарочной карты"""
    pending = "pending"
    completed = "completed"
    failed = "failed"


# Таблицы

class Boat(Base):
    """Лодка каталога с таблицей цен и допами"""
    __tablename__ = 'boats'

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    requires_license: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    deposit: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0)
    pricing: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
    extras: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    def __repr__(self) -> str:
        return f"Boat(id='{self.id}', license={self.requires_license}, active={self.is_active})"

    def to_catalog_payload(self) -> Dict[str, Any]:
        """Данные в формате внешнего каталога"""
        return {
            "id": self.id,
            "name": self.name,
            "requiresLicense": self.requires_license,
            "capacity": self.capacity,
            "deposit": self.deposit,
            "pricing": self.pricing,
            "extras": self.extras or [],
        }


class ExtraPackRecord(Base):
    """Пакет допов"""
    __tablename__ = 'extra_packs'

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    name_en: Mapped[str] = mapped_column(String(100), default="")
    extras: Mapped[List[str]] = mapped_column(JSON, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    original_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    icon: Mapped[str] = mapped_column(String(50), default="Package")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    def __repr__(self) -> str:
        return f"ExtraPackRecord(id='{self.id}', price={self.price})"

    def to_catalog_payload(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "nameEN": self.name_en,
            "extras": list(self.extras),
            "price": self.price,
            "originalPrice": self.original_price,
            "icon": self.icon,
        }


class GiftCard(Base):
    """Подарочная карта"""
    __tablename__ = 'gift_cards'

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    remaining_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    recipient_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    status: Mapped[GiftCardStatus] = mapped_column(
        Enum(GiftCardStatus), default=GiftCardStatus.active, nullable=False
    )
    payment_status: Mapped[GiftCardPaymentStatus] = mapped_column(
        Enum(GiftCardPaymentStatus), default=GiftCardPaymentStatus.pending, nullable=False
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    def __repr__(self) -> str:
        return (
            f"GiftCard(code='{self.code}', remaining={self.remaining_amount}, "
            f"status={self.status.value}, payment={self.payment_status.value})"
        )


class DiscountCode(Base):
    """Код скидки в процентах"""
    __tablename__ = 'discount_codes'

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    discount_percent: Mapped[int] = mapped_column(Integer, nullable=False)
    max_uses: Mapped[int] = mapped_column(Integer, default=1)
    current_uses: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"DiscountCode(code='{self.code}', percent={self.discount_percent})"

    @property
    def remaining_uses(self) -> int:
        """Оставшееся количество использований"""
        return max(0, self.max_uses - self.current_uses)


async def init_models(engine: Optional[AsyncEngine] = None) -> None:
    """Создать таблицы каталога и кодов"""
    engine = engine or default_engine

    logger.info(f"Создание таблиц каталога: {engine.url.render_as_string(hide_password=True)}")

    try:
        async with engine.begin() as conn:
            if engine.url.get_backend_name() == "sqlite" and engine.url.database not in (None, "", ":memory:"):
                for sql_setting, description in DatabaseConfig.WAL_SETTINGS:
                    try:
                        await conn.execute(text(sql_setting))
                        logger.debug(f"PRAGMA: {description}")
                    except SQLAlchemyError as e:
                        logger.warning(f"PRAGMA не применена ({description}): {e}")

            await conn.run_sync(Base.metadata.create_all)
            logger.info("Схема БД актуальна")

    except Exception as e:
        logger.critical(f"Не удалось создать схему БД: {e}", exc_info=True)
        raise
