"""
Общие операции репозиториев каталога и промокодов.

Ошибки чтения логируются и дают пустой результат, ошибки записи
откатывают транзакцию и пробрасываются.
"""

from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from boat_rental.utils.logging_config import get_logger

Model = TypeVar('Model')


class BaseRepository:
    """Базовый репозиторий поверх AsyncSession"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.logger = get_logger(f"database.{self.__class__.__name__}")

    @staticmethod
    def _filtered(query: Select, conditions: Sequence[Any]) -> Select:
        return query.where(*conditions) if conditions else query

    # ================ ЧТЕНИЕ ================

    async def _get_one(self, model_class: Type[Model], *conditions: Any) -> Optional[Model]:
        """Одна запись по условиям или None"""
        name = model_class.__name__
        try:
            result = await self.session.execute(self._filtered(select(model_class), conditions))
            entity = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Ошибка чтения {name}: {e}", exc_info=True)
            return None

        if entity is None:
            self.logger.debug(f"{name} не найден: {conditions}")
        return entity

    async def _get_many(
        self,
        model_class: Type[Model],
        *conditions: Any,
        order_by: Optional[Any] = None
    ) -> List[Model]:
        """Записи по условиям, при ошибке - пустой список"""
        name = model_class.__name__
        query = self._filtered(select(model_class), conditions)
        if order_by is not None:
            query = query.order_by(order_by)

        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            self.logger.error(f"Ошибка чтения списка {name}: {e}", exc_info=True)
            return []

        entities = list(result.scalars().all())
        self.logger.debug(f"{name}: получено {len(entities)} записей")
        return entities

    async def _count(self, model_class: Type[Model], *conditions: Any) -> int:
        query = self._filtered(select(func.count()).select_from(model_class), conditions)
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            self.logger.error(f"Ошибка подсчета {model_class.__name__}: {e}", exc_info=True)
            return 0
        return result.scalar() or 0

    async def _exists(self, model_class: Type[Model], *conditions: Any) -> bool:
        """Есть ли хотя бы одна запись по условиям"""
        query = select(self._filtered(select(model_class), conditions).exists())
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as e:
            self.logger.error(f"Ошибка проверки {model_class.__name__}: {e}", exc_info=True)
            return False
        return bool(result.scalar())

    # ================ ЗАПИСЬ ================

    async def _commit_or_rollback(self, action: str) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            self.logger.error(f"{action}: {e}", exc_info=True)
            await self.session.rollback()
            raise

    async def _create(self, model_class: Type[Model], **data: Any) -> Model:
        """
        Добавить запись и вернуть ее с данными из БД

        Raises:
            SQLAlchemyError: запись не сохранена
        """
        self.logger.info(f"Новая запись {model_class.__name__}: поля {sorted(data)}")
        entity = model_class(**data)
        self.session.add(entity)
        await self._commit_or_rollback(f"Ошибка сохранения {model_class.__name__}")
        await self.session.refresh(entity)
        return entity

    async def _bulk_create(self, model_class: Type[Model], rows: List[Dict[str, Any]]) -> List[Model]:
        """
        Добавить записи одной транзакцией

        Raises:
            SQLAlchemyError: ни одна запись не сохранена
        """
        self.logger.info(f"Пакетное добавление {model_class.__name__}: {len(rows)} записей")
        entities = [model_class(**row) for row in rows]
        self.session.add_all(entities)
        await self._commit_or_rollback(f"Ошибка пакетного сохранения {model_class.__name__}")
        return entities
