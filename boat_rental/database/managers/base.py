"""
Менеджеры объединяют несколько репозиториев в одну операцию.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from boat_rental.utils.logging_config import get_logger


class BaseManager:
    """Сессия БД и журнал операций"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.logger = get_logger(f"database.{self.__class__.__name__}")

    def _log_operation_start(self, operation: str, **params) -> None:
        details = ", ".join(f"{key}={value}" for key, value in params.items())
        self.logger.info(f"[{operation}] старт {details}".rstrip())

    def _log_operation_end(self, operation: str, **result) -> None:
        details = ", ".join(f"{key}={value}" for key, value in result.items())
        self.logger.info(f"[{operation}] готово {details}".rstrip())
