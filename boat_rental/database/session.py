from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from boat_rental.config import DatabaseConfig
from boat_rental.utils.logging_config import get_logger

logger = get_logger(__name__)


engine = create_async_engine(
    url=DatabaseConfig.DB_URL,
    echo=False,  # True только для отладки SQL
    poolclass=NullPool,
    connect_args=DatabaseConfig.CONNECT_ARGS,
)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)

logger.debug(f"Движок БД создан: {engine.url.render_as_string(hide_password=True)}")
