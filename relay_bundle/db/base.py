import logging

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base, sessionmaker
from relay_bundle.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    future=True
)

AsyncSessionLocal = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)

Base = declarative_base()

async def create_tables() -> None:
    """Create the catalog tables if they do not exist yet."""
    # Register every model on Base.metadata before creating
    from relay_bundle.db import models  # noqa: F401

    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    logger.info(f"Catalog tables ready: {', '.join(sorted(Base.metadata.tables))}")

async def get_db():
    """Yield a session per GraphQL request, closed once the response is sent."""
    session = AsyncSessionLocal()
    try:
        yield session
    finally:
        await session.close()
