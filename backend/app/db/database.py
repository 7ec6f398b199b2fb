"""Database configuration and session management for async SQLAlchemy."""
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from app.core.config import settings

# Single shared engine for the application
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    future=True,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a database session."""
    async with async_session_maker() as session:
        yield session


async def check_db_connection(session: AsyncSession) -> bool:
    """Return True if a simple query succeeds, else False."""
    try:
        await session.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
