"""
Database Connection and Session Management
Using SQLAlchemy 2.0 with async support
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.config import settings

# Convert postgresql:// to postgresql+asyncpg://
DATABASE_URL = settings.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://")

# Create async engine
engine = create_async_engine(
    DATABASE_URL,
    echo=settings.DB_ECHO,
    future=True,
)

# Session factory (also used by the reminder sweep outside of requests)
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Base class for models
Base = declarative_base()


# Dependency for FastAPI routes
async def get_db():
    """
    Database session dependency for FastAPI routes.

    Usage:
        @app.get("/clients")
        async def list_clients(db: AsyncSession = Depends(get_db)):
            result = await db.execute(select(Client))
            return result.scalars().all()
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
