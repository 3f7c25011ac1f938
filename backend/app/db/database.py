from collections.abc import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings

# Pool configuration for serverless databases (Supabase/NeonDB)
DB_POOL_SIZE = 5
MAX_OVERFLOW = 10
POOL_RECYCLE = 300  # Recycle connections after 5 minutes
POOL_PRE_PING = True  # Check connection health before using


def build_engine(url: str) -> AsyncEngine:
    """Create an async engine; pooling options only apply to server databases."""
    if make_url(url).get_backend_name() == "sqlite":
        return create_async_engine(url, echo=False)
    return create_async_engine(
        url,
        echo=False,
        poolclass=AsyncAdaptedQueuePool,
        pool_size=DB_POOL_SIZE,
        max_overflow=MAX_OVERFLOW,
        pool_recycle=POOL_RECYCLE,
        pool_pre_ping=POOL_PRE_PING,
    )


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )


engine = build_engine(str(settings.ASYNC_DATABASE_URI))
AsyncSessionLocal = build_sessionmaker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields an async DB session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
