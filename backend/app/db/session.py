from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession

from app.core.config import settings


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create the async engine for ``database_url``.

    Pool sizing only applies to server databases; SQLite engines keep the
    dialect's default pool.
    - pool_pre_ping: verify connections before use (MySQL drops idle ones)
    - pool_recycle: recycle after 1 hour, below MySQL's default wait_timeout
    """
    options: dict = {"echo": settings.SQLALCHEMY_ECHO}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_pre_ping=True,
            pool_recycle=3600,
            pool_timeout=30,
        )
    return create_async_engine(database_url, **options)


engine = build_engine(settings.DATABASE_URL)

AsyncSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


async def init_models() -> None:
    """Create missing tables. Used when DB_AUTO_CREATE is set."""
    from app.db.base import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def check_db_connection() -> bool:
    """
    Verify database connectivity. Used by health checks.
    Returns True if connection is successful, False otherwise.
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
