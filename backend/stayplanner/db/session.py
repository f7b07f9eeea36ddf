# stayplanner/db/session.py
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from stayplanner.core.config import settings  # NOTE: instance import, NOT class


def build_engine(url: str):
    # MySQL drops idle connections; SQLite has nothing to ping
    return create_async_engine(
        url,
        echo=False,
        future=True,
        pool_pre_ping=not url.startswith("sqlite"),
    )


def build_session_factory(bind) -> sessionmaker:
    # Reservations are read back after commit (ids, created_at)
    return sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.DATABASE_URL)
AsyncSessionLocal = build_session_factory(engine)


# FastAPI dependency
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    One session per request. Anything left uncommitted when the handler
    raises (e.g. a half-done booking) is rolled back before release.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
