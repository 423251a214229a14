"""
Database Layer - Async SQLAlchemy engine + session factory.

No module-level engine: callers build one from a URL and hand the session
factory to the seeders and the orchestrator.
"""
import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from glasify.config import normalize_database_url

logger = logging.getLogger("glasify-db")


class Base(DeclarativeBase):
    pass


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    url = normalize_database_url(url)
    if url.startswith("sqlite"):
        kwargs = {"echo": echo}
        if ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"):
            # one shared connection, otherwise each checkout sees an empty database
            kwargs.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
        return create_async_engine(url, **kwargs)
    return create_async_engine(
        url,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        pool_timeout=5,
        echo=echo,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine, drop_existing: bool = False) -> None:
    """Create all tables (idempotent)."""
    from glasify.models import orm_models  # noqa: F401
    async with engine.begin() as conn:
        if drop_existing:
            logger.warning("drop_existing=True: dropping all tables")
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized.")

