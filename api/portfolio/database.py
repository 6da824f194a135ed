"""Connection pool, request sessions and schema migrations."""

import asyncio
from collections.abc import AsyncGenerator
from pathlib import Path

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from alembic.command import upgrade
from alembic.config import Config
from portfolio.config import settings

Base = declarative_base()


class Database:
    """
    Connection pool for the document store.

    Constructed once at process start and shared by every request;
    each request borrows a session from the pool.
    """

    def __init__(self, url: str, *, echo: bool = False):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(
            url,
            echo=echo,
            pool_pre_ping=True,
        )
        self.sessionmaker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    def session(self) -> AsyncSession:
        return self.sessionmaker()

    async def dispose(self) -> None:
        await self.engine.dispose()


def _alembic_config(db_url: str) -> Config:
    api_dir = Path(__file__).resolve().parents[1]
    config = Config(str(api_dir / "alembic.ini"))
    config.set_main_option("script_location", str(api_dir / "alembic"))
    config.set_main_option("sqlalchemy.url", db_url)
    return config


def upgrade_schema(db_url: str, revision: str = "head") -> None:
    """Bring the schema at ``db_url`` up to ``revision``. Blocking."""
    upgrade(_alembic_config(db_url), revision)


async def init_db(db_url: str | None = None) -> None:
    """Apply pending migrations before the pool starts serving requests."""
    # env.py drives its own event loop, so it has to run off this one
    await asyncio.to_thread(upgrade_schema, db_url or settings.database_url)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a session from the application's pool."""
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
