from datetime import datetime, timezone
from typing import Optional
from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

from .config import Settings

Base = declarative_base()


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to the naive datetimes SQLite hands back."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Database:
    """Owns the engine and session factory for one application instance."""

    def __init__(self, settings: Settings):
        # Supabase/Neon PostgreSQL behind PgBouncer needs statement_cache_size=0
        # SQLite doesn't support these parameters or pool sizing
        engine_kwargs = {}
        if "postgresql" in settings.database_url:
            engine_kwargs = {
                "connect_args": {
                    "statement_cache_size": 0,
                    "prepared_statement_cache_size": 0,
                },
                "pool_pre_ping": True,  # Verify connections before use
                "pool_recycle": 300,    # Recycle connections every 5 minutes
                "pool_size": 10,
                "max_overflow": 20,
            }

        self.engine: AsyncEngine = create_async_engine(
            settings.database_url,
            echo=settings.debug,
            **engine_kwargs,
        )
        self.session_maker = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)

    async def init_db(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self):
        await self.engine.dispose()


async def get_db(request: Request):
    async with request.app.state.db.session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
