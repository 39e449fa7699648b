"""
Script to delete expired login sessions
Run with: python purge_expired_sessions.py
"""
import asyncio
from datetime import datetime, timezone
from sqlalchemy import delete, func, select

from careercard.config import get_settings
from careercard.database import Database
from careercard.models import UserSession


async def purge_expired_sessions():
    settings = get_settings()
    db = Database(settings)
    await db.init_db()

    async with db.session_maker() as session:
        result = await session.execute(
            delete(UserSession).where(UserSession.expires_at < datetime.now(timezone.utc))
        )
        await session.commit()
        print(f"✅ Deleted {result.rowcount} expired sessions")

        # Verify
        remaining = await session.execute(select(func.count()).select_from(UserSession))
        print(f"📊 Remaining sessions: {remaining.scalar()}")

    await db.dispose()


if __name__ == "__main__":
    asyncio.run(purge_expired_sessions())
