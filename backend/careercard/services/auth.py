"""
Authentication - password hashing and cookie-backed sessions.

Provides:
- Password hashing with bcrypt (cost factor 10)
- Session creation / lookup / deletion
- The get_current_user FastAPI dependency for protected routes
"""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, HTTPException, Request, Response, status
from passlib.context import CryptContext
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..config import Settings
from ..database import as_utc, get_db
from ..models.user import User, UserSession

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def authenticate_user(db: AsyncSession, email: str, password: str) -> Optional[User]:
    """Return the user for valid credentials; None on any mismatch."""
    user = await get_user_by_email(db, email)
    if not user:
        # Burn the same hashing time as a real check
        pwd_context.dummy_verify()
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


# ============================================================================
# Sessions
# ============================================================================

async def create_session(db: AsyncSession, user: User, settings: Settings) -> str:
    token = secrets.token_urlsafe(32)
    db.add(UserSession(
        user_id=user.id,
        session_token=token,
        expires_at=datetime.now(timezone.utc) + timedelta(days=settings.session_duration_days),
    ))
    await db.flush()
    return token


async def delete_session(db: AsyncSession, token: Optional[str]):
    if not token:
        return
    await db.execute(delete(UserSession).where(UserSession.session_token == token))


async def get_user_for_token(db: AsyncSession, token: str) -> Optional[User]:
    """
    Resolve a session token to its user.

    Unknown tokens and expired sessions both resolve to None; an expired
    row is removed when it is seen.
    """
    if not token:
        return None

    result = await db.execute(
        select(UserSession)
        .options(selectinload(UserSession.user))
        .where(UserSession.session_token == token)
    )
    session = result.scalar_one_or_none()
    if session is None:
        return None

    if as_utc(session.expires_at) <= datetime.now(timezone.utc):
        await db.delete(session)
        await db.commit()
        return None

    return session.user


def set_session_cookie(response: Response, token: str, settings: Settings):
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_duration_days * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings):
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
    )


async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)) -> User:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        async def route(current_user: User = Depends(get_current_user)):
            ...

    The presented token is kept on request.state for logout.
    """
    settings: Settings = request.app.state.settings
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    user = await get_user_for_token(db, token)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid session",
        )

    request.state.session_token = token
    return user
