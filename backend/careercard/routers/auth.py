import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings
from ..database import get_db
from ..deps import get_app_settings
from ..models.user import User
from ..schemas.user import (
    SignupRequest, LoginRequest, ProfileUpdateRequest, PasswordUpdateRequest,
    UserEnvelope, UserResponse, SuccessResponse
)
from ..services.auth import (
    authenticate_user,
    clear_session_cookie,
    create_session,
    delete_session,
    get_current_user,
    get_password_hash,
    get_user_by_email,
    set_session_cookie,
    verify_password
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def _user_envelope(user: User) -> UserEnvelope:
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.post("/signup", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    """Create an account and sign it in"""
    email = payload.email.lower()
    if await get_user_by_email(db, email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email is already registered"
        )

    user = User(
        email=email,
        password_hash=get_password_hash(payload.password),
        first_name=payload.first_name,
        last_name=payload.last_name,
        job_title=None,
        location=None,
        bio=None,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same address
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email is already registered"
        )

    token = await create_session(db, user, settings)
    await db.commit()
    set_session_cookie(response, token, settings)

    logger.info("New account %s", user.id)
    return _user_envelope(user)


@router.post("/login", response_model=UserEnvelope)
async def login(
    payload: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    """
    Login with email and password.

    Never says which of the two was wrong. Existing sessions for the user
    stay valid.
    """
    user = await authenticate_user(db, payload.email, payload.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid email or password"
        )

    token = await create_session(db, user, settings)
    await db.commit()
    set_session_cookie(response, token, settings)

    logger.info("User %s logged in", user.id)
    return _user_envelope(user)


@router.post("/logout", response_model=SuccessResponse)
async def logout(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: User = Depends(get_current_user)
):
    await delete_session(db, getattr(request.state, "session_token", None))
    await db.commit()
    clear_session_cookie(response, settings)
    logger.info("User %s logged out", current_user.id)
    return SuccessResponse()


@router.get("/me", response_model=UserEnvelope)
async def me(current_user: User = Depends(get_current_user)):
    return _user_envelope(current_user)


@router.put("/profile", response_model=UserEnvelope)
async def update_profile(
    payload: ProfileUpdateRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update name, job title, location and bio. Blank optional fields are cleared."""
    current_user.first_name = payload.first_name
    current_user.last_name = payload.last_name
    current_user.job_title = payload.job_title or None
    current_user.location = payload.location or None
    current_user.bio = payload.bio or None
    current_user.updated_at = datetime.now(timezone.utc)
    await db.commit()
    return _user_envelope(current_user)


@router.put("/password", response_model=SuccessResponse)
async def update_password(
    payload: PasswordUpdateRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not verify_password(payload.current_password, current_user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect"
        )

    current_user.password_hash = get_password_hash(payload.new_password)
    current_user.updated_at = datetime.now(timezone.utc)
    await db.commit()
    logger.info("User %s changed password", current_user.id)
    return SuccessResponse()
