"""
Career card CRUD. Every route is owner-scoped; a user may keep many cards.
"""
import secrets
import uuid
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import as_utc, get_db
from ..models.card import CareerCard
from ..models.user import User
from ..schemas.card import (
    CardWriteRequest, CardCreatedResponse, CardResponse, CardListResponse,
    LatestCardResponse, normalize_stored_card
)
from ..schemas.user import SuccessResponse
from ..services.auth import get_current_user

router = APIRouter(prefix="/api/cards", tags=["Career Cards"])


def _parse_card_id(card_id: str) -> str:
    try:
        return str(uuid.UUID(card_id))
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid card id")


def _card_response(card: CareerCard) -> CardResponse:
    return CardResponse(
        id=card.id,
        card_data=normalize_stored_card(card.card_data),
        created_at=as_utc(card.created_at),
        updated_at=as_utc(card.updated_at),
    )


@router.post("", response_model=CardCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_card(
    payload: CardWriteRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Always inserts a new card for the caller"""
    card = CareerCard(
        user_id=current_user.id,
        card_data=payload.card_data.to_storage(),
        edit_token=secrets.token_hex(16),
    )
    db.add(card)
    await db.commit()

    return CardCreatedResponse(
        id=card.id,
        edit_token=card.edit_token,
        created_at=as_utc(card.created_at),
        updated_at=as_utc(card.updated_at),
    )


@router.get("", response_model=CardListResponse)
async def list_cards(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """All of the caller's cards, most recently updated first"""
    result = await db.execute(
        select(CareerCard)
        .where(CareerCard.user_id == current_user.id)
        .order_by(CareerCard.updated_at.desc())
    )
    return CardListResponse(cards=[_card_response(card) for card in result.scalars().all()])


@router.get("/me", response_model=LatestCardResponse)
async def get_latest_card(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """The caller's most recently updated card, or nulls when there is none"""
    result = await db.execute(
        select(CareerCard)
        .where(CareerCard.user_id == current_user.id)
        .order_by(CareerCard.updated_at.desc())
        .limit(1)
    )
    card = result.scalar_one_or_none()
    if not card:
        return LatestCardResponse()
    return LatestCardResponse(**_card_response(card).model_dump())


@router.get("/{card_id}", response_model=CardResponse)
async def get_card(
    card_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    card_id = _parse_card_id(card_id)
    result = await db.execute(select(CareerCard).where(CareerCard.id == card_id))
    card = result.scalar_one_or_none()

    if not card:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Card not found")
    if card.user_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You do not have access to this card")

    return _card_response(card)


@router.put("/{card_id}", response_model=SuccessResponse)
async def update_card(
    card_id: str,
    payload: CardWriteRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Replace a card's payload. Last write wins.

    Missing and foreign cards both answer 404 so ids of other users cannot be discovered.
    """
    card_id = _parse_card_id(card_id)
    result = await db.execute(
        update(CareerCard)
        .where(CareerCard.id == card_id)
        .where(CareerCard.user_id == current_user.id)
        .values(card_data=payload.card_data.to_storage(), updated_at=datetime.now(timezone.utc))
    )
    if result.rowcount == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Card not found")

    await db.commit()
    return SuccessResponse()
