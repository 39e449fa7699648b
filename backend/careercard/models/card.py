"""
Career card model - one row per card, the payload lives in a JSON column.
"""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from ..database import Base


class CareerCard(Base):
    __tablename__ = "career_cards"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    card_data = Column(JSON, nullable=False)

    # Legacy secret from token-based editing; issued but no longer checked
    edit_token = Column(String(64), nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)

    owner = relationship("User", back_populates="cards")
