from .user import User, UserSession
from .card import CareerCard

__all__ = [
    "User", "UserSession",
    "CareerCard",
]
