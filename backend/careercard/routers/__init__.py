from .auth import router as auth_router
from .cards import router as cards_router
from .ai import router as ai_router
from .resume import router as resume_router

__all__ = ["auth_router", "cards_router", "ai_router", "resume_router"]
