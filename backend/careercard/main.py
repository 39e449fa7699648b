import logging
from contextlib import asynccontextmanager
from typing import Optional
import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .config import Settings, get_settings
from .database import Database
from .errors import register_exception_handlers
from .routers import auth_router, cards_router, ai_router, resume_router
from .services.gemini import GeminiClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings: Settings = app.state.settings
    app.state.db = Database(settings)
    await app.state.db.init_db()
    app.state.ai_client = GeminiClient.from_settings(settings)
    app.state.http_client = httpx.AsyncClient(
        timeout=settings.portfolio_fetch_timeout,
        headers={"User-Agent": f"{settings.app_name}/1.0"},
    )
    logger.info("%s started (%s)", settings.app_name, settings.environment)
    yield
    # Shutdown
    await app.state.http_client.aclose()
    await app.state.db.dispose()
    logger.info("%s stopped", settings.app_name)


class NoCacheMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        # API responses carry per-user data
        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
        return response


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Career Card API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,  # Disable docs in production
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings

    # CORS middleware - uses origins from environment variable
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(NoCacheMiddleware)

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(cards_router)
    app.include_router(ai_router)
    app.include_router(resume_router)

    @app.get("/")
    async def root():
        return {"message": settings.app_name, "status": "running", "version": "1.0.0"}

    @app.get("/health")
    async def health_check():
        """Health check endpoint for load balancer"""
        return {"status": "healthy"}

    return app


app = create_app()
