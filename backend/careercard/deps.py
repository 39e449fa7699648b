"""
Request-scoped access to the objects created in the application lifespan.
"""
import httpx
from fastapi import Request

from .config import Settings
from .services.gemini import GeminiClient


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_ai_client(request: Request) -> GeminiClient:
    return request.app.state.ai_client


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client
