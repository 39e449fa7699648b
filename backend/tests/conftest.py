import pytest
from fastapi.testclient import TestClient

from careercard.config import Settings
from careercard.deps import get_ai_client
from careercard.main import create_app
from careercard.services.gemini import parse_ai_json


class FakeAIClient:
    """Stands in for GeminiClient; replies with canned model text."""

    def __init__(self):
        self.reply = "{}"
        self.calls = []

    async def generate_json(self, system_instruction, parts):
        self.calls.append((system_instruction, parts))
        return parse_ai_json(self.reply)


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "test.db"


@pytest.fixture
def settings(db_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{db_path}",
        gemini_api_key="",
        environment="development",
        debug=False,
        log_level="WARNING",
    )


@pytest.fixture
def fake_ai():
    return FakeAIClient()


@pytest.fixture
def app(settings, fake_ai):
    app = create_app(settings)
    app.dependency_overrides[get_ai_client] = lambda: fake_ai
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


def signup(client, email="ada@example.com", password="correct-horse", first_name="Ada", last_name="Lovelace"):
    response = client.post("/api/auth/signup", json={
        "email": email,
        "password": password,
        "firstName": first_name,
        "lastName": last_name,
    })
    assert response.status_code == 201, response.text
    return response


def login(client, email="ada@example.com", password="correct-horse"):
    """Switch the client's cookie jar to a fresh session for the given account."""
    client.cookies.clear()
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response


@pytest.fixture
def auth_client(client):
    signup(client)
    return client


def sample_card(**overrides):
    card = {
        "profile": {
            "name": "Ada Lovelace",
            "title": "Engineer",
            "location": "London",
            "imageUrl": "",
            "portfolioUrl": "https://example.com",
        },
        "theme": "blue",
        "experience": [
            {
                "title": "Senior Engineer",
                "company": "Acme Corp",
                "period": "Jan 2020 - Present",
                "description": "Led the payments squad.",
            }
        ],
        "projects": [],
        "greatestImpacts": [],
        "stylesOfWork": [],
        "frameworks": [{"name": "Python", "proficiency": "Expert"}],
        "pastimes": [],
        "codeShowcase": [],
    }
    card.update(overrides)
    return card
