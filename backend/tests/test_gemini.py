import asyncio
from types import SimpleNamespace

import httpx

from careercard.services.gemini import GeminiClient, parse_ai_json, text_part


def _client_raising(exc):
    async def generate_content(**kwargs):
        raise exc

    client = GeminiClient("", "gemini-2.0-flash")
    client._client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content)))
    return client


def test_transport_timeout_becomes_failed_result():
    client = _client_raising(httpx.ReadTimeout("timed out"))

    result = asyncio.run(client.generate_json("Return JSON", [text_part("hello")]))

    assert result.ok is False
    assert result.error.startswith("Gemini request failed: ReadTimeout")


def test_connection_error_becomes_failed_result():
    client = _client_raising(httpx.ConnectError("connection refused"))

    result = asyncio.run(client.generate_json("Return JSON", [text_part("hello")]))

    assert result.ok is False
    assert "ConnectError" in result.error


def test_unconfigured_client_fails_without_calling_out():
    result = asyncio.run(GeminiClient("", "gemini-2.0-flash").generate_json("Return JSON", []))
    assert result.error == "GEMINI_API_KEY is not configured"


def test_fenced_json_is_parsed():
    result = parse_ai_json('```json\n{"overallScore": 80}\n```')
    assert result.ok
    assert result.data == {"overallScore": 80}


def test_non_object_json_is_rejected():
    assert parse_ai_json("[1, 2]").error == "AI response was not a JSON object"
    assert parse_ai_json("").error == "Unable to parse AI response payload"
