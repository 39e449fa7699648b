import json

import httpx

from careercard.deps import get_http_client
from conftest import sample_card, signup

CARD_REPLY = {
    "profile": {"name": "Ada Lovelace", "title": "Engineer", "location": "", "imageUrl": "", "portfolioUrl": ""},
    "experience": [{"title": "Engineer", "company": "Acme", "period": "2020 - 2021", "description": ""}],
    "projects": [],
    "frameworks": [],
    "codeShowcase": [],
    "pastimes": [],
    "stylesOfWork": [],
    "greatestImpacts": [],
}

SCORE_REQUEST = {
    "companyDescription": "A payments company in London",
    "roleDescription": "Backend engineer for the ledger team",
}


def test_ai_routes_require_auth(client):
    response = client.post("/api/ai/parse-resume", json={"resumeText": "anything"})
    assert response.status_code == 401


def test_parse_resume_returns_model_json(auth_client, fake_ai):
    fake_ai.reply = json.dumps(CARD_REPLY)
    response = auth_client.post("/api/ai/parse-resume", json={"resumeText": "Engineer at Acme, 2020 - 2021"})

    assert response.status_code == 200
    assert response.json() == CARD_REPLY
    _, parts = fake_ai.calls[0]
    assert "Engineer at Acme" in parts[0].text


def test_parse_resume_strips_markdown_fences(auth_client, fake_ai):
    fake_ai.reply = "```json\n" + json.dumps(CARD_REPLY) + "\n```"
    response = auth_client.post("/api/ai/parse-resume", json={"resumeText": "Engineer at Acme"})
    assert response.status_code == 200
    assert response.json()["profile"]["name"] == "Ada Lovelace"


def test_parse_resume_needs_exactly_one_input(auth_client, fake_ai):
    neither = auth_client.post("/api/ai/parse-resume", json={})
    both = auth_client.post("/api/ai/parse-resume", json={
        "resumeText": "Engineer at Acme",
        "imageData": "data:image/png;base64,aGVsbG8=",
    })
    assert neither.status_code == both.status_code == 400
    assert fake_ai.calls == []


def test_parse_resume_image(auth_client, fake_ai):
    fake_ai.reply = json.dumps(CARD_REPLY)
    response = auth_client.post("/api/ai/parse-resume", json={"imageData": "data:image/png;base64,aGVsbG8="})

    assert response.status_code == 200
    _, parts = fake_ai.calls[0]
    assert parts[0].inline_data.mime_type == "image/png"
    assert parts[0].inline_data.data == b"hello"


def test_parse_resume_rejects_bad_image_data(auth_client, fake_ai):
    response = auth_client.post("/api/ai/parse-resume", json={"imageData": "not a data url"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid image data format"}
    assert fake_ai.calls == []


def test_malformed_model_reply_is_500(auth_client, fake_ai):
    fake_ai.reply = "Sure! Here is your resume: {"
    response = auth_client.post("/api/ai/parse-resume", json={"resumeText": "Engineer at Acme"})

    assert response.status_code == 500
    assert response.json()["error"].startswith("AI response was not valid JSON")


def test_non_object_reply_is_500(auth_client, fake_ai):
    fake_ai.reply = "[1, 2, 3]"
    response = auth_client.post("/api/ai/parse-resume", json={"resumeText": "Engineer at Acme"})
    assert response.status_code == 500
    assert response.json() == {"error": "AI response was not a JSON object"}


def test_missing_api_key_is_reported(client, app):
    app.dependency_overrides.clear()
    signup(client)

    response = client.post("/api/ai/parse-resume", json={"resumeText": "Engineer at Acme"})
    assert response.status_code == 500
    assert response.json() == {"error": "GEMINI_API_KEY is not configured"}


def test_parse_resume_experience(auth_client, fake_ai):
    short = auth_client.post("/api/ai/parse-resume-experience", json={"resumeText": "too short"})
    assert short.status_code == 400

    fake_ai.reply = json.dumps({"experiences": [{"title": "Engineer"}], "projects": []})
    response = auth_client.post("/api/ai/parse-resume-experience", json={
        "resumeText": "Engineer at Acme from 2020 to 2021, built billing systems",
    })
    assert response.status_code == 200
    assert response.json()["experiences"] == [{"title": "Engineer"}]

    fake_ai.reply = json.dumps({"experiences": "none"})
    wrong_shape = auth_client.post("/api/ai/parse-resume-experience", json={
        "resumeText": "Engineer at Acme from 2020 to 2021, built billing systems",
    })
    assert wrong_shape.status_code == 500


def test_score_career_card(auth_client, fake_ai):
    score = {
        "overallScore": 82,
        "categoryScores": {"technicalSkills": {"score": 90, "feedback": "Strong Python"}},
        "strengths": ["Payments experience"],
        "improvements": ["Add metrics"],
        "overallFeedback": "Good fit",
    }
    fake_ai.reply = json.dumps(score)

    response = auth_client.post("/api/ai/score-career-card", json={"careerCardData": sample_card(), **SCORE_REQUEST})
    assert response.status_code == 200
    assert response.json() == score

    _, parts = fake_ai.calls[0]
    assert "Acme Corp" in parts[0].text


def test_score_requires_numeric_overall_score(auth_client, fake_ai):
    fake_ai.reply = json.dumps({"overallScore": "high"})
    response = auth_client.post("/api/ai/score-career-card", json={"careerCardData": sample_card(), **SCORE_REQUEST})
    assert response.status_code == 500
    assert "overallScore" in response.json()["error"]


def test_score_validates_card_and_descriptions(auth_client, fake_ai):
    bad_card = sample_card(experience=[{"title": "x"}] * 21)
    response = auth_client.post("/api/ai/score-career-card", json={"careerCardData": bad_card, **SCORE_REQUEST})
    assert response.status_code == 400

    response = auth_client.post("/api/ai/score-career-card", json={
        "careerCardData": sample_card(),
        "companyDescription": "short",
        "roleDescription": "Backend engineer for the ledger team",
    })
    assert response.status_code == 400
    assert fake_ai.calls == []


def test_parse_portfolio(app, auth_client, fake_ai):
    def handler(request):
        if request.url.host == "portfolio.example.com":
            return httpx.Response(200, text="<html><script>x()</script><body><h1>Ada</h1> builds things</body></html>")
        return httpx.Response(404)

    app.dependency_overrides[get_http_client] = lambda: httpx.AsyncClient(transport=httpx.MockTransport(handler))
    fake_ai.reply = json.dumps({"profile": {"name": "Ada"}, "projects": [], "frameworks": []})

    response = auth_client.post("/api/ai/parse-portfolio", json={"portfolioUrl": "https://portfolio.example.com"})
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"profile": {"name": "Ada"}, "projects": [], "frameworks": []}, "codeFiles": []}

    _, parts = fake_ai.calls[0]
    assert "Ada builds things" in parts[0].text
    assert "x()" not in parts[0].text


def test_parse_portfolio_page_failure_is_502(app, auth_client, fake_ai):
    app.dependency_overrides[get_http_client] = lambda: httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(503))
    )
    response = auth_client.post("/api/ai/parse-portfolio", json={"portfolioUrl": "https://portfolio.example.com"})
    assert response.status_code == 502
    assert response.json() == {"error": "Unable to fetch portfolio: 503"}
    assert fake_ai.calls == []


def test_parse_portfolio_requires_http_url(auth_client):
    response = auth_client.post("/api/ai/parse-portfolio", json={"portfolioUrl": "javascript:alert(1)"})
    assert response.status_code == 400
