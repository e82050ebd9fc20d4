# /tests/conftest.py

import os

# Settings are read once at import time, so the environment must be fixed
# before anything under `app` is imported.
os.environ.pop("DATABASE_URL", None)
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["ENCRYPTION_KEY"] = "test-encryption-key"

import json
import pytest
from fastapi.testclient import TestClient

from app.db import database
from app.main import app
from app.services import gemini_service
from app.services.database_service import DatabaseService


SAMPLE_CONTENT = {
    "content": "Tokyo on $30 a day? Here's the route nobody tells you about.",
    "captions": ["Caption one", "Caption two", "Caption three"],
    "hashtags": ["#japan", "#budgettravel", "#viral"],
    "cta": "Save this before it disappears!",
    "alt_version": "A calmer take on budget Tokyo.",
    "keywords": ["tokyo budget", "solo travel japan"],
    "visual_guide": "Neon night shots, fast cuts on the beat.",
    "tone_used": "modern viral fomo",
}


@pytest.fixture
def sample_content():
    """A fresh copy of a well-formed GeneratedContent payload."""
    return json.loads(json.dumps(SAMPLE_CONTENT))


@pytest.fixture
def storage(tmp_path):
    """
    Points the app at a disposable SQLite file for one test, then turns
    storage back off so other tests see the unconfigured default.
    """
    database.configure(f"sqlite:///{tmp_path / 'content_studio.db'}")
    database.init_db()
    yield
    database.configure(None)


@pytest.fixture
def db_service(storage):
    session = database.SessionLocal()
    try:
        yield DatabaseService(session)
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


class FakeGeminiResponse:
    def __init__(self, text):
        self._text = text

    @property
    def text(self):
        # Mirrors the SDK: accessing .text on a candidate without parts raises ValueError.
        if self._text is None:
            raise ValueError("The response has no parts.")
        return self._text


class FakeGemini:
    """Stands in for google.generativeai's configure() and GenerativeModel."""

    def __init__(self):
        self.reply = json.dumps(SAMPLE_CONTENT)
        self.error = None
        self.configured_keys = []
        self.calls = []

    def configure(self, api_key=None, **kwargs):
        self.configured_keys.append(api_key)

    def model_factory(self):
        fake = self

        class _Model:
            def __init__(self, model_name, system_instruction=None, **kwargs):
                self.model_name = model_name
                self.system_instruction = system_instruction

            async def generate_content_async(self, contents, generation_config=None, **kwargs):
                fake.calls.append({
                    "model": self.model_name,
                    "system_instruction": self.system_instruction,
                    "contents": contents,
                    "generation_config": generation_config,
                })
                if fake.error is not None:
                    raise fake.error
                return FakeGeminiResponse(fake.reply)

        return _Model


@pytest.fixture
def fake_gemini(monkeypatch):
    fake = FakeGemini()
    monkeypatch.setattr(gemini_service.genai, "configure", fake.configure)
    monkeypatch.setattr(gemini_service.genai, "GenerativeModel", fake.model_factory())
    return fake


def sign_up(client, email="creator@example.com", password="secret-pass", fullname="Casey Creator", apikey="AIza-test-key"):
    """Registers a user through the API and returns (response_json, auth_headers)."""
    response = client.post("/api/auth/sign-up", json={
        "email": email,
        "password": password,
        "fullname": fullname,
        "apikey": apikey,
    })
    assert response.status_code == 201, response.text
    body = response.json()
    headers = {"Authorization": f"Bearer {body['session']['access_token']}"}
    return body, headers


@pytest.fixture
def register(client):
    """`register(**overrides)` signs a user up through the API."""
    def _register(**overrides):
        return sign_up(client, **overrides)
    return _register
