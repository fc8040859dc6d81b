"""Shared fixtures: an isolated app per test, article payloads and in-memory images."""

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from app.config import Settings
from app.main import create_app


def _article_payload(**overrides) -> dict:
    payload = {
        "seoTitle": "Remote Work: A Practical Guide for Modern Teams",
        "metaDescription": (
            "Learn how remote work boosts productivity, which tools keep teams aligned, "
            "and the habits that make distributed collaboration work every single day."
        ),
        "focusKeyword": "remote work",
        "permalinkSuggestion": "remote-work-practical-guide",
        "tags": ["remote work", "productivity", "collaboration", "work from home", "distributed teams"],
        "blogOutline": "## Introduction\n## Choosing Tools\n### Chat\n### Video\n## Conclusion",
        "fullArticle": "## Introduction\nRemote work has moved from perk to default.\n\n## Conclusion\nStart small.",
        "featuredImagePrompt": "A bright, minimal home office with a laptop and a plant, soft morning light",
        "faq": [
            {"question": "Is remote work productive?", "answer": "Yes, with clear goals."},
            {"question": "Which tools do I need?", "answer": "Chat, video and a shared task board."},
            {"question": "How do teams stay connected?", "answer": "Regular check-ins and async updates."},
        ],
    }
    payload.update(overrides)
    return payload


def _image_bytes(width: int = 400, height: int = 300, color=(255, 255, 255), fmt: str = "JPEG") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def article_payload():
    """Factory for a complete backend article payload (camelCase keys)."""
    return _article_payload


@pytest.fixture
def image_bytes():
    """Factory for an encoded solid-colour image."""
    return _image_bytes


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(gemini_api_key="test-key", history_path=tmp_path / "history.json")


@pytest.fixture
def api(settings):
    return create_app(settings)


@pytest.fixture
def client(api) -> TestClient:
    return TestClient(api)
