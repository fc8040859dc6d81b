"""Tests for the /articles endpoints, /status and /options.

The Gemini client is patched at class level so every request runs without
network access.
"""

import json
from unittest.mock import AsyncMock, patch

from app.services.errors import BackendError
from app.services.gemini import GeminiClient

_REQUEST = {"topic": "remote work", "wordCount": "500", "language": "English", "tone": "Professional"}


def _backend_returns(text: str):
    return patch.object(GeminiClient, "generate_content", new=AsyncMock(return_value=text))


class TestGenerateArticle:
    def test_success_returns_full_article(self, client, article_payload):
        with _backend_returns(json.dumps(article_payload())):
            resp = client.post("/articles", json=_REQUEST)

        assert resp.status_code == 201
        data = resp.json()
        for field in (
            "id", "createdAt", "seoTitle", "metaDescription", "focusKeyword",
            "permalinkSuggestion", "tags", "blogOutline", "fullArticle",
            "featuredImagePrompt", "faq",
        ):
            assert field in data, f"Missing field: {field}"
        assert 5 <= len(data["tags"]) <= 7
        assert 3 <= len(data["faq"]) <= 5
        assert all(item["question"] and item["answer"] for item in data["faq"])

    def test_success_is_stored_and_made_active(self, client, api, article_payload):
        with _backend_returns(json.dumps(article_payload())):
            article_id = client.post("/articles", json=_REQUEST).json()["id"]

        assert len(api.state.history) == 1
        assert client.get("/articles/current").json()["id"] == article_id
        assert client.get("/status").json()["activeArticleId"] == article_id

    def test_invalid_json_returns_502_with_retry_message(self, client, api):
        with _backend_returns("Sure! Here is your article..."):
            resp = client.post("/articles", json=_REQUEST)

        assert resp.status_code == 502
        assert "invalid response format" in resp.json()["detail"]
        assert len(api.state.history) == 0

    def test_empty_backend_text_returns_502(self, client):
        with _backend_returns(""):
            resp = client.post("/articles", json=_REQUEST)
        assert resp.status_code == 502
        assert "no content" in resp.json()["detail"]

    def test_backend_error_message_surfaced(self, client):
        with patch.object(
            GeminiClient,
            "generate_content",
            new=AsyncMock(side_effect=BackendError("API key not valid.", status_code=400)),
        ):
            resp = client.post("/articles", json=_REQUEST)

        assert resp.status_code == 502
        assert resp.json()["detail"] == "Failed to generate article: API key not valid."

    def test_backend_timeout_returns_504(self, client):
        with patch.object(
            GeminiClient,
            "generate_content",
            new=AsyncMock(side_effect=BackendError("timed out", timed_out=True)),
        ):
            resp = client.post("/articles", json=_REQUEST)
        assert resp.status_code == 504

    def test_in_progress_returns_409(self, client, api, article_payload):
        api.state.workspace.begin("article")
        with _backend_returns(json.dumps(article_payload())) as mocked:
            resp = client.post("/articles", json=_REQUEST)

        assert resp.status_code == 409
        mocked.assert_not_awaited()

    def test_flag_released_after_failure(self, client):
        with _backend_returns("not json"):
            client.post("/articles", json=_REQUEST)
        assert client.get("/status").json()["inProgress"] == {"article": False, "image": False}


class TestGenerationRequestValidation:
    def test_empty_topic_rejected(self, client):
        assert client.post("/articles", json={**_REQUEST, "topic": "   "}).status_code == 422

    def test_unknown_language_rejected(self, client):
        assert client.post("/articles", json={**_REQUEST, "language": "French"}).status_code == 422

    def test_unknown_tone_rejected(self, client):
        assert client.post("/articles", json={**_REQUEST, "tone": "Sarcastic"}).status_code == 422

    def test_custom_requires_value(self, client):
        assert client.post("/articles", json={**_REQUEST, "wordCount": "custom"}).status_code == 422

    def test_non_positive_word_count_rejected(self, client):
        assert client.post("/articles", json={**_REQUEST, "wordCount": "0"}).status_code == 422

    def test_custom_word_count_reaches_prompt(self, client, article_payload):
        with _backend_returns(json.dumps(article_payload())) as mocked:
            resp = client.post(
                "/articles",
                json={**_REQUEST, "wordCount": "custom", "customWordCount": 750},
            )

        assert resp.status_code == 201
        prompt = mocked.call_args.args[0]
        assert "Approximately 750 words" in prompt


class TestActiveArticle:
    def test_no_article_yet(self, client):
        assert client.get("/articles/current").status_code == 404

    def test_copy_field_and_acknowledgement(self, client, article_payload):
        with _backend_returns(json.dumps(article_payload())):
            client.post("/articles", json=_REQUEST)

        resp = client.get("/articles/current/copy/tags")
        assert resp.status_code == 200
        body = resp.json()
        assert body["copied"] is True
        assert body["text"].startswith("remote work, productivity")
        assert "tags" in client.get("/status").json()["copied"]

    def test_copy_unknown_field(self, client, article_payload):
        with _backend_returns(json.dumps(article_payload())):
            client.post("/articles", json=_REQUEST)
        assert client.get("/articles/current/copy/nonsense").status_code == 404

    def test_markdown_download(self, client, article_payload):
        with _backend_returns(json.dumps(article_payload())):
            client.post("/articles", json=_REQUEST)

        resp = client.get("/articles/current/markdown")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/markdown")
        assert 'filename="remote-work-practical-guide.md"' in resp.headers["content-disposition"]
        assert resp.text.startswith("---\n")


class TestMiscEndpoints:
    def test_health(self, client):
        assert client.get("/").status_code == 200

    def test_options(self, client):
        data = client.get("/options").json()
        assert [o["value"] for o in data["word_counts"]][-1] == "custom"
        assert {o["value"] for o in data["aspect_ratios"]} == {"1:1", "16:9", "9:16", "4:3", "3:4"}
        assert {o["value"] for o in data["languages"]} == {"English", "Hindi", "Hindi-English Mix"}
        assert len(data["tones"]) == 5
