"""Article generation contract: one request in, one validated article out.

Two response strategies sit behind the same contract:

``SchemaFirstStrategy``
    Asks the backend for ``application/json`` constrained by
    :data:`~app.services.prompts.ARTICLE_RESPONSE_SCHEMA`.  Preferred whenever
    the backend supports structured output.

``TextFirstStrategy``
    Compatibility path for backends without structured output.  The free-text
    answer is trimmed and stripped of a wrapping markdown code fence before it
    is parsed.

Whatever the strategy, the caller either receives a complete
:class:`~app.models.article.ArticleContent` or one of
:class:`InvalidResponseFormatError`, :class:`BackendError` or
:class:`EmptyResultError`.  Nothing is ever retried.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pydantic import ValidationError

from app.models.article import ArticleContent
from app.models.generation_request import GenerationRequest
from app.services.errors import BackendError, EmptyResultError, InvalidResponseFormatError
from app.services.gemini import GeminiClient
from app.services.normalizer import slugify
from app.services.prompts import ARTICLE_RESPONSE_SCHEMA, build_article_prompt

logger = logging.getLogger(__name__)

INVALID_FORMAT_MESSAGE = (
    "Failed to generate article: The AI returned an invalid response format. Please try again."
)
EMPTY_RESULT_MESSAGE = "Failed to generate article: The AI returned no content."

# Opening fence with an optional info string, e.g. ```json
_OPEN_FENCE_RE = re.compile(r"^```[A-Za-z0-9_+-]*")


def strip_code_fence(text: str) -> str:
    """Trim *text* and remove one wrapping markdown code fence, if present.

    Text that carries no fence is returned trimmed but otherwise unchanged.
    """
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _OPEN_FENCE_RE.sub("", cleaned, count=1)
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3]
        cleaned = cleaned.strip()
    return cleaned


def parse_article_payload(text: str) -> ArticleContent:
    """Parse *text* as JSON and validate it against the article shape.

    Raises:
        InvalidResponseFormatError: on malformed JSON or a payload that is not a
            complete article (missing fields, wrong types, counts out of range).
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Backend returned malformed JSON: %s", exc)
        raise InvalidResponseFormatError(INVALID_FORMAT_MESSAGE) from exc

    if not isinstance(data, dict):
        logger.warning("Backend returned JSON %s instead of an object", type(data).__name__)
        raise InvalidResponseFormatError(INVALID_FORMAT_MESSAGE)

    try:
        content = ArticleContent.model_validate(data)
    except ValidationError as exc:
        logger.warning("Backend payload failed validation: %d error(s)", exc.error_count())
        raise InvalidResponseFormatError(INVALID_FORMAT_MESSAGE) from exc

    slug = slugify(content.permalink_suggestion, fallback=slugify(content.seo_title))
    return content.model_copy(update={"permalink_suggestion": slug})


class ResponseStrategy(ABC):
    """How the backend is asked for JSON and how its answer is unwrapped."""

    name: str

    @abstractmethod
    def generation_config(self) -> Optional[Dict[str, Any]]:
        """Extra ``generationConfig`` sent with the request, if any."""

    @abstractmethod
    def extract_json(self, text: str) -> str:
        """Return the JSON document contained in the backend's *text*."""


class SchemaFirstStrategy(ResponseStrategy):
    name = "schema"

    def generation_config(self) -> Optional[Dict[str, Any]]:
        return {
            "responseMimeType": "application/json",
            "responseSchema": ARTICLE_RESPONSE_SCHEMA,
        }

    def extract_json(self, text: str) -> str:
        return text.strip()


class TextFirstStrategy(ResponseStrategy):
    name = "text"

    def generation_config(self) -> Optional[Dict[str, Any]]:
        return None

    def extract_json(self, text: str) -> str:
        return strip_code_fence(text)


def strategy_for(mode: str) -> ResponseStrategy:
    """Return the strategy configured by ``RESPONSE_MODE``."""
    if mode == "schema":
        return SchemaFirstStrategy()
    if mode == "text":
        return TextFirstStrategy()
    raise ValueError(f"Unknown response mode '{mode}'. Use 'schema' or 'text'.")


class ArticleGenerator:
    def __init__(self, client: GeminiClient, strategy: ResponseStrategy):
        self.client = client
        self.strategy = strategy

    async def generate(self, request: GenerationRequest) -> ArticleContent:
        """Issue a single generation call for *request* and return the parsed article."""
        prompt = build_article_prompt(request)
        logger.info(
            "Requesting article",
            extra={
                "topic": request.topic,
                "word_count": request.target_word_count,
                "language": request.language,
                "tone": request.tone,
                "strategy": self.strategy.name,
            },
        )

        try:
            text = await self.client.generate_content(prompt, self.strategy.generation_config())
        except BackendError as exc:
            raise BackendError(
                f"Failed to generate article: {exc}",
                status_code=exc.status_code,
                timed_out=exc.timed_out,
            ) from exc

        if not text.strip():
            logger.warning("Backend returned an empty article for topic %r", request.topic)
            raise EmptyResultError(EMPTY_RESULT_MESSAGE)

        return parse_article_payload(self.strategy.extract_json(text))
