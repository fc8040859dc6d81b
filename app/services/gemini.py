"""Async REST client for the Google Gemini / Imagen endpoints."""

import base64
import binascii
import logging
from typing import Any, Dict, List, NamedTuple, Optional

import httpx

from app.config import Settings
from app.services.errors import BackendError

logger = logging.getLogger(__name__)


class GeneratedImage(NamedTuple):
    data: bytes
    mime_type: str


def _error_message(response: httpx.Response) -> str:
    """Return the backend's own error message, falling back to the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return f"HTTP {response.status_code} {response.reason_phrase}".strip()


class GeminiClient:
    """Thin wrapper around ``generateContent`` and Imagen ``predict``.

    The client performs exactly one HTTP request per call and never retries.
    Every transport or HTTP failure is raised as :class:`BackendError`
    carrying the backend's message.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.gemini_api_key
        self.base_url = settings.gemini_base_url.rstrip("/")
        self.text_model = settings.text_model
        self.image_model = settings.image_model
        self.timeout = settings.request_timeout
        self._transport = transport

    def _require_api_key(self) -> None:
        if not self.api_key:
            raise BackendError("GEMINI_API_KEY is not configured.", status_code=401)

    async def _post(self, model: str, method: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        self._require_api_key()
        url = f"{self.base_url}/models/{model}:{method}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    url,
                    json=payload,
                    headers={"x-goog-api-key": self.api_key},
                )
        except httpx.TimeoutException as exc:
            logger.error("Gemini request timed out: %s %s", model, method)
            raise BackendError("The generation backend timed out.", timed_out=True) from exc
        except httpx.RequestError as exc:
            logger.error("Gemini request failed: %s %s – %s", model, method, exc)
            raise BackendError(str(exc) or exc.__class__.__name__) from exc

        if response.is_error:
            message = _error_message(response)
            logger.error(
                "Gemini returned an error",
                extra={"model": model, "status": response.status_code, "detail": message},
            )
            raise BackendError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise BackendError("The generation backend returned a non-JSON body.") from exc

    async def generate_content(
        self,
        prompt: str,
        generation_config: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Send *prompt* to the text model and return the concatenated candidate text.

        Returns an empty string when the backend produced no candidate text.
        """
        payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        if generation_config:
            payload["generationConfig"] = generation_config

        body = await self._post(self.text_model, "generateContent", payload)

        candidates = body.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)

    async def generate_images(
        self,
        prompt: str,
        aspect_ratio: str,
        number_of_images: int = 1,
        mime_type: str = "image/jpeg",
    ) -> List[GeneratedImage]:
        """Ask the image model for *number_of_images* renders of *prompt*."""
        payload = {
            "instances": [{"prompt": prompt}],
            "parameters": {
                "sampleCount": number_of_images,
                "aspectRatio": aspect_ratio,
                "outputOptions": {"mimeType": mime_type},
            },
        }

        body = await self._post(self.image_model, "predict", payload)

        images: List[GeneratedImage] = []
        for prediction in body.get("predictions") or []:
            encoded = prediction.get("bytesBase64Encoded")
            if not encoded:
                continue
            try:
                data = base64.b64decode(encoded, validate=True)
            except (binascii.Error, ValueError):
                logger.warning("Skipping prediction with undecodable image bytes")
                continue
            images.append(GeneratedImage(data, prediction.get("mimeType") or mime_type))
        return images
