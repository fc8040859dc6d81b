"""Featured-image generation contract."""

import logging

from app.services.datauri import encode_data_uri
from app.services.errors import BackendError, EmptyResultError
from app.services.gemini import GeminiClient

logger = logging.getLogger(__name__)

NO_IMAGE_MESSAGE = "Failed to generate image: No image was generated by the API."
OUTPUT_MIME_TYPE = "image/jpeg"


class ImageGenerator:
    def __init__(self, client: GeminiClient):
        self.client = client

    async def generate(self, prompt: str, aspect_ratio: str) -> str:
        """Request exactly one image for *prompt* and return it as a JPEG data URI.

        Raises:
            EmptyResultError: the backend answered without any image.
            BackendError: transport or backend failure (message surfaced verbatim).
        """
        logger.info("Requesting featured image", extra={"aspect_ratio": aspect_ratio})
        try:
            images = await self.client.generate_images(
                prompt,
                aspect_ratio,
                number_of_images=1,
                mime_type=OUTPUT_MIME_TYPE,
            )
        except BackendError as exc:
            raise BackendError(
                f"Failed to generate image: {exc}",
                status_code=exc.status_code,
                timed_out=exc.timed_out,
            ) from exc

        if not images:
            logger.warning("Image backend returned no images")
            raise EmptyResultError(NO_IMAGE_MESSAGE)

        return encode_data_uri(images[0].data, OUTPUT_MIME_TYPE)
