"""Service configuration loaded from the environment (and an optional ``.env`` file)."""

import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

ResponseMode = Literal["schema", "text"]

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "imagen-4.0-generate-001"


class Settings(BaseModel):
    """Explicit configuration handed to every component at construction time."""

    model_config = ConfigDict(frozen=True)

    gemini_api_key: str = ""
    gemini_base_url: str = DEFAULT_BASE_URL
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    response_mode: ResponseMode = "schema"
    request_timeout: float = Field(default=120.0, gt=0)
    history_path: Path = Path("data/history.json")
    font_path: Optional[Path] = None
    download_prefix: str = "inkwell-ai-image"
    log_level: str = "INFO"


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build :class:`Settings` from environment variables.

    Values from *env_file* (or a ``.env`` in the working directory) are loaded
    first but never override variables that are already set.
    """
    load_dotenv(env_file)

    font_path = os.getenv("FONT_PATH")
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
        gemini_base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL),
        text_model=os.getenv("GEMINI_TEXT_MODEL", DEFAULT_TEXT_MODEL),
        image_model=os.getenv("GEMINI_IMAGE_MODEL", DEFAULT_IMAGE_MODEL),
        response_mode=os.getenv("RESPONSE_MODE", "schema"),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "120")),
        history_path=Path(os.getenv("HISTORY_PATH", "data/history.json")),
        font_path=Path(font_path) if font_path else None,
        download_prefix=os.getenv("DOWNLOAD_PREFIX", "inkwell-ai-image"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
