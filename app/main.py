import logging
import logging.config
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from app.config import Settings, load_settings
from app.dependencies import get_workspace
from app.models.options import (
    ASPECT_RATIO_OPTIONS,
    LANGUAGE_OPTIONS,
    TONE_OPTIONS,
    WORD_COUNT_OPTIONS,
    OptionsResponse,
)
from app.models.status import WorkspaceStatus
from app.routers.articles import router as articles_router
from app.routers.history import router as history_router
from app.routers.images import router as images_router
from app.services.gemini import GeminiClient
from app.services.generator import ArticleGenerator, strategy_for
from app.services.history import HistoryStore
from app.services.imagery import ImageGenerator
from app.services.workspace import Workspace

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                },
            },
            "root": {"level": level, "handlers": ["console"]},
        }
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API with every component wired from *settings*."""
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Inkwell – AI Blog Article Generator API",
        description=(
            "Generates SEO-ready blog articles and featured images with Gemini, "
            "overlays titles on images, and keeps a local history."
        ),
        version="1.0.0",
    )

    client = GeminiClient(settings)
    app.state.settings = settings
    app.state.article_generator = ArticleGenerator(client, strategy_for(settings.response_mode))
    app.state.image_generator = ImageGenerator(client)
    app.state.history = HistoryStore(settings.history_path)
    app.state.workspace = Workspace()

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception for %s", request.url)
        return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})

    app.include_router(articles_router)
    app.include_router(images_router)
    app.include_router(history_router)

    @app.get("/", summary="Health check")
    async def root() -> dict:
        return {"message": "Hello from Inkwell"}

    @app.get("/options", response_model=OptionsResponse, summary="Form select options")
    async def options() -> OptionsResponse:
        return OptionsResponse(
            word_counts=WORD_COUNT_OPTIONS,
            languages=LANGUAGE_OPTIONS,
            tones=TONE_OPTIONS,
            aspect_ratios=ASPECT_RATIO_OPTIONS,
        )

    @app.get("/status", response_model=WorkspaceStatus, summary="In-progress flags and active state")
    async def status(workspace: Workspace = Depends(get_workspace)) -> WorkspaceStatus:
        return workspace.status()

    logger.info(
        "Inkwell configured",
        extra={"text_model": settings.text_model, "response_mode": settings.response_mode},
    )
    return app


app = create_app()
