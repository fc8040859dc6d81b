"""FastAPI dependencies resolving the components built by :func:`app.main.create_app`."""

from fastapi import Request

from app.config import Settings
from app.services.generator import ArticleGenerator
from app.services.history import HistoryStore
from app.services.imagery import ImageGenerator
from app.services.workspace import Workspace


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_article_generator(request: Request) -> ArticleGenerator:
    return request.app.state.article_generator


def get_image_generator(request: Request) -> ImageGenerator:
    return request.app.state.image_generator


def get_history(request: Request) -> HistoryStore:
    return request.app.state.history


def get_workspace(request: Request) -> Workspace:
    return request.app.state.workspace
