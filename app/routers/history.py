import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_history, get_workspace
from app.models.article import Article
from app.models.status import ClearHistoryResponse, HistoryEntry
from app.services.history import HistoryStore
from app.services.workspace import Workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/history", tags=["History"])


@router.get("", response_model=List[HistoryEntry], summary="List generated articles, newest first")
async def list_history(history: HistoryStore = Depends(get_history)) -> List[HistoryEntry]:
    return [
        HistoryEntry(id=a.id, seo_title=a.seo_title, created_at=a.created_at)
        for a in history.list()
    ]


@router.get("/{article_id}", response_model=Article, summary="Fetch one article from history")
async def get_article(article_id: str, history: HistoryStore = Depends(get_history)) -> Article:
    return _require(history, article_id)


@router.post(
    "/{article_id}/select",
    response_model=Article,
    summary="Make a history article the active article",
)
async def select_article(
    article_id: str,
    history: HistoryStore = Depends(get_history),
    workspace: Workspace = Depends(get_workspace),
) -> Article:
    article = _require(history, article_id)
    workspace.set_article(article)
    return article


@router.delete(
    "/{article_id}",
    status_code=204,
    summary="Delete one article (no-op when the id is unknown)",
)
async def delete_article(article_id: str, history: HistoryStore = Depends(get_history)) -> None:
    removed = history.delete(article_id)
    logger.info("History delete", extra={"article_id": article_id, "removed": removed})


@router.delete("", response_model=ClearHistoryResponse, summary="Clear the whole history")
async def clear_history(history: HistoryStore = Depends(get_history)) -> ClearHistoryResponse:
    removed = history.clear()
    logger.info("History cleared", extra={"removed": removed})
    return ClearHistoryResponse(removed=removed)


def _require(history: HistoryStore, article_id: str) -> Article:
    article = history.get(article_id)
    if article is None:
        raise HTTPException(status_code=404, detail=f"Article '{article_id}' not found in history.")
    return article
