import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from app.dependencies import get_article_generator, get_history, get_workspace
from app.models.article import Article
from app.models.generation_request import GenerationRequest
from app.models.status import CopyResponse
from app.routers.errors import generation_http_error, workspace_http_error
from app.services.clipboard import COPYABLE_FIELDS, copy_text
from app.services.errors import GenerationError, RequestInProgressError
from app.services.generator import ArticleGenerator
from app.services.history import HistoryStore
from app.services.normalizer import to_markdown
from app.services.workspace import Workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.post(
    "",
    response_model=Article,
    status_code=201,
    summary="Generate a blog article",
    description=(
        "Sends the topic, target length, language and tone to the text backend "
        "in a single call and returns the structured article. The article is "
        "appended to history and becomes the active article, unless another "
        "article was selected while it was generating.\n\n"
        "Returns **409** while another article request is in progress."
    ),
)
async def generate_article(
    body: GenerationRequest,
    generator: ArticleGenerator = Depends(get_article_generator),
    history: HistoryStore = Depends(get_history),
    workspace: Workspace = Depends(get_workspace),
) -> Article:
    logger.info(
        "Article request received",
        extra={"topic": body.topic, "word_count": body.target_word_count, "language": body.language},
    )

    try:
        with workspace.track("article") as ticket:
            content = await generator.generate(body)
    except RequestInProgressError as exc:
        raise workspace_http_error(exc)
    except GenerationError as exc:
        raise generation_http_error(exc)

    article = Article.from_content(content)
    history.add(article)
    if workspace.is_current(ticket):
        workspace.set_article(article)
    else:
        # Another article was selected while this one generated; keep that selection.
        logger.info(
            "Generated article stored without activating",
            extra={"article_id": article.id, "active": workspace.active_article_id},
        )
    return article


@router.get("/current", response_model=Article, summary="The active article")
async def current_article(workspace: Workspace = Depends(get_workspace)) -> Article:
    return _require_article(workspace)


@router.get(
    "/current/copy/{field}",
    response_model=CopyResponse,
    summary="Copy payload for one article field",
    description=(
        "Returns the text to place on the clipboard. The field is reported as "
        "copied in `GET /status` for two seconds afterwards."
    ),
)
async def copy_field(field: str, workspace: Workspace = Depends(get_workspace)) -> CopyResponse:
    article = _require_article(workspace)
    if field not in COPYABLE_FIELDS:
        raise HTTPException(status_code=404, detail=f"Unknown field '{field}'.")

    text = copy_text(article, field)
    if text:
        workspace.copies.mark(field)
    return CopyResponse(field=field, text=text, copied=bool(text))


@router.get("/current/markdown", summary="Download the active article as Markdown")
async def download_markdown(workspace: Workspace = Depends(get_workspace)) -> Response:
    article = _require_article(workspace)
    return Response(
        content=to_markdown(article),
        media_type="text/markdown; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{article.permalink_suggestion}.md"'},
    )


def _require_article(workspace: Workspace) -> Article:
    if workspace.active_article is None:
        raise HTTPException(status_code=404, detail="No article has been generated yet.")
    return workspace.active_article
