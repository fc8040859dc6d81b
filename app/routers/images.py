"""Featured image generation, title overlay and download."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from app.config import Settings
from app.dependencies import get_image_generator, get_settings, get_workspace
from app.models.image_request import CompositeRequest, ImageRequest, TitleOverlayRequest
from app.models.image_response import CompositeResponse, ImageState
from app.routers.errors import compositing_http_error, generation_http_error, workspace_http_error
from app.services.compositor import LOAD_FAILED_MESSAGE, overlay_title
from app.services.datauri import decode_data_uri, download_filename, encode_data_uri
from app.services.errors import CompositingError, GenerationError, WorkspaceError
from app.services.imagery import ImageGenerator
from app.services.workspace import ImageSlot, Workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/images", tags=["Images"])


@router.post(
    "",
    response_model=ImageState,
    status_code=201,
    summary="Generate a featured image",
    description=(
        "Requests exactly one image for `prompt` at `aspectRatio` and stores it "
        "as the active image. Returns **409** while another image request is in "
        "progress, or when the active article changed before the image arrived "
        "(the stale image is discarded)."
    ),
)
async def generate_image(
    body: ImageRequest,
    generator: ImageGenerator = Depends(get_image_generator),
    workspace: Workspace = Depends(get_workspace),
) -> ImageState:
    logger.info("Image request received", extra={"aspect_ratio": body.aspect_ratio})

    try:
        with workspace.track("image") as ticket:
            workspace.image = None
            data_uri = await generator.generate(body.prompt, body.aspect_ratio)
            slot = workspace.accept_image(ticket, data_uri, body.aspect_ratio)
    except WorkspaceError as exc:
        raise workspace_http_error(exc)
    except GenerationError as exc:
        raise generation_http_error(exc)

    return slot.to_state()


@router.get("/current", response_model=ImageState, summary="The active image")
async def current_image(workspace: Workspace = Depends(get_workspace)) -> ImageState:
    return _require_image(workspace).to_state()


@router.post(
    "/title",
    response_model=ImageState,
    summary="Overlay a title on the active image",
    description=(
        "Draws `title`, word-wrapped, over a translucent bar at the bottom of the "
        "source image. The source is never modified, so calling this again "
        "replaces the previous overlay."
    ),
)
async def add_title(
    body: TitleOverlayRequest,
    settings: Settings = Depends(get_settings),
    workspace: Workspace = Depends(get_workspace),
) -> ImageState:
    slot = _require_image(workspace)

    try:
        source = decode_data_uri(slot.source).data
    except ValueError:
        raise HTTPException(status_code=422, detail=LOAD_FAILED_MESSAGE)

    try:
        result = overlay_title(source, body.title, settings.font_path)
    except CompositingError as exc:
        raise compositing_http_error(exc)

    return workspace.set_composite(encode_data_uri(result.data), body.title).to_state()


@router.delete("/title", response_model=ImageState, summary="Remove the title overlay")
async def remove_title(workspace: Workspace = Depends(get_workspace)) -> ImageState:
    _require_image(workspace)
    return workspace.clear_composite().to_state()


@router.get("/download", summary="Download the active image")
async def download_image(
    settings: Settings = Depends(get_settings),
    workspace: Workspace = Depends(get_workspace),
) -> Response:
    slot = _require_image(workspace)
    try:
        decoded = decode_data_uri(slot.current)
    except ValueError as exc:
        logger.error("Stored image is not a valid data URI: %s", exc)
        raise HTTPException(status_code=500, detail="The stored image could not be read.")

    filename = download_filename(settings.download_prefix)
    return Response(
        content=decoded.data,
        media_type=decoded.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post(
    "/composite",
    response_model=CompositeResponse,
    summary="Overlay a title on any image",
    description="Stateless compositor: takes a `data:` URI and a title, returns a new JPEG data URI.",
)
async def composite(
    body: CompositeRequest,
    settings: Settings = Depends(get_settings),
) -> CompositeResponse:
    try:
        source = decode_data_uri(body.image).data
    except ValueError as exc:
        logger.warning("Rejected composite input: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc))

    try:
        result = overlay_title(source, body.title, settings.font_path)
    except CompositingError as exc:
        raise compositing_http_error(exc)

    return CompositeResponse(
        image=encode_data_uri(result.data),
        title=body.title,
        line_count=len(result.lines),
        font_size=result.layout.font_size,
        bar_height=result.layout.bar_height,
    )


def _require_image(workspace: Workspace) -> ImageSlot:
    if workspace.image is None:
        raise HTTPException(status_code=404, detail="No image has been generated yet.")
    return workspace.image
