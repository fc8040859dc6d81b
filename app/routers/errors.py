"""Translation of service exceptions into HTTP errors shared by the routers."""

import logging

from fastapi import HTTPException

from app.services.errors import (
    BackendError,
    CompositingError,
    EmptyResultError,
    GenerationError,
    ImageLoadError,
    InvalidResponseFormatError,
    WorkspaceError,
)

logger = logging.getLogger(__name__)


def generation_http_error(exc: GenerationError) -> HTTPException:
    """Map a generation failure to 502 (504 for a backend timeout)."""
    if isinstance(exc, BackendError):
        logger.error("Backend error: %s", exc)
        status_code = 504 if exc.timed_out else 502
    elif isinstance(exc, (InvalidResponseFormatError, EmptyResultError)):
        logger.warning("Unusable backend response: %s", exc)
        status_code = 502
    else:
        logger.error("Generation failed: %s", exc)
        status_code = 502
    return HTTPException(status_code=status_code, detail=str(exc))


def compositing_http_error(exc: CompositingError) -> HTTPException:
    """Undecodable input is the caller's fault (422); a missing font is ours (500)."""
    status_code = 422 if isinstance(exc, ImageLoadError) else 500
    return HTTPException(status_code=status_code, detail=str(exc))


def workspace_http_error(exc: WorkspaceError) -> HTTPException:
    logger.warning("Request rejected: %s", exc)
    return HTTPException(status_code=409, detail=str(exc))
