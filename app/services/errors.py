"""Exception hierarchy shared by the contracts, the compositor and the workspace.

Routers translate these into :class:`fastapi.HTTPException` responses; the
exception message is always safe to show to the user verbatim.
"""

from typing import Optional


# ---------------------------------------------------------------------------
# Backend contracts
# ---------------------------------------------------------------------------

class GenerationError(RuntimeError):
    """Base class for every failure of a text or image generation call."""


class InvalidResponseFormatError(GenerationError):
    """The backend answered, but not with a JSON object of the Article shape."""


class BackendError(GenerationError):
    """Transport, HTTP status, auth or quota failure reported by the backend."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        timed_out: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.timed_out = timed_out


class EmptyResultError(GenerationError):
    """The backend call succeeded but produced no usable payload."""


# ---------------------------------------------------------------------------
# Compositor
# ---------------------------------------------------------------------------

class CompositingError(RuntimeError):
    """Local failure while drawing a title over an image."""


class ImageLoadError(CompositingError):
    """The source image could not be decoded."""


class CanvasUnavailableError(CompositingError):
    """No drawing context (font) could be set up for the text overlay."""


# ---------------------------------------------------------------------------
# Workspace / history
# ---------------------------------------------------------------------------

class WorkspaceError(RuntimeError):
    """Base class for request-coordination failures."""


class RequestInProgressError(WorkspaceError):
    """A request for the same resource is already outstanding."""


class StaleResponseError(WorkspaceError):
    """A response arrived for an article that is no longer active."""


class DuplicateArticleError(ValueError):
    """An article with the same id is already stored in history."""
