"""Single-user working state: active article, active image and in-flight requests.

At most one request per resource (``"article"`` or ``"image"``) may be
outstanding.  Each request is issued a :class:`Ticket` that records which
article was active at the time; an image response whose ticket no longer
matches the active article is discarded instead of overwriting newer state.
"""

import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, Literal, Optional

from app.models.article import Article
from app.models.image_response import ImageState
from app.models.status import InProgress, WorkspaceStatus
from app.services.clipboard import CopyTracker
from app.services.errors import RequestInProgressError, StaleResponseError

logger = logging.getLogger(__name__)

Resource = Literal["article", "image"]


@dataclass(frozen=True)
class Ticket:
    resource: Resource
    token: str
    article_id: Optional[str]


@dataclass
class ImageSlot:
    article_id: Optional[str]
    aspect_ratio: str
    source: str
    composite: Optional[str] = None
    title: Optional[str] = None

    @property
    def current(self) -> str:
        """The image to display and download: the composite when present."""
        return self.composite or self.source

    def to_state(self) -> ImageState:
        return ImageState(
            article_id=self.article_id,
            aspect_ratio=self.aspect_ratio,
            image=self.current,
            source_image=self.source,
            title=self.title,
            has_title_overlay=self.composite is not None,
        )


class Workspace:
    def __init__(self, copies: Optional[CopyTracker] = None):
        self.active_article: Optional[Article] = None
        self.image: Optional[ImageSlot] = None
        self.copies = copies or CopyTracker()
        self._in_flight: Dict[str, str] = {}

    # -- request tracking --------------------------------------------------

    def begin(self, resource: Resource) -> Ticket:
        if resource in self._in_flight:
            raise RequestInProgressError(f"An {resource} request is already in progress.")
        token = uuid.uuid4().hex
        self._in_flight[resource] = token
        return Ticket(resource, token, self.active_article_id)

    def finish(self, ticket: Ticket) -> None:
        if self._in_flight.get(ticket.resource) == ticket.token:
            del self._in_flight[ticket.resource]

    @contextmanager
    def track(self, resource: Resource) -> Iterator[Ticket]:
        """Hold the in-progress flag for *resource* for the duration of the block."""
        ticket = self.begin(resource)
        try:
            yield ticket
        finally:
            self.finish(ticket)

    def in_progress(self, resource: Resource) -> bool:
        return resource in self._in_flight

    def is_current(self, ticket: Ticket) -> bool:
        return ticket.article_id == self.active_article_id

    # -- article -----------------------------------------------------------

    @property
    def active_article_id(self) -> Optional[str]:
        return self.active_article.id if self.active_article else None

    def set_article(self, article: Optional[Article]) -> None:
        """Make *article* active. Switching articles drops the previous image."""
        new_id = article.id if article else None
        if new_id != self.active_article_id:
            self.image = None
            self.copies.reset()
        self.active_article = article

    # -- image -------------------------------------------------------------

    def accept_image(self, ticket: Ticket, data_uri: str, aspect_ratio: str) -> ImageSlot:
        if not self.is_current(ticket):
            logger.warning(
                "Discarding stale image response",
                extra={"requested_for": ticket.article_id, "active": self.active_article_id},
            )
            raise StaleResponseError(
                "The active article changed while the image was generating; the image was discarded."
            )
        self.image = ImageSlot(article_id=ticket.article_id, aspect_ratio=aspect_ratio, source=data_uri)
        return self.image

    def set_composite(self, data_uri: str, title: str) -> ImageSlot:
        if self.image is None:
            raise LookupError("No image has been generated yet.")
        self.image.composite = data_uri
        self.image.title = title
        return self.image

    def clear_composite(self) -> ImageSlot:
        """Drop the overlay so the untouched source image is shown again."""
        if self.image is None:
            raise LookupError("No image has been generated yet.")
        self.image.composite = None
        self.image.title = None
        return self.image

    # -- observable state --------------------------------------------------

    def status(self) -> WorkspaceStatus:
        return WorkspaceStatus(
            in_progress=InProgress(
                article=self.in_progress("article"),
                image=self.in_progress("image"),
            ),
            active_article_id=self.active_article_id,
            has_image=self.image is not None,
            has_title_overlay=bool(self.image and self.image.composite),
            copied=self.copies.copied_fields(),
        )
