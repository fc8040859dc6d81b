from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.models.image_request import AspectRatio


class ImageState(BaseModel):
    """The active featured image as the client should display it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    article_id: Optional[str] = None
    aspect_ratio: AspectRatio
    image: str
    """Data URI of the composite when a title is overlaid, else of the source."""
    source_image: str
    title: Optional[str] = None
    has_title_overlay: bool = False


class CompositeResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    image: str
    title: str
    line_count: int
    font_size: int
    bar_height: float
