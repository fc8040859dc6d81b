from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

AspectRatio = Literal["1:1", "16:9", "9:16", "4:3", "3:4"]

_REQUEST_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    str_strip_whitespace=True,
)


class ImageRequest(BaseModel):
    model_config = _REQUEST_CONFIG

    prompt: str = Field(min_length=1, description="Free-text prompt for the image model.")
    aspect_ratio: AspectRatio = "16:9"


class TitleOverlayRequest(BaseModel):
    model_config = _REQUEST_CONFIG

    title: str = Field(min_length=1, description="Text drawn over the active image.")


class CompositeRequest(BaseModel):
    model_config = _REQUEST_CONFIG

    image: str = Field(
        min_length=1,
        description="Source image as a `data:` URI.",
    )
    title: str = Field(min_length=1)
