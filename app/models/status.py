from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InProgress(BaseModel):
    model_config = _CONFIG

    article: bool = False
    image: bool = False


class WorkspaceStatus(BaseModel):
    model_config = _CONFIG

    in_progress: InProgress
    active_article_id: Optional[str] = None
    has_image: bool = False
    has_title_overlay: bool = False
    copied: List[str] = []


class CopyResponse(BaseModel):
    model_config = _CONFIG

    field: str
    text: str
    copied: bool
    """False when there was nothing to copy."""


class HistoryEntry(BaseModel):
    """Compact history row: enough to list and select an article."""

    model_config = _CONFIG

    id: str
    seo_title: str
    created_at: datetime


class ClearHistoryResponse(BaseModel):
    model_config = _CONFIG

    removed: int
