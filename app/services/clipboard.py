"""Copy payloads for article fields and their transient "copied" acknowledgement."""

import time
from typing import Callable, Dict, List

from app.models.article import FAQ, Article

COPY_ACK_SECONDS = 2.0

COPYABLE_FIELDS = (
    "seoTitle",
    "metaDescription",
    "focusKeyword",
    "permalinkSuggestion",
    "tags",
    "blogOutline",
    "fullArticle",
    "featuredImagePrompt",
    "faq",
)


def format_faq(faqs: List[FAQ]) -> str:
    if not faqs:
        return ""
    return "\n\n".join(f"Q: {item.question}\nA: {item.answer}" for item in faqs)


def copy_text(article: Article, field: str) -> str:
    """Return the text a user copies for *field* of *article*.

    Raises:
        KeyError: if *field* is not copyable.
    """
    if field == "tags":
        return ", ".join(article.tags)
    if field == "faq":
        return format_faq(article.faq)
    if field not in COPYABLE_FIELDS:
        raise KeyError(field)
    return getattr(article, _attribute_name(field))


def _attribute_name(field: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in field)


class CopyTracker:
    """Remembers which fields were copied in the last :data:`COPY_ACK_SECONDS`."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._copied_at: Dict[str, float] = {}

    def mark(self, field: str) -> None:
        self._copied_at[field] = self._clock()

    def is_copied(self, field: str) -> bool:
        copied_at = self._copied_at.get(field)
        if copied_at is None:
            return False
        if self._clock() - copied_at >= COPY_ACK_SECONDS:
            del self._copied_at[field]
            return False
        return True

    def copied_fields(self) -> List[str]:
        return [field for field in list(self._copied_at) if self.is_copied(field)]

    def reset(self) -> None:
        self._copied_at.clear()
