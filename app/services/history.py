"""JSON-file history of generated articles (newest first)."""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from app.models.article import Article
from app.services.errors import DuplicateArticleError

logger = logging.getLogger(__name__)


class HistoryStore:
    """Mapping of article id to :class:`Article`, persisted to a local JSON file.

    The whole list is rewritten on every mutation; there is a single writer.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._articles: List[Article] = self._load()

    def _load(self) -> List[Article]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(raw, list):
                raise ValueError("history file must contain a JSON list")
            return [Article.model_validate(item) for item in raw]
        except (ValueError, ValidationError) as exc:
            logger.error("Ignoring unreadable history file %s: %s", self.path, exc)
            return []

    def _save(self) -> None:
        """Write the list to a sibling temp file, then swap it into place."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [a.model_dump(mode="json", by_alias=True) for a in self._articles]
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def __len__(self) -> int:
        return len(self._articles)

    def list(self) -> List[Article]:
        return list(self._articles)

    def get(self, article_id: str) -> Optional[Article]:
        for article in self._articles:
            if article.id == article_id:
                return article
        return None

    def add(self, article: Article) -> None:
        """Prepend *article*; an existing id is never overwritten."""
        if self.get(article.id) is not None:
            raise DuplicateArticleError(f"Article {article.id} is already in history.")
        self._articles.insert(0, article)
        self._save()

    def delete(self, article_id: str) -> bool:
        """Remove the article with *article_id*. Unknown ids are a no-op."""
        remaining = [a for a in self._articles if a.id != article_id]
        if len(remaining) == len(self._articles):
            return False
        self._articles = remaining
        self._save()
        return True

    def clear(self) -> int:
        removed = len(self._articles)
        self._articles = []
        self._save()
        return removed
