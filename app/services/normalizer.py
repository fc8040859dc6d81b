"""Data normalisation utilities: permalink slugs and Markdown frontmatter."""

import re
import unicodedata
from typing import List

from app.models.article import Article


def slugify(text: str, fallback: str = "article") -> str:
    """Turn *text* into a lowercase, ASCII-only, hyphen-separated slug.

    Leading slashes and a trailing file extension (``.html``) are dropped, so a
    model answer such as ``/My-Post.html`` becomes ``my-post``.
    """
    base = text.strip().strip("/")
    base = base.split("/")[-1] if base else ""
    base = re.sub(r"\.(html?|php|aspx?)$", "", base, flags=re.IGNORECASE)

    # Normalise unicode, keep only ASCII
    slug = unicodedata.normalize("NFKD", base)
    slug = slug.encode("ascii", "ignore").decode("ascii")

    # Lowercase and replace runs of non-alphanumeric chars with a single hyphen
    slug = re.sub(r"[^a-z0-9]+", "-", slug.lower())
    slug = slug.strip("-")

    return slug or fallback


def make_frontmatter(article: Article) -> str:
    """Return a YAML frontmatter block describing *article*."""
    lines = [
        "---",
        f'title: "{_escape_yaml(article.seo_title)}"',
        f'description: "{_escape_yaml(article.meta_description)}"',
        f'slug: "{article.permalink_suggestion}"',
        f'keyword: "{_escape_yaml(article.focus_keyword)}"',
        f'date: "{article.created_at.isoformat()}"',
    ]
    lines.extend(_yaml_list("tags", article.tags))
    lines.append("---")
    return "\n".join(lines)


def to_markdown(article: Article) -> str:
    """Render *article* as a standalone Markdown document with an FAQ section."""
    parts = [make_frontmatter(article), "", article.full_article.strip()]
    if article.faq:
        parts.extend(["", "## Frequently Asked Questions"])
        for item in article.faq:
            parts.extend(["", f"### {item.question}", "", item.answer])
    return "\n".join(parts) + "\n"


def _yaml_list(key: str, values: List[str]) -> List[str]:
    if not values:
        return [f"{key}: []"]
    return [f"{key}:"] + [f'  - "{_escape_yaml(v)}"' for v in values]


def _escape_yaml(value: str) -> str:
    """Escape characters that would break inline double-quoted YAML strings."""
    return value.replace("\\", "\\\\").replace('"', '\\"')
