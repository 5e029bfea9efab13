"""Note record assembled from one Markdown file of the vault."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from src.cleaner.processor import MarkdownTextCleaner

READ_MARKER = "[[readitnow/read]]"
NO_CONTENT = "No content available"

_WIKI_TARGET = re.compile(r"\[\[([^\]|]+)(?:\|[^\]]*)?\]\]")
_LINK_URL = re.compile(r"\[[^\]]+\]\(([^)\s]+)\)")


@dataclass
class Note:
    title: str = "Untitled"
    excerpt: str = NO_CONTENT
    tags: list[str] = field(default_factory=list)
    url: str | None = None
    path: Path | None = None
    read: bool = False

    @classmethod
    def from_markdown(
        cls,
        content: str,
        filename: str,
        excerpt_lines: int = 5,
        *,
        cleaner: MarkdownTextCleaner | None = None,
        path: Path | None = None,
    ) -> Note:
        """Build a note from raw file *content*.

        Args:
            content:       Raw Markdown, frontmatter and all.
            filename:      File name; a trailing ``.md`` is dropped for the title.
            excerpt_lines: Number of non-blank cleaned lines kept as excerpt.
            cleaner:       Shared cleaner; a default one is built if omitted.
            path:          Location on disk, needed to toggle read status later.
        """
        cleaner = cleaner or MarkdownTextCleaner()
        title = filename[:-3] if filename.endswith(".md") else filename

        body = content.replace(READ_MARKER, "")
        lines = [ln for ln in cleaner.clean(body).splitlines() if ln.strip()]
        excerpt = "\n".join(lines[: max(0, excerpt_lines)]) or NO_CONTENT

        tags = [m.group(1).strip() for m in _WIKI_TARGET.finditer(body)
                if not _is_embed(body, m.start())]
        url_match = _LINK_URL.search(content)

        return cls(
            title=title or "Untitled",
            excerpt=excerpt,
            tags=tags,
            url=url_match.group(1) if url_match else None,
            path=path,
            read=READ_MARKER in content,
        )


def _is_embed(content: str, start: int) -> bool:
    return start > 0 and content[start - 1] == "!"
