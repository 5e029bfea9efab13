"""MarkdownTextCleaner — strip, extract, normalize.

    clean(md) == normalize(extract(strip(md), config), config.max_line_length)

Each stage finishes before the next starts. A cleaner holds no state that
changes between calls, so one instance can serve any number of notes.
"""
from __future__ import annotations

import structlog

from src.cleaner.config import DEFAULT_CONFIG, FORMATTING_CONFIG, ProcessorConfig
from src.cleaner.extractor import StructuralExtractor
from src.cleaner.normalizer import TextNormalizer
from src.cleaner.stripper import SyntaxStripper, drop_removal_marks, removal_mark_for

log = structlog.get_logger()


class MarkdownTextCleaner:
    """Converts Obsidian-flavoured markdown into compact plain text."""

    def __init__(self, config: ProcessorConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._stripper = SyntaxStripper()
        self._extractor = StructuralExtractor()
        self._normalizer = TextNormalizer()

    def clean(self, markdown: str, config: ProcessorConfig | None = None) -> str:
        """Run the full pipeline. *config* overrides the instance flags for
        this call only."""
        config = config or self.config
        mark = removal_mark_for(markdown)

        def visible_length(line: str) -> int:
            return len(drop_removal_marks(line, mark))

        stripped = self._stripper.strip_marked(markdown, mark)
        extracted = self._extractor.extract(stripped, config)
        normalized = self._normalizer.normalize(
            extracted, config.max_line_length, visible_length
        )
        result = drop_removal_marks(normalized, mark).strip()
        log.debug("markdown_cleaned", chars_in=len(markdown), chars_out=len(result))
        return result


def clean_obsidian_markdown(markdown: str) -> str:
    """Clean *markdown* with the default flags."""
    return MarkdownTextCleaner().clean(markdown)


def clean_obsidian_markdown_with_formatting(markdown: str) -> str:
    """Clean *markdown*, keeping emphasis markers and code/image placeholders."""
    return MarkdownTextCleaner(FORMATTING_CONFIG).clean(markdown)
