"""Single-pass plain-text extraction over a markdown event stream."""
from __future__ import annotations

from collections.abc import Iterable

from src.cleaner.config import ProcessorConfig
from src.cleaner.events import EventKind, MarkdownEvent, MarkdownEventParser


class StructuralExtractor:
    """Turns markdown into plain text according to a :class:`ProcessorConfig`.

    Events are consumed once, left to right. Kinds without a rule below
    (paragraphs, lists, quotes, raw HTML, anything a richer parser adds) are
    dropped.
    """

    def __init__(self, parser: MarkdownEventParser | None = None) -> None:
        self._parser = parser or MarkdownEventParser()

    def extract(self, markdown: str, config: ProcessorConfig) -> str:
        return self.extract_events(self._parser.parse(markdown), config)

    def extract_events(
        self, events: Iterable[MarkdownEvent], config: ProcessorConfig
    ) -> str:
        out: list[str] = []
        in_code_block = False
        link_depth = 0    # links whose text is being suppressed
        image_depth = 0

        for event in events:
            kind = event.kind

            if kind is EventKind.CODE_BLOCK_START:
                in_code_block = True
                if config.preserve_formatting:
                    out.append("[Code] ")
            elif kind is EventKind.CODE_BLOCK_END:
                in_code_block = False
                out.append("\n")
            elif kind is EventKind.HEADING_START:
                if config.convert_headings:
                    out.append("#" * event.level + " ")
            elif kind is EventKind.HEADING_END:
                if config.convert_headings:
                    out.append("\n")
            elif kind is EventKind.IMAGE_START:
                image_depth += 1
                if config.preserve_formatting:
                    out.append("[Image] ")
            elif kind is EventKind.IMAGE_END:
                image_depth = max(0, image_depth - 1)
            elif kind is EventKind.LINK_START:
                if not config.include_link_text:
                    link_depth += 1
            elif kind is EventKind.LINK_END:
                if not config.include_link_text:
                    link_depth = max(0, link_depth - 1)
            elif kind in (EventKind.TEXT, EventKind.CODE):
                if in_code_block or image_depth or link_depth:
                    continue
                if kind is EventKind.CODE and config.preserve_formatting:
                    out.append(f"`{event.text}`")
                else:
                    out.append(event.text)
            elif kind is EventKind.SOFT_BREAK:
                out.append(" ")
            elif kind is EventKind.HARD_BREAK:
                out.append("\n")
            elif kind in (EventKind.EMPHASIS_START, EventKind.EMPHASIS_END):
                if config.preserve_formatting:
                    out.append("*")
            elif kind in (EventKind.STRONG_START, EventKind.STRONG_END):
                if config.preserve_formatting:
                    out.append("**")
            elif kind is EventKind.RULE:
                out.append("\n---\n")

        return "".join(out)
