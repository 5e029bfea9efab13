"""Flat markdown event stream built on markdown-it-py tokens.

markdown-it produces a two-level token list (block tokens, with inline
children hung off ``inline`` tokens). The extractor wants one flat,
ordered sequence of start/end/leaf events instead, so this module walks
the tree and yields :class:`MarkdownEvent` values.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from markdown_it import MarkdownIt
from markdown_it.token import Token


class EventKind(Enum):
    TEXT = "text"
    CODE = "code"
    HEADING_START = "heading_start"
    HEADING_END = "heading_end"
    CODE_BLOCK_START = "code_block_start"
    CODE_BLOCK_END = "code_block_end"
    IMAGE_START = "image_start"
    IMAGE_END = "image_end"
    LINK_START = "link_start"
    LINK_END = "link_end"
    EMPHASIS_START = "emphasis_start"
    EMPHASIS_END = "emphasis_end"
    STRONG_START = "strong_start"
    STRONG_END = "strong_end"
    SOFT_BREAK = "soft_break"
    HARD_BREAK = "hard_break"
    RULE = "rule"
    PARAGRAPH_START = "paragraph_start"
    PARAGRAPH_END = "paragraph_end"
    LIST_START = "list_start"
    LIST_END = "list_end"
    ITEM_START = "item_start"
    ITEM_END = "item_end"
    QUOTE_START = "quote_start"
    QUOTE_END = "quote_end"
    HTML = "html"


@dataclass(frozen=True)
class MarkdownEvent:
    kind: EventKind
    text: str = ""
    level: int = 0
    url: str = ""


# Token types that map one-to-one onto an event with no payload.
_SIMPLE_KINDS: dict[str, EventKind] = {
    "paragraph_open": EventKind.PARAGRAPH_START,
    "paragraph_close": EventKind.PARAGRAPH_END,
    "bullet_list_open": EventKind.LIST_START,
    "bullet_list_close": EventKind.LIST_END,
    "ordered_list_open": EventKind.LIST_START,
    "ordered_list_close": EventKind.LIST_END,
    "list_item_open": EventKind.ITEM_START,
    "list_item_close": EventKind.ITEM_END,
    "blockquote_open": EventKind.QUOTE_START,
    "blockquote_close": EventKind.QUOTE_END,
    "hr": EventKind.RULE,
    "em_open": EventKind.EMPHASIS_START,
    "em_close": EventKind.EMPHASIS_END,
    "strong_open": EventKind.STRONG_START,
    "strong_close": EventKind.STRONG_END,
    "softbreak": EventKind.SOFT_BREAK,
    "hardbreak": EventKind.HARD_BREAK,
    "link_close": EventKind.LINK_END,
}


def _heading_level(token: Token) -> int:
    # tag is "h1" .. "h6"
    return int(token.tag[1:]) if token.tag[1:].isdigit() else 1


class MarkdownEventParser:
    """CommonMark parser (no tables, footnotes or other extensions) that
    emits :class:`MarkdownEvent` values in document order."""

    def __init__(self) -> None:
        self._md = MarkdownIt("commonmark")

    def parse(self, markdown: str) -> Iterator[MarkdownEvent]:
        yield from self._walk(self._md.parse(markdown))

    def _walk(self, tokens: Iterable[Token]) -> Iterator[MarkdownEvent]:
        for token in tokens:
            kind = _SIMPLE_KINDS.get(token.type)
            if kind is not None:
                yield MarkdownEvent(kind)
            elif token.type == "inline":
                yield from self._walk(token.children or [])
            elif token.type in ("text", "text_special"):
                yield MarkdownEvent(EventKind.TEXT, text=token.content)
            elif token.type == "code_inline":
                yield MarkdownEvent(EventKind.CODE, text=token.content)
            elif token.type == "heading_open":
                yield MarkdownEvent(EventKind.HEADING_START, level=_heading_level(token))
            elif token.type == "heading_close":
                yield MarkdownEvent(EventKind.HEADING_END, level=_heading_level(token))
            elif token.type in ("fence", "code_block"):
                yield MarkdownEvent(EventKind.CODE_BLOCK_START, text=token.info.strip())
                if token.content:
                    yield MarkdownEvent(EventKind.TEXT, text=token.content)
                yield MarkdownEvent(EventKind.CODE_BLOCK_END)
            elif token.type == "link_open":
                yield MarkdownEvent(EventKind.LINK_START, url=str(token.attrGet("href") or ""))
            elif token.type == "image":
                yield MarkdownEvent(EventKind.IMAGE_START, url=str(token.attrGet("src") or ""))
                yield from self._walk(token.children or [])
                yield MarkdownEvent(EventKind.IMAGE_END)
            elif token.type in ("html_block", "html_inline"):
                yield MarkdownEvent(EventKind.HTML, text=token.content)
            # anything else (plugin tokens) has no event
