"""Compiled regex set for Obsidian-specific syntax."""
from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class ObsidianPatterns:
    """Six compiled patterns, built once per processor and never mutated."""

    wiki_link: re.Pattern[str]
    embed: re.Pattern[str]
    tag: re.Pattern[str]
    frontmatter: re.Pattern[str]
    dataview: re.Pattern[str]
    block_reference: re.Pattern[str]

    @classmethod
    def compile(cls) -> ObsidianPatterns:
        return cls(
            # [[target]] or [[target|alias]], not when part of an ![[embed]]
            wiki_link=re.compile(r"(?<!!)\[\[([^\]|]+)(?:\|([^\]]+))?\]\]"),
            # ![[anything]]
            embed=re.compile(r"!\[\[[^\]]+\]\]"),
            # #tag, #tag/nested, #tag-name; group 1 is the boundary character
            tag=re.compile(r"(^|[^\w/#])#[A-Za-z][\w/-]*", re.MULTILINE),
            # --- ... --- at the very start of the document
            frontmatter=re.compile(
                r"\A---[ \t\r]*\n(?:.*?\n)?---[ \t\r]*(?:\n|\Z)", re.DOTALL
            ),
            # ```dataview ... ``` (any fence of 3+ backticks or tildes)
            dataview=re.compile(
                r"^(`{3,}|~{3,})[ \t]*dataview[ \t\r]*\n.*?^\1[ \t\r]*(?:\n|\Z)",
                re.MULTILINE | re.DOTALL,
            ),
            # trailing ^block-id
            block_reference=re.compile(
                r"(?:^|[ \t]+)\^[\w-]+[ \t]*(?=\r?$)", re.MULTILINE
            ),
        )
