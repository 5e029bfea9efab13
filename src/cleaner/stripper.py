"""Regex pass that removes or resolves Obsidian-only syntax.

Steps run in a fixed order, each on the previous step's output:

    frontmatter -> dataview -> wiki links -> embeds -> tags -> block refs

Later steps assume earlier constructs are already gone (tags inside a
removed dataview block must never be touched). Every step is a plain
substitution, so malformed syntax simply does not match and is left as-is.
"""
from __future__ import annotations

import re

from src.cleaner.patterns import ObsidianPatterns

# Placeholder left where an embed or tag was deleted. Private-use code point,
# so the markdown parser passes it through as ordinary text.
REMOVAL_MARK = "\ue000"

# BMP private-use area, then supplementary planes 15 and 16
_PRIVATE_USE = (range(0xE000, 0xF900), range(0xF0000, 0xFFFFE), range(0x100000, 0x10FFFE))


def removal_mark_for(text: str) -> str:
    """Return a private-use character that does not occur in *text*.

    Prefers :data:`REMOVAL_MARK`. Returns ``""`` (plain deletion) only if
    every private-use code point is already taken.
    """
    if REMOVAL_MARK not in text:
        return REMOVAL_MARK
    used = set(text)
    for block in _PRIVATE_USE:
        for cp in block:
            if chr(cp) not in used:
                return chr(cp)
    return ""


def drop_removal_marks(text: str, mark: str = REMOVAL_MARK) -> str:
    """Delete removal marks, keeping the spacing the author wrote around them.

    Marks at a line edge take the adjacent horizontal whitespace with them so
    no trailing or leading blanks are left behind.
    """
    if not mark or mark not in text:
        return text
    m = re.escape(mark)
    text = re.sub(rf"[ \t]*(?:{m}[ \t]*)+(?=\r?$)", "", text, flags=re.MULTILINE)
    text = re.sub(rf"^(?:[ \t]*{m})+[ \t]*", "", text, flags=re.MULTILINE)
    return text.replace(mark, "")


class SyntaxStripper:
    """Applies the six Obsidian transformations to raw note text."""

    def __init__(self, patterns: ObsidianPatterns | None = None) -> None:
        self._patterns = patterns or ObsidianPatterns.compile()

    @property
    def patterns(self) -> ObsidianPatterns:
        return self._patterns

    def strip(self, text: str) -> str:
        """Return *text* with Obsidian syntax removed or resolved."""
        return self.strip_marked(text, mark="")

    def strip_marked(self, text: str, mark: str = REMOVAL_MARK) -> str:
        """Like :meth:`strip`, but deleted embeds and tags leave *mark* so
        later whitespace collapsing cannot merge the spaces on either side of
        them. *mark* must not occur in *text*; see :func:`removal_mark_for`."""
        text = self.remove_frontmatter(text)
        text = self.remove_dataview_queries(text)
        text = self.resolve_wiki_links(text)
        text = self.remove_embeds(text, mark)
        text = self.remove_tags(text, mark)
        return self.remove_block_references(text)

    def remove_frontmatter(self, text: str) -> str:
        return self._patterns.frontmatter.sub("", text, count=1)

    def remove_dataview_queries(self, text: str) -> str:
        return self._patterns.dataview.sub("", text)

    def resolve_wiki_links(self, text: str) -> str:
        """``[[target]]`` -> ``target``; ``[[target|alias]]`` -> ``alias``."""

        def _replace(match: re.Match[str]) -> str:
            return match.group(2) if match.group(2) is not None else match.group(1)

        return self._patterns.wiki_link.sub(_replace, text)

    def remove_embeds(self, text: str, mark: str = "") -> str:
        return self._patterns.embed.sub(lambda m: mark, text)

    def remove_tags(self, text: str, mark: str = "") -> str:
        return self._patterns.tag.sub(lambda m: m.group(1) + mark, text)

    def remove_block_references(self, text: str) -> str:
        return self._patterns.block_reference.sub("", text)
