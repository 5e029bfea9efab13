"""Processor flags for the Obsidian markdown cleaner."""
from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class ProcessorConfig:
    """Immutable flags controlling one cleaning pipeline.

    Attributes:
        preserve_formatting: Keep ``*``/``**`` markers, backticks and
            ``[Code]``/``[Image]`` placeholders in the output.
        convert_headings:    Render headings as ``#``-prefixed lines.
        include_link_text:   Keep the visible text of Markdown links.
        max_line_length:     Word-wrap width in characters (0 = no wrapping).
    """

    preserve_formatting: bool = False
    convert_headings: bool = True
    include_link_text: bool = True
    max_line_length: int = 0

    def __post_init__(self) -> None:
        if self.max_line_length < 0:
            raise ValueError(
                f"max_line_length must be >= 0, got {self.max_line_length}"
            )

    @classmethod
    def with_formatting(cls) -> ProcessorConfig:
        """Default flags with ``preserve_formatting`` switched on."""
        return replace(cls(), preserve_formatting=True)


DEFAULT_CONFIG = ProcessorConfig()
FORMATTING_CONFIG = ProcessorConfig.with_formatting()
