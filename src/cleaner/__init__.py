"""Obsidian markdown -> plain text pipeline."""
from src.cleaner.config import DEFAULT_CONFIG, FORMATTING_CONFIG, ProcessorConfig
from src.cleaner.extractor import StructuralExtractor
from src.cleaner.normalizer import TextNormalizer, normalize
from src.cleaner.patterns import ObsidianPatterns
from src.cleaner.processor import (
    MarkdownTextCleaner,
    clean_obsidian_markdown,
    clean_obsidian_markdown_with_formatting,
)
from src.cleaner.stripper import SyntaxStripper

__all__ = [
    "DEFAULT_CONFIG",
    "FORMATTING_CONFIG",
    "MarkdownTextCleaner",
    "ObsidianPatterns",
    "ProcessorConfig",
    "StructuralExtractor",
    "SyntaxStripper",
    "TextNormalizer",
    "clean_obsidian_markdown",
    "clean_obsidian_markdown_with_formatting",
    "normalize",
]
