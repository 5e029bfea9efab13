"""Tests for note assembly, vault scanning and read-status toggling."""
import os
import tempfile
from pathlib import Path

import pytest

from src.cleaner import FORMATTING_CONFIG, MarkdownTextCleaner, ProcessorConfig
from src.shared.config import AppConfig
from src.vault.models import NO_CONTENT, READ_MARKER, Note
from src.vault.scanner import VaultNotFoundError, scan_vault, toggle_read_status

TWEET_NOTE = """
[[ReadItLater]] [[Tweet]]

# [Aadit Sheth](https://twitter.com/aaditsh/status/1909332848152105301)

> This guy literally turned WhatsApp into an AI assistant using Claude and ElevenLabs[pic.twitter.com/f77uIBIQkj](https://t.co/f77uIBIQkj)
> 
> — Aadit Sheth (@aaditsh) [April 7, 2025](https://twitter.com/aaditsh/status/1909332848152105301?ref_src=twsrc%5Etfw)
"""


# ── Note.from_markdown ─────────────────────────────────────────────────────

def test_note_from_markdown():
    note = Note.from_markdown(TWEET_NOTE, "Aadit Sheth.md", 5)
    assert note.title == "Aadit Sheth"
    assert "This guy literally turned WhatsApp into an AI assistant" in note.excerpt
    assert note.tags == ["ReadItLater", "Tweet"]
    assert note.url == "https://twitter.com/aaditsh/status/1909332848152105301"
    assert not note.read


def test_note_excerpt_is_cleaned():
    content = "---\nsource: web\n---\n# Title\n\nSee [[Other|the other note]] #inbox\n"
    note = Note.from_markdown(content, "n.md")
    assert "source:" not in note.excerpt
    assert "[[" not in note.excerpt
    assert "#inbox" not in note.excerpt
    assert "the other note" in note.excerpt


def test_note_excerpt_line_limit():
    content = "# One\n# Two\n# Three\n# Four"
    note = Note.from_markdown(content, "n.md", excerpt_lines=2)
    assert note.excerpt == "# One\n# Two"


def test_note_empty_content():
    note = Note.from_markdown("---\na: b\n---\n", "empty.md")
    assert note.excerpt == NO_CONTENT
    assert note.url is None
    assert note.tags == []


def test_note_read_marker():
    note = Note.from_markdown(f"Body [[Topic]]\n{READ_MARKER}", "r.md")
    assert note.read is True
    assert note.tags == ["Topic"]
    assert note.excerpt == "Body Topic"
    assert "readitnow" not in note.excerpt


def test_note_tags_skip_embeds():
    note = Note.from_markdown("![[pic.png]] [[Real|alias]]", "t.md")
    assert note.tags == ["Real"]


def test_note_uses_given_cleaner():
    content = "word " * 30
    cleaner = MarkdownTextCleaner(ProcessorConfig(max_line_length=20))
    note = Note.from_markdown(content, "w.md", 3, cleaner=cleaner)
    lines = note.excerpt.split("\n")
    assert len(lines) == 3
    assert all(len(line) <= 20 for line in lines)


def test_note_defaults():
    note = Note()
    assert note.title == "Untitled"
    assert note.excerpt == NO_CONTENT
    assert note.read is False


# ── scan_vault ─────────────────────────────────────────────────────────────

def _write(dirpath: Path, name: str, content: str, mtime: float) -> Path:
    path = dirpath / name
    path.write_text(content, encoding="utf-8")
    os.utime(path, (mtime, mtime))
    return path


def test_scan_vault_newest_first():
    with tempfile.TemporaryDirectory() as tmpdir:
        vault = Path(tmpdir)
        _write(vault, "old.md", "old note", 1_000_000)
        _write(vault, "new.md", "new note", 3_000_000)
        _write(vault, "mid.md", "mid note", 2_000_000)
        _write(vault, "ignored.txt", "not markdown", 4_000_000)
        (vault / "sub.md").mkdir()

        notes = scan_vault(AppConfig(vault_path=tmpdir, max_notes=0))
        assert [n.title for n in notes] == ["new", "mid", "old"]
        assert notes[0].path == vault / "new.md"


def test_scan_vault_respects_max_notes():
    with tempfile.TemporaryDirectory() as tmpdir:
        vault = Path(tmpdir)
        for i in range(5):
            _write(vault, f"n{i}.md", f"note {i}", 1_000_000 + i)
        notes = scan_vault(AppConfig(vault_path=tmpdir, max_notes=2))
        assert [n.title for n in notes] == ["n4", "n3"]


def test_scan_vault_missing_directory():
    with tempfile.TemporaryDirectory() as tmpdir:
        missing = Path(tmpdir) / "nope"
        with pytest.raises(VaultNotFoundError):
            scan_vault(AppConfig(vault_path=str(missing)))
        with pytest.raises(FileNotFoundError):
            scan_vault(AppConfig(vault_path=str(missing)))


def test_scan_vault_applies_processor_config():
    with tempfile.TemporaryDirectory() as tmpdir:
        _write(Path(tmpdir), "f.md", "Some **bold** words", 1_000_000)
        config = AppConfig(vault_path=tmpdir)
        assert scan_vault(config)[0].excerpt == "Some bold words"
        config.processor = FORMATTING_CONFIG
        assert scan_vault(config)[0].excerpt == "Some **bold** words"


# ── toggle_read_status ─────────────────────────────────────────────────────

def test_toggle_read_roundtrip():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(Path(tmpdir), "article.md", "# Article\n\nBody text.", 1_000_000)
        note = scan_vault(AppConfig(vault_path=tmpdir))[0]
        assert note.read is False

        toggle_read_status(note)
        assert note.read is True
        assert path.read_text(encoding="utf-8").endswith(f"\n{READ_MARKER}")

        toggle_read_status(note)
        assert note.read is False
        assert path.read_text(encoding="utf-8") == "# Article\n\nBody text."


def test_toggle_read_without_path():
    with pytest.raises(ValueError):
        toggle_read_status(Note(title="floating"))
