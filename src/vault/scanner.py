"""Vault scanning and read-status toggling."""
from __future__ import annotations

import os
from pathlib import Path

import structlog

from src.cleaner.processor import MarkdownTextCleaner
from src.shared.config import AppConfig
from src.vault.models import READ_MARKER, Note

log = structlog.get_logger()


class VaultNotFoundError(FileNotFoundError):
    """Configured vault path is missing or not a directory."""


def scan_vault(config: AppConfig, cleaner: MarkdownTextCleaner | None = None) -> list[Note]:
    """Return notes for every ``*.md`` file directly inside the vault.

    Newest modification time first, capped at ``config.max_notes``
    (0 = no cap). Files that cannot be read are skipped.
    """
    vault = config.vault_dir
    if not vault.is_dir():
        raise VaultNotFoundError(f"Vault path does not exist or is not a directory: {vault}")

    cleaner = cleaner or MarkdownTextCleaner(config.processor)
    entries: list[tuple[float, Path]] = []
    for path in vault.iterdir():
        if path.suffix == ".md" and path.is_file():
            try:
                entries.append((path.stat().st_mtime, path))
            except OSError as exc:
                log.warning("vault_stat_failed", path=str(path), error=str(exc))
    entries.sort(key=lambda e: e[0], reverse=True)
    if config.max_notes > 0:
        entries = entries[: config.max_notes]

    notes: list[Note] = []
    for _, path in entries:
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            log.warning("vault_note_unreadable", path=str(path), error=str(exc))
            continue
        notes.append(Note.from_markdown(
            content, path.name, config.excerpt_lines, cleaner=cleaner, path=path,
        ))

    log.info("vault_scanned", vault=str(vault), notes=len(notes))
    return notes


def toggle_read_status(note: Note) -> Note:
    """Flip the read marker in the note's file and on *note* itself."""
    if note.path is None:
        raise ValueError(f"note {note.title!r} has no file path")

    content = note.path.read_text(encoding="utf-8")
    if note.read:
        content = content.replace(f"\n{READ_MARKER}", "").replace(READ_MARKER, "")
    else:
        content = content + f"\n{READ_MARKER}"

    tmp = note.path.with_suffix(".md.tmp")
    tmp.write_text(content, encoding="utf-8")
    os.replace(tmp, note.path)

    note.read = not note.read
    log.debug("note_read_toggled", path=str(note.path), read=note.read)
    return note
