"""readitnow — terminal reader for an Obsidian "read it later" inbox."""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys
import traceback
import webbrowser
from pathlib import Path
from typing import TextIO
from urllib.parse import quote

import structlog
from rich.markup import escape
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from src.shared.config import AppConfig, load_config
from src.tui.navigation import NoteCursor, resolve_action
from src.vault.models import Note
from src.vault.scanner import VaultNotFoundError, scan_vault, toggle_read_status

log = structlog.get_logger()

PAGE_SIZE = 4
CRASH_LOG = Path("/tmp/readitnow_crash.log")

THEME = """
Screen, ReadItNowApp {
    background: #1c1c1e;
}

#note-list {
    height: 1fr;
    padding: 1 2;
}

NoteCard {
    background: #2c2c2e;
    border: solid #3a3a3c;
    padding: 0 2;
    margin: 0 0 1 0;
    height: 1fr;
}

NoteCard.-selected { border: tall #0a84ff; }
NoteCard.-empty    { display: none; }

.status-bar {
    background: #2c2c2e;
    color: #636366;
    height: 1;
    padding: 0 2;
    border-top: solid #3a3a3c;
    dock: bottom;
}
"""


class NoteCard(Static):
    """One note: title, tags, cleaned excerpt and read badge."""

    def __init__(self, **kw):
        super().__init__(**kw)
        self._note: Note | None = None

    def render(self) -> str:
        note = self._note
        if note is None:
            return ""
        badge = "[#30d158]● read[/#30d158]" if note.read else "[#ff9f0a]○ unread[/#ff9f0a]"
        tags = "  ".join(f"[#0a84ff]{escape(t)}[/#0a84ff]" for t in note.tags)
        url = f"\n[#636366]{escape(note.url)}[/#636366]" if note.url else ""
        return (
            f"[bold #f2f2f7]{escape(note.title)}[/bold #f2f2f7]  {badge}\n"
            f"{tags}\n"
            f"[#aeaeb2]{escape(note.excerpt)}[/#aeaeb2]{url}"
        )

    def show_note(self, note: Note | None, selected: bool = False) -> None:
        self._note = note
        self.set_class(note is None, "-empty")
        self.set_class(selected, "-selected")
        self.refresh()


class ReadItNowApp(App):
    """Browse vault notes as cleaned, compact cards."""

    TITLE = "readitnow"
    CSS = THEME

    BINDINGS = [
        Binding("?", "show_help", "Help", show=False),
    ]

    def __init__(self, config: AppConfig, notes: list[Note] | None = None) -> None:
        super().__init__()
        self.app_config = config
        self.notes: list[Note] = notes or []
        self.cursor = NoteCursor(len(self.notes), page_size=PAGE_SIZE)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="note-list"):
            for i in range(PAGE_SIZE):
                yield NoteCard(id=f"card-{i}")
        yield Static("", id="status", classes="status-bar")

    def on_mount(self) -> None:
        self._render_page()

    @property
    def selected_note(self) -> Note | None:
        if not self.notes:
            return None
        return self.notes[self.cursor.index]

    def _render_page(self) -> None:
        start = self.cursor.page_start
        for i in range(PAGE_SIZE):
            idx = start + i
            note = self.notes[idx] if idx < len(self.notes) else None
            self.query_one(f"#card-{i}", NoteCard).show_note(
                note, selected=idx == self.cursor.index
            )
        kb = self.app_config.keybindings
        position = f"{self.cursor.index + 1}/{len(self.notes)}" if self.notes else "no notes"
        self.query_one("#status", Static).update(
            f"[#636366]{position}  ·  {kb.open_link}=open link  {kb.open_file}=open file  "
            f"{kb.toggle_read}=read/unread  {kb.quit}=quit  ?=help[/#636366]"
        )

    async def on_key(self, event: events.Key) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        action = resolve_action(event.key, self.app_config.keybindings)
        if action is None:
            return
        event.stop()
        await self.run_action(action)

    # ── navigation ──────────────────────────────────────────────────────────

    def action_next_note(self) -> None:
        self.cursor.next()
        self._render_page()

    def action_previous_note(self) -> None:
        self.cursor.previous()
        self._render_page()

    def action_next_page(self) -> None:
        self.cursor.next_page()
        self._render_page()

    def action_previous_page(self) -> None:
        self.cursor.previous_page()
        self._render_page()

    # ── note actions ────────────────────────────────────────────────────────

    def action_open_link(self) -> None:
        note = self.selected_note
        if note is None or not note.url:
            self.notify("No link in this note", severity="warning")
            return
        webbrowser.open(note.url)
        log.info("note_link_opened", title=note.title, url=note.url)

    def action_open_file(self) -> None:
        note = self.selected_note
        if note is None or note.path is None:
            return
        editor = os.getenv("EDITOR")
        try:
            if editor:
                with self.suspend():
                    subprocess.run([editor, str(note.path)], check=False)
            else:
                webbrowser.open(f"obsidian://open?path={quote(str(note.path))}")
        except OSError as exc:
            self.notify(f"Open failed: {exc}", severity="error")
            return
        log.info("note_file_opened", path=str(note.path), editor=editor or "obsidian")

    def action_toggle_read(self) -> None:
        note = self.selected_note
        if note is None:
            return
        try:
            toggle_read_status(note)
        except (OSError, ValueError) as exc:
            log.error("note_read_toggle_failed", title=note.title, error=str(exc))
            self.notify(f"Toggle failed: {exc}", severity="error")
            return
        self._render_page()

    def action_show_help(self) -> None:
        from src.tui.screens.help import HelpOverlay

        self.push_screen(HelpOverlay(self.app_config.keybindings))


def _configure_logging(log_file: TextIO) -> None:
    # Log to a file; stdout belongs to the terminal UI.
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, os.getenv("LOG_LEVEL", "INFO"))
        ),
        logger_factory=structlog.WriteLoggerFactory(file=log_file),
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="readitnow", description=__doc__)
    parser.add_argument("--vault", help="vault folder to read (overrides config)")
    parser.add_argument("--config", help="path to config.yaml")
    args = parser.parse_args(argv)

    log_path = Path(os.getenv("READITNOW_LOG", "/tmp/readitnow.log"))
    with log_path.open("a", encoding="utf-8") as log_file:
        _configure_logging(log_file)
        try:
            _run(args)
        finally:
            # nothing may write to the file once it is closed
            structlog.reset_defaults()


def _run(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    if args.vault:
        config.vault_path = args.vault

    try:
        notes = scan_vault(config)
    except VaultNotFoundError as exc:
        log.error("vault_not_found", vault=config.vault_path)
        print(exc, file=sys.stderr)
        raise SystemExit(1) from exc

    ReadItNowApp(config, notes).run()


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        try:
            with CRASH_LOG.open("w") as f:
                f.write(f"readitnow crashed: {type(e).__name__}: {e}\n\n")
                traceback.print_exc(file=f)
                f.write(f"\nPython: {sys.version}\nExecutable: {sys.executable}\n")
        except OSError:
            traceback.print_exc(file=sys.stderr)
        raise
