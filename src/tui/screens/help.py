"""Help overlay — toggled by '?'."""
from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from src.shared.config import Keybindings

HELP_TEMPLATE = """\
[bold cyan]readitnow — Key Bindings[/bold cyan]

[bold]Notes[/bold]
  [green]{up} / {left}[/green]   Previous note
  [green]{down} / {right}[/green]   Next note
  [green]{page_up}[/green]   Jump one page back
  [green]{page_down}[/green]   Jump one page forward

[bold]Actions[/bold]
  [green]{open_link}[/green]   Open the note's link in the browser
  [green]{open_file}[/green]   Open the note in $EDITOR or Obsidian
  [green]{toggle_read}[/green]   Mark read / unread

[bold]Global[/bold]
  [green]?[/green]   Toggle this help overlay
  [green]{quit}[/green]   Quit
"""


def help_text(keybindings: Keybindings) -> str:
    return HELP_TEMPLATE.format(**vars(keybindings))


class HelpOverlay(ModalScreen):
    """Full-screen help overlay. Press ? or Escape to dismiss."""

    BINDINGS = [
        Binding("?", "dismiss", "Close help"),
        Binding("escape", "dismiss", "Close help"),
    ]

    DEFAULT_CSS = """
    HelpOverlay {
        align: center middle;
    }
    HelpOverlay > #help-container {
        width: 70;
        height: auto;
        max-height: 80vh;
        background: $surface;
        border: round $primary;
        padding: 1 2;
    }
    """

    def __init__(self, keybindings: Keybindings | None = None) -> None:
        super().__init__()
        self._keybindings = keybindings or Keybindings()

    def compose(self) -> ComposeResult:
        with Static(id="help-container"):
            yield Static(help_text(self._keybindings), markup=True)
            yield Button("Close  [Esc]", id="close-btn", variant="default")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "close-btn":
            self.dismiss()
