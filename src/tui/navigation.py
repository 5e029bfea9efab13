"""Selection model and key dispatch for the note browser (no display needed)."""
from __future__ import annotations

from dataclasses import dataclass

from src.shared.config import Keybindings

# Keybindings field -> app action name
_ACTIONS: dict[str, str] = {
    "open_link": "open_link",
    "open_file": "open_file",
    "toggle_read": "toggle_read",
    "up": "previous_note",
    "left": "previous_note",
    "down": "next_note",
    "right": "next_note",
    "page_up": "previous_page",
    "page_down": "next_page",
    "quit": "quit",
}


def resolve_action(key: str, keybindings: Keybindings) -> str | None:
    """Return the action bound to *key*, or None if the key is unbound."""
    for field_name, action in _ACTIONS.items():
        if getattr(keybindings, field_name) == key:
            return action
    return None


@dataclass
class NoteCursor:
    """Index of the selected note; single steps wrap, page jumps clamp."""

    count: int
    page_size: int = 4
    index: int = 0

    def next(self) -> int:
        if self.count:
            self.index = (self.index + 1) % self.count
        return self.index

    def previous(self) -> int:
        if self.count:
            self.index = (self.index - 1) % self.count
        return self.index

    def next_page(self) -> int:
        if self.count:
            self.index = min(self.index + self.page_size, self.count - 1)
        return self.index

    def previous_page(self) -> int:
        self.index = max(self.index - self.page_size, 0)
        return self.index

    def reset(self, count: int) -> None:
        """Point at a new note list, keeping the index in range."""
        self.count = count
        self.index = min(self.index, max(count - 1, 0))

    @property
    def page_start(self) -> int:
        """First index of the page that contains the selection."""
        return (self.index // self.page_size) * self.page_size if self.page_size else 0
