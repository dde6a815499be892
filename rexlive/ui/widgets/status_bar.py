from __future__ import annotations

from textual.widgets import Static


class StatusBar(Static):
    """Bottom status bar showing the match summary and key hints."""

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        dock: bottom;
        background: $primary-background;
        color: $text;
        padding: 0 1;
        content-align: center middle;
    }
    """

    def __init__(self) -> None:
        super().__init__("", id="status-bar")
        self._matches: int | None = 0
        self._groups: int = 0
        self._refresh_display()

    def update_result(self, matches: int | None, groups: int = 0) -> None:
        """Show match/group counts; ``None`` means the pattern is invalid."""
        self._matches = matches
        self._groups = groups
        self._refresh_display()

    def _refresh_display(self) -> None:
        if self._matches is None:
            stats = "Invalid pattern"
        else:
            stats = f"Matches: {self._matches} | Groups: {self._groups}"
        keys = "Tab/↑↓ Switch | C-s Save | Esc Quit"
        self._display_text = f"{stats}  {keys}"
        self.update(self._display_text)

    @property
    def display_text(self) -> str:
        return self._display_text
