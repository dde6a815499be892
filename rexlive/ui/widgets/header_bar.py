from __future__ import annotations

from rich.text import Text
from textual.widgets import Static


class HeaderBar(Static):
    """Single-line top bar: app title and session name."""

    DEFAULT_CSS = """
    HeaderBar {
        height: 1;
        dock: top;
        padding: 0 1;
        background: $primary-background;
        color: $text;
        content-align: left middle;
    }
    """

    def __init__(self, session_title: str = "") -> None:
        super().__init__("rexlive", id="header-bar")
        self._session_title = session_title
        self._dirty = False
        self._refresh_content()

    def set_dirty(self, dirty: bool) -> None:
        """Mark the session as changed since it was last saved."""
        self._dirty = dirty
        self._refresh_content()

    def _refresh_content(self) -> None:
        parts = ["rexlive"]
        if self._session_title:
            title = self._session_title
            if self._dirty:
                title += " *"
            parts.append(title)
        self._display_text = " | ".join(parts)
        self.update(Text(self._display_text))

    @property
    def display_text(self) -> str:
        return self._display_text
