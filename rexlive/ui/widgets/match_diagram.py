from __future__ import annotations

from collections.abc import Iterable

from rich.text import Text
from textual.widgets import Static

from rexlive.engine.models import DrawInstruction, Field
from rexlive.ui.canvas import Canvas


class MatchDiagram(Static):
    """The test string recolored by capture layer, with connectors below."""

    DEFAULT_CSS = """
    MatchDiagram {
        height: auto;
        width: 1fr;
    }
    """

    def __init__(self) -> None:
        super().__init__("", id="match-diagram")
        self._canvas = Canvas()
        self._text = Text()

    def show(self, instructions: Iterable[DrawInstruction]) -> None:
        self._canvas.clear()
        self._canvas.apply(i for i in instructions if i.field is Field.HAYSTACK)
        self._text = self._canvas.to_text()
        self.update(self._text)

    @property
    def canvas(self) -> Canvas:
        return self._canvas

    @property
    def plain(self) -> str:
        return self._text.plain
