from __future__ import annotations

from collections.abc import Iterable

from rich.style import Style
from rich.text import Text

from rexlive.engine.models import DrawInstruction


class Canvas:
    """Off-screen cell grid driven by cursor/color/print primitives.

    Later prints overwrite earlier ones cell by cell, like a terminal.
    """

    def __init__(self) -> None:
        self._cells: dict[tuple[int, int], tuple[str, str | None]] = {}
        self._row = 0
        self._col = 0
        self._color: str | None = None

    def clear(self) -> None:
        self._cells.clear()
        self._row = 0
        self._col = 0
        self._color = None

    def move_to(self, col: int, row: int) -> None:
        self._col = col
        self._row = row

    def set_color(self, color: str | None) -> None:
        self._color = color

    def print(self, text: str) -> None:
        for ch in text:
            self._cells[(self._row, self._col)] = (ch, self._color)
            self._col += 1

    def apply(
        self, instructions: Iterable[DrawInstruction], col: int = 0, row: int = 0
    ) -> None:
        """Replay *instructions* with their field origin at (*col*, *row*)."""
        for instr in instructions:
            self.move_to(col + instr.col, row + instr.row)
            self.set_color(instr.color)
            self.print(instr.text)

    @property
    def height(self) -> int:
        if not self._cells:
            return 0
        return max(row for row, _col in self._cells) + 1

    def cell(self, col: int, row: int) -> tuple[str, str | None] | None:
        return self._cells.get((row, col))

    def lines(self) -> list[str]:
        return [
            "".join(ch for ch, _color in self._row_cells(row))
            for row in range(self.height)
        ]

    def to_text(self) -> Text:
        text = Text(no_wrap=True, overflow="crop")
        for row in range(self.height):
            if row:
                text.append("\n")
            run = ""
            run_color: str | None = None
            for ch, color in self._row_cells(row):
                if color != run_color and run:
                    text.append(run, style=_style(run_color))
                    run = ""
                run_color = color
                run += ch
            if run:
                text.append(run, style=_style(run_color))
        return text

    def _row_cells(self, row: int) -> list[tuple[str, str | None]]:
        cols = [col for r, col in self._cells if r == row]
        if not cols:
            return []
        return [self._cells.get((row, col), (" ", None)) for col in range(max(cols) + 1)]


def _style(color: str | None) -> Style | None:
    return Style(color=color) if color else None
