from __future__ import annotations

from rich.highlighter import Highlighter
from rich.style import Style
from rich.text import Text
from textual.widgets import Input

from rexlive.engine.render_plan import RenderPlanBuilder


class PatternHighlighter(Highlighter):
    """Applies the pattern-field draw instructions to the input's text."""

    def __init__(self, builder: RenderPlanBuilder) -> None:
        self._builder = builder

    def highlight(self, text: Text) -> None:
        for instr in self._builder.pattern_instructions(text.plain):
            if instr.color is None:
                continue
            text.stylize(
                Style(color=instr.color), instr.col, instr.col + len(instr.text)
            )


class PatternInput(Input):
    """Single-line regex field with bracket-depth and syntax coloring."""

    DEFAULT_CSS = """
    PatternInput {
        border: none;
        height: 1;
        padding: 0;
        width: 1fr;
    }
    """

    def __init__(self, builder: RenderPlanBuilder, value: str = "", **kwargs) -> None:
        super().__init__(
            value=value,
            highlighter=PatternHighlighter(builder),
            select_on_focus=False,
            **kwargs,
        )
