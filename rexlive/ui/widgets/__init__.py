from __future__ import annotations

from .header_bar import HeaderBar
from .match_diagram import MatchDiagram
from .pattern_input import PatternHighlighter, PatternInput
from .status_bar import StatusBar

__all__ = [
    "HeaderBar",
    "MatchDiagram",
    "PatternHighlighter",
    "PatternInput",
    "StatusBar",
]
