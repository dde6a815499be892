from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from .lexer import TokenizerError, highlight_events
from .models import HighlightEnd, HighlightEvent, HighlightStart, Source
from .palette import CATEGORY_RANK, HighlightCategory, Palette

log = logging.getLogger("rexlive.highlight")

Tokenizer = Callable[[bytes], Iterable[HighlightEvent]]


class HighlightMaterializer:
    """Pull-based color stream over a highlight event stream.

    Yields exactly one color per byte of the tokenized input.  Each
    ``next()`` first drains the buffered ``Source`` range and only then
    reads further events.  ``None`` stands for the terminal default.
    """

    def __init__(self, events: Iterable[HighlightEvent], palette: Palette) -> None:
        self._events: Iterator[HighlightEvent] = iter(events)
        self._palette = palette
        self._stack: list[HighlightCategory] = []
        self._pos: int = 0
        self._limit: int = 0

    def __iter__(self) -> HighlightMaterializer:
        return self

    def __next__(self) -> str | None:
        while self._pos >= self._limit:
            event = next(self._events)
            if isinstance(event, HighlightStart):
                self._stack.append(event.category)
            elif isinstance(event, HighlightEnd):
                if self._stack:
                    self._stack.pop()
            elif isinstance(event, Source):
                self._limit = event.end
        self._pos += 1
        return self._current_color()

    def _current_color(self) -> str | None:
        if not self._stack:
            return None
        winner = min(self._stack, key=CATEGORY_RANK.__getitem__)
        return self._palette.category_color(winner)


class DefaultColors:
    """Fallback stream: the default color for every byte."""

    def __init__(self, length: int) -> None:
        self._remaining = length

    def __iter__(self) -> DefaultColors:
        return self

    def __next__(self) -> None:
        if self._remaining <= 0:
            raise StopIteration
        self._remaining -= 1
        return None


def materialize(
    source: bytes,
    palette: Palette,
    tokenizer: Tokenizer | None = highlight_events,
) -> Iterator[str | None]:
    """Colors for every byte of *source*.

    Passing ``tokenizer=None`` disables syntax highlighting.  A tokenizer
    that fails to start degrades to uncolored output instead of raising.
    """
    if tokenizer is None:
        return DefaultColors(len(source))
    try:
        events = tokenizer(source)
    except TokenizerError as exc:
        log.debug("Syntax highlighting unavailable: %s", exc)
        return DefaultColors(len(source))
    return HighlightMaterializer(events, palette)


def colors_per_char(
    text: str,
    palette: Palette,
    tokenizer: Tokenizer | None = highlight_events,
) -> list[str | None]:
    """One color per character, sampling the last byte color of each."""
    byte_colors = materialize(text.encode("utf-8"), palette, tokenizer)
    colors: list[str | None] = []
    for ch in text:
        color = None
        for _ in range(len(ch.encode("utf-8"))):
            color = next(byte_colors, None)
        colors.append(color)
    return colors
