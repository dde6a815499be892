from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .palette import HighlightCategory


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open ``[start, end)`` range into a string."""

    start: int
    end: int


# One full match followed by its participating groups, in group order.
CaptureList = tuple[Span, ...]


@dataclass(frozen=True, slots=True)
class LayeredSpan:
    start: int
    end: int
    layer: int


@dataclass(frozen=True, slots=True)
class Layering:
    groups: tuple[LayeredSpan, ...]
    max_layer: int


class Field(Enum):
    PATTERN = "pattern"
    HAYSTACK = "haystack"


@dataclass(frozen=True, slots=True)
class DrawInstruction:
    """Print *text* in *color* at (*row*, *col*) relative to *field*'s origin.

    ``color`` is a Rich color name, or ``None`` for the terminal default.
    """

    field: Field
    row: int
    col: int
    color: str | None
    text: str


@dataclass(frozen=True, slots=True)
class HighlightStart:
    category: HighlightCategory


@dataclass(frozen=True, slots=True)
class HighlightEnd:
    pass


@dataclass(frozen=True, slots=True)
class Source:
    """Byte range of the highlighted input covered by the open categories."""

    start: int
    end: int


HighlightEvent = HighlightStart | HighlightEnd | Source
