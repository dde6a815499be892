from __future__ import annotations

from collections.abc import Iterable

from .models import LayeredSpan, Layering, Span
from .palette import Palette


def assign_layers(captures: Iterable[Span]) -> Layering:
    """Assign each span its nesting depth within one capture list.

    Spans are taken in the order the regex engine emitted them (whole
    match, then groups left to right) and are never re-sorted.  A span
    stays open over a later span only while its end is strictly greater
    than that span's start; adjacency closes it.
    """
    pending_ends: list[int] = []
    groups: list[LayeredSpan] = []
    max_layer = 0

    for span in captures:
        while pending_ends and pending_ends[-1] <= span.start:
            pending_ends.pop()
        pending_ends.append(span.end)

        layer = len(pending_ends) - 1
        groups.append(LayeredSpan(span.start, span.end, layer))
        max_layer = max(max_layer, layer)

    return Layering(groups=tuple(groups), max_layer=max_layer)


def bracket_depth_colors(pattern: str, palette: Palette) -> list[str | None]:
    """Color literal parentheses by nesting depth; ``None`` elsewhere.

    ``(`` takes the color of the depth it opens, ``)`` the color of the
    depth it closes.  Stray closers keep the depth at 0.
    """
    depth = 0
    colors: list[str | None] = []
    for ch in pattern:
        if ch == "(":
            depth += 1
            colors.append(palette.layer_color(depth))
        elif ch == ")":
            colors.append(palette.layer_color(depth))
            depth = max(depth - 1, 0)
        else:
            colors.append(None)
    return colors
