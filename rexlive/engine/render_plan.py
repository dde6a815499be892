from __future__ import annotations

import logging
from dataclasses import dataclass

from .highlight import Tokenizer, colors_per_char
from .layering import assign_layers, bracket_depth_colors
from .lexer import highlight_events
from .match_cache import CompileError, MatchCache
from .models import CaptureList, DrawInstruction, Field, Layering
from .palette import Palette

log = logging.getLogger("rexlive.render")


@dataclass(frozen=True)
class RenderPlan:
    pattern: tuple[DrawInstruction, ...]
    haystack: tuple[DrawInstruction, ...]
    matches: tuple[CaptureList, ...] = ()
    error: CompileError | None = None

    @property
    def instructions(self) -> tuple[DrawInstruction, ...]:
        return self.pattern + self.haystack


class RenderPlanBuilder:
    """Turns the two field contents into ordered draw instructions.

    Rows and columns are relative to each field's origin.
    """

    def __init__(
        self,
        cache: MatchCache,
        palette: Palette | None = None,
        tokenizer: Tokenizer | None = highlight_events,
    ) -> None:
        self._cache = cache
        self._palette = palette or Palette()
        self._tokenizer = tokenizer

    @property
    def palette(self) -> Palette:
        return self._palette

    def build(self, pattern: str, haystack: str) -> RenderPlan:
        result = self._cache.lookup(pattern, haystack)
        if isinstance(result, CompileError):
            return RenderPlan(
                pattern=tuple(self.pattern_instructions(pattern)),
                haystack=tuple(self.error_instructions(result)),
                error=result,
            )
        return RenderPlan(
            pattern=tuple(self.pattern_instructions(pattern)),
            haystack=tuple(self.match_instructions(haystack, result)),
            matches=result,
        )

    def pattern_instructions(self, pattern: str) -> list[DrawInstruction]:
        syntax = colors_per_char(pattern, self._palette, self._tokenizer)
        brackets = bracket_depth_colors(pattern, self._palette)
        out: list[DrawInstruction] = []
        for col, ch in enumerate(pattern):
            color = brackets[col] if ch in "()" else syntax[col]
            out.append(DrawInstruction(Field.PATTERN, 0, col, color, ch))
        return out

    def match_instructions(
        self, haystack: str, matches: tuple[CaptureList, ...]
    ) -> list[DrawInstruction]:
        out = [DrawInstruction(Field.HAYSTACK, 0, 0, None, haystack)]
        for captures in matches:
            layering = assign_layers(captures)
            for group in layering.groups:
                out.append(
                    DrawInstruction(
                        Field.HAYSTACK,
                        0,
                        group.start,
                        self._palette.layer_color(group.layer),
                        haystack[group.start : group.end],
                    )
                )
            out.extend(self._connectors(layering))
        return out

    def _connectors(self, layering: Layering) -> list[DrawInstruction]:
        out: list[DrawInstruction] = []
        label_row = layering.max_layer + 2
        for group in layering.groups:
            color = self._palette.layer_color(group.layer)
            row = group.layer + 1
            last = max(group.end - 1, 0)

            for col in range(group.start, last):
                out.append(DrawInstruction(Field.HAYSTACK, row, col, color, "~"))
            out.append(DrawInstruction(Field.HAYSTACK, row, last, color, "|"))

            for line in range(row, layering.max_layer + 2):
                out.append(DrawInstruction(Field.HAYSTACK, line, group.start, color, "|"))

            out.append(
                DrawInstruction(Field.HAYSTACK, label_row, group.start, color, str(group.layer))
            )
        return out

    def error_instructions(self, error: CompileError) -> list[DrawInstruction]:
        out = [DrawInstruction(Field.HAYSTACK, 0, 0, self._palette.error_color, "ERROR")]
        for i, line in enumerate(str(error).splitlines()):
            out.append(DrawInstruction(Field.HAYSTACK, 1 + i, 0, None, line))
        log.debug("Rendering compile error for %r", error.pattern)
        return out
