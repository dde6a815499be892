from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

log = logging.getLogger("rexlive.palette")


class HighlightCategory(Enum):
    FLAGS = "flags"
    ANCHORS = "anchors"
    QUANTIFIERS = "quantifiers"
    CHARACTER_CLASS = "character_class"
    OPERATOR = "operator"
    ESCAPE = "escape"
    GROUP = "group"


# Highest priority first; when several categories are open the earliest wins.
HIGHLIGHT_PRIORITY: tuple[HighlightCategory, ...] = (
    HighlightCategory.FLAGS,
    HighlightCategory.ANCHORS,
    HighlightCategory.QUANTIFIERS,
    HighlightCategory.CHARACTER_CLASS,
    HighlightCategory.OPERATOR,
    HighlightCategory.ESCAPE,
    HighlightCategory.GROUP,
)

CATEGORY_RANK: dict[HighlightCategory, int] = {
    category: rank for rank, category in enumerate(HIGHLIGHT_PRIORITY)
}

# Index 0 marks the whole match itself.
DEFAULT_LAYER_COLORS: tuple[str, ...] = (
    "white",
    "bright_green",
    "bright_yellow",
    "bright_blue",
    "bright_magenta",
    "bright_cyan",
)

DEFAULT_HIGHLIGHT_COLORS: dict[HighlightCategory, str] = {
    HighlightCategory.FLAGS: "bright_blue",
    HighlightCategory.ANCHORS: "bright_magenta",
    HighlightCategory.QUANTIFIERS: "magenta",
    HighlightCategory.CHARACTER_CLASS: "blue",
    HighlightCategory.OPERATOR: "yellow",
    HighlightCategory.ESCAPE: "bright_black",
    HighlightCategory.GROUP: "bright_black",
}

OVERFLOW_MODES = ("cycle", "clamp")


@dataclass(frozen=True)
class Palette:
    layer_colors: tuple[str, ...] = DEFAULT_LAYER_COLORS
    highlight_colors: Mapping[HighlightCategory, str] = field(
        default_factory=lambda: dict(DEFAULT_HIGHLIGHT_COLORS), hash=False
    )
    error_color: str = "red"
    layer_overflow: str = "cycle"

    def __post_init__(self) -> None:
        if not self.layer_colors:
            raise ValueError("palette needs at least one layer color")
        object.__setattr__(self, "layer_colors", tuple(self.layer_colors))
        object.__setattr__(
            self, "highlight_colors", MappingProxyType(dict(self.highlight_colors))
        )

    def layer_color(self, layer: int) -> str:
        """Color for a nesting depth; never indexes past the table."""
        count = len(self.layer_colors)
        if self.layer_overflow == "clamp":
            return self.layer_colors[min(max(layer, 0), count - 1)]
        return self.layer_colors[layer % count]

    def category_color(self, category: HighlightCategory) -> str | None:
        return self.highlight_colors.get(category)

    @classmethod
    def from_config(cls, colors_cfg: dict | None) -> Palette:
        if not colors_cfg:
            return cls()

        layers = tuple(str(c) for c in colors_cfg.get("layers", ()) if c)
        if not layers:
            layers = DEFAULT_LAYER_COLORS

        highlight = dict(DEFAULT_HIGHLIGHT_COLORS)
        for name, color in dict(colors_cfg.get("highlight", {})).items():
            try:
                highlight[HighlightCategory(name)] = str(color)
            except ValueError:
                log.warning("Unknown highlight category %r in config", name)

        overflow = str(colors_cfg.get("layer_overflow", "cycle"))
        if overflow not in OVERFLOW_MODES:
            log.warning("Unknown layer_overflow %r, using 'cycle'", overflow)
            overflow = "cycle"

        return cls(
            layer_colors=layers,
            highlight_colors=highlight,
            error_color=str(colors_cfg.get("error", "red")),
            layer_overflow=overflow,
        )
