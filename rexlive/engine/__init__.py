from __future__ import annotations

from .highlight import HighlightMaterializer, colors_per_char, materialize
from .layering import assign_layers, bracket_depth_colors
from .match_cache import CompileError, MatchCache
from .models import (
    CaptureList,
    DrawInstruction,
    Field,
    LayeredSpan,
    Layering,
    Span,
)
from .palette import HIGHLIGHT_PRIORITY, HighlightCategory, Palette
from .render_plan import RenderPlan, RenderPlanBuilder

__all__ = [
    "CaptureList",
    "CompileError",
    "DrawInstruction",
    "Field",
    "HIGHLIGHT_PRIORITY",
    "HighlightCategory",
    "HighlightMaterializer",
    "LayeredSpan",
    "Layering",
    "MatchCache",
    "Palette",
    "RenderPlan",
    "RenderPlanBuilder",
    "Span",
    "assign_layers",
    "bracket_depth_colors",
    "colors_per_char",
    "materialize",
]
