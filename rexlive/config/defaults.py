from __future__ import annotations

DEFAULT_CONFIG: dict = {
    "general": {
        "log_file": "~/.local/share/rexlive/rexlive.log",
        "log_level": "INFO",
    },
    "sessions": {
        "directory": "~/.local/share/rexlive/sessions",
        "save_on_exit": True,
    },
    "display": {
        "syntax_highlighting": True,
    },
    "colors": {
        # Index 0 marks the whole match; groups nest from index 1.
        "layers": [
            "white",
            "bright_green",
            "bright_yellow",
            "bright_blue",
            "bright_magenta",
            "bright_cyan",
        ],
        # "cycle" wraps deep nesting around the table, "clamp" reuses the last color.
        "layer_overflow": "cycle",
        "error": "red",
        "highlight": {
            "flags": "bright_blue",
            "anchors": "bright_magenta",
            "quantifiers": "magenta",
            "character_class": "blue",
            "operator": "yellow",
            "escape": "bright_black",
            "group": "bright_black",
        },
    },
}
