from __future__ import annotations

import copy
import logging
import os
import tomllib
from pathlib import Path

from rexlive.config.defaults import DEFAULT_CONFIG

log = logging.getLogger("rexlive.config")

CONFIG_HEADER = "# rexlive configuration. Delete a key to get its default back.\n"


def default_config_path() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME", "~/.config")
    return Path(xdg).expanduser() / "rexlive" / "config.toml"


def deep_merge(base: dict, override: dict) -> dict:
    """Return ``base`` updated from ``override``, table by table."""
    merged = base.copy()
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """User settings from ``config.toml`` layered over ``DEFAULT_CONFIG``.

    A missing file is written out from the defaults so there is something
    to edit. A file that does not parse is reported and the defaults are
    used for the session; the file itself is left untouched.
    """

    def __init__(self, config_path: str | None = None) -> None:
        if config_path is not None:
            self._config_path = Path(config_path).expanduser()
        else:
            self._config_path = default_config_path()
        self._config: dict = {}

    @property
    def path(self) -> Path:
        return self._config_path

    @property
    def config(self) -> dict:
        if not self._config:
            self._config = self.load()
        return self._config

    def load(self) -> dict:
        defaults = copy.deepcopy(DEFAULT_CONFIG)
        if not self._config_path.exists():
            try:
                self.save(defaults)
            except OSError as exc:
                log.warning("Could not write default config to %s: %s", self._config_path, exc)
            self._config = defaults
            return defaults

        try:
            with open(self._config_path, "rb") as f:
                user_config = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            log.warning("Ignoring malformed config %s: %s", self._config_path, exc)
            self._config = defaults
            return defaults

        self._config = deep_merge(defaults, user_config)
        return self._config

    def save(self, config: dict) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config_path, "w", encoding="utf-8") as f:
            f.write(CONFIG_HEADER + dump_toml(config))

    def get(self, key_path: str, default: object = None) -> object:
        """Look up a dotted key such as ``"colors.highlight.escape"``."""
        current: object = self.config
        for key in key_path.split("."):
            if not isinstance(current, dict) or key not in current:
                return default
            current = current[key]
        return current

    def get_path(self, key_path: str) -> Path | None:
        """A path-valued setting with ``~`` expanded; None when left blank."""
        value = self.get(key_path)
        if not value:
            return None
        return Path(str(value)).expanduser()


# ------------------------------------------------------------------
# TOML writer (tomllib only reads)
# ------------------------------------------------------------------


def dump_toml(table: dict, prefix: str = "") -> str:
    scalars: list[str] = []
    subtables: list[str] = []
    for key, value in table.items():
        if isinstance(value, dict):
            name = f"{prefix}.{key}" if prefix else key
            subtables.append(f"\n[{name}]\n" + dump_toml(value, prefix=name))
        else:
            scalars.append(f"{key} = {toml_value(value)}\n")
    return "".join(scalars) + "".join(subtables)


def toml_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, list):
        return "[" + ", ".join(toml_value(item) for item in value) + "]"
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'
