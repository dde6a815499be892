from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

log = logging.getLogger("rexlive.session")

INVALID_NAME_CHARS = (" ", "/", "\\")
RESERVED_NAMES = ("", ".", "..")


class SessionError(Exception):
    """Base class for session file problems."""


class InvalidSessionName(SessionError):
    def __init__(self, name: str, char: str | None = None) -> None:
        if char is None:
            super().__init__(f"session name is reserved: `{name}`")
        else:
            super().__init__(f"session name contains invalid char: `{char}`")
        self.name = name
        self.char = char


class InvalidSessionFormat(SessionError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"session file contains invalid format: {reason}")
        self.reason = reason


@dataclass
class FieldState:
    text: str = ""
    cursor: int = 0

    def dump(self) -> str:
        return f"{self.cursor}:{self.text}"

    @classmethod
    def parse(cls, line: str) -> FieldState:
        cursor, sep, text = line.partition(":")
        if not sep:
            raise InvalidSessionFormat(
                "the cursor position and content must be separated with a `:`"
            )
        try:
            position = int(cursor)
        except ValueError:
            raise InvalidSessionFormat(
                "cursor position must be a non-negative integer"
            ) from None
        if position < 0:
            raise InvalidSessionFormat("cursor position must be a non-negative integer")
        return cls(text=text, cursor=min(position, len(text)))


def validate_name(name: str) -> None:
    if name in RESERVED_NAMES:
        raise InvalidSessionName(name)
    for ch in name:
        if ch in INVALID_NAME_CHARS:
            raise InvalidSessionName(name, ch)


@dataclass
class Session:
    """Contents of both fields, optionally persisted under a name.

    A session without a name is a scratch session and is never written.
    """

    name: str | None = None
    directory: Path | None = None
    pattern: FieldState = field(default_factory=FieldState)
    haystack: FieldState = field(default_factory=FieldState)

    @property
    def title(self) -> str:
        return f"--- {self.name if self.name is not None else '<scratch>'} ---"

    @property
    def path(self) -> Path | None:
        if self.name is None or self.directory is None:
            return None
        return self.directory / self.name

    @property
    def is_empty(self) -> bool:
        return not self.pattern.text and not self.haystack.text

    @classmethod
    def scratch(cls) -> Session:
        return cls()

    @classmethod
    def fetch(cls, name: str, directory: str | Path) -> Session:
        validate_name(name)
        directory = Path(directory).expanduser()
        session = cls(name=name, directory=directory)
        path = directory / name

        if not path.exists():
            log.info("Starting new session %r", name)
            return session

        try:
            lines = path.read_text(encoding="utf-8").split("\n")
        except (OSError, UnicodeDecodeError) as exc:
            raise SessionError(f"cannot read session file {path}: {exc}") from exc
        if len(lines) != 2:
            raise InvalidSessionFormat("session file must include exactly 2 lines")
        session.pattern = FieldState.parse(lines[0])
        session.haystack = FieldState.parse(lines[1])
        log.info("Loaded session %r from %s", name, path)
        return session

    def save(self) -> None:
        path = self.path
        if path is None:
            return
        if self.is_empty:
            # Nothing to keep; drop any earlier snapshot.
            path.unlink(missing_ok=True)
            log.info("Session %r is empty, removed %s", self.name, path)
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            f"{self.pattern.dump()}\n{self.haystack.dump()}", encoding="utf-8"
        )
        log.info("Saved session %r to %s", self.name, path)
