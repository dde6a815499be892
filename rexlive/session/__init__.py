from __future__ import annotations

from .persist import (
    FieldState,
    InvalidSessionFormat,
    InvalidSessionName,
    Session,
    SessionError,
)

__all__ = [
    "FieldState",
    "InvalidSessionFormat",
    "InvalidSessionName",
    "Session",
    "SessionError",
]
