from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .models import CaptureList, Span

log = logging.getLogger("rexlive.cache")

CompileFn = Callable[[str], re.Pattern[str]]
FindCapturesFn = Callable[[re.Pattern[str], str], Iterable[CaptureList]]


@dataclass(frozen=True, slots=True)
class CompileError:
    """An invalid pattern, kept for the lifetime of the cache."""

    message: str
    pattern: str
    position: int | None = None

    @classmethod
    def from_re_error(cls, pattern: str, err: re.error) -> CompileError:
        return cls(message=err.msg, pattern=pattern, position=err.pos)

    def __str__(self) -> str:
        lines = ["regex parse error:", f"    {self.pattern}"]
        if self.position is not None:
            lines.append("    " + " " * self.position + "^")
        lines.append(f"error: {self.message}")
        return "\n".join(lines)


def find_captures(compiled: re.Pattern[str], haystack: str) -> list[CaptureList]:
    """Collect every non-overlapping match as a capture list.

    Groups that did not take part in a match are dropped, and so are
    groups covering exactly the same span as an earlier entry (``(a(b)c)``
    yields the whole match and ``b``, not the whole match twice).  A
    capture list may therefore be shorter than ``compiled.groups + 1``.
    """
    matches: list[CaptureList] = []
    for m in compiled.finditer(haystack):
        spans: list[Span] = []
        for idx in range(compiled.groups + 1):
            start, end = m.span(idx)
            if start == -1:
                continue
            span = Span(start, end)
            if span in spans:
                continue
            spans.append(span)
        matches.append(tuple(spans))
    return matches


class _CompiledEntry:
    def __init__(self, compiled: re.Pattern[str]) -> None:
        self.compiled = compiled
        self.captures: dict[str, tuple[CaptureList, ...]] = {}


class MatchCache:
    """Two-level memo: pattern -> compile outcome, then haystack -> captures.

    Entries are never evicted; the cache lives as long as its owner.
    """

    def __init__(
        self,
        compile_fn: CompileFn = re.compile,
        find_captures_fn: FindCapturesFn = find_captures,
    ) -> None:
        self._compile = compile_fn
        self._find_captures = find_captures_fn
        self._patterns: dict[str, _CompiledEntry | CompileError] = {}
        self.hits: int = 0
        self.misses: int = 0

    def lookup(
        self, pattern: str, haystack: str
    ) -> tuple[CaptureList, ...] | CompileError:
        entry = self._patterns.get(pattern)
        if entry is None:
            entry = self._compile_entry(pattern)
            self._patterns[pattern] = entry

        if isinstance(entry, CompileError):
            return entry

        captures = entry.captures.get(haystack)
        if captures is not None:
            self.hits += 1
            return captures

        self.misses += 1
        captures = tuple(self._find_captures(entry.compiled, haystack))
        entry.captures[haystack] = captures
        log.debug(
            "Matched %r against %d chars: %d match(es)",
            pattern,
            len(haystack),
            len(captures),
        )
        return captures

    def _compile_entry(self, pattern: str) -> _CompiledEntry | CompileError:
        try:
            compiled = self._compile(pattern)
        except re.error as err:
            log.debug("Pattern %r failed to compile: %s", pattern, err.msg)
            return CompileError.from_re_error(pattern, err)
        except OverflowError as err:
            # repeat counts past MAXREPEAT
            log.debug("Pattern %r failed to compile: %s", pattern, err)
            return CompileError(message=str(err), pattern=pattern)
        except RecursionError:
            # sre's parser recurses once per open group
            log.debug("Pattern of %d chars nests too deeply to compile", len(pattern))
            return CompileError(message="pattern nested too deeply", pattern=pattern)
        return _CompiledEntry(compiled)

    def stats(self) -> dict[str, int]:
        haystacks = sum(
            len(entry.captures)
            for entry in self._patterns.values()
            if isinstance(entry, _CompiledEntry)
        )
        return {
            "patterns": len(self._patterns),
            "haystacks": haystacks,
            "hits": self.hits,
            "misses": self.misses,
        }

    def __len__(self) -> int:
        return len(self._patterns)
