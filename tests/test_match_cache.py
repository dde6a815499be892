from __future__ import annotations

import re

from rexlive.engine.match_cache import CompileError, MatchCache, find_captures
from rexlive.engine.models import Span


class _CallCounter:
    """Counts calls into the compile and match steps."""

    def __init__(self) -> None:
        self.compiles = 0
        self.matches = 0

    def compile(self, pattern: str) -> re.Pattern[str]:
        self.compiles += 1
        return re.compile(pattern)

    def find(self, compiled: re.Pattern[str], haystack: str):
        self.matches += 1
        return find_captures(compiled, haystack)


def _cache() -> tuple[MatchCache, _CallCounter]:
    calls = _CallCounter()
    return MatchCache(compile_fn=calls.compile, find_captures_fn=calls.find), calls


def test_nested_groups_capture_list() -> None:
    cache = MatchCache()
    result = cache.lookup("(a(b)c)", "abc")
    assert result == ((Span(0, 3), Span(1, 2)),)


def test_multiple_matches_in_order() -> None:
    cache = MatchCache()
    result = cache.lookup(r"(\d)x", "1x 2x")
    assert result == (
        (Span(0, 2), Span(0, 1)),
        (Span(3, 5), Span(3, 4)),
    )


def test_unmatched_and_duplicate_groups_are_dropped() -> None:
    cache = MatchCache()
    # group 1 did not participate, group 2 repeats the whole match
    result = cache.lookup("(a)|(b)", "b")
    assert result == ((Span(0, 1),),)


def test_no_match_returns_empty() -> None:
    cache = MatchCache()
    assert cache.lookup("z", "abc") == ()


def test_same_pair_is_computed_once() -> None:
    cache, calls = _cache()
    first = cache.lookup("a+", "caaat")
    second = cache.lookup("a+", "caaat")
    assert first is second
    assert calls.compiles == 1
    assert calls.matches == 1
    assert cache.hits == 1
    assert cache.misses == 1


def test_new_haystack_reuses_compiled_pattern() -> None:
    cache, calls = _cache()
    cache.lookup("a+", "aa")
    cache.lookup("a+", "baab")
    assert calls.compiles == 1
    assert calls.matches == 2
    assert cache.stats() == {"patterns": 1, "haystacks": 2, "hits": 0, "misses": 2}


def test_compile_error_is_cached() -> None:
    cache, calls = _cache()
    first = cache.lookup("(a", "a")
    second = cache.lookup("(a", "something else")
    assert isinstance(first, CompileError)
    assert first is second
    assert calls.compiles == 1
    assert calls.matches == 0


def test_compile_error_message_points_at_position() -> None:
    cache = MatchCache()
    err = cache.lookup("(a", "")
    assert isinstance(err, CompileError)
    assert err.position == 0
    lines = str(err).splitlines()
    assert lines[0] == "regex parse error:"
    assert lines[1] == "    (a"
    assert lines[2] == "    ^"
    assert lines[3].startswith("error: missing )")


def test_huge_repeat_is_a_compile_error() -> None:
    cache = MatchCache()
    err = cache.lookup("a{99999999999}", "a")
    assert isinstance(err, CompileError)


def test_empty_matches_are_kept() -> None:
    cache = MatchCache()
    result = cache.lookup("x*", "ab")
    assert result == ((Span(0, 0),), (Span(1, 1),), (Span(2, 2),))


def test_groups_repeating_an_earlier_span_collapse() -> None:
    cache = MatchCache()
    assert cache.lookup("((a))", "a") == ((Span(0, 1),),)


def test_deeply_nested_pattern_is_a_compile_error() -> None:
    cache, calls = _cache()
    pattern = "(" * 1000 + "a" + ")" * 1000
    err = cache.lookup(pattern, "a")
    assert isinstance(err, CompileError)
    assert cache.lookup(pattern, "aa") is err
    assert calls.compiles == 1
