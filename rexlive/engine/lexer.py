"""
Tokenizer for Python ``re`` patterns.

A Pygments ``RegexLexer`` whose token types live under ``Token.Regex``.
Nested token types carry nested meaning: an escape written inside a
character class is ``Token.Regex.CharacterClass.Escape``, so both the
class and the escape are "open" at that position.

``highlight_events`` folds the flat token stream into the
Start/End/Source event stream consumed by the highlight materializer.
"""

from __future__ import annotations

from collections.abc import Iterator

from pygments.lexer import RegexLexer
from pygments.token import Comment, Error, Punctuation, Text, Token, _TokenType

from .models import HighlightEnd, HighlightEvent, HighlightStart, Source
from .palette import HighlightCategory

Regex = Token.Regex

FLAGS = Regex.Flags
ANCHOR = Regex.Anchor
QUANTIFIER = Regex.Quantifier
CHARACTER_CLASS = Regex.CharacterClass
OPERATOR = Regex.Operator
ESCAPE = Regex.Escape
GROUP = Regex.Group

CATEGORY_BY_TOKEN_NAME: dict[str, HighlightCategory] = {
    "Flags": HighlightCategory.FLAGS,
    "Anchor": HighlightCategory.ANCHORS,
    "Quantifier": HighlightCategory.QUANTIFIERS,
    "CharacterClass": HighlightCategory.CHARACTER_CLASS,
    "Operator": HighlightCategory.OPERATOR,
    "Escape": HighlightCategory.ESCAPE,
    "Group": HighlightCategory.GROUP,
}

_QUANTIFIER = r"(?:[*+?]|\{\d*,?\d*\})[?+]?"
_ESCAPE = r"\\(?:x[0-9a-fA-F]{2}|u[0-9a-fA-F]{4}|U[0-9a-fA-F]{8}|N\{[^}]*\}|[0-7]{1,3}|\d+|.)"


class TokenizerError(Exception):
    """Raised when a pattern cannot be tokenized at all."""


class PythonRegexLexer(RegexLexer):
    """Lexer for the pattern syntax accepted by :mod:`re`."""

    name = "PythonRegex"
    aliases = ["pyregex"]

    tokens = {
        "root": [
            (r"\(\?#[^)]*\)?", Comment),
            (r"\(\?P<", Punctuation, "group-name"),
            (r"\(\?P=", Punctuation, "group-name"),
            (r"\(\?:", Punctuation),
            (r"\(\?<?[=!]", OPERATOR),
            (r"\(\?[aiLmsux]+(?:-[imsx]+)?[:)]", FLAGS),
            (r"\(\?-[imsx]+:", FLAGS),
            (r"[()]", Punctuation),
            (r"\[\^?\]?", CHARACTER_CLASS, "character-class"),
            (r"[$^]", ANCHOR),
            (r"\\[bBAZz]", ANCHOR),
            (r"\\[dDsSwW]", CHARACTER_CLASS),
            (r"\.", CHARACTER_CLASS),
            (_QUANTIFIER, QUANTIFIER),
            (r"\|", OPERATOR),
            (r"\\$", Error),
            (_ESCAPE, ESCAPE),
            (r"[^\\()\[\]|^$.*+?{]+", Text),
            (r".", Text),
        ],
        "group-name": [
            (r"[^>)]+", GROUP),
            (r"[>)]", Punctuation, "#pop"),
        ],
        "character-class": [
            (r"\]", CHARACTER_CLASS, "#pop"),
            (r"\\[dDsSwW]", CHARACTER_CLASS),
            (r"\\$", Error),
            (_ESCAPE, CHARACTER_CLASS.Escape),
            (r"[^\\\]]+", CHARACTER_CLASS),
        ],
    }


def token_categories(ttype: _TokenType) -> list[HighlightCategory]:
    """Category path of a token type, outermost first."""
    if ttype not in Regex:
        return []
    return [
        CATEGORY_BY_TOKEN_NAME[part]
        for part in ttype[1:]
        if part in CATEGORY_BY_TOKEN_NAME
    ]


def _byte_offsets(text: str) -> list[int]:
    offsets = [0]
    total = 0
    for ch in text:
        total += len(ch.encode("utf-8"))
        offsets.append(total)
    return offsets


def highlight_events(source: bytes) -> Iterator[HighlightEvent]:
    """Tokenize *source* and yield a well-formed highlight event stream.

    ``Source`` ranges are byte offsets into *source*.
    """
    try:
        text = source.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TokenizerError(f"pattern is not valid UTF-8: {exc}") from exc
    return _events(text)


def _events(text: str) -> Iterator[HighlightEvent]:
    offsets = _byte_offsets(text)
    lexer = PythonRegexLexer()
    open_categories: list[HighlightCategory] = []

    for index, ttype, value in lexer.get_tokens_unprocessed(text):
        if not value:
            continue
        wanted = token_categories(ttype)

        shared = 0
        while (
            shared < len(open_categories)
            and shared < len(wanted)
            and open_categories[shared] is wanted[shared]
        ):
            shared += 1

        while len(open_categories) > shared:
            open_categories.pop()
            yield HighlightEnd()
        for category in wanted[shared:]:
            open_categories.append(category)
            yield HighlightStart(category)

        yield Source(offsets[index], offsets[index + len(value)])

    while open_categories:
        open_categories.pop()
        yield HighlightEnd()
