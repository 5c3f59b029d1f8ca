"""Pattern-based tokenizer for gloss tiers.

WHY: A tier such as "amar-1SG {to be} PL" has to become the ordered
tokens that line up against the other tiers. What counts as a token is
configurable (lexer fragments), and authors need a way to keep
multi-word material together, which is what {brace groups} are for.

HOW: The pattern set is normalized once (list of fragments, a single
fragment, or a compiled pattern), fragments are joined by alternation
into one regex, and every non-overlapping match is collected left to
right. A match wrapped in braces is emitted without them.

RULES:
- Earlier fragments win at a given start position (regex alternation)
- "{...}" matches emit the text strictly between the braces; the inside
  is never re-tokenized
- Zero-length matches are kept as empty tokens, in order
- Text that matches nothing yields an empty list, not an error
- Anything other than str, a sequence of str, or re.Pattern raises
  InvalidPatternSet, as do empty lists, bytes patterns and fragments
  that do not compile
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Sequence, Tuple, Union

from interlinear.core.errors import InvalidPatternSet

PatternSet = Union[str, Sequence[str], re.Pattern]
"""Accepted lexer shapes before normalization."""

NormalizedPatternSet = Union[Tuple[str, ...], re.Pattern]


def normalize_pattern_set(pattern_set: PatternSet) -> NormalizedPatternSet:
    """Resolve the accepted lexer shapes into a tuple of fragments or a compiled pattern.

    RULES:
    - str re.Pattern → returned unchanged; a bytes pattern is rejected
    - str → one-element tuple
    - list/tuple of str → tuple, in declared order
    - empty sequence, non-str element, or any other type → InvalidPatternSet

    Raises:
        InvalidPatternSet: If the pattern set has an unrecognized shape.
    """
    if isinstance(pattern_set, re.Pattern):
        if not isinstance(pattern_set.pattern, str):
            raise InvalidPatternSet("Invalid lexer: compiled pattern must match text, not bytes")
        return pattern_set
    if isinstance(pattern_set, str):
        return (pattern_set,)
    if isinstance(pattern_set, (list, tuple)):
        if not pattern_set:
            raise InvalidPatternSet("Invalid lexer: the fragment list is empty")
        if not all(isinstance(fragment, str) for fragment in pattern_set):
            raise InvalidPatternSet("Unknown format for lexers: every fragment must be a string")
        return tuple(pattern_set)
    raise InvalidPatternSet(
        "Unknown format for lexers: expected a string, a list of strings or a "
        "compiled pattern, got {}".format(type(pattern_set).__name__)
    )


@lru_cache(maxsize=64)
def _compile_fragments(fragments: Tuple[str, ...]) -> re.Pattern:
    try:
        return re.compile("|".join(fragments))
    except re.error as exc:
        raise InvalidPatternSet("Invalid lexer: {}".format(exc)) from exc


def compile_pattern_set(pattern_set: PatternSet) -> re.Pattern:
    """Build the single combined matcher for a pattern set.

    Fragment tuples are compiled once and cached, so calling this for
    every tier of every gloss is cheap.

    Raises:
        InvalidPatternSet: If the shape is unrecognized or a fragment is not
            a valid regular expression.
    """
    normalized = normalize_pattern_set(pattern_set)
    if isinstance(normalized, re.Pattern):
        return normalized
    return _compile_fragments(normalized)


def _strip_braces(token: str) -> str:
    if len(token) >= 2 and token[0] == "{" and token[-1] == "}":
        return token[1:-1]
    return token


def tokenize(text: str, pattern_set: PatternSet) -> List[str]:
    """Split one tier's raw text into tokens.

    Args:
        text: The raw tier text.
        pattern_set: Lexer fragments, a single fragment, or a compiled pattern.

    Returns:
        Tokens in source order, brace groups unwrapped.

    Raises:
        InvalidPatternSet: If ``pattern_set`` is not a recognized shape.
    """
    lexer = compile_pattern_set(pattern_set)
    return [_strip_braces(match.group(0)) for match in lexer.finditer(text)]
