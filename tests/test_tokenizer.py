"""Unit tests for the tokenizer and lexer pattern sets.

WHY: Every aligned tier passes through the tokenizer first. A token that
is split in the wrong place shifts every later column of the gloss, so
the brace-group rule and the accepted lexer shapes must hold exactly.

HOW: Tests drive tokenize() and normalize_pattern_set() directly with
the default fragments, single-string lexers, compiled patterns, and
invalid shapes.

RULES:
- Expected token lists are written out literally, never computed.
- Invalid shapes must raise InvalidPatternSet, a ValueError subclass.
"""

import re

import pytest

from interlinear.config import DEFAULT_LEXERS
from interlinear.core.errors import InvalidPatternSet
from interlinear.core.tokenizer import compile_pattern_set, normalize_pattern_set, tokenize


class TestDefaultLexers:
    """The default fragments: brace groups first, then non-whitespace runs."""

    def test_splits_on_whitespace(self):
        assert tokenize("ni-na-ku-penda sana", DEFAULT_LEXERS) == ["ni-na-ku-penda", "sana"]

    def test_collapses_runs_of_whitespace(self):
        assert tokenize("  a\tb   c  ", DEFAULT_LEXERS) == ["a", "b", "c"]

    def test_brace_group_is_one_token(self):
        assert tokenize("{a b c} d", DEFAULT_LEXERS) == ["a b c", "d"]

    def test_brace_group_in_the_middle(self):
        assert tokenize("in {New York} today", DEFAULT_LEXERS) == ["in", "New York", "today"]

    def test_unclosed_brace_is_ordinary_text(self):
        assert tokenize("{abc def", DEFAULT_LEXERS) == ["{abc", "def"]

    def test_empty_brace_group_gives_empty_token(self):
        assert tokenize("{} x", DEFAULT_LEXERS) == ["", "x"]

    def test_empty_text_gives_no_tokens(self):
        assert tokenize("", DEFAULT_LEXERS) == []

    def test_whitespace_only_gives_no_tokens(self):
        assert tokenize("   \t ", DEFAULT_LEXERS) == []

    def test_deterministic(self):
        text = "{Ninakupenda sana} ni-na-ku-penda ."
        assert tokenize(text, DEFAULT_LEXERS) == tokenize(text, DEFAULT_LEXERS)


class TestLexerShapes:
    """A single string, a fragment list, or a compiled pattern are accepted."""

    def test_single_string(self):
        assert tokenize("a-b-c", r"[a-z]") == ["a", "b", "c"]

    def test_compiled_pattern(self):
        assert tokenize("a1 22 b333", re.compile(r"\d+")) == ["1", "22", "333"]

    def test_fragment_order_decides_alternation(self):
        assert tokenize("abc", ["ab", "abc"]) == ["ab"]
        assert tokenize("abc", ["abc", "ab"]) == ["abc"]

    def test_zero_length_matches_are_kept(self):
        assert tokenize("ab", r"x*") == ["", "", ""]

    def test_zero_length_match_after_token(self):
        assert tokenize("xa", r"x*") == ["x", "", ""]

    def test_custom_lexer_splits_on_hyphens(self):
        assert tokenize("AMAR-1SG", [r"[^\s-]+"]) == ["AMAR", "1SG"]


class TestNormalizePatternSet:
    """Normalization resolves the accepted shapes once."""

    def test_string_becomes_one_element_tuple(self):
        assert normalize_pattern_set("x+") == ("x+",)

    def test_list_becomes_tuple(self):
        assert normalize_pattern_set(["a", "b"]) == ("a", "b")

    def test_compiled_pattern_returned_unchanged(self):
        pattern = re.compile("x")
        assert normalize_pattern_set(pattern) is pattern

    def test_compile_is_cached(self):
        assert compile_pattern_set(("a", "b")) is compile_pattern_set(["a", "b"])


class TestInvalidPatternSets:
    """Unrecognized lexer shapes raise InvalidPatternSet."""

    @pytest.mark.parametrize("bad", [42, None, {"a": "b"}, b"bytes"])
    def test_unknown_type(self, bad):
        with pytest.raises(InvalidPatternSet):
            tokenize("x", bad)

    def test_non_string_element(self):
        with pytest.raises(InvalidPatternSet):
            tokenize("x", ["a", 1])

    def test_empty_fragment_list(self):
        with pytest.raises(InvalidPatternSet):
            tokenize("x", [])

    def test_fragment_that_does_not_compile(self):
        with pytest.raises(InvalidPatternSet):
            tokenize("x", ["("])

    def test_bytes_pattern(self):
        with pytest.raises(InvalidPatternSet):
            normalize_pattern_set(re.compile(b"x"))

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            tokenize("x", 42)
