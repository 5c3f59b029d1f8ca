"""Unit tests for the abbreviation tagger.

WHY: Tagging decides which parts of a gloss cell are read as grammatical
codes and what each code means. A wrong boundary either hides a code or
invents one, and the N- negation convention is easy to get backwards.

HOW: Tests call tag() with a small table (see conftest.SMALL_TABLE) or
the built-in Leipzig table and compare the resulting parts literally.

RULES:
- A cell's text must always reproduce the source token.
- Verbatim table entries win over the N- negation reading.
"""

import pytest

from interlinear.abbreviations import LEIPZIG_ABBREVIATIONS
from interlinear.core.ir import Abbreviation
from interlinear.core.tagger import resolve_abbreviation, tag


class TestCodeBoundaries:
    """Which substrings are recognized as codes."""

    def test_person_digit_followed_by_code(self, small_table):
        assert tag("1SG", small_table).parts == (
            Abbreviation("1", "first person"),
            Abbreviation("SG", "singular"),
        )

    def test_stem_prefix_and_suffix(self, small_table):
        assert tag("AMAR-1SG", small_table).parts == (
            Abbreviation("AMAR"),
            "-",
            Abbreviation("1", "first person"),
            Abbreviation("SG", "singular"),
        )

    def test_lowercase_text_kept_as_plain_parts(self):
        assert tag("dog-PL", LEIPZIG_ABBREVIATIONS).parts == (
            "dog-",
            Abbreviation("PL", "plural"),
        )

    def test_digit_separated_by_period(self):
        assert tag("1.PL", LEIPZIG_ABBREVIATIONS).parts == (
            Abbreviation("1", "first person"),
            ".",
            Abbreviation("PL", "plural"),
        )

    def test_digit_outside_person_range_is_plain(self, small_table):
        assert tag("5SG", small_table).parts == ("5", Abbreviation("SG", "singular"))

    def test_multi_digit_number_is_plain(self, small_table):
        assert tag("10", small_table).parts == ("10",)

    def test_capitals_followed_by_lowercase_are_plain(self, small_table):
        assert tag("SGx", small_table).parts == ("SGx",)

    def test_all_lowercase_has_no_abbreviations(self, small_table):
        cell = tag("dog", small_table)
        assert cell.parts == ("dog",)
        assert cell.abbreviations == []

    def test_digit_after_non_ascii_letter(self, small_table):
        assert tag("é1SG", small_table).parts == (
            "é",
            Abbreviation("1", "first person"),
            Abbreviation("SG", "singular"),
        )

    def test_code_before_non_ascii_letter(self):
        assert tag("PSTé", {"PST": "past"}).parts == (Abbreviation("PST", "past"), "é")

    def test_lone_digit(self):
        assert tag("3", LEIPZIG_ABBREVIATIONS).parts == (Abbreviation("3", "third person"),)


class TestDefinitions:
    """How a matched code gets its definition."""

    def test_verbatim_entry(self, small_table):
        assert tag("NEG", small_table).parts == (Abbreviation("NEG", "negation / negative"),)

    def test_negated_code(self, small_table):
        assert tag("NPST", small_table).parts == (
            Abbreviation("NPST", "non-past", negated=True),
        )

    def test_verbatim_wins_over_negation(self):
        table = {"NPST": "nonpast tense", "PST": "past"}
        assert resolve_abbreviation("NPST", table) == Abbreviation("NPST", "nonpast tense")

    def test_bare_n_is_looked_up_verbatim(self, small_table):
        assert resolve_abbreviation("N", small_table) == Abbreviation("N", "neuter")

    def test_unknown_code_is_tagged_without_definition(self):
        assert tag("XYZ", {}).parts == (Abbreviation("XYZ"),)

    def test_unknown_negation_base(self, small_table):
        assert resolve_abbreviation("NX", small_table) == Abbreviation("NX")

    def test_definition_is_not_rescanned(self):
        cell = tag("A", {"A": "ABC DEF"})
        assert cell.parts == (Abbreviation("A", "ABC DEF"),)


class TestTextPreservation:
    """The tagged cell always reproduces its source token."""

    @pytest.mark.parametrize("token", [
        "AMAR-1SG",
        "ni-1SG.PRS",
        "dog-PL",
        "NPST-go",
        "3>1",
        "ka=NEG",
        "",
    ])
    def test_text_round_trip(self, token):
        assert tag(token, LEIPZIG_ABBREVIATIONS).text == token
