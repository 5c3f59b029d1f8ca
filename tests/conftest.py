"""Shared test fixtures for the interlinear test suite.

WHY: Most test modules need the same options, abbreviation table, and
the worked "amar / AMAR-1SG / I love" example. Centralizing them here
keeps every module testing against the same inputs.

HOW: Pytest fixtures provide explicit GlossOptions (never relying on
environment defaults), a small abbreviation table, and pre-assembled
Gloss objects and a GlossDocument for formatter tests.

RULES:
- Options fixtures set every boolean flag explicitly so a developer's
  .env cannot change test outcomes.
- The small table covers a person digit, a number code, and a code with
  a negatable base.
"""

from typing import Dict

import pytest

from interlinear.core.assembler import assemble_gloss
from interlinear.core.ir import GlossDocument, GlossInput, TierLine
from interlinear.core.options import configure

SMALL_TABLE: Dict[str, str] = {
    "1": "first person",
    "SG": "singular",
    "PST": "past",
    "N": "neuter",
    "NEG": "negation / negative",
}

EXPLICIT_DEFAULTS = {
    "autoTag": True,
    "firstLineOrig": False,
    "lastLineFree": True,
    "spacing": True,
    "async": False,
}


def make_options(**overrides):
    """Build options from the explicit defaults plus ``overrides``."""
    config = dict(EXPLICIT_DEFAULTS)
    config.update(overrides)
    return configure(config)


@pytest.fixture
def small_table():
    return dict(SMALL_TABLE)


@pytest.fixture
def default_options():
    """Library defaults with every flag pinned."""
    return make_options()


@pytest.fixture
def small_table_options():
    return make_options(abbreviations=SMALL_TABLE)


@pytest.fixture
def amar_gloss(default_options):
    """The worked example: one aligned word and a free translation."""
    return assemble_gloss(["amar", "AMAR-1SG", "I love"], default_options, label="1")


@pytest.fixture
def swahili_gloss(default_options):
    """Original line, two aligned tiers of unequal length, free translation."""
    tiers = GlossInput(
        tiers=(
            TierLine("Ninakupenda sana"),
            TierLine("ni-na-ku-penda sana ."),
            TierLine("1SG-PRS-2SG-love very"),
            TierLine("I love you very much"),
        ),
        label="2",
    )
    return assemble_gloss(tiers, default_options.replace(first_line_orig=True))


@pytest.fixture
def sample_document(default_options, amar_gloss, swahili_gloss):
    return GlossDocument(
        glosses=[amar_gloss, swahili_gloss],
        source_filename="examples.txt",
        options=default_options,
        skipped=[2],
    )
