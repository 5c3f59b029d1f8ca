"""Interlinear glosser: aligned, abbreviation-tagged linguistic glosses.

WHY: An interlinear gloss stacks parallel tiers (segmented form, gloss
abbreviations, free translation) whose morphemes must line up column by
column. Writing that alignment by hand is tedious and breaks on every
edit.

HOW: Three-stage pipeline per gloss: tokenize each tier, align the token
lists into word columns, tag grammatical abbreviations. The result is a
Gloss IR that pluggable formatters (HTML, plain text, JSON) render.

RULES:
- All formatters consume the same Gloss IR
- Adding an output format = one new formatter module, no core changes
- Options are resolved once and never mutated during a run
"""

from interlinear.core.aligner import align
from interlinear.core.assembler import assemble_gloss
from interlinear.core.batch import gloss_all, gloss_all_async
from interlinear.core.errors import InvalidGlossInput, InvalidPatternSet
from interlinear.core.options import GlossOptions, configure
from interlinear.core.tagger import tag
from interlinear.core.tokenizer import tokenize

__version__ = "0.1.0"

__all__ = [
    "GlossOptions",
    "InvalidGlossInput",
    "InvalidPatternSet",
    "align",
    "assemble_gloss",
    "configure",
    "gloss_all",
    "gloss_all_async",
    "tag",
    "tokenize",
]
