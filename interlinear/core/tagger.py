"""Abbreviation tagger for gloss cells.

WHY: Gloss tiers are full of grammatical abbreviations ("1SG", "PST",
"NPST"). Readers want each one marked and, where the code is known, its
meaning available on hover. Codes the table does not know still get
marked so they stand out visually.

HOW: One combined regex is scanned once over the source token:
  (\\b[0-4])(?=[A-Z]|\\b)  — a person digit 0-4 at a word start, followed
                           by an upper-case letter or a word boundary
  (N?[A-Z]+\\b)            — a run of upper-case letters ending at a word
                           boundary, optionally led by the negation "N"
Text between matches is kept as plain string parts; each match becomes
an Abbreviation carrying its definition, if one can be resolved.

RULES:
- A digit immediately followed by capitals splits in two: "1SG" → "1" + "SG"
- Lookup order: the code verbatim; else, for "N..." codes longer than one
  character, the code without its leading "N", with "non-" prefixed to
  the definition; else no definition
- Unknown codes are still tagged (definition None), never an error
- The source token is scanned exactly once; output is never rescanned
- \\b is the ASCII word boundary, so a code next to a non-ASCII
  letter is still found: "PSTé" yields "PST", "é1SG" yields "1" + "SG"
"""

from __future__ import annotations

import re
from typing import List, Mapping

from interlinear.config import NEGATION_PREFIX
from interlinear.core.ir import Abbreviation, AnnotatedCell, Part

TAG_RE = re.compile(r"(\b[0-4])(?=[A-Z]|\b)|(N?[A-Z]+\b)", re.ASCII)


def resolve_abbreviation(code: str, table: Mapping[str, str]) -> Abbreviation:
    """Look up one matched code, applying the N- negation convention."""
    if code in table:
        return Abbreviation(code=code, definition=table[code])

    maybe_negative = code.startswith("N") and len(code) > 1
    if maybe_negative and code[1:] in table:
        return Abbreviation(
            code=code,
            definition=NEGATION_PREFIX + table[code[1:]],
            negated=True,
        )

    return Abbreviation(code=code)


def tag(token: str, table: Mapping[str, str]) -> AnnotatedCell:
    """Split a token into plain text and tagged abbreviations.

    Args:
        token: One cell of a gloss tier, e.g. ``"AMAR-1SG"``.
        table: Abbreviation code → definition.

    Returns:
        An AnnotatedCell whose ``text`` equals ``token``.
    """
    parts: List[Part] = []
    position = 0

    for match in TAG_RE.finditer(token):
        start, end = match.span()
        if start > position:
            parts.append(token[position:start])
        parts.append(resolve_abbreviation(match.group(0), table))
        position = end

    if position < len(token):
        parts.append(token[position:])

    return AnnotatedCell(parts=tuple(parts))
