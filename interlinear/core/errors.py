"""Error types raised by the glossing core.

WHY: The core is deterministic and side-effect-free, so every failure is
an input-validity problem. Callers need to tell a bad configuration apart
from a single bad gloss so a batch can keep going after the latter.

HOW: Two concrete exceptions share a ValueError base, so the CLI can
report them the same way it reports any other configuration error.

RULES:
- InvalidPatternSet is raised at configuration time, never mid-batch
- InvalidGlossInput is fatal to one gloss only
- No retries: nothing here is transient
"""

from __future__ import annotations


class GlossError(ValueError):
    """Base class for glossing errors."""


class InvalidPatternSet(GlossError):
    """The lexer configuration is not a list of strings, a string, or a compiled pattern."""


class InvalidGlossInput(GlossError):
    """A gloss handed to the assembler is not a valid tiered-text unit."""
