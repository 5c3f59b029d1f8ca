"""Intermediate representation dataclasses for processed glosses.

WHY: The tokenizer, aligner and tagger are pure functions over strings,
but renderers (HTML, plain text, JSON) each need the same structured
result: which tiers passed through untouched, which were aligned into
word columns, where the aligned block belongs in document order, and
which substrings of each cell are grammatical abbreviations. The IR is
the single contract between the glossing core and every formatter.

HOW: Value objects from the leaves up:
  TierLine        — one raw input tier, optionally flagged "do not align"
  GlossInput      — the ordered tiers of one gloss
  Abbreviation    — one tagged code with its (possibly negated) definition
  AnnotatedCell   — a cell split into plain text and Abbreviation parts
  PassthroughLine — a tier that bypassed tokenizing and alignment
  AlignedWord     — one column: one AnnotatedCell per aligned tier
  Gloss           — document-ordered lines plus the aligned-block offset
  GlossDocument   — every processed gloss of one source file

RULES:
- EMPTY_CELL is the aligner's filler; it becomes AnnotatedCell.blank()
- AnnotatedCell.text always reproduces the untagged source token
- Gloss.items keeps original tier order; all AlignedWords sit together
  at the position of the first aligned tier
- aligned_offset is the tier index of the first aligned tier, or None
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from interlinear.core.options import GlossOptions

EMPTY_CELL = ""
"""Placeholder the aligner puts where a tier has no token at a column."""

# Passthrough line kinds.
ORIGINAL = "original"
FREE_TRANSLATION = "free"
NO_ALIGN = "no_align"


@dataclass(frozen=True)
class TierLine:
    """One raw tier of a gloss as extracted from the source document."""

    text: str
    no_align: bool = False


@dataclass(frozen=True)
class GlossInput:
    """The tiers of one gloss, in document order."""

    tiers: Tuple[TierLine, ...]
    label: Optional[str] = None


@dataclass(frozen=True)
class Abbreviation:
    """A grammatical abbreviation found inside a token.

    RULES:
    - code: the matched text, displayed as-is (e.g. "1", "SG", "NPST")
    - definition: None when the code is not in the abbreviation table
    - negated: True when the definition came from the N-stripped code
    """

    code: str
    definition: Optional[str] = None
    negated: bool = False


Part = Union[str, Abbreviation]


@dataclass(frozen=True)
class AnnotatedCell:
    """One aligned cell, split into plain text and abbreviation parts.

    WHY: Renderers disagree on how an abbreviation looks (an <abbr> with a
    title, a bare code, a JSON object), so the tagger returns structure
    instead of markup and each formatter decides the presentation.
    """

    parts: Tuple[Part, ...] = ()
    empty: bool = False

    @classmethod
    def plain(cls, text: str) -> AnnotatedCell:
        return cls(parts=(text,) if text else ())

    @classmethod
    def blank(cls) -> AnnotatedCell:
        return cls(parts=(), empty=True)

    @property
    def text(self) -> str:
        return "".join(
            part.code if isinstance(part, Abbreviation) else part
            for part in self.parts
        )

    @property
    def abbreviations(self) -> List[Abbreviation]:
        return [part for part in self.parts if isinstance(part, Abbreviation)]


@dataclass(frozen=True)
class PassthroughLine:
    """A tier rendered verbatim: original line, free translation, or no-align line."""

    tier_index: int
    content: str
    kind: str


@dataclass(frozen=True)
class AlignedWord:
    """One word column: the cell of every aligned tier at one position."""

    cells: Tuple[AnnotatedCell, ...]


Item = Union[PassthroughLine, AlignedWord]


@dataclass
class Gloss:
    """A fully processed gloss, ready for a formatter.

    WHY: The rendering side has to splice aligned output back into the
    original document at the right place, next to lines that were left
    alone. Keeping both kinds in one ordered sequence makes that a
    straight walk.

    RULES:
    - items: PassthroughLines in tier order, with every AlignedWord
      inserted as one contiguous run where the first aligned tier was
    - tiers: the untouched input, so renderers can keep hidden source lines
    - aligned_offset: line number of the first aligned cell, None if no
      tier was aligned
    - spacing: presentation flag, passed through unchanged
    """

    items: Tuple[Item, ...]
    tiers: Tuple[TierLine, ...]
    aligned_offset: Optional[int]
    spacing: bool = True
    label: Optional[str] = None

    @property
    def words(self) -> List[AlignedWord]:
        return [item for item in self.items if isinstance(item, AlignedWord)]

    @property
    def passthrough_lines(self) -> List[PassthroughLine]:
        return [item for item in self.items if isinstance(item, PassthroughLine)]

    def aligned_line_number(self, position: int) -> int:
        """Line number of the cell at ``position`` within an aligned word."""
        return (self.aligned_offset or 0) + position


@dataclass
class GlossDocument:
    """Every successfully processed gloss of one source, plus the options used."""

    glosses: List[Gloss]
    source_filename: str
    options: GlossOptions
    skipped: List[int] = field(default_factory=list)
