"""Tier classification, tokenizing, alignment, tagging, and Gloss IR construction.

WHY: A gloss arrives as a handful of raw tier strings. Some of them
(the original-orthography line, the free translation, anything marked
"do not align") must be shown as-is; the rest must be split into tokens,
lined up column by column, and have their abbreviations tagged. This
module is the bridge from raw tiers to the Gloss IR every formatter
consumes.

HOW: Three passes over one gloss, in fixed order:
  1. Classify each tier as passthrough (original, free, no_align) or
     aligned, from the option flags and the tier's own no_align flag.
  2. Tokenize every aligned tier with the configured lexer, then align
     the token lists into word columns.
  3. Turn each column into an AlignedWord, tagging every cell after the
     first when auto-tagging is on, and splice the words into document
     order at the first aligned tier.

RULES:
- Tier 0 is "original" when first_line_orig; the last tier is "free"
  when last_line_free; a TierLine with no_align=True is "no_align"
- Passthrough tiers are never tokenized, aligned or tagged
- Within a word, position 0 (the segmented form) is never tagged
- Empty cells become AnnotatedCell.blank() and are never tagged
- aligned_offset is the tier index of the first aligned tier, None if
  no tier was aligned
- Zero tiers or non-string tier text raises InvalidGlossInput
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from interlinear.core.aligner import align
from interlinear.core.errors import InvalidGlossInput
from interlinear.core.ir import (
    EMPTY_CELL,
    FREE_TRANSLATION,
    NO_ALIGN,
    ORIGINAL,
    AlignedWord,
    AnnotatedCell,
    Gloss,
    GlossInput,
    Item,
    PassthroughLine,
    TierLine,
)
from interlinear.core.options import GlossOptions, configure
from interlinear.core.tagger import tag
from interlinear.core.tokenizer import tokenize

logger = logging.getLogger(__name__)

TierLike = Union[str, TierLine]


def normalize_tiers(tiers: Union[GlossInput, Iterable[TierLike]]) -> Tuple[TierLine, ...]:
    """Coerce raw tier input into TierLine objects.

    RULES:
    - A GlossInput contributes its tiers unchanged
    - Plain strings become TierLine(text) with no_align=False
    - Anything else, non-string TierLine text, or zero tiers raises
      InvalidGlossInput

    Raises:
        InvalidGlossInput: If the input is not a valid tiered-text unit.
    """
    if isinstance(tiers, GlossInput):
        tiers = tiers.tiers
    if isinstance(tiers, (str, bytes)) or tiers is None:
        raise InvalidGlossInput("Invalid gloss: expected a sequence of tiers, got {}".format(
            type(tiers).__name__,
        ))

    try:
        items = list(tiers)
    except TypeError as exc:
        raise InvalidGlossInput("Invalid gloss: tiers are not iterable") from exc

    result: List[TierLine] = []
    for index, tier in enumerate(items):
        if isinstance(tier, TierLine):
            if not isinstance(tier.text, str):
                raise InvalidGlossInput("Invalid gloss: tier {} text is not a string".format(index))
            result.append(tier)
        elif isinstance(tier, str):
            result.append(TierLine(text=tier))
        else:
            raise InvalidGlossInput("Invalid gloss: tier {} is a {}, not text".format(
                index, type(tier).__name__,
            ))

    if not result:
        raise InvalidGlossInput("Invalid gloss: a gloss needs at least one tier")

    return tuple(result)


def classify_tier(index: int, tier: TierLine, tier_count: int, options: GlossOptions) -> Optional[str]:
    """Return the passthrough kind for a tier, or None when it should be aligned."""
    if options.first_line_orig and index == 0:
        return ORIGINAL
    if options.last_line_free and index == tier_count - 1:
        return FREE_TRANSLATION
    if tier.no_align:
        return NO_ALIGN
    return None


def build_word(column: Sequence[str], options: GlossOptions) -> AlignedWord:
    """Turn one aligned column into an AlignedWord, tagging cells after the first."""
    cells: List[AnnotatedCell] = []
    for position, value in enumerate(column):
        if value == EMPTY_CELL:
            cells.append(AnnotatedCell.blank())
        elif position > 0 and options.auto_tag:
            cells.append(tag(value, options.abbreviations))
        else:
            cells.append(AnnotatedCell.plain(value))
    return AlignedWord(cells=tuple(cells))


def assemble_gloss(
    tiers: Union[GlossInput, Iterable[TierLike]],
    options: Optional[GlossOptions] = None,
    label: Optional[str] = None,
) -> Gloss:
    """Process one gloss from raw tiers into the Gloss IR.

    Args:
        tiers: A GlossInput, or tier strings/TierLines in document order.
        options: Resolved options; None means configure() defaults.
        label: Optional identifier carried through to the output. Defaults
            to the GlossInput's label.

    Returns:
        The Gloss with passthrough lines and aligned words in document order.

    Raises:
        InvalidGlossInput: If ``tiers`` is not a valid tiered-text unit.
    """
    if options is None:
        options = configure()
    if label is None and isinstance(tiers, GlossInput):
        label = tiers.label

    tier_lines = normalize_tiers(tiers)
    tier_count = len(tier_lines)

    passthrough: List[PassthroughLine] = []
    token_sequences: List[List[str]] = []
    aligned_offset: Optional[int] = None

    for index, tier in enumerate(tier_lines):
        kind = classify_tier(index, tier, tier_count, options)
        if kind is not None:
            passthrough.append(PassthroughLine(tier_index=index, content=tier.text, kind=kind))
            continue

        token_sequences.append(tokenize(tier.text, options.lexer))
        if aligned_offset is None:
            aligned_offset = index

    columns = align(token_sequences)
    words = [build_word(column, options) for column in columns]

    logger.debug(
        "Assembled gloss %s: %d tiers, %d aligned, %d words",
        label or "<unlabelled>", tier_count, len(token_sequences), len(words),
    )

    # Splice the aligned block in front of the first passthrough line that
    # comes after the first aligned tier.
    items: List[Item] = []
    words_placed = aligned_offset is None
    for line in passthrough:
        if not words_placed and line.tier_index > aligned_offset:
            items.extend(words)
            words_placed = True
        items.append(line)
    if not words_placed:
        items.extend(words)

    return Gloss(
        items=tuple(items),
        tiers=tier_lines,
        aligned_offset=aligned_offset,
        spacing=options.spacing,
        label=label,
    )
