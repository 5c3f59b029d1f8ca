"""Column aligner for tokenized tiers.

WHY: Tiers of one gloss rarely have the same number of tokens (a free
comment may be shorter, a gloss line may have an extra morpheme). The
renderer needs a rectangular matrix so that cell i of every tier sits in
the same visual column.

HOW: The number of columns is the length of the longest tier. Each
column takes the token at that index from every tier, or EMPTY_CELL
where a tier has run out.

RULES:
- Every column has exactly one cell per input tier, in tier order
- Missing cells are EMPTY_CELL, never omitted
- No tiers, or only empty tiers, gives zero columns
- Depends only on sequence lengths; token contents are copied verbatim
"""

from __future__ import annotations

from typing import List, Sequence

from interlinear.core.ir import EMPTY_CELL


def align(sequences: Sequence[Sequence[str]]) -> List[List[str]]:
    """Transpose ragged tier token lists into padded word columns.

    Args:
        sequences: One token sequence per tier.

    Returns:
        Columns indexed by word position; each column holds one cell per tier.
    """
    column_count = max((len(sequence) for sequence in sequences), default=0)

    return [
        [
            sequence[i] if i < len(sequence) else EMPTY_CELL
            for sequence in sequences
        ]
        for i in range(column_count)
    ]
