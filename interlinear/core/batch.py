"""Batch processing of many glosses, synchronously or deferred.

WHY: A source document usually holds many glosses. One malformed gloss
must not stop the rest, and a host running an event loop may want the
work interleaved with its own tasks instead of done in one block.

HOW: gloss_all() runs assemble_gloss() over each input in order and
records either the Gloss or the InvalidGlossInput it raised.
gloss_all_async() does the same but, when options.deferred is set,
awaits asyncio.sleep(0) before each gloss so other tasks get a turn.

RULES:
- Glosses are independent; results come back in input order
- InvalidGlossInput is caught per gloss, logged, and stored on the outcome
- Any other exception propagates: it is a bug, not bad input
- Sync and async variants produce identical outcomes for the same input
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from interlinear.core.assembler import TierLike, assemble_gloss
from interlinear.core.errors import InvalidGlossInput
from interlinear.core.ir import Gloss, GlossInput
from interlinear.core.options import GlossOptions, configure

logger = logging.getLogger(__name__)

GlossSource = Union[GlossInput, Iterable[TierLike]]


@dataclass
class GlossOutcome:
    """Result of processing one gloss in a batch.

    RULES:
    - index: position of the gloss in the batch input
    - exactly one of gloss / error is set
    """

    index: int
    gloss: Optional[Gloss] = None
    error: Optional[InvalidGlossInput] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _process_one(index: int, source: GlossSource, options: GlossOptions) -> GlossOutcome:
    try:
        gloss = assemble_gloss(source, options)
    except InvalidGlossInput as exc:
        logger.warning("Skipping gloss %d: %s", index, exc)
        return GlossOutcome(index=index, error=exc)
    return GlossOutcome(index=index, gloss=gloss)


def gloss_all(
    glosses: Iterable[GlossSource],
    options: Optional[GlossOptions] = None,
) -> List[GlossOutcome]:
    """Process every gloss, collecting per-gloss results.

    Args:
        glosses: GlossInputs or tier sequences, in document order.
        options: Resolved options; None means configure() defaults.

    Returns:
        One GlossOutcome per input, in input order.
    """
    if options is None:
        options = configure()
    return [_process_one(index, source, options) for index, source in enumerate(glosses)]


async def gloss_all_async(
    glosses: Iterable[GlossSource],
    options: Optional[GlossOptions] = None,
) -> List[GlossOutcome]:
    """Async variant of gloss_all() that can yield between glosses.

    When ``options.deferred`` is true, control returns to the event loop
    before each gloss is processed.
    """
    if options is None:
        options = configure()

    outcomes: List[GlossOutcome] = []
    for index, source in enumerate(glosses):
        if options.deferred:
            await asyncio.sleep(0)
        outcomes.append(_process_one(index, source, options))
    return outcomes


def successful(outcomes: Iterable[GlossOutcome]) -> List[Gloss]:
    """Return the Gloss of every outcome that succeeded, in order."""
    return [outcome.gloss for outcome in outcomes if outcome.gloss is not None]
