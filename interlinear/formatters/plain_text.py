"""Plain text formatter with space-padded word columns.

WHY: Glosses also end up in e-mails, plain-text notes, and terminal
output where there is no markup to lean on. Padding each word column
to its widest cell gives the same visual alignment in any monospace
font.

HOW: Each gloss is written in document order. Passthrough lines are
copied verbatim. The aligned block is written as one row per aligned
tier, each word padded to the display width of its widest cell and
words separated by two spaces. Every gloss is prefixed with its label
in parentheses, and continuation lines are indented to match. After all
glosses, an "Abbreviations:" legend lists each tagged code that has a
definition.

RULES:
- Column width = widest cell by display width: combining marks count
  0, East Asian wide/fullwidth characters count 2
- Blank cells are padded with spaces, never dropped
- No trailing whitespace on any line
- Blank line between glosses
- Legend: one "CODE  definition" line per distinct code, sorted by code
- Output suffix: "-gloss.txt"; media type: "text/plain"
"""

from __future__ import annotations

import unicodedata
from typing import Dict, List

from interlinear.core.ir import AlignedWord, Gloss, GlossDocument, PassthroughLine
from interlinear.formatters.base import BaseFormatter, FormatterOutput

_COLUMN_GAP = "  "


def display_width(text: str) -> int:
    """Return the number of monospace columns ``text`` occupies."""
    width = 0
    for char in text:
        if unicodedata.combining(char):
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


def _pad(text: str, width: int) -> str:
    return text + " " * (width - display_width(text))


def render_aligned_rows(words: List[AlignedWord]) -> List[str]:
    """Render aligned words as one padded row per aligned tier."""
    if not words:
        return []

    widths = [max(display_width(cell.text) for cell in word.cells) for word in words]
    row_count = len(words[0].cells)

    rows: List[str] = []
    for position in range(row_count):
        cells = [
            _pad(word.cells[position].text, width)
            for word, width in zip(words, widths)
        ]
        rows.append(_COLUMN_GAP.join(cells).rstrip())
    return rows


def render_gloss_lines(gloss: Gloss) -> List[str]:
    """Render one gloss in document order, without its label prefix."""
    lines: List[str] = []
    pending: List[AlignedWord] = []

    for item in gloss.items:
        if isinstance(item, AlignedWord):
            pending.append(item)
            continue
        if pending:
            lines.extend(render_aligned_rows(pending))
            pending = []
        if isinstance(item, PassthroughLine):
            lines.append(item.content.rstrip())

    lines.extend(render_aligned_rows(pending))
    return lines


def _with_label(lines: List[str], label: str) -> List[str]:
    if not label:
        return lines
    prefix = "({}) ".format(label)
    indent = " " * len(prefix)
    return [
        ((prefix if i == 0 else indent) + line).rstrip()
        for i, line in enumerate(lines)
    ]


def collect_definitions(glosses: List[Gloss]) -> Dict[str, str]:
    """Map every tagged code with a definition to that definition."""
    found: Dict[str, str] = {}
    for gloss in glosses:
        for word in gloss.words:
            for cell in word.cells:
                for abbreviation in cell.abbreviations:
                    if abbreviation.definition is not None:
                        found.setdefault(abbreviation.code, abbreviation.definition)
    return found


class PlainTextFormatter(BaseFormatter):
    """Formatter that produces column-aligned plain text glosses.

    RULES:
    - One block per gloss, labelled "(label)"
    - Words padded to equal column widths across aligned tiers
    - Trailing abbreviation legend when any known code was tagged
    - Output suffix: "-gloss.txt"
    """

    @property
    def name(self) -> str:
        return "Plain Text"

    def format(self, document: GlossDocument) -> List[FormatterOutput]:
        """Convert the processed glosses into plain text.

        Args:
            document: The processed glosses and their options.

        Returns:
            A single-element list containing the plain text output.
        """
        blocks: List[str] = []
        for gloss in document.glosses:
            lines = _with_label(render_gloss_lines(gloss), gloss.label or "")
            if lines:
                blocks.append("\n".join(lines))

        definitions = collect_definitions(document.glosses)
        if definitions:
            code_width = max(len(code) for code in definitions)
            legend = ["Abbreviations:"]
            for code in sorted(definitions):
                legend.append("  {}  {}".format(code.ljust(code_width), definitions[code]))
            blocks.append("\n".join(legend))

        content = "\n\n".join(blocks)
        if content:
            content += "\n"

        return [
            FormatterOutput(
                suffix="-gloss.txt",
                content=content,
                media_type="text/plain",
            )
        ]
