"""Lookup table from output format keys to formatter classes.

WHY: --formats and INTERLINEAR_FORMATS name outputs by short keys
("html", "plain_text", "json"). Resolving those keys in one table keeps
the CLI free of per-format branches.

HOW: FORMATTERS maps each key to a BaseFormatter subclass. The CLI
validates requested keys against it and instantiates one formatter per
key for each run.

RULES:
- Keys are snake_case and double as CLI format names
- Values are classes; formatters hold no state between runs
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from interlinear.formatters.html import HtmlFormatter
from interlinear.formatters.json_output import JsonFormatter
from interlinear.formatters.plain_text import PlainTextFormatter

if TYPE_CHECKING:
    from interlinear.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "html": HtmlFormatter,
    "plain_text": PlainTextFormatter,
    "json": JsonFormatter,
}
