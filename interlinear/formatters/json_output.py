"""JSON formatter exposing the Gloss IR to other tools.

WHY: Downstream tools (a typesetting step, a web front end that does its
own rendering, a corpus database) want the aligned and tagged result as
data rather than markup. Emitting the IR as JSON gives them one stable
contract.

HOW: Every gloss is serialized as its document-ordered items:
passthrough lines keep their tier index, kind, and content; aligned
words list their cells with line number, text, and parts (plain strings
or abbreviation objects). The output is validated against
schemas/gloss_output.schema.json before returning.

RULES:
- Item "kind" is "passthrough" or "alignedWord"
- Abbreviation parts: {"abbr", "definition" (null if unknown), "negated"}
- Cell "line" is aligned_offset + position within the word
- Indices of glosses that failed to process are listed under "skipped"
- Validate output against the schema before returning; raise on failure
- Output suffix: "-gloss.json"; media type: "application/json"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from interlinear.core.ir import (
    Abbreviation,
    AlignedWord,
    AnnotatedCell,
    Gloss,
    GlossDocument,
    PassthroughLine,
)
from interlinear.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "gloss_output.schema.json"


def _load_schema() -> dict[str, Any]:
    """Load the output JSON schema from disk.

    Cached at module level after first call to avoid repeated I/O.
    """
    with open(_SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


_CACHED_SCHEMA: dict[str, Any] | None = None


def _get_schema() -> dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        _CACHED_SCHEMA = _load_schema()
    return _CACHED_SCHEMA


def _part_to_json(part: Any) -> Any:
    if isinstance(part, Abbreviation):
        return {
            "abbr": part.code,
            "definition": part.definition,
            "negated": part.negated,
        }
    return part


def _cell_to_dict(cell: AnnotatedCell, line: int) -> dict[str, Any]:
    return {
        "line": line,
        "text": cell.text,
        "empty": cell.empty,
        "parts": [_part_to_json(part) for part in cell.parts],
    }


def _item_to_dict(item: Any, gloss: Gloss) -> dict[str, Any]:
    if isinstance(item, PassthroughLine):
        return {
            "kind": "passthrough",
            "tierIndex": item.tier_index,
            "lineKind": item.kind,
            "content": item.content,
        }
    if isinstance(item, AlignedWord):
        return {
            "kind": "alignedWord",
            "cells": [
                _cell_to_dict(cell, gloss.aligned_line_number(position))
                for position, cell in enumerate(item.cells)
            ],
        }
    raise TypeError("Unknown gloss item: {!r}".format(item))


def gloss_to_dict(gloss: Gloss) -> dict[str, Any]:
    """Serialize one Gloss into plain JSON-compatible data."""
    return {
        "label": gloss.label,
        "alignedOffset": gloss.aligned_offset,
        "spacing": gloss.spacing,
        "items": [_item_to_dict(item, gloss) for item in gloss.items],
    }


class JsonFormatter(BaseFormatter):
    """Formatter that produces schema-validated JSON of the Gloss IR.

    RULES:
    - One top-level object: {"source", "skipped", "glosses"}
    - Schema validation is mandatory — raises on invalid output
    - Output suffix is "-gloss.json"
    """

    @property
    def name(self) -> str:
        return "JSON"

    def format(self, document: GlossDocument) -> list[FormatterOutput]:
        """Convert the processed glosses into JSON.

        Raises:
            jsonschema.ValidationError: If the generated JSON does not
                conform to the gloss output schema.
        """
        output: dict[str, Any] = {
            "source": document.source_filename,
            "skipped": list(document.skipped),
            "glosses": [gloss_to_dict(gloss) for gloss in document.glosses],
        }

        jsonschema.validate(instance=output, schema=_get_schema())

        content = json.dumps(output, indent=2, ensure_ascii=False)

        return [
            FormatterOutput(
                suffix="-gloss.json",
                content=content,
                media_type="application/json",
            )
        ]
