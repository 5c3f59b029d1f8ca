"""Reading glosses out of source files.

WHY: The glossing core only wants tier strings in document order. Users
keep their examples in files, so something has to find the glosses and
pull the tiers out, while staying out of the core's way.

HOW: Two formats.
  Plain text — glosses separated by blank lines, one tier per line.
    Lines starting with "#" are comments. A tier starting with "~" is
    marked no-align (the "~" and one following space are dropped).
  JSON — {"glosses": [{"label": ..., "tiers": [...]}]}, where a tier is
    a string or {"text": ..., "noAlign": bool}. Validated with
    jsonschema before use.
load_glosses() picks the format from the file suffix.

RULES:
- Tier order is preserved exactly
- Trailing whitespace is stripped from plain-text tier lines; leading
  whitespace is kept
- Files are read as UTF-8
- A JSON file that violates the schema raises ValueError
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jsonschema

from interlinear.core.ir import GlossInput, TierLine

NO_ALIGN_MARKER = "~"
COMMENT_MARKER = "#"

_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "glosses.schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def _get_schema() -> Dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _parse_tier_line(line: str) -> TierLine:
    if line.startswith(NO_ALIGN_MARKER):
        text = line[len(NO_ALIGN_MARKER):]
        if text.startswith(" "):
            text = text[1:]
        return TierLine(text=text, no_align=True)
    return TierLine(text=line)


def read_text_glosses(text: str) -> List[GlossInput]:
    """Split plain text into glosses, one tier per line.

    Args:
        text: The whole file content.

    Returns:
        GlossInputs in document order, labelled by their 1-based position.
    """
    glosses: List[GlossInput] = []
    current: List[TierLine] = []

    def _flush() -> None:
        if current:
            glosses.append(GlossInput(
                tiers=tuple(current),
                label=str(len(glosses) + 1),
            ))
            current.clear()

    for raw in text.splitlines():
        line = raw.rstrip()
        if not line.strip():
            _flush()
            continue
        if line.lstrip().startswith(COMMENT_MARKER):
            continue
        current.append(_parse_tier_line(line))

    _flush()
    return glosses


def read_json_glosses(data: Any) -> List[GlossInput]:
    """Build GlossInputs from a decoded JSON document.

    Raises:
        ValueError: If ``data`` does not match the gloss source schema.
    """
    try:
        jsonschema.validate(instance=data, schema=_get_schema())
    except jsonschema.ValidationError as exc:
        raise ValueError("Invalid gloss file: {}".format(exc.message)) from exc

    glosses: List[GlossInput] = []
    for position, entry in enumerate(data["glosses"], start=1):
        tiers = []
        for tier in entry["tiers"]:
            if isinstance(tier, str):
                tiers.append(TierLine(text=tier))
            else:
                tiers.append(TierLine(text=tier["text"], no_align=tier.get("noAlign", False)))
        glosses.append(GlossInput(
            tiers=tuple(tiers),
            label=entry.get("label", str(position)),
        ))
    return glosses


def load_glosses(path: Union[str, Path]) -> List[GlossInput]:
    """Load glosses from a file, choosing the format by suffix.

    RULES:
    - ".json" → JSON format (schema-validated)
    - anything else → plain-text format

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a JSON file is malformed or violates the schema.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError("Gloss file {} is not valid JSON: {}".format(path.name, exc)) from exc
        return read_json_glosses(data)
    return read_text_glosses(text)
