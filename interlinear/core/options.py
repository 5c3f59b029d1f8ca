"""Immutable glossing options and their normalization.

WHY: The glossing stages read the same handful of settings (lexers,
abbreviation table, tagging and tier flags). Resolving user input into
one frozen value up front means no stage ever sniffs types at run time,
and the same options can be shared by any number of concurrent gloss
runs without copying.

HOW: configure() accepts a mapping in snake_case, in the original
camelCase (autoTag, firstLineOrig, ...), or in the long interface names
(patternSet, firstTierIsOriginal, lastTierIsFreeTranslation). It
validates the lexer shape (raising InvalidPatternSet), falls back to
config.py defaults for anything absent, and returns a frozen
GlossOptions. load_options_file() validates a JSON file's shape
with jsonschema before handing it to configure().

RULES:
- A user abbreviation table replaces the default, never merges with it
- Class names merge per key: unspecified ones keep their default
- Invalid lexers raise before any GlossOptions exists (no partial state)
- configure(x) == configure(x) for any valid x
- Unknown keys and non-mapping abbreviation values are logged and ignored
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import jsonschema

from interlinear.abbreviations import LEIPZIG_ABBREVIATIONS
from interlinear.config import (
    DEFAULT_AUTO_TAG,
    DEFAULT_CLASSES,
    DEFAULT_DEFERRED,
    DEFAULT_FIRST_LINE_ORIG,
    DEFAULT_LAST_LINE_FREE,
    DEFAULT_LEXERS,
    DEFAULT_SPACING,
)
from interlinear.core.tokenizer import NormalizedPatternSet, compile_pattern_set, normalize_pattern_set

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "options.schema.json"

# Alternative option names (camelCase and long forms) → GlossOptions field names.
_KEY_ALIASES: Dict[str, str] = {
    "autoTag": "auto_tag",
    "firstLineOrig": "first_line_orig",
    "lastLineFree": "last_line_free",
    "async": "deferred",
    "patternSet": "lexers",
    "firstTierIsOriginal": "first_line_orig",
    "lastTierIsFreeTranslation": "last_line_free",
}

_BOOL_FIELDS = ("auto_tag", "spacing", "first_line_orig", "last_line_free", "deferred")
_KNOWN_FIELDS = frozenset(_BOOL_FIELDS + ("lexers", "abbreviations", "classes"))

_DEFAULT_ABBREVIATIONS = MappingProxyType(dict(LEIPZIG_ABBREVIATIONS))
_DEFAULT_CLASS_MAP = MappingProxyType(dict(DEFAULT_CLASSES))


@dataclass(frozen=True)
class GlossOptions:
    """Resolved, read-only settings for one processing run.

    RULES:
    - lexers: tuple of regex fragments, or a compiled re.Pattern
    - abbreviations: read-only code → definition table
    - auto_tag: tag cells after the first in each aligned word
    - first_line_orig / last_line_free: pass those tiers through unaligned
    - spacing: presentation flag, passed to renderers unchanged
    - deferred: yield to the event loop between glosses in async batches
    - classes: read-only presentation class names for the HTML formatter
    """

    lexers: NormalizedPatternSet = DEFAULT_LEXERS
    abbreviations: Mapping[str, str] = field(default_factory=lambda: _DEFAULT_ABBREVIATIONS)
    auto_tag: bool = DEFAULT_AUTO_TAG
    spacing: bool = DEFAULT_SPACING
    first_line_orig: bool = DEFAULT_FIRST_LINE_ORIG
    last_line_free: bool = DEFAULT_LAST_LINE_FREE
    deferred: bool = DEFAULT_DEFERRED
    classes: Mapping[str, str] = field(default_factory=lambda: _DEFAULT_CLASS_MAP)

    @property
    def lexer(self) -> re.Pattern:
        """The combined, compiled tokenizer pattern."""
        return compile_pattern_set(self.lexers)

    def replace(self, **changes: Any) -> GlossOptions:
        """Return new options with ``changes`` applied, re-validating everything."""
        current = {
            "lexers": self.lexers,
            "abbreviations": self.abbreviations,
            "classes": self.classes,
        }
        for name in _BOOL_FIELDS:
            current[name] = getattr(self, name)
        current.update(changes)
        return configure(current)


def _canonical_keys(config: Mapping[str, Any]) -> Dict[str, Any]:
    resolved: Dict[str, Any] = {}
    for key, value in config.items():
        name = _KEY_ALIASES.get(key, key)
        if name not in _KNOWN_FIELDS:
            logger.warning("Ignoring unknown option %r", key)
            continue
        resolved[name] = value
    return resolved


def _resolve_abbreviations(value: Any) -> Mapping[str, str]:
    if value is None:
        return _DEFAULT_ABBREVIATIONS
    if not isinstance(value, Mapping):
        logger.warning(
            "Ignoring abbreviations of type %s; using the built-in table",
            type(value).__name__,
        )
        return _DEFAULT_ABBREVIATIONS
    return MappingProxyType({str(code): str(text) for code, text in value.items()})


def _resolve_classes(value: Any) -> Mapping[str, str]:
    if not value:
        return _DEFAULT_CLASS_MAP
    merged = dict(DEFAULT_CLASSES)
    for key, name in dict(value).items():
        if key not in merged:
            logger.warning("Ignoring unknown class key %r", key)
            continue
        if name:
            merged[key] = str(name)
    return MappingProxyType(merged)


def configure(config: Optional[Mapping[str, Any]] = None) -> GlossOptions:
    """Normalize a user configuration mapping into GlossOptions.

    WHY: The lexer setting alone can arrive as a list, a string, or a
    compiled pattern. Resolving that here, once, keeps the tokenizer and
    every other stage free of shape checks.

    HOW: Map alternative key names to field names, validate lexers by compiling
    them, resolve the abbreviation table and class names, and read
    booleans with config.py defaults for anything absent.

    Args:
        config: Option mapping; None means every default.

    Returns:
        A frozen GlossOptions.

    Raises:
        InvalidPatternSet: If ``lexers`` has an unrecognized shape or does
            not compile.
    """
    resolved = _canonical_keys(config or {})

    lexers_value = resolved.get("lexers")
    lexers = DEFAULT_LEXERS if lexers_value is None else normalize_pattern_set(lexers_value)
    # Compile now so a broken fragment fails at configuration time.
    compile_pattern_set(lexers)

    flags = {
        name: bool(resolved[name])
        for name in _BOOL_FIELDS
        if resolved.get(name) is not None
    }

    return GlossOptions(
        lexers=lexers,
        abbreviations=_resolve_abbreviations(resolved.get("abbreviations")),
        classes=_resolve_classes(resolved.get("classes")),
        **flags,
    )


def _load_schema() -> Dict[str, Any]:
    with open(_SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


def load_options_file(path: Union[str, Path]) -> GlossOptions:
    """Load GlossOptions from a JSON options file.

    RULES:
    - File must be UTF-8 JSON with an object at the top level
    - Shape is checked with jsonschema (booleans, string maps) first
    - Lexer content is checked by configure() and raises InvalidPatternSet

    Raises:
        ValueError: If the file is not valid JSON or violates the schema.
        InvalidPatternSet: If the lexers are invalid.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError("Options file {} is not valid JSON: {}".format(path, exc)) from exc

    try:
        jsonschema.validate(instance=data, schema=_load_schema())
    except jsonschema.ValidationError as exc:
        raise ValueError("Invalid options file {}: {}".format(path, exc.message)) from exc

    return configure(data)
