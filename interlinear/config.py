"""Configuration defaults, presentation class names, and .env loading.

WHY: Centralizes every configurable default so it is easy to find and
override. Lexer fragments and class names are plain data, not buried in
logic, so both the options layer and the renderers read from one place.

HOW: python-dotenv loads the .env file on import. Boolean defaults come
from environment variables and fall back to the glossing library's
historical defaults. Lexer fragments and class names are module-level
tuples and dicts.

RULES:
- DEFAULT_LEXERS lists the brace group before the bare token, so a
  brace-delimited run wins over being split at whitespace
- Class names match the original stylesheet (gloss__*, gloss--*)
- Boolean env values are "true"/"false", case-insensitive
- Defaults here are starting points; core.options.configure() is what
  turns user input into an immutable GlossOptions
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the working directory (where the command is run from)
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean from the environment, keeping ``default`` when unset."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() == "true"


# ---------------------------------------------------------------------------
# Tokenizer patterns
# ---------------------------------------------------------------------------

DEFAULT_LEXERS: tuple[str, ...] = (
    r"{(.*?)}",
    r"([^\s]+)",
)
"""Alternation fragments: a {brace group} first, then any non-whitespace run."""

# ---------------------------------------------------------------------------
# Gloss processing defaults
# ---------------------------------------------------------------------------

DEFAULT_AUTO_TAG = _env_bool("INTERLINEAR_AUTO_TAG", True)
DEFAULT_SPACING = _env_bool("INTERLINEAR_SPACING", True)
DEFAULT_FIRST_LINE_ORIG = _env_bool("INTERLINEAR_FIRST_LINE_ORIG", False)
DEFAULT_LAST_LINE_FREE = _env_bool("INTERLINEAR_LAST_LINE_FREE", True)
DEFAULT_DEFERRED = _env_bool("INTERLINEAR_DEFERRED", False)
DEFAULT_FORMATS = os.getenv("INTERLINEAR_FORMATS", "")
"""Comma-separated formatter keys; empty means every registered formatter."""

# ---------------------------------------------------------------------------
# Presentation class names
# ---------------------------------------------------------------------------

DEFAULT_CLASSES: dict[str, str] = {
    "glossed": "gloss--glossed",
    "noSpace": "gloss--no-space",
    "words": "gloss__words",
    "word": "gloss__word",
    "line": "gloss__line",
    "lineNum": "gloss__line--",
    "original": "gloss__line--original",
    "freeTranslation": "gloss__line--free",
    "noAlign": "gloss__line--no-align",
    "hidden": "gloss__line--hidden",
    "abbr": "gloss__abbr",
}
"""Class names used by the HTML formatter; each can be overridden individually."""

NEGATION_PREFIX = "non-"
"""Prepended to a base definition when a code is read as its N-negated form."""
