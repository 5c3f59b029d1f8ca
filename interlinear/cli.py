"""Command-line interface for the interlinear glosser.

WHY: Users keep their example sentences in text or JSON files and want
aligned, tagged output without writing code. The CLI wires the whole
pipeline, from options loading through formatter output and file
saving, behind a single command.

HOW: Uses argparse to accept an input file, an optional JSON options
file, per-flag overrides, output format selection, and an output
directory. Glosses are processed with gloss_all(), or with
gloss_all_async() under asyncio.run() when --deferred is given. Status
messages go to stderr; output files are saved next to the source (or
to --output-dir).

RULES:
- Positional argument: input gloss file (.json, or plain text)
- --config options are applied first; explicit flags override them
- --formats: comma-separated formatter keys (default: INTERLINEAR_FORMATS,
  else all registered)
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-gloss-2.html)
- Invalid glosses are skipped and reported; exit 1 if none succeeded
- Configuration errors (InvalidPatternSet, bad options file) exit 1
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from interlinear.config import (
    DEFAULT_AUTO_TAG,
    DEFAULT_FIRST_LINE_ORIG,
    DEFAULT_FORMATS,
    DEFAULT_LAST_LINE_FREE,
    DEFAULT_SPACING,
)
from interlinear.core.batch import GlossOutcome, gloss_all, gloss_all_async, successful
from interlinear.core.ir import GlossDocument
from interlinear.core.options import GlossOptions, configure, load_options_file
from interlinear.core.source import load_glosses
from interlinear.formatters import FORMATTERS
from interlinear.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr.

    Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Pick a file name in ``output_dir`` that no earlier run has used.

    WHY: Rerunning the glosser after editing a source file should leave
    the previous rendering in place for comparison.

    HOW: The plain name ``{stem}{suffix}`` is tried first. After that a
    run number is placed before the extension, starting at 2:
    examples-gloss.html, examples-gloss-2.html, examples-gloss-3.html.

    Args:
        stem: Source file name without its extension.
        suffix: The formatter's suffix, e.g. "-gloss.html".
        output_dir: Directory the file will be written to.

    Returns:
        A path that does not exist yet.
    """
    candidate = output_dir / (stem + suffix)
    name, dot, extension = suffix.rpartition(".")
    if not name:
        # No extension to keep at the end.
        name, dot, extension = suffix, "", ""

    run = 2
    while candidate.exists():
        candidate = output_dir / "{}{}-{}{}{}".format(stem, name, run, dot, extension)
        run += 1
    return candidate


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    """Write one rendered output and return where it went.

    Text is written as UTF-8; bytes are written unchanged.
    """
    path = _resolve_output_path(stem, output.suffix, output_dir)
    if isinstance(output.content, bytes):
        path.write_bytes(output.content)
    else:
        path.write_text(output.content, encoding="utf-8")
    return path


def _parse_formats(raw: Optional[str]) -> List[str]:
    """Turn a comma-separated format list into registered formatter keys.

    An empty or missing list means every registered formatter.

    Raises:
        ValueError: If a key is not registered.
    """
    if not raw or not raw.strip():
        return list(FORMATTERS.keys())

    keys = [key.strip() for key in raw.split(",") if key.strip()]
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            raise ValueError("Unknown format '{}'. Available formats: {}".format(key, available))
    return keys


def build_options(args: argparse.Namespace) -> GlossOptions:
    """Resolve GlossOptions from an optional options file plus CLI flags.

    RULES:
    - Without --config, start from configure() defaults
    - Flags left at None do not override the file
    """
    options = load_options_file(args.config) if args.config else configure()

    overrides: Dict[str, Any] = {}
    for name in ("auto_tag", "first_line_orig", "last_line_free", "spacing"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    if args.deferred:
        overrides["deferred"] = True

    if overrides:
        options = options.replace(**overrides)
    return options


def _skipped_indices(outcomes: List[GlossOutcome]) -> List[int]:
    # Each failure was already logged as a warning by the batch runner.
    return [outcome.index for outcome in outcomes if not outcome.ok]


def run(args: argparse.Namespace) -> List[Path]:
    """Execute the full glossing pipeline for one input file.

    RULES:
    - Validate input file and output directory before any processing
    - Options and format errors abort before any gloss is processed
    - Each formatter's output is saved with conflict avoidance

    Returns:
        Paths of every file written.
    """
    input_path = Path(args.input_file).resolve()
    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    try:
        format_keys = _parse_formats(args.formats)
        options = build_options(args)
        _status("Reading glosses from {}...".format(input_path.name))
        glosses = load_glosses(input_path)
    except ValueError as e:
        # InvalidPatternSet, bad options file, malformed gloss file
        _fail(str(e))

    _status("  Found {} gloss(es)".format(len(glosses)))
    logger.debug("Options: %s", options)

    if options.deferred:
        outcomes = asyncio.run(gloss_all_async(glosses, options))
    else:
        outcomes = gloss_all(glosses, options)

    skipped = _skipped_indices(outcomes)
    processed = successful(outcomes)
    if glosses and not processed:
        _fail("No gloss could be processed")
    _status("  Processed {} gloss(es), skipped {}".format(len(processed), len(skipped)))

    document = GlossDocument(
        glosses=processed,
        source_filename=input_path.name,
        options=options,
        skipped=skipped,
    )

    _status("Formatting output...")
    saved_files: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key]()
        _status("  Running {} formatter...".format(formatter.name))
        for output in formatter.format(document):
            saved_path = _save_output(output, input_path.stem, output_dir)
            saved_files.append(saved_path)
            _status("  Saved: {}".format(saved_path.name))

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))
    return saved_files


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Separate from main() so tests can inspect the parser without running
    the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="interlinear",
        description="Align and tag interlinear glosses and write them as "
                    "HTML, plain text, or JSON.",
    )

    parser.add_argument(
        "input_file",
        help="Path to a gloss file (.json, or plain text with one tier per line "
             "and blank lines between glosses).",
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to a JSON options file (lexers, abbreviations, classes, flags).",
    )

    parser.add_argument(
        "--formats",
        default=DEFAULT_FORMATS or None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "--auto-tag",
        dest="auto_tag",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Tag grammatical abbreviations in gloss tiers "
             "(default: {}).".format(DEFAULT_AUTO_TAG),
    )

    parser.add_argument(
        "--first-line-orig",
        dest="first_line_orig",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Treat the first tier as an unaligned original line "
             "(default: {}).".format(DEFAULT_FIRST_LINE_ORIG),
    )

    parser.add_argument(
        "--last-line-free",
        dest="last_line_free",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Treat the last tier as an unaligned free translation "
             "(default: {}).".format(DEFAULT_LAST_LINE_FREE),
    )

    parser.add_argument(
        "--spacing",
        dest="spacing",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Keep spacing between gloss lines (default: {}).".format(DEFAULT_SPACING),
    )

    parser.add_argument(
        "--deferred",
        action="store_true",
        help="Process glosses on an event loop, yielding between glosses.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-gloss debug information to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    run(args)


if __name__ == "__main__":
    main()
