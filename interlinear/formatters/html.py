"""HTML formatter reproducing the glossing library's markup.

WHY: The most common home for an interlinear gloss is a web page, and
existing stylesheets target a known set of gloss__* classes. This
formatter emits that markup so glosses drop into those pages unchanged.

HOW: Each gloss becomes one container div. Tiers are walked in order:
passthrough tiers become numbered <p> lines carrying their kind class;
at the first aligned tier the aligned block is emitted (one word div per
column, one numbered <p> per cell); every aligned tier's raw text is kept
after it as a hidden line. Abbreviations become <abbr> elements with the
definition as their title. A short stylesheet makes the page usable on
its own.

RULES:
- Class names come from document.options.classes
- Line numbers: passthrough = tier index; aligned cell =
  aligned_offset + position within the word
- Blank cells render as &nbsp; so columns keep their height
- Unknown abbreviations get an <abbr> without a title
- Every piece of user text is HTML-escaped
- Output suffix: "-gloss.html"; media type: "text/html"
"""

from __future__ import annotations

import html
from typing import List, Mapping

from interlinear.core.ir import (
    FREE_TRANSLATION,
    NO_ALIGN,
    ORIGINAL,
    Abbreviation,
    AnnotatedCell,
    Gloss,
    GlossDocument,
)
from interlinear.formatters.base import BaseFormatter, FormatterOutput

_KIND_CLASS_KEYS = {
    ORIGINAL: "original",
    FREE_TRANSLATION: "freeTranslation",
    NO_ALIGN: "noAlign",
}

_NBSP = "&nbsp;"


def _stylesheet(classes: Mapping[str, str]) -> str:
    return "\n".join([
        ".{words} {{ display: flex; flex-wrap: wrap; }}".format(**classes),
        ".{word} {{ margin: 0 1em 0.5em 0; }}".format(**classes),
        ".{line} {{ margin: 0; }}".format(**classes),
        ".{glossed} .{hidden} {{ display: none; }}".format(**classes),
        ".{glossed} {{ margin-bottom: 1.5em; }}".format(**classes),
        ".{noSpace} .{word} {{ margin-bottom: 0; }}".format(**classes),
        ".{freeTranslation} {{ font-style: italic; }}".format(**classes),
        ".{abbr} {{ font-variant: small-caps; text-transform: lowercase; }}".format(**classes),
    ])


def render_abbreviation(abbreviation: Abbreviation, classes: Mapping[str, str]) -> str:
    """Render one tagged code as an <abbr> element."""
    code = html.escape(abbreviation.code)
    if abbreviation.definition is None:
        return '<abbr class="{cls}">{code}</abbr>'.format(cls=classes["abbr"], code=code)
    return '<abbr class="{cls}" title="{title}">{code}</abbr>'.format(
        cls=classes["abbr"],
        title=html.escape(abbreviation.definition, quote=True),
        code=code,
    )


def render_cell(cell: AnnotatedCell, classes: Mapping[str, str]) -> str:
    """Render a cell's parts; blank cells become a non-breaking space."""
    if cell.empty or not cell.parts:
        return _NBSP
    rendered: List[str] = []
    for part in cell.parts:
        if isinstance(part, Abbreviation):
            rendered.append(render_abbreviation(part, classes))
        else:
            rendered.append(html.escape(part))
    return "".join(rendered)


def _line_class(classes: Mapping[str, str], line_number: int, extra: str = "") -> str:
    names = [classes["line"], "{}{}".format(classes["lineNum"], line_number)]
    if extra:
        names.append(extra)
    return " ".join(names)


def _render_words(gloss: Gloss, classes: Mapping[str, str]) -> List[str]:
    out = ['<div class="{}">'.format(classes["words"])]
    for word in gloss.words:
        out.append('  <div class="{}">'.format(classes["word"]))
        for position, cell in enumerate(word.cells):
            out.append('    <p class="{}">{}</p>'.format(
                _line_class(classes, gloss.aligned_line_number(position)),
                render_cell(cell, classes),
            ))
        out.append("  </div>")
    out.append("</div>")
    return out


def render_gloss(gloss: Gloss, classes: Mapping[str, str]) -> str:
    """Render one gloss as a container div."""
    container = ["gloss", classes["glossed"]]
    if not gloss.spacing:
        container.append(classes["noSpace"])

    attrs = 'class="{}"'.format(" ".join(container))
    if gloss.label:
        attrs += ' data-gloss="{}"'.format(html.escape(gloss.label, quote=True))

    passthrough = {line.tier_index: line for line in gloss.passthrough_lines}
    body: List[str] = []

    for index, tier in enumerate(gloss.tiers):
        if index == gloss.aligned_offset:
            body.extend(_render_words(gloss, classes))

        line = passthrough.get(index)
        if line is not None:
            kind_class = classes[_KIND_CLASS_KEYS[line.kind]]
            body.append('<p class="{}">{}</p>'.format(
                _line_class(classes, index, kind_class),
                html.escape(line.content),
            ))
        else:
            body.append('<p class="{}">{}</p>'.format(
                classes["hidden"],
                html.escape(tier.text),
            ))

    indented = "\n".join("  " + row for row in body)
    return "<div {}>\n{}\n</div>".format(attrs, indented)


class HtmlFormatter(BaseFormatter):
    """Formatter that produces a standalone HTML page of aligned glosses.

    RULES:
    - One container div per gloss, in document order
    - Embedded stylesheet built from the configured class names
    - Output suffix is "-gloss.html"
    """

    @property
    def name(self) -> str:
        return "HTML"

    def format(self, document: GlossDocument) -> List[FormatterOutput]:
        """Convert the processed glosses into an HTML page.

        Args:
            document: The processed glosses and their options.

        Returns:
            A single-element list containing the HTML output.
        """
        classes = document.options.classes
        title = html.escape(document.source_filename or "Glosses")

        rendered = [render_gloss(gloss, classes) for gloss in document.glosses]

        content = "\n".join([
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            '<meta charset="utf-8">',
            "<title>{}</title>".format(title),
            "<style>",
            _stylesheet(classes),
            "</style>",
            "</head>",
            "<body>",
            "\n".join(rendered),
            "</body>",
            "</html>",
            "",
        ])

        return [
            FormatterOutput(
                suffix="-gloss.html",
                content=content,
                media_type="text/html",
            )
        ]
