"""Formatter interface shared by the HTML, plain text, and JSON outputs.

WHY: Glosses are rendered for very different readers (a browser, a
terminal, another program), yet the CLI should not care which one it is
driving. Each output is therefore a class with the same two members.

HOW: A formatter receives the whole GlossDocument, so it can see every
processed gloss together with the options they were built with (class
names, spacing). It answers with FormatterOutput records; writing them
to disk is left to the caller.

RULES:
- A formatter never reads or writes files itself
- ``suffix`` is appended to the source stem, so it starts with "-"
  and carries the extension ("-gloss.txt")
- Returning several outputs is allowed; the built-in formatters each
  return exactly one
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from interlinear.core.ir import GlossDocument


@dataclass
class FormatterOutput:
    """Rendered content for one output file.

    Attributes:
        suffix: Appended to the source stem; "-gloss.html" turns
                examples.txt into examples-gloss.html.
        content: Rendered text, or bytes for binary formats.
        media_type: MIME type of ``content``.
    """

    suffix: str
    content: str | bytes
    media_type: str


class BaseFormatter(ABC):
    """Common interface for gloss renderers.

    New formats subclass this and are added to FORMATTERS in
    formatters/__init__.py under a snake_case key.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name used in CLI status lines."""

    @abstractmethod
    def format(self, document: GlossDocument) -> list[FormatterOutput]:
        """Render every gloss of ``document``.

        Returns:
            The files to write, each as a FormatterOutput.
        """
