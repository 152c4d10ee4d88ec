"""Exception classes for markdown2pdf.

Malformed Markdown never raises: it degrades to literal text. The
exceptions here cover the two conditions that do:

- ScanError: the input itself is not valid text (bad UTF-8, lone surrogates)
- BuildError: the scanner and builder disagree about the unit stream,
  which is a bug rather than bad user input
"""

from __future__ import annotations


class Markdown2PdfError(Exception):
    """Base exception for all markdown2pdf errors.

    Subclass this for specific error categories.
    """

    pass


class ScanError(Markdown2PdfError):
    """Input text could not be scanned.

    Raised only for encoding problems. Unknown Markdown syntax is never
    an error.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize scan error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class BuildError(Markdown2PdfError):
    """Token tree construction hit an internal invariant violation.

    The builder degrades every malformed construct to literal text, so this
    only fires when the unit stream is not one the scanner can produce
    (for example a fence opened and the stream exhausted without EOF).
    """

    def __init__(self, message: str, offset: int | None = None) -> None:
        """Initialize build error.

        Args:
            message: Description of the violated invariant
            offset: Source offset of the offending unit (optional)
        """
        self.offset = offset
        where = f" (offset {offset})" if offset is not None else ""
        super().__init__(f"{message}{where}")
