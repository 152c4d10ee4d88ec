"""Fenced code mode scanner mixin."""

from collections.abc import Iterator
from typing import Any

from markdown2pdf.lexer.modes import ScannerMode
from markdown2pdf.units import LexicalUnit, UnitKind


class FenceScannerMixin:
    """Mixin providing fenced code mode scanning logic.

    Scans content inside fenced code blocks, detecting the closing fence.

    """

    # These will be set by the Scanner class
    _source: str
    _pos: int
    _mode: ScannerMode
    _fence_char: str
    _fence_count: int
    _fence_info: str
    _fence_indent: int
    _consumed_newline: bool

    def _save_location(self) -> None:
        """Save current location for O(1) unit location creation."""
        raise NotImplementedError

    def _find_line_end(self) -> int:
        """Find end of current line."""
        raise NotImplementedError

    def _commit_to(self, line_end: int) -> None:
        """Commit position to line_end."""
        raise NotImplementedError

    def _make_unit(
        self,
        kind: UnitKind,
        value: str,
        start_pos: int,
        end_pos: int,
        **attrs: Any,
    ) -> LexicalUnit:
        """Create unit with raw coordinates. Implemented by Scanner."""
        raise NotImplementedError

    def _is_closing_fence(self, line: str) -> bool:
        """Check if line is a closing fence. Implemented by FenceClassifierMixin."""
        raise NotImplementedError

    def _scan_code_fence_content(self) -> Iterator[LexicalUnit]:
        """Scan one line inside a fenced code block.

        Yields:
            RAW_TEXT for a content line (newline included when present), or
            FENCE_CLOSE when the closing fence is found.
        """
        self._save_location()

        line_start = self._pos
        line_end = self._find_line_end()
        line = self._source[line_start:line_end]

        if self._is_closing_fence(line):
            self._commit_to(line_end)
            self._mode = ScannerMode.BLOCK
            fence_char = self._fence_char
            self._fence_char = ""
            self._fence_count = 0
            self._fence_info = ""
            self._fence_indent = 0
            value = line.strip()
            fence_start = line_start + len(line) - len(line.lstrip())
            yield self._make_unit(
                UnitKind.FENCE_CLOSE, value, fence_start, fence_start + len(value), char=fence_char
            )
            return

        # Strip up to the opening fence's indentation from content lines
        content_start = line_start
        remove = self._fence_indent
        while remove > 0 and content_start < line_end and self._source[content_start] == " ":
            content_start += 1
            remove -= 1

        self._commit_to(line_end)
        yield self._make_unit(
            UnitKind.RAW_TEXT,
            self._source[content_start : self._pos],
            content_start,
            self._pos,
        )
