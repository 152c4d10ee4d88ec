"""Block mode scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from markdown2pdf.lexer.modes import COMMENT_CLOSE, COMMENT_OPEN
from markdown2pdf.units import LexicalUnit, UnitKind


class BlockScannerMixin:
    """Mixin providing block mode scanning logic.

    Classifies one line per call and emits its block marker (if any)
    followed by the line's inline units and a line terminator.

    Required Host Attributes:
        - _source: str
        - _source_len: int
        - _pos: int
        - _consumed_newline: bool
        - _html_comments: bool
        - _fence_info: str

    Required Host Methods:
        - _save_location() -> None
        - _find_line_end() -> int
        - _calc_indent(line) -> tuple[int, int]
        - _commit_to(line_end) -> None
        - _make_unit(...) -> LexicalUnit
        - _scan_inline(text, base) -> Iterator[LexicalUnit]
        - classifier methods from the classifier mixins

    """

    _source: str
    _source_len: int
    _pos: int
    _consumed_newline: bool
    _html_comments: bool
    _fence_info: str

    def _save_location(self) -> None:
        raise NotImplementedError

    def _find_line_end(self) -> int:
        raise NotImplementedError

    def _calc_indent(self, line: str) -> tuple[int, int]:
        raise NotImplementedError

    def _commit_to(self, line_end: int) -> None:
        raise NotImplementedError

    def _make_unit(
        self,
        kind: UnitKind,
        value: str,
        start_pos: int,
        end_pos: int,
        **attrs: Any,
    ) -> LexicalUnit:
        raise NotImplementedError

    def _scan_inline(self, text: str, base: int) -> Iterator[LexicalUnit]:
        raise NotImplementedError

    def _try_classify_fence_start(self, content: str, indent: int = 0) -> str | None:
        raise NotImplementedError

    def _try_classify_heading(self, content: str) -> tuple[int, int, int] | None:
        raise NotImplementedError

    def _is_thematic_break(self, content: str) -> bool:
        raise NotImplementedError

    def _try_classify_list_marker(self, content: str) -> tuple[str, bool, int] | None:
        raise NotImplementedError

    def _scan_block(self) -> Iterator[LexicalUnit]:
        """Scan one line in BLOCK mode.

        Classification order: blank, fence, comment, heading, thematic
        break, list item, block quote, paragraph line. The first match wins.
        """
        self._save_location()

        line_start = self._pos
        line_end = self._find_line_end()
        line = self._source[line_start:line_end]

        if not line.strip():
            self._commit_to(line_end)
            yield self._make_unit(UnitKind.BLANK_LINE, line, line_start, line_end)
            return

        indent, content_start = self._calc_indent(line)
        content = line[content_start:]
        start = line_start + content_start

        fence = self._try_classify_fence_start(content, indent)
        if fence is not None:
            self._commit_to(line_end)
            yield self._make_unit(
                UnitKind.FENCE_OPEN,
                content,
                start,
                line_end,
                char=fence[0],
                info=self._fence_info,
                indent=indent,
            )
            return

        if self._html_comments and content.startswith(COMMENT_OPEN):
            comment = self._try_scan_comment(start)
            if comment is not None:
                yield comment
                return

        heading = self._try_classify_heading(content)
        if heading is not None:
            level, text_start, text_end = heading
            yield self._make_unit(
                UnitKind.HEADING_MARKER, "#" * level, start, start + level, level=level
            )
            yield from self._scan_line_text(start + text_start, start + text_end, line_end)
            return

        if self._is_thematic_break(content):
            self._commit_to(line_end)
            yield self._make_unit(
                UnitKind.THEMATIC_BREAK, content, start, line_end, char=content[0]
            )
            return

        marker = self._try_classify_list_marker(content)
        if marker is not None:
            value, ordered, marker_end = marker
            yield self._make_unit(
                UnitKind.LIST_MARKER,
                value,
                start,
                start + len(value),
                indent=indent,
                ordered=ordered,
                char=value[-1],
            )
            text_start = start + marker_end
            while text_start < line_end and self._source[text_start] in " \t":
                text_start += 1
            yield from self._scan_line_text(text_start, line_end, line_end)
            return

        if content[0] == ">":
            yield self._make_unit(UnitKind.BLOCK_QUOTE_MARKER, ">", start, start + 1)
            text_start = start + 1
            if text_start < line_end and self._source[text_start] in " \t":
                text_start += 1
            yield from self._scan_line_text(text_start, line_end, line_end)
            return

        yield self._make_unit(UnitKind.PARAGRAPH_LINE, "", start, start, indent=indent)
        yield from self._scan_line_text(start, line_end, line_end)

    def _scan_line_text(
        self, text_start: int, text_end: int, line_end: int
    ) -> Iterator[LexicalUnit]:
        """Scan inline text, commit the line, and emit its terminator.

        Trailing whitespace is not part of the inline text. Two or more
        trailing spaces, or an unescaped trailing backslash, make the
        terminator a HARD_BREAK when a newline follows.
        """
        source = self._source
        body_end = text_end
        while body_end > text_start and source[body_end - 1] in " \t":
            body_end -= 1

        has_newline = line_end < self._source_len
        hard = False
        if has_newline and text_end == line_end:
            if source.count(" ", body_end, line_end) >= 2:
                hard = True
            elif body_end > text_start and source[body_end - 1] == "\\":
                slashes = 0
                while body_end - slashes > text_start and source[body_end - slashes - 1] == "\\":
                    slashes += 1
                if slashes % 2 == 1:
                    body_end -= 1
                    hard = True

        yield from self._scan_inline(source[text_start:body_end], text_start)

        self._commit_to(line_end)
        kind = UnitKind.HARD_BREAK if hard else UnitKind.SOFT_BREAK
        yield self._make_unit(kind, source[body_end : self._pos], body_end, self._pos)

    def _try_scan_comment(self, start: int) -> LexicalUnit | None:
        """Scan an HTML comment block starting at start.

        The comment may span lines but nothing except whitespace may follow
        ``-->`` on its last line. Otherwise the line is ordinary text.
        """
        close = self._source.find(COMMENT_CLOSE, start + len(COMMENT_OPEN))
        if close == -1:
            return None

        close_end = close + len(COMMENT_CLOSE)
        line_end = self._source.find("\n", close_end)
        if line_end == -1:
            line_end = self._source_len
        if self._source[close_end:line_end].strip():
            return None

        unit = self._make_unit(UnitKind.COMMENT, self._source[start:close_end], start, close_end)
        self._commit_to(line_end)
        return unit
