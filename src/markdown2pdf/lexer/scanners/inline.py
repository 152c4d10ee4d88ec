"""Inline content scanner mixin.

Splits the text of a single line into TEXT runs and inline markers:
emphasis delimiter runs, code spans, link and image brackets, and link
destinations. No pairing happens here; the token builder decides which
markers match.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from markdown2pdf.parsing.charsets import (
    ASCII_PUNCTUATION,
    EMPHASIS_DELIMITERS,
    INLINE_SPECIAL,
    is_unicode_punctuation,
    is_unicode_whitespace,
)
from markdown2pdf.parsing.inline.links import parse_link_attributes
from markdown2pdf.units import LexicalUnit, UnitKind

_NO_UNITS: tuple[LexicalUnit, ...] = ()


class InlineScannerMixin:
    """Mixin providing inline scanning for one line of text."""

    _link_attributes: bool

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

    def _scan_inline(self, text: str, base: int) -> Iterator[LexicalUnit]:
        """Scan inline content.

        Args:
            text: Line content, already stripped of block markers
            base: Source offset of text[0]

        Yields:
            TEXT units interleaved with inline marker units.
        """
        pending = 0
        pos = 0
        text_len = len(text)
        while pos < text_len:
            if text[pos] not in INLINE_SPECIAL:
                pos += 1
                continue

            units, end = self._scan_inline_special(text, pos, base)
            if not units:
                # Not a marker after all: keep it in the pending text run
                pos = end
                continue

            if pending < pos:
                yield self._make_unit(UnitKind.TEXT, text[pending:pos], base + pending, base + pos)
            yield from units
            pos = pending = end

        if pending < text_len:
            yield self._make_unit(UnitKind.TEXT, text[pending:], base + pending, base + text_len)

    def _scan_inline_special(
        self, text: str, pos: int, base: int
    ) -> tuple[Sequence[LexicalUnit], int]:
        """Scan a special character at pos.

        Returns:
            (units, end). An empty unit list means text[pos:end] is plain text.
        """
        char = text[pos]
        text_len = len(text)

        if char == "\\":
            if pos + 1 < text_len and text[pos + 1] in ASCII_PUNCTUATION:
                unit = self._make_unit(
                    UnitKind.TEXT, text[pos : pos + 2], base + pos, base + pos + 2,
                    char=text[pos + 1],
                )
                return [unit], pos + 2
            return _NO_UNITS, pos + 1

        if char == "`":
            return self._scan_code_span(text, pos, base)

        if char in EMPHASIS_DELIMITERS:
            return self._scan_delimiter_run(text, pos, base)

        if char == "!":
            if pos + 1 < text_len and text[pos + 1] == "[":
                unit = self._make_unit(UnitKind.IMAGE_OPEN, "![", base + pos, base + pos + 2)
                return [unit], pos + 2
            return _NO_UNITS, pos + 1

        if char == "[":
            return [self._make_unit(UnitKind.LINK_OPEN, "[", base + pos, base + pos + 1)], pos + 1

        # char == "]"
        if pos + 1 < text_len and text[pos + 1] == "(":
            result = self._scan_link_destination(text, pos, base)
            if result is not None:
                return [result], pos + len(result.value)
        return [self._make_unit(UnitKind.LINK_CLOSE, "]", base + pos, base + pos + 1)], pos + 1

    def _scan_code_span(self, text: str, pos: int, base: int) -> tuple[Sequence[LexicalUnit], int]:
        """Scan a backtick run and, if it has a matching closer, the span body.

        The closing run must have exactly the same length. Without one, the
        whole opening run is plain text.
        """
        text_len = len(text)
        run_end = pos
        while run_end < text_len and text[run_end] == "`":
            run_end += 1
        count = run_end - pos

        search = run_end
        while True:
            close = text.find("`", search)
            if close == -1:
                return _NO_UNITS, run_end
            close_end = close
            while close_end < text_len and text[close_end] == "`":
                close_end += 1
            if close_end - close == count:
                break
            search = close_end

        run = text[pos:run_end]
        units = [
            self._make_unit(UnitKind.CODE_SPAN_MARKER, run, base + pos, base + run_end, char="`"),
            self._make_unit(UnitKind.RAW_TEXT, text[run_end:close], base + run_end, base + close),
            self._make_unit(UnitKind.CODE_SPAN_MARKER, run, base + close, base + close_end, char="`"),
        ]
        return units, close_end

    def _scan_delimiter_run(
        self, text: str, pos: int, base: int
    ) -> tuple[Sequence[LexicalUnit], int]:
        """Scan a run of * or _ and compute its flanking flags."""
        delim_char = text[pos]
        text_len = len(text)
        end = pos
        while end < text_len and text[end] == delim_char:
            end += 1

        before = text[pos - 1] if pos > 0 else " "
        after = text[end] if end < text_len else " "

        left_flanking = _is_left_flanking(before, after)
        right_flanking = _is_right_flanking(before, after)

        # Intraword underscores never open or close
        if delim_char == "_":
            can_open = left_flanking and (not right_flanking or is_unicode_punctuation(before))
            can_close = right_flanking and (not left_flanking or is_unicode_punctuation(after))
        else:
            can_open = left_flanking
            can_close = right_flanking

        unit = self._make_unit(
            UnitKind.EMPHASIS_MARKER,
            text[pos:end],
            base + pos,
            base + end,
            char=delim_char,
            can_open=can_open,
            can_close=can_close,
        )
        return [unit], end

    def _scan_link_destination(self, text: str, pos: int, base: int) -> LexicalUnit | None:
        """Scan ``](url)`` plus an optional ``{key=value}`` block.

        Parentheses inside the destination must balance. A title after the
        URL (``](url "title")``) is accepted and ignored.

        Returns:
            LINK_DESTINATION unit, or None when no closing ``)`` is on the line.
        """
        depth = 0
        close = -1
        text_len = len(text)
        i = pos + 2
        while i < text_len:
            c = text[i]
            if c == "\\" and i + 1 < text_len:
                i += 2
                continue
            if c == "(":
                depth += 1
            elif c == ")":
                if depth == 0:
                    close = i
                    break
                depth -= 1
            i += 1

        if close == -1:
            return None

        inner = text[pos + 2 : close].strip()
        url = inner.split(None, 1)[0] if inner else ""
        if len(url) >= 2 and url[0] == "<" and url[-1] == ">":
            url = url[1:-1]

        end = close + 1
        attrs = ""
        if self._link_attributes and end < text_len and text[end] == "{":
            attrs_close = text.find("}", end)
            # Braced prose without a key=value pair stays text
            if attrs_close != -1 and parse_link_attributes(text[end + 1 : attrs_close]):
                attrs = text[end + 1 : attrs_close]
                end = attrs_close + 1

        return self._make_unit(
            UnitKind.LINK_DESTINATION,
            text[pos:end],
            base + pos,
            base + end,
            url=url,
            attrs=attrs,
        )


def _is_left_flanking(before: str, after: str) -> bool:
    """Check if delimiter run is left-flanking.

    Left-flanking: not followed by whitespace, and either:
    - not followed by punctuation, OR
    - preceded by whitespace or punctuation
    """
    if is_unicode_whitespace(after):
        return False
    if not is_unicode_punctuation(after):
        return True
    return is_unicode_whitespace(before) or is_unicode_punctuation(before)


def _is_right_flanking(before: str, after: str) -> bool:
    """Check if delimiter run is right-flanking.

    Right-flanking: not preceded by whitespace, and either:
    - not preceded by punctuation, OR
    - followed by whitespace or punctuation
    """
    if is_unicode_whitespace(before):
        return False
    if not is_unicode_punctuation(before):
        return True
    return is_unicode_whitespace(after) or is_unicode_punctuation(after)
