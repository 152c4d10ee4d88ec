"""Unit stream navigation for the token builder."""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence

from markdown2pdf.errors import BuildError
from markdown2pdf.units import LexicalUnit, UnitKind

_LINE_ENDS = frozenset({UnitKind.SOFT_BREAK, UnitKind.HARD_BREAK})

# Units that may appear between a block marker and its line terminator
_INLINE_KINDS = frozenset(
    {
        UnitKind.TEXT,
        UnitKind.EMPHASIS_MARKER,
        UnitKind.CODE_SPAN_MARKER,
        UnitKind.RAW_TEXT,
        UnitKind.LINK_OPEN,
        UnitKind.IMAGE_OPEN,
        UnitKind.LINK_CLOSE,
        UnitKind.LINK_DESTINATION,
    }
)


def trailing_units(line_break: LexicalUnit | None) -> list[LexicalUnit]:
    """Units a line terminator leaves behind when its block ends there.

    A backslash hard break with no following line in the block breaks
    nothing, so the backslash is kept as text.
    """
    if (
        line_break is None
        or line_break.kind != UnitKind.HARD_BREAK
        or not line_break.value.startswith("\\")
    ):
        return []
    return [
        dataclasses.replace(
            line_break,
            kind=UnitKind.TEXT,
            value="\\",
            _end_offset=line_break.offset + 1,
            _location_cache=None,
        )
    ]


class UnitNavigationMixin:
    """Mixin providing unit stream navigation methods.

    Required Host Attributes:
        - _units: Sequence[LexicalUnit]
        - _units_len: int
        - _pos: int
        - _current: LexicalUnit | None

    """

    _units: Sequence[LexicalUnit]
    _units_len: int
    _pos: int
    _current: LexicalUnit | None

    def _at_end(self) -> bool:
        """Check if at end of unit stream."""
        return self._current is None or self._current.kind == UnitKind.EOF

    def _advance(self) -> LexicalUnit | None:
        """Advance to next unit and return it."""
        self._pos += 1
        if self._pos < self._units_len:
            self._current = self._units[self._pos]
        else:
            self._current = None
        return self._current

    def _peek(self, offset: int = 1) -> LexicalUnit | None:
        """Peek at unit at offset from current position."""
        pos = self._pos + offset
        if pos < self._units_len:
            return self._units[pos]
        return None

    def _require(self) -> LexicalUnit:
        """Return the current unit, failing if the stream ran out."""
        unit = self._current
        if unit is None:
            last = self._units[-1].offset if self._units else None
            raise BuildError("Unit stream exhausted mid-construction", last)
        return unit

    def _read_line(self) -> tuple[list[LexicalUnit], LexicalUnit]:
        """Collect inline units up to and including the line terminator.

        Returns:
            (inline units, terminator). The position ends after the terminator.

        Raises:
            BuildError: If a non-inline unit or the end of the stream comes
                before the terminator
        """
        units: list[LexicalUnit] = []
        while True:
            unit = self._require()
            if unit.kind in _LINE_ENDS:
                self._advance()
                return units, unit
            if unit.kind not in _INLINE_KINDS:
                raise BuildError(f"Line ended by {unit.kind.name} without a line break", unit.offset)
            units.append(unit)
            self._advance()
