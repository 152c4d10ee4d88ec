"""List building.

Rules:
- Consecutive marker lines with the same class (bullet or ordered) and
  indentation form one list.
- A marker indented deeper than the current list opens a nested list inside
  the previous item.
- An indented plain line right after an item line continues that item.
- A blank line, a class change at the top level, a dedent past the top
  level, or any other block ends the list.

Open lists are kept on an explicit stack, so nesting depth is bounded only
by the input, never by the call stack.

"""

from __future__ import annotations

from collections.abc import Sequence

from markdown2pdf.location import SourceLocation
from markdown2pdf.parsing.unit_nav import trailing_units
from markdown2pdf.tokens import Inline, List, ListItem
from markdown2pdf.units import LexicalUnit, UnitKind


class _OpenItem:
    """A list item under construction.

    ``segments`` alternates runs of inline units with finished nested lists.
    """

    __slots__ = ("location", "segments")

    def __init__(self, location: SourceLocation) -> None:
        self.location = location
        self.segments: list[list[LexicalUnit] | List] = []

    def add_line(self, units: list[LexicalUnit], line_break: LexicalUnit | None) -> None:
        last = self.segments[-1] if self.segments else None
        if isinstance(last, list):
            if line_break is not None and last:
                last.append(line_break)
            last.extend(units)
        else:
            self.segments.append(list(units))

    def end_line(self, line_break: LexicalUnit | None) -> None:
        """Close the item's last line when no continuation follows it."""
        last = self.segments[-1] if self.segments else None
        if isinstance(last, list):
            last.extend(trailing_units(line_break))

    def add_list(self, nested: List) -> None:
        self.segments.append(nested)


class _OpenList:
    __slots__ = ("indent", "ordered", "location", "items")

    def __init__(self, indent: int, ordered: bool, location: SourceLocation) -> None:
        self.indent = indent
        self.ordered = ordered
        self.location = location
        self.items: list[_OpenItem] = []


class ListBuilderMixin:
    """Mixin for list building.

    Required Host Attributes:
        - _current: LexicalUnit | None

    Required Host Methods:
        - _require(), _advance(), _read_line() (UnitNavigationMixin)
        - _build_inline(units, base_level) (InlineBuilderMixin)

    """

    _current: LexicalUnit | None

    def _require(self) -> LexicalUnit:
        raise NotImplementedError

    def _advance(self) -> LexicalUnit | None:
        raise NotImplementedError

    def _read_line(self) -> tuple[list[LexicalUnit], LexicalUnit]:
        raise NotImplementedError

    def _build_inline(
        self, units: Sequence[LexicalUnit], base_level: int = 0
    ) -> tuple[Inline, ...]:
        raise NotImplementedError

    def _build_list(self) -> List:
        """Build a list starting at the current LIST_MARKER unit."""
        first = self._require()
        root = _OpenList(first.indent, first.ordered, first.location)
        stack: list[_OpenList] = [root]
        last_break: LexicalUnit | None = None

        while True:
            unit = self._require()

            if unit.kind == UnitKind.LIST_MARKER:
                if last_break is not None:
                    stack[-1].items[-1].end_line(last_break)
                if not self._place_marker(stack, unit):
                    break
                self._advance()
                units, last_break = self._read_line()
                stack[-1].items[-1].add_line(units, None)
                continue

            if (
                unit.kind == UnitKind.PARAGRAPH_LINE
                and last_break is not None
                and unit.indent > root.indent
            ):
                # Continuation joins the innermost item indented less than it
                if len(stack) > 1 and stack[-1].indent >= unit.indent:
                    stack[-1].items[-1].end_line(last_break)
                while len(stack) > 1 and stack[-1].indent >= unit.indent:
                    self._close_top(stack)
                self._advance()
                units, line_break = self._read_line()
                stack[-1].items[-1].add_line(units, last_break)
                last_break = line_break
                continue

            if last_break is not None:
                stack[-1].items[-1].end_line(last_break)
            break

        while len(stack) > 1:
            self._close_top(stack)
        return self._finish_list(root)

    def _place_marker(self, stack: list[_OpenList], unit: LexicalUnit) -> bool:
        """Open an item (and a list if needed) for a marker unit.

        Returns:
            False if the marker ends the outermost list instead.
        """
        indent = unit.indent
        while len(stack) > 1 and indent < stack[-1].indent:
            self._close_top(stack)

        top = stack[-1]
        if len(stack) == 1 and indent < top.indent:
            return False

        if indent > top.indent:
            stack.append(_OpenList(indent, unit.ordered, unit.location))
        elif unit.ordered != top.ordered:
            if len(stack) == 1:
                return False
            self._close_top(stack)
            stack.append(_OpenList(indent, unit.ordered, unit.location))

        stack[-1].items.append(_OpenItem(unit.location))
        return True

    def _close_top(self, stack: list[_OpenList]) -> None:
        """Finish the innermost list and attach it to its parent item."""
        closed = stack.pop()
        stack[-1].items[-1].add_list(self._finish_list(closed))

    def _finish_list(self, open_list: _OpenList) -> List:
        items: list[ListItem] = []
        for item in open_list.items:
            children: list[Inline | List] = []
            for segment in item.segments:
                if isinstance(segment, List):
                    children.append(segment)
                else:
                    children.extend(self._build_inline(segment))
            items.append(ListItem(tuple(children), location=item.location))
        return List(open_list.ordered, tuple(items), location=open_list.location)
