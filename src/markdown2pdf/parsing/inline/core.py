"""Inline token assembly.

Turns the inline units of one block into inline tokens in four passes:

1. Convert units to pieces (text, code, breaks, delimiter runs, brackets)
2. Group brackets into links and images
3. Pair emphasis delimiters, once per sequence
4. Assemble the token tree with an explicit frame stack

No pass recurses, so deeply nested emphasis cannot exhaust the call stack.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence

from markdown2pdf.errors import BuildError
from markdown2pdf.location import SourceLocation
from markdown2pdf.parsing.inline.links import parse_link_attributes
from markdown2pdf.parsing.inline.pieces import (
    BracketGroup,
    BreakPiece,
    CloseBracket,
    CodePiece,
    Delimiter,
    InlinePiece,
    OpenBracket,
    RawPiece,
    TextPiece,
)
from markdown2pdf.tokens import (
    CodeSpan,
    Emphasis,
    Image,
    Inline,
    LineBreak,
    Link,
    Literal,
    SoftBreak,
    Text,
)
from markdown2pdf.units import LexicalUnit, UnitKind
from markdown2pdf.visitor import plain_text


def normalize_code_span(code: str) -> str:
    """Strip one space from each end if both are present.

    Content made only of spaces is kept as is.
    """
    if len(code) >= 2 and code[0] == " " and code[-1] == " " and code.strip():
        return code[1:-1]
    return code


class _Frame:
    """One open span during assembly: the root, an emphasis, or a bracket group."""

    __slots__ = ("children", "level", "opener", "group", "_text", "_literal", "_text_location")

    def __init__(
        self,
        level: int,
        opener: Delimiter | None = None,
        group: BracketGroup | None = None,
    ) -> None:
        self.children: list[Inline] = []
        self.level = level
        self.opener = opener
        self.group = group
        self._text: list[str] = []
        self._literal = False
        self._text_location: SourceLocation | None = None

    def add_text(
        self,
        content: str,
        literal: bool,
        location: SourceLocation,
        transform: Callable[[str], str] | None,
    ) -> None:
        if self._text and self._literal != literal:
            self.flush(transform)
        if not self._text:
            self._literal = literal
            self._text_location = location
        self._text.append(content)

    def add(self, token: Inline, transform: Callable[[str], str] | None) -> None:
        self.flush(transform)
        self.children.append(token)

    def flush(self, transform: Callable[[str], str] | None) -> None:
        if not self._text:
            return
        content = "".join(self._text)
        location = self._text_location
        assert location is not None
        if self._literal:
            self.children.append(Literal(content, location=location))
        else:
            if transform is not None:
                content = transform(content)
            self.children.append(Text(content, location=location))
        self._text.clear()

    def finish(self, transform: Callable[[str], str] | None) -> tuple[Inline, ...]:
        self.flush(transform)
        return tuple(self.children)


class InlineBuilderCoreMixin:
    """Mixin driving the inline passes.

    Required Host Attributes:
        - _text_transformer: Callable[[str], str] | None

    Required Host Methods:
        - _group_brackets(pieces) (LinkGroupingMixin)
        - _pair_delimiters(items) (EmphasisMixin)

    """

    _text_transformer: Callable[[str], str] | None

    def _group_brackets(
        self, pieces: list[RawPiece]
    ) -> tuple[list[InlinePiece], list[list[InlinePiece]]]:
        raise NotImplementedError

    def _pair_delimiters(self, items: list[InlinePiece]) -> int:
        raise NotImplementedError

    def _build_inline(
        self, units: Sequence[LexicalUnit], base_level: int = 0
    ) -> tuple[Inline, ...]:
        """Build inline tokens from the inline units of one block.

        Args:
            units: Inline units in source order (breaks between lines included)
            base_level: Emphasis level of the surrounding context

        Returns:
            Inline tokens with adjacent text merged.

        Raises:
            BuildError: If the units break the scanner's contract
        """
        if not units:
            return ()
        pieces = self._units_to_pieces(units)
        root, sequences = self._group_brackets(pieces)
        for sequence in sequences:
            self._pair_delimiters(sequence)
        return self._assemble(root, base_level)

    def _units_to_pieces(self, units: Sequence[LexicalUnit]) -> list[RawPiece]:
        pieces: list[RawPiece] = []
        append = pieces.append
        idx = 0
        count = len(units)
        while idx < count:
            unit = units[idx]
            kind = unit.kind
            if kind == UnitKind.TEXT:
                append(TextPiece(unit.char or unit.value, unit.location))
            elif kind == UnitKind.EMPHASIS_MARKER:
                append(
                    Delimiter(
                        unit.char,
                        len(unit.value),
                        unit.can_open,
                        unit.can_close,
                        unit.location,
                    )
                )
            elif kind == UnitKind.CODE_SPAN_MARKER:
                if (
                    idx + 2 >= count
                    or units[idx + 1].kind != UnitKind.RAW_TEXT
                    or units[idx + 2].kind != UnitKind.CODE_SPAN_MARKER
                ):
                    raise BuildError("Code span marker without body and closer", unit.offset)
                append(CodePiece(normalize_code_span(units[idx + 1].value), unit.location))
                idx += 2
            elif kind == UnitKind.LINK_OPEN or kind == UnitKind.IMAGE_OPEN:
                append(OpenBracket(kind == UnitKind.IMAGE_OPEN, unit.value, unit.location))
            elif kind == UnitKind.LINK_CLOSE:
                append(CloseBracket(unit.value, None, "", unit.location))
            elif kind == UnitKind.LINK_DESTINATION:
                append(CloseBracket(unit.value, unit.url, unit.attrs, unit.location))
            elif kind == UnitKind.SOFT_BREAK or kind == UnitKind.HARD_BREAK:
                append(BreakPiece(kind == UnitKind.HARD_BREAK, unit.location))
            else:
                raise BuildError(f"Unexpected {kind.name} unit in inline content", unit.offset)
            idx += 1
        return pieces

    def _assemble(self, root: list[InlinePiece], base_level: int) -> tuple[Inline, ...]:
        """Assemble paired pieces into tokens with an explicit frame stack."""
        transform = self._text_transformer
        frames: list[_Frame] = [_Frame(base_level)]
        work: list[tuple[Iterator[InlinePiece], BracketGroup | None]] = [(iter(root), None)]

        while work:
            pieces, group = work[-1]
            piece = next(pieces, None)

            if piece is None:
                work.pop()
                if group is None:
                    continue
                frame = frames.pop()
                if frame.group is not group:
                    raise BuildError(
                        "Emphasis span crosses a link boundary", group.location.offset
                    )
                frames[-1].add(self._finish_group(group, frame.finish(transform)), transform)
                continue

            frame = frames[-1]
            match piece:
                case TextPiece(content=content, location=location, literal=literal):
                    frame.add_text(content, literal, location, transform)
                case CodePiece(content=content, location=location):
                    frame.add(CodeSpan(content, location=location), transform)
                case BreakPiece(hard=True, location=location):
                    frame.add(LineBreak(location=location), transform)
                case BreakPiece(location=location):
                    frame.add(SoftBreak(location=location), transform)
                case Delimiter():
                    self._assemble_delimiter(piece, frames, transform)
                case BracketGroup():
                    frames.append(_Frame(frame.level, group=piece))
                    work.append((iter(piece.items), piece))

        if len(frames) != 1:
            raise BuildError("Unbalanced emphasis frames after inline assembly")
        return frames[0].finish(transform)

    def _assemble_delimiter(
        self,
        delim: Delimiter,
        frames: list[_Frame],
        transform: Callable[[str], str] | None,
    ) -> None:
        # Close spans innermost first
        for count in delim.closes:
            frame = frames.pop()
            opener = frame.opener
            if opener is None or opener.opens != count or not frames:
                raise BuildError("Emphasis closer does not match the open span", delim.location.offset)
            frames[-1].add(
                Emphasis(frame.level, frame.finish(transform), location=opener.location),
                transform,
            )

        if delim.leftover:
            frames[-1].add_text(delim.char * delim.leftover, True, delim.location, transform)

        if delim.opens:
            frames.append(_Frame(frames[-1].level + delim.opens, opener=delim))

    def _finish_group(self, group: BracketGroup, label: tuple[Inline, ...]) -> Inline:
        if group.image:
            return Image(plain_text(label), group.url, location=group.location)
        return Link(
            label,
            group.url,
            parse_link_attributes(group.attrs) if group.attrs else (),
            location=group.location,
        )
