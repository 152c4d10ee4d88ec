"""Intermediate inline pieces used between unit conversion and tree assembly.

Text, code and breaks are immutable NamedTuples. Delimiter runs and bracket
groups are small mutable objects: pairing records its decisions on them
directly, and tree assembly reads those decisions back.

"""

from __future__ import annotations

from typing import NamedTuple

from markdown2pdf.location import SourceLocation


class TextPiece(NamedTuple):
    """Text run. ``literal`` marks characters left over from bad syntax."""

    content: str
    location: SourceLocation
    literal: bool = False


class CodePiece(NamedTuple):
    """Code span body, already normalized."""

    content: str
    location: SourceLocation


class BreakPiece(NamedTuple):
    """Line break inside a block."""

    hard: bool
    location: SourceLocation


class OpenBracket(NamedTuple):
    """``[`` or ``![`` awaiting its closer."""

    image: bool
    raw: str
    location: SourceLocation


class CloseBracket(NamedTuple):
    """``]`` or ``](url){attrs}``. ``url`` is None for a bare ``]``."""

    raw: str
    url: str | None
    attrs: str
    location: SourceLocation


class Delimiter:
    """A run of ``*`` or ``_``.

    ``remaining`` counts characters not yet paired. ``closes`` lists the
    counts of spans this run closes, innermost first; ``opens`` is the count
    of the span it opens (0 if none).

    """

    __slots__ = ("char", "length", "can_open", "can_close", "location", "remaining", "closes", "opens")

    def __init__(
        self,
        char: str,
        length: int,
        can_open: bool,
        can_close: bool,
        location: SourceLocation,
    ) -> None:
        self.char = char
        self.length = length
        self.can_open = can_open
        self.can_close = can_close
        self.location = location
        self.remaining = length
        self.closes: list[int] = []
        self.opens = 0

    @property
    def leftover(self) -> int:
        """Characters that end up as literal text."""
        return self.length - sum(self.closes) - self.opens

    def __repr__(self) -> str:
        return f"Delimiter({self.char * self.length!r}, closes={self.closes}, opens={self.opens})"


class BracketGroup:
    """A matched ``[label](url)`` or ``![alt](url)`` with its label pieces."""

    __slots__ = ("image", "items", "url", "attrs", "location")

    def __init__(
        self,
        image: bool,
        items: list[InlinePiece],
        url: str,
        attrs: str,
        location: SourceLocation,
    ) -> None:
        self.image = image
        self.items = items
        self.url = url
        self.attrs = attrs
        self.location = location

    def __repr__(self) -> str:
        kind = "Image" if self.image else "Link"
        return f"BracketGroup({kind}, {self.url!r}, {len(self.items)} items)"


type InlinePiece = TextPiece | CodePiece | BreakPiece | Delimiter | BracketGroup

# Before bracket grouping, the sequence also holds bracket markers
type RawPiece = InlinePiece | OpenBracket | CloseBracket
