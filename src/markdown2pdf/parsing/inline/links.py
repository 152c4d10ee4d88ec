"""Link and image bracket grouping.

Brackets are matched before emphasis, so emphasis never pairs across a
link boundary. A ``[`` that finds a ``](url)`` with a non-empty URL becomes
a BracketGroup holding its label pieces. Everything else (a bare ``]``, an
empty URL, an unclosed ``[``) degrades to literal text with the label pieces
spliced back in place.

Links do not nest: once a link forms, every enclosing ``[`` still open
degrades. Images may hold links, and links may hold images.

"""

from __future__ import annotations

from markdown2pdf.parsing.inline.pieces import (
    BracketGroup,
    CloseBracket,
    InlinePiece,
    OpenBracket,
    RawPiece,
    TextPiece,
)
from markdown2pdf.utils.logger import get_logger

logger = get_logger(__name__)


class _PendingBracket:
    """An open bracket on the grouping stack."""

    __slots__ = ("opener", "items", "active")

    def __init__(self, opener: OpenBracket) -> None:
        self.opener = opener
        self.items: list[InlinePiece] = []
        self.active = True


def parse_link_attributes(attrs: str) -> tuple[tuple[str, str], ...]:
    """Parse the body of a ``{key=value ...}`` block after a link.

    Pairs are separated by whitespace or commas; values may be quoted.
    Entries without ``=`` are ignored.

    Example:
        >>> parse_link_attributes('color=#ff0000 underline="false"')
        (('color', '#ff0000'), ('underline', 'false'))

    """
    pairs: list[tuple[str, str]] = []
    for part in attrs.replace(",", " ").split():
        key, sep, value = part.partition("=")
        if not sep or not key:
            logger.debug("Ignoring link attribute without value: %r", part)
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        pairs.append((key.strip().lower(), value))
    return tuple(pairs)


class LinkGroupingMixin:
    """Mixin for grouping bracket markers into links and images.

    Required Host Attributes: None

    Required Host Methods: None

    """

    def _group_brackets(
        self, pieces: list[RawPiece]
    ) -> tuple[list[InlinePiece], list[list[InlinePiece]]]:
        """Group bracket markers into BracketGroups.

        Args:
            pieces: Inline pieces in source order, bracket markers included

        Returns:
            (top-level items, every item sequence). The second list holds the
            top level plus the label of each group, so emphasis can be paired
            once per sequence.
        """
        root: list[InlinePiece] = []
        sequences: list[list[InlinePiece]] = [root]
        stack: list[_PendingBracket] = []

        for piece in pieces:
            if isinstance(piece, OpenBracket):
                stack.append(_PendingBracket(piece))
                continue

            current = stack[-1].items if stack else root

            if not isinstance(piece, CloseBracket):
                current.append(piece)
                continue

            if not stack:
                current.append(TextPiece(piece.raw, piece.location, literal=True))
                continue

            pending = stack.pop()
            parent = stack[-1].items if stack else root

            if piece.url and pending.active:
                group = BracketGroup(
                    image=pending.opener.image,
                    items=pending.items,
                    url=piece.url,
                    attrs=piece.attrs,
                    location=pending.opener.location.span_to(piece.location),
                )
                parent.append(group)
                sequences.append(pending.items)
                if not group.image:
                    for entry in stack:
                        if not entry.opener.image:
                            entry.active = False
                continue

            parent.append(TextPiece(pending.opener.raw, pending.opener.location, literal=True))
            parent.extend(pending.items)
            parent.append(TextPiece(piece.raw, piece.location, literal=True))

        # Unclosed brackets
        while stack:
            pending = stack.pop()
            parent = stack[-1].items if stack else root
            parent.append(TextPiece(pending.opener.raw, pending.opener.location, literal=True))
            parent.extend(pending.items)

        return root, sequences
