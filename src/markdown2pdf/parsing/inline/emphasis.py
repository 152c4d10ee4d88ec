"""Emphasis delimiter pairing.

Pairing is greedy and symmetric: an opening run of length n pairs with the
next closing run of the same character whose length is at least n, unless
a nearer opener claims that closer first. Openers are always consumed
whole. A longer closer keeps its remaining characters, which can close
enclosing openers, open a new span, or end up as literal text.

Examples:
    ``**bold *and italic* text**`` pairs the single ``*`` runs with each
    other and the ``**`` runs with each other.

    ``**a*`` pairs nothing: the closer is shorter than the opener.

    ``*a **b***`` pairs ``**`` with the first two characters of ``***`` and
    ``*`` with the last.

Thread Safety:
All state lives in the Delimiter objects of one inline sequence.

"""

from __future__ import annotations

from markdown2pdf.parsing.inline.pieces import Delimiter, InlinePiece


class EmphasisMixin:
    """Mixin for emphasis delimiter pairing.

    Required Host Attributes: None

    Required Host Methods: None

    """

    def _pair_delimiters(self, items: list[InlinePiece]) -> int:
        """Pair delimiter runs within one inline sequence.

        Results are recorded on the Delimiter objects (``closes``,
        ``opens``, ``remaining``). Openers skipped over by a match can no
        longer pair and stay literal.

        Args:
            items: One sequence: a block's top level or one bracket label.

        Returns:
            Number of spans paired.
        """
        openers: list[Delimiter] = []
        paired = 0

        for item in items:
            if not isinstance(item, Delimiter):
                continue

            if item.can_close:
                idx = len(openers) - 1
                while idx >= 0 and item.remaining:
                    opener = openers[idx]
                    if opener.char != item.char or opener.remaining > item.remaining:
                        idx -= 1
                        continue

                    count = opener.remaining
                    opener.opens = count
                    opener.remaining = 0
                    item.closes.append(count)
                    item.remaining -= count
                    paired += 1

                    # Openers between the match and the closer are dead
                    del openers[idx:]
                    idx = len(openers) - 1

            if item.can_open and item.remaining:
                openers.append(item)

        return paired
