"""Line-aware string accumulator for the text renderer.

Fragments go into a list and are joined once in ``build``. The builder also
remembers whether its output currently ends at a line boundary, which the
renderer needs before writing block-level output.

"""

from __future__ import annotations


class StringBuilder:
    """Accumulate fragments; join once.

    Usage:
        >>> sb = StringBuilder().append("• ").append("item")
        >>> sb.at_line_start
        False
        >>> sb.end_line().append_line("---").build()
        '• item\\n---\\n'

    """

    __slots__ = ("_parts", "_at_line_start")

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._at_line_start = True

    @property
    def at_line_start(self) -> bool:
        """True when empty or when the last fragment ended with a newline."""
        return self._at_line_start

    def append(self, s: str) -> StringBuilder:
        """Append a fragment (empty strings are skipped)."""
        if s:
            self._parts.append(s)
            self._at_line_start = s.endswith("\n")
        return self

    def append_line(self, s: str = "") -> StringBuilder:
        """Append s and a newline."""
        return self.append(s + "\n")

    def end_line(self) -> StringBuilder:
        """Append a newline unless already at the start of a line."""
        if not self._at_line_start:
            self.append("\n")
        return self

    def build(self) -> str:
        return "".join(self._parts)

    def clear(self) -> StringBuilder:
        self._parts.clear()
        self._at_line_start = True
        return self

    def __len__(self) -> int:
        """Number of fragments, not characters."""
        return len(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)
