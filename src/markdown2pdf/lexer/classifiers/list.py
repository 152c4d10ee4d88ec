"""List marker and thematic break classifier mixins."""

from __future__ import annotations

from markdown2pdf.parsing.charsets import (
    ORDERED_LIST_DELIMITERS,
    THEMATIC_BREAK_CHARS,
    UNORDERED_LIST_MARKERS,
)


class ListClassifierMixin:
    """Mixin providing list marker classification."""

    def _try_classify_list_marker(self, content: str) -> tuple[str, bool, int] | None:
        """Try to classify content as a list item marker.

        Bullets are -, * or +; ordered markers are 1-9 digits followed by
        "." or ")". Either must be followed by whitespace or end of line.

        Args:
            content: Line content with leading whitespace stripped

        Returns:
            (marker, ordered, content_start) or None. content_start indexes
            the first character after the marker and its following space.
        """
        if not content:
            return None

        if content[0] in UNORDERED_LIST_MARKERS:
            return self._marker_result(content, 1, ordered=False)

        if content[0].isdigit():
            pos = 0
            while pos < len(content) and content[pos].isdigit():
                pos += 1
            if pos > 9:
                return None
            if pos < len(content) and content[pos] in ORDERED_LIST_DELIMITERS:
                return self._marker_result(content, pos + 1, ordered=True)

        return None

    def _marker_result(
        self, content: str, marker_len: int, *, ordered: bool
    ) -> tuple[str, bool, int] | None:
        if marker_len == len(content):
            return content, ordered, marker_len
        if content[marker_len] not in " \t":
            return None
        return content[:marker_len], ordered, marker_len + 1


class ThematicClassifierMixin:
    """Mixin providing thematic break classification."""

    def _is_thematic_break(self, content: str) -> bool:
        """Three or more of the same -, * or _ character, spaces allowed."""
        stripped = content.rstrip()
        if not stripped or stripped[0] not in THEMATIC_BREAK_CHARS:
            return False
        char = stripped[0]
        count = 0
        for c in stripped:
            if c == char:
                count += 1
            elif c not in " \t":
                return False
        return count >= 3
