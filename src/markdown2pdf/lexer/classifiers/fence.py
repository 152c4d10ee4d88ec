"""Fenced code block classifier mixin."""

from markdown2pdf.lexer.modes import ScannerMode
from markdown2pdf.parsing.charsets import FENCE_CHARS


class FenceClassifierMixin:
    """Mixin providing fenced code block classification."""

    # These will be set by the Scanner class
    _fence_char: str
    _fence_count: int
    _fence_info: str
    _fence_indent: int
    _mode: ScannerMode

    def _try_classify_fence_start(self, content: str, indent: int = 0) -> str | None:
        """Try to classify content as a fence opening.

        Fences are 3+ backticks or tildes. The first word of the rest of the
        line is the language tag. Backtick fences cannot have backticks in
        the info string, so ```` ```code``` ```` stays an inline code span.

        Switches the scanner to CODE_FENCE mode on success.

        Args:
            content: Line content with leading whitespace stripped
            indent: Leading indentation, stripped again from content lines

        Returns:
            The fence run (e.g. "```") if valid, None otherwise.
        """
        if not content or content[0] not in FENCE_CHARS:
            return None

        fence_char = content[0]
        count = 0
        while count < len(content) and content[count] == fence_char:
            count += 1

        if count < 3:
            return None

        info = content[count:].strip()
        if fence_char == "`" and "`" in info:
            return None

        self._fence_char = fence_char
        self._fence_count = count
        self._fence_info = info.split()[0] if info else ""
        self._fence_indent = indent
        self._mode = ScannerMode.CODE_FENCE
        return fence_char * count

    def _is_closing_fence(self, line: str) -> bool:
        """Check if line closes the current code block.

        A closing fence uses the same character, is at least as long as the
        opening fence, and has nothing but whitespace after it.
        """
        if not self._fence_char:
            return False

        content = line.lstrip(" \t")
        count = 0
        while count < len(content) and content[count] == self._fence_char:
            count += 1

        if count < self._fence_count:
            return False

        return content[count:].strip() == ""
