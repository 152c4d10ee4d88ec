"""ATX heading classifier mixin."""


class HeadingClassifierMixin:
    """Mixin providing ATX heading classification."""

    def _try_classify_heading(self, content: str) -> tuple[int, int, int] | None:
        """Try to classify content as an ATX heading.

        ATX headings start with 1-6 # characters followed by space, tab or
        end of line. A trailing # sequence is removed if preceded by space.

        Args:
            content: Line content with leading whitespace stripped

        Returns:
            (level, text_start, text_end) as indices into content, or None.
        """
        level = 0
        pos = 0
        while pos < len(content) and content[pos] == "#" and level < 7:
            level += 1
            pos += 1

        if level == 0 or level > 6:
            return None

        if pos < len(content) and content[pos] not in " \t":
            return None

        while pos < len(content) and content[pos] in " \t":
            pos += 1

        end = len(content.rstrip())
        if end <= pos:
            return level, pos, pos

        # Closing sequence: "## Title ##"
        trailing = end
        while trailing > pos and content[trailing - 1] == "#":
            trailing -= 1
        if trailing == pos:
            end = pos
        elif trailing < end and content[trailing - 1] in " \t":
            end = len(content[:trailing].rstrip())

        return level, pos, end
