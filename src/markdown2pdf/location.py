"""Source location tracking for error messages and debugging.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a unit or token in the (newline-normalized) source.

    lineno and col_offset are 1-indexed; offset and end_offset are absolute
    0-indexed positions.

    Examples:
        >>> loc = SourceLocation(lineno=3, col_offset=5, source_file="README.md")
        >>> str(loc)
        'README.md:3:5'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    def span_to(self, end: SourceLocation) -> SourceLocation:
        """Create a new location spanning from this location to end."""
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset,
            offset=self.offset,
            end_offset=end.end_offset or end.offset,
            source_file=self.source_file,
        )

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Placeholder for synthetic tokens and elements."""
        return cls(lineno=0, col_offset=0)


UNKNOWN_LOCATION = SourceLocation.unknown()
