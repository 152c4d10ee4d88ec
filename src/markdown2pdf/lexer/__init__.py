"""Line-window scanner for markdown2pdf.

The scanner reads one line at a time, classifies it, then commits the
position. Inline content on each line is split into text runs and markers.

Architecture:
lexer/
├── __init__.py          # Re-exports Scanner, ScannerMode, scan
├── core.py              # Scanner class (mixin composition + navigation)
├── modes.py             # ScannerMode enum, comment delimiters
├── classifiers/         # Line classification mixins
│   ├── heading.py       # ATX heading
│   ├── fence.py         # Fenced code open/close
│   └── list.py          # List markers and thematic breaks
└── scanners/            # Mode-specific scanners
    ├── block.py         # Block mode (main dispatch, quotes, comments)
    ├── fence.py         # Code fence mode
    └── inline.py        # Emphasis runs, code spans, links, escapes

Usage:
    >>> from markdown2pdf.lexer import scan
    >>> [u.kind.name for u in scan("# Hi")]
    ['HEADING_MARKER', 'TEXT', 'SOFT_BREAK', 'EOF']

"""

from markdown2pdf.lexer.core import Scanner, scan
from markdown2pdf.lexer.modes import ScannerMode

__all__ = ["Scanner", "ScannerMode", "scan"]
