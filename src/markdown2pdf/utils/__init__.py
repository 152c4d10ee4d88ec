"""Utility modules for markdown2pdf.

Provides:
- logger: get_logger for namespaced logging
- stringbuilder: line-aware StringBuilder used by the text renderer
"""

from markdown2pdf.utils.logger import get_logger
from markdown2pdf.utils.stringbuilder import StringBuilder

__all__ = [
    "StringBuilder",
    "get_logger",
]
