"""Mode-specific scanner mixins.

Scanners move the scanner position and yield units for one line at a time.
"""

from markdown2pdf.lexer.scanners.block import BlockScannerMixin
from markdown2pdf.lexer.scanners.fence import FenceScannerMixin
from markdown2pdf.lexer.scanners.inline import InlineScannerMixin

__all__ = [
    "BlockScannerMixin",
    "FenceScannerMixin",
    "InlineScannerMixin",
]
