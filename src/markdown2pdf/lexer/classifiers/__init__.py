"""Line classifier mixins for the scanner.

Classifiers are pure logic: they inspect a line and report what it is,
without moving the scanner position.
"""

from markdown2pdf.lexer.classifiers.fence import FenceClassifierMixin
from markdown2pdf.lexer.classifiers.heading import HeadingClassifierMixin
from markdown2pdf.lexer.classifiers.list import ListClassifierMixin, ThematicClassifierMixin

__all__ = [
    "FenceClassifierMixin",
    "HeadingClassifierMixin",
    "ListClassifierMixin",
    "ThematicClassifierMixin",
]
