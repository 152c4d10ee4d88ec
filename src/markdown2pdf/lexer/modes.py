"""Scanner operating modes."""

from __future__ import annotations

from enum import Enum, auto


class ScannerMode(Enum):
    """Scanner operating modes.

    - BLOCK: Between blocks, classifying each line
    - CODE_FENCE: Inside a fenced code block, copying lines verbatim

    """

    BLOCK = auto()
    CODE_FENCE = auto()


COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"
