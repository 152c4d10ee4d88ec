"""Character sets for O(1) classification.

All sets are frozensets: O(1) membership, immutable, built once at import.

Usage:
    from markdown2pdf.parsing.charsets import ASCII_PUNCTUATION

    if char in ASCII_PUNCTUATION:
        ...
"""

import unicodedata

# Characters a backslash can escape
ASCII_PUNCTUATION: frozenset[str] = frozenset("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~")


def is_unicode_punctuation(char: str) -> bool:
    """Check if character is Unicode punctuation or symbol (P* or S*)."""
    if not char:
        return False
    if char in ASCII_PUNCTUATION:
        return True
    cat = unicodedata.category(char)
    return cat.startswith("P") or cat.startswith("S")


WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")


def is_unicode_whitespace(char: str) -> bool:
    """Check if character is Unicode whitespace.

    Treats empty string as whitespace, so line boundaries count as spaces
    in flanking checks.

    """
    if not char:
        return True
    if char in WHITESPACE:
        return True
    return unicodedata.category(char) == "Zs"


# Characters that end a plain text run during inline scanning
INLINE_SPECIAL: frozenset[str] = frozenset("*_`[]!\\")

EMPHASIS_DELIMITERS: frozenset[str] = frozenset("*_")

FENCE_CHARS: frozenset[str] = frozenset("`~")

UNORDERED_LIST_MARKERS: frozenset[str] = frozenset("-*+")

ORDERED_LIST_DELIMITERS: frozenset[str] = frozenset(".)")

THEMATIC_BREAK_CHARS: frozenset[str] = frozenset("-*_")
