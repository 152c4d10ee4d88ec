"""Style records, the style table and style resolution."""

from markdown2pdf.styling.resolver import StyleResolver, resolve, resolve_keys
from markdown2pdf.styling.style import BASE_STYLE, Color, ResolvedStyle, Style, parse_color
from markdown2pdf.styling.table import DEFAULT_STYLES, StyleMatch, normalize_key

__all__ = [
    "BASE_STYLE",
    "Color",
    "DEFAULT_STYLES",
    "ResolvedStyle",
    "Style",
    "StyleMatch",
    "StyleResolver",
    "normalize_key",
    "parse_color",
    "resolve",
    "resolve_keys",
]
