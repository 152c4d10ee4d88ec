"""Inline token building for markdown2pdf.

Provides mixins that turn the inline units of one block into tokens:
- Emphasis (*, _) with cumulative levels
- Code spans (`)
- Links and images, with optional {key=value} style overrides
- Soft and hard line breaks

"""

from __future__ import annotations

from markdown2pdf.parsing.inline.core import InlineBuilderCoreMixin, normalize_code_span
from markdown2pdf.parsing.inline.emphasis import EmphasisMixin
from markdown2pdf.parsing.inline.links import LinkGroupingMixin, parse_link_attributes


class InlineBuilderMixin(
    EmphasisMixin,
    LinkGroupingMixin,
    InlineBuilderCoreMixin,
):
    """Combined inline building mixin.

    Required Host Attributes:
        - _text_transformer: Callable[[str], str] | None

    """

    pass


__all__ = [
    "EmphasisMixin",
    "InlineBuilderCoreMixin",
    "InlineBuilderMixin",
    "LinkGroupingMixin",
    "normalize_code_span",
    "parse_link_attributes",
]
