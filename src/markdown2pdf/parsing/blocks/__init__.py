"""Block-level building for markdown2pdf."""

from markdown2pdf.parsing.blocks.core import BlockBuilderMixin
from markdown2pdf.parsing.blocks.list import ListBuilderMixin

__all__ = ["BlockBuilderMixin", "ListBuilderMixin"]
