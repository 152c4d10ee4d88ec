"""Style table (StyleMatch) and built-in defaults.

A StyleMatch maps style keys to Style records. Keys are either simple
(``heading-1``, ``bold``, ``code-block``) or composite, with dot-separated
segments that name enclosing tokens (``list-item.emphasis``).

Keys not present in a table fall back to DEFAULT_STYLES during resolution.

Thread Safety:
StyleMatch is immutable after construction and safe to share across
threads and conversions.

"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from markdown2pdf.styling.style import PROPERTY_ALIASES, Style
from markdown2pdf.utils.logger import get_logger

logger = get_logger(__name__)

_GRAY = (240, 240, 240)

DEFAULT_STYLES: Mapping[str, Style] = MappingProxyType(
    {
        "document": Style(),
        "text": Style(),
        "paragraph": Style(after_spacing=1.0),
        "heading": Style(bold=True, after_spacing=1.0),
        "heading-1": Style(size=18),
        "heading-2": Style(size=16),
        "heading-3": Style(size=14),
        "heading-4": Style(size=12),
        "heading-5": Style(size=11),
        "heading-6": Style(size=10),
        "emphasis": Style(),
        "italic": Style(italic=True),
        "bold": Style(bold=True),
        "bold-italic": Style(bold=True, italic=True),
        "code": Style(font_family="courier"),
        "code-span": Style(background_color=_GRAY),
        "code-block": Style(background_color=_GRAY, after_spacing=1.0),
        "link": Style(text_color=(0, 0, 255), underline=True),
        "image": Style(italic=True),
        "block-quote": Style(italic=True, text_color=(100, 100, 100), after_spacing=1.0),
        "list": Style(after_spacing=1.0),
        "ordered-list": Style(),
        "unordered-list": Style(),
        "list-item": Style(),
        "horizontal-rule": Style(after_spacing=1.0),
    }
)

# Alternative spellings accepted in table keys (after "_" -> "-")
KEY_ALIASES: dict[str, str] = {
    "strong-emphasis": "bold",
    "strong": "bold",
    "blockquote": "block-quote",
    "quote": "block-quote",
    "listitem": "list-item",
    "codeblock": "code-block",
    "codespan": "code-span",
    "hr": "horizontal-rule",
    "rule": "horizontal-rule",
    "bolditalic": "bold-italic",
}


def normalize_key(key: str) -> str:
    """Normalize one key segment: lowercase, hyphens, aliases resolved.

    Example:
        >>> normalize_key("Strong_Emphasis")
        'bold'

    """
    segment = str(key).strip().lower().replace("_", "-").replace(" ", "-")
    return KEY_ALIASES.get(segment, segment)


def split_key(key: str) -> tuple[str, ...]:
    """Split a (possibly composite) key into normalized segments.

    A numeric segment after ``heading`` folds into it: ``heading.1`` is
    ``heading-1``.
    """
    segments: list[str] = []
    for part in str(key).split("."):
        if not part.strip():
            continue
        if part.strip().isdigit() and segments and segments[-1] == "heading":
            segments[-1] = f"heading-{int(part)}"
            continue
        segments.append(normalize_key(part))
    return tuple(segments)


def _is_property(name: str) -> bool:
    return str(name).strip().lower().replace("-", "_") in PROPERTY_ALIASES


class StyleMatch(Mapping[str, Style]):
    """Read-only style table.

    Usage:
        >>> table = StyleMatch({"heading-1": Style(size=20)})
        >>> table["heading-1"].size
        20
        >>> table = StyleMatch.from_dict({"heading": {"1": {"size": 20}}})
        >>> "heading-1" in table
        True

    Composite keys are indexed by their last segment for fast matching.

    """

    __slots__ = ("_entries", "_composites")

    def __init__(self, entries: Mapping[str, Style] | None = None) -> None:
        normalized: dict[str, Style] = {}
        for key, style in (entries or {}).items():
            segments = split_key(key)
            if not segments:
                continue
            name = ".".join(segments)
            normalized[name] = normalized[name].merged(style) if name in normalized else style

        composites: dict[str, list[tuple[tuple[str, ...], Style]]] = {}
        for name, style in normalized.items():
            segments = tuple(name.split("."))
            if len(segments) > 1:
                composites.setdefault(segments[-1], []).append((segments, style))
        for candidates in composites.values():
            # Stable: ties keep table order
            candidates.sort(key=lambda item: len(item[0]))

        self._entries: Mapping[str, Style] = MappingProxyType(normalized)
        self._composites: Mapping[str, tuple[tuple[tuple[str, ...], Style], ...]] = (
            MappingProxyType({last: tuple(items) for last, items in composites.items()})
        )

    def __getitem__(self, key: str) -> Style:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"StyleMatch({dict(self._entries)!r})"

    def __hash__(self) -> int:
        return hash(frozenset(self._entries.items()))

    def composites_ending_with(self, key: str) -> tuple[tuple[tuple[str, ...], Style], ...]:
        """Composite entries whose last segment is key, least specific first."""
        return self._composites.get(key, ())

    def updated(self, entries: Mapping[str, Style]) -> StyleMatch:
        """Return a new table with entries merged over this one per property."""
        combined = dict(self._entries)
        for key, style in entries.items():
            name = ".".join(split_key(key))
            combined[name] = combined[name].merged(style) if name in combined else style
        return StyleMatch(combined)

    @classmethod
    def default(cls) -> StyleMatch:
        """Table with no entries: every key resolves to the built-in defaults."""
        return _EMPTY

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> StyleMatch:
        """Build a table from TOML-shaped data.

        - ``[heading.1]`` (``{"heading": {"1": {...}}}``) becomes ``heading-1``
        - nested tables become composite keys: ``[list_item.emphasis]``
          becomes ``list-item.emphasis``
        - dotted keys in a plain dict work the same way
        - underscores become hyphens, ``strong_emphasis`` means ``bold``
        - a top-level ``[emphasis]`` section means ``italic``; nested under
          another table (``[list_item.emphasis]``) it keeps the key that
          covers every emphasis level
        - non-table values (numbers, strings) and unknown properties are
          ignored; invalid property values are dropped with a warning

        Never raises on malformed content.
        """
        entries: dict[str, Style] = {}
        queue: deque[tuple[tuple[str, ...], Mapping[str, Any]]] = deque()

        for key, value in raw.items():
            if not isinstance(value, Mapping):
                logger.debug("Ignoring non-table style entry %r", key)
                continue
            segments = split_key(key)
            if segments == ("emphasis",):
                # A top-level [emphasis] section styles italic text only
                segments = ("italic",)
            queue.append((segments, value))

        while queue:
            segments, table = queue.popleft()
            properties: dict[str, Any] = {}
            for name, value in table.items():
                if _is_property(name):
                    properties[name] = value
                    continue
                if not isinstance(value, Mapping):
                    logger.debug("Ignoring unknown style property %r in %r", name, ".".join(segments))
                    continue
                child = str(name).strip()
                if segments and segments[-1] == "heading" and child.isdigit():
                    queue.append(((*segments[:-1], f"heading-{int(child)}"), value))
                else:
                    queue.append(((*segments, *split_key(child)), value))

            if not segments or not properties:
                continue
            key = ".".join(segments)
            style = Style.from_mapping(properties, key=key)
            if style.is_empty:
                continue
            entries[key] = entries[key].merged(style) if key in entries else style

        return cls(entries)


_EMPTY = StyleMatch()
