"""Style resolution.

Resolution merges, later winning per property:

1. Built-in defaults for each of the token's style keys, general to specific
2. Table entries for those keys
3. Composite table entries matching the token and its ancestry, least
   specific first
4. The token's inline overrides (link ``{key=value}`` attributes)

A composite key ``a.b.c`` matches when ``c`` is one of the token's keys and
``a`` then ``b`` name ancestors in that order, not necessarily adjacent.
So ``list-item.emphasis`` matches emphasis anywhere inside a list item, and
``list.list-item.emphasis`` beats it on specificity.

Resolution is a pure function of its inputs and never mutates the table.

"""

from __future__ import annotations

from collections.abc import Sequence

from markdown2pdf.styling.style import Style
from markdown2pdf.styling.table import DEFAULT_STYLES, StyleMatch, normalize_key
from markdown2pdf.tokens import Token

type StyleSubject = Token | str

_EMPTY = Style()

# General key reported ahead of a specific key by the matching token
_GENERAL_KEYS: dict[str, str] = {
    "italic": "emphasis",
    "bold": "emphasis",
    "bold-italic": "emphasis",
    "code-span": "code",
    "code-block": "code",
    "ordered-list": "list",
    "unordered-list": "list",
}


def style_keys_of(subject: StyleSubject) -> tuple[str, ...]:
    """Style keys for a token, or for a bare key string.

    A string names the same keys the matching token reports, so
    ``"heading-1"`` gives ``("heading", "heading-1")``.
    """
    if not isinstance(subject, str):
        return subject.style_keys
    key = normalize_key(subject)
    general = _GENERAL_KEYS.get(key)
    if general is None and key.startswith("heading-") and key[8:].isdigit():
        general = "heading"
    return (general, key) if general else (key,)


def _matches_ancestry(prefix: Sequence[str], ancestry: Sequence[tuple[str, ...]]) -> bool:
    """True if prefix segments name ancestors in order (gaps allowed)."""
    pos = 0
    count = len(ancestry)
    for segment in prefix:
        while pos < count and segment not in ancestry[pos]:
            pos += 1
        if pos == count:
            return False
        pos += 1
    return True


def resolve_keys(
    keys: Sequence[str],
    ancestry: Sequence[tuple[str, ...]],
    table: StyleMatch,
    overrides: Sequence[tuple[str, str]] = (),
) -> Style:
    """Resolve a style from raw keys.

    Args:
        keys: The token's style keys, general to specific
        ancestry: Style keys of each ancestor, root first
        table: Style table
        overrides: Inline (property, value) pairs applied last

    Returns:
        The merged partial Style.
    """
    style = _EMPTY
    for key in keys:
        default = DEFAULT_STYLES.get(key)
        if default is not None:
            style = style.merged(default)

    for key in keys:
        entry = table.get(key)
        if entry is not None:
            style = style.merged(entry)

    matched: list[tuple[int, int, Style]] = []
    for key_index, key in enumerate(keys):
        for segments, entry in table.composites_ending_with(key):
            if _matches_ancestry(segments[:-1], ancestry):
                matched.append((len(segments), key_index, entry))
    matched.sort(key=lambda item: (item[0], item[1]))
    for _, _, entry in matched:
        style = style.merged(entry)

    if overrides:
        style = style.merged(Style.from_mapping(dict(overrides), key=".".join(keys)))

    return style


def resolve(
    token: StyleSubject,
    ancestry: Sequence[StyleSubject] = (),
    table: StyleMatch | None = None,
) -> Style:
    """Resolve the style of a token in its structural context.

    Args:
        token: The token (or a bare style key such as ``"bold"``)
        ancestry: Enclosing tokens or keys, root first, parent last
        table: Style table; defaults to the built-in-only table

    Returns:
        The merged partial Style. Use ``Style.resolve_against`` for a
        concrete ResolvedStyle.

    Example:
        >>> table = StyleMatch({"bold": Style(size=12), "list-item.bold": Style(size=9)})
        >>> resolve("bold", ["list", "list-item"], table).size
        9

    """
    if table is None:
        table = StyleMatch.default()
    overrides = getattr(token, "overrides", ())
    return resolve_keys(
        style_keys_of(token),
        [style_keys_of(a) for a in ancestry],
        table,
        overrides,
    )


class StyleResolver:
    """Memoizing resolver bound to one table.

    Tokens with the same keys, ancestry keys and overrides resolve once.
    Instances are cheap; create one per conversion.

    """

    __slots__ = ("table", "_cache")

    def __init__(self, table: StyleMatch | None = None) -> None:
        self.table = table if table is not None else StyleMatch.default()
        self._cache: dict[tuple[object, ...], Style] = {}

    def resolve(self, token: StyleSubject, ancestry: Sequence[StyleSubject] = ()) -> Style:
        keys = style_keys_of(token)
        ancestry_keys = tuple(style_keys_of(a) for a in ancestry)
        overrides = tuple(getattr(token, "overrides", ()))
        cache_key = (keys, ancestry_keys, overrides)
        style = self._cache.get(cache_key)
        if style is None:
            style = resolve_keys(keys, ancestry_keys, self.table, overrides)
            self._cache[cache_key] = style
        return style
