"""Style records.

Style is a partial record: every property is optional, and ``merged``
combines two records last-writer-wins per property. ResolvedStyle is the
concrete record attached to output elements, with every property filled.

Property values arrive from three places: the built-in defaults, a style
table parsed from TOML-shaped data, and ``{key=value}`` attributes written
after a link. ``Style.from_mapping`` accepts all of them and drops any value
it cannot interpret, logging a warning instead of raising.

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from typing import Any

from markdown2pdf.utils.logger import get_logger

logger = get_logger(__name__)

type Color = tuple[int, int, int]

ALIGNMENTS: frozenset[str] = frozenset({"left", "center", "right", "justify"})

# Accepted spellings for each Style field (TOML names, snake_case, short forms)
PROPERTY_ALIASES: dict[str, str] = {
    "fontfamily": "font_family",
    "font_family": "font_family",
    "font": "font_family",
    "size": "size",
    "fontsize": "size",
    "font_size": "size",
    "bold": "bold",
    "italic": "italic",
    "underline": "underline",
    "strikethrough": "strikethrough",
    "textcolor": "text_color",
    "text_color": "text_color",
    "color": "text_color",
    "backgroundcolor": "background_color",
    "background_color": "background_color",
    "background": "background_color",
    "afterspacing": "after_spacing",
    "after_spacing": "after_spacing",
    "spacing": "after_spacing",
    "alignment": "alignment",
    "align": "alignment",
}


@dataclass(frozen=True, slots=True)
class ResolvedStyle:
    """Concrete style for one output element. Every property is set."""

    font_family: str
    size: float
    bold: bool
    italic: bool
    underline: bool
    strikethrough: bool
    text_color: Color
    background_color: Color | None
    after_spacing: float
    alignment: str


BASE_STYLE = ResolvedStyle(
    font_family="helvetica",
    size=10.0,
    bold=False,
    italic=False,
    underline=False,
    strikethrough=False,
    text_color=(0, 0, 0),
    background_color=None,
    after_spacing=0.0,
    alignment="left",
)


@dataclass(frozen=True, slots=True)
class Style:
    """Partial style record; None means "not set here".

    Example:
        >>> Style(size=12, italic=True).merged(Style(bold=True, size=14))
        Style(size=14, bold=True, italic=True)

    """

    font_family: str | None = None
    size: float | None = None
    bold: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    strikethrough: bool | None = None
    text_color: Color | None = None
    background_color: Color | None = None
    after_spacing: float | None = None
    alignment: str | None = None

    def __repr__(self) -> str:
        set_fields = ", ".join(
            f"{f.name}={getattr(self, f.name)!r}"
            for f in fields(self)
            if getattr(self, f.name) is not None
        )
        return f"Style({set_fields})"

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def merged(self, other: Style) -> Style:
        """Return a copy with every property set in other taking over."""
        if other.is_empty:
            return self
        if self.is_empty:
            return other
        values = {}
        for f in fields(self):
            value = getattr(other, f.name)
            values[f.name] = value if value is not None else getattr(self, f.name)
        return Style(**values)

    def resolve_against(self, base: ResolvedStyle = BASE_STYLE) -> ResolvedStyle:
        """Fill every unset property from base."""
        values = {}
        for f in fields(self):
            value = getattr(self, f.name)
            values[f.name] = value if value is not None else getattr(base, f.name)
        return ResolvedStyle(**values)

    def to_dict(self) -> dict[str, Any]:
        """Only the properties that are set."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], *, key: str = "") -> Style:
        """Build a Style from TOML-shaped or attribute data.

        Unknown property names are ignored. Values that cannot be parsed are
        dropped with a warning; this never raises.

        Args:
            raw: Property mapping (``{"size": 12, "textcolor": {"r": 0, ...}}``)
            key: Style key the mapping belongs to, for log messages

        Example:
            >>> Style.from_mapping({"textcolor": {"r": 255, "g": 0, "b": 0}, "bold": "yes"})
            Style(bold=True, text_color=(255, 0, 0))

        """
        values: dict[str, Any] = {}
        for prop, value in raw.items():
            name = PROPERTY_ALIASES.get(str(prop).strip().lower().replace("-", "_"))
            if name is None:
                logger.debug("Ignoring unknown style property %r for %r", prop, key)
                continue
            parsed = _PARSERS[name](value)
            if parsed is None:
                logger.warning("Dropping invalid %s value %r for style %r", prop, value, key)
                continue
            values[name] = parsed
        return cls(**values)


# =============================================================================
# Value parsers: each returns None for a value it cannot interpret
# =============================================================================


def parse_color(value: Any) -> Color | None:
    """Parse ``{r, g, b}``, ``[r, g, b]`` or ``"#rrggbb"`` / ``"#rgb"``.

    Components must be integers in 0..255.

    Example:
        >>> parse_color("#0000ff")
        (0, 0, 255)

    """
    if isinstance(value, Mapping):
        try:
            components = [value["r"], value["g"], value["b"]]
        except KeyError:
            return None
    elif isinstance(value, list | tuple):
        components = list(value)
    elif isinstance(value, str):
        text = value.strip().lstrip("#")
        if len(text) == 3:
            text = "".join(c * 2 for c in text)
        if len(text) != 6:
            return None
        try:
            return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
        except ValueError:
            return None
    else:
        return None

    if len(components) != 3:
        return None
    for component in components:
        if isinstance(component, bool) or not isinstance(component, int):
            return None
        if not 0 <= component <= 255:
            return None
    return (components[0], components[1], components[2])


def parse_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "on", "1"):
            return True
        if lowered in ("false", "no", "off", "0"):
            return False
    return None


def _parse_number(value: Any, *, positive: bool) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    if not isinstance(value, int | float):
        return None
    if value != value:  # NaN
        return None
    if positive and value <= 0:
        return None
    if value < 0:
        return None
    return value


def parse_size(value: Any) -> float | None:
    return _parse_number(value, positive=True)


def parse_spacing(value: Any) -> float | None:
    return _parse_number(value, positive=False)


def parse_alignment(value: Any) -> str | None:
    """Alignment name; an unknown name falls back to ``left``."""
    if not isinstance(value, str):
        return None
    lowered = value.strip().lower()
    if lowered in ALIGNMENTS:
        return lowered
    logger.warning("Unknown alignment %r, using 'left'", value)
    return "left"


def parse_font_family(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


_PARSERS: dict[str, Callable[[Any], Any]] = {
    "font_family": parse_font_family,
    "size": parse_size,
    "bold": parse_bool,
    "italic": parse_bool,
    "underline": parse_bool,
    "strikethrough": parse_bool,
    "text_color": parse_color,
    "background_color": parse_color,
    "after_spacing": parse_spacing,
    "alignment": parse_alignment,
}
