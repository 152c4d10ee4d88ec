"""Serialization: JSON round-trip for token trees and styled elements.

Converts tokens, styled elements and styles to/from JSON-compatible dicts.
Useful for:
- Handing a laid-out document to an out-of-process page renderer
- Snapshotting parse results in tests
- Debugging and inspection

All output is deterministic (sorted keys).

Example:
    from markdown2pdf import convert, parse
    from markdown2pdf.serialization import elements_from_json, elements_to_json, from_json, to_json

    doc = parse("# Hello **World**")
    assert from_json(to_json(doc)) == doc

    elements = convert("Some *text*")
    assert elements_from_json(elements_to_json(elements)) == elements

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Sequence
from dataclasses import fields, is_dataclass
from typing import Any

from markdown2pdf.location import SourceLocation
from markdown2pdf.renderers.elements import ELEMENT_TYPES, StyledElement
from markdown2pdf.styling.style import ResolvedStyle, Style
from markdown2pdf.tokens import (
    BLOCK_TYPES,
    CodeSpan,
    Document,
    Emphasis,
    Image,
    LineBreak,
    Link,
    ListItem,
    Literal,
    SoftBreak,
    Text,
    Token,
)

# Registry of type names to classes for deserialization
_TYPES: dict[str, type] = {
    cls.__name__: cls
    for cls in (
        Document,
        *BLOCK_TYPES,
        ListItem,
        Text,
        Literal,
        Emphasis,
        CodeSpan,
        Link,
        Image,
        SoftBreak,
        LineBreak,
        *ELEMENT_TYPES,
        Style,
        ResolvedStyle,
        SourceLocation,
    )
}


def to_dict(value: Any) -> dict[str, Any]:
    """Convert a token, element or style to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes children, styles and SourceLocation objects.

    Args:
        value: Any registered dataclass instance.

    Returns:
        Dict with ``_type`` and all fields.

    Raises:
        TypeError: If value is not a registered type.

    """
    type_name = type(value).__name__
    if _TYPES.get(type_name) is not type(value):
        msg = f"Cannot serialize {type_name}"
        raise TypeError(msg)

    result: dict[str, Any] = {"_type": type_name}
    for f in fields(value):
        result[f.name] = _serialize_value(getattr(value, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if is_dataclass(value) and not isinstance(value, type):
        return to_dict(value)
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, float, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Any:
    """Reconstruct a token, element or style from a dict.

    Uses the ``_type`` discriminator to determine the class. Lists come back
    as tuples, so colors and child sequences compare equal to the originals.

    Args:
        data: Dict with ``_type`` and fields (as produced by to_dict).

    Returns:
        Frozen dataclass instance.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized value"
        raise ValueError(msg)

    cls = _TYPES.get(type_name)
    if cls is None:
        msg = f"Unknown type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.name in data:
            kwargs[f.name] = _deserialize_value(data[f.name])
    return cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        if value.get("_type") is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string.

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)


def from_json(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node


def elements_to_json(elements: Sequence[StyledElement], *, indent: int | None = None) -> str:
    """Serialize a styled-element sequence to a JSON array."""
    return json.dumps([to_dict(e) for e in elements], sort_keys=True, indent=indent)


def elements_from_json(data: str) -> tuple[StyledElement, ...]:
    """Deserialize a styled-element sequence.

    Raises:
        ValueError: If the JSON is not an array of styled elements.

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected a JSON array, got {type(raw).__name__}"
        raise ValueError(msg)
    elements = tuple(from_dict(item) for item in raw)
    for element in elements:
        if not isinstance(element, ELEMENT_TYPES):
            msg = f"Expected a styled element, got {type(element).__name__}"
            raise ValueError(msg)
    return elements


def token_from_dict(data: dict[str, Any]) -> Token:
    """Like from_dict, but insists on a token."""
    value = from_dict(data)
    if not isinstance(value, Token):
        msg = f"Expected a token, got {type(value).__name__}"
        raise ValueError(msg)
    return value
