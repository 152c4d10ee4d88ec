"""Tests for JSON serialization of tokens, elements and styles."""

import json

import pytest

from markdown2pdf import convert, parse
from markdown2pdf.serialization import (
    elements_from_json,
    elements_to_json,
    from_dict,
    from_json,
    to_dict,
    to_json,
    token_from_dict,
)
from markdown2pdf.styling import BASE_STYLE, Style
from markdown2pdf.tokens import Text

SAMPLE = """# Title **bold**

Para with `code`, [a *link*](https://x.io){color=#f00} and ![img](i.png).
Second line
after break.

- one
  - nested
1. ordered

> quote

```python
x = 1
```

---
"""


class TestTokenRoundTrip:
    def test_document_round_trip(self) -> None:
        doc = parse(SAMPLE)
        assert from_json(to_json(doc)) == doc

    def test_locations_survive(self) -> None:
        doc = parse(SAMPLE, source_file="sample.md")
        restored = from_json(to_json(doc))
        assert restored.children[1].location == doc.children[1].location
        assert restored.children[1].location.source_file == "sample.md"

    def test_output_is_deterministic(self) -> None:
        doc = parse(SAMPLE)
        assert to_json(doc) == to_json(parse(SAMPLE))

    def test_keys_sorted(self) -> None:
        data = json.loads(to_json(parse("x"), indent=2))
        assert list(data) == sorted(data)
        assert data["_type"] == "Document"

    def test_from_json_requires_document(self) -> None:
        with pytest.raises(ValueError, match="Expected Document"):
            from_json(json.dumps(to_dict(Text("x"))))

    def test_token_from_dict(self) -> None:
        assert token_from_dict(to_dict(Text("x"))) == Text("x")
        with pytest.raises(ValueError, match="Expected a token"):
            token_from_dict(to_dict(Style()))


class TestElementRoundTrip:
    def test_elements_round_trip(self) -> None:
        elements = convert(SAMPLE)
        assert elements_from_json(elements_to_json(elements)) == elements

    def test_colors_come_back_as_tuples(self) -> None:
        elements = elements_from_json(elements_to_json(convert("`x`")))
        run = elements[1]
        assert run.style.background_color == (240, 240, 240)  # type: ignore[attr-defined]

    def test_requires_array(self) -> None:
        with pytest.raises(ValueError, match="JSON array"):
            elements_from_json("{}")

    def test_requires_elements(self) -> None:
        with pytest.raises(ValueError, match="styled element"):
            elements_from_json(json.dumps([to_dict(Text("x"))]))


class TestStyles:
    def test_style_round_trip(self) -> None:
        style = Style(bold=True, text_color=(1, 2, 3))
        assert from_dict(to_dict(style)) == style

    def test_resolved_style_round_trip(self) -> None:
        assert from_dict(to_dict(BASE_STYLE)) == BASE_STYLE


class TestErrors:
    def test_unregistered_type(self) -> None:
        with pytest.raises(TypeError, match="Cannot serialize"):
            to_dict(object())

    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="Missing '_type'"):
            from_dict({"content": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown type"):
            from_dict({"_type": "Sidebar"})
