"""Document builder: token trees laid out as styled elements."""

from dataclasses import dataclass

import pytest

from markdown2pdf import parse
from markdown2pdf.errors import BuildError
from markdown2pdf.renderers import (
    BULLET,
    BlockBreak,
    CodeBlockElement,
    DocumentBuilder,
    ImageElement,
    IndentBegin,
    IndentEnd,
    LineBreakElement,
    LinkRun,
    RuleElement,
    TextRun,
    build_document,
)
from markdown2pdf.styling import StyleMatch
from markdown2pdf.tokens import Document, Token


def layout(source: str, table: object = None) -> tuple:
    return build_document(parse(source), table)  # type: ignore[arg-type]


def runs(source: str, table: object = None) -> list[TextRun]:
    return [e for e in layout(source, table) if isinstance(e, TextRun)]


class TestElementSequence:
    def test_paragraph(self) -> None:
        elements = layout("Hello *world*")
        assert [type(e) for e in elements] == [BlockBreak, TextRun, TextRun, BlockBreak]
        assert elements[0] == BlockBreak("paragraph", "start")
        assert elements[-1] == BlockBreak("paragraph", "end", 1.0)
        assert [e.text for e in elements[1:3]] == ["Hello ", "world"]

    def test_blocks_in_order(self) -> None:
        elements = layout("# T\n\npara")
        breaks = [(e.block, e.edge) for e in elements if isinstance(e, BlockBreak)]
        assert breaks == [
            ("heading-1", "start"),
            ("heading-1", "end"),
            ("paragraph", "start"),
            ("paragraph", "end"),
        ]

    def test_empty_document(self) -> None:
        assert build_document(parse("")) == ()

    def test_soft_break_is_space(self) -> None:
        assert [r.text for r in runs("a\nb")] == ["a", " ", "b"]

    def test_line_break(self) -> None:
        assert any(isinstance(e, LineBreakElement) for e in layout("a  \nb"))

    def test_thematic_break(self) -> None:
        elements = layout("---")
        assert [type(e) for e in elements] == [BlockBreak, RuleElement, BlockBreak]
        assert elements[0].block == "horizontal-rule"

    def test_image(self) -> None:
        (image,) = [e for e in layout("![alt](i.png)") if isinstance(e, ImageElement)]
        assert (image.alt, image.url) == ("alt", "i.png")
        assert image.style.italic is True

    def test_literal_delimiters_are_text(self) -> None:
        assert "".join(r.text for r in runs("a * b")) == "a * b"


class TestStyles:
    def test_heading_text(self) -> None:
        (run,) = runs("# Title")
        assert run.style.size == 18
        assert run.style.bold is True

    def test_paragraph_text_uses_base(self) -> None:
        (run,) = runs("plain")
        assert run.style.size == 10
        assert run.style.font_family == "helvetica"
        assert run.style.text_color == (0, 0, 0)

    def test_nested_emphasis(self) -> None:
        bold, both, after = runs("**bold *and italic* text**")
        assert (bold.style.bold, bold.style.italic) == (True, False)
        assert (both.style.bold, both.style.italic) == (True, True)
        assert after.style == bold.style

    def test_emphasis_inside_heading_keeps_size(self) -> None:
        _, emphasized = runs("# A *b*")
        assert emphasized.style.size == 18
        assert emphasized.style.italic is True

    def test_code_span(self) -> None:
        text, code = runs("a `x`")
        assert code.text == "x"
        assert code.style.font_family == "courier"
        assert code.style.background_color == (240, 240, 240)
        assert text.style.background_color is None

    def test_code_block(self) -> None:
        elements = layout("```py\nx\n```")
        assert [type(e) for e in elements] == [BlockBreak, CodeBlockElement, BlockBreak]
        code = elements[1]
        assert (code.content, code.language) == ("x\n", "py")
        assert code.style.font_family == "courier"
        assert elements[2] == BlockBreak("code-block", "end", 1.0)

    def test_block_quote(self) -> None:
        (run,) = runs("> q")
        assert run.style.italic is True
        assert run.style.text_color == (100, 100, 100)

    def test_table_from_dict(self) -> None:
        (run,) = runs("# T", {"heading": {"1": {"size": 24}}})
        assert run.style.size == 24

    def test_composite_entry_applies_only_in_context(self) -> None:
        table = StyleMatch.from_dict({"list_item": {"bold": {"text_color": "#00ff00"}}})
        (inside,) = [r for r in runs("- **x**", table) if r.text == "x"]
        (outside,) = runs("**x**", table)
        assert inside.style.text_color == (0, 255, 0)
        assert outside.style.text_color == (0, 0, 0)

    def test_text_entry_is_root_layer(self) -> None:
        (run,) = runs("plain", {"text": {"font": "times"}})
        assert run.style.font_family == "times"


class TestLists:
    def test_markers_and_levels(self) -> None:
        elements = layout("- a\n  - b")
        begins = [(e.level, e.marker) for e in elements if isinstance(e, IndentBegin)]
        assert begins == [(1, BULLET), (2, BULLET)]

    def test_numbering_restarts_per_list(self) -> None:
        elements = layout("1. a\n2. b\n\n5. c")
        markers = [e.marker for e in elements if isinstance(e, IndentBegin)]
        assert markers == ["1.", "2.", "1."]

    def test_indent_pairs_nest(self) -> None:
        elements = layout("- a\n  - b\n- c")
        levels = [
            (type(e).__name__, e.level)
            for e in elements
            if isinstance(e, IndentBegin | IndentEnd)
        ]
        assert levels == [
            ("IndentBegin", 1),
            ("IndentBegin", 2),
            ("IndentEnd", 2),
            ("IndentEnd", 1),
            ("IndentBegin", 1),
            ("IndentEnd", 1),
        ]

    def test_list_block_breaks(self) -> None:
        elements = layout("1. a")
        assert elements[0] == BlockBreak("ordered-list", "start")
        assert elements[-1] == BlockBreak("ordered-list", "end", 1.0)

    @pytest.mark.parametrize(
        "source",
        ["- a\n  - b\n    - c\n- d", "> q\n\n1. x\n   - y\n\n```\nz\n```", "# h\n---\n- a"],
    )
    def test_pairs_balanced(self, source: str) -> None:
        depth = 0
        open_blocks: list[str] = []
        for element in layout(source):
            if isinstance(element, BlockBreak):
                if element.edge == "start":
                    open_blocks.append(element.block)
                else:
                    assert open_blocks.pop() == element.block
            elif isinstance(element, IndentBegin):
                depth += 1
                assert element.level == depth
            elif isinstance(element, IndentEnd):
                assert element.level == depth
                depth -= 1
        assert depth == 0
        assert open_blocks == []


class TestLinks:
    def test_single_link_run_with_segments(self) -> None:
        elements = layout("see [the **docs**](https://x.io)")
        (link,) = [e for e in elements if isinstance(e, LinkRun)]
        assert link.text == "the docs"
        assert link.url == "https://x.io"
        assert [s.text for s in link.segments] == ["the ", "docs"]
        assert link.segments[1].style.bold is True
        assert link.segments[0].style == link.style
        assert link.style.text_color == (0, 0, 255)
        assert link.style.underline is True

    def test_adjacent_segments_with_same_style_merge(self) -> None:
        (link,) = [e for e in layout("[a\nb](u)") if isinstance(e, LinkRun)]
        assert [s.text for s in link.segments] == ["a b"]

    def test_empty_label_shows_url(self) -> None:
        (link,) = [e for e in layout("[](https://x.io)") if isinstance(e, LinkRun)]
        assert link.text == "https://x.io"
        assert [s.text for s in link.segments] == ["https://x.io"]

    def test_override(self) -> None:
        (link,) = [e for e in layout("[a](u){color=#ff0000}") if isinstance(e, LinkRun)]
        assert link.style.text_color == (255, 0, 0)
        assert link.style.underline is True

    def test_image_label_contributes_alt(self) -> None:
        (link,) = [e for e in layout("[![logo](l.png)](home)") if isinstance(e, LinkRun)]
        assert link.text == "logo"


class TestBuilder:
    def test_builder_reuse(self) -> None:
        builder = DocumentBuilder()
        assert builder.build(parse("a")) == builder.build(parse("a"))
        assert len(builder.table) == 0

    def test_locations_propagate(self) -> None:
        elements = layout("a\n*b*")
        (run,) = [e for e in elements if isinstance(e, TextRun) and e.text == "b"]
        assert run.location.lineno == 2

    def test_unknown_token_raises(self) -> None:
        @dataclass(frozen=True, slots=True)
        class Sidebar(Token):
            KEYS = ("sidebar",)

        with pytest.raises(BuildError, match="Sidebar"):
            DocumentBuilder().build(Document((Sidebar(),)))  # type: ignore[arg-type]
