"""Tests for the plain-text element renderer."""

import pytest

from markdown2pdf import Converter, convert
from markdown2pdf.renderers import ElementRenderer, TextRenderer


def render(source: str) -> str:
    return TextRenderer().render(convert(source))


class TestTextRenderer:
    """Layout survives; styles are dropped."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("Hello *world*", "Hello world\n"),
            ("a\nb", "a b\n"),
            ("a  \nb", "a\nb\n"),
            ("# Hi\n\n- [docs](https://x.io)", "Hi\n\n• docs <https://x.io>\n"),
            ("para\n\n---\n\nnext", "para\n\n---\n\nnext\n"),
            ("![cat](c.png)", "[image: cat](c.png)\n"),
            ("[](https://x.io)", "https://x.io\n"),
            ("", ""),
        ],
    )
    def test_render(self, source: str, expected: str) -> None:
        assert render(source) == expected

    def test_nested_list(self) -> None:
        assert render("1. a\n   - b\n2. c") == "1. a\n  • b\n2. c\n"

    def test_list_followed_by_paragraph(self) -> None:
        assert render("- a\n\nafter") == "• a\n\nafter\n"

    def test_code_block(self) -> None:
        assert render("```py\nx\n```") == "[code:py]\nx\n[/code]\n"

    def test_code_block_without_language(self) -> None:
        assert render("```\nx\n```\nafter") == "[code]\nx\n[/code]\n\nafter\n"

    def test_literal_delimiters_kept(self) -> None:
        assert render("a * b [c") == "a * b [c\n"

    def test_renderer_is_reusable(self) -> None:
        renderer = TextRenderer()
        elements = convert("# T\n\nbody")
        assert renderer.render(elements) == renderer.render(elements)

    def test_converter_render(self) -> None:
        assert Converter().render("*x*", TextRenderer()) == "x\n"

    def test_satisfies_protocol(self) -> None:
        renderer: ElementRenderer[str] = TextRenderer()
        assert renderer.render(()) == ""
