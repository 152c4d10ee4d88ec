"""Style records, value parsing and StyleMatch construction."""

import logging

import pytest

from markdown2pdf.styling import BASE_STYLE, DEFAULT_STYLES, Style, StyleMatch, normalize_key, parse_color
from markdown2pdf.styling.style import parse_alignment, parse_bool, parse_size
from markdown2pdf.styling.table import split_key


class TestStyle:
    def test_merged_later_wins(self) -> None:
        merged = Style(size=12, italic=True).merged(Style(bold=True, size=14))
        assert merged == Style(size=14, bold=True, italic=True)

    def test_merged_keeps_unset(self) -> None:
        assert Style(bold=True).merged(Style()) == Style(bold=True)
        assert Style().merged(Style(bold=False)) == Style(bold=False)

    def test_false_is_a_value(self) -> None:
        assert Style(bold=True).merged(Style(bold=False)).bold is False

    def test_resolve_against_fills_from_base(self) -> None:
        resolved = Style(size=14).resolve_against()
        assert resolved.size == 14
        assert resolved.font_family == BASE_STYLE.font_family
        assert resolved.text_color == (0, 0, 0)

    def test_repr_shows_set_fields(self) -> None:
        assert repr(Style(bold=True, size=12)) == "Style(size=12, bold=True)"
        assert repr(Style()) == "Style()"

    def test_to_dict(self) -> None:
        assert Style(italic=True, text_color=(1, 2, 3)).to_dict() == {
            "italic": True,
            "text_color": (1, 2, 3),
        }

    def test_from_mapping_aliases(self) -> None:
        style = Style.from_mapping(
            {"fontFamily": "times", "fontSize": "12", "textColor": "#f00", "afterSpacing": 2}
        )
        assert style == Style(font_family="times", size=12.0, text_color=(255, 0, 0), after_spacing=2)

    def test_from_mapping_drops_invalid(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="markdown2pdf"):
            style = Style.from_mapping({"size": -3, "bold": "maybe", "italic": True}, key="x")
        assert style == Style(italic=True)
        assert "Dropping invalid size" in caplog.text

    def test_from_mapping_ignores_unknown(self) -> None:
        assert Style.from_mapping({"shadow": True}) == Style()


class TestValueParsers:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ({"r": 1, "g": 2, "b": 3}, (1, 2, 3)),
            ([10, 20, 30], (10, 20, 30)),
            ("#0000ff", (0, 0, 255)),
            ("abc", (170, 187, 204)),
            ({"r": 1, "g": 2}, None),
            ([1, 2], None),
            ([1, 2, 256], None),
            ([True, 0, 0], None),
            ("#12", None),
            ("#gggggg", None),
            (12, None),
        ],
    )
    def test_parse_color(self, value: object, expected: object) -> None:
        assert parse_color(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [(True, True), ("yes", True), ("OFF", False), ("0", False), ("maybe", None), (1, None)],
    )
    def test_parse_bool(self, value: object, expected: object) -> None:
        assert parse_bool(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [(12, 12), ("9.5", 9.5), (0, None), (-1, None), (True, None), ("big", None)],
    )
    def test_parse_size(self, value: object, expected: object) -> None:
        assert parse_size(value) == expected

    def test_unknown_alignment_falls_back_to_left(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="markdown2pdf"):
            assert parse_alignment("diagonal") == "left"
        assert "Unknown alignment" in caplog.text

    def test_known_alignment(self) -> None:
        assert parse_alignment(" Center ") == "center"
        assert parse_alignment(3) is None


class TestKeys:
    @pytest.mark.parametrize(
        "key,expected",
        [
            ("Strong_Emphasis", "bold"),
            ("list_item", "list-item"),
            ("blockquote", "block-quote"),
            ("code block", "code-block"),
            ("heading-2", "heading-2"),
        ],
    )
    def test_normalize_key(self, key: str, expected: str) -> None:
        assert normalize_key(key) == expected

    def test_split_key(self) -> None:
        assert split_key("heading.1") == ("heading-1",)
        assert split_key("list_item.strong") == ("list-item", "bold")
        assert split_key("a..b") == ("a", "b")


class TestStyleMatchFromDict:
    """TOML-shaped data becomes a flat table of normalized keys."""

    def test_heading_levels(self) -> None:
        table = StyleMatch.from_dict({"heading": {"1": {"size": 20}, "bold": True}})
        assert table["heading-1"] == Style(size=20)
        assert table["heading"] == Style(bold=True)

    def test_nested_tables_become_composites(self) -> None:
        table = StyleMatch.from_dict({"list_item": {"emphasis": {"color": "#00ff00"}}})
        assert table["list-item.emphasis"] == Style(text_color=(0, 255, 0))
        assert "list-item" not in table

    def test_top_level_emphasis_section_is_italic(self) -> None:
        table = StyleMatch.from_dict({"emphasis": {"italic": True}, "strong_emphasis": {"bold": True}})
        assert dict(table) == {"italic": Style(italic=True), "bold": Style(bold=True)}

    def test_dotted_keys(self) -> None:
        table = StyleMatch.from_dict({"block_quote.code_span": {"size": 8}})
        assert list(table) == ["block-quote.code-span"]

    def test_color_tables(self) -> None:
        table = StyleMatch.from_dict({"link": {"textColor": {"r": 255, "g": 0, "b": 0}}})
        assert table["link"].text_color == (255, 0, 0)

    def test_non_mapping_entries_ignored(self) -> None:
        table = StyleMatch.from_dict({"title": "x", "version": 2, "bold": {"size": 11}})
        assert dict(table) == {"bold": Style(size=11)}

    def test_invalid_values_warned(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="markdown2pdf"):
            table = StyleMatch.from_dict({"bold": {"size": "huge", "italic": True}})
        assert table["bold"] == Style(italic=True)
        assert "huge" in caplog.text

    def test_entry_with_only_invalid_values_is_skipped(self) -> None:
        assert len(StyleMatch.from_dict({"bold": {"size": "huge"}})) == 0

    def test_empty(self) -> None:
        assert len(StyleMatch.from_dict({})) == 0


class TestStyleMatch:
    def test_init_normalizes_and_merges_keys(self) -> None:
        table = StyleMatch({"Strong": Style(size=12), "bold": Style(italic=True)})
        assert dict(table) == {"bold": Style(size=12, italic=True)}

    def test_updated_returns_new_table(self) -> None:
        table = StyleMatch({"bold": Style(size=12)})
        newer = table.updated({"bold": Style(italic=True), "link": Style(underline=False)})
        assert newer["bold"] == Style(size=12, italic=True)
        assert newer["link"] == Style(underline=False)
        assert table["bold"] == Style(size=12)
        assert "link" not in table

    def test_default_is_empty_and_shared(self) -> None:
        assert len(StyleMatch.default()) == 0
        assert StyleMatch.default() is StyleMatch.default()

    def test_equality_and_hash(self) -> None:
        a = StyleMatch({"bold": Style(size=12)})
        b = StyleMatch.from_dict({"bold": {"size": 12}})
        assert a == b
        assert hash(a) == hash(b)

    def test_composites_sorted_by_specificity(self) -> None:
        table = StyleMatch(
            {"list.list-item.bold": Style(size=7), "list-item.bold": Style(size=8)}
        )
        segments = [s for s, _ in table.composites_ending_with("bold")]
        assert segments == [("list-item", "bold"), ("list", "list-item", "bold")]

    def test_read_only(self) -> None:
        table = StyleMatch({"bold": Style(size=12)})
        with pytest.raises(TypeError):
            table["bold"] = Style()  # type: ignore[index]


class TestDefaults:
    def test_heading_sizes(self) -> None:
        assert [DEFAULT_STYLES[f"heading-{n}"].size for n in range(1, 7)] == [18, 16, 14, 12, 11, 10]

    def test_defaults_cannot_change(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_STYLES["bold"] = Style()  # type: ignore[index]
