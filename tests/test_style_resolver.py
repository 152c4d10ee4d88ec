"""Style resolution: defaults, table entries, composites, overrides."""

import pytest

from markdown2pdf.styling import Style, StyleMatch, StyleResolver, resolve, resolve_keys
from markdown2pdf.styling.resolver import style_keys_of
from markdown2pdf.tokens import Emphasis, Heading, Link, List, ListItem, Text


@pytest.fixture
def table() -> StyleMatch:
    return StyleMatch(
        {
            "bold": Style(size=12),
            "list-item.bold": Style(size=9),
            "list.list-item.bold": Style(size=8, underline=True),
            "block-quote.bold": Style(text_color=(1, 1, 1)),
        }
    )


class TestDefaults:
    def test_heading_defaults(self) -> None:
        style = resolve(Heading(2, ()))
        assert style.size == 16
        assert style.bold is True

    def test_emphasis_levels(self) -> None:
        assert resolve(Emphasis(1, ())).resolve_against().italic is True
        bold = resolve(Emphasis(2, ())).resolve_against()
        assert (bold.bold, bold.italic) == (True, False)
        both = resolve(Emphasis(5, ())).resolve_against()
        assert (both.bold, both.italic) == (True, True)

    def test_unknown_key_is_empty(self) -> None:
        assert resolve("sidebar") == Style()

    def test_string_keys_are_normalized(self) -> None:
        assert resolve("Strong_Emphasis") == resolve("bold")


class TestTableEntries:
    def test_table_beats_default(self) -> None:
        table = StyleMatch({"heading-1": Style(size=30)})
        assert resolve(Heading(1, ()), table=table).size == 30

    def test_general_table_entry_beats_specific_default(self) -> None:
        table = StyleMatch({"heading": Style(size=30)})
        assert resolve(Heading(1, ()), table=table).size == 30

    def test_specific_entry_beats_general_entry(self) -> None:
        table = StyleMatch({"heading": Style(size=30), "heading-1": Style(size=40)})
        assert resolve(Heading(1, ()), table=table).size == 40

    def test_unset_properties_fall_through(self) -> None:
        table = StyleMatch({"heading-1": Style(italic=True)})
        style = resolve(Heading(1, ()), table=table)
        assert (style.size, style.italic, style.bold) == (18, True, True)


class TestComposites:
    def test_composite_beats_simple_entry(self, table: StyleMatch) -> None:
        assert resolve("bold", ["list-item"], table).size == 9

    def test_more_specific_composite_wins(self, table: StyleMatch) -> None:
        style = resolve("bold", ["list", "list-item"], table)
        assert style.size == 8
        assert style.underline is True

    def test_ancestors_need_not_be_adjacent(self, table: StyleMatch) -> None:
        ancestry = ["list", "list-item", "emphasis", "link"]
        assert resolve("bold", ancestry, table).size == 8

    def test_order_matters(self, table: StyleMatch) -> None:
        assert resolve("bold", ["list-item", "list"], table).size == 9

    def test_no_match_without_ancestor(self, table: StyleMatch) -> None:
        assert resolve("bold", ["paragraph"], table).size == 12

    def test_composites_from_different_branches_combine(self, table: StyleMatch) -> None:
        style = resolve("bold", ["block-quote", "list-item"], table)
        assert style.size == 9
        assert style.text_color == (1, 1, 1)

    def test_token_ancestry(self, table: StyleMatch) -> None:
        item = ListItem(())
        outer = List(False, (item,))
        bold = Emphasis(2, (Text("x"),))
        assert resolve(bold, [outer, item], table).size == 8

    def test_composite_on_general_key(self) -> None:
        table = StyleMatch({"list-item.emphasis": Style(text_color=(9, 9, 9))})
        assert resolve(Emphasis(1, ()), ["list-item"], table).text_color == (9, 9, 9)

    def test_string_ancestry_matches_token_ancestry(self) -> None:
        table = StyleMatch({"heading.bold": Style(size=30), "list.emphasis": Style(underline=True)})
        bold = Emphasis(2, (Text("x"),))
        assert resolve("bold", ["heading-1"], table).size == 30
        assert resolve("bold", ["heading-1"], table) == resolve(bold, [Heading(1, ())], table)
        assert resolve("italic", ["ordered-list"], table).underline is True

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("heading-2", ("heading", "heading-2")),
            ("unordered-list", ("list", "unordered-list")),
            ("Strong", ("emphasis", "bold")),
            ("code_block", ("code", "code-block")),
            ("heading-x", ("heading-x",)),
            ("paragraph", ("paragraph",)),
        ],
    )
    def test_string_style_keys(self, key: str, expected: tuple[str, ...]) -> None:
        assert style_keys_of(key) == expected


class TestOverrides:
    def test_link_overrides_apply_last(self) -> None:
        table = StyleMatch({"link": Style(text_color=(0, 255, 0))})
        link = Link((), "u", overrides=(("color", "#ff0000"), ("bold", "yes")))
        style = resolve(link, table=table)
        assert style.text_color == (255, 0, 0)
        assert style.bold is True
        assert style.underline is True

    def test_invalid_override_is_dropped(self) -> None:
        link = Link((), "u", overrides=(("size", "big"),))
        assert resolve(link) == resolve(Link((), "u"))

    def test_resolve_keys_with_overrides(self) -> None:
        style = resolve_keys(("text",), (), StyleMatch.default(), (("italic", "true"),))
        assert style == Style(italic=True)


class TestPurity:
    def test_idempotent(self, table: StyleMatch) -> None:
        first = resolve("bold", ["list", "list-item"], table)
        second = resolve("bold", ["list", "list-item"], table)
        assert first == second

    def test_table_not_mutated(self, table: StyleMatch) -> None:
        before = dict(table)
        resolve("bold", ["list", "list-item"], table)
        resolve(Link((), "u", overrides=(("size", "20"),)), table=table)
        assert dict(table) == before


class TestStyleResolver:
    def test_matches_pure_function(self, table: StyleMatch) -> None:
        resolver = StyleResolver(table)
        for ancestry in ([], ["list-item"], ["list", "list-item"]):
            assert resolver.resolve("bold", ancestry) == resolve("bold", ancestry, table)

    def test_cache_returns_same_object(self, table: StyleMatch) -> None:
        resolver = StyleResolver(table)
        first = resolver.resolve(Emphasis(2, ()), ["list-item"])
        second = resolver.resolve(Emphasis(2, (Text("other"),)), ["list-item"])
        assert first is second

    def test_overrides_are_part_of_the_cache_key(self) -> None:
        resolver = StyleResolver()
        plain = resolver.resolve(Link((), "u"))
        red = resolver.resolve(Link((), "u", overrides=(("color", "#f00"),)))
        assert plain != red

    def test_default_table(self) -> None:
        assert len(StyleResolver().table) == 0
