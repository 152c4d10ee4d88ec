"""List building: grouping, nesting, termination."""

from markdown2pdf import parse
from markdown2pdf.tokens import Emphasis, LineBreak, List, ListItem, Paragraph, SoftBreak, Text


class TestListGrouping:
    """Consecutive marker lines form one list."""

    def test_bullet_list(self) -> None:
        doc = parse("- a\n- b")
        assert doc.children == (
            List(False, (ListItem((Text("a"),)), ListItem((Text("b"),)))),
        )

    def test_ordered_list(self) -> None:
        (lst,) = parse("1. a\n2. b\n3. c").children
        assert isinstance(lst, List)
        assert lst.ordered is True
        assert len(lst.items) == 3

    def test_mixed_bullet_characters_share_a_list(self) -> None:
        (lst,) = parse("- a\n* b\n+ c").children
        assert isinstance(lst, List)
        assert len(lst.items) == 3

    def test_item_content_is_inline(self) -> None:
        (lst,) = parse("- *a* b").children
        assert lst.items[0] == ListItem((Emphasis(1, (Text("a"),)), Text(" b")))  # type: ignore[attr-defined]

    def test_empty_item(self) -> None:
        (lst,) = parse("-\n- b").children
        assert lst.items[0] == ListItem(())  # type: ignore[attr-defined]


class TestListTermination:
    """Blank lines, class changes and other blocks end a list."""

    def test_blank_line_splits_lists(self) -> None:
        doc = parse("- a\n\n- b")
        assert [type(b) for b in doc.children] == [List, List]

    def test_class_change_splits_lists(self) -> None:
        doc = parse("- a\n1. b")
        assert [b.ordered for b in doc.children] == [False, True]  # type: ignore[attr-defined]

    def test_unindented_text_ends_list(self) -> None:
        doc = parse("- a\nb")
        assert [type(b) for b in doc.children] == [List, Paragraph]

    def test_heading_ends_list(self) -> None:
        doc = parse("- a\n# b")
        assert len(doc.children) == 2


class TestNesting:
    """Deeper markers open nested lists inside the previous item."""

    def test_nested_list(self) -> None:
        (lst,) = parse("- a\n  - b\n- c").children
        assert lst == List(
            False,
            (
                ListItem((Text("a"), List(False, (ListItem((Text("b"),)),)))),
                ListItem((Text("c"),)),
            ),
        )

    def test_nested_ordered_inside_bullet(self) -> None:
        (lst,) = parse("- a\n  1. b\n  2. c").children
        nested = lst.items[0].children[1]  # type: ignore[attr-defined]
        assert isinstance(nested, List)
        assert nested.ordered is True
        assert len(nested.items) == 2

    def test_class_change_in_nested_list_opens_sibling(self) -> None:
        (lst,) = parse("- a\n  1. x\n  - y").children
        children = lst.items[0].children  # type: ignore[attr-defined]
        assert [type(c) for c in children] == [Text, List, List]
        assert [c.ordered for c in children[1:]] == [True, False]

    def test_dedent_returns_to_middle_level(self) -> None:
        (lst,) = parse("- a\n  - b\n    - c\n  - d").children
        level2 = lst.items[0].children[1]  # type: ignore[attr-defined]
        assert len(level2.items) == 2
        assert isinstance(level2.items[0].children[1], List)

    def test_deep_nesting_uses_no_recursion(self) -> None:
        depth = 300
        source = "\n".join("  " * i + "- x" for i in range(depth))
        (lst,) = parse(source).children
        seen = 0
        current: List | None = lst  # type: ignore[assignment]
        while current is not None:
            seen += 1
            children = current.items[0].children
            current = children[1] if len(children) > 1 else None  # type: ignore[assignment]
        assert seen == depth


class TestContinuation:
    """Indented plain lines continue the item above."""

    def test_indented_line_continues_item(self) -> None:
        (lst,) = parse("- a\n  more").children
        assert lst.items[0] == ListItem((Text("a"), SoftBreak(), Text("more")))  # type: ignore[attr-defined]

    def test_continuation_of_nested_item(self) -> None:
        (lst,) = parse("- a\n  - b\n    more").children
        nested = lst.items[0].children[1]  # type: ignore[attr-defined]
        assert nested.items[0] == ListItem((Text("b"), SoftBreak(), Text("more")))

    def test_continuation_at_outer_indent_closes_nested(self) -> None:
        (lst,) = parse("- a\n  - b\n  more").children
        item = lst.items[0]  # type: ignore[attr-defined]
        assert isinstance(item.children[1], List)
        assert item.children[2:] == (Text("more"),)


class TestTrailingBackslash:
    """A backslash ending an item's last line is text, not a break."""

    def test_single_item(self) -> None:
        (lst,) = parse("- dir\\\n").children
        assert lst == List(False, (ListItem((Text("dir\\"),)),))

    def test_before_next_marker(self) -> None:
        (lst,) = parse("- a\\\n- b").children
        assert lst.items == (ListItem((Text("a\\"),)), ListItem((Text("b"),)))  # type: ignore[attr-defined]

    def test_before_nested_list(self) -> None:
        (lst,) = parse("- a\\\n  - b").children
        assert lst.items[0].children[0] == Text("a\\")  # type: ignore[attr-defined]

    def test_nested_item_closed_by_continuation(self) -> None:
        (lst,) = parse("- a\n  - b\\\n  more").children
        item = lst.items[0]  # type: ignore[attr-defined]
        assert item.children[1].items[0] == ListItem((Text("b\\"),))
        assert item.children[2:] == (Text("more"),)

    def test_continued_line_breaks(self) -> None:
        (lst,) = parse("- a\\\n  more").children
        assert lst.items[0] == ListItem((Text("a"), LineBreak(), Text("more")))  # type: ignore[attr-defined]
