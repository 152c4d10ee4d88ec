"""Token tree traversal.

Provides an iterative pre-order ``walk`` that reports each token with its
ancestry, a base visitor class with match-based dispatch, and
``plain_text`` for flattening inline content.

Example: collect all link URLs:

    class LinkCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.urls: list[str] = []

        def visit_link(self, token: Link) -> None:
            self.urls.append(token.url)

    collector = LinkCollector()
    collector.visit(doc)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). ``walk`` and ``plain_text`` are pure.

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from markdown2pdf.tokens import (
    BlockQuote,
    CodeBlock,
    CodeSpan,
    Document,
    Emphasis,
    Heading,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Literal,
    Paragraph,
    SoftBreak,
    Text,
    ThematicBreak,
    Token,
    child_tokens,
)


def walk(root: Token) -> Iterator[tuple[Token, tuple[Token, ...]]]:
    """Yield (token, ancestry) pairs in document pre-order.

    ``ancestry`` runs from the root down to the token's parent. Uses an
    explicit stack, so arbitrarily deep trees are safe.

    Example:
        >>> [type(t).__name__ for t, _ in walk(Paragraph((Text("a"),)))]
        ['Paragraph', 'Text']

    """
    stack: list[tuple[Token, tuple[Token, ...]]] = [(root, ())]
    while stack:
        token, ancestry = stack.pop()
        yield token, ancestry
        children = child_tokens(token)
        if children:
            child_ancestry = (*ancestry, token)
            for child in reversed(children):
                stack.append((child, child_ancestry))


def plain_text(tokens: Iterable[Token]) -> str:
    """Concatenate the visible text of inline tokens.

    Emphasis is flattened, links contribute their label, images their alt
    text, and breaks become single spaces.
    """
    parts: list[str] = []
    for top in tokens:
        for token, _ in walk(top):
            match token:
                case Text(content=content) | Literal(content=content) | CodeSpan(content=content):
                    parts.append(content)
                case Image(alt=alt):
                    parts.append(alt)
                case SoftBreak() | LineBreak():
                    parts.append(" ")
    return "".join(parts)


class BaseVisitor[T]:
    """Base token visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for the token types you care
    about. Unhandled types fall through to ``visit_default``. ``visit``
    walks the whole subtree in pre-order.

    """

    def visit(self, root: Token) -> None:
        """Dispatch every token under root (root included)."""
        for token, _ in walk(root):
            self._dispatch(token)

    def visit_default(self, token: Token) -> T:
        return None  # type: ignore[return-value]

    # -- Block visitors --------------------------------------------------------

    def visit_document(self, token: Document) -> T:
        return self.visit_default(token)

    def visit_heading(self, token: Heading) -> T:
        return self.visit_default(token)

    def visit_paragraph(self, token: Paragraph) -> T:
        return self.visit_default(token)

    def visit_code_block(self, token: CodeBlock) -> T:
        return self.visit_default(token)

    def visit_block_quote(self, token: BlockQuote) -> T:
        return self.visit_default(token)

    def visit_list(self, token: List) -> T:
        return self.visit_default(token)

    def visit_list_item(self, token: ListItem) -> T:
        return self.visit_default(token)

    def visit_thematic_break(self, token: ThematicBreak) -> T:
        return self.visit_default(token)

    # -- Inline visitors -------------------------------------------------------

    def visit_text(self, token: Text) -> T:
        return self.visit_default(token)

    def visit_literal(self, token: Literal) -> T:
        return self.visit_default(token)

    def visit_emphasis(self, token: Emphasis) -> T:
        return self.visit_default(token)

    def visit_code_span(self, token: CodeSpan) -> T:
        return self.visit_default(token)

    def visit_link(self, token: Link) -> T:
        return self.visit_default(token)

    def visit_image(self, token: Image) -> T:
        return self.visit_default(token)

    def visit_soft_break(self, token: SoftBreak) -> T:
        return self.visit_default(token)

    def visit_line_break(self, token: LineBreak) -> T:
        return self.visit_default(token)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, token: Token) -> T:
        """Match-based dispatch to visit_* methods."""
        match token:
            case Document():
                return self.visit_document(token)
            case Heading():
                return self.visit_heading(token)
            case Paragraph():
                return self.visit_paragraph(token)
            case CodeBlock():
                return self.visit_code_block(token)
            case BlockQuote():
                return self.visit_block_quote(token)
            case List():
                return self.visit_list(token)
            case ListItem():
                return self.visit_list_item(token)
            case ThematicBreak():
                return self.visit_thematic_break(token)
            case Text():
                return self.visit_text(token)
            case Literal():
                return self.visit_literal(token)
            case Emphasis():
                return self.visit_emphasis(token)
            case CodeSpan():
                return self.visit_code_span(token)
            case Link():
                return self.visit_link(token)
            case Image():
                return self.visit_image(token)
            case SoftBreak():
                return self.visit_soft_break(token)
            case LineBreak():
                return self.visit_line_break(token)
            case _:
                return self.visit_default(token)
