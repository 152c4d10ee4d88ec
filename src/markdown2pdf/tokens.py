"""Typed token tree for markdown2pdf.

All tokens are frozen dataclasses with slots:
- Immutability: a tree is built once per parse and never changed
- Pattern matching: match statements work naturally on the variants
- Location is keyword-only and excluded from equality, so
  ``Text("a") == Text("a", location=...)``

Token Hierarchy:
Token (base)
├── Block
│   ├── Document
│   ├── Heading
│   ├── Paragraph
│   ├── CodeBlock
│   ├── List
│   ├── ListItem
│   ├── BlockQuote
│   └── ThematicBreak
└── Inline
    ├── Text
    ├── Literal
    ├── Emphasis
    ├── CodeSpan
    ├── Link
    ├── Image
    ├── SoftBreak
    └── LineBreak

Style keys:
Every token reports ``style_keys``, the style-table keys that describe it
from general to specific (``("heading", "heading-2")``), and ``kind``, the
most specific of them. These keys drive style resolution and form the
ancestry chain of descendants.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Literal as TypingLiteral

from markdown2pdf.location import UNKNOWN_LOCATION, SourceLocation

# =============================================================================
# Base Token
# =============================================================================


@dataclass(frozen=True, slots=True)
class Token:
    """Base class for all tokens."""

    location: SourceLocation = field(
        default=UNKNOWN_LOCATION, kw_only=True, compare=False, repr=False
    )

    KEYS: ClassVar[tuple[str, ...]] = ()

    @property
    def style_keys(self) -> tuple[str, ...]:
        """Style-table keys for this token, general to specific."""
        return self.KEYS

    @property
    def kind(self) -> str:
        """Most specific style key (the token's entry in an ancestry chain)."""
        return self.style_keys[-1]


# =============================================================================
# Inline Tokens
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Token):
    """Plain text content."""

    content: str

    KEYS: ClassVar[tuple[str, ...]] = ("text",)


@dataclass(frozen=True, slots=True)
class Literal(Token):
    """Literal span left behind by a malformed construct.

    Unmatched emphasis runs, unclosed brackets and links with an empty URL
    end up here, character for character. Styled exactly like text.

    """

    content: str

    KEYS: ClassVar[tuple[str, ...]] = ("text",)


@dataclass(frozen=True, slots=True)
class Emphasis(Token):
    """Emphasized text with a cumulative level.

    Markdown: *italic*, **bold**, ***bold italic***
    The level adds up through nesting: ``*a **b** c*`` holds an inner
    Emphasis of level 3.

    """

    level: int
    children: tuple[Inline, ...]

    @property
    def style_keys(self) -> tuple[str, ...]:
        if self.level <= 1:
            return ("emphasis", "italic")
        if self.level == 2:
            return ("emphasis", "bold")
        return ("emphasis", "bold-italic")


@dataclass(frozen=True, slots=True)
class CodeSpan(Token):
    """Inline code.

    Markdown: `code`

    """

    content: str

    KEYS: ClassVar[tuple[str, ...]] = ("code", "code-span")


@dataclass(frozen=True, slots=True)
class Link(Token):
    """Hyperlink.

    Markdown: [label](url) or [label](url){color=#0000ff}

    ``overrides`` holds the raw attribute pairs applied last during style
    resolution.

    """

    label: tuple[Inline, ...]
    url: str
    overrides: tuple[tuple[str, str], ...] = ()

    KEYS: ClassVar[tuple[str, ...]] = ("link",)


@dataclass(frozen=True, slots=True)
class Image(Token):
    """Image reference.

    Markdown: ![alt](url)

    """

    alt: str
    url: str

    KEYS: ClassVar[tuple[str, ...]] = ("image",)


@dataclass(frozen=True, slots=True)
class SoftBreak(Token):
    """Line end inside a paragraph, rendered as a space."""

    KEYS: ClassVar[tuple[str, ...]] = ("text",)


@dataclass(frozen=True, slots=True)
class LineBreak(Token):
    """Hard line break (two trailing spaces or a trailing backslash)."""

    KEYS: ClassVar[tuple[str, ...]] = ("text",)


type Inline = Text | Literal | Emphasis | CodeSpan | Link | Image | SoftBreak | LineBreak


# =============================================================================
# Block Tokens
# =============================================================================


@dataclass(frozen=True, slots=True)
class Heading(Token):
    """ATX heading.

    Markdown: # Heading .. ###### Heading

    """

    level: TypingLiteral[1, 2, 3, 4, 5, 6]
    children: tuple[Inline, ...]

    @property
    def style_keys(self) -> tuple[str, ...]:
        return ("heading", f"heading-{self.level}")


@dataclass(frozen=True, slots=True)
class Paragraph(Token):
    """Paragraph block: consecutive text lines."""

    children: tuple[Inline, ...]

    KEYS: ClassVar[tuple[str, ...]] = ("paragraph",)


@dataclass(frozen=True, slots=True)
class CodeBlock(Token):
    """Fenced code block.

    ``content`` is the verbatim text between the fences, newlines included.
    ``language`` is the first word of the info string, or None.

    """

    language: str | None
    content: str

    KEYS: ClassVar[tuple[str, ...]] = ("code", "code-block")


@dataclass(frozen=True, slots=True)
class ListItem(Token):
    """List item: inline content, then any nested lists."""

    children: tuple[Inline | List, ...]

    KEYS: ClassVar[tuple[str, ...]] = ("list-item",)


@dataclass(frozen=True, slots=True)
class List(Token):
    """Ordered or unordered list."""

    ordered: bool
    items: tuple[ListItem, ...]

    @property
    def style_keys(self) -> tuple[str, ...]:
        return ("list", "ordered-list" if self.ordered else "unordered-list")


@dataclass(frozen=True, slots=True)
class BlockQuote(Token):
    """Block quote: consecutive ``>`` lines."""

    children: tuple[Inline, ...]

    KEYS: ClassVar[tuple[str, ...]] = ("block-quote",)


@dataclass(frozen=True, slots=True)
class ThematicBreak(Token):
    """Horizontal rule.

    Markdown: --- or *** or ___

    """

    KEYS: ClassVar[tuple[str, ...]] = ("horizontal-rule",)


@dataclass(frozen=True, slots=True)
class Document(Token):
    """Root token holding all top-level blocks."""

    children: tuple[Block, ...]

    KEYS: ClassVar[tuple[str, ...]] = ("document",)


type Block = (
    Document
    | Heading
    | Paragraph
    | CodeBlock
    | List
    | ListItem
    | BlockQuote
    | ThematicBreak
)

BLOCK_TYPES: tuple[type[Token], ...] = (
    Heading,
    Paragraph,
    CodeBlock,
    List,
    BlockQuote,
    ThematicBreak,
)


def child_tokens(token: Token) -> tuple[Token, ...]:
    """Direct children of a token in document order."""
    match token:
        case Document(children=c) | Heading(children=c) | Paragraph(children=c):
            return c
        case Emphasis(children=c) | ListItem(children=c) | BlockQuote(children=c):
            return c
        case Link(label=label):
            return label
        case List(items=items):
            return items
    return ()
