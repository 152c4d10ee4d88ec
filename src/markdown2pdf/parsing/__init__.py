"""Token building subsystem for markdown2pdf.

Turns the scanner's flat unit list into the Document token tree.

Modules:
- builder: TokenBuilder host class and build()
- unit_nav: Unit stream navigation
- blocks: Block dispatch and list nesting
- inline: Emphasis pairing, link grouping and inline assembly
- charsets: Character sets shared with the scanner

"""

from markdown2pdf.parsing.builder import TokenBuilder, build

__all__ = ["TokenBuilder", "build"]
