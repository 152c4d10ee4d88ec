"""ElementRenderer protocol: stable interface for styled-element consumers.

A page-layout backend (PDF writer, previewer) implements
``render(elements) -> T``. The built-in ``TextRenderer`` is the reference
implementation and renders to plain text.

Example:
    from markdown2pdf.renderers.protocol import ElementRenderer

    def export(renderer: ElementRenderer[bytes], text: str) -> bytes:
        return renderer.render(convert(text))

"""

from collections.abc import Sequence
from typing import Protocol

from markdown2pdf.renderers.elements import StyledElement


class ElementRenderer[T](Protocol):
    """Protocol for styled-element renderers.

    Contract for implementations:
    - Elements arrive in document order; BlockBreak and Indent pairs nest
    - A LinkRun's text and url form one clickable region
    - CodeBlockElement content is verbatim; language is a hint

    """

    def render(self, elements: Sequence[StyledElement]) -> T:
        """Render a styled-element sequence.

        Args:
            elements: Output of ``build_document``.

        Returns:
            Rendered output.

        """
        ...
