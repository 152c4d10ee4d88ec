"""Logger namespacing for markdown2pdf.

Every module logs under ``markdown2pdf.*`` so applications can tune the
whole pipeline (or one stage, e.g. ``markdown2pdf.styling``) with one
``logging`` call. The library never installs handlers.

Example:
    >>> import logging
    >>> logging.getLogger("markdown2pdf.styling").setLevel(logging.ERROR)
"""

from __future__ import annotations

import logging

_ROOT = "markdown2pdf"


def get_logger(name: str) -> logging.Logger:
    """Return the stdlib logger for name, under the package namespace.

    Module names inside the package (``__name__``) are used as-is; any
    other name is nested below ``markdown2pdf.``.

    Example:
        >>> get_logger("layout").name
        'markdown2pdf.layout'
    """
    if name != _ROOT and not name.startswith(_ROOT + "."):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
