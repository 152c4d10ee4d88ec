"""Verify package imports work correctly."""


def test_import_markdown2pdf() -> None:
    """Test that markdown2pdf can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import markdown2pdf

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert markdown2pdf.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from markdown2pdf import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_location_import() -> None:
    from markdown2pdf.location import SourceLocation

    loc = SourceLocation(lineno=1, col_offset=1)
    assert str(loc) == "1:1"
