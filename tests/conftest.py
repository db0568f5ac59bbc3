"""Shared fixtures for gtfkit tests."""

import pytest

from gtfkit.schema import Glyph, GtfDocument, GtfHeader, Palette, Size

# -- Canonical sample -------------------------------------------------------

# Exactly what serialize_gtf produces for sample_document (note "CHAR  " for space)
SAMPLE_GTF = (
    "HEADER\n"
    "FONT Tiny Test\n"
    "VERSION 1.0\n"
    "AUTHOR Test Author\n"
    "DESCRIPTION A tiny font for tests\n"
    "DEFAULT_SIZE 3x3\n"
    "DEFAULT_PALETTE\n"
    "# #FFFFFF\n"
    ". #000000\n"
    "END HEADER\n"
    "\n"
    "GLYPH A\n"
    "UNICODE U+0041\n"
    "CHAR A\n"
    "SIZE 3x3\n"
    "PALETTE\n"
    "# #FFFFFF\n"
    ". #000000\n"
    "END PALETTE\n"
    "DATA\n"
    ".#.\n"
    "#.#\n"
    "###\n"
    "END DATA\n"
    "END GLYPH A\n"
    "\n"
    "GLYPH Space\n"
    "UNICODE U+0020\n"
    "CHAR  \n"
    "SIZE 2x1\n"
    "PALETTE\n"
    ". #000000\n"
    "END PALETTE\n"
    "DATA\n"
    "..\n"
    "END DATA\n"
    "END GLYPH Space"
)


# -- Simple data fixtures ---------------------------------------------------


@pytest.fixture()
def sample_gtf_text():
    """Canonical GTF text for sample_document."""
    return SAMPLE_GTF


@pytest.fixture()
def sample_document():
    """A small two-glyph document with no warnings."""
    return GtfDocument(
        header=GtfHeader(
            font_name="Tiny Test",
            version="1.0",
            author="Test Author",
            description="A tiny font for tests",
            default_size=Size(width=3, height=3),
            default_palette=Palette(entries={".": "#000000", "#": "#FFFFFF"}),
        ),
        glyphs=[
            Glyph(
                name="A",
                unicode="U+0041",
                char_repr="A",
                size=Size(width=3, height=3),
                palette=Palette(entries={".": "#000000", "#": "#FFFFFF"}),
                bitmap=[".#.", "#.#", "###"],
            ),
            Glyph(
                name="Space",
                unicode="U+0020",
                char_repr=" ",
                size=Size(width=2, height=1),
                palette=Palette(entries={".": "#000000"}),
                bitmap=[".."],
            ),
        ],
    )


@pytest.fixture()
def sample_gtf_path(tmp_path):
    """The canonical sample written to a temporary .gtf file."""
    path = tmp_path / "sample.gtf"
    path.write_text(SAMPLE_GTF + "\n", encoding="utf-8")
    return path


@pytest.fixture()
def warning_gtf_path(tmp_path):
    """A .gtf file that parses with warnings (short bitmap, unknown palette char)."""
    path = tmp_path / "warnings.gtf"
    path.write_text(
        "GLYPH B\nSIZE 2x2\nPALETTE\n# #FFF\nEND PALETTE\nDATA\n#X\nEND DATA\nEND GLYPH B\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def broken_gtf_path(tmp_path):
    """A .gtf file with a structural error on line 2."""
    path = tmp_path / "broken.gtf"
    path.write_text("GLYPH A\nEND GLYPH B\n", encoding="utf-8")
    return path
