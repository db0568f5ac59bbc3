"""GtfDocument -> canonical GTF text.

Output is deterministic: header fields in a fixed order, palette entries
sorted by code point, one blank line after the header and after every glyph,
no trailing whitespace at the end of the text.
"""

from __future__ import annotations

from gtfkit.config import (
    KW_DATA,
    KW_DEFAULT_PALETTE,
    KW_END_DATA,
    KW_END_GLYPH,
    KW_END_HEADER,
    KW_END_PALETTE,
    KW_GLYPH,
    KW_HEADER,
    KW_PALETTE,
)
from gtfkit.schema import Glyph, GtfDocument, GtfHeader, Palette


def serialize_gtf(document: GtfDocument) -> str:
    """Render a document as canonical GTF text. The document is not modified."""
    lines: list[str] = []
    _write_header(lines, document.header)
    for glyph in document.glyphs:
        _write_glyph(lines, glyph)
    return "\n".join(lines).rstrip()


def _single_line(text: str) -> str:
    return text.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")


def _write_palette_entries(lines: list[str], palette: Palette) -> None:
    for char, color in palette.sorted_entries():
        lines.append(f"{char} {color}")


def _write_header(lines: list[str], header: GtfHeader) -> None:
    lines.append(KW_HEADER)
    if header.font_name is not None:
        lines.append(f"FONT {header.font_name}")
    if header.version is not None:
        lines.append(f"VERSION {header.version}")
    if header.author is not None:
        lines.append(f"AUTHOR {header.author}")
    if header.description is not None:
        lines.append(f"DESCRIPTION {_single_line(header.description)}")
    if header.default_size is not None:
        lines.append(f"DEFAULT_SIZE {header.default_size.to_text()}")
    if header.default_palette is not None and header.default_palette.entries:
        lines.append(KW_DEFAULT_PALETTE)
        _write_palette_entries(lines, header.default_palette)
    lines.append(KW_END_HEADER)
    lines.append("")


def _write_glyph(lines: list[str], glyph: Glyph) -> None:
    lines.append(f"{KW_GLYPH} {glyph.name}")

    if glyph.unicode is not None:
        lines.append(f"UNICODE {glyph.unicode}")
    if glyph.char_repr is not None:
        lines.append(f"CHAR {glyph.char_repr}")
    if glyph.size is not None:
        lines.append(f"SIZE {glyph.size.to_text()}")

    if glyph.palette.entries:
        lines.append(KW_PALETTE)
        _write_palette_entries(lines, glyph.palette)
        lines.append(KW_END_PALETTE)

    # Rows are written as stored, even when they disagree with SIZE
    if glyph.size is not None or glyph.bitmap:
        lines.append(KW_DATA)
        lines.extend(glyph.bitmap)
        lines.append(KW_END_DATA)

    lines.append(f"{KW_END_GLYPH} {glyph.name}")
    lines.append("")
