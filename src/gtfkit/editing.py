"""Document editing helpers: glyph naming, creation, renaming and palette reuse."""

from __future__ import annotations

import logging

from gtfkit.config import (
    CHAR_GLYPH_BASE_NAME,
    DEFAULT_GLYPH_HEIGHT,
    DEFAULT_GLYPH_WIDTH,
    FILL_CHAR,
    NEW_GLYPH_BASE_NAME,
)
from gtfkit.resize import resize_bitmap
from gtfkit.schema import Glyph, GtfDocument, GtfHeader, Palette, Size

logger = logging.getLogger(__name__)


def unicode_label(char: str) -> str:
    """Code point label for a single character.

    "A" -> "U+0041"
    "😀" -> "U+1F600"
    """
    if len(char) != 1:
        msg = f"Expected a single character, got {char!r}"
        raise ValueError(msg)
    return f"U+{ord(char):04X}"


def unique_glyph_name(document: GtfDocument, base: str, always_number: bool = False) -> str:
    """Return base if unused, otherwise base1, base2, ...

    With always_number the bare base is never returned ("NewGlyph1", "NewGlyph2", ...).
    """
    existing = set(document.glyph_names())
    if not always_number and base not in existing:
        return base
    counter = 1
    while f"{base}{counter}" in existing:
        counter += 1
    return f"{base}{counter}"


def find_glyph(document: GtfDocument, name: str) -> Glyph | None:
    """First glyph with the given name, or None."""
    for glyph in document.glyphs:
        if glyph.name == name:
            return glyph
    return None


def new_document(font_name: str | None = None, default_size: Size | None = None) -> GtfDocument:
    return GtfDocument(header=GtfHeader(font_name=font_name, default_size=default_size))


def new_glyph(document: GtfDocument, name: str | None = None, char: str | None = None) -> Glyph:
    """Build (but do not add) a blank glyph sized from the header defaults.

    The bitmap is filled with '.', the palette is a copy of the default palette
    when one exists, and UNICODE is derived from char.
    """
    header = document.header
    if header.default_size is not None:
        size = header.default_size.model_copy()
    else:
        size = Size(width=DEFAULT_GLYPH_WIDTH, height=DEFAULT_GLYPH_HEIGHT)

    if name is None:
        if char is not None:
            base = char if char.isascii() and char.isalnum() else CHAR_GLYPH_BASE_NAME
            name = unique_glyph_name(document, base)
        else:
            name = unique_glyph_name(document, NEW_GLYPH_BASE_NAME, always_number=True)

    palette = Palette()
    if header.default_palette is not None:
        palette = Palette(entries=dict(header.default_palette.entries))

    return Glyph(
        name=name,
        unicode=unicode_label(char) if char is not None else None,
        char_repr=char,
        size=size,
        palette=palette,
        bitmap=[FILL_CHAR * size.width for _ in range(size.height)],
    )


def add_glyph(document: GtfDocument, name: str | None = None) -> Glyph:
    """Append a blank glyph and return it."""
    glyph = new_glyph(document, name=name)
    document.glyphs.append(glyph)
    logger.info("Added glyph %s", glyph.name)
    return glyph


def add_glyph_for_char(document: GtfDocument, char: str) -> Glyph:
    """Return the glyph already representing char, or append a new one for it."""
    for glyph in document.glyphs:
        if glyph.char_repr == char:
            logger.info("Glyph for %r already exists: %s", char, glyph.name)
            return glyph
    glyph = new_glyph(document, char=char)
    document.glyphs.append(glyph)
    logger.info("Added glyph %s for %r", glyph.name, char)
    return glyph


def remove_glyph(document: GtfDocument, name: str) -> bool:
    """Remove the first glyph named name. Returns False if there is none."""
    for index, glyph in enumerate(document.glyphs):
        if glyph.name == name:
            del document.glyphs[index]
            logger.info("Removed glyph %s", name)
            return True
    logger.info("No glyph named %s to remove", name)
    return False


def rename_glyph(document: GtfDocument, old_name: str, new_name: str) -> Glyph:
    """Rename a glyph, refusing empty or already used names.

    A single-character name also becomes the glyph's CHAR, and its UNICODE
    when none is set yet.

    Raises:
        ValueError: Unknown old_name, empty new_name, or new_name taken by another glyph.
    """
    glyph = find_glyph(document, old_name)
    if glyph is None:
        msg = f"No glyph named '{old_name}'"
        raise ValueError(msg)

    new_name = new_name.strip()
    if not new_name:
        msg = "Glyph name cannot be empty"
        raise ValueError(msg)
    if new_name != old_name and new_name in document.glyph_names():
        msg = f"A glyph named '{new_name}' already exists"
        raise ValueError(msg)

    validated = Glyph.model_validate({**glyph.model_dump(), "name": new_name})
    glyph.name = validated.name
    if len(new_name) == 1:
        glyph.char_repr = new_name
        if glyph.unicode is None:
            glyph.unicode = unicode_label(new_name)
    return glyph


def apply_default_palette(document: GtfDocument, name: str) -> Glyph:
    """Replace a glyph's palette with a copy of the font's default palette.

    Raises:
        ValueError: Unknown glyph or no default palette in the header.
    """
    glyph = find_glyph(document, name)
    if glyph is None:
        msg = f"No glyph named '{name}'"
        raise ValueError(msg)
    if document.header.default_palette is None:
        msg = "The font has no default palette"
        raise ValueError(msg)
    glyph.palette = Palette(entries=dict(document.header.default_palette.entries))
    return glyph


def resize_glyph(glyph: Glyph, new_size: Size) -> Glyph:
    """Resize a glyph's bitmap in place and update its SIZE.

    A glyph without a size is treated as being as wide as its widest row.
    """
    old_size = glyph.size
    if old_size is None:
        width = max((len(row) for row in glyph.bitmap), default=new_size.width)
        old_size = Size(width=max(width, 1), height=max(len(glyph.bitmap), 1))
    glyph.bitmap = resize_bitmap(glyph.bitmap, old_size, new_size)
    glyph.size = new_size.model_copy()
    return glyph
