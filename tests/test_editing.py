"""Tests for document editing helpers."""

import pytest

from gtfkit.editing import (
    add_glyph,
    add_glyph_for_char,
    apply_default_palette,
    find_glyph,
    new_document,
    new_glyph,
    remove_glyph,
    rename_glyph,
    resize_glyph,
    unicode_label,
    unique_glyph_name,
)
from gtfkit.schema import Glyph, GtfDocument, Palette, Size


class TestUnicodeLabel:
    @pytest.mark.parametrize(
        ("char", "expected"),
        [("A", "U+0041"), (" ", "U+0020"), ("é", "U+00E9"), ("😀", "U+1F600")],
    )
    def test_label(self, char, expected):
        assert unicode_label(char) == expected

    def test_multiple_chars_raise(self):
        with pytest.raises(ValueError, match="single character"):
            unicode_label("AB")


class TestNaming:
    def test_unused_base_returned(self, sample_document):
        assert unique_glyph_name(sample_document, "B") == "B"

    def test_used_base_numbered(self, sample_document):
        assert unique_glyph_name(sample_document, "A") == "A1"

    def test_numbering_skips_taken(self, sample_document):
        sample_document.glyphs.append(Glyph(name="A1"))
        assert unique_glyph_name(sample_document, "A") == "A2"

    def test_always_number(self):
        assert unique_glyph_name(GtfDocument(), "NewGlyph", always_number=True) == "NewGlyph1"

    def test_find_glyph(self, sample_document):
        assert find_glyph(sample_document, "Space").char_repr == " "
        assert find_glyph(sample_document, "Missing") is None


class TestNewGlyph:
    def test_new_document(self):
        doc = new_document(font_name="Fresh", default_size=Size(width=4, height=6))
        assert doc.header.font_name == "Fresh"
        assert doc.header.default_size == Size(width=4, height=6)
        assert doc.glyphs == []

    def test_uses_header_default_size(self, sample_document):
        glyph = new_glyph(sample_document)
        assert glyph.size == Size(width=3, height=3)
        assert glyph.bitmap == ["...", "...", "..."]

    def test_fallback_size(self):
        glyph = new_glyph(GtfDocument())
        assert glyph.size == Size(width=5, height=7)
        assert len(glyph.bitmap) == 7

    def test_copies_default_palette(self, sample_document):
        glyph = new_glyph(sample_document)
        assert glyph.palette == sample_document.header.default_palette
        glyph.palette.entries["x"] = "#123"
        assert "x" not in sample_document.header.default_palette.entries

    def test_no_default_palette(self):
        assert new_glyph(GtfDocument()).palette == Palette()

    def test_default_names_are_numbered(self):
        doc = GtfDocument()
        assert add_glyph(doc).name == "NewGlyph1"
        assert add_glyph(doc).name == "NewGlyph2"

    def test_explicit_name(self):
        doc = GtfDocument()
        assert add_glyph(doc, name="dot").name == "dot"
        assert doc.glyph_names() == ["dot"]

    def test_not_added(self, sample_document):
        new_glyph(sample_document)
        assert len(sample_document.glyphs) == 2


class TestGlyphForChar:
    def test_alnum_char_names_itself(self):
        doc = GtfDocument()
        glyph = add_glyph_for_char(doc, "b")
        assert glyph.name == "b"
        assert glyph.char_repr == "b"
        assert glyph.unicode == "U+0062"

    def test_other_char_uses_generic_name(self):
        doc = GtfDocument()
        assert add_glyph_for_char(doc, "!").name == "Glyph"
        assert add_glyph_for_char(doc, "?").name == "Glyph1"

    def test_existing_char_returned(self, sample_document):
        glyph = add_glyph_for_char(sample_document, "A")
        assert glyph is sample_document.glyphs[0]
        assert len(sample_document.glyphs) == 2

    def test_name_clash_numbered(self, sample_document):
        sample_document.glyphs[0].char_repr = None
        assert add_glyph_for_char(sample_document, "A").name == "A1"


class TestRemoveRename:
    def test_remove(self, sample_document):
        assert remove_glyph(sample_document, "A")
        assert sample_document.glyph_names() == ["Space"]

    def test_remove_missing(self, sample_document):
        assert not remove_glyph(sample_document, "Z")
        assert len(sample_document.glyphs) == 2

    def test_rename(self, sample_document):
        glyph = rename_glyph(sample_document, "Space", "blank")
        assert glyph.name == "blank"
        assert glyph.char_repr == " "

    def test_rename_single_char_sets_char(self):
        doc = GtfDocument(glyphs=[Glyph(name="NewGlyph1")])
        glyph = rename_glyph(doc, "NewGlyph1", "Q")
        assert glyph.char_repr == "Q"
        assert glyph.unicode == "U+0051"

    def test_rename_keeps_existing_unicode(self):
        doc = GtfDocument(glyphs=[Glyph(name="g", unicode="U+2022")])
        assert rename_glyph(doc, "g", "x").unicode == "U+2022"

    def test_rename_to_same_name(self, sample_document):
        assert rename_glyph(sample_document, "A", "A").name == "A"

    def test_rename_strips(self, sample_document):
        assert rename_glyph(sample_document, "A", "  alpha ").name == "alpha"

    def test_rename_unknown(self, sample_document):
        with pytest.raises(ValueError, match="No glyph named"):
            rename_glyph(sample_document, "Z", "Y")

    def test_rename_empty(self, sample_document):
        with pytest.raises(ValueError, match="cannot be empty"):
            rename_glyph(sample_document, "A", "   ")

    def test_rename_duplicate(self, sample_document):
        with pytest.raises(ValueError, match="already exists"):
            rename_glyph(sample_document, "A", "Space")

    def test_rename_multiline_rejected(self, sample_document):
        with pytest.raises(ValueError):
            rename_glyph(sample_document, "A", "a\nb")
        assert sample_document.glyphs[0].name == "A"


class TestPaletteAndResize:
    def test_apply_default_palette(self, sample_document):
        glyph = apply_default_palette(sample_document, "Space")
        assert glyph.palette.entries == {"#": "#FFFFFF", ".": "#000000"}

    def test_apply_default_palette_missing(self):
        doc = GtfDocument(glyphs=[Glyph(name="g")])
        with pytest.raises(ValueError, match="no default palette"):
            apply_default_palette(doc, "g")

    def test_apply_default_palette_unknown_glyph(self, sample_document):
        with pytest.raises(ValueError, match="No glyph named"):
            apply_default_palette(sample_document, "Z")

    def test_resize_glyph(self, sample_document):
        glyph = resize_glyph(sample_document.glyphs[0], Size(width=4, height=2))
        assert glyph.size == Size(width=4, height=2)
        assert glyph.bitmap == [".#..", "#.#."]

    def test_resize_sizeless_glyph(self):
        glyph = Glyph(name="g", bitmap=["#", "##"])
        resize_glyph(glyph, Size(width=3, height=2))
        assert glyph.bitmap == ["#..", "##."]
        assert glyph.size == Size(width=3, height=2)

    def test_resize_size_not_shared(self):
        size = Size(width=2, height=1)
        glyph = resize_glyph(Glyph(name="g", size=Size(width=1, height=1), bitmap=["#"]), size)
        size.width = 9
        assert glyph.size.width == 2
