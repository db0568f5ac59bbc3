"""Whole-document quality checks for GTF fonts."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from gtfkit.errors import GtfParseError
from gtfkit.parser import parse_gtf
from gtfkit.schema import Glyph, GtfDocument


def validate_document(document: GtfDocument) -> list[str]:
    """Run all validation checks on a document. Returns list of issues (empty = valid)."""
    issues: list[str] = []

    _check_parse_warnings(document, issues)
    _check_duplicate_names(document, issues)
    _check_duplicate_chars(document, issues)
    for glyph in document.glyphs:
        _check_size_present(glyph, issues)
        _check_row_count(glyph, issues)
        _check_row_widths(glyph, issues)
        _check_palette_coverage(glyph, issues)

    return issues


def validate_file(path: str) -> list[str]:
    """Read and parse a GTF file, then validate."""
    filepath = Path(path)

    if not filepath.exists():
        return [f"File not found: {path}"]

    try:
        document = parse_gtf(filepath.read_text(encoding="utf-8-sig"))
    except UnicodeDecodeError as e:
        return [f"Not a UTF-8 text file: {e}"]
    except OSError as e:
        return [f"Cannot read file: {e}"]
    except GtfParseError as e:
        return [f"Parse error: {e}"]

    return validate_document(document)


# --- Individual checks ---


def _check_parse_warnings(document: GtfDocument, issues: list[str]) -> None:
    """Surface warnings recorded by the parser."""
    for glyph in document.glyphs:
        for warning in glyph.validation_warnings:
            issues.append(f"Glyph '{glyph.name}': {warning}")


def _check_duplicate_names(document: GtfDocument, issues: list[str]) -> None:
    counts = Counter(document.glyph_names())
    for name, count in counts.items():
        if count > 1:
            issues.append(f"Duplicate glyph name '{name}' ({count} glyphs)")


def _check_duplicate_chars(document: GtfDocument, issues: list[str]) -> None:
    counts = Counter(g.char_repr for g in document.glyphs if g.char_repr is not None)
    for char, count in counts.items():
        if count > 1:
            issues.append(f"Character {char!r} is represented by {count} glyphs")


def _check_size_present(glyph: Glyph, issues: list[str]) -> None:
    if glyph.size is None and glyph.bitmap:
        issues.append(f"Glyph '{glyph.name}': has bitmap data but no SIZE")


def _check_row_count(glyph: Glyph, issues: list[str]) -> None:
    if glyph.size is None:
        return
    if len(glyph.bitmap) != glyph.size.height:
        issues.append(
            f"Glyph '{glyph.name}': {len(glyph.bitmap)} rows != declared height "
            f"{glyph.size.height}"
        )


def _check_row_widths(glyph: Glyph, issues: list[str]) -> None:
    if glyph.size is None:
        return
    for i, row in enumerate(glyph.bitmap):
        if len(row) != glyph.size.width:
            issues.append(
                f"Glyph '{glyph.name}' row {i}: length {len(row)} != declared width "
                f"{glyph.size.width}"
            )


def _check_palette_coverage(glyph: Glyph, issues: list[str]) -> None:
    """Every bitmap character must be a palette key."""
    if not glyph.bitmap:
        return
    if not glyph.palette.entries:
        issues.append(f"Glyph '{glyph.name}': bitmap present but palette is empty")
        return
    used = {c for row in glyph.bitmap for c in row}
    missing = used - glyph.palette.entries.keys()
    if missing:
        issues.append(f"Glyph '{glyph.name}': characters not in palette: {_format_chars(missing)}")


def _format_chars(chars: set[str]) -> str:
    """Format a set of characters for display."""
    return ", ".join(repr(c) for c in sorted(chars))
