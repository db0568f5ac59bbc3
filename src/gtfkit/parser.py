"""GTF text -> GtfDocument.

A line-oriented state machine. Every line is trimmed and blank lines are
skipped. Structural faults raise GtfParseError (no document is returned);
content faults such as bad row widths or unknown palette characters are
recorded on the glyph being parsed and parsing continues.

Usage:
    doc = parse_gtf(path.read_text(encoding="utf-8"))
    for glyph in doc.glyphs:
        print(glyph.name, glyph.validation_warnings)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import NoReturn

from gtfkit.config import (
    KEYWORD_TOKENS,
    KW_DATA,
    KW_DEFAULT_PALETTE,
    KW_END_DATA,
    KW_END_GLYPH,
    KW_END_HEADER,
    KW_END_PALETTE,
    KW_GLYPH,
    KW_HEADER,
    KW_PALETTE,
    UNICODE_PREFIX,
)
from gtfkit.errors import GtfParseError
from gtfkit.schema import Glyph, GtfDocument, GtfHeader, Palette, Size, check_color

logger = logging.getLogger(__name__)


class ParseState(Enum):
    SEARCHING = "Searching"
    IN_HEADER = "InHeader"
    IN_DEFAULT_PALETTE = "InDefaultPalette"
    IN_GLYPH_DEFINITION = "InGlyphDefinition"
    IN_PALETTE = "InPalette"
    EXPECTING_DATA_KEYWORD = "ExpectingDataKeyword"
    IN_BITMAP = "InBitmap"
    EXPECTING_END_GLYPH = "ExpectingEndGlyph"


_HEADER_FIELDS = {
    "FONT": "font_name",
    "VERSION": "version",
    "AUTHOR": "author",
    "DESCRIPTION": "description",
}

_CR_INSIDE_LINE = "Carriage return inside a line. Only LF or CRLF line endings are supported."


@dataclass
class _ParseContext:
    """Everything the scanner carries from one line to the next."""

    state: ParseState = ParseState.SEARCHING
    header_fields: dict = field(default_factory=dict)
    default_palette: dict[str, str] | None = None
    glyphs: list[Glyph] = field(default_factory=list)
    glyph: Glyph | None = None
    palette_seen: bool = False
    rows_collected: int = 0
    line_number: int = 0

    @property
    def current(self) -> Glyph:
        if self.glyph is None:
            msg = f"Internal error: state {self.state.value} without a current glyph."
            raise GtfParseError(msg, self.line_number)
        return self.glyph

    def commit_glyph(self) -> None:
        self.glyphs.append(self.current)
        self.glyph = None


def parse_gtf(text: str) -> GtfDocument:
    """Parse GTF text into a document.

    Raises:
        GtfParseError: On the first structural fault, with its 1-based line number.
    """
    ctx = _ParseContext()

    # Only "\n" ends a line (a trailing "\r" is dropped); form feeds, NEL and
    # U+2028 stay part of the line they appear in
    for line_number, raw_line in enumerate(text.split("\n"), start=1):
        raw_line = raw_line.removesuffix("\r")
        line = raw_line.strip()
        if not line:
            continue
        ctx.line_number = line_number
        # A lone "\r" would become a line break once written and read back
        if "\r" in line and ctx.state is not ParseState.SEARCHING:
            _fail(ctx, _CR_INSIDE_LINE)
        ctx.state = _HANDLERS[ctx.state](ctx, line, raw_line)

    _finish(ctx)

    default_palette = None
    if ctx.default_palette:
        default_palette = Palette(entries=ctx.default_palette)
    header = GtfHeader(**ctx.header_fields, default_palette=default_palette)
    document = GtfDocument(header=header, glyphs=ctx.glyphs)

    logger.debug(
        "Parsed %d glyph(s), %d warning(s)", len(document.glyphs), document.warning_count
    )
    return document


# --- State handlers: (context, trimmed line, raw line) -> next state ---


def _on_searching(ctx: _ParseContext, line: str, raw_line: str) -> ParseState:
    if line == KW_HEADER:
        return ParseState.IN_HEADER
    if line == KW_GLYPH or line.startswith(KW_GLYPH + " "):
        name = line[len(KW_GLYPH) :].strip()
        if not name:
            _fail(ctx, "Invalid GLYPH definition, missing name.")
        if "\r" in name:
            _fail(ctx, _CR_INSIDE_LINE)
        ctx.glyph = Glyph(name=name)
        ctx.palette_seen = False
        ctx.rows_collected = 0
        return ParseState.IN_GLYPH_DEFINITION
    # Anything outside a block is a comment
    return ParseState.SEARCHING


def _on_header(ctx: _ParseContext, line: str, raw_line: str) -> ParseState:
    if line == KW_DEFAULT_PALETTE:
        if ctx.default_palette is None:
            ctx.default_palette = {}
        return ParseState.IN_DEFAULT_PALETTE
    if line == KW_END_HEADER:
        return ParseState.SEARCHING

    key, value = _split_key_value(ctx, line, "header line")
    if key in _HEADER_FIELDS:
        ctx.header_fields[_HEADER_FIELDS[key]] = value
    elif key == "DEFAULT_SIZE":
        ctx.header_fields["default_size"] = _parse_size(ctx, value)
    elif key == KW_DEFAULT_PALETTE:
        _fail(ctx, "DEFAULT_PALETTE keyword should not have a value on the same line.")
    else:
        _fail(ctx, f"Unknown header key: '{key}'")
    return ParseState.IN_HEADER


def _on_default_palette(ctx: _ParseContext, line: str, raw_line: str) -> ParseState:
    if line == KW_END_HEADER:
        return ParseState.SEARCHING
    if ctx.default_palette is None:
        ctx.default_palette = {}
    _add_palette_entry(ctx, line, ctx.default_palette, "default palette entry")
    return ParseState.IN_DEFAULT_PALETTE


def _on_glyph_definition(ctx: _ParseContext, line: str, raw_line: str) -> ParseState:
    glyph = ctx.current

    if line == KW_PALETTE:
        if ctx.palette_seen:
            _fail(ctx, f"Duplicate PALETTE definition for glyph '{glyph.name}'.")
        ctx.palette_seen = True
        return ParseState.IN_PALETTE

    if _is_end_glyph(line):
        _check_end_glyph(ctx, line)
        if glyph.size is not None and not glyph.bitmap:
            _fail(
                ctx,
                f"END GLYPH found for '{glyph.name}' but no bitmap data was provided "
                "(SIZE was defined).",
            )
        ctx.commit_glyph()
        return ParseState.SEARCHING

    if line == KW_DATA:
        ctx.rows_collected = 0
        return ParseState.IN_BITMAP

    stripped = raw_line.lstrip()
    if stripped.startswith("CHAR ") or line == "CHAR":
        _set_char(ctx, glyph, stripped)
        return ParseState.IN_GLYPH_DEFINITION

    # Legacy inline form: rows may follow SIZE without a DATA keyword. Bare
    # keywords fall through to the key-value check and fail there; other
    # uppercase tokens (a mistyped "DATAA") still load as rows, since
    # uppercase letters are legal palette keys.
    if glyph.size is not None and " " not in line and line not in KEYWORD_TOKENS:
        _accept_row(ctx, glyph, line)
        ctx.rows_collected = 1
        return ParseState.IN_BITMAP

    key, value = _split_key_value(ctx, line, "glyph metadata line")
    if key == "UNICODE":
        if not value.startswith(UNICODE_PREFIX):
            _fail(ctx, f"Invalid UNICODE format: '{value}'. Expected 'U+XXXX'.")
        glyph.unicode = value
    elif key == "SIZE":
        glyph.size = _parse_size(ctx, value)
    else:
        _fail(ctx, f"Unknown or invalid glyph metadata key: '{key}'")
    return ParseState.IN_GLYPH_DEFINITION


def _on_palette(ctx: _ParseContext, line: str, raw_line: str) -> ParseState:
    glyph = ctx.current
    if line == KW_END_PALETTE:
        if glyph.size is not None:
            return ParseState.EXPECTING_DATA_KEYWORD
        return ParseState.EXPECTING_END_GLYPH
    _add_palette_entry(ctx, line, glyph.palette.entries, "palette entry")
    return ParseState.IN_PALETTE


def _on_expecting_data(ctx: _ParseContext, line: str, raw_line: str) -> ParseState:
    if line != KW_DATA:
        _fail(
            ctx,
            f"Expected DATA keyword after palette for glyph '{ctx.current.name}', "
            f"found '{line}'.",
        )
    ctx.rows_collected = 0
    return ParseState.IN_BITMAP


def _on_bitmap(ctx: _ParseContext, line: str, raw_line: str) -> ParseState:
    glyph = ctx.current
    expected = glyph.size.height if glyph.size is not None else None

    if line == KW_END_DATA:
        if expected is not None and ctx.rows_collected < expected:
            _warn(
                ctx,
                glyph,
                f"END DATA reached early for glyph '{glyph.name}': "
                f"expected {expected} lines, found {ctx.rows_collected}.",
            )
        return ParseState.EXPECTING_END_GLYPH

    if expected is None or ctx.rows_collected < expected:
        _accept_row(ctx, glyph, line)
        ctx.rows_collected += 1
        return ParseState.IN_BITMAP

    # Not counted: only accepted rows advance the counter
    _warn(
        ctx,
        glyph,
        f"Expected END DATA after {expected} bitmap lines for glyph '{glyph.name}', "
        f"found '{line}'; extra line ignored.",
    )
    return ParseState.IN_BITMAP


def _on_expecting_end_glyph(ctx: _ParseContext, line: str, raw_line: str) -> ParseState:
    glyph = ctx.current
    if _is_end_glyph(line):
        _check_end_glyph(ctx, line)
        ctx.commit_glyph()
        return ParseState.SEARCHING
    # Size-less glyphs reach this state straight from END PALETTE
    if line == KW_DATA and glyph.size is None and not glyph.bitmap:
        ctx.rows_collected = 0
        return ParseState.IN_BITMAP
    _fail(ctx, f"Expected END GLYPH for glyph '{glyph.name}', found '{line}'.")


_HANDLERS: dict[ParseState, Callable[[_ParseContext, str, str], ParseState]] = {
    ParseState.SEARCHING: _on_searching,
    ParseState.IN_HEADER: _on_header,
    ParseState.IN_DEFAULT_PALETTE: _on_default_palette,
    ParseState.IN_GLYPH_DEFINITION: _on_glyph_definition,
    ParseState.IN_PALETTE: _on_palette,
    ParseState.EXPECTING_DATA_KEYWORD: _on_expecting_data,
    ParseState.IN_BITMAP: _on_bitmap,
    ParseState.EXPECTING_END_GLYPH: _on_expecting_end_glyph,
}


def _finish(ctx: _ParseContext) -> None:
    """End-of-input check. An unterminated bitmap is salvaged with a warning."""
    if ctx.state is ParseState.IN_BITMAP:
        glyph = ctx.current
        if glyph.size is not None:
            detail = f"expected {glyph.size.height} lines, found {ctx.rows_collected}"
        else:
            detail = f"found {ctx.rows_collected} lines"
        _warn(
            ctx,
            glyph,
            f"Parsing ended while in bitmap section for glyph '{glyph.name}': {detail}. "
            "Missing END DATA or END GLYPH?",
            with_line=False,
        )
        ctx.commit_glyph()
        return

    if ctx.state is not ParseState.SEARCHING:
        msg = (
            f"Parsing failed: unexpected end of input in state {ctx.state.value}. "
            "Missing END statement?"
        )
        raise GtfParseError(msg, ctx.line_number or None)

    if ctx.glyph is not None:
        msg = f"Parsing ended but glyph '{ctx.glyph.name}' was not closed with END GLYPH."
        raise GtfParseError(msg, ctx.line_number or None)


# --- Line helpers ---


def _fail(ctx: _ParseContext, reason: str) -> NoReturn:
    raise GtfParseError(reason, ctx.line_number)


def _warn(ctx: _ParseContext, glyph: Glyph, message: str, with_line: bool = True) -> None:
    if with_line:
        message = f"Line {ctx.line_number}: {message}"
    logger.debug("Parser warning: %s", message)
    glyph.add_warning(message)


def _split_key_value(ctx: _ParseContext, line: str, what: str) -> tuple[str, str]:
    parts = line.split(" ", 1)
    if len(parts) != 2 or not parts[1].strip():
        _fail(ctx, f"Invalid {what} format: '{line}'. Expected 'KEY value'.")
    return parts[0], parts[1].strip()


def _parse_size(ctx: _ParseContext, value: str) -> Size:
    try:
        return Size.parse(value)
    except ValueError as e:
        raise GtfParseError(str(e), ctx.line_number) from e


def _add_palette_entry(
    ctx: _ParseContext, line: str, entries: dict[str, str], what: str
) -> None:
    parts = line.split()
    if len(parts) != 2:
        _fail(ctx, f"Error parsing {what}: '{line}'. Expected 'char #HEXCOLOR'.")
    char, color = parts
    if len(char) != 1:
        _fail(
            ctx,
            f"Error parsing {what}: invalid palette character '{char}'. "
            "Expected a single character.",
        )
    problem = check_color(color)
    if problem:
        _fail(ctx, f"Error parsing {what}: {problem}")
    if char in entries:
        _fail(ctx, f"Duplicate palette definition for character '{char}'.")
    entries[char] = color


def _set_char(ctx: _ParseContext, glyph: Glyph, stripped: str) -> None:
    """CHAR takes exactly one character; a blank value means the space character."""
    if not stripped.startswith("CHAR "):
        _fail(
            ctx, "Invalid CHAR format: 'CHAR'. Expected 'CHAR <character>' (missing character)."
        )
    value = stripped[len("CHAR ") :].strip()
    if not value:
        glyph.char_repr = " "
        return
    if len(value) != 1:
        _fail(
            ctx,
            f"Invalid CHAR format: '{stripped.strip()}'. Expected exactly one character "
            f"after 'CHAR ', found {len(value)} characters.",
        )
    glyph.char_repr = value


def _is_end_glyph(line: str) -> bool:
    return line == KW_END_GLYPH or line.startswith(KW_END_GLYPH + " ")


def _check_end_glyph(ctx: _ParseContext, line: str) -> None:
    name = line[len(KW_END_GLYPH) :].strip()
    if not name:
        _fail(ctx, f"Invalid END GLYPH format: '{line}'.")
    expected = ctx.current.name
    if name != expected:
        _fail(ctx, f"END GLYPH name mismatch: found '{name}', expected '{expected}'.")


def _accept_row(ctx: _ParseContext, glyph: Glyph, row: str) -> None:
    """Store a bitmap row as-is, recording width and palette problems as warnings."""
    if glyph.size is not None and len(row) != glyph.size.width:
        _warn(
            ctx,
            glyph,
            f"Bitmap row length mismatch for glyph '{glyph.name}': found {len(row)} "
            f"characters, expected width {glyph.size.width}; loading as-is.",
        )

    entries = glyph.palette.entries
    if entries:
        for column, char in enumerate(row, start=1):
            if char not in entries:
                _warn(
                    ctx,
                    glyph,
                    f"Invalid character '{char}' at column {column} in bitmap for glyph "
                    f"'{glyph.name}'. Character not found in palette.",
                )
    elif ctx.palette_seen:
        # A glyph with no PALETTE block at all is not checked here;
        # validate_document reports it
        _warn(
            ctx,
            glyph,
            f"Cannot validate bitmap characters for glyph '{glyph.name}' because "
            "palette data is missing.",
        )

    glyph.bitmap.append(row)
