"""Pydantic v2 models for an in-memory GTF document."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from gtfkit.config import COLOR_LENGTHS, COLOR_PREFIX, UNICODE_PREFIX


class Size(BaseModel):
    """Pixel grid dimensions of a glyph."""

    width: int
    height: int

    @field_validator("width", "height")
    @classmethod
    def dimension_positive(cls, v: int) -> int:
        if v < 1:
            msg = f"Size dimensions must be >= 1, got {v}"
            raise ValueError(msg)
        return v

    @classmethod
    def parse(cls, text: str) -> Size:
        """Parse a "<width>x<height>" string.

        "8x12" -> Size(width=8, height=12)

        Raises:
            ValueError: On a wrong number of parts, non-numeric or non-positive values.
        """
        parts = text.split("x")
        if len(parts) != 2:
            msg = f"Invalid size format: '{text}'. Expected 'WxH'."
            raise ValueError(msg)
        dims: list[int] = []
        for label, part in zip(("width", "height"), parts):
            if not (part.isascii() and part.isdigit()):
                msg = f"Invalid {label}: '{part}' is not a whole number."
                raise ValueError(msg)
            value = int(part)
            if value < 1:
                msg = f"Invalid {label}: {value}. Must be greater than zero."
                raise ValueError(msg)
            dims.append(value)
        return cls(width=dims[0], height=dims[1])

    def to_text(self) -> str:
        return f"{self.width}x{self.height}"


def _has_line_break(text: str) -> bool:
    return "\n" in text or "\r" in text


def check_color(color: str) -> str | None:
    """Return an error message if color is not '#RRGGBB' or '#RGB', else None."""
    if (
        not color.startswith(COLOR_PREFIX)
        or len(color) not in COLOR_LENGTHS
        or any(c.isspace() for c in color)
    ):
        return f"Invalid palette color format: '{color}'. Expected '#RRGGBB' or '#RGB'."
    return None


class Palette(BaseModel):
    """Character -> hex color mapping used to interpret bitmap rows."""

    entries: dict[str, str] = Field(default_factory=dict)

    @field_validator("entries")
    @classmethod
    def entries_well_formed(cls, v: dict[str, str]) -> dict[str, str]:
        for char, color in v.items():
            if len(char) != 1 or char.isspace():
                msg = f"Palette key must be a single non-space character, got {char!r}"
                raise ValueError(msg)
            problem = check_color(color)
            if problem:
                raise ValueError(problem)
        return v

    def sorted_entries(self) -> list[tuple[str, str]]:
        """Entries ordered by character code point."""
        return sorted(self.entries.items(), key=lambda item: ord(item[0]))


class Glyph(BaseModel):
    """One character definition: metadata, color table and pixel rows."""

    name: str
    unicode: str | None = None
    char_repr: str | None = None
    size: Size | None = None
    palette: Palette = Field(default_factory=Palette)
    bitmap: list[str] = Field(default_factory=list)
    validation_warnings: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_valid(cls, v: str) -> str:
        if not v or v != v.strip():
            msg = f"Glyph name must be non-empty without surrounding whitespace, got {v!r}"
            raise ValueError(msg)
        if _has_line_break(v):
            msg = "Glyph name must be a single line"
            raise ValueError(msg)
        return v

    @field_validator("unicode")
    @classmethod
    def unicode_prefixed(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not v.startswith(UNICODE_PREFIX):
            msg = f"Invalid UNICODE format: '{v}'. Expected 'U+XXXX'."
            raise ValueError(msg)
        if v != v.strip() or _has_line_break(v):
            msg = f"UNICODE must be a single line without surrounding whitespace, got {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("char_repr")
    @classmethod
    def char_repr_single(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if len(v) != 1:
            msg = f"CHAR must be exactly one character, got {v!r}"
            raise ValueError(msg)
        # "CHAR " with a blank value always reads back as the space character
        if v.isspace() and v != " ":
            msg = f"CHAR must be exactly one character and not whitespace other than ' ', got {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("bitmap")
    @classmethod
    def rows_single_line(cls, v: list[str]) -> list[str]:
        # Rows are read back trimmed and blank lines are skipped
        for i, row in enumerate(v):
            if not row or row != row.strip() or _has_line_break(row):
                msg = (
                    f"Bitmap row {i} must be non-empty without surrounding whitespace "
                    f"or line breaks, got {row!r}"
                )
                raise ValueError(msg)
        return v

    def add_warning(self, message: str) -> None:
        self.validation_warnings.append(message)


class GtfHeader(BaseModel):
    """Font-wide metadata."""

    font_name: str | None = None
    version: str | None = None
    author: str | None = None
    description: str | None = None
    default_size: Size | None = None
    # Stored only; glyphs are never filled from it implicitly
    default_palette: Palette | None = None

    @field_validator("font_name", "version", "author", "description")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("font_name", "version", "author")
    @classmethod
    def single_line(cls, v: str | None) -> str | None:
        # DESCRIPTION is flattened on output instead
        if v is not None and _has_line_break(v):
            msg = f"Header text must be a single line, got {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("default_palette")
    @classmethod
    def empty_palette_to_none(cls, v: Palette | None) -> Palette | None:
        if v is not None and not v.entries:
            return None
        return v


class GtfDocument(BaseModel):
    """A complete font: header plus glyphs in file order."""

    header: GtfHeader = Field(default_factory=GtfHeader)
    glyphs: list[Glyph] = Field(default_factory=list)

    def glyph_names(self) -> list[str]:
        return [g.name for g in self.glyphs]

    def warnings_by_glyph(self) -> dict[str, list[str]]:
        """Glyphs that carry parse warnings, keyed by name (later duplicates merge)."""
        result: dict[str, list[str]] = {}
        for glyph in self.glyphs:
            if glyph.validation_warnings:
                result.setdefault(glyph.name, []).extend(glyph.validation_warnings)
        return result

    @property
    def warning_count(self) -> int:
        return sum(len(g.validation_warnings) for g in self.glyphs)
