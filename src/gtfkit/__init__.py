"""gtfkit: parser, serializer and editing tools for GTF bitmap font files."""

from gtfkit.errors import GtfError, GtfParseError
from gtfkit.parser import parse_gtf
from gtfkit.schema import Glyph, GtfDocument, GtfHeader, Palette, Size
from gtfkit.serializer import serialize_gtf

__all__ = [
    "Glyph",
    "GtfDocument",
    "GtfError",
    "GtfHeader",
    "GtfParseError",
    "Palette",
    "Size",
    "parse_gtf",
    "serialize_gtf",
]
