"""Constants and configuration for gtfkit."""

# Block keywords (case-sensitive)
KW_HEADER = "HEADER"
KW_END_HEADER = "END HEADER"
KW_DEFAULT_PALETTE = "DEFAULT_PALETTE"
KW_GLYPH = "GLYPH"
KW_END_GLYPH = "END GLYPH"
KW_PALETTE = "PALETTE"
KW_END_PALETTE = "END PALETTE"
KW_DATA = "DATA"
KW_END_DATA = "END DATA"

# Bare words that are never bitmap rows, even in the legacy inline form
KEYWORD_TOKENS = frozenset(
    {
        "HEADER",
        "GLYPH",
        "END",
        "FONT",
        "VERSION",
        "AUTHOR",
        "DESCRIPTION",
        "DEFAULT_SIZE",
        "DEFAULT_PALETTE",
        "UNICODE",
        "CHAR",
        "SIZE",
    }
)

UNICODE_PREFIX = "U+"

# Palette colors: '#RRGGBB' or '#RGB'
COLOR_PREFIX = "#"
COLOR_LENGTHS = (4, 7)

# Editing defaults
FILL_CHAR = "."  # Padding for new/resized bitmap cells
DEFAULT_GLYPH_WIDTH = 5
DEFAULT_GLYPH_HEIGHT = 7
NEW_GLYPH_BASE_NAME = "NewGlyph"
CHAR_GLYPH_BASE_NAME = "Glyph"

# File extension of the native format
GTF_EXTENSION = "gtf"
