"""Bitmap grid resizing for glyph editing."""

from __future__ import annotations

from gtfkit.config import FILL_CHAR
from gtfkit.schema import Size


def _check_dims(size: Size, label: str) -> None:
    # Size validates on construction, but instances can be mutated afterwards
    if size.width < 1 or size.height < 1:
        msg = f"{label} size dimensions must be greater than zero, got {size.to_text()}"
        raise ValueError(msg)


def resize_bitmap(
    bitmap: list[str],
    old_size: Size,
    new_size: Size,
    fill_char: str = FILL_CHAR,
) -> list[str]:
    """Resize bitmap rows from old_size to new_size.

    Height is adjusted first: missing rows are appended filled with fill_char,
    surplus rows are dropped from the bottom. Width is then adjusted only if it
    changed: rows are right-padded with fill_char when growing and truncated
    when shrinking.

    ["#.", "##"], 2x2 -> 3x3 => ["#..", "##.", "..."]

    Returns:
        A new list; the input is not modified.

    Raises:
        ValueError: If either size has a non-positive dimension.
    """
    _check_dims(new_size, "New")
    _check_dims(old_size, "Old")

    result = list(bitmap)

    if new_size.height > len(result):
        result.extend([fill_char * new_size.width] * (new_size.height - len(result)))
    elif new_size.height < len(result):
        result = result[: new_size.height]

    if new_size.width > old_size.width:
        result = [row.ljust(new_size.width, fill_char) for row in result]
    elif new_size.width < old_size.width:
        result = [row[: new_size.width] for row in result]

    return result
