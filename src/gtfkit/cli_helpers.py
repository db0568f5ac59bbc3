"""CLI helper functions, parameter types and output formatting for gtfkit."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, NoReturn

import click

from gtfkit.errors import GtfError
from gtfkit.schema import Size

if TYPE_CHECKING:
    from gtfkit.schema import GtfDocument


class SizeParamType(click.ParamType):
    """Click parameter accepting "<width>x<height>"."""

    name = "WxH"

    def convert(self, value, param, ctx):
        if isinstance(value, Size):
            return value
        try:
            return Size.parse(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


SIZE = SizeParamType()


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def _fail(message: str) -> NoReturn:
    """Print an error in red and exit with status 1."""
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(1)


def _load_document(path: str, fmt: str | None = None) -> GtfDocument:
    """Import a font file, exiting with status 1 on any error."""
    from gtfkit.formats import import_font

    try:
        return import_font(path, fmt)
    except GtfError as e:
        _fail(str(e))


def _save_document(document: GtfDocument, path: str, fmt: str | None = None) -> None:
    """Export a document, exiting with status 1 on any error."""
    from gtfkit.formats import export_font

    try:
        export_font(document, path, fmt)
    except GtfError as e:
        _fail(str(e))


def _print_warnings(document: GtfDocument, err: bool = False) -> int:
    """Print parse warnings grouped by glyph. Returns the number printed."""
    total = 0
    for glyph in document.glyphs:
        if not glyph.validation_warnings:
            continue
        click.secho(
            f"  {glyph.name} ({len(glyph.validation_warnings)} warning(s)):",
            fg="yellow",
            err=err,
        )
        for warning in glyph.validation_warnings:
            click.echo(f"    - {warning}", err=err)
        total += len(glyph.validation_warnings)
    return total


def _print_header(document: GtfDocument) -> None:
    header = document.header
    click.echo(f"  Font:        {header.font_name or '(unnamed)'}")
    click.echo(f"  Version:     {header.version or '-'}")
    click.echo(f"  Author:      {header.author or '-'}")
    if header.description:
        click.echo(f"  Description: {header.description[:80]}")
    if header.default_size is not None:
        click.echo(f"  Default size:    {header.default_size.to_text()}")
    if header.default_palette is not None:
        entries = " ".join(f"{c}={v}" for c, v in header.default_palette.sorted_entries())
        click.echo(f"  Default palette: {entries}")


def _glyph_rows(document: GtfDocument) -> list[tuple[str, ...]]:
    """Table rows: name, char, unicode, size, palette entries, warnings."""
    rows: list[tuple[str, ...]] = []
    for glyph in document.glyphs:
        rows.append(
            (
                glyph.name,
                repr(glyph.char_repr) if glyph.char_repr is not None else "-",
                glyph.unicode or "-",
                glyph.size.to_text() if glyph.size is not None else "-",
                str(len(glyph.palette.entries)),
                str(len(glyph.validation_warnings)),
            )
        )
    return rows


def _format_table(headings: tuple[str, ...], rows: list[tuple[str, ...]]) -> str:
    widths = [len(h) for h in headings]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]
    lines = ["  ".join(h.ljust(w) for h, w in zip(headings, widths)).rstrip()]
    for row in rows:
        lines.append("  ".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip())
    return "\n".join(lines)
