"""CLI entry point for gtfkit - check, normalize and edit GTF bitmap font files."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from gtfkit.cli_helpers import (
    SIZE,
    _fail,
    _format_table,
    _glyph_rows,
    _load_document,
    _print_header,
    _print_warnings,
    _save_document,
    _setup_logging,
)
from gtfkit.config import GTF_EXTENSION

# -- CLI group --------------------------------------------------------------------------


@click.group()
@click.version_option(version="0.1.0", prog_name="gtfkit")
@click.option("-v", "--verbose", is_flag=True, hidden=True, help="Verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """Parse, check and rewrite GTF bitmap font files."""
    _setup_logging(verbose)


# -- check -----------------------------------------------------------------------------


@cli.command()
@click.argument("gtf_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--strict", is_flag=True, help="Exit with status 1 if any warning is found")
def check(gtf_path, strict):
    """Parse a GTF file and list per-glyph warnings."""
    document = _load_document(gtf_path, GTF_EXTENSION)

    click.secho(f"Parsed {gtf_path}: {len(document.glyphs)} glyph(s)", fg="green")
    count = _print_warnings(document)
    if not count:
        click.echo("  No warnings")
        return

    click.secho(f"  {count} warning(s) total", fg="yellow")
    if strict:
        sys.exit(1)


# -- format ----------------------------------------------------------------------------


@cli.command("format")
@click.argument("gtf_path", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None, help="Output path")
@click.option("--in-place", is_flag=True, help="Rewrite the input file")
def format_cmd(gtf_path, output, in_place):
    """Rewrite a GTF file in canonical form (stdout unless -o/--in-place)."""
    from gtfkit.serializer import serialize_gtf

    if output and in_place:
        _fail("--output and --in-place are mutually exclusive")

    document = _load_document(gtf_path, GTF_EXTENSION)
    if document.warning_count:
        click.secho(
            f"{document.warning_count} warning(s) while parsing {gtf_path}", fg="yellow", err=True
        )

    target = gtf_path if in_place else output
    if target is None:
        click.echo(serialize_gtf(document))
        return

    _save_document(document, target, GTF_EXTENSION)
    click.secho(f"Wrote {target}", fg="green", err=True)


# -- convert ---------------------------------------------------------------------------


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), required=True)
@click.option("--from", "from_fmt", default=None, help="Input format (default: extension)")
@click.option("--to", "to_fmt", default=None, help="Output format (default: extension)")
def convert(input_path, output, from_fmt, to_fmt):
    """Convert between font formats through the importer/exporter registry."""
    document = _load_document(input_path, from_fmt)
    _save_document(document, output, to_fmt)

    click.secho(f"Wrote {output}", fg="green")
    click.echo(f"  Glyphs: {len(document.glyphs)}")
    if document.warning_count:
        click.secho(f"  Warnings: {document.warning_count}", fg="yellow")


# -- formats ---------------------------------------------------------------------------


@cli.command("formats")
def formats_cmd():
    """List supported import and export formats."""
    from gtfkit.formats import get_exporter_info, get_importer_info

    for title, infos in (("Importers", get_importer_info()), ("Exporters", get_exporter_info())):
        click.echo(f"{title}:")
        for info in infos:
            exts = ", ".join(f".{e}" for e in info.extensions)
            click.echo(f"  {info.name:<18} {exts:<8} {info.mode.value:<7} {info.description}")


# -- inspect ---------------------------------------------------------------------------


@cli.command()
@click.argument("gtf_path", type=click.Path(exists=True, dir_okay=False))
def inspect(gtf_path):
    """Show header metadata and a table of glyphs."""
    document = _load_document(gtf_path, GTF_EXTENSION)

    click.echo(f"Inspecting: {gtf_path}\n")
    _print_header(document)

    click.echo(f"\n  Glyphs: {len(document.glyphs)}")
    if document.glyphs:
        headings = ("NAME", "CHAR", "UNICODE", "SIZE", "PALETTE", "WARNINGS")
        table = _format_table(headings, _glyph_rows(document))
        click.echo("\n".join(f"  {line}" for line in table.splitlines()))


# -- validate --------------------------------------------------------------------------


@cli.command("validate")
@click.argument("gtf_path", type=click.Path(exists=True, dir_okay=False))
def validate_cmd(gtf_path):
    """Validate a GTF file: parse warnings plus whole-font consistency checks."""
    from gtfkit.validator import validate_file

    issues = validate_file(gtf_path)
    if not issues:
        click.secho(f"Validation passed: {gtf_path}", fg="green")
        return

    click.secho(f"Validation issues in {gtf_path} ({len(issues)}):", fg="yellow")
    for issue in issues:
        click.echo(f"  - {issue}")
    sys.exit(1)


# -- resize ----------------------------------------------------------------------------


@cli.command()
@click.argument("gtf_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--glyph", "glyph_name", required=True, help="Name of the glyph to resize")
@click.option("--size", "new_size", type=SIZE, required=True, help="New size as WxH")
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None, help="Output path")
def resize(gtf_path, glyph_name, new_size, output):
    """Resize one glyph's bitmap (pads with '.', truncates when shrinking)."""
    from gtfkit.editing import find_glyph, resize_glyph
    from gtfkit.serializer import serialize_gtf

    document = _load_document(gtf_path, GTF_EXTENSION)
    glyph = find_glyph(document, glyph_name)
    if glyph is None:
        _fail(f"No glyph named '{glyph_name}' in {gtf_path}")

    try:
        resize_glyph(glyph, new_size)
    except ValueError as e:
        _fail(str(e))

    if output is None:
        click.echo(serialize_gtf(document))
        return

    _save_document(document, output, GTF_EXTENSION)
    click.secho(f"Wrote {output}", fg="green")
    click.echo(f"  {glyph.name}: {new_size.to_text()}")


# -- new -------------------------------------------------------------------------------


@cli.command()
@click.argument("output", type=click.Path(dir_okay=False))
@click.option("--font", "font_name", default=None, help="Font name for the header")
@click.option("--size", "default_size", type=SIZE, default=None, help="Default glyph size WxH")
@click.option("--chars", default="", help="Create a blank glyph for each character")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def new(output, font_name, default_size, chars, force):
    """Create a new GTF file, optionally with blank glyphs."""
    from gtfkit.editing import add_glyph_for_char, new_document

    if Path(output).exists() and not force:
        _fail(f"{output} already exists (use --force to overwrite)")

    document = new_document(font_name=font_name, default_size=default_size)
    for char in chars:
        add_glyph_for_char(document, char)

    _save_document(document, output, GTF_EXTENSION)
    click.secho(f"Wrote {output}", fg="green")
    click.echo(f"  Glyphs: {len(document.glyphs)}")
