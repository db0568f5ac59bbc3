"""Font format importers and exporters.

Each importer turns an external file into a GtfDocument and each exporter
writes a GtfDocument out. GTF is the native format and is fully supported;
the remaining formats are registered so hosts can list them, but their
conversions raise FormatNotImplementedError until written.

Usage:
    doc = import_font("font.gtf")            # format from the extension
    export_font(doc, "copy.gtf", "gtf")
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from gtfkit.config import GTF_EXTENSION, KW_GLYPH, KW_HEADER
from gtfkit.errors import FormatError, FormatNotImplementedError
from gtfkit.parser import parse_gtf
from gtfkit.schema import GtfDocument
from gtfkit.serializer import serialize_gtf

logger = logging.getLogger(__name__)


class FormatMode(Enum):
    TEXT = "text"
    BINARY = "binary"


@dataclass
class FormatInfo:
    """Format metadata for listings and file dialog filters."""

    name: str
    extensions: list[str] = field(default_factory=list)
    mode: FormatMode = FormatMode.TEXT
    description: str = ""


def _read_text(path: str | Path, fmt_name: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Failed to read {fmt_name} file '{path}': {e}"
        raise FormatError(msg) from e


def _read_bytes(path: str | Path, fmt_name: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        msg = f"Failed to read {fmt_name} file '{path}': {e}"
        raise FormatError(msg) from e


def _write(path: str | Path, content: str | bytes, fmt_name: str) -> None:
    try:
        if isinstance(content, bytes):
            Path(path).write_bytes(content)
        else:
            Path(path).write_text(content, encoding="utf-8")
    except OSError as e:
        msg = f"Failed to write {fmt_name} file '{path}': {e}"
        raise FormatError(msg) from e


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------


class FontImporter(ABC):
    """Common interface for all importers."""

    name: str = ""
    extensions: tuple[str, ...] = ()
    mode: FormatMode = FormatMode.TEXT

    @abstractmethod
    def import_file(self, path: str | Path) -> GtfDocument:
        """Read and convert a file."""

    def import_text(self, text: str) -> GtfDocument:
        msg = f"{self.name}: import from text not supported"
        raise FormatError(msg)

    def import_bytes(self, data: bytes) -> GtfDocument:
        msg = f"{self.name}: import from bytes not supported"
        raise FormatError(msg)

    def validate_file(self, path: str | Path) -> bool:
        """Cheap plausibility check without a full conversion."""
        if self.mode is FormatMode.BINARY:
            return bool(_read_bytes(path, self.name))
        return bool(_read_text(path, self.name).strip())

    def info(self) -> FormatInfo:
        return FormatInfo(
            name=self.name,
            extensions=list(self.extensions),
            mode=self.mode,
            description=f"Import from {self.name} format",
        )


class FontExporter(ABC):
    """Common interface for all exporters."""

    name: str = ""
    extensions: tuple[str, ...] = ()
    mode: FormatMode = FormatMode.TEXT

    @abstractmethod
    def export_file(self, document: GtfDocument, path: str | Path) -> None:
        """Convert and write a document."""

    def export_text(self, document: GtfDocument) -> str:
        msg = f"{self.name}: export to text not supported"
        raise FormatError(msg)

    def export_bytes(self, document: GtfDocument) -> bytes:
        msg = f"{self.name}: export to bytes not supported"
        raise FormatError(msg)

    def info(self) -> FormatInfo:
        return FormatInfo(
            name=self.name,
            extensions=list(self.extensions),
            mode=self.mode,
            description=f"Export to {self.name} format",
        )


# ---------------------------------------------------------------------------
# GTF (native)
# ---------------------------------------------------------------------------


class GtfTextImporter(FontImporter):
    name = "GTF Text"
    extensions = (GTF_EXTENSION,)
    mode = FormatMode.TEXT

    def import_file(self, path: str | Path) -> GtfDocument:
        return self.import_text(_read_text(path, self.name))

    def import_text(self, text: str) -> GtfDocument:
        return parse_gtf(text)

    def validate_file(self, path: str | Path) -> bool:
        """True if the file opens a HEADER or GLYPH block anywhere."""
        for line in _read_text(path, self.name).split("\n"):
            stripped = line.strip()
            if stripped == KW_HEADER or stripped.startswith(KW_GLYPH + " "):
                return True
        return False

    def info(self) -> FormatInfo:
        info = super().info()
        info.description = "Native GTF text format"
        return info


class GtfTextExporter(FontExporter):
    name = "GTF Text"
    extensions = (GTF_EXTENSION,)
    mode = FormatMode.TEXT

    def export_file(self, document: GtfDocument, path: str | Path) -> None:
        _write(path, self.export_text(document) + "\n", self.name)

    def export_text(self, document: GtfDocument) -> str:
        return serialize_gtf(document)

    def info(self) -> FormatInfo:
        info = super().info()
        info.description = "Native GTF text format"
        return info


# ---------------------------------------------------------------------------
# Foreign formats (registered, conversion pending)
# ---------------------------------------------------------------------------


class DatTextImporter(FontImporter):
    """VISE legacy DAT text format."""

    name = "DAT Text (VISE)"
    extensions = ("dat",)
    mode = FormatMode.TEXT

    def import_file(self, path: str | Path) -> GtfDocument:
        return self.import_text(_read_text(path, self.name))

    def import_text(self, text: str) -> GtfDocument:
        msg = "DAT text import not yet implemented"
        raise FormatNotImplementedError(msg)


class FntTextImporter(FontImporter):
    """Text bitmap font format used by embedded displays."""

    name = "FNT Text"
    extensions = ("fnt",)
    mode = FormatMode.TEXT

    def import_file(self, path: str | Path) -> GtfDocument:
        return self.import_text(_read_text(path, self.name))

    def import_text(self, text: str) -> GtfDocument:
        msg = "FNT text import not yet implemented"
        raise FormatNotImplementedError(msg)


class BfntBinaryImporter(FontImporter):
    name = "BFNT Binary"
    extensions = ("bfnt",)
    mode = FormatMode.BINARY

    def import_file(self, path: str | Path) -> GtfDocument:
        return self.import_bytes(_read_bytes(path, self.name))

    def import_bytes(self, data: bytes) -> GtfDocument:
        msg = "BFNT binary import not yet implemented"
        raise FormatNotImplementedError(msg)


class DatTextExporter(FontExporter):
    name = "DAT Text (VISE)"
    extensions = ("dat",)
    mode = FormatMode.TEXT

    def export_file(self, document: GtfDocument, path: str | Path) -> None:
        _write(path, self.export_text(document), self.name)

    def export_text(self, document: GtfDocument) -> str:
        msg = "DAT text export not yet implemented"
        raise FormatNotImplementedError(msg)


class BfntBinaryExporter(FontExporter):
    name = "BFNT Binary"
    extensions = ("bfnt",)
    mode = FormatMode.BINARY

    def export_file(self, document: GtfDocument, path: str | Path) -> None:
        _write(path, self.export_bytes(document), self.name)

    def export_bytes(self, document: GtfDocument) -> bytes:
        msg = "BFNT binary export not yet implemented"
        raise FormatNotImplementedError(msg)


class BmpImageExporter(FontExporter):
    """Per-glyph bitmap image export."""

    name = "BMP Image"
    extensions = ("bmp",)
    mode = FormatMode.BINARY

    def export_file(self, document: GtfDocument, path: str | Path) -> None:
        _write(path, self.export_bytes(document), self.name)

    def export_bytes(self, document: GtfDocument) -> bytes:
        msg = "BMP image export not yet implemented"
        raise FormatNotImplementedError(msg)


# ---------------------------------------------------------------------------
# Registry and dispatch
# ---------------------------------------------------------------------------

IMPORTERS: tuple[FontImporter, ...] = (
    GtfTextImporter(),
    DatTextImporter(),
    FntTextImporter(),
    BfntBinaryImporter(),
)

EXPORTERS: tuple[FontExporter, ...] = (
    GtfTextExporter(),
    DatTextExporter(),
    BfntBinaryExporter(),
    BmpImageExporter(),
)


def _normalize_format(fmt: str) -> str:
    return fmt.strip().lower().lstrip(".")


def detect_format(path: str | Path) -> str:
    """Format key from the file extension ("Font.GTF" -> "gtf")."""
    suffix = Path(path).suffix
    if not suffix:
        msg = f"Cannot detect format of '{path}': file has no extension"
        raise FormatError(msg)
    return _normalize_format(suffix)


def get_importer(fmt: str) -> FontImporter:
    key = _normalize_format(fmt)
    for importer in IMPORTERS:
        if key in importer.extensions:
            return importer
    msg = f"Unknown import format: '{fmt}'"
    raise FormatError(msg)


def get_exporter(fmt: str) -> FontExporter:
    key = _normalize_format(fmt)
    for exporter in EXPORTERS:
        if key in exporter.extensions:
            return exporter
    msg = f"Unknown export format: '{fmt}'"
    raise FormatError(msg)


def import_font(path: str | Path, fmt: str | None = None) -> GtfDocument:
    """Import a font file; the format defaults to the file extension."""
    importer = get_importer(fmt or detect_format(path))
    logger.info("Importing %s as %s", path, importer.name)
    return importer.import_file(path)


def export_font(document: GtfDocument, path: str | Path, fmt: str | None = None) -> None:
    """Export a document; the format defaults to the file extension."""
    exporter = get_exporter(fmt or detect_format(path))
    logger.info("Exporting %s as %s", path, exporter.name)
    exporter.export_file(document, path)


def get_importer_info() -> list[FormatInfo]:
    return [importer.info() for importer in IMPORTERS]


def get_exporter_info() -> list[FormatInfo]:
    return [exporter.info() for exporter in EXPORTERS]
