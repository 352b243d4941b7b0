"""Zip-backed presentation package.

A .pptx file is an OPC package: a zip archive whose members are the XML
parts of the presentation (``ppt/slides/slide1.xml``,
``ppt/slides/_rels/slide1.xml.rels``, ``ppt/charts/chart1.xml``, ...).
This module opens such an archive from bytes, a path, or a binary stream
and hands out part contents as text.

Usage::

    from src.container import open_package

    with open_package(pptx_bytes) as package:
        for path in sorted(package.list_part_paths()):
            print(path)
        xml = package.read_part("ppt/slides/slide1.xml")
"""

import codecs
import io
import logging
import zipfile
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

# OPC parts may be UTF-8 or UTF-16; a BOM overrides the configured encoding.
_BOMS = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


class PackageError(Exception):
    """The input cannot be opened or read as a zip package."""


class PresentationPackage:
    """Read-only access to the parts of one presentation package.

    Parameters
    ----------
    source : bytes | str | Path | BinaryIO
        Raw package bytes, a filesystem path, or an open binary stream.
    encoding : str
        Text encoding used to decode part contents.
    """

    def __init__(self, source: bytes | str | Path | BinaryIO,
                 encoding: str = "utf-8") -> None:
        self.encoding = encoding
        self.name = _describe(source)
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(source)
        elif isinstance(source, (str, Path)):
            source = str(source)
        try:
            self._zip = zipfile.ZipFile(source, "r")
        except zipfile.BadZipFile as e:
            raise PackageError(f"{self.name} is not a valid zip package: {e}") from e
        except OSError as e:
            raise PackageError(f"Cannot open package {self.name}: {e}") from e
        self._names = {
            info.filename for info in self._zip.infolist() if not info.is_dir()
        }
        logger.debug("Opened %s with %d parts", self.name, len(self._names))

    # ------------------------------------------------------------------
    # Part access
    # ------------------------------------------------------------------

    def list_part_paths(self) -> set[str]:
        """Return the path of every part in the package."""
        return set(self._names)

    def has_part(self, path: str) -> bool:
        return path.lstrip("/") in self._names

    def read_part(self, path: str) -> str | None:
        """Return a part's text, or None when the package has no such part."""
        path = path.lstrip("/")
        if path not in self._names:
            logger.debug("Part not found: %s", path)
            return None
        try:
            raw = self._zip.read(path)
        except (zipfile.BadZipFile, OSError) as e:
            raise PackageError(f"Cannot read part {path} from {self.name}: {e}") from e
        return _decode(raw, self.encoding)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> "PresentationPackage":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"PresentationPackage({self.name!r}, parts={len(self._names)})"


def _decode(raw: bytes, encoding: str) -> str:
    """Decode part bytes, honouring a byte-order mark.

    Undecodable bytes become U+FFFD so one bad character never hides the
    rest of the part.
    """
    for bom, codec in _BOMS:
        if raw.startswith(bom):
            return raw[len(bom):].decode(codec, errors="replace")
    return raw.decode(encoding, errors="replace")


def _describe(source) -> str:
    """Human-readable name for error messages."""
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source):,} bytes>"
    if isinstance(source, (str, Path)):
        return str(source)
    return str(getattr(source, "name", "<stream>"))


def open_package(source: bytes | str | Path | BinaryIO,
                 encoding: str = "utf-8") -> PresentationPackage:
    """Open a presentation package, raising PackageError on bad input."""
    return PresentationPackage(source, encoding=encoding)
