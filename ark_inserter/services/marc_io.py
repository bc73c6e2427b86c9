"""Read and write MARC21 (binary) and MARCXML files."""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from pymarc import MARCReader, MARCWriter, Record, XMLWriter, parse_xml_to_array

from ark_inserter.errors import StructuralError, UnsupportedFormatError

logger = logging.getLogger(__name__)

_BINARY_SUFFIXES = {".mrc"}
_XML_SUFFIXES = {".xml"}


def _suffix(path: str | Path) -> str:
    return Path(path).suffix.lower()


def _iter_binary(path: str | Path) -> Iterator[Record]:
    with open(path, "rb") as fh:
        reader = MARCReader(fh, to_unicode=True, force_utf8=True)
        for position, record in enumerate(reader, start=1):
            if record is None:
                raise StructuralError(
                    f"Failed to decode MARC record {position} in {path}: "
                    f"{reader.current_exception}"
                )
            yield record


def read_records(path: str | Path) -> Iterator[Record]:
    """Return an iterator over the records of a ``.mrc`` or ``.xml`` MARC file.

    The extension is checked before anything is read.

    Raises:
        UnsupportedFormatError: For any other file extension.
        StructuralError: While iterating, if a binary record cannot be decoded.
    """
    suffix = _suffix(path)
    if suffix in _XML_SUFFIXES:
        return iter(parse_xml_to_array(str(path)))
    if suffix in _BINARY_SUFFIXES:
        return _iter_binary(path)
    raise UnsupportedFormatError(
        "Could not create marc reader, only XML and MRC files are supported for read"
    )


class MarcDestination:
    """Caller-owned MARC output file, opened and closed explicitly.

    The writer is picked from the path's extension when the destination is
    opened. ``close()`` may be called more than once.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._writer: MARCWriter | XMLWriter | None = None
        self.written = 0

    @property
    def is_open(self) -> bool:
        return self._writer is not None

    def open(self) -> "MarcDestination":
        if self._writer is not None:
            return self
        suffix = _suffix(self.path)
        if suffix not in _BINARY_SUFFIXES | _XML_SUFFIXES:
            raise UnsupportedFormatError(
                "Could not create marc writer, only XML and MRC files are supported for writing"
            )

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fh: BinaryIO = open(self.path, "wb")
        if suffix in _XML_SUFFIXES:
            self._writer = XMLWriter(fh)
        else:
            self._writer = MARCWriter(fh)
        logger.debug("[MarcDestination] Opened %s", self.path)
        return self

    def write(self, record: Record) -> None:
        if self._writer is None:
            raise RuntimeError(f"MARC destination {self.path} is not open")
        self._writer.write(record)
        self.written += 1

    def close(self) -> None:
        if self._writer is None:
            return
        self._writer.close()
        self._writer = None
        logger.debug(
            "[MarcDestination] Closed %s after %d records", self.path, self.written
        )

    def __enter__(self) -> "MarcDestination":
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()
