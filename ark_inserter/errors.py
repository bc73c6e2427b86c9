"""Exceptions raised while inserting ARKs into MARC records."""


class ArkInserterError(Exception):
    """Base class for failures that abort an ARK insertion run."""


class StructuralError(ArkInserterError):
    """A record is missing a field or subfield the pipeline requires."""


class TransportError(ArkInserterError):
    """The DataSpace search endpoint could not be reached or refused the query."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class UnsupportedFormatError(ArkInserterError):
    """A MARC file path has an extension we cannot read or write."""


class MalformedCandidateError(ArkInserterError):
    """A search result row carries no usable handle.

    Raised only while resolving identifiers; the title matcher skips the row.
    """
