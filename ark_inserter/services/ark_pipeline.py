"""Record-by-record ARK insertion: extract title, search, match, augment, write."""

import logging
from collections.abc import Iterable
from typing import AbstractSet, Protocol

from pymarc import Record

from ark_inserter.config import ARK_RESOLVER_BASE
from ark_inserter.errors import StructuralError
from ark_inserter.models.catalog import (
    AugmentOutcome,
    AugmentResult,
    CandidateEntry,
    RunSummary,
)
from ark_inserter.services.record_augmenter import augment_record
from ark_inserter.services.title_matcher import find_matches
from ark_inserter.utils.title_normalizer import NBSP_NOISE_BYTES
from ark_inserter.utils.title_overrides import TitleOverrideTable

logger = logging.getLogger(__name__)

TITLE_TAG = "245"
TITLE_SUBFIELD = "a"


class CandidateSearch(Protocol):
    def search(self, title: str) -> list[CandidateEntry]: ...


class RecordSink(Protocol):
    def write(self, record: Record) -> None: ...


def extract_title(record: Record, position: int) -> str:
    """Return ``245 $a`` of *record*.

    Raises:
        StructuralError: If the field or subfield is missing.
    """
    fields = record.get_fields(TITLE_TAG)
    if not fields:
        raise StructuralError(
            f"Failed to find the title field {TITLE_TAG} for record {position}"
        )
    values = fields[0].get_subfields(TITLE_SUBFIELD)
    if not values:
        raise StructuralError(
            f"Failed to find the title subfield {TITLE_TAG}${TITLE_SUBFIELD} "
            f"for record {position}"
        )
    return values[0]


class ArkInsertionPipeline:
    """Insert DataSpace ARKs into MARC records one record at a time.

    Each record is searched, decided and written before the next one is read.
    Structural and transport errors propagate and end the run.
    """

    def __init__(
        self,
        search_service: CandidateSearch,
        *,
        allow_empty_match: bool = True,
        noise_bytes: AbstractSet[int] = NBSP_NOISE_BYTES,
        overrides: TitleOverrideTable | None = None,
        resolver_base: str = ARK_RESOLVER_BASE,
    ) -> None:
        self.search_service = search_service
        self.allow_empty_match = allow_empty_match
        self.noise_bytes = noise_bytes
        self.overrides = overrides
        self.resolver_base = resolver_base

    def process_record(
        self,
        record: Record,
        position: int,
        *,
        secondary_configured: bool = False,
    ) -> AugmentResult:
        title = extract_title(record, position)
        candidates = self.search_service.search(title)
        matches = find_matches(
            title,
            candidates,
            noise_bytes=self.noise_bytes,
            allow_empty_match=self.allow_empty_match,
            overrides=self.overrides,
            resolver_base=self.resolver_base,
        )

        if len(matches) > 1:
            logger.warning(
                "[ArkPipeline] Record %d matched %d results for title='%s'; using %s",
                position,
                len(matches),
                title[:80],
                matches[0].identifier,
            )
        elif matches:
            logger.info(
                "[ArkPipeline] Record %d matched %s", position, matches[0].identifier
            )
        else:
            logger.info(
                "[ArkPipeline] Record %d unmatched (%d candidates) for title='%s'",
                position,
                len(candidates),
                title[:80],
            )

        return augment_record(
            record, matches, secondary_configured=secondary_configured
        )

    def run(
        self,
        records: Iterable[Record],
        primary: RecordSink,
        secondary: RecordSink | None = None,
    ) -> RunSummary:
        """Process *records* in order and write each decision as it is made."""
        summary = RunSummary()
        for position, record in enumerate(records, start=1):
            result = self.process_record(
                record, position, secondary_configured=secondary is not None
            )
            summary.total += 1
            if len(result.matches) > 1:
                summary.multiple_matches += 1

            if result.outcome is AugmentOutcome.AUGMENTED:
                primary.write(result.primary)
                summary.augmented += 1
            elif result.outcome is AugmentOutcome.PASSED_THROUGH:
                secondary.write(result.secondary)
                summary.passed_through += 1
            else:
                summary.dropped += 1

        logger.info(
            "[ArkPipeline] Processed %d records: augmented=%d, passed_through=%d, dropped=%d",
            summary.total,
            summary.augmented,
            summary.passed_through,
            summary.dropped,
        )
        return summary
