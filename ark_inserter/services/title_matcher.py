"""Decide which DataSpace search candidates are the same work as a record title."""

import logging
from collections.abc import Iterable
from typing import AbstractSet

from ark_inserter.config import ARK_RESOLVER_BASE
from ark_inserter.errors import MalformedCandidateError
from ark_inserter.models.catalog import CandidateEntry, MatchDecision
from ark_inserter.utils.ark import ark_from_handle
from ark_inserter.utils.title_normalizer import NBSP_NOISE_BYTES, canonical_title
from ark_inserter.utils.title_overrides import TitleOverrideTable

logger = logging.getLogger(__name__)


def find_matches(
    query_title: str,
    candidates: Iterable[CandidateEntry],
    *,
    noise_bytes: AbstractSet[int] = NBSP_NOISE_BYTES,
    allow_empty_match: bool = True,
    overrides: TitleOverrideTable | None = None,
    resolver_base: str = ARK_RESOLVER_BASE,
) -> list[MatchDecision]:
    """Return every candidate whose canonical title equals the query's.

    The query is canonicalized once, without the noise-byte denylist; each
    candidate title is canonicalized with it. Matches keep the order the
    candidates were supplied in. Candidates without a usable handle are skipped.

    Args:
        allow_empty_match: When ``False``, a query and candidate that both
            normalise to nothing are not considered a match.
    """
    query_key = canonical_title(query_title, overrides=overrides)
    if not query_key and not allow_empty_match:
        logger.debug(
            "[TitleMatcher] Query title='%s' normalises to nothing; no matches",
            query_title[:80],
        )
        return []

    matches: list[MatchDecision] = []
    for candidate in candidates:
        candidate_key = canonical_title(
            candidate.displayed_title,
            noise_bytes=noise_bytes,
            overrides=overrides,
        )
        if candidate_key != query_key:
            logger.debug(
                "[TitleMatcher] Row %d title='%s' does not match",
                candidate.position,
                candidate.displayed_title[:80],
            )
            continue

        try:
            identifier = ark_from_handle(candidate.identifier_handle, resolver_base)
        except MalformedCandidateError as exc:
            logger.debug(
                "[TitleMatcher] Skipping row %d: %s", candidate.position, exc
            )
            continue

        matches.append(
            MatchDecision(
                identifier=identifier,
                identifier_handle=candidate.identifier_handle,
                displayed_title=candidate.displayed_title,
                position=candidate.position,
            )
        )

    return matches
