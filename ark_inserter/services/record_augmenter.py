"""Attach a matched ARK to a MARC record, or route the record elsewhere."""

import copy
from collections.abc import Sequence

from pymarc import Field, Record, Subfield

from ark_inserter.models.catalog import AugmentOutcome, AugmentResult, MatchDecision

ELECTRONIC_LOCATION_TAG = "856"


def build_ark_field(ark: str) -> Field:
    """Return an ``856`` field with blank indicators carrying ``$u`` *ark*."""
    return Field(
        tag=ELECTRONIC_LOCATION_TAG,
        indicators=[" ", " "],
        subfields=[Subfield(code="u", value=ark)],
    )


def augment_record(
    record: Record,
    matches: Sequence[MatchDecision],
    *,
    secondary_configured: bool = False,
) -> AugmentResult:
    """Decide what to emit for *record* given its ordered matches.

    With at least one match, ``primary`` is a copy of *record* with an ``856``
    for the first match appended; existing fields are untouched. Without a
    match the unmodified record goes to ``secondary`` when a secondary
    destination is configured, and is dropped otherwise. *record* itself is
    never mutated.
    """
    if matches:
        augmented = copy.deepcopy(record)
        augmented.add_field(build_ark_field(matches[0].identifier))
        return AugmentResult(
            outcome=AugmentOutcome.AUGMENTED,
            primary=augmented,
            matches=list(matches),
        )

    if secondary_configured:
        return AugmentResult(outcome=AugmentOutcome.PASSED_THROUGH, secondary=record)

    return AugmentResult(outcome=AugmentOutcome.DROPPED)
