"""Data models for DataSpace search candidates and augmentation decisions."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pymarc import Record


class CandidateEntry(BaseModel):
    """One row of a DataSpace search results table, in document order."""

    position: int = Field(..., description="1-based row index among the data rows")
    displayed_title: str = Field(
        default="", description="Title text shown in the results row"
    )
    identifier_handle: str | None = Field(
        default=None, description="Handle path linked from the row, e.g. /handle/88435/..."
    )


class MatchDecision(BaseModel):
    """A candidate whose canonical title equals the query's canonical title."""

    identifier: str = Field(..., description="Resolved ARK URL")
    identifier_handle: str
    displayed_title: str = ""
    position: int


class AugmentOutcome(str, Enum):
    """Terminal state of a record after augmentation."""

    AUGMENTED = "augmented"
    PASSED_THROUGH = "passed_through"
    DROPPED = "dropped"


class AugmentResult(BaseModel):
    """Records to emit for one input record, plus every match found for it."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    outcome: AugmentOutcome
    primary: Record | None = None
    secondary: Record | None = None
    matches: list[MatchDecision] = Field(default_factory=list)


class RunSummary(BaseModel):
    total: int = 0
    augmented: int = 0
    passed_through: int = 0
    dropped: int = 0
    multiple_matches: int = Field(
        default=0, description="Records that matched more than one candidate"
    )


class RecordSummaryRow(BaseModel):
    leader: str
    title: str = ""
    url: str = ""
