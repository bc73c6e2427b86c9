"""Versioned table of known transcription artifacts in thesis titles.

Catalogers and the DataSpace search index render some titles differently
(e.g. a mathematical italic ``𝑁 =`` in the MARC record). Each entry here is
applied before any general normalization, so fixes for specific bad titles
live in data instead of inside the matcher.
"""

import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class TitleOverride(BaseModel):
    """A single substitution applied to a raw title.

    ``substring`` entries replace every literal occurrence of ``pattern``.
    ``title`` entries replace the whole title when it equals ``pattern``
    case-insensitively (surrounding whitespace ignored).
    """

    kind: Literal["substring", "title"] = "substring"
    pattern: str = Field(..., min_length=1)
    replacement: str = ""
    note: str = ""

    def apply(self, title: str) -> str:
        if self.kind == "title":
            if title.strip().casefold() == self.pattern.strip().casefold():
                return self.replacement
            return title
        return title.replace(self.pattern, self.replacement)


class TitleOverrideTable(BaseModel):
    version: int = 1
    overrides: list[TitleOverride] = Field(default_factory=list)

    def apply(self, title: str) -> str:
        for override in self.overrides:
            title = override.apply(title)
        return title

    def extend(self, other: "TitleOverrideTable") -> "TitleOverrideTable":
        """Return a table with *other*'s entries applied after this table's."""
        return TitleOverrideTable(
            version=max(self.version, other.version),
            overrides=[*self.overrides, *other.overrides],
        )


DEFAULT_TITLE_OVERRIDES = TitleOverrideTable.model_validate(
    {
        "version": 2,
        "overrides": [
            {
                "pattern": "\U0001d441 =",
                "note": "mathematical italic N rendered as sample-size marker",
            },
            {
                "pattern": "\U0001d441=",
                "note": "same marker without the space",
            },
        ],
    }
)


def load_title_overrides(path: Path | None = None) -> TitleOverrideTable:
    """Return the default table, extended with the JSON table at *path* if given."""
    if path is None:
        return DEFAULT_TITLE_OVERRIDES

    extra = TitleOverrideTable.model_validate_json(Path(path).read_text(encoding="utf-8"))
    logger.info(
        "[TitleOverrides] Loaded %d overrides (version=%d) from %s",
        len(extra.overrides),
        extra.version,
        path,
    )
    return DEFAULT_TITLE_OVERRIDES.extend(extra)
