"""Turn scraped search result rows into candidate entries."""

from collections.abc import Iterable, Iterator

from ark_inserter.models.catalog import CandidateEntry


def extract_candidates(
    rows: Iterable[tuple[str | None, str | None]],
) -> Iterator[CandidateEntry]:
    """Yield one candidate per ``(displayed_title, href)`` row, keeping row order.

    Rows without a link still yield a candidate (with no handle) so positions
    line up with the results table; the matcher skips them.
    """
    for position, (title, href) in enumerate(rows, start=1):
        handle = href.strip() if href and href.strip() else None
        yield CandidateEntry(
            position=position,
            displayed_title=title or "",
            identifier_handle=handle,
        )
