"""Parser for DataSpace simple-search HTML to extract result rows."""

import logging
from typing import NamedTuple

from lxml import etree, html

from ark_inserter.config import DSPACE_RESULTS_SELECTOR

logger = logging.getLogger(__name__)

_TITLE_CELL_SELECTOR = "td[headers='t2']"


class SearchResultRow(NamedTuple):
    title: str | None
    href: str | None


def _cell_text(element: html.HtmlElement | None) -> str | None:
    if element is None:
        return None
    return element.text_content()


def _parse_document(markup: str | bytes, encoding: str | None) -> html.HtmlElement:
    if isinstance(markup, bytes):
        return html.fromstring(markup, parser=html.HTMLParser(encoding=encoding))
    try:
        return html.fromstring(markup)
    except ValueError:
        # lxml refuses str input that carries an XML encoding declaration
        return html.fromstring(
            markup.encode("utf-8"), parser=html.HTMLParser(encoding="utf-8")
        )


def parse_search_results(
    markup: str | bytes,
    selector: str = DSPACE_RESULTS_SELECTOR,
    encoding: str | None = None,
) -> list[SearchResultRow]:
    """Parse a DataSpace search results page into ``(title, href)`` rows.

    Args:
        markup: HTML returned by ``/simple-search``, as text or raw bytes.
        selector: CSS selector locating the results table.
        encoding: Character encoding of *markup* when it is bytes; lxml
            guesses from the page when omitted.

    Returns:
        One row per data row of the table, in document order. The header row
        is skipped. Returns an empty list if the table is absent.
    """
    if not markup or not markup.strip():
        logger.warning("[DataSpaceHtmlParser] Received an empty page")
        return []

    try:
        document = _parse_document(markup, encoding)
    except (etree.ParserError, etree.XMLSyntaxError, LookupError, ValueError) as exc:
        logger.warning("[DataSpaceHtmlParser] Failed to parse HTML: %s", exc)
        return []

    tables = document.cssselect(selector)
    if not tables:
        logger.info("[DataSpaceHtmlParser] No results table on page")
        return []

    rows: list[SearchResultRow] = []
    for tr in tables[0].cssselect("tr")[1:]:
        cells = tr.cssselect(_TITLE_CELL_SELECTOR)
        cell = cells[0] if cells else None
        anchors = cell.cssselect("a") if cell is not None else []
        href = anchors[0].get("href") if anchors else None
        rows.append(SearchResultRow(title=_cell_text(cell), href=href))

    logger.debug("[DataSpaceHtmlParser] Found %d result rows", len(rows))
    return rows
