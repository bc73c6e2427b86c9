"""Command-line entry point.

Usage:
    ark-inserter insert-arks -f theses.mrc -o with_arks.mrc
    ark-inserter insert-arks -f theses.mrc -o with_arks.mrc --original-file-path unmatched.mrc
    ark-inserter inspect-marc with_arks.mrc
"""

import logging
from collections.abc import Generator
from contextlib import ExitStack

import click
import httpx

from ark_inserter.config import settings
from ark_inserter.errors import ArkInserterError
from ark_inserter.services.ark_pipeline import ArkInsertionPipeline
from ark_inserter.services.dataspace_service import DataSpaceSearchService
from ark_inserter.services.marc_io import MarcDestination, read_records
from ark_inserter.utils.rate_limiter import TokenBucketRateLimiter
from ark_inserter.utils.report_formatter import build_marc_report
from ark_inserter.utils.title_overrides import load_title_overrides

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _build_http_client() -> httpx.Client:
    timeout = httpx.Timeout(settings.request_timeout, connect=10.0)
    return httpx.Client(timeout=timeout, follow_redirects=True)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug: bool):
    """Insert DataSpace ARKs into MARC thesis records."""
    logging.basicConfig(
        level=logging.DEBUG if debug else settings.log_level.upper(),
        format=LOG_FORMAT,
    )


@cli.command("insert-arks")
@click.option("-f", "--file-path", required=True, type=click.Path(exists=True, dir_okay=False), help="MARC file to read (.mrc or .xml)")
@click.option("-o", "--output-file-path", required=True, type=click.Path(dir_okay=False), help="Where to write records with ARKs inserted")
@click.option("--dspace-uri", default=None, help="DataSpace base URL (defaults to the configured production instance)")
@click.option("--original-file-path", default=None, type=click.Path(dir_okay=False), help="Where to write unmatched records, unmodified")
def insert_arks(
    file_path: str,
    output_file_path: str,
    dspace_uri: str | None,
    original_file_path: str | None,
):
    """Search DataSpace for each record's title and append the matching ARK as an 856."""
    base_url = dspace_uri or settings.dspace_url
    overrides = load_title_overrides(settings.title_overrides_path)

    try:
        with ExitStack() as stack:
            records = read_records(file_path)
            if isinstance(records, Generator):
                stack.callback(records.close)
            client = stack.enter_context(_build_http_client())
            primary = stack.enter_context(MarcDestination(output_file_path))
            secondary = None
            if original_file_path:
                secondary = stack.enter_context(MarcDestination(original_file_path))

            search_service = DataSpaceSearchService(
                client,
                TokenBucketRateLimiter(settings.dspace_rps),
                base_url=base_url,
                results_selector=settings.dspace_results_selector,
                quote_query=settings.quote_query,
                timeout=settings.request_timeout,
            )
            pipeline = ArkInsertionPipeline(
                search_service,
                allow_empty_match=settings.allow_empty_title_match,
                overrides=overrides,
                resolver_base=settings.ark_resolver_base,
            )
            summary = pipeline.run(records, primary, secondary)
    except ArkInserterError as exc:
        logger.error("[CLI] insert-arks aborted: %s", exc)
        raise click.ClickException(str(exc)) from exc

    click.echo(
        f"Processed {summary.total} records: {summary.augmented} with ARKs, "
        f"{summary.passed_through} unmatched written to {original_file_path or '-'}, "
        f"{summary.dropped} dropped, {summary.multiple_matches} with multiple matches"
    )


@cli.command("inspect-marc")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
def inspect_marc(file_path: str):
    """Print a Markdown summary of the records in FILE_PATH."""
    try:
        report = build_marc_report(file_path, read_records(file_path))
    except ArkInserterError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(report)


if __name__ == "__main__":
    cli()
