"""Markdown summary report for a MARC file."""

from collections.abc import Iterable

from pymarc import Record

from ark_inserter.models.catalog import RecordSummaryRow


def _first_subfield(record: Record, tag: str, code: str, *, last_field: bool = False) -> str:
    fields = record.get_fields(tag)
    if not fields:
        return ""
    field = fields[-1] if last_field else fields[0]
    values = field.get_subfields(code)
    return values[0] if values else ""


def summarize_record(record: Record) -> RecordSummaryRow:
    """Leader, ``245 $a`` and the ``$u`` of the last ``856`` of *record*.

    The last ``856`` is reported because inserted ARKs are appended after any
    existing electronic locations.
    """
    return RecordSummaryRow(
        leader=str(record.leader),
        title=_first_subfield(record, "245", "a"),
        url=_first_subfield(record, "856", "u", last_field=True),
    )


def build_marc_report(file_path: str, records: Iterable[Record]) -> str:
    """Render the per-record and per-file summary tables as Markdown.

    Example:
        >>> print(build_marc_report("empty.mrc", []))
        # MARC Record Summary Report
        ## Record Summary
        | leader | title | URL |
        | ------ | ----- | --- |
        ## File Summary
        | file path | total number of MARC records |
        | --------- | ---------------------------- |
        | empty.mrc | 0 |
    """
    lines = [
        "# MARC Record Summary Report",
        "## Record Summary",
        "| leader | title | URL |",
        "| ------ | ----- | --- |",
    ]

    count = 0
    for record in records:
        row = summarize_record(record)
        lines.append(f"| {row.leader} | {row.title} | {row.url} |")
        count += 1

    lines.extend(
        [
            "## File Summary",
            "| file path | total number of MARC records |",
            "| --------- | ---------------------------- |",
            f"| {file_path} | {count} |",
        ]
    )
    return "\n".join(lines)
