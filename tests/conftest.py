"""Shared test fixtures for the ark-inserter test suite."""

from pathlib import Path
from typing import Callable

import pytest
from pymarc import Field, MARCWriter, Record, Subfield

FIXTURES_DIR = Path(__file__).parent / "fixtures"

SLAVES_OF_GOD = "Slaves of God: Augustine and Other Romans on Religion and Politics."
SLAVES_OF_GOD_ARK = "http://arks.princeton.edu/ark:/88435/dsp01bc386n34x"
PROQUEST_URL = (
    "http://gateway.proquest.com/openurl?url_ver=Z39.88-2004"
    "&rft_val_fmt=info:ofi/fmt:kev:mtx:dissertation&res_dat=xri:pqm"
    "&rft_dat=xri:pqdiss:28545254"
)
# Position 9 is "a" so records are written as UTF-8.
LEADER = "03491nam a2200457   4500"


def build_record(
    title: str | None = SLAVES_OF_GOD,
    *,
    with_title_field: bool = True,
    control_number: str = "28545254",
) -> Record:
    record = Record(leader=LEADER)
    record.add_field(Field(tag="001", data=control_number))
    if with_title_field:
        subfields = [Subfield(code="c", value="Nicholas Lane.")]
        if title is not None:
            subfields.insert(0, Subfield(code="a", value=title))
        record.add_field(Field(tag="245", indicators=["1", "0"], subfields=subfields))
    record.add_field(
        Field(tag="856", indicators=["4", "1"], subfields=[Subfield(code="u", value=PROQUEST_URL)])
    )
    return record


@pytest.fixture
def make_record() -> Callable[..., Record]:
    return build_record


@pytest.fixture
def search_results_html() -> str:
    """DataSpace results page with three rows; the first is the Slaves of God thesis."""
    return (FIXTURES_DIR / "dataspace_search_results.html").read_text(encoding="utf-8")


@pytest.fixture
def no_results_html() -> str:
    """DataSpace results page without a results table."""
    return (FIXTURES_DIR / "dataspace_no_results.html").read_text(encoding="utf-8")


@pytest.fixture
def write_marc(tmp_path: Path) -> Callable[..., Path]:
    """Write records to a binary MARC file under tmp_path and return its path."""

    def _write(records: list[Record], name: str = "input.mrc") -> Path:
        path = tmp_path / name
        with open(path, "wb") as fh:
            writer = MARCWriter(fh)
            for record in records:
                writer.write(record)
            writer.close(close_fh=False)
        return path

    return _write
