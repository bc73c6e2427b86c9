"""Tests for matching record titles against DataSpace candidates."""

import pytest

from ark_inserter.models.catalog import CandidateEntry
from ark_inserter.services.title_matcher import find_matches

SLAVES_OF_GOD = "Slaves of God: Augustine and Other Romans on Religion and Politics."


def _candidate(position: int, title: str, handle: str | None) -> CandidateEntry:
    return CandidateEntry(position=position, displayed_title=title, identifier_handle=handle)


def test_exact_scraped_title_matches_and_resolves_ark():
    candidates = [
        _candidate(
            1,
            "Slaves of God Augustine and Other Romans on Religion and Politics",
            "/handle/88435/dsp01bc386n34x",
        )
    ]

    matches = find_matches(SLAVES_OF_GOD, candidates)

    assert len(matches) == 1
    assert matches[0].identifier == "http://arks.princeton.edu/ark:/88435/dsp01bc386n34x"
    assert matches[0].identifier_handle == "/handle/88435/dsp01bc386n34x"
    assert matches[0].position == 1


def test_matches_keep_candidate_order():
    candidates = [
        _candidate(1, "A Different Thesis Entirely", "/handle/88435/dsp01aaa"),
        _candidate(2, "Slaves of God", "/handle/88435/dsp01bbb"),
        _candidate(3, "God of Slaves", "/handle/88435/dsp01ccc"),
    ]

    matches = find_matches("Slaves of God.", candidates)

    assert [m.identifier_handle for m in matches] == [
        "/handle/88435/dsp01bbb",
        "/handle/88435/dsp01ccc",
    ]


def test_no_candidates_is_not_an_error():
    assert find_matches(SLAVES_OF_GOD, []) == []


def test_candidate_without_handle_is_skipped():
    candidates = [
        _candidate(1, "Slaves of God", None),
        _candidate(2, "Slaves of God", "/handle/88435/dsp01bbb"),
    ]

    matches = find_matches("Slaves of God", candidates)

    assert [m.position for m in matches] == [2]


def test_candidate_with_non_handle_link_is_skipped():
    candidates = [_candidate(1, "Slaves of God", "/items/12345")]

    assert find_matches("Slaves of God", candidates) == []


def test_absolute_handle_url_is_accepted():
    candidates = [
        _candidate(1, "Slaves of God", "https://dataspace.princeton.edu/handle/88435/dsp01bbb")
    ]

    matches = find_matches("Slaves of God", candidates)

    assert matches[0].identifier == "http://arks.princeton.edu/ark:/88435/dsp01bbb"


def test_noise_bytes_in_candidate_still_match():
    candidates = [_candidate(1, "Slaves of\u00a0God", "/handle/88435/dsp01bbb")]

    assert len(find_matches("Slaves of God", candidates)) == 1


def test_noise_bytes_in_query_get_no_special_treatment():
    candidates = [_candidate(1, "Slaves of God", "/handle/88435/dsp01bbb")]

    assert find_matches("Slaves of\u00a0God", candidates) == []


def test_different_titles_do_not_match():
    candidates = [_candidate(1, "Augustine and the Roman Senate", "/handle/88435/dsp01bbb")]

    assert find_matches(SLAVES_OF_GOD, candidates) == []


class TestEmptyTitles:
    candidates = [_candidate(1, "???", "/handle/88435/dsp01bbb")]

    def test_empty_titles_match_by_default(self):
        assert len(find_matches("!!!", self.candidates)) == 1

    def test_empty_titles_do_not_match_when_disallowed(self):
        assert find_matches("!!!", self.candidates, allow_empty_match=False) == []

    def test_non_empty_titles_unaffected_by_flag(self):
        candidates = [_candidate(1, "Slaves of God", "/handle/88435/dsp01bbb")]
        assert len(find_matches("Slaves of God", candidates, allow_empty_match=False)) == 1


def test_custom_resolver_base():
    candidates = [_candidate(1, "Slaves of God", "/handle/88435/dsp01bbb")]

    matches = find_matches(
        "Slaves of God", candidates, resolver_base="https://n2t.net/ark:"
    )

    assert matches[0].identifier == "https://n2t.net/ark:/88435/dsp01bbb"


@pytest.mark.parametrize("title", ["Thermal behaviour at 37°C", "Studies in נביאים"])
def test_titles_sharing_noise_bytes_do_not_match_themselves(title: str):
    candidates = [_candidate(1, title, "/handle/88435/dsp01bbb")]

    assert find_matches(title, candidates) == []
