"""Tests for title normalisation and canonical byte-set keys."""

import pytest

from ark_inserter.utils.title_normalizer import (
    NBSP_NOISE_BYTES,
    canonical_title,
    normalize_title,
)
from ark_inserter.utils.title_overrides import TitleOverride, TitleOverrideTable

SLAVES_OF_GOD = "Slaves of God: Augustine and Other Romans on Religion and Politics."

TITLES = [
    SLAVES_OF_GOD,
    "Slaves of God: Augustine and Other Romans on Religion and Politics. Volume 2 =",
    "Écrits   politiques, vol. IV",
    "Effects with \U0001d441 = 30 participants",
    "Tabs\tand\x07 bells \x01 here",
    "!!!",
    "",
    "Grammar of the Nahuatl Language; v. 3.",
    "Well-being (and ill-being) =",
    "Essays vólume 2",
]


def test_strips_punctuation_and_lowercases():
    assert normalize_title(SLAVES_OF_GOD) == (
        "slaves of god augustine and other romans on religion and politics"
    )


@pytest.mark.parametrize("title", TITLES)
def test_normalize_is_idempotent(title: str):
    once = normalize_title(title)
    assert normalize_title(once) == once


@pytest.mark.parametrize("title", TITLES)
def test_canonical_of_normalized_is_unchanged(title: str):
    assert canonical_title(normalize_title(title)) == canonical_title(title)


def test_trailing_equals_and_volume_suffix_are_ignored():
    decorated = "Slaves of God: Augustine and Other Romans on Religion and Politics. Volume 2 ="
    assert normalize_title(decorated) == normalize_title(SLAVES_OF_GOD)
    assert canonical_title(decorated) == canonical_title(SLAVES_OF_GOD)


@pytest.mark.parametrize(
    "title",
    [
        "Grammar of the Nahuatl Language, vol. 2",
        "Grammar of the Nahuatl Language; v. 3.",
        "Grammar of the Nahuatl Language. Volume II",
        "Grammar of the Nahuatl Language =",
        "Grammar of the Nahuatl Language :",
    ],
)
def test_editorial_suffixes_are_stripped(title: str):
    assert normalize_title(title) == "grammar of the nahuatl language"


def test_volume_word_inside_title_is_kept():
    assert normalize_title("Volume and Surface in Roman Architecture") == (
        "volume and surface in roman architecture"
    )


def test_collapses_whitespace_runs():
    assert normalize_title("A   study \n\n of  runs") == "a study of runs"


def test_folds_listed_diacritics():
    assert normalize_title("Édition critique à Açores: Olá, Lõbo") == (
        "edition critique a acores ola lobo"
    )


def test_strips_control_characters():
    assert normalize_title("A\x07 title") == "a title"
    assert normalize_title("A \x01 title") == "a title"


def test_mathematical_n_artifact_is_removed():
    assert normalize_title("Effects with \U0001d441 = 30 participants") == (
        "effects with 30 participants"
    )


def test_canonical_is_a_sorted_byte_set():
    assert canonical_title("Baba") == b"ab"


def test_canonical_ignores_word_order_and_repeats():
    assert canonical_title("God of Slaves") == canonical_title("Slaves of God of God")


def test_punctuation_only_title_is_empty():
    assert normalize_title("?!...") == ""
    assert canonical_title("?!...") == b""


def test_noise_bytes_removed_only_when_requested():
    scraped = "Slaves of\u00a0God"
    assert canonical_title(scraped, noise_bytes=NBSP_NOISE_BYTES) == canonical_title(
        "Slaves of God"
    )
    assert canonical_title(scraped) != canonical_title("Slaves of God")


def test_custom_override_table_replaces_whole_title():
    table = TitleOverrideTable(
        version=3,
        overrides=[
            TitleOverride(
                kind="title",
                pattern="Slaves of God: Augustine and Other Romans.",
                replacement="Slaves of God: Augustine and Other Romans on Religion and Politics",
            )
        ],
    )
    assert normalize_title("slaves of god: augustine and other romans.", overrides=table) == (
        normalize_title(SLAVES_OF_GOD)
    )


def test_folded_volume_marker_is_stripped():
    assert normalize_title("Essays vólume 2") == "essays"
