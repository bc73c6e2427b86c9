"""Title normalisation and byte-set canonical form for catalog matching."""

import re
import unicodedata
from typing import AbstractSet

from ark_inserter.utils.title_overrides import DEFAULT_TITLE_OVERRIDES, TitleOverrideTable

CanonicalTitle = bytes

# UTF-8 encoding of U+00A0; DataSpace result rows carry stray NBSPs.
# The two bytes are dropped independently, so a scraped title loses them even
# when they belong to another character (U+00B0 is C2 B0, U+05E0 is D7 A0).
# Such titles never match a query that contains those characters.
NBSP_NOISE_BYTES: frozenset[int] = frozenset("\u00a0".encode("utf-8"))

# ASCII symbols matched by POSIX [[:punct:]] but not in the Unicode P* categories
_POSIX_SYMBOLS = frozenset("$+<=>^`|~")

_TRAILING_EQUALS_RE = re.compile(r" =\s*$")
_TRAILING_VOLUME_RE = re.compile(
    r"[\W_]*\b(?:volume|vol\b|v\.)[\W_]*(?:\d+|[ivxlcdm]+)\b[\W_]*$",
    re.IGNORECASE,
)
_WHITESPACE_RUN_RE = re.compile(r"\s{2,}")

# Explicit folds only; add entries here rather than stripping combining marks.
_ACCENT_FOLDS = str.maketrans(
    {
        "á": "a", "à": "a", "â": "a", "ä": "a", "ã": "a", "å": "a",
        "ç": "c",
        "é": "e", "è": "e", "ê": "e", "ë": "e",
        "í": "i", "ì": "i", "î": "i", "ï": "i",
        "ñ": "n",
        "ó": "o", "ò": "o", "ô": "o", "ö": "o", "õ": "o",
        "ú": "u", "ù": "u", "û": "u", "ü": "u",
        "ý": "y", "ÿ": "y",
    }
)


def _is_punctuation(char: str) -> bool:
    return unicodedata.category(char).startswith("P") or char in _POSIX_SYMBOLS


def _strip_punctuation_tail(title: str) -> str:
    end = len(title)
    while end > 0 and (_is_punctuation(title[end - 1]) or title[end - 1].isspace()):
        end -= 1
    return title[:end]


def _strip_trailing_markers(title: str) -> str:
    """Drop one trailing `` =`` and any volume markers and punctuation after the title proper."""
    title = _TRAILING_EQUALS_RE.sub("", title, count=1)
    while True:
        stripped = _TRAILING_VOLUME_RE.sub("", _strip_punctuation_tail(title))
        if stripped == title:
            return title
        title = stripped


def _clean(title: str) -> str:
    title = _strip_trailing_markers(title)
    title = "".join(char for char in title if not _is_punctuation(char))
    title = title.casefold()
    title = _WHITESPACE_RUN_RE.sub(" ", title).strip()
    title = unicodedata.normalize("NFC", title).translate(_ACCENT_FOLDS)
    title = "".join(char for char in title if unicodedata.category(char) != "Cc")
    # Dropping a control character can leave two spaces side by side
    return _WHITESPACE_RUN_RE.sub(" ", title).strip()


def normalize_title(
    title: str, overrides: TitleOverrideTable | None = None
) -> str:
    """Reduce a raw title to the text its canonical form is computed from.

    Steps, in order: known-artifact overrides, trailing ``=``/volume/punctuation
    removal, punctuation removal, case folding, whitespace collapsing,
    accent folding, control character removal. Everything after the overrides
    is repeated until the text stops changing, since folding can expose a
    volume marker (``vólume 2``) that the first pass did not recognise.

    Examples:
        >>> normalize_title("Slaves of God: Augustine and Other Romans.")
        'slaves of god augustine and other romans'
        >>> normalize_title("Écrits politiques. Volume 2 =")
        'ecrits politiques'
        >>> normalize_title("Essays vólume 2")
        'essays'
    """
    table = DEFAULT_TITLE_OVERRIDES if overrides is None else overrides
    title = table.apply(title)
    cleaned = _clean(title)
    while cleaned != title:
        title, cleaned = cleaned, _clean(cleaned)
    return cleaned


def canonical_title(
    title: str,
    *,
    noise_bytes: AbstractSet[int] = frozenset(),
    overrides: TitleOverrideTable | None = None,
) -> CanonicalTitle:
    """Return the sorted, de-duplicated UTF-8 bytes of the normalised title.

    Word order and repeated words do not affect the result. ``noise_bytes`` is
    removed from the set; pass it only for titles scraped from search results.

    Examples:
        >>> canonical_title("Aba")
        b'ab'
        >>> canonical_title("b\\u00a0a") == canonical_title("a b")
        False
        >>> canonical_title("a\\u00a0b", noise_bytes=NBSP_NOISE_BYTES)
        b'ab'
    """
    key = set(normalize_title(title, overrides=overrides).encode("utf-8"))
    key.difference_update(noise_bytes)
    return bytes(sorted(key))
