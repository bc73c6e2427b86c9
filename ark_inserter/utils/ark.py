"""Resolve DataSpace handle links to ARK URLs."""

import re
from urllib.parse import urlparse

from ark_inserter.config import ARK_RESOLVER_BASE
from ark_inserter.errors import MalformedCandidateError

_HANDLE_PATH_RE = re.compile(r"^/handle(/[^/]+/[^/]+?)/?$")


def ark_from_handle(handle: str | None, resolver_base: str = ARK_RESOLVER_BASE) -> str:
    """Build the ARK URL for a DataSpace handle path.

    Example:
        ``/handle/88435/dsp01bc386n34x``
        -> ``http://arks.princeton.edu/ark:/88435/dsp01bc386n34x``

    Raises:
        MalformedCandidateError: If *handle* is empty or not a handle path.
    """
    if not handle or not handle.strip():
        raise MalformedCandidateError("Search result row has no handle link")

    path = urlparse(handle.strip()).path
    m = _HANDLE_PATH_RE.match(path)
    if not m:
        raise MalformedCandidateError(f"Not a DataSpace handle path: {handle!r}")
    return f"{resolver_base}{m.group(1)}"
