from typing import Any

try:
    import jcs
except ImportError:
    raise ImportError("Please install jcs: pip install jcs")

from pathsign.core.types import URL


def canonical_json(obj: Any) -> bytes:
    """
    Produce deterministic UTF-8 bytes according to RFC 8785 (JSON Canonicalization Scheme).
    Returns bytes ready for signing.
    """
    return jcs.canonicalize(obj)


def canonical_url(url: URL, skip_query: bool = False) -> bytes:
    """
    Canonical form of a URL as fed to the signing key.
    With skip_query the query string does not participate, so the signed URL
    stays valid whatever query parameters are appended later.
    """
    d = url.to_dict()
    if skip_query:
        d["query"] = ""
    return canonical_json(d)


def canonical_url_str(url: URL, skip_query: bool = False) -> str:
    """Same as above, but returns string (mostly for debugging)."""
    return canonical_url(url, skip_query).decode("utf-8")
