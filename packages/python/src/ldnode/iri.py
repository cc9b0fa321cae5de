"""IRI normalization and alias-aware property key resolution."""

from __future__ import annotations

from typing import Callable, Mapping, Optional
from urllib.parse import urlsplit, urlunsplit

IriNormalizer = Callable[[str], str]


def normalize_iri(iri: str) -> str:
    """Return the canonical form of an absolute IRI.

    The scheme and host are lowercased and an authority with an empty
    path gets the path ``/``.  Keywords (``@id``, ``@type``, ...) and
    strings without a scheme are returned unchanged.
    """
    if not isinstance(iri, str):
        raise TypeError(f"IRI must be a string, got: {type(iri).__name__}")
    if iri.startswith("@"):
        return iri
    parts = urlsplit(iri)
    if not parts.scheme:
        return iri

    netloc = parts.netloc
    if netloc:
        userinfo, sep, hostport = netloc.rpartition("@")
        netloc = userinfo + sep + hostport.lower()
    path = parts.path or ("/" if parts.netloc else "")

    result = urlunsplit(
        (parts.scheme.lower(), netloc, path, parts.query, parts.fragment)
    )
    # urlunsplit drops empty query/fragment delimiters; vocabularies
    # ending in "#" or "?" must keep them.
    if iri.endswith("#") and not result.endswith("#"):
        result += "#"
    elif iri.endswith("?") and not result.endswith("?"):
        result += "?"
    return result


def normalize_key(
    key: str,
    aliases: Optional[Mapping[str, str]] = None,
    normalizer: IriNormalizer = normalize_iri,
) -> str:
    """Resolve a property key to its normalized absolute IRI.

    *key* is looked up in *aliases* first; unknown keys are treated as
    literal IRIs.
    """
    if aliases:
        key = aliases.get(key, key)
    return normalizer(key)
