"""URL normalization helpers for link canonicalization."""
import logging
import re
from typing import Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

logger = logging.getLogger(__name__)

_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def remove_dot_segments(path: str) -> str:
    """Collapse `.` and `..` segments of an absolute path (RFC 3986, 5.2.4)."""
    if not path:
        return path
    segments = path.split("/")
    resolved: list[str] = []
    for segment in segments:
        if segment == ".":
            continue
        if segment == "..":
            # resolved[0] is the empty segment before the leading slash
            if len(resolved) > 1:
                resolved.pop()
            continue
        resolved.append(segment)
    if segments[-1] in (".", ".."):
        resolved.append("")
    return "/".join(resolved)


def _canonical_netloc(netloc: str, host: str, port: Optional[int]) -> str:
    canonical = f"[{host}]" if ":" in host else host
    if port is not None:
        canonical = f"{canonical}:{port}"
    userinfo, sep, _ = netloc.rpartition("@")
    if sep:
        canonical = f"{userinfo}@{canonical}"
    return canonical


def normalize_link(base_url: str, raw_href: Optional[str]) -> Optional[str]:
    """Resolve `raw_href` against `base_url` into a canonical absolute URL.

    Literal spaces are escaped before resolution and the fragment is always
    dropped. Scheme and host are lowercased, dot segments are removed and an
    empty path becomes `/`. Path case and the query string are kept as-is.

    Returns None when the href cannot be turned into a hierarchical URL:
    unparseable input, malformed percent escapes, or opaque references such
    as `mailto:` and `javascript:` that carry no network location.
    """
    if raw_href is None:
        return None
    href = raw_href.strip().replace(" ", "%20")
    if _MALFORMED_ESCAPE.search(href):
        logger.debug("Skipping (malformed escape) %s", raw_href)
        return None
    try:
        parts = urlsplit(urljoin(base_url, href))
        host = parts.hostname
        port = parts.port
    except ValueError as e:
        logger.debug("Error normalizing href %s: %s", raw_href, e)
        return None

    if not parts.netloc or not host:
        logger.debug("Skipping (no network location) %s", raw_href)
        return None

    path = remove_dot_segments(parts.path) or "/"
    return urlunsplit((
        parts.scheme.lower(),
        _canonical_netloc(parts.netloc, host, port),
        path,
        parts.query,
        "",
    ))
