"""Finding HTTP(S) URLs in free text."""

from __future__ import annotations

import logging
import re
from urllib.parse import quote, urlsplit

logger = logging.getLogger(__name__)

_URL_RE = re.compile(r"""https?://[^\s<>"'\]\[)]+""")
_TRAILING = ".,)>;'\""
_FORBIDDEN_HOST_CHARS = set("#%/:<>?@[\\]^| ")
_DEFAULT_PORTS = {"http": 80, "https": 443}
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_QUERY_SAFE = "/%:@!$&'()*+,;=-._~?"


def _raw_matches(text: str):
    for match in _URL_RE.finditer(text):
        yield match.group(0).rstrip(_TRAILING)


def extract_http_url_strings(text: str) -> list[str]:
    """Return URL strings found in ``text``, unvalidated, deduplicated in order."""
    return list(dict.fromkeys(_raw_matches(text)))


def _normalize_url(raw: str) -> str | None:
    """Validate an http(s) URL and return it in canonical form, or ``None``."""
    try:
        parts = urlsplit(raw)
        port = parts.port
    except ValueError:
        return None
    scheme = parts.scheme.lower()
    if scheme not in _DEFAULT_PORTS:
        return None
    host = parts.hostname
    if not host or _FORBIDDEN_HOST_CHARS & set(host):
        return None
    try:
        host = host.encode("idna").decode("ascii").lower()
    except UnicodeError:
        return None

    netloc = host
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        netloc = f"{host}:{port}"
    if parts.username is not None:
        userinfo = quote(parts.username, safe="%")
        if parts.password is not None:
            userinfo += ":" + quote(parts.password, safe="%")
        netloc = f"{userinfo}@{netloc}"

    path = quote(parts.path, safe=_PATH_SAFE) or "/"
    result = f"{scheme}://{netloc}{path}"
    if "?" in raw:
        result += "?" + quote(parts.query, safe=_QUERY_SAFE)
    if "#" in raw:
        result += "#" + quote(parts.fragment, safe=_QUERY_SAFE + "#")
    return result


def extract_urls(text: str) -> list[str]:
    """Return validated, normalized URLs in ``text``, deduplicated by raw string."""
    urls = [
        url
        for url in (_normalize_url(raw) for raw in dict.fromkeys(_raw_matches(text)))
        if url is not None
    ]
    logger.debug("URLs extracted from message text: count=%d", len(urls))
    return urls