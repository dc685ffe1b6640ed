"""Small decisions the pipeline makes about fetched URLs and their content."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from .url_content import UrlContent

_ASCII_UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_ASCII_LOWER_TABLE = str.maketrans(_ASCII_UPPER, _ASCII_UPPER.lower())


class JsShellPolicy(str, Enum):
    """What to do with pages that are only a JavaScript shell."""

    ALLOW = "allow"
    TOOL_ONLY = "tool_only"
    DROP = "drop"


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER_TABLE)


def host_matches_skip_domain(host: str, skip_domain: str) -> bool:
    """Return True if ``host`` is ``skip_domain`` or one of its subdomains.

    Matching is case-insensitive, ignores leading/trailing dots on the
    domain and a trailing dot on the host, and respects label boundaries.
    """
    host = _ascii_lower(host.strip().rstrip("."))
    domain = _ascii_lower(skip_domain.strip().lstrip(".").rstrip("."))

    if not host or not domain:
        return False
    if host == domain:
        return True
    return host.endswith(domain) and host[: -len(domain)].endswith(".")


def truncate_chars(text: str, max_chars: int) -> str:
    """Return at most the first ``max_chars`` characters of ``text``."""
    return text[:max_chars]


def matches_js_shell_policy(
    policy: JsShellPolicy, patterns: Iterable[str], text: str
) -> bool:
    """Return True if the policy is active and ``text`` contains any pattern.

    Only the ``TOOL_ONLY`` and ``DROP`` policies filter content; patterns are
    compared case-insensitively and blank patterns are ignored.
    """
    if policy not in (JsShellPolicy.TOOL_ONLY, JsShellPolicy.DROP):
        return False

    haystack = _ascii_lower(text)
    normalized = (_ascii_lower(p.strip()) for p in patterns)
    return any(p in haystack for p in normalized if p)


def make_url_content(url: str, content: UrlContent, max_chars: int) -> UrlContent:
    """Build the content record for ``url`` with its text truncated."""
    return UrlContent(
        url=str(url),
        text=truncate_chars(content.text, max_chars),
        page_title=content.page_title,
        headings=list(content.headings),
    )