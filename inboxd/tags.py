"""Extraction of user-supplied ``#hashtags`` from message text."""

from __future__ import annotations

import re

# Group 1: leading whitespace (kept). Group 2: the tag word (removed).
_HASHTAG_RE = re.compile(r"(^|\s)#([a-zA-Z][a-zA-Z0-9_-]*)")


def extract_user_tags(text: str) -> tuple[str, list[str]]:
    """Remove ``#tag`` tokens from ``text``.

    Returns the cleaned text (whitespace collapsed per line, newlines kept)
    and the lowercased, deduplicated tags in first-occurrence order. Only
    tokens at the start or after whitespace count, so URL fragments stay.
    """
    tags: list[str] = []

    def _replace(match: re.Match[str]) -> str:
        tag = match.group(2).lower()
        if tag not in tags:
            tags.append(tag)
        return match.group(1)

    replaced = _HASHTAG_RE.sub(_replace, text)
    cleaned = "\n".join(" ".join(line.split()) for line in replaced.split("\n")).strip()
    return cleaned, tags