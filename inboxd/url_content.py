"""Text content fetched from a URL."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class UrlContent:
    """Readable text extracted from a fetched URL."""

    url: str
    text: str
    page_title: str | None = None
    headings: list[str] = field(default_factory=list)