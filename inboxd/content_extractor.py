"""Reduce an HTML document to its title, headings and readable text."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

_TEXT_SELECTOR = "p, h1, h2, h3, h4, h5, h6, li, td, th, pre, blockquote"


@dataclass
class ExtractedPage:
    """The parts of an HTML page used downstream."""

    title: str | None
    headings: list[str] = field(default_factory=list)
    text: str = ""


def extract_text(html: str) -> ExtractedPage:
    """Parse ``html`` and return its title, h1/h2 headings and body text."""
    soup = BeautifulSoup(html, "html.parser")
    page = ExtractedPage(
        title=_extract_title(soup),
        headings=_extract_headings(soup),
        text=_extract_body_text(soup),
    )
    logger.debug(
        "HTML text extracted: text_len=%d heading_count=%d has_title=%s",
        len(page.text),
        len(page.headings),
        page.title is not None,
    )
    return page


def _extract_title(soup: BeautifulSoup) -> str | None:
    element = soup.select_one("title")
    if element is None:
        return None
    title = element.get_text().strip()
    return title or None


def _extract_headings(soup: BeautifulSoup) -> list[str]:
    headings = (el.get_text().strip() for el in soup.select("h1, h2"))
    return [h for h in headings if h]


def _collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def _extract_body_text(soup: BeautifulSoup) -> str:
    parts = (el.get_text().strip() for el in soup.select(_TEXT_SELECTOR))
    parts = [p for p in parts if p]
    if parts:
        return "\n\n".join(parts)

    body = soup.select_one("body")
    container = body if body is not None else soup
    return _collapse_whitespace(" ".join(container.strings))