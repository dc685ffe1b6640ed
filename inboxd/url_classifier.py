"""Deciding whether a URL points at a page or at a downloadable file."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal
from urllib.parse import urlsplit

from .url_fetcher import UrlFetcher

logger = logging.getLogger(__name__)

_FILE_MIME_BY_EXT = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "zip": "application/zip",
    "tar": "application/x-tar",
    "gz": "application/gzip",
    "bz2": "application/x-bzip2",
    "7z": "application/x-7z-compressed",
    "rar": "application/vnd.rar",
    "mp3": "audio/mpeg",
    "mp4": "video/mp4",
    "mkv": "video/x-matroska",
    "avi": "video/x-msvideo",
    "mov": "video/quicktime",
    "webm": "video/webm",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "ogg": "audio/ogg",
    "flac": "audio/flac",
    "wav": "audio/wav",
    "opus": "audio/opus",
}
_PAGE_EXTS = frozenset({"html", "htm", "php", "asp", "aspx"})
_MIME_RE = re.compile(r"^[A-Za-z0-9!#$&^_.+-]+/[A-Za-z0-9!#$&^_.+-]+$")


@dataclass(frozen=True)
class UrlKind:
    """What a URL points at.

    ``page`` is HTML to scrape, ``file`` a binary to download (with ``mime``),
    ``unknown`` means classification failed and a page fetch is the fallback.
    """

    category: Literal["page", "file", "unknown"]
    mime: str | None = None


def classify_by_extension(url: str) -> UrlKind | None:
    """Classify by the extension of the URL path, or ``None`` if it says nothing."""
    ext = urlsplit(url).path.rsplit(".", 1)[-1].lower()
    if ext in _FILE_MIME_BY_EXT:
        return UrlKind("file", _FILE_MIME_BY_EXT[ext])
    if ext in _PAGE_EXTS:
        return UrlKind("page")
    return None


def classify_by_content_type(content_type: str) -> UrlKind:
    """Classify by a Content-Type value; parameters are ignored."""
    base = content_type.split(";", 1)[0].strip().lower()
    if not _MIME_RE.match(base):
        return UrlKind("unknown")
    if base in ("text/html", "text/plain"):
        return UrlKind("page")
    return UrlKind("file", base)


async def classify_url(url: str, fetcher: UrlFetcher) -> UrlKind:
    """Classify ``url`` by extension first, then by a HEAD request."""
    kind = classify_by_extension(url)
    if kind is not None:
        logger.debug("URL %s classified by path extension: %s", url, kind)
        return kind

    content_type = await fetcher.head(url)
    if content_type is None:
        logger.debug("HEAD request failed for %s, treating URL as unknown", url)
        return UrlKind("unknown")
    kind = classify_by_content_type(content_type)
    logger.debug("URL %s classified via HEAD Content-Type %s: %s", url, content_type, kind)
    return kind