"""Fetching pages and files referenced by URLs in messages."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlsplit, urlunsplit

import httpx

from .content_extractor import extract_text
from .preprocess import MediaKind
from .url_content import UrlContent

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}
_TWITTER_HOSTS = ("twitter.com", "x.com")


@dataclass
class UrlFetchConfig:
    """Settings for fetching URL content."""

    enabled: bool = True
    user_agent: str = "inbox/0.1"
    timeout_secs: int = 30
    max_redirects: int = 5
    max_body_bytes: int = 5 * 1024 * 1024
    skip_domains: list[str] = field(default_factory=list)
    nitter_base_url: str | None = None


@dataclass
class DownloadedFile:
    """A file downloaded from a URL and saved as an attachment."""

    original_name: str
    saved_path: Path
    mime_type: str | None
    media_kind: MediaKind


def _media_kind_from_mime(mime: str) -> MediaKind:
    major = mime.split("/", 1)[0].strip().lower()
    if major == "image":
        return MediaKind.IMAGE
    if major == "audio":
        return MediaKind.AUDIO
    if major == "video":
        return MediaKind.VIDEO
    return MediaKind.DOCUMENT


class UrlFetcher:
    """HTTP client for pages and files, with an IPv4-only fallback."""

    def __init__(self, cfg: UrlFetchConfig) -> None:
        if not cfg.user_agent.strip():
            raise ValueError("user_agent must not be blank")
        if cfg.timeout_secs <= 0:
            raise ValueError("timeout_secs must be positive")
        if cfg.max_body_bytes <= 0:
            raise ValueError("max_body_bytes must be positive")
        self.cfg = cfg
        headers = {**_DEFAULT_HEADERS, "User-Agent": cfg.user_agent}
        options = {
            "headers": headers,
            "timeout": float(cfg.timeout_secs),
            "follow_redirects": True,
            "max_redirects": cfg.max_redirects,
        }
        self._client = httpx.AsyncClient(**options)
        self._client_v4 = httpx.AsyncClient(
            transport=httpx.AsyncHTTPTransport(local_address="0.0.0.0"), **options
        )

    async def __aenter__(self) -> UrlFetcher:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP clients."""
        await self._client.aclose()
        await self._client_v4.aclose()

    async def _get_with_fallback(self, url: str) -> httpx.Response | None:
        try:
            return await self._client.get(url)
        except httpx.HTTPError as exc:
            logger.debug("Dual-stack GET failed for %s (%s), retrying via IPv4", url, exc)
        try:
            return await self._client_v4.get(url)
        except httpx.HTTPError as exc:
            logger.warning("Page fetch failed on both dual-stack and IPv4 for %s: %s", url, exc)
            return None

    async def head(self, url: str) -> str | None:
        """Return the Content-Type of ``url`` from a HEAD request, if any."""
        try:
            response = await self._client.head(url)
        except httpx.HTTPError:
            try:
                response = await self._client_v4.head(url)
            except httpx.HTTPError:
                return None
        return response.headers.get("content-type")

    async def fetch_page(self, url: str) -> UrlContent | None:
        """Fetch a page and extract its readable text."""
        effective = rewrite_twitter_url(url, self.cfg.nitter_base_url)
        if effective is not None:
            logger.info("Rewriting Twitter/X URL %s to Nitter %s", url, effective)
        else:
            effective = url

        response = await self._get_with_fallback(effective)
        if response is None:
            return None
        if not response.is_success:
            logger.warning("Page fetch non-200 (%s) for %s", response.status_code, url)
            return None

        body = response.content[: self.cfg.max_body_bytes]
        page = extract_text(body.decode("utf-8", errors="replace"))
        logger.debug(
            "Page content extracted from %s: text_len=%d heading_count=%d",
            url,
            len(page.text),
            len(page.headings),
        )
        return UrlContent(
            url=url, text=page.text, page_title=page.title, headings=page.headings
        )

    async def download_file(
        self, url: str, msg_id: uuid.UUID, attachments_dir: str | Path
    ) -> DownloadedFile | None:
        """Download ``url`` into the attachment directory of ``msg_id``."""
        response = await self._get_with_fallback(url)
        if response is None:
            return None
        if not response.is_success:
            logger.warning("File download non-200 (%s) for %s", response.status_code, url)
            return None

        content_type = response.headers.get("content-type")
        mime_type = content_type.split(";", 1)[0].strip() if content_type is not None else None

        filename = filename_from_url(url)
        save_path = attachment_save_path(attachments_dir, msg_id, filename)
        data = response.content
        try:
            await asyncio.to_thread(_write_file, save_path, data)
        except OSError as exc:
            logger.warning("Failed to write attachment %s: %s", save_path, exc)
            return None

        logger.info("File attachment downloaded from %s: %s (%d bytes)", url, filename, len(data))
        media_kind = (
            _media_kind_from_mime(mime_type) if mime_type is not None else MediaKind.DOCUMENT
        )
        return DownloadedFile(
            original_name=filename,
            saved_path=save_path,
            mime_type=mime_type,
            media_kind=media_kind,
        )


def _write_file(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


def rewrite_twitter_url(url: str, nitter_base_url: str | None) -> str | None:
    """Point a Twitter/X URL at a Nitter instance.

    Returns ``None`` without a Nitter base URL or for non-Twitter/X hosts.
    """
    if nitter_base_url is None:
        return None
    parts = urlsplit(url)
    host = parts.hostname
    if not host:
        return None
    if host not in _TWITTER_HOSTS and not any(host.endswith("." + h) for h in _TWITTER_HOSTS):
        return None
    nitter = urlsplit(nitter_base_url)
    if not nitter.scheme or not nitter.netloc:
        return None
    return urlunsplit(
        (nitter.scheme, nitter.netloc, parts.path or "/", parts.query, parts.fragment)
    )


def filename_from_url(url: str) -> str:
    """Derive a safe filename from the last path segment, or ``download``."""
    last = urlsplit(url).path.rsplit("/", 1)[-1]
    return sanitize_filename(last) if last else "download"


def sanitize_filename(name: str) -> str:
    """Replace every character except alphanumerics and ``.-_`` by ``_``."""
    return "".join(c if c.isalnum() or c in ".-_" else "_" for c in name)


def attachment_save_path(base: str | Path, msg_id: uuid.UUID, filename: str) -> Path:
    """Return ``base/id[:2]/id[2:]/filename`` (org-attach id layout)."""
    if not filename:
        raise ValueError("filename must not be empty")
    id_str = str(msg_id)
    return Path(base) / id_str[:2] / id_str[2:] / filename