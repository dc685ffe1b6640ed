"""Safe lookup of files inside the attachments directory."""

from __future__ import annotations

import mimetypes
from pathlib import Path, PurePosixPath


class AttachmentForbidden(Exception):
    """The requested path would leave the attachments directory."""


class AttachmentNotFound(Exception):
    """The requested attachment does not exist."""


def normalize_relative_path(path: str) -> Path | None:
    """Return ``path`` as a clean relative path, or ``None`` if it is unsafe.

    Absolute paths and ``..`` components are rejected; ``.`` is dropped.
    """
    if not path:
        raise ValueError("path must not be empty")
    pure = PurePosixPath(path)
    if pure.is_absolute() or ".." in pure.parts:
        return None
    parts = [part for part in pure.parts if part != "."]
    if not parts:
        return None
    return Path(*parts)


def resolve_attachment(base: str | Path, path: str) -> Path:
    """Return the canonical path of attachment ``path`` under ``base``."""
    rel = normalize_relative_path(path)
    if rel is None:
        raise AttachmentForbidden(path)
    base = Path(base)
    try:
        base_canon = base.resolve(strict=True)
    except OSError:
        base_canon = base
    try:
        file_canon = (base / rel).resolve(strict=True)
    except FileNotFoundError:
        raise AttachmentNotFound(path) from None
    if not file_canon.is_relative_to(base_canon):
        raise AttachmentForbidden(path)
    return file_canon


def read_attachment(base: str | Path, path: str) -> tuple[bytes, str]:
    """Return the bytes and guessed MIME type of attachment ``path``."""
    file_path = resolve_attachment(base, path)
    try:
        data = file_path.read_bytes()
    except FileNotFoundError:
        raise AttachmentNotFound(path) from None
    mime = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
    return data, mime