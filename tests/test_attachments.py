import os
from pathlib import Path

import pytest

from inboxd.attachments import (
    AttachmentForbidden,
    AttachmentNotFound,
    normalize_relative_path,
    read_attachment,
    resolve_attachment,
)


def test_normalize_relative_path_accepts_safe_relative():
    assert normalize_relative_path("aa/bb/file.png") == Path("aa/bb/file.png")


def test_normalize_relative_path_rejects_parent_dir():
    assert normalize_relative_path("../etc/passwd") is None


def test_normalize_relative_path_rejects_absolute():
    assert normalize_relative_path("/tmp/file") is None


def test_normalize_relative_path_drops_current_dir():
    assert normalize_relative_path("./aa/./b.txt") == Path("aa/b.txt")
    assert normalize_relative_path(".") is None


def test_normalize_relative_path_rejects_empty():
    with pytest.raises(ValueError):
        normalize_relative_path("")


def test_resolve_existing_file(tmp_path):
    target = tmp_path / "aa" / "bb" / "file.png"
    target.parent.mkdir(parents=True)
    target.write_bytes(b"png")
    assert resolve_attachment(tmp_path, "aa/bb/file.png") == target.resolve()


def test_resolve_missing_file(tmp_path):
    with pytest.raises(AttachmentNotFound):
        resolve_attachment(tmp_path, "missing.txt")


def test_resolve_parent_escape_forbidden(tmp_path):
    with pytest.raises(AttachmentForbidden):
        resolve_attachment(tmp_path, "../outside.txt")


def test_resolve_symlink_escape_forbidden(tmp_path):
    base = tmp_path / "base"
    base.mkdir()
    outside = tmp_path / "outside.txt"
    outside.write_text("x")
    os.symlink(outside, base / "link.txt")
    with pytest.raises(AttachmentForbidden):
        resolve_attachment(base, "link.txt")


def test_read_attachment_returns_data_and_mime(tmp_path):
    (tmp_path / "pic.png").write_bytes(b"\x89PNG")
    data, mime = read_attachment(tmp_path, "pic.png")
    assert data == b"\x89PNG"
    assert mime == "image/png"


def test_read_attachment_unknown_extension_is_octet_stream(tmp_path):
    (tmp_path / "blob.zzqq").write_bytes(b"raw")
    data, mime = read_attachment(tmp_path, "blob.zzqq")
    assert data == b"raw"
    assert mime == "application/octet-stream"