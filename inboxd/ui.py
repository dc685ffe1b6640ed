"""Parsing the org output file into nodes for the web UI."""

from __future__ import annotations

import mimetypes
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from .url_fetcher import attachment_save_path

_ASCII_WS = " \t\n\r\x0c"
_EXTRA_MIME = {
    "ogg": "audio/ogg",
    "oga": "audio/ogg",
    "opus": "audio/opus",
    "flac": "audio/flac",
    "m4a": "audio/mp4",
    "wav": "audio/wav",
    "webm": "video/webm",
    "mkv": "video/x-matroska",
    "webp": "image/webp",
}


@dataclass
class UiAttachment:
    """HTML snippet displaying one attachment."""

    html: str


@dataclass
class UiNode:
    """One org node as shown in the UI."""

    title: str
    created: str = ""
    source: str = ""
    tags: list[str] = field(default_factory=list)
    summary: str = ""
    excerpt: str | None = None
    attachments: list[UiAttachment] = field(default_factory=list)
    search_text: str = ""


def _lines(content: str) -> list[str]:
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_org_nodes(content: str, attachments_dir: str | Path) -> list[UiNode]:
    """Split org text into top-level nodes and parse each one."""
    attachments_dir = Path(attachments_dir)
    nodes: list[UiNode] = []
    current: list[str] = []
    for line in _lines(content):
        if line.startswith("* ") and current:
            nodes.append(_parse_node(current, attachments_dir))
            current = []
        current.append(line)
    if current:
        nodes.append(_parse_node(current, attachments_dir))
    return nodes


def _debug_list(items: list[str]) -> str:
    quoted = ('"' + t.replace("\\", "\\\\").replace('"', '\\"') + '"' for t in items)
    return "[" + ", ".join(quoted) + "]"


def _parse_node(lines: list[str], attachments_dir: Path) -> UiNode:
    header = lines[0]
    title, tags = _parse_headline(header[2:] if header.startswith("* ") else header)

    props: dict[str, str] = {}
    in_props = False
    body: list[str] = []
    for line in lines[1:]:
        marker = line.strip()
        if marker == ":PROPERTIES:":
            in_props = True
        elif marker == ":END:":
            in_props = False
        elif in_props:
            prop = _parse_property(line)
            if prop is not None:
                props[prop[0]] = prop[1]
        else:
            body.append(line)

    created = props.get("CREATED", "")
    source = props.get("SOURCE", "")
    node_id = props.get("ID", "")
    summary, excerpt, attachments = _parse_body(body, attachments_dir, node_id)
    return UiNode(
        title=title,
        created=created,
        source=source,
        tags=tags,
        summary=summary,
        excerpt=excerpt,
        attachments=attachments,
        search_text=f"{title} {source} {_debug_list(tags)} {summary}",
    )


def _parse_headline(header: str) -> tuple[str, list[str]]:
    idx = header.rfind(" :")
    if idx != -1:
        possible = header[idx + 2:]
        if possible.endswith(":") and " " not in possible[:-1]:
            tags = [t for t in possible[:-1].split(":") if t]
            return header[:idx].strip(), tags
    return header.strip(), []


def _parse_property(line: str) -> tuple[str, str] | None:
    trimmed = line.strip()
    if not trimmed.startswith(":"):
        return None
    key, sep, value = trimmed[1:].partition(":")
    if not sep:
        return None
    return key.strip(), value.strip()


def _is_directive(line: str, directive: str) -> bool:
    stripped = line.lstrip(_ASCII_WS)
    return stripped.isascii() and stripped.lower() == directive


def _parse_body(
    lines: list[str], attachments_dir: Path, node_id: str
) -> tuple[str, str | None, list[UiAttachment]]:
    summary_lines: list[str] = []
    quote_lines: list[str] = []
    attachments: list[UiAttachment] = []
    in_quote = False
    for line in lines:
        if _is_directive(line, "#+begin_quote"):
            in_quote = True
        elif _is_directive(line, "#+end_quote"):
            in_quote = False
        elif in_quote:
            quote_lines.append(line)
        else:
            attachment = _parse_org_link(line, attachments_dir, node_id)
            if attachment is not None:
                attachments.append(attachment)
            else:
                summary_lines.append(line)

    summary = "\n".join(summary_lines).strip()
    excerpt = "\n".join(quote_lines).strip() if quote_lines else None
    return summary, excerpt, attachments


def _split_link(rest: str) -> tuple[str, str] | None:
    target, sep, tail = rest.partition("][")
    if not sep or not tail.endswith("]]"):
        return None
    return target, tail[:-2]


def _parse_org_link(line: str, attachments_dir: Path, node_id: str) -> UiAttachment | None:
    stripped = line.strip()

    if stripped.startswith("[[attachment:"):
        link = _split_link(stripped[len("[[attachment:"):])
        if link is None:
            return None
        filename, name = link
        if not filename or ".." in filename or "/" in filename:
            return None
        try:
            msg_id = uuid.UUID(node_id)
        except ValueError:
            return None
        full_path = attachment_save_path(attachments_dir, msg_id, filename)
        rel = full_path.relative_to(attachments_dir).as_posix()
        return attachment_html(rel, name, filename)

    if not stripped.startswith("[[file:"):
        return None
    link = _split_link(stripped[len("[[file:"):])
    if link is None:
        return None
    path_part, name = link
    file_path = Path(path_part)
    try:
        rel = file_path.relative_to(attachments_dir).as_posix()
    except ValueError:
        rel = file_path.name
    if ".." in rel:
        return None
    return attachment_html(rel, name, path_part)


def _guess_mime(path_hint: str) -> str:
    ext = path_hint.rsplit(".", 1)[-1].lower() if "." in path_hint else ""
    if ext in _EXTRA_MIME:
        return _EXTRA_MIME[ext]
    return mimetypes.guess_type(path_hint)[0] or "application/octet-stream"


def attachment_html(rel: str, name: str, path_hint: str) -> UiAttachment:
    """Build the HTML that shows an attachment, chosen by its MIME type."""
    url = f"attachments/{rel}"
    mime = _guess_mime(path_hint)
    if mime.startswith("image/"):
        html = (
            f'<a href="{url}" target="_blank">'
            f'<img src="{url}" alt="{name}" loading="lazy" /></a>'
        )
    elif mime.startswith("audio/"):
        html = f'<audio controls src="{url}"></audio>'
    elif mime.startswith("video/"):
        html = f'<video controls src="{url}" style="max-width:100%"></video>'
    else:
        html = f'<a href="{url}" class="doc-link">{name}</a>'
    return UiAttachment(html=html)