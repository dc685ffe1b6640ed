# inboxd

`inboxd` holds the pieces an inbox daemon needs to turn captured notes,
links and files into org-mode entries: it pulls `#hashtags` and URLs out of
free text, fetches and strips web pages, downloads linked files into an
org-attach style directory, applies configurable pre-processing rules,
tracks each message's progress through the pipeline, and parses the
written org file back into nodes for a web view.

It needs Python 3.10 or newer.

## Modules

| Module | What it does |
| --- | --- |
| `inboxd.tags` | `extract_user_tags(text)` removes `#tag` tokens and returns the cleaned text with a lowercased, de-duplicated tag list. URL fragments such as `https://example.com#anchor` and numeric tokens such as `#123` are left alone. |
| `inboxd.url_extractor` | `extract_urls(text)` and `extract_http_url_strings(text)` find `http(s)://` links, drop trailing punctuation and de-duplicate while keeping order. |
| `inboxd.content_extractor` | `extract_text(html)` returns an `ExtractedPage` with the page title, the `h1`/`h2` headings and readable body text. |
| `inboxd.url_content` | `UrlContent`, the text, title and headings taken from one fetched URL. |
| `inboxd.preprocess` | `run_preprocessing(text, media_kinds, rules)` evaluates every `PreprocessingRule` in order and gathers the results in `ProcessingHints`. Rules use `RuleCondition`, `RuleAction` and `MediaKind`. |
| `inboxd.filters` | Skip-domain matching (`host_matches_skip_domain`), character-safe truncation (`truncate_chars`), detection of JavaScript-only shell pages (`matches_js_shell_policy` with `JsShellPolicy`) and `make_url_content`. |
| `inboxd.url_fetcher` | `UrlFetcher`, an async HTTP client built from `UrlFetchConfig`, with `head`, `fetch_page`, `download_file` and `aclose`. Twitter/X links can be rewritten to a Nitter instance with `rewrite_twitter_url`. `attachment_save_path`, `filename_from_url` and `sanitize_filename` decide where downloads go. |
| `inboxd.url_classifier` | `classify_url(url, fetcher)` sorts a link into a page, a file or unknown (`UrlKind`), using the path extension first and a `HEAD` request second. |
| `inboxd.processing_status` | `ProcessingTracker` records each message's `ProcessingStage` and `snapshot()` returns the entries newest first, dropping finished ones after five minutes. `NoopNotifier` is a notifier that ignores updates. |
| `inboxd.auth` | Session cookies for the admin UI: `extract_session_token`, `is_authenticated`, `generate_session_token`, `new_session_store`, and Argon2id checking with `verify_password`. |
| `inboxd.attachments` | Safe serving of stored files: `normalize_relative_path`, `resolve_attachment` and `read_attachment` refuse paths that leave the attachments directory (`AttachmentForbidden`) and report missing files (`AttachmentNotFound`). |
| `inboxd.ui` | `parse_org_nodes(content, attachments_dir)` reads an org file back into `UiNode` objects with titles, tags, summaries, quotes and `UiAttachment` HTML snippets. |

## Examples

Hashtags and links:

```python
from inboxd.tags import extract_user_tags
from inboxd.url_extractor import extract_http_url_strings

text, tags = extract_user_tags("some idea #rust #async #tokio")
# text == "some idea", tags == ["rust", "async", "tokio"]

extract_http_url_strings("See https://example.com/a), and https://b.example/.")
# ["https://example.com/a", "https://b.example/"]
```

Page text:

```python
from inboxd.content_extractor import extract_text

page = extract_text("<html><body><h1>Main Title</h1><p>Some text.</p></body></html>")
page.headings  # ["Main Title"]
```

Where downloaded files are stored:

```python
import uuid
from pathlib import Path
from inboxd.url_fetcher import attachment_save_path

msg_id = uuid.UUID("550e8400-e29b-41d4-a716-446655440000")
attachment_save_path(Path("/data/attachments"), msg_id, "report.pdf")
# /data/attachments/55/0e8400-e29b-41d4-a716-446655440000/report.pdf
```

Fetching a page (inside an event loop):

```python
from inboxd.url_fetcher import UrlFetcher, UrlFetchConfig

fetcher = UrlFetcher(UrlFetchConfig())
try:
    content = await fetcher.fetch_page("https://example.com/article")
finally:
    await fetcher.aclose()
```

## Tests

The test suite uses pytest, pytest-asyncio and respx, available through the
`test` extra.