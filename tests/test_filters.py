import pytest

from inboxd.filters import (
    JsShellPolicy,
    host_matches_skip_domain,
    make_url_content,
    matches_js_shell_policy,
    truncate_chars,
)
from inboxd.url_content import UrlContent

PATTERNS = [
    "doesn't work properly without javascript enabled",
    "please enable it to continue",
]
SHELL_TEXT = "This page doesn't work properly without JavaScript enabled"


def test_truncate_chars_within_limit():
    assert truncate_chars("hello", 10) == "hello"


def test_truncate_chars_at_limit():
    assert truncate_chars("hello", 5) == "hello"


def test_truncate_chars_exceeds_limit():
    assert truncate_chars("hello world", 5) == "hello"


def test_truncate_chars_unicode():
    assert truncate_chars("héllo", 3) == "hél"


def test_js_shell_match_respects_policy():
    assert matches_js_shell_policy(JsShellPolicy.TOOL_ONLY, PATTERNS, SHELL_TEXT) is True


def test_js_shell_match_disabled_when_policy_not_tool_only():
    assert matches_js_shell_policy(JsShellPolicy.ALLOW, PATTERNS, SHELL_TEXT) is False


def test_js_shell_match_with_drop_policy():
    assert (
        matches_js_shell_policy(
            JsShellPolicy.DROP, PATTERNS, "Please ENABLE it to continue."
        )
        is True
    )


def test_js_shell_no_match_for_ordinary_text():
    assert (
        matches_js_shell_policy(JsShellPolicy.TOOL_ONLY, PATTERNS, "A normal article.")
        is False
    )


def test_js_shell_blank_patterns_ignored():
    assert matches_js_shell_policy(JsShellPolicy.DROP, ["", "   "], "anything") is False


def test_js_shell_pattern_whitespace_trimmed():
    assert (
        matches_js_shell_policy(JsShellPolicy.DROP, ["  enable javascript  "], "Enable JavaScript now")
        is True
    )


@pytest.mark.parametrize(
    ("host", "domain", "expected"),
    [
        ("youtube.com", "youtube.com", True),
        ("m.youtube.com", "youtube.com", True),
        ("m.YouTube.com", ".youtube.com", True),
        ("notyoutube.com", "youtube.com", False),
        ("youtube.com.evil", "youtube.com", False),
    ],
)
def test_host_skip_domain_match_is_boundary_safe(host, domain, expected):
    assert host_matches_skip_domain(host, domain) is expected


def test_host_skip_domain_trailing_dot_on_host():
    assert host_matches_skip_domain("www.example.com.", "example.com") is True


def test_host_skip_domain_empty_values_never_match():
    assert host_matches_skip_domain("", "example.com") is False
    assert host_matches_skip_domain("example.com", "  ") is False


def test_make_url_content_truncates_and_keeps_metadata():
    content = UrlContent(
        url="https://nitter.example.com/user/status/1",
        text="hello world",
        page_title="Title",
        headings=["H1"],
    )
    result = make_url_content("https://example.com/page", content, 5)
    assert result.url == "https://example.com/page"
    assert result.text == "hello"
    assert result.page_title == "Title"
    assert result.headings == ["H1"]
    assert content.text == "hello world"