from inboxd.tags import extract_user_tags


def test_no_tags_unchanged():
    text, tags = extract_user_tags("hello world https://example.com#anchor")
    assert text == "hello world https://example.com#anchor"
    assert tags == []


def test_single_tag_extracted():
    text, tags = extract_user_tags("check this out #rust")
    assert text == "check this out"
    assert tags == ["rust"]


def test_multiple_tags_extracted():
    text, tags = extract_user_tags("some idea #rust #async #tokio")
    assert text == "some idea"
    assert tags == ["rust", "async", "tokio"]


def test_tag_at_start_of_string():
    text, tags = extract_user_tags("#rust is great")
    assert text == "is great"
    assert tags == ["rust"]


def test_duplicate_tags_deduplicated():
    text, tags = extract_user_tags("topic #rust and more #rust")
    assert text == "topic and more"
    assert tags == ["rust"]


def test_tags_lowercased():
    text, tags = extract_user_tags("hello #Rust #ASYNC")
    assert text == "hello"
    assert tags == ["rust", "async"]


def test_url_fragment_not_matched():
    text, tags = extract_user_tags("see https://example.com#section for details")
    assert text == "see https://example.com#section for details"
    assert tags == []


def test_numeric_only_hashtag_not_matched():
    text, tags = extract_user_tags("issue #123 is open")
    assert text == "issue #123 is open"
    assert tags == []


def test_newlines_preserved():
    text, tags = extract_user_tags("first line #idea\nsecond   line")
    assert text == "first line\nsecond line"
    assert tags == ["idea"]