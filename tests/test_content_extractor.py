from inboxd.content_extractor import ExtractedPage, extract_text


def test_extracts_paragraphs():
    html = """<html><head><title>Test</title></head>
        <body><p>Hello world.</p><p>Second paragraph.</p></body></html>"""
    page = extract_text(html)
    assert page.title == "Test"
    assert "Hello world." in page.text
    assert "Second paragraph." in page.text


def test_paragraphs_joined_with_blank_line():
    page = extract_text("<html><body><p>One</p><p>Two</p></body></html>")
    assert page.text == "One\n\nTwo"


def test_handles_empty_html():
    page = extract_text("<html><body></body></html>")
    assert page.title is None
    assert page.headings == []
    assert page.text == ""


def test_extracts_h1_h2_headings():
    html = """<html><body>
            <h1>Main Title</h1>
            <h2>Section One</h2>
            <p>Some text.</p>
            <h2>Section Two</h2>
        </body></html>"""
    page = extract_text(html)
    assert page.headings == ["Main Title", "Section One", "Section Two"]


def test_skips_h3_in_headings():
    html = """<html><body>
            <h1>Top</h1>
            <h3>Sub</h3>
        </body></html>"""
    page = extract_text(html)
    assert page.headings == ["Top"]


def test_fallback_collapses_body_text():
    page = extract_text("<html><body>  some \n  loose   <span>text</span> </body></html>")
    assert page.text == "some loose text"


def test_blank_title_is_none():
    page = extract_text("<html><head><title>   </title></head><body></body></html>")
    assert isinstance(page, ExtractedPage)
    assert page.title is None