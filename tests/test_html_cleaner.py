from fitmark.html_cleaner import clean, extract_main_content, extract_text, parse_document


def test_parse_document_wraps_bare_fragment():
    soup, body = parse_document("<p>Bare fragment</p>")
    assert body is not None
    assert body.p.get_text() == "Bare fragment"


def test_clean_drops_scripts_hidden_and_comments():
    html = """<html><body><p>Keep</p><script>bad()</script><div style="display: none">Hidden</div><span hidden>Gone</span><div aria-hidden="true">Aria</div><!-- note --></body></html>"""
    assert clean(html) == "<p>Keep</p>"
    assert clean("  ") == ""


def test_extract_text_one_line_per_block():
    html = "<body><p> Line one </p>\n<p>Line two</p></body>"
    assert extract_text(html) == "Line one\nLine two"


def test_extract_main_content_prefers_content_region():
    html = "<body><nav>Menu</nav><div class='content'><p>Body</p></div></body>"
    assert extract_main_content(html) == '<div class="content"><p>Body</p></div>'


def test_extract_main_content_falls_back_to_body_without_chrome():
    html = "<body><nav>Menu</nav><p>Text</p><footer>F</footer></body>"
    assert extract_main_content(html) == "<p>Text</p>"
