import pytest

from fitmark.models import ContentMetrics
from fitmark.options import PruningFilterOptions, ThresholdType
from fitmark.pruning_filter import PruningContentFilter, adjusted_threshold, class_id_weight, composite_score

LONG_PARAGRAPH = (
    "Long relevant paragraph about topic X repeated. Topic X matters because it explains "
    "how the system behaves under load and why careful measurement keeps results honest."
)


def test_nav_removed_article_kept():
    html = f"""<html><body><nav>skip</nav><article><h1>Title</h1><p>{LONG_PARAGRAPH}</p></article></body></html>"""
    blocks = PruningContentFilter().filter_content(html)
    assert blocks == ["<h1>Title</h1>", f"<p>{LONG_PARAGRAPH}</p>"]
    assert not any("skip" in b for b in blocks)


def test_min_word_threshold_removes_short_blocks():
    html = "<div><p>Short text</p><p>This paragraph has plenty of words in it for sure.</p></div>"
    blocks = PruningContentFilter().filter_content(html, min_word_threshold=5)
    assert blocks == ["<p>This paragraph has plenty of words in it for sure.</p>"]


def test_min_word_threshold_overrides_strong_metrics():
    metrics = ContentMetrics(
        tag_name="article", text_length=13, tag_length=15, text="one two three", class_name="main-content"
    )
    assert composite_score(metrics, min_word_threshold=10) == -1.0
    assert composite_score(metrics) > 0.48


def test_threshold_option_used_when_argument_missing():
    html = "<div><p>Short text</p><p>This paragraph has plenty of words in it for sure.</p></div>"
    blocks = PruningContentFilter(PruningFilterOptions(min_word_threshold=5)).filter_content(html)
    assert blocks == ["<p>This paragraph has plenty of words in it for sure.</p>"]


def test_removed_body_yields_nothing():
    html = "<body><p>Only a few words here.</p></body>"
    assert PruningContentFilter().filter_content(html, min_word_threshold=50) == []


def test_link_lists_are_pruned():
    html = f"""<body><ul><li><a href="/a">Home</a></li><li><a href="/b">About</a></li></ul><p>{LONG_PARAGRAPH}</p></body>"""
    blocks = PruningContentFilter().filter_content(html)
    assert blocks == [f"<p>{LONG_PARAGRAPH}</p>"]


def test_comments_and_scripts_stripped():
    html = "<body><!-- hidden comment --><p>Visible paragraph text that is long.</p><script>var x = 1;</script></body>"
    assert PruningContentFilter().filter_content(html) == ["<p>Visible paragraph text that is long.</p>"]


def test_bare_fragment_is_wrapped():
    html = "<p>Just a bare paragraph with enough words.</p>"
    assert PruningContentFilter().filter_content(html) == [html]


def test_blank_input():
    assert PruningContentFilter().filter_content("") == []
    assert PruningContentFilter().filter_content("  \n ") == []


def test_direct_text_emits_extra_fragment():
    # the child and the parent's own text are both emitted; overlap is possible
    html = "<div>This is direct text that is fairly long <span>child</span></div>"
    blocks = PruningContentFilter().filter_content(html)
    assert blocks == ["<span>child</span>", "<div>This is direct text that is fairly long</div>"]


def test_class_id_weight():
    assert class_id_weight(ContentMetrics(tag_name="div", class_name="main-content")) == 2.0
    assert class_id_weight(ContentMetrics(tag_name="div", class_name="sidebar", id="nav")) == -2.0


def test_adjusted_threshold():
    dense = ContentMetrics(tag_name="p", text_length=50, tag_length=60)
    assert adjusted_threshold(0.5, dense, tag_importance=1.5) == pytest.approx(0.5 * 0.8 * 0.9)
    linky = ContentMetrics(tag_name="div", text_length=10, tag_length=100, link_text_length=10)
    assert adjusted_threshold(0.5, linky, tag_importance=0.7) == pytest.approx(0.6)


def test_dynamic_mode_keeps_important_tags_fixed_mode_drops():
    html = f"<html><body><article><h1>Title</h1><p>{LONG_PARAGRAPH}</p></article></body></html>"
    fixed = PruningContentFilter(PruningFilterOptions(threshold=0.9)).filter_content(html)
    dynamic = PruningContentFilter(
        PruningFilterOptions(threshold=0.9, threshold_type=ThresholdType.DYNAMIC)
    ).filter_content(html)
    assert "<h1>Title</h1>" not in fixed
    assert "<h1>Title</h1>" in dynamic
    assert f"<p>{LONG_PARAGRAPH}</p>" in fixed


def test_deeply_nested_content_survives():
    depth = 1200
    html = "<body>" + "<div>" * depth + f"<p>{LONG_PARAGRAPH}</p>" + "</div>" * depth + "</body>"
    assert PruningContentFilter().filter_content(html) == [f"<p>{LONG_PARAGRAPH}</p>"]
