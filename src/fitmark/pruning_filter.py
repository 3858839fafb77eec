"""Boilerplate removal by scoring and pruning the DOM tree.

Every element gets a composite score from its text density, link density,
tag name, class/id hints and text length. Elements scoring under the
threshold are cut together with their subtree; whatever survives is flattened
into leaf-level HTML fragments in document order.
"""

from __future__ import annotations

import logging
import math
from html import escape
from types import MappingProxyType
from typing import List, Mapping, Optional

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

from .content_filter import ContentFilter
from .html_cleaner import parse_document, remove_comments, remove_tags
from .metrics import compute_metrics
from .models import ContentMetrics
from .options import PruningFilterOptions, ThresholdType

logger = logging.getLogger(__name__)

TAG_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "article": 1.5,
        "main": 1.4,
        "section": 1.3,
        "p": 1.2,
        "h1": 1.4,
        "h2": 1.3,
        "h3": 1.2,
        "h4": 1.1,
        "h5": 1.0,
        "h6": 0.9,
        "div": 0.7,
        "span": 0.6,
        "li": 0.5,
        "ul": 0.5,
        "ol": 0.5,
    }
)

TAG_IMPORTANCE: Mapping[str, float] = MappingProxyType(
    {
        "article": 1.5,
        "main": 1.4,
        "section": 1.3,
        "p": 1.2,
        "h1": 1.4,
        "h2": 1.3,
        "h3": 1.2,
        "div": 0.7,
        "span": 0.6,
    }
)

METRIC_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "text_density": 0.4,
        "link_density": 0.2,
        "tag_weight": 0.2,
        "class_id_weight": 0.1,
        "text_length": 0.1,
    }
)

CONTENT_PATTERNS = ("content", "article", "main", "post", "entry", "text", "body", "story")

BOILERPLATE_PATTERNS = (
    "sidebar", "nav", "navigation", "menu", "footer", "header", "comment",
    "advertisement", "ad", "social", "share", "related", "widget", "banner",
)

UNWANTED_TAGS = frozenset(
    {
        "script", "style", "noscript", "iframe", "svg", "canvas", "video", "audio",
        "form", "input", "button", "select", "textarea", "nav", "footer", "header",
        "aside", "template",
    }
)

DEFAULT_TAG_WEIGHT = 0.5
DEFAULT_TAG_IMPORTANCE = 0.7
DIRECT_TEXT_MIN_CHARS = 20


def class_id_weight(metrics: ContentMetrics) -> float:
    """+1 per content hint, -1 per boilerplate hint found in class and id."""
    combined = f"{metrics.class_name or ''} {metrics.id or ''}".lower()
    score = sum(1.0 for pattern in CONTENT_PATTERNS if pattern in combined)
    score -= sum(1.0 for pattern in BOILERPLATE_PATTERNS if pattern in combined)
    return score


def composite_score(metrics: ContentMetrics, min_word_threshold: Optional[int] = None) -> float:
    if min_word_threshold is not None and metrics.word_count < min_word_threshold:
        return -1.0

    parts = {
        "text_density": metrics.text_density,
        "link_density": 1 - metrics.link_density,
        "tag_weight": TAG_WEIGHTS.get(metrics.tag_name, DEFAULT_TAG_WEIGHT),
        "class_id_weight": max(0.0, class_id_weight(metrics)),
        "text_length": math.log(metrics.text_length + 1),
    }
    score = sum(METRIC_WEIGHTS[name] * value for name, value in parts.items())
    total_weight = sum(METRIC_WEIGHTS[name] for name in parts)
    return score / total_weight if total_weight > 0 else 0.0


def adjusted_threshold(base_threshold: float, metrics: ContentMetrics, tag_importance: float) -> float:
    """Per-node threshold for dynamic mode.

    Important tags and text-dense nodes get a lower bar, link-heavy nodes a
    higher one.
    """
    threshold = base_threshold
    if tag_importance > 1:
        threshold *= 0.8
    if metrics.text_density > 0.4:
        threshold *= 0.9
    if metrics.link_density > 0.6:
        threshold *= 1.2
    return threshold


def _direct_text(node: Tag) -> str:
    return "".join(
        child.strip()
        for child in node.children
        if isinstance(child, NavigableString) and not isinstance(child, PreformattedString)
    )


def _child_elements(node: Tag) -> List[Tag]:
    return node.find_all(True, recursive=False)


class PruningContentFilter(ContentFilter):
    def __init__(self, options: Optional[PruningFilterOptions] = None) -> None:
        self.options = options or PruningFilterOptions()

    def filter_content(self, html: str, min_word_threshold: Optional[int] = None) -> List[str]:
        if not html or not html.strip():
            return []

        soup, body = parse_document(html)
        remove_comments(soup)
        remove_tags(soup, UNWANTED_TAGS)

        if min_word_threshold is None:
            min_word_threshold = self.options.min_word_threshold
        if not self._prune(body, min_word_threshold):
            logger.debug("Pruning removed the document body; nothing to extract")
            return []

        blocks = self._extract_blocks(body)
        logger.debug("Pruning kept %d content blocks", len(blocks))
        return blocks

    def should_remove(self, metrics: ContentMetrics, score: float) -> bool:
        threshold = self.options.threshold
        if self.options.threshold_type == ThresholdType.DYNAMIC:
            importance = TAG_IMPORTANCE.get(metrics.tag_name, DEFAULT_TAG_IMPORTANCE)
            threshold = adjusted_threshold(threshold, metrics, importance)
        return score < threshold

    def _prune(self, body: Tag, min_word_threshold: Optional[int]) -> bool:
        """Depth-first pruning from ``body``. Returns False if the body itself was removed."""
        stack = [body]
        while stack:
            node = stack.pop()
            metrics = compute_metrics(node)
            score = composite_score(metrics, min_word_threshold)
            if self.should_remove(metrics, score):
                node.extract()
                if node is body:
                    return False
                continue
            # snapshot: children detach themselves while the walk goes on
            stack.extend(reversed(_child_elements(node)))
        return True

    def _extract_blocks(self, body: Tag) -> List[str]:
        blocks: List[str] = []
        stack = [(body, False)]
        while stack:
            node, children_done = stack.pop()
            if children_done:
                # mixed content: text sitting beside child elements would otherwise be lost.
                # This can repeat text already emitted above.
                direct = _direct_text(node)
                if len(direct) > DIRECT_TEXT_MIN_CHARS:
                    blocks.append(f"<{node.name}>{escape(direct, quote=False)}</{node.name}>")
                continue

            children = _child_elements(node)
            if not children:
                if node.get_text().strip():
                    blocks.append(str(node))
                continue
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(children))
        return blocks


__all__ = [
    "PruningContentFilter",
    "TAG_WEIGHTS",
    "TAG_IMPORTANCE",
    "METRIC_WEIGHTS",
    "UNWANTED_TAGS",
    "adjusted_threshold",
    "class_id_weight",
    "composite_score",
]
