"""Query-driven content filtering with BM25 and tag priority boosts."""

from __future__ import annotations

import copy
import logging
from types import MappingProxyType
from typing import List, Mapping, Optional

from bs4 import BeautifulSoup, Tag

from .bm25 import BM25Ranker
from .content_filter import ContentFilter
from .html_cleaner import document_title, parse_document, remove_tags
from .models import TextChunk
from .options import Bm25FilterOptions
from .stemmer import PorterStemmer
from .tokenizer import clean_tokens, tokenize

logger = logging.getLogger(__name__)

PRIORITY_TAGS: Mapping[str, float] = MappingProxyType(
    {
        "h1": 5.0,
        "h2": 4.0,
        "h3": 3.0,
        "title": 4.0,
        "strong": 2.0,
        "b": 1.5,
        "em": 1.5,
        "blockquote": 2.0,
        "code": 2.0,
        "pre": 1.5,
        "th": 1.5,
    }
)

CONTENT_TAGS = frozenset(
    {
        "p", "h1", "h2", "h3", "h4", "h5", "h6", "li", "td", "th",
        "blockquote", "pre", "code", "article", "section", "div",
    }
)

FRAGMENT_STRIP_TAGS = ("script", "style", "noscript", "iframe")

DEFAULT_MIN_WORDS = 3
PARAGRAPH_QUERY_MIN_CHARS = 50
PARAGRAPH_QUERY_MAX_CHARS = 200


def _meta_content(soup: BeautifulSoup, name: str) -> Optional[str]:
    meta = soup.find("meta", attrs={"name": name})
    if meta is None:
        return None
    return meta.get("content")


def extract_page_query(soup: BeautifulSoup, body: Tag) -> Optional[str]:
    """Derive a query from page metadata when none was configured.

    Tries, in order: ``<title>``, meta description, meta keywords, the first
    ``<h1>`` and the opening of the first substantial paragraph.
    """
    title = document_title(soup)
    if title:
        return title

    for name in ("description", "keywords"):
        content = _meta_content(soup, name)
        if content and content.strip():
            return content

    h1 = body.find("h1")
    if h1 is not None:
        heading = h1.get_text().strip()
        if heading:
            return heading

    paragraph = body.find("p")
    if paragraph is not None:
        text = paragraph.get_text().strip()
        if len(text) > PARAGRAPH_QUERY_MIN_CHARS:
            return text[:PARAGRAPH_QUERY_MAX_CHARS]
    return None


def _fragment_html(element: Tag) -> str:
    clone = copy.copy(element)
    remove_tags(clone, FRAGMENT_STRIP_TAGS)
    return str(clone)


def extract_text_chunks(body: Tag, min_word_threshold: Optional[int] = None) -> List[TextChunk]:
    """Collect content-tag elements in document order.

    Nested content tags each yield their own chunk, so a ``<div>`` and the
    ``<p>`` inside it may both appear.
    """
    min_words = DEFAULT_MIN_WORDS if min_word_threshold is None else min_word_threshold
    chunks: List[TextChunk] = []

    # find_all walks descendants in document order without recursion
    for element in body.find_all(list(CONTENT_TAGS)):
        text = element.get_text().strip()
        if len(text.split()) >= min_words:
            chunks.append(TextChunk(index=len(chunks), text=text, tag_type=element.name, html=_fragment_html(element)))
    return chunks


class BM25ContentFilter(ContentFilter):
    """Keeps content chunks whose boosted BM25 score reaches the threshold.

    Ranking only decides membership; fragments come back in document order.
    """

    def __init__(self, options: Optional[Bm25FilterOptions] = None) -> None:
        self.options = options or Bm25FilterOptions()
        self.stemmer = PorterStemmer() if self.options.use_stemming else None

    def _tokens(self, text: str) -> List[str]:
        tokens = tokenize(text)
        if self.stemmer is not None:
            tokens = self.stemmer.stem_all(tokens)
        return clean_tokens(tokens)

    def filter_content(self, html: str, min_word_threshold: Optional[int] = None) -> List[str]:
        if not html or not html.strip():
            return []

        soup, body = parse_document(html)
        query = self.options.user_query
        if query is None:
            query = extract_page_query(soup, body)
        if not query or not query.strip():
            logger.debug("No query configured or derivable from page metadata")
            return []

        candidates = extract_text_chunks(body, min_word_threshold)
        if not candidates:
            return []

        query_tokens = self._tokens(query)
        if not query_tokens:
            logger.debug("Query %r has no content terms after cleaning", query)
            return []

        ranker = BM25Ranker([self._tokens(c.text) for c in candidates], k1=self.options.k1, b=self.options.b)
        scores = ranker.get_scores(query_tokens)

        selected: List[TextChunk] = []
        for chunk, score in zip(candidates, scores):
            chunk.score = float(score) * PRIORITY_TAGS.get(chunk.tag_type, 1.0)
            if chunk.score >= self.options.threshold:
                selected.append(chunk)
        selected.sort(key=lambda c: c.index)
        logger.debug("BM25 kept %d of %d chunks for query %r", len(selected), len(candidates), query)
        return [c.html for c in selected]


__all__ = [
    "BM25ContentFilter",
    "CONTENT_TAGS",
    "PRIORITY_TAGS",
    "extract_page_query",
    "extract_text_chunks",
]
