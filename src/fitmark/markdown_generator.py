"""HTML -> Markdown with optional fit-markdown filtering and a references block."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
from markdownify import markdownify as md

from .bm25_filter import BM25ContentFilter
from .config import Config
from .content_filter import ContentFilter
from .html_cleaner import document_title, extract_main_content, extract_text
from .models import MarkdownResult
from .options import MarkdownGeneratorOptions
from .pruning_filter import PruningContentFilter

logger = logging.getLogger(__name__)

MAX_BLANK_LINES = 2


def clean_markdown(markdown: str) -> str:
    """Trim trailing whitespace per line and collapse long blank runs."""
    cleaned: List[str] = []
    blank_count = 0
    for line in markdown.split("\n"):
        line = line.rstrip()
        if not line:
            blank_count += 1
            if blank_count <= MAX_BLANK_LINES:
                cleaned.append("")
        else:
            blank_count = 0
            cleaned.append(line)
    return "\n".join(cleaned).strip()


def _resolve_href(href: str, base_url: Optional[str]) -> str:
    if href.startswith("http") or not base_url:
        return href
    try:
        if not urlparse(base_url).scheme:
            return href
        return urljoin(base_url, href)
    except ValueError:
        logger.debug("Could not resolve %r against %r", href, base_url)
        return href


def extract_references(soup: BeautifulSoup, base_url: Optional[str] = None, limit: int = 50) -> Optional[str]:
    """Numbered ``## References`` block of distinct links, or None if there are none."""
    links: Dict[str, str] = {}
    for anchor in soup.find_all("a", href=True):
        if len(links) >= limit:
            break
        text = anchor.get_text().strip()
        href = anchor["href"].strip()
        if not text or not href or href in links:
            continue
        links[href] = text

    if not links:
        return None
    lines = ["## References", ""]
    for idx, (href, text) in enumerate(links.items(), start=1):
        lines.append(f"[{idx}] [{text}]({_resolve_href(href, base_url)})")
    return "\n".join(lines)


def _page_title(soup: BeautifulSoup) -> Optional[str]:
    title = document_title(soup)
    if title:
        return title
    h1 = soup.find("h1")
    if h1 is not None:
        return h1.get_text().strip() or None
    return None


def build_content_filter(config: Config) -> Optional[ContentFilter]:
    name = (config.content_filter or "none").lower()
    if name == "none":
        return None
    if name == "pruning":
        return PruningContentFilter(config.pruning)
    if name == "bm25":
        return BM25ContentFilter(config.bm25)
    raise ValueError(f"Unknown content filter: {config.content_filter!r}")


class MarkdownGenerator:
    """Converts a page to raw markdown and, with a filter, to fit markdown."""

    def __init__(
        self,
        content_filter: Optional[ContentFilter] = None,
        options: Optional[MarkdownGeneratorOptions] = None,
    ) -> None:
        self.content_filter = content_filter
        self.options = options or MarkdownGeneratorOptions()

    @classmethod
    def from_config(cls, config: Config) -> "MarkdownGenerator":
        return cls(content_filter=build_content_filter(config), options=config.markdown)

    def convert(self, html: str) -> str:
        strip = []
        if self.options.ignore_links:
            strip.append("a")
        if self.options.ignore_images:
            strip.append("img")
        try:
            markdown = md(html, heading_style="ATX", bullets="-", strip=strip or None)
        except RecursionError as exc:
            # markdownify recurses once per element; deep nesting falls back to plain text
            logger.exception("Markdown conversion exceeded nesting depth, using plain text: %s", exc)
            return extract_text(html)
        return clean_markdown(markdown)

    def _fit_fragments(self, html: str) -> List[str]:
        try:
            return self.content_filter.filter_content(html)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Content filter %s failed, skipping fit markdown: %s", type(self.content_filter).__name__, exc)
            return []

    def generate(self, html: str, base_url: Optional[str] = None) -> MarkdownResult:
        if not html or not html.strip():
            return MarkdownResult()

        soup = BeautifulSoup(html, "html.parser")
        title = _page_title(soup)

        source = extract_main_content(html) if self.options.main_content_only else html
        raw_markdown = self.convert(source)

        fit_markdown: Optional[str] = None
        fit_html: Optional[str] = None
        if self.content_filter is not None:
            fragments = self._fit_fragments(html)
            if fragments:
                fit_html = "\n".join(f"<div>{fragment}</div>" for fragment in fragments)
                fit_markdown = self.convert(fit_html)

        references = extract_references(soup, base_url, limit=self.options.max_references)
        return MarkdownResult(
            raw_markdown=raw_markdown,
            fit_markdown=fit_markdown,
            fit_html=fit_html,
            title=title,
            references_markdown=references,
        )


__all__ = ["MarkdownGenerator", "build_content_filter", "clean_markdown", "extract_references"]
