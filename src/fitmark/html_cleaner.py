"""HTML parsing and cleanup shared by the content filters."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from bs4 import BeautifulSoup, Comment, Tag

NON_CONTENT_TAGS = frozenset(
    {
        "script", "style", "noscript", "iframe", "svg", "canvas",
        "video", "audio", "form", "input", "button", "select", "textarea",
    }
)

MAIN_CONTENT_SELECTOR = "main, article, [role='main'], #content, .content, #main, .main"
CHROME_SELECTORS = ("nav", "header", "footer", "aside", ".sidebar", "#sidebar", ".nav", ".menu")


def parse_document(html: str) -> Tuple[BeautifulSoup, Tag]:
    """Parse ``html`` and return the soup with its ``<body>``.

    Bare fragments with no body element are re-parsed wrapped in one.
    """
    soup = BeautifulSoup(html, "html.parser")
    body = soup.body
    if body is None:
        soup = BeautifulSoup(f"<body>{html}</body>", "html.parser")
        body = soup.body
    return soup, body


def document_title(soup: BeautifulSoup) -> Optional[str]:
    """Text of the page <title>; titles inside inline SVG don't count."""
    title = soup.find(lambda tag: tag.name == "title" and tag.find_parent("svg") is None)
    if title is None:
        return None
    return title.get_text(" ", strip=True) or None


def remove_comments(soup: BeautifulSoup) -> None:
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()


def remove_tags(root: Tag, names: Iterable[str]) -> None:
    # extract() keeps already-detached descendants valid, unlike decompose()
    for tag in root.find_all(list(names)):
        tag.extract()


def _is_inline_hidden(style: str | None) -> bool:
    return bool(style) and ("display:none" in style or "display: none" in style)


def remove_hidden(soup: BeautifulSoup) -> None:
    hidden = soup.find_all(style=_is_inline_hidden)
    hidden += soup.find_all(attrs={"hidden": True})
    hidden += soup.find_all(attrs={"aria-hidden": "true"})
    for tag in hidden:
        tag.extract()


def _inner_html(tag: Tag) -> str:
    return "".join(str(child) for child in tag.contents)


def clean(html: str) -> str:
    """Strip scripts, styles, form controls, media and hidden elements."""
    if not html or not html.strip():
        return ""
    soup, body = parse_document(html)
    remove_comments(soup)
    remove_tags(soup, NON_CONTENT_TAGS)
    remove_hidden(soup)
    return _inner_html(body)


def extract_text(html: str) -> str:
    if not html or not html.strip():
        return ""
    _, body = parse_document(html)
    lines = (line.strip() for line in body.get_text().split("\n"))
    return "\n".join(line for line in lines if line)


def extract_main_content(html: str) -> str:
    """Return the main content region, or the body minus site chrome."""
    if not html or not html.strip():
        return ""
    soup, body = parse_document(html)
    main = soup.select_one(MAIN_CONTENT_SELECTOR)
    if main is not None:
        return str(main)
    for selector in CHROME_SELECTORS:
        for tag in body.select(selector):
            tag.extract()
    return _inner_html(body)


__all__ = [
    "NON_CONTENT_TAGS",
    "parse_document",
    "document_title",
    "remove_comments",
    "remove_tags",
    "remove_hidden",
    "clean",
    "extract_text",
    "extract_main_content",
]
