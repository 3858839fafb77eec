"""Value types produced by the content filters and the markdown generator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ContentMetrics:
    """Structural and textual measurements of a single DOM element."""

    tag_name: str
    text_length: int = 0
    tag_length: int = 0
    link_text_length: int = 0
    text: str = ""
    class_name: Optional[str] = None
    id: Optional[str] = None

    @property
    def text_density(self) -> float:
        return self.text_length / self.tag_length if self.tag_length > 0 else 0.0

    @property
    def link_density(self) -> float:
        # an element without text counts as pure link content
        return self.link_text_length / self.text_length if self.text_length > 0 else 1.0

    @property
    def word_count(self) -> int:
        return len(self.text.split()) if self.text_length > 0 else 0


@dataclass
class TextChunk:
    """Candidate passage for BM25 ranking; ``index`` is its document position."""

    index: int
    text: str
    tag_type: str
    html: str
    score: float = 0.0


@dataclass(frozen=True)
class MarkdownResult:
    raw_markdown: str = ""
    fit_markdown: Optional[str] = None
    fit_html: Optional[str] = None
    title: Optional[str] = None
    references_markdown: Optional[str] = None

    @property
    def word_count(self) -> int:
        source = self.fit_markdown if self.fit_markdown is not None else self.raw_markdown
        return len(source.split())


__all__ = ["ContentMetrics", "TextChunk", "MarkdownResult"]
