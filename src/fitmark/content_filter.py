"""Common interface for HTML content filters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional


class ContentFilter(ABC):
    """Reduces an HTML page to an ordered list of relevant HTML fragments."""

    @abstractmethod
    def filter_content(self, html: str, min_word_threshold: Optional[int] = None) -> List[str]:
        """Return the fragments worth keeping, in document order.

        Never raises for malformed or empty markup; returns ``[]`` instead.
        """
        ...


__all__ = ["ContentFilter"]
