"""Per-element measurements feeding the pruning score."""

from __future__ import annotations

from bs4 import Tag

from .models import ContentMetrics


def compute_metrics(element: Tag) -> ContentMetrics:
    text = element.get_text().strip()
    link_text = " ".join(a.get_text().strip() for a in element.find_all("a"))
    classes = element.get("class")
    if isinstance(classes, list):
        classes = " ".join(classes)
    return ContentMetrics(
        tag_name=element.name,
        text_length=len(text),
        tag_length=len(str(element)),
        link_text_length=len(link_text),
        text=text,
        class_name=classes or None,
        id=element.get("id"),
    )


__all__ = ["compute_metrics"]
