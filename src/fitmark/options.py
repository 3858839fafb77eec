"""Tunable options for the content filters and the markdown generator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ThresholdType(str, Enum):
    FIXED = "fixed"
    DYNAMIC = "dynamic"


@dataclass(frozen=True)
class PruningFilterOptions:
    threshold: float = 0.48
    threshold_type: ThresholdType = ThresholdType.FIXED
    min_word_threshold: Optional[int] = None


@dataclass(frozen=True)
class Bm25FilterOptions:
    user_query: Optional[str] = None
    threshold: float = 1.0
    language: str = "english"  # informational; only English stemming is implemented
    use_stemming: bool = True
    k1: float = 1.2
    b: float = 0.75


@dataclass(frozen=True)
class MarkdownGeneratorOptions:
    ignore_links: bool = False
    ignore_images: bool = False
    max_references: int = 50
    main_content_only: bool = False


__all__ = ["ThresholdType", "PruningFilterOptions", "Bm25FilterOptions", "MarkdownGeneratorOptions"]
