"""HTML to LLM-ready markdown: pruning and BM25 content filters, Porter stemming."""

__all__ = [
    "tokenizer",
    "stemmer",
    "bm25",
    "models",
    "options",
    "metrics",
    "html_cleaner",
    "content_filter",
    "pruning_filter",
    "bm25_filter",
    "markdown_generator",
    "config",
]

__version__ = "0.1.0"
