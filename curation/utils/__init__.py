"""Shared utilities for text processing and numeric scoring."""

from .scores import clamp, parse_count, sigmoid
from .text import (
    STOP_WORDS,
    decode_html_entities,
    extract_keywords,
    keyword_set,
    normalize_terms,
    search_terms,
)

__all__ = [
    "STOP_WORDS",
    "clamp",
    "decode_html_entities",
    "extract_keywords",
    "keyword_set",
    "normalize_terms",
    "parse_count",
    "search_terms",
    "sigmoid",
]
