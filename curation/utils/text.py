"""
Text helpers: keyword extraction, search tokenization, and HTML entity decoding.

extract_keywords is the single tokenizer behind pattern mining, the heuristic
filter's pattern match, and the keyword-overlap model features.
"""

import re
from typing import Iterable, List, Set

STOP_WORDS = frozenset({
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "a", "an", "is", "are", "was", "were", "be", "been",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "this", "that", "these", "those",
})

MIN_KEYWORD_LENGTH = 3
MIN_PHRASE_LENGTH = 5

_NON_WORD = re.compile(r"[^\w]")
_NON_WORD_OR_SPACE = re.compile(r"[^\w\s]")

_HTML_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#34;": '"',
    "&#x22;": '"',
    "&#39;": "'",
    "&#x27;": "'",
    "&apos;": "'",
}
_HTML_ENTITY_PATTERN = re.compile(r"&(?:amp|lt|gt|quot|apos|#39|#x27|#34|#x22);")


def extract_keywords(text: str) -> List[str]:
    """
    Keywords of a text: significant single words plus adjacent-word phrases.

    Words are lowercased, split on whitespace, stripped of punctuation, and kept
    when at least 3 chars long and not a stop word. Every pair of adjacent raw
    words forms a phrase, kept when at least 5 chars long after punctuation is
    stripped. Order follows the text; duplicates are kept.
    """
    if not text or not text.strip():
        return []
    words = text.lower().split()
    keywords: List[str] = []
    for word in words:
        clean = _NON_WORD.sub("", word)
        if len(clean) >= MIN_KEYWORD_LENGTH and clean not in STOP_WORDS:
            keywords.append(clean)
    for first, second in zip(words, words[1:]):
        phrase = _NON_WORD_OR_SPACE.sub("", f"{first} {second}")
        if len(phrase) >= MIN_PHRASE_LENGTH:
            keywords.append(phrase)
    return keywords


def keyword_set(*texts: str) -> Set[str]:
    """Union of extract_keywords over several texts."""
    out: Set[str] = set()
    for text in texts:
        out.update(extract_keywords(text))
    return out


def search_terms(query: str, min_length: int = 2) -> List[str]:
    """Lowercase whitespace tokens of a query, dropping short ones; order kept, duplicates removed."""
    return normalize_terms(query.lower().split(), min_length)


def normalize_terms(terms: Iterable[str], min_length: int = 2) -> List[str]:
    """Lowercase, drop tokens shorter than min_length, and dedupe preserving order."""
    seen: Set[str] = set()
    out: List[str] = []
    for term in terms:
        t = term.strip().lower()
        if len(t) < min_length or t in seen:
            continue
        seen.add(t)
        out.append(t)
    return out


def decode_html_entities(text: str) -> str:
    """Decode the handful of HTML entities search APIs emit in titles and descriptions."""
    return _HTML_ENTITY_PATTERN.sub(lambda m: _HTML_ENTITIES.get(m.group(0), m.group(0)), text)
