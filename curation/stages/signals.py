"""
Content-quality signals shared by the heuristic filter and the feature extractor.

Each function is a pure text/number heuristic returning a value in [0, 1]:
- detect_clickbait: title clickbait likelihood (higher = more clickbait)
- description_quality: effort and spamminess of the description
- engagement_score: like-ratio bucket (0.5 when counts are unknown)
- like_ratio_norm: like ratio scaled so 1% likes -> 1.0
"""

import re
from typing import Any

from curation.utils.scores import clamp, parse_count

CLICKBAIT_PHRASES = (
    "you won't believe",
    "this will shock you",
    "number one will",
    "top 10",
    "watch until the end",
    "gone wrong",
    "gone sexual",
    "they don't want you to know",
    "doctors hate this",
    "one weird trick",
    "click here",
    "subscribe now",
    "like and subscribe",
    "smash that like button",
)

_UPPERCASE = re.compile(r"[A-Z]")
_EMOJI = re.compile("[\U0001F300-\U0001F9FF]")
_URL = re.compile(r"https?://")


def detect_clickbait(title: str) -> float:
    """Clickbait score of a title: caps ratio, emoji, stock phrases, and punctuation runs."""
    if not title:
        return 0.0
    score = 0.0
    caps_ratio = len(_UPPERCASE.findall(title)) / len(title)
    if caps_ratio > 0.5:
        score += 0.3
    if len(_EMOJI.findall(title)) > 2:
        score += 0.2
    lower = title.lower()
    for phrase in CLICKBAIT_PHRASES:
        if phrase in lower:
            score += 0.2
    if title.count("!") > 2 or title.count("?") > 2:
        score += 0.1
    return min(score, 1.0)


def description_quality(description: str) -> float:
    """Description quality: 0.3 when empty, otherwise 0.5 adjusted for length and spam markers."""
    if not description or not description.strip():
        return 0.3
    lower = description.lower()
    score = 0.5
    if len(description) > 200:
        score += 0.1
    if "subscribe" in lower and "like" in lower and "notification" in lower:
        score -= 0.2
    if len(_URL.findall(description)) > 3:
        score -= 0.1
    return clamp(score)


def engagement_score(view_count: Any, like_count: Any) -> float:
    """Like-ratio bucket; neutral 0.5 when either count is unknown, 0.3 for zero views."""
    views = parse_count(view_count)
    likes = parse_count(like_count)
    if views is None or likes is None:
        return 0.5
    if views == 0:
        return 0.3
    ratio = likes / views
    if ratio > 0.01:
        return 0.8
    if ratio > 0.005:
        return 0.6
    if ratio > 0.001:
        return 0.4
    return 0.2


def like_ratio_norm(view_count: Any, like_count: Any) -> float:
    """min(1, likes / views * 100) when both counts are known and views > 0, else 0.5."""
    views = parse_count(view_count)
    likes = parse_count(like_count)
    if views is None or likes is None or views <= 0:
        return 0.5
    return clamp((likes / views) * 100)
