"""
Heuristic authenticity filter.

Scores an item in [0, 1] starting from a neutral 0.5 and applying independent
additive adjustments: clickbait, description quality, engagement, channel name,
title length, and overlap with patterns learned from feedback. Items scoring at
or above the threshold are considered authentic.

The public entry points are analyze_item, score_item, and filter_by_analysis.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from curation.models.artifact import AnalysisResult
from curation.models.config import DEFAULT_CONFIG
from curation.models.item import Item
from curation.utils.scores import clamp
from curation.utils.text import keyword_set

from .patterns import FeedbackPatterns
from .signals import description_quality, detect_clickbait, engagement_score

BASE_SCORE = 0.5

# Channel matches weigh as much as this many keyword matches.
CHANNEL_MATCH_WEIGHT = 2
PATTERN_STEP = 0.03
PATTERN_MAX_ADJUSTMENT = 0.15


def _clickbait_adjustment(title: str, reasons: List[str]) -> float:
    clickbait = detect_clickbait(title)
    if clickbait > 0.3:
        reasons.append(f"Clickbait patterns detected in title ({round(clickbait * 100)}%)")
        return -clickbait * 0.4
    if clickbait < 0.1:
        reasons.append("Title appears authentic")
        return 0.1
    return 0.0


def _description_adjustment(description: str, reasons: List[str]) -> float:
    quality = description_quality(description)
    if quality > 0.6:
        reasons.append("Good description quality")
    elif quality < 0.4:
        reasons.append("Low description quality")
    return (quality - 0.5) * 0.2


def _engagement_adjustment(item: Item, reasons: List[str]) -> float:
    engagement = engagement_score(item.view_count, item.like_count)
    if engagement > 0.7:
        reasons.append("Good engagement metrics")
    elif engagement < 0.3:
        reasons.append("Low engagement metrics")
    return (engagement - 0.5) * 0.2


def _channel_adjustment(channel_title: str) -> float:
    channel = channel_title.lower()
    if "official" in channel and "unofficial" not in channel:
        return 0.05
    return 0.0


def _title_length_adjustment(title: str, reasons: List[str]) -> float:
    if len(title) < 10:
        reasons.append("Title too short")
        return -0.1
    if len(title) > 100:
        reasons.append("Title unusually long")
        return -0.05
    return 0.0


def count_pattern_matches(item: Item, patterns: FeedbackPatterns) -> Tuple[int, int]:
    """(positive, negative) keyword matches, with an exact channel match counting as 2."""
    keywords = keyword_set(item.title, item.description)
    positive = sum(1 for k in keywords if k in patterns.positive_keywords)
    negative = sum(1 for k in keywords if k in patterns.negative_keywords)
    channel = item.channel_title.strip()
    if channel and channel in patterns.positive_channels:
        positive += CHANNEL_MATCH_WEIGHT
    if channel and channel in patterns.negative_channels:
        negative += CHANNEL_MATCH_WEIGHT
    return positive, negative


def _pattern_adjustment(item: Item, patterns: FeedbackPatterns, reasons: List[str]) -> float:
    positive, negative = count_pattern_matches(item, patterns)
    if positive > negative:
        reasons.append(f"Matches {positive} positive pattern(s) from feedback")
        return min(PATTERN_MAX_ADJUSTMENT, (positive - negative) * PATTERN_STEP)
    if negative > positive:
        reasons.append(f"Matches {negative} negative pattern(s) from feedback")
        return -min(PATTERN_MAX_ADJUSTMENT, (negative - positive) * PATTERN_STEP)
    return 0.0


def analyze_item(
    item: Item,
    patterns: Optional[FeedbackPatterns] = None,
    threshold: float = DEFAULT_CONFIG.authenticity_threshold,
) -> AnalysisResult:
    """
    Score one item and decide whether it is authentic (score >= threshold).

    Without patterns the feedback-pattern adjustment is skipped.
    """
    reasons: List[str] = []
    score = BASE_SCORE
    score += _clickbait_adjustment(item.title, reasons)
    score += _description_adjustment(item.description, reasons)
    score += _engagement_adjustment(item, reasons)
    score += _channel_adjustment(item.channel_title)
    score += _title_length_adjustment(item.title, reasons)
    if patterns is not None:
        score += _pattern_adjustment(item, patterns, reasons)
    score = clamp(score)
    return AnalysisResult(
        item_id=item.id,
        is_authentic=is_authentic(score, threshold),
        score=score,
        reasoning="; ".join(reasons) if reasons else "Analyzed using heuristic filtering",
    )


def score_item(item: Item, patterns: Optional[FeedbackPatterns] = None) -> float:
    """Authenticity score in [0, 1]."""
    return analyze_item(item, patterns).score


def is_authentic(score: float, threshold: float = DEFAULT_CONFIG.authenticity_threshold) -> bool:
    return score >= threshold


def analyze_items(
    items: Iterable[Item],
    patterns: Optional[FeedbackPatterns] = None,
    threshold: float = DEFAULT_CONFIG.authenticity_threshold,
) -> List[AnalysisResult]:
    return [analyze_item(item, patterns, threshold) for item in items]


def filter_by_analysis(items: List[Item], results: Iterable[AnalysisResult]) -> List[Item]:
    """Drop items explicitly judged inauthentic; items without an analysis are kept."""
    by_id: Dict[str, AnalysisResult] = {r.item_id: r for r in results if r.item_id}
    return [
        item for item in items
        if item.id not in by_id or by_id[item.id].is_authentic
    ]
