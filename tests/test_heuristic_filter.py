"""
Heuristic authenticity filter tests.

Scores start at 0.5 and move by independent adjustments; these tests pin the
individual adjustments, the feedback-pattern boost, threshold behavior, and the
leniency of filter_by_analysis toward items without an analysis.
"""

import pytest

from curation.models.artifact import AnalysisResult
from curation.models.feedback import FeedbackRecord, ItemMetadata, Sentiment
from curation.models.item import Item
from curation.stages.heuristic_filter import (
    analyze_item,
    analyze_items,
    count_pattern_matches,
    filter_by_analysis,
    score_item,
)
from curation.stages.patterns import FeedbackPatterns, mine_patterns


def _record(item_id, sentiment, title="", channel=None, description=None):
    return FeedbackRecord(
        id=item_id,
        sentiment=sentiment,
        metadata=ItemMetadata(title=title, channel_title=channel, description=description),
    )


class TestAdjustments:
    def test_calm_title_without_description(self):
        # +0.1 authentic title, -0.04 empty description
        item = Item(id="a", title="How to make fresh pasta at home")
        result = analyze_item(item)
        assert result.score == pytest.approx(0.56)
        assert result.is_authentic
        assert "Title appears authentic" in result.reasoning
        assert "Low description quality" in result.reasoning

    def test_clickbait_title(self):
        # clickbait 0.6 -> -0.24, empty description -0.04
        item = Item(id="b", title="YOU WON'T BELIEVE THIS!!!")
        result = analyze_item(item)
        assert result.score == pytest.approx(0.22)
        assert not result.is_authentic
        assert "Clickbait patterns detected in title (60%)" in result.reasoning

    def test_short_title(self):
        result = analyze_item(Item(id="c", title="Hi"))
        assert result.score == pytest.approx(0.46)
        assert "Title too short" in result.reasoning

    def test_long_title(self):
        title = "a calm and very long title " * 5
        result = analyze_item(Item(id="d", title=title.strip()))
        assert result.score == pytest.approx(0.51)
        assert "Title unusually long" in result.reasoning

    def test_official_channel(self):
        base = Item(id="e", title="How to make fresh pasta at home")
        official = base.model_copy(update={"channel_title": "Pasta Official"})
        unofficial = base.model_copy(update={"channel_title": "Unofficial Pasta Fans"})
        assert score_item(official) == pytest.approx(score_item(base) + 0.05)
        assert score_item(unofficial) == pytest.approx(score_item(base))

    def test_engagement(self):
        base = Item(id="f", title="How to make fresh pasta at home")
        good = base.model_copy(update={"view_count": "1000", "like_count": "50"})
        poor = base.model_copy(update={"view_count": "100000", "like_count": "1"})
        assert score_item(good) == pytest.approx(score_item(base) + 0.06)
        assert score_item(poor) == pytest.approx(score_item(base) - 0.06)
        assert "Good engagement metrics" in analyze_item(good).reasoning

    def test_score_is_clamped(self):
        item = Item(
            id="g",
            title="TOP 10 CLICK HERE GONE WRONG ONE WEIRD TRICK!!!",
            view_count="100000",
            like_count="0",
        )
        assert 0.0 <= score_item(item) <= 1.0


class TestPatterns:
    def test_mine_patterns(self):
        patterns = mine_patterns([
            _record("p1", Sentiment.POSITIVE, "Homemade pasta recipe", "Chef Anna"),
            _record("n1", Sentiment.NEGATIVE, "Celebrity drama exposed", "Drama Zone"),
            _record("n2", Sentiment.NEGATIVE),
        ])
        assert {"homemade", "pasta", "recipe", "pasta recipe"} <= patterns.positive_keywords
        assert "drama" in patterns.negative_keywords
        assert patterns.positive_channels == {"Chef Anna"}
        assert patterns.negative_channels == {"Drama Zone"}

    def test_empty_patterns(self):
        assert mine_patterns([]).is_empty
        assert mine_patterns([_record("x", Sentiment.POSITIVE)]).is_empty

    def test_channel_counts_double(self):
        patterns = FeedbackPatterns(positive_channels={"Chef Anna"})
        item = Item(id="i", title="Something else entirely", channel_title="Chef Anna")
        assert count_pattern_matches(item, patterns) == (2, 0)

    def test_positive_pattern_boost(self):
        patterns = mine_patterns([_record("p1", Sentiment.POSITIVE, "Homemade pasta recipe", "Chef Anna")])
        item = Item(id="i", title="Easy pasta recipe tonight", channel_title="Chef Anna")
        # pasta, recipe, "pasta recipe", channel x2 -> 5 matches, capped at +0.15
        result = analyze_item(item, patterns)
        assert result.score == pytest.approx(0.71)
        assert "Matches 5 positive pattern(s) from feedback" in result.reasoning

    def test_negative_pattern_penalty(self):
        patterns = mine_patterns([_record("n1", Sentiment.NEGATIVE, "Celebrity drama", "Drama Zone")])
        item = Item(id="i", title="More celebrity gossip", channel_title="Drama Zone")
        without = score_item(item)
        with_patterns = score_item(item, patterns)
        # "celebrity" + channel -> 3 negative matches
        assert with_patterns == pytest.approx(without - 0.09)


class TestThreshold:
    @pytest.fixture
    def items(self):
        return [
            Item(id="1", title="How to make fresh pasta at home", description="x" * 250),
            Item(id="2", title="YOU WON'T BELIEVE THIS!!!"),
            Item(id="3", title="Hi"),
            Item(id="4", title="Quiet walk", view_count="1000", like_count="40"),
            Item(id="5", title="Top 10 gadgets", channel_title="Gadgets Official"),
        ]

    def test_authentic_iff_at_or_above_threshold(self, items):
        for result in analyze_items(items, threshold=0.5):
            assert result.is_authentic == (result.score >= 0.5)

    def test_raising_threshold_never_grows_output(self, items):
        sizes = []
        for threshold in (0.0, 0.2, 0.4, 0.5, 0.6, 0.8, 1.0):
            results = analyze_items(items, threshold=threshold)
            sizes.append(len(filter_by_analysis(items, results)))
        assert sizes == sorted(sizes, reverse=True)
        assert sizes[0] == len(items)


class TestFilterByAnalysis:
    def test_items_without_analysis_are_kept(self):
        items = [Item(id="a"), Item(id="b"), Item(id="c")]
        results = [
            AnalysisResult(item_id="a", is_authentic=False, score=0.1),
            AnalysisResult(item_id="b", is_authentic=True, score=0.9),
        ]
        assert [i.id for i in filter_by_analysis(items, results)] == ["b", "c"]

    def test_order_preserved(self):
        items = [Item(id=str(n), title="How to make fresh pasta at home") for n in range(5)]
        kept = filter_by_analysis(items, analyze_items(items))
        assert [i.id for i in kept] == ["0", "1", "2", "3", "4"]
