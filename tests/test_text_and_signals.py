"""
Text and signal helper tests.

Covers keyword extraction (words + adjacent phrases), search tokenization,
HTML entity decoding, and the clickbait / description / engagement signals
shared by the heuristic filter and the feature extractor.
"""

import pytest

from curation.models.item import Item
from curation.stages.signals import (
    description_quality,
    detect_clickbait,
    engagement_score,
    like_ratio_norm,
)
from curation.utils.scores import clamp, parse_count, sigmoid
from curation.utils.text import decode_html_entities, extract_keywords, normalize_terms, search_terms


class TestExtractKeywords:
    def test_words_and_phrases(self):
        assert extract_keywords("The Quick brown fox!") == [
            "quick",
            "brown",
            "fox",
            "the quick",
            "quick brown",
            "brown fox",
        ]

    def test_stop_words_and_short_words_dropped(self):
        keywords = extract_keywords("it is for the win")
        assert "the" not in keywords
        assert "is" not in keywords
        assert "win" in keywords

    def test_short_phrases_dropped(self):
        # "a b" strips to 3 chars, below the phrase minimum
        assert extract_keywords("a b") == []

    def test_empty_text(self):
        assert extract_keywords("") == []
        assert extract_keywords("   ") == []


class TestSearchTerms:
    def test_lowercases_and_drops_short_tokens(self):
        assert search_terms("Pasta a LA Carbonara") == ["pasta", "la", "carbonara"]

    def test_dedupes_preserving_order(self):
        assert normalize_terms(["Wine", "pasta", "wine", "x"]) == ["wine", "pasta"]

    def test_blank_query(self):
        assert search_terms("   ") == []


def test_decode_html_entities():
    assert decode_html_entities("Tom &amp; Jerry&#39;s &quot;best&quot;") == "Tom & Jerry's \"best\""
    assert decode_html_entities("&unknown; stays") == "&unknown; stays"


def test_item_from_api_decodes_entities_and_counts():
    item = Item.from_api({"id": "v1", "title": "Rock &amp; Roll", "view_count": 1200, "like_count": None})
    assert item.title == "Rock & Roll"
    assert item.view_count == "1200"
    assert item.like_count is None


class TestClickbait:
    def test_all_signals(self):
        # caps ratio 18/25 (+0.3), stock phrase (+0.2), three "!" (+0.1)
        assert detect_clickbait("YOU WON'T BELIEVE THIS!!!") == pytest.approx(0.6)

    def test_calm_title(self):
        assert detect_clickbait("How to make fresh pasta at home") == 0.0

    def test_emoji(self):
        assert detect_clickbait("Trip recap \U0001F600\U0001F600\U0001F600") == pytest.approx(0.2)

    def test_capped_at_one(self):
        title = "TOP 10 CLICK HERE GONE WRONG ONE WEIRD TRICK SUBSCRIBE NOW!!!"
        assert detect_clickbait(title) == 1.0

    def test_empty_title(self):
        assert detect_clickbait("") == 0.0


class TestDescriptionQuality:
    def test_empty(self):
        assert description_quality("") == pytest.approx(0.3)
        assert description_quality("   ") == pytest.approx(0.3)

    def test_plain(self):
        assert description_quality("A short note.") == pytest.approx(0.5)

    def test_long(self):
        assert description_quality("x" * 201) == pytest.approx(0.6)

    def test_self_promotion(self):
        assert description_quality("Like, subscribe and hit the notification bell") == pytest.approx(0.3)

    def test_many_links(self):
        links = " ".join(f"https://site{i}.example" for i in range(4))
        assert description_quality(links) == pytest.approx(0.4)


class TestEngagement:
    @pytest.mark.parametrize(
        "views,likes,expected",
        [
            ("1000", "20", 0.8),
            ("1000", "8", 0.6),
            ("1000", "3", 0.4),
            ("1000", "1", 0.2),
            ("0", "5", 0.3),
            (None, "5", 0.5),
            ("1000", None, 0.5),
            ("", "", 0.5),
        ],
    )
    def test_buckets(self, views, likes, expected):
        assert engagement_score(views, likes) == pytest.approx(expected)

    def test_like_ratio_norm(self):
        assert like_ratio_norm("1000", "20") == 1.0
        assert like_ratio_norm("1000", "3") == pytest.approx(0.3)
        assert like_ratio_norm("0", "3") == 0.5
        assert like_ratio_norm(None, None) == 0.5


class TestNumericHelpers:
    def test_sigmoid_is_clamped(self):
        assert sigmoid(0) == 0.5
        assert sigmoid(1000) == sigmoid(20)
        assert sigmoid(-1000) == sigmoid(-20)
        assert 0.0 < sigmoid(-1000) < sigmoid(1000) < 1.0

    def test_clamp(self):
        assert clamp(1.5) == 1.0
        assert clamp(-0.2) == 0.0

    def test_parse_count(self):
        assert parse_count("42") == 42
        assert parse_count(" 7 ") == 7
        assert parse_count("") is None
        assert parse_count("n/a") is None
        assert parse_count(None) is None
