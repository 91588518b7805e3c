"""
Tests for the product impact analyzer.

Covers: the 48h attribution window, negative-event detection, verdict
ordering and the recommendation text per verdict.
"""

from datetime import timedelta

import pytest

from analytics.product_impact import (
    analyze_product_performance,
    decide_verdict,
    is_negative_event,
    split_photos_by_usage,
)
from conftest import NOW, days_ago, make_photo, make_usage
from models import Product


class TestNegativeEvents:

    def test_poor_skin_condition(self):
        assert is_negative_event(make_usage("p1", NOW, skin_condition="poor"))

    def test_low_rating(self):
        assert is_negative_event(make_usage("p1", NOW, rating=1))
        assert not is_negative_event(make_usage("p1", NOW, rating=2))

    def test_keywords_are_case_insensitive(self):
        assert is_negative_event(make_usage("p1", NOW, notes="Slight REDNESS after use"))
        assert not is_negative_event(make_usage("p1", NOW, notes="felt great"))


class TestAttributionWindow:

    def test_window_is_open_at_zero_and_closed_at_48h(self, clock):
        used = days_ago(3)
        photos = [
            make_photo("same", used),
            make_photo("at48", used + timedelta(hours=48)),
            make_photo("past48", used + timedelta(hours=48, minutes=1)),
            make_photo("before", used - timedelta(hours=1)),
        ]
        after, baseline = split_photos_by_usage(photos, [make_usage("p1", used)], clock)
        assert [p.id for p in after] == ["at48"]
        assert [p.id for p in baseline] == ["same", "past48", "before"]


class TestDecideVerdict:

    def test_keep_takes_priority(self):
        verdict, confidence = decide_verdict(6, 4, 0, 10)
        assert verdict == "keep"
        assert confidence == pytest.approx(0.9)

    def test_replace_on_decline(self):
        verdict, confidence = decide_verdict(-4, 4, 1, 10)
        assert verdict == "replace"
        assert confidence == pytest.approx(0.7)

    def test_replace_on_low_rating(self):
        assert decide_verdict(0, 2.4, 0, 3)[0] == "replace"

    def test_single_negative_event_blocks_keep(self):
        assert decide_verdict(6, 4, 1, 5) == ("monitor", 0.6)

    def test_monitor_low_confidence_with_few_uses(self):
        assert decide_verdict(0, 4, 0, 4) == ("monitor", 0.3)


class TestAnalyzeProductPerformance:

    def test_no_usage_is_monitor_with_zero_confidence(self, clock, serum):
        analysis = analyze_product_performance(serum, [], [], clock)
        assert analysis.verdict == "monitor"
        assert analysis.confidence == 0.0
        assert analysis.recommendation == "Start using this product consistently to track its effectiveness"
        assert analysis.evidence.days_used == 0

    def test_consistent_highly_rated_product_is_kept(self, clock, serum):
        usage = [make_usage("p1", days_ago(n, hour=8), rating=5) for n in range(1, 7)]
        photos = [
            make_photo(f"after{n}", days_ago(n, hour=20), hydration=70, texture=68, brightness=66)
            for n in range(1, 4)
        ] + [
            make_photo("base1", days_ago(10), hydration=62, texture=60, brightness=58),
            make_photo("base2", days_ago(12), hydration=62, texture=60, brightness=58),
        ]

        analysis = analyze_product_performance(serum, usage, photos, clock)

        assert analysis.verdict == "keep"
        assert 0.5 <= analysis.confidence <= 0.9
        assert analysis.confidence == pytest.approx(0.8)
        assert analysis.impact.hydration == pytest.approx(8.0)
        assert analysis.impact.overall == pytest.approx(8.0)
        assert analysis.evidence.days_used == 6
        assert analysis.evidence.avg_rating == pytest.approx(5.0)
        assert analysis.evidence.photos_analyzed == 3
        assert analysis.recommendation == (
            "KEEP USING - Showing +8.0% improvement. 6 days of consistent use with 5.0/5 average rating."
        )

    def test_repeated_reactions_mean_replace(self, clock):
        toner = Product(id="p2", name="Toner", brand="Acme", rating=4)
        usage = [make_usage("p2", days_ago(n), skin_condition="poor") for n in range(1, 4)]
        analysis = analyze_product_performance(toner, usage, [], clock)
        assert analysis.verdict == "replace"
        assert analysis.confidence == pytest.approx(0.9)
        assert analysis.evidence.negative_events == 3
        assert analysis.recommendation == (
            "REPLACE - Negative effects detected (3 issues reported). Consider alternatives."
        )

    def test_missing_ratings_fall_back_to_product_rating(self, clock, serum):
        usage = [make_usage("p1", days_ago(1)), make_usage("p1", days_ago(2))]
        analysis = analyze_product_performance(serum, usage, [], clock)
        assert analysis.evidence.avg_rating == pytest.approx(4.0)
        assert analysis.verdict == "monitor"
        assert analysis.recommendation == (
            "MONITOR - Need more data. Continue for 5 more days to confirm effectiveness."
        )

    def test_other_products_usage_is_ignored(self, clock, serum):
        usage = [make_usage("other", days_ago(1), rating=1)]
        analysis = analyze_product_performance(serum, usage, [], clock)
        assert analysis.evidence.days_used == 0


class TestKeepRuleGrid:

    @pytest.mark.parametrize("overall", [-3.5, 0, 5, 5.01, 8])
    @pytest.mark.parametrize("avg_rating", [2.4, 3.99, 4, 5])
    @pytest.mark.parametrize("negatives", [0, 1, 3])
    @pytest.mark.parametrize("usage_count", [1, 4, 5, 6, 20])
    def test_keep_iff_impact_rating_and_no_negatives(self, overall, avg_rating, negatives, usage_count):
        verdict, confidence = decide_verdict(overall, avg_rating, negatives, usage_count)

        assert (verdict == "keep") == (overall > 5 and avg_rating >= 4 and negatives == 0)
        if verdict in ("keep", "replace"):
            assert 0.5 <= confidence <= 0.9
        else:
            assert confidence == (0.3 if usage_count < 5 else 0.6)
