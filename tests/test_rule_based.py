"""
Tests for the deterministic report builder.

Covers: filler text on empty data, list bounds, replacement advice ordering,
habit recommendations and idempotence.
"""

import pytest

from analytics.consistency import calculate_consistency
from conftest import NOW, days_ago, make_entry, make_photo, make_usage
from models import InsightSnapshot, Product
from pipeline.insight_pipeline import collect_insight_data
from pipeline.rule_based import bound_report_lists, build_rule_based_report


def _stressed_snapshot():
    toner = Product(id="p2", name="Toner", brand="Acme")
    entries = [
        make_entry(f"j{n}", days_ago(n, hour=9), mood="bad", sleep=5, water=4, stress=5)
        for n in range(5)
    ]
    usage = [make_usage("p2", days_ago(n), skin_condition="poor") for n in range(1, 4)]
    return InsightSnapshot(journal_entries=entries, products=[toner], usage_history=usage, now=NOW)


class TestBoundReportLists:

    def test_pads_empty_lists(self, clock):
        consistency = calculate_consistency([], [], [], clock).model_copy(
            update={"consistency_percentage": 60, "total_days_tracked": 4})
        wins, insights, recs = bound_report_lists([], [], [], consistency)
        assert wins == ["You've tracked 4 days - every day counts!"]
        assert insights == ["Your 60% consistency is building valuable data"]
        assert len(recs) == 2

    def test_truncates_to_maximums(self, clock):
        consistency = calculate_consistency([], [], [], clock)
        wins, insights, recs = bound_report_lists(
            [f"w{i}" for i in range(6)], [f"i{i}" for i in range(6)],
            [f"r{i}" for i in range(8)], consistency)
        assert wins == ["w0", "w1", "w2"]
        assert len(insights) == 3
        assert recs == ["r0", "r1", "r2", "r3", "r4"]

    def test_drops_blank_entries(self, clock):
        consistency = calculate_consistency([], [], [], clock)
        wins, _, _ = bound_report_lists(["", "real win"], [], [], consistency)
        assert wins == ["real win"]


class TestBuildRuleBasedReport:

    def test_empty_data(self, clock):
        data = collect_insight_data(InsightSnapshot(), clock)
        report = build_rule_based_report(data, clock)

        assert report.source == "rule_based"
        assert report.consistency.consistency_percentage == 0
        assert report.wins == ["Start your journey today - take a photo and log your first entry!"]
        assert report.insights == [
            "Your consistency is 0% - users with 80%+ consistency see 3x better results"
        ]
        assert report.recommendations[0].startswith("Log photo AND journal every day")
        assert "Start a photo streak today - take a progress photo to begin tracking" in report.recommendations
        assert report.summary.startswith("Track daily to unlock insights")
        assert report.generated_at == "2026-10-19T12:00:00+00:00"

    def test_list_bounds_hold(self, clock):
        data = collect_insight_data(_stressed_snapshot(), clock)
        report = build_rule_based_report(data, clock)
        assert 1 <= len(report.wins) <= 3
        assert 1 <= len(report.insights) <= 3
        assert 1 <= len(report.recommendations) <= 5

    def test_replacement_advice_survives_truncation(self, clock):
        data = collect_insight_data(_stressed_snapshot(), clock)
        report = build_rule_based_report(data, clock)

        assert report.recommendations[0].startswith("Stop using Acme Toner - REPLACE")
        assert len(report.recommendations) == 5
        assert report.product_report.replace[0].product == "Acme Toner"
        assert report.product_report.working == []

    def test_habit_advice(self, clock):
        data = collect_insight_data(_stressed_snapshot(), clock)
        report = build_rule_based_report(data, clock)
        assert "5 day journal streak! Amazing consistency!" in report.wins
        assert "Aim for 7-8 hours sleep (currently 5.0h) - this will make a REAL difference" \
            in report.recommendations
        assert any(r.startswith("Increase water to 8+ glasses (currently 4.0)") for r in report.recommendations)

    def test_consistent_user_gets_streak_wins(self, clock):
        photos = [make_photo(f"p{n}", days_ago(n, hour=9)) for n in range(7)]
        entries = [make_entry(f"j{n}", days_ago(n, hour=9)) for n in range(7)]
        data = collect_insight_data(InsightSnapshot(photos=photos, journal_entries=entries), clock)
        report = build_rule_based_report(data, clock)

        assert report.wins[0] == "7 day photo streak! Keep it up!"
        assert report.wins[1] == "7 day journal streak! Amazing consistency!"
        assert report.summary == "Your 100% consistency is excellent - keep it up!"

    def test_same_input_same_output(self, clock):
        snapshot = _stressed_snapshot()
        first = build_rule_based_report(collect_insight_data(snapshot, clock), clock)
        second = build_rule_based_report(collect_insight_data(snapshot, clock), clock)
        assert first.model_dump_json() == second.model_dump_json()


def _many_replacements():
    products = [Product(id=f"bad{i}", name=f"Cream {i}", brand="Acme") for i in range(8)]
    usage = [
        make_usage(p.id, days_ago(n), skin_condition="poor")
        for p in products for n in range(1, 4)
    ]
    return InsightSnapshot(products=products, usage_history=usage)


def _every_win():
    serum = Product(id="p1", name="Hydra Serum", brand="Glow")
    photos = [make_photo(f"p{n}", days_ago(n, hour=9), hydration=75, texture=75, brightness=75, acne=5)
              for n in range(7)]
    photos.append(make_photo("first", days_ago(40), hydration=50, texture=50, brightness=50, acne=30))
    entries = [make_entry(f"j{n}", days_ago(n, hour=9), sleep=8, water=9) for n in range(7)]
    usage = [make_usage("p1", days_ago(n, hour=7), rating=5) for n in range(7)]
    return InsightSnapshot(photos=photos, journal_entries=entries, products=[serum], usage_history=usage)


def _every_insight():
    photos = [
        make_photo("latest", days_ago(1), hydration=80, texture=80, brightness=80),
        make_photo("oldest", days_ago(4), hydration=60, texture=60, brightness=60),
        make_photo("first", days_ago(30), hydration=50, texture=50, brightness=50),
    ]
    return InsightSnapshot(photos=photos)


class TestReportBounds:

    @pytest.mark.parametrize("snapshot_factory", [
        InsightSnapshot,
        _stressed_snapshot,
        _many_replacements,
        _every_win,
        _every_insight,
    ])
    def test_lists_are_never_empty_and_within_limits(self, clock, snapshot_factory):
        report = build_rule_based_report(collect_insight_data(snapshot_factory(), clock), clock)
        assert 1 <= len(report.wins) <= 3
        assert 1 <= len(report.insights) <= 3
        assert 1 <= len(report.recommendations) <= 5
        assert report.summary

    def test_many_replacements_fill_recommendations(self, clock):
        report = build_rule_based_report(collect_insight_data(_many_replacements(), clock), clock)
        assert len(report.recommendations) == 5
        assert all(r.startswith("Stop using Acme Cream") for r in report.recommendations)
        assert len(report.product_report.replace) == 8

    def test_every_win_is_clipped(self, clock):
        report = build_rule_based_report(collect_insight_data(_every_win(), clock), clock)
        assert report.wins == [
            "7 day photo streak! Keep it up!",
            "7 day journal streak! Amazing consistency!",
            "100% consistency this week - excellent tracking!",
        ]
        assert report.product_report.working[0].product == "Glow Hydra Serum"

    def test_every_insight_is_clipped(self, clock):
        report = build_rule_based_report(collect_insight_data(_every_insight(), clock), clock)
        assert len(report.insights) == 3
        assert report.insights[0].startswith("Your 30-day +30% hydration improvement aligns")
        assert report.insights[1] == "Hydration improved 20% - imagine results with daily tracking!"
