"""
Tests for the short-window trend analyzer.

Covers: the rolling 5-day window, per-metric trend direction (acne inverted),
and journal habit averages.
"""

import pytest

from analytics.trends import calculate_habit_averages, calculate_photo_trends, recent_window
from conftest import days_ago, make_entry, make_photo


class TestRecentWindow:

    def test_keeps_last_five_days_newest_first(self, clock):
        photos = [
            make_photo("old", days_ago(6)),
            make_photo("mid", days_ago(3)),
            make_photo("new", days_ago(1)),
        ]
        assert [p.id for p in recent_window(photos, clock)] == ["new", "mid"]

    def test_boundary_is_inclusive(self, clock):
        photos = [make_photo("edge", days_ago(5))]
        assert len(recent_window(photos, clock)) == 1

    def test_empty(self, clock):
        assert recent_window([], clock) == []


class TestPhotoTrends:

    def test_single_photo_is_stable(self):
        trends = calculate_photo_trends([make_photo("a", days_ago(1), hydration=64)])
        assert trends.hydration.current == 64
        assert trends.hydration.change == 0
        for metric in ("hydration", "texture", "brightness", "acne"):
            assert getattr(trends, metric).trend == "stable"

    def test_no_photos_reads_zero(self):
        trends = calculate_photo_trends([])
        assert trends.brightness.current == 0
        assert trends.acne.trend == "stable"

    def test_directions_between_oldest_and_latest(self):
        latest = make_photo("b", days_ago(1), hydration=70, texture=61, brightness=52, acne=10)
        oldest = make_photo("a", days_ago(4), hydration=60, texture=60, brightness=60, acne=20)
        trends = calculate_photo_trends([latest, oldest])

        assert trends.hydration.trend == "up"
        assert trends.hydration.change == 10
        assert trends.texture.trend == "stable"
        assert trends.texture.change == 1
        assert trends.brightness.trend == "down"
        assert trends.brightness.change == -8

    def test_fewer_breakouts_is_up(self):
        latest = make_photo("b", days_ago(1), acne=10)
        oldest = make_photo("a", days_ago(3), acne=20)
        trends = calculate_photo_trends([latest, oldest])
        assert trends.acne.trend == "up"
        assert trends.acne.change == -10


class TestHabitAverages:

    def test_empty_defaults(self):
        habits = calculate_habit_averages([])
        assert habits.sleep == 0.0
        assert habits.mood.great == 0.0

    def test_means_and_mood_distribution(self):
        entries = [
            make_entry("j1", days_ago(1), mood="good", sleep=6, water=7, stress=2),
            make_entry("j2", days_ago(2), mood="great", sleep=8, water=9, stress=4),
        ]
        habits = calculate_habit_averages(entries)
        assert habits.sleep == pytest.approx(7.0)
        assert habits.water == pytest.approx(8.0)
        assert habits.stress == pytest.approx(3.0)
        assert habits.mood.good == pytest.approx(50.0)
        assert habits.mood.great == pytest.approx(50.0)
        assert habits.mood.bad == 0.0
