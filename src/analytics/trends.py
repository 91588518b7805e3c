"""Short-window trend classification and habit averages."""

from __future__ import annotations

from datetime import timedelta
from typing import List, Sequence, TypeVar

import pandas as pd

from analytics.aggregation import classify_trend, metric_value, round_half_up
from clock import Clock
from constants import INVERTED_METRICS, METRICS, RECENT_WINDOW_DAYS
from models import HabitAverages, JournalEntry, MetricTrend, MoodDistribution, Photo, PhotoTrends

T = TypeVar("T", Photo, JournalEntry)


def recent_window(items: Sequence[T], clock: Clock, days: int = RECENT_WINDOW_DAYS) -> List[T]:
    """Items no older than `days` x 24h before now, newest first."""
    cutoff = clock.now() - timedelta(days=days)
    recent = [i for i in items if clock.localize(i.timestamp) >= cutoff]
    return sorted(recent, key=lambda i: clock.localize(i.timestamp), reverse=True)


def calculate_photo_trends(photos: Sequence[Photo]) -> PhotoTrends:
    """Classify each metric between the oldest and newest photo of the window.

    `photos` must already be sorted newest first.  For acne the direction is
    computed oldest -> latest so that 'up' means fewer breakouts, while the
    reported `change` stays the raw latest - oldest difference.
    """
    latest = photos[0] if photos else None
    if len(photos) < 2:
        return PhotoTrends(**{
            m: MetricTrend(current=metric_value(latest, m), change=0, trend="stable")
            for m in METRICS
        })

    oldest = photos[-1]
    trends = {}
    for m in METRICS:
        now_val = metric_value(latest, m)
        then_val = metric_value(oldest, m)
        if m in INVERTED_METRICS:
            trend = classify_trend(then_val, now_val)
        else:
            trend = classify_trend(now_val, then_val)
        trends[m] = MetricTrend(
            current=now_val,
            change=int(round_half_up(now_val - then_val)),
            trend=trend,
        )
    return PhotoTrends(**trends)


def calculate_habit_averages(entries: Sequence[JournalEntry]) -> HabitAverages:
    if not entries:
        return HabitAverages()

    df = pd.DataFrame({
        "sleep": [e.sleep_hours for e in entries],
        "water": [e.water_intake for e in entries],
        "stress": [e.stress_level for e in entries],
        "mood": [e.mood.value for e in entries],
    })
    total = len(df)
    counts = df["mood"].value_counts()
    mood = MoodDistribution(**{
        level: int(counts.get(level, 0)) / total * 100
        for level in ("great", "good", "okay", "bad")
    })
    return HabitAverages(
        sleep=float(df["sleep"].mean()),
        water=float(df["water"].mean()),
        stress=float(df["stress"].mean()),
        mood=mood,
    )
