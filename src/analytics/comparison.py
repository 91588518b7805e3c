"""Oldest-vs-newest photo comparison over the whole history."""

from __future__ import annotations

import math
from typing import Sequence

from analytics.aggregation import round_half_up
from clock import Clock
from constants import COMPARISON_MIN_DAYS, INVERTED_METRICS, METRICS
from models import LongHorizonComparison, MetricDelta, Photo


def calculate_long_horizon_comparison(photos: Sequence[Photo], clock: Clock) -> LongHorizonComparison:
    """Compare the single oldest and single newest photo ever recorded.

    Despite the "30-day" naming downstream, the endpoints are not a rolling
    30-day pair; the comparison only requires a span of at least
    COMPARISON_MIN_DAYS and analysis metrics on both endpoints.
    """
    if len(photos) < 2:
        return LongHorizonComparison()

    ordered = sorted(photos, key=lambda p: clock.localize(p.timestamp))
    first, last = ordered[0], ordered[-1]
    span = clock.localize(last.timestamp) - clock.localize(first.timestamp)
    days_between = math.floor(span.total_seconds() / 86400)

    if days_between < COMPARISON_MIN_DAYS or first.analysis is None or last.analysis is None:
        return LongHorizonComparison(
            day1_photo=first if days_between >= COMPARISON_MIN_DAYS else None,
            day30_photo=last,
            days_between=days_between,
        )

    improvement = {}
    for m in METRICS:
        before = getattr(first.analysis, m)
        after = getattr(last.analysis, m)
        delta = before - after if m in INVERTED_METRICS else after - before
        improvement[m] = round_half_up(delta, 1)

    return LongHorizonComparison(
        day1_photo=first,
        day30_photo=last,
        improvement=MetricDelta(**improvement),
        days_between=days_between,
        has_comparison=True,
    )
