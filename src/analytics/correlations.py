"""
Heuristic habit -> skin comparisons.

Three fixed factor splits are evaluated; each one buckets journal entries by a
threshold, joins the buckets to same-calendar-day photos and compares group
means of one metric.  These are not statistical correlations: the emitted
confidence is a sample-size heuristic, not a probability.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence

import pandas as pd

from analytics.aggregation import metric_value, signed
from clock import Clock
from constants import (
    CONFIDENCE_BASE,
    CONFIDENCE_CAP,
    CORRELATION_CONFIDENCE_DIVISOR,
    CORRELATION_MIN_DIFF,
    CORRELATION_MIN_JOURNALS,
    CORRELATION_MIN_PHOTOS,
    SLEEP_GOOD_HOURS,
    SLEEP_POOR_HOURS,
    STRESS_HIGH_MIN,
    STRESS_LOW_MAX,
    WATER_HIGH_GLASSES,
)
from models import Correlation, JournalEntry, Photo

log = logging.getLogger("correlations")


@dataclass(frozen=True)
class FactorSplit:
    factor: str
    metric: str
    favourable: Callable[[pd.DataFrame], pd.Series]
    unfavourable: Callable[[pd.DataFrame], pd.Series]
    describe: Callable[[float], str]
    # True when a lower metric value is the good outcome (acne)
    lower_is_better: bool = False


FACTOR_SPLITS = (
    FactorSplit(
        factor=f"{WATER_HIGH_GLASSES}+ glasses water daily",
        metric="hydration",
        favourable=lambda j: j["water"] >= WATER_HIGH_GLASSES,
        unfavourable=lambda j: j["water"] < WATER_HIGH_GLASSES,
        describe=lambda d: f"{signed(d)}% better hydration",
    ),
    FactorSplit(
        factor=f"{SLEEP_GOOD_HOURS}+ hours sleep",
        metric="brightness",
        favourable=lambda j: j["sleep"] >= SLEEP_GOOD_HOURS,
        unfavourable=lambda j: j["sleep"] < SLEEP_POOR_HOURS,
        describe=lambda d: f"{signed(d)}% brighter skin",
    ),
    FactorSplit(
        factor=f"Low stress (≤{STRESS_LOW_MAX}/5)",
        metric="acne",
        favourable=lambda j: j["stress"] <= STRESS_LOW_MAX,
        unfavourable=lambda j: j["stress"] >= STRESS_HIGH_MIN,
        describe=lambda d: f"{d:.1f}% fewer breakouts",
        lower_is_better=True,
    ),
)


def _photo_frame(photos: Sequence[Photo], clock: Clock) -> pd.DataFrame:
    return pd.DataFrame({
        "day": [clock.local_date(p.timestamp) for p in photos],
        "hydration": [metric_value(p, "hydration") for p in photos],
        "brightness": [metric_value(p, "brightness") for p in photos],
        "acne": [metric_value(p, "acne") for p in photos],
    })


def _journal_frame(entries: Sequence[JournalEntry], clock: Clock) -> pd.DataFrame:
    return pd.DataFrame({
        "day": [clock.local_date(e.timestamp) for e in entries],
        "water": [e.water_intake for e in entries],
        "sleep": [e.sleep_hours for e in entries],
        "stress": [e.stress_level for e in entries],
    })


def _evaluate(split: FactorSplit, photo_df: pd.DataFrame,
              journal_df: pd.DataFrame) -> Correlation | None:
    good_days = journal_df[split.favourable(journal_df)]
    bad_days = journal_df[split.unfavourable(journal_df)]
    if good_days.empty or bad_days.empty:
        return None

    good_photos = photo_df[photo_df["day"].isin(set(good_days["day"]))]
    bad_photos = photo_df[photo_df["day"].isin(set(bad_days["day"]))]
    if good_photos.empty or bad_photos.empty:
        return None

    good_mean = float(good_photos[split.metric].mean())
    bad_mean = float(bad_photos[split.metric].mean())

    if split.lower_is_better:
        # Directional: only fewer breakouts on calm days counts
        diff = bad_mean - good_mean
        if diff <= CORRELATION_MIN_DIFF:
            return None
    else:
        diff = good_mean - bad_mean
        if abs(diff) <= CORRELATION_MIN_DIFF:
            return None

    confidence = min(CONFIDENCE_CAP,
                     CONFIDENCE_BASE + len(good_days) / CORRELATION_CONFIDENCE_DIVISOR)
    return Correlation(factor=split.factor, impact=split.describe(diff), confidence=confidence)


def find_correlations(
    photos: Sequence[Photo],
    journal_entries: Sequence[JournalEntry],
    clock: Clock,
) -> List[Correlation]:
    if len(photos) < CORRELATION_MIN_PHOTOS or len(journal_entries) < CORRELATION_MIN_JOURNALS:
        return []

    photo_df = _photo_frame(photos, clock)
    journal_df = _journal_frame(journal_entries, clock)

    found: List[Correlation] = []
    for split in FACTOR_SPLITS:
        corr = _evaluate(split, photo_df, journal_df)
        if corr is not None:
            found.append(corr)
    log.debug("Correlation scan: %d of %d factor splits emitted", len(found), len(FACTOR_SPLITS))
    return found
