"""
Product Impact Analyzer
=======================
Attributes photo-metric differences to a product's usage events.

A photo counts as "after use" when some usage event of the product happened
within (0h, 48h] before it; every other photo is baseline.  Impact per metric
is mean(after use) - mean(baseline), and the verdict is evaluated in the order
keep -> replace -> monitor.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from analytics.aggregation import average, metric_value, round_half_up
from clock import Clock
from constants import (
    ATTRIBUTION_WINDOW_HOURS,
    CONFIDENCE_BASE,
    CONFIDENCE_CAP,
    DEFAULT_PRODUCT_RATING,
    IMPACT_METRICS,
    KEEP_CONFIDENCE_USAGE_DIVISOR,
    KEEP_MIN_AVG_RATING,
    KEEP_MIN_OVERALL_IMPACT,
    MIN_USAGE_FOR_CONFIDENCE,
    MONITOR_CONFIDENCE,
    MONITOR_LOW_CONFIDENCE,
    MONITOR_TARGET_DAYS,
    NEGATIVE_NOTE_KEYWORDS,
    NEGATIVE_RATING_BELOW,
    NEGATIVE_SKIN_CONDITION,
    REPLACE_CONFIDENCE_EVENTS_DIVISOR,
    REPLACE_MAX_NEGATIVE_EVENTS,
    REPLACE_MAX_OVERALL_IMPACT,
    REPLACE_MIN_AVG_RATING,
)
from models import (
    Photo,
    Product,
    ProductAnalysis,
    ProductEvidence,
    ProductImpact,
    ProductUsageEntry,
    Verdict,
)

log = logging.getLogger("product_impact")


def is_negative_event(usage: ProductUsageEntry) -> bool:
    if usage.skin_condition == NEGATIVE_SKIN_CONDITION:
        return True
    if usage.rating and usage.rating < NEGATIVE_RATING_BELOW:
        return True
    notes = (usage.notes or "").lower()
    return any(k in notes for k in NEGATIVE_NOTE_KEYWORDS)


def split_photos_by_usage(
    photos: Sequence[Photo],
    usage: Sequence[ProductUsageEntry],
    clock: Clock,
) -> Tuple[List[Photo], List[Photo]]:
    """Return (after_use, baseline) photo lists."""
    usage_times = [clock.localize(u.timestamp) for u in usage]
    after_use: List[Photo] = []
    baseline: List[Photo] = []
    for photo in photos:
        taken = clock.localize(photo.timestamp)
        attributed = any(
            0 < (taken - used).total_seconds() / 3600 <= ATTRIBUTION_WINDOW_HOURS
            for used in usage_times
        )
        (after_use if attributed else baseline).append(photo)
    return after_use, baseline


def _impact(after_use: Sequence[Photo], baseline: Sequence[Photo]) -> ProductImpact:
    if not after_use or not baseline:
        return ProductImpact()
    deltas = {
        m: round_half_up(
            average(metric_value(p, m) for p in after_use)
            - average(metric_value(p, m) for p in baseline),
            1,
        )
        for m in IMPACT_METRICS
    }
    return ProductImpact(overall=sum(deltas.values()) / len(deltas), **deltas)


def decide_verdict(overall: float, avg_rating: float, negative_events: int,
                   usage_count: int) -> Tuple[Verdict, float]:
    if (overall > KEEP_MIN_OVERALL_IMPACT and avg_rating >= KEEP_MIN_AVG_RATING
            and negative_events == 0):
        return "keep", min(CONFIDENCE_CAP,
                           CONFIDENCE_BASE + usage_count / KEEP_CONFIDENCE_USAGE_DIVISOR)
    if (overall < REPLACE_MAX_OVERALL_IMPACT or negative_events > REPLACE_MAX_NEGATIVE_EVENTS
            or avg_rating < REPLACE_MIN_AVG_RATING):
        return "replace", min(CONFIDENCE_CAP,
                              CONFIDENCE_BASE + negative_events / REPLACE_CONFIDENCE_EVENTS_DIVISOR)
    if usage_count < MIN_USAGE_FOR_CONFIDENCE:
        return "monitor", MONITOR_LOW_CONFIDENCE
    return "monitor", MONITOR_CONFIDENCE


def _recommendation(verdict: Verdict, impact: ProductImpact, usage_count: int,
                    avg_rating: float, negative_events: int) -> str:
    if verdict == "keep":
        effect = (f"Showing +{impact.overall:.1f}% improvement" if impact.overall > 0
                  else "No negative effects detected")
        return (f"KEEP USING - {effect}. {usage_count} days of consistent use "
                f"with {avg_rating:.1f}/5 average rating.")
    if verdict == "replace":
        effect = (f"Causing {abs(impact.overall):.1f}% decline" if impact.overall < 0
                  else "Negative effects detected")
        return f"REPLACE - {effect} ({negative_events} issues reported). Consider alternatives."
    status = "Need more data" if usage_count < MIN_USAGE_FOR_CONFIDENCE else "Mixed results"
    remaining = max(1, MONITOR_TARGET_DAYS - usage_count)
    return f"MONITOR - {status}. Continue for {remaining} more days to confirm effectiveness."


def analyze_product_performance(
    product: Product,
    usage_history: Sequence[ProductUsageEntry],
    photos: Sequence[Photo],
    clock: Clock,
) -> ProductAnalysis:
    usage = [u for u in usage_history if u.product_id == product.id]

    if not usage:
        return ProductAnalysis(
            product=product,
            impact=ProductImpact(),
            verdict="monitor",
            confidence=0.0,
            evidence=ProductEvidence(),
            recommendation="Start using this product consistently to track its effectiveness",
        )

    after_use, baseline = split_photos_by_usage(photos, usage, clock)
    impact = _impact(after_use, baseline)

    ratings = [r for r in (u.rating or product.rating or DEFAULT_PRODUCT_RATING for u in usage) if r > 0]
    avg_rating = average(ratings) if ratings else float(DEFAULT_PRODUCT_RATING)
    negative_events = sum(1 for u in usage if is_negative_event(u))

    verdict, confidence = decide_verdict(impact.overall, avg_rating, negative_events, len(usage))
    log.debug("Product %s: verdict=%s overall=%.2f rating=%.2f negatives=%d",
              product.id, verdict, impact.overall, avg_rating, negative_events)

    return ProductAnalysis(
        product=product,
        impact=impact,
        verdict=verdict,
        confidence=confidence,
        evidence=ProductEvidence(
            days_used=len(usage),
            avg_rating=avg_rating,
            negative_events=negative_events,
            photos_analyzed=len(after_use),
        ),
        recommendation=_recommendation(verdict, impact, len(usage), avg_rating, negative_events),
    )
