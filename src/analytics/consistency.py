"""7-day tracking buckets, streaks and completion percentage."""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable, List, Sequence

from analytics.aggregation import round_half_up
from clock import Clock
from constants import CONSISTENCY_WINDOW_DAYS, DAY_NAMES, STREAK_MAX_GAP_DAYS
from models import ConsistencyData, DailyTracking, JournalEntry, Photo, ProductUsageEntry


def _current_streak(flags: Sequence[bool]) -> int:
    """Consecutive True values counted backwards from the last element (today)."""
    streak = 0
    for flag in reversed(flags):
        if not flag:
            break
        streak += 1
    return streak


def all_time_streak(timestamps: Iterable[datetime], clock: Clock) -> int:
    """Entries chained newest-first while each gap is at most one whole day.

    The chain is anchored at now: if the newest entry is already more than a
    day old the streak is 0.  Not bounded to the 7-day window.
    """
    ordered = sorted((clock.localize(t) for t in timestamps), reverse=True)
    last = clock.now()
    streak = 0
    for ts in ordered:
        days_diff = math.floor((last - ts).total_seconds() / 86400)
        if days_diff > STREAK_MAX_GAP_DAYS:
            break
        streak += 1
        last = ts
    return streak


def calculate_consistency(
    photos: Sequence[Photo],
    journal_entries: Sequence[JournalEntry],
    usage_history: Sequence[ProductUsageEntry],
    clock: Clock,
    window_days: int = CONSISTENCY_WINDOW_DAYS,
) -> ConsistencyData:
    today = clock.today()
    photo_days = {clock.local_date(p.timestamp) for p in photos}
    journal_days = {clock.local_date(e.timestamp) for e in journal_entries}
    usage_days = {clock.local_date(u.timestamp) for u in usage_history}

    last_days: List[DailyTracking] = []
    for offset in range(window_days - 1, -1, -1):
        day = today - timedelta(days=offset)
        last_days.append(DailyTracking(
            date=day.isoformat(),
            day_name=DAY_NAMES[day.weekday()],
            has_photo=day in photo_days,
            has_journal=day in journal_days,
            has_product=day in usage_days,
        ))

    photo_flags = [d.has_photo for d in last_days]
    journal_flags = [d.has_journal for d in last_days]

    possible_entries = len(last_days) * 2
    actual_entries = sum(photo_flags) + sum(journal_flags)
    percentage = 0
    if possible_entries:
        percentage = int(round_half_up(actual_entries / possible_entries * 100))

    return ConsistencyData(
        photo_streak=all_time_streak((p.timestamp for p in photos), clock),
        journal_streak=all_time_streak((e.timestamp for e in journal_entries), clock),
        current_photo_streak=_current_streak(photo_flags),
        current_journal_streak=_current_streak(journal_flags),
        consistency_percentage=percentage,
        last_7_days=last_days,
        total_days_tracked=sum(1 for d in last_days if d.has_photo or d.has_journal),
        total_possible_days=len(last_days),
    )
