"""Monday-Sunday weekly stats, week-over-week trends and rule-based advice."""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from analytics.aggregation import round_half_up
from clock import Clock
from constants import (
    HIGH_STRESS_AVG,
    SLEEP_GOOD_HOURS,
    SLEEP_POOR_HOURS,
    WATER_HIGH_GLASSES,
    WEEKLY_DEDUP_PREFIX_CHARS,
    WEEKLY_FULL_DAYS,
    WEEKLY_GLOW_WIN_POINTS,
    WEEKLY_GOOD_DAYS,
    WEEKLY_GOOD_MOOD_AVG,
    WEEKLY_LOW_WATER_GLASSES,
    WEEKLY_MAX_ADVICE,
    WEEKLY_MIN_JOURNALS,
    WEEKLY_MIN_PHOTOS,
    WEEKLY_MOOD_SCORES,
    WEEKLY_PHOTO_PRAISE_MIN,
    WEEKLY_STREAK_HIGHLIGHT_DAYS,
    WEEKLY_TOP_IMPROVEMENTS,
    WEEKLY_TREND_BANDS,
)
from models import JournalEntry, Photo, WeeklyStats, WeeklySummary, WeeklyTrend, WeeklyTrends


def week_bounds(day: date) -> Tuple[date, date]:
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def _positive_mean(values: Sequence[float]) -> float:
    s = pd.Series(values, dtype="float64")
    s = s[s > 0]
    return float(s.mean()) if not s.empty else 0.0


def _glow_score(photo: Photo) -> float:
    a = photo.analysis
    return (a.hydration + a.texture + a.brightness + (100 - a.acne)) / 4


def calculate_weekly_stats(
    day: date,
    photos: Sequence[Photo],
    journal_entries: Sequence[JournalEntry],
    daily_completions: Sequence[date],
    current_streak: int,
    clock: Clock,
) -> WeeklyStats:
    start, end = week_bounds(day)

    week_photos = sorted(
        (p for p in photos if start <= clock.local_date(p.timestamp) <= end),
        key=lambda p: clock.localize(p.timestamp),
        reverse=True,
    )
    week_entries = [e for e in journal_entries if start <= clock.local_date(e.timestamp) <= end]
    completions = {d for d in daily_completions if start <= d <= end}

    glow_change: Optional[float] = None
    if len(week_photos) >= 2 and week_photos[0].analysis and week_photos[-1].analysis:
        glow_change = _glow_score(week_photos[0]) - _glow_score(week_photos[-1])

    improvements: List[str] = []
    for p in week_photos:
        if p.analysis:
            improvements.extend(p.analysis.improvements)

    avg_mood = _positive_mean([WEEKLY_MOOD_SCORES.get(e.mood.value, 0) for e in week_entries])
    avg_sleep = _positive_mean([e.sleep_hours for e in week_entries])
    avg_water = _positive_mean([e.water_intake for e in week_entries])
    avg_stress = _positive_mean([e.stress_level for e in week_entries])

    highlights: List[str] = []
    if len(completions) >= WEEKLY_FULL_DAYS:
        highlights.append("Perfect week! Completed all 7 days")
    if current_streak >= WEEKLY_STREAK_HIGHLIGHT_DAYS:
        highlights.append(f"Maintained a {current_streak}-day streak!")
    if avg_mood >= WEEKLY_GOOD_MOOD_AVG:
        highlights.append("Great mood average this week!")
    if avg_sleep >= SLEEP_GOOD_HOURS:
        highlights.append("Consistent good sleep")

    return WeeklyStats(
        week_number=start.isocalendar()[1],
        start_date=start.isoformat(),
        end_date=end.isoformat(),
        days_completed=len(completions),
        photos_taken=len(week_photos),
        journal_entries=len(week_entries),
        average_mood=avg_mood,
        average_sleep=avg_sleep,
        average_water=avg_water,
        average_stress=avg_stress,
        routine_completion_rate=len(completions) / WEEKLY_FULL_DAYS * 100,
        streak_days=current_streak,
        glow_score_change=glow_change,
        top_improvements=improvements[:WEEKLY_TOP_IMPROVEMENTS],
        highlights=highlights,
    )


def _direction(diff: float, band: float) -> WeeklyTrend:
    if diff > band:
        return "improving"
    if diff < -band:
        return "declining"
    return "stable"


def calculate_weekly_trends(current: WeeklyStats, previous: Optional[WeeklyStats]) -> WeeklyTrends:
    if previous is None:
        return WeeklyTrends()
    return WeeklyTrends(
        mood_trend=_direction(current.average_mood - previous.average_mood,
                              WEEKLY_TREND_BANDS["mood"]),
        sleep_trend=_direction(current.average_sleep - previous.average_sleep,
                               WEEKLY_TREND_BANDS["sleep"]),
        water_trend=_direction(current.average_water - previous.average_water,
                               WEEKLY_TREND_BANDS["water"]),
        consistency_trend=_direction(current.days_completed - previous.days_completed,
                                     WEEKLY_TREND_BANDS["consistency"]),
    )


def weekly_insights(stats: WeeklyStats, trends: WeeklyTrends) -> List[str]:
    out: List[str] = []
    if stats.days_completed >= WEEKLY_FULL_DAYS:
        out.append("Perfect consistency! You completed every day this week.")
    elif stats.days_completed >= WEEKLY_GOOD_DAYS:
        out.append(f"Great week! You completed {stats.days_completed} out of 7 days.")
    if stats.average_mood >= WEEKLY_GOOD_MOOD_AVG:
        out.append("Your mood has been consistently positive this week!")
    if stats.average_sleep >= SLEEP_GOOD_HOURS:
        out.append("Excellent sleep habits! Your body is getting the rest it needs.")
    elif stats.average_sleep < SLEEP_POOR_HOURS:
        out.append("Try to aim for 7-8 hours of sleep for optimal skin health.")
    if stats.average_water >= WATER_HIGH_GLASSES:
        out.append("Great hydration! Keep drinking water for glowing skin.")
    elif stats.average_water < WEEKLY_LOW_WATER_GLASSES:
        out.append("Increase water intake - aim for 8+ glasses daily for better skin.")
    if trends.mood_trend == "improving":
        out.append("Your mood is improving - keep up the great work!")
    if trends.consistency_trend == "improving":
        out.append("You're becoming more consistent with your routine!")
    if stats.glow_score_change is not None and stats.glow_score_change > WEEKLY_GLOW_WIN_POINTS:
        points = int(round_half_up(stats.glow_score_change))
        out.append(f"Amazing progress! Your glow score improved by {points} points.")
    if stats.photos_taken >= WEEKLY_PHOTO_PRAISE_MIN:
        out.append("Great job tracking your progress with photos!")
    return out or ["Keep up the great work on your glow journey!"]


def weekly_recommendations(stats: WeeklyStats, trends: WeeklyTrends) -> List[str]:
    out: List[str] = []
    if stats.days_completed < WEEKLY_GOOD_DAYS:
        out.append("Aim to complete your routine 5-7 days this week for best results.")
    if stats.average_sleep < SLEEP_GOOD_HOURS:
        out.append("Try to get 7-8 hours of sleep each night for optimal skin recovery.")
    if stats.average_water < WATER_HIGH_GLASSES:
        out.append("Increase your daily water intake to 8+ glasses for better hydration.")
    if stats.average_stress > HIGH_STRESS_AVG:
        out.append("Consider stress-reducing activities like meditation or light exercise.")
    if stats.photos_taken < WEEKLY_MIN_PHOTOS:
        out.append("Take at least 2 progress photos this week to track your transformation.")
    if stats.journal_entries < WEEKLY_MIN_JOURNALS:
        out.append("Log your daily journal entries to identify patterns and insights.")
    if trends.mood_trend == "declining":
        out.append("Focus on self-care activities that boost your mood and wellbeing.")
    if trends.consistency_trend == "declining":
        out.append("Set a daily reminder to maintain your skincare routine consistency.")
    return out or ["Keep maintaining your excellent routine!"]


def merge_weekly_advice(ai_items: Sequence[str], rule_items: Sequence[str],
                        limit: int = WEEKLY_MAX_ADVICE) -> List[str]:
    """Collaborator items first, then rule-based items not already covered by one.

    A rule-based item counts as covered when its first few characters
    (case-insensitive) occur inside any collaborator item.
    """
    ai_lower = [a.lower() for a in ai_items]
    extra = [
        r for r in rule_items
        if not any(r.lower()[:WEEKLY_DEDUP_PREFIX_CHARS] in a for a in ai_lower)
    ]
    merged = (list(ai_items) + extra)[:limit]
    return merged or list(rule_items)


def generate_weekly_summary(
    day: date,
    photos: Sequence[Photo],
    journal_entries: Sequence[JournalEntry],
    daily_completions: Sequence[date],
    current_streak: int,
    clock: Clock,
) -> WeeklySummary:
    stats = calculate_weekly_stats(day, photos, journal_entries, daily_completions,
                                   current_streak, clock)
    previous = calculate_weekly_stats(day - timedelta(days=7), photos, journal_entries,
                                      daily_completions, 0, clock)
    trends = calculate_weekly_trends(stats, previous)
    return WeeklySummary(
        stats=stats,
        previous_week=previous,
        trends=trends,
        insights=weekly_insights(stats, trends),
        recommendations=weekly_recommendations(stats, trends),
    )
