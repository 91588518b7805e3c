"""Insight pipeline orchestration with a guaranteed rule-based fallback."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

from analytics.comparison import calculate_long_horizon_comparison
from analytics.consistency import calculate_consistency
from analytics.correlations import find_correlations
from analytics.product_impact import analyze_product_performance
from analytics.trends import calculate_habit_averages, calculate_photo_trends, recent_window
from analytics.weekly_summary import (
    generate_weekly_summary,
    merge_weekly_advice,
    week_bounds,
)
from clock import Clock
from config import Settings, load_settings
from constants import RECENT_WINDOW_DAYS, WEEKLY_AI_WIN_PREFIX
from insight_agents import InsightGenerator, build_generator
from models import (
    AIInsightResult,
    InsightData,
    InsightOutcome,
    InsightSnapshot,
    MinimumRequirements,
    WeeklySummary,
)
from pipeline.prompt_builder import build_insight_prompt
from pipeline.requirements_gate import check_minimum_requirements
from pipeline.response_parser import Err, parse_collaborator_response
from pipeline.rule_based import bound_report_lists, build_rule_based_report

log = logging.getLogger("insight_pipeline")


def collect_insight_data(snapshot: InsightSnapshot, clock: Clock) -> InsightData:
    """Compute every aggregate for one snapshot.  Pure: nothing is cached or mutated."""
    recent_photos = recent_window(snapshot.photos, clock)
    recent_journal = recent_window(snapshot.journal_entries, clock)

    recent_ids = set()
    recent_usage = []
    window_start = clock.now() - timedelta(days=RECENT_WINDOW_DAYS)
    for usage in snapshot.usage_history:
        if clock.localize(usage.timestamp) >= window_start:
            recent_usage.append(usage)
            recent_ids.add(usage.product_id)

    active_products = [p for p in snapshot.products if p.id in recent_ids]
    current_routine = next((r for r in snapshot.routines if r.is_active), None)

    return InsightData(
        recent_photos=recent_photos,
        photo_trends=calculate_photo_trends(recent_photos),
        recent_journal=recent_journal,
        habit_averages=calculate_habit_averages(recent_journal),
        active_products=active_products,
        recent_usage=recent_usage,
        current_routine=current_routine,
        product_analyses=[
            analyze_product_performance(p, snapshot.usage_history, snapshot.photos, clock)
            for p in active_products
        ],
        correlations=find_correlations(snapshot.photos, snapshot.journal_entries, clock),
        thirty_day_comparison=calculate_long_horizon_comparison(snapshot.photos, clock),
        consistency=calculate_consistency(
            snapshot.photos, snapshot.journal_entries, snapshot.usage_history, clock),
    )


def generate_ai_insights(data: InsightData, clock: Clock,
                         generator: Optional[InsightGenerator]) -> AIInsightResult:
    """Ask the collaborator once; on any failure return the rule-based report."""
    if generator is None:
        return build_rule_based_report(data, clock)

    try:
        raw = generator.generate(build_insight_prompt(data, clock))
        parsed = parse_collaborator_response(raw)
        if isinstance(parsed, Err):
            log.warning("Malformed collaborator response (%s): %s", generator.name, parsed.reason)
        else:
            report = parsed.value
            wins, insights, recommendations = bound_report_lists(
                report.wins, report.insights, report.recommendations, data.consistency)
            log.info("Insights generated via %s", generator.name)
            return AIInsightResult(
                consistency=data.consistency,
                wins=wins,
                insights=insights,
                recommendations=recommendations,
                product_report=report.product_report,
                summary=report.summary,
                generated_at=clock.now().isoformat(),
                source="ai",
            )
    except Exception as e:
        log.warning("Collaborator %s failed, using rule-based fallback: %s", generator.name, e)

    log.info("Insights generated via rule-based fallback")
    return build_rule_based_report(data, clock)


def generate_insights(snapshot: InsightSnapshot, clock: Clock,
                      generator: Optional[InsightGenerator] = None) -> AIInsightResult:
    return generate_ai_insights(collect_insight_data(snapshot, clock), clock, generator)


def _week_snapshot(snapshot: InsightSnapshot, day: date, clock: Clock) -> InsightSnapshot:
    """The snapshot restricted to the Monday-Sunday week containing `day`."""
    start, end = week_bounds(day)

    def in_week(ts) -> bool:
        return start <= clock.local_date(ts) <= end

    return snapshot.model_copy(update={
        "photos": [p for p in snapshot.photos if in_week(p.timestamp)],
        "journal_entries": [e for e in snapshot.journal_entries if in_week(e.timestamp)],
        "usage_history": [u for u in snapshot.usage_history if in_week(u.timestamp)],
    })


def generate_weekly_summary_with_ai(day: date, snapshot: InsightSnapshot, clock: Clock,
                                    generator: Optional[InsightGenerator]) -> WeeklySummary:
    """Weekly summary whose advice leads with collaborator output for that week.

    Collaborator insights (plus its wins, prefixed) and recommendations come
    first; rule-based items already covered by them are dropped and each list
    is capped.  Any failure, or a rule-based fallback report, leaves the pure
    rule-based summary.
    """
    summary = generate_weekly_summary(
        day,
        snapshot.photos,
        snapshot.journal_entries,
        snapshot.daily_completions,
        snapshot.current_streak,
        clock,
    )
    if generator is None:
        return summary

    try:
        week_data = collect_insight_data(_week_snapshot(snapshot, day, clock), clock)
        result = generate_ai_insights(week_data, clock, generator)
    except Exception as e:
        log.warning("Weekly collaborator insights failed, using rule-based summary: %s", e)
        return summary
    if result.source != "ai":
        return summary

    ai_insights = result.insights + [f"{WEEKLY_AI_WIN_PREFIX}{w}" for w in result.wins]
    return summary.model_copy(update={
        "insights": merge_weekly_advice(ai_insights, summary.insights),
        "recommendations": merge_weekly_advice(result.recommendations, summary.recommendations),
    })


class InsightPipeline:
    """Gated insight generation for one user snapshot.

    Engine failures never escape: collaborator problems fall back to the
    rule-based report.  The one exception is caller input: an unknown
    timezone (in the snapshot or settings) raises ValueError from
    `clock_for`, which the API maps to 422 and the CLI to exit code 1.
    """

    def __init__(self, settings: Optional[Settings] = None,
                 generator: Optional[InsightGenerator] = None,
                 use_collaborator: bool = True):
        self.settings = settings or load_settings()
        if generator is None and use_collaborator:
            generator = build_generator(self.settings)
        self.generator = generator

    def clock_for(self, snapshot: InsightSnapshot) -> Clock:
        return Clock.for_timezone(snapshot.timezone or self.settings.timezone, now=snapshot.now)

    def collect(self, snapshot: InsightSnapshot) -> InsightData:
        return collect_insight_data(snapshot, self.clock_for(snapshot))

    def requirements(self, snapshot: InsightSnapshot) -> MinimumRequirements:
        return check_minimum_requirements(snapshot.photos, snapshot.journal_entries)

    def report(self, snapshot: InsightSnapshot, rule_based: bool = False) -> AIInsightResult:
        clock = self.clock_for(snapshot)
        generator = None if rule_based else self.generator
        return generate_insights(snapshot, clock, generator)

    def run(self, snapshot: InsightSnapshot, rule_based: bool = False) -> InsightOutcome:
        requirements = self.requirements(snapshot)
        if not requirements.met:
            log.info("Insights gated: %s", requirements.message)
            return InsightOutcome(status="insufficient_data", requirements=requirements)
        return InsightOutcome(
            status="ok",
            requirements=requirements,
            report=self.report(snapshot, rule_based=rule_based),
        )

    def weekly(self, snapshot: InsightSnapshot, rule_based: bool = False) -> WeeklySummary:
        clock = self.clock_for(snapshot)
        generator = None if rule_based else self.generator
        return generate_weekly_summary_with_ai(clock.today(), snapshot, clock, generator)
