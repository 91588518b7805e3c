"""Deterministic report builder used when the text-generation model is unavailable."""

from __future__ import annotations

from typing import List, Tuple

from clock import Clock
from constants import (
    CORRELATION_INSIGHT_CONFIDENCE,
    HABIT_MIN_JOURNALS,
    HIGH_CONSISTENCY_PCT,
    HIGH_STRESS_AVG,
    IMPROVEMENT_WIN_THRESHOLD,
    LOW_CONSISTENCY_PCT,
    MAX_INSIGHTS,
    MAX_RECOMMENDATIONS,
    MAX_WINS,
    PRODUCT_WIN_CONSISTENCY_PCT,
    SLEEP_GOOD_HOURS,
    SLEEP_POOR_HOURS,
    WATER_HIGH_GLASSES,
    WIN_STREAK_DAYS,
)
from models import (
    AIInsightResult,
    ConsistencyData,
    InsightData,
    ProductAnalysis,
    ProductReport,
    ProductReportItem,
    ReplaceReportItem,
)

_COMPARISON_WINS = (
    ("hydration", "30-day transformation: Hydration improved {v}%!"),
    ("texture", "30-day transformation: Texture improved {v}%!"),
    ("brightness", "30-day transformation: Brightness improved {v}%!"),
    ("acne", "30-day transformation: Acne reduced {v}% - clearer skin!"),
)


def _fmt(value: float) -> str:
    """Render 12.0 as '12' and 12.5 as '12.5'."""
    return f"{value:g}"


def _impact_text(analysis: ProductAnalysis) -> str:
    overall = analysis.impact.overall
    if overall > 0:
        return f"+{overall:.1f}% improvement"
    if overall < 0:
        return f"{overall:.1f}% decline"
    return "Neutral effect"


def bound_report_lists(
    wins: List[str],
    insights: List[str],
    recommendations: List[str],
    consistency: ConsistencyData,
) -> Tuple[List[str], List[str], List[str]]:
    """Pad empty lists with filler text and clip each list to its maximum."""
    wins = [w for w in wins if w]
    insights = [i for i in insights if i]
    recommendations = [r for r in recommendations if r]

    if not wins:
        if consistency.total_days_tracked > 0:
            wins.append(f"You've tracked {consistency.total_days_tracked} days - every day counts!")
        else:
            wins.append("Start your journey today - take a photo and log your first entry!")
    if not insights:
        if consistency.consistency_percentage < LOW_CONSISTENCY_PCT:
            insights.append("Track daily for 7+ days to unlock personalized patterns - consistency reveals everything")
        else:
            insights.append(f"Your {consistency.consistency_percentage}% consistency is building valuable data")
    if not recommendations:
        recommendations.append("Log photo AND journal every day this week - this will make a REAL difference")
        recommendations.append("Consistency is the #1 factor in seeing results - aim for 80%+ tracking")

    return wins[:MAX_WINS], insights[:MAX_INSIGHTS], recommendations[:MAX_RECOMMENDATIONS]


def build_rule_based_report(data: InsightData, clock: Clock) -> AIInsightResult:
    consistency = data.consistency
    pct = consistency.consistency_percentage
    photo_streak = consistency.current_photo_streak
    journal_streak = consistency.current_journal_streak
    trends = data.photo_trends

    wins: List[str] = []
    insights: List[str] = []
    recommendations: List[str] = []

    # Consistency
    if photo_streak >= WIN_STREAK_DAYS:
        wins.append(f"{photo_streak} day photo streak! Keep it up!")
    if journal_streak >= WIN_STREAK_DAYS:
        wins.append(f"{journal_streak} day journal streak! Amazing consistency!")
    if pct >= HIGH_CONSISTENCY_PCT:
        wins.append(f"{pct}% consistency this week - excellent tracking!")

    # Long-horizon comparison
    comparison = data.thirty_day_comparison
    if comparison.has_comparison:
        for metric, template in _COMPARISON_WINS:
            value = getattr(comparison.improvement, metric)
            if value > IMPROVEMENT_WIN_THRESHOLD:
                wins.append(template.format(v=_fmt(value)))

        hydration = comparison.improvement.hydration
        if hydration > 0 and trends.hydration.trend == "up":
            insights.append(f"Your 30-day +{_fmt(hydration)}% hydration improvement aligns with "
                            "recent 5-day trends - your routine is working!")
        elif hydration > 0 and trends.hydration.trend == "down":
            insights.append(f"30-day shows +{_fmt(hydration)}% hydration, but recent 5 days "
                            "declined - check what changed")

    # Short-window trends
    consistent = photo_streak >= WIN_STREAK_DAYS
    if trends.hydration.trend == "up" and trends.hydration.change > 0:
        if consistent:
            wins.append(f"Hydration improved {trends.hydration.change}% - your consistency is paying off!")
        else:
            insights.append(f"Hydration improved {trends.hydration.change}% - imagine results with daily tracking!")
    if trends.texture.trend == "up" and trends.texture.change > 0:
        tail = "consistent tracking is working!" if consistent else "track more consistently for better results"
        insights.append(f"Texture improved {trends.texture.change}% - {tail}")
    if trends.brightness.trend == "up" and trends.brightness.change > 0:
        tail = "keep logging daily!" if consistent else "log daily to see faster improvements"
        insights.append(f"Brightness increased {trends.brightness.change}% - {tail}")

    if pct < LOW_CONSISTENCY_PCT:
        insights.append(f"Your consistency is {pct}% - users with 80%+ consistency see 3x better results")
        recommendations.append("Log photo AND journal every day this week - consistency is the key to transformation")
    elif pct >= HIGH_CONSISTENCY_PCT:
        insights.append(f"Your {pct}% consistency is excellent - this level of tracking reveals real patterns")
    else:
        insights.append(f"Your {pct}% consistency is good - aim for 80%+ to unlock deeper insights")

    # Streak nudges
    if photo_streak == 0:
        recommendations.append("Start a photo streak today - take a progress photo to begin tracking")
    elif photo_streak < WIN_STREAK_DAYS:
        recommendations.append(f"You're on a {photo_streak} day photo streak - keep it going! Take a photo today")
    if journal_streak == 0:
        recommendations.append("Start logging daily - even 2 minutes makes a huge difference")
    elif journal_streak < WIN_STREAK_DAYS:
        recommendations.append(f"You're on a {journal_streak} day journal streak - log today to keep it alive!")

    # Habits
    habits = data.habit_averages
    if len(data.recent_journal) >= HABIT_MIN_JOURNALS:
        if habits.sleep >= SLEEP_GOOD_HOURS:
            wins.append("7+ hours sleep average - great for skin recovery!")
        elif habits.sleep < SLEEP_POOR_HOURS:
            recommendations.append(f"Aim for 7-8 hours sleep (currently {habits.sleep:.1f}h) - "
                                   "this will make a REAL difference")
        if habits.water >= WATER_HIGH_GLASSES:
            wins.append("8+ glasses water daily - your skin is thanking you!")
        else:
            recommendations.append(f"Increase water to 8+ glasses (currently {habits.water:.1f}) - "
                                   "you'll see results in 3-5 days")
        if habits.stress > HIGH_STRESS_AVG:
            recommendations.append(f"High stress ({habits.stress:.1f}/5) - try 10min meditation daily. "
                                   "This WILL improve your skin.")

    # Products
    report = ProductReport()
    stop_using: List[str] = []
    for analysis in data.product_analyses:
        name = analysis.product.display_name
        impact = _impact_text(analysis)
        if analysis.verdict == "keep":
            report.working.append(ProductReportItem(
                product=name, impact=impact, recommendation=analysis.recommendation))
            if pct >= PRODUCT_WIN_CONSISTENCY_PCT:
                wins.append(f"{name} is working! {impact} - your consistent tracking revealed this")
        elif analysis.verdict == "monitor":
            report.monitoring.append(ProductReportItem(
                product=name, impact=impact, recommendation=analysis.recommendation))
        else:
            report.replace.append(ReplaceReportItem(product=name, reason=analysis.recommendation))
            stop_using.append(f"Stop using {name} - {analysis.recommendation}")

    for corr in data.correlations:
        if corr.confidence > CORRELATION_INSIGHT_CONFIDENCE:
            insights.append(f"{corr.factor} shows {corr.impact}")

    # Replacement advice goes first so truncation can never drop it
    recommendations = stop_using + recommendations
    wins, insights, recommendations = bound_report_lists(wins, insights, recommendations, consistency)

    if pct >= HIGH_CONSISTENCY_PCT:
        summary = f"Your {pct}% consistency is excellent - keep it up!"
    else:
        summary = "Track daily to unlock insights - aim for 80%+ consistency for best results"

    return AIInsightResult(
        consistency=consistency,
        wins=wins,
        insights=insights,
        recommendations=recommendations,
        product_report=report,
        summary=summary,
        generated_at=clock.now().isoformat(),
        source="rule_based",
    )
