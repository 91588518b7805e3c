"""Serialize computed aggregates into the single text-generation prompt."""

from __future__ import annotations

from typing import List

from analytics.aggregation import round_half_up, signed
from clock import Clock
from models import InsightData, LongHorizonComparison, Photo

SYSTEM_PROMPT = (
    "You are a beauty and skincare advisor providing cosmetic guidance. "
    "This is for beauty enhancement only, NOT medical advice. Be encouraging, "
    "specific, and science-based. Always return valid JSON. Focus on consistency "
    "patterns and actionable beauty improvements. Always recommend consulting a "
    "dermatologist for medical concerns."
)

RESPONSE_SCHEMA = """{
  "wins": [string, string, string] (3 specific achievements - include 30-day improvements if available),
  "insights": [string, string, string] (2-3 pattern discoveries - connect 5-day trends with 30-day transformation),
  "recommendations": [string, string, string, string, string] (3-5 actionable steps that will make REAL change),
  "productReport": {
    "working": [{"product": "name", "impact": "what it does", "recommendation": "action"}],
    "monitoring": [{"product": "name", "impact": "status", "recommendation": "action"}],
    "replace": [{"product": "name", "reason": "why", "alternative": "suggestion"}]
  },
  "summary": "one sentence summary focusing on what's working and what needs to change"
}"""


def _pct(value: float) -> int:
    return int(round_half_up(value))


def _mark(value: float) -> str:
    if value > 0:
        return "improved"
    if value < 0:
        return "declined"
    return "unchanged"


def _photo_block(label: str, photo: Photo | None) -> List[str]:
    a = photo.analysis if photo is not None else None
    return [
        label,
        f"- Hydration: {a.hydration if a else 0}%",
        f"- Texture: {a.texture if a else 0}%",
        f"- Brightness: {a.brightness if a else 0}%",
        f"- Acne: {a.acne if a else 0}%",
    ]


def _comparison_section(comp: LongHorizonComparison) -> List[str]:
    if not comp.has_comparison:
        return []
    imp = comp.improvement
    lines = ["", "### 30-DAY TRANSFORMATION ANALYSIS"]
    lines += _photo_block(f"Day 1 Photo ({comp.days_between} days ago):", comp.day1_photo)
    lines.append("")
    lines += _photo_block(f"Day {comp.days_between} Photo (Today):", comp.day30_photo)
    lines += [
        "",
        "30-Day Improvements:",
        f"- Hydration: {signed(imp.hydration)}% ({_mark(imp.hydration)})",
        f"- Texture: {signed(imp.texture)}% ({_mark(imp.texture)})",
        f"- Brightness: {signed(imp.brightness)}% ({_mark(imp.brightness)})",
        f"- Acne Reduction: {signed(imp.acne)}% ({_mark(imp.acne)})",
    ]
    return lines


def build_insight_prompt(data: InsightData, clock: Clock) -> str:
    trends = data.photo_trends
    consistency = data.consistency
    habits = data.habit_averages

    lines: List[str] = [
        "You are a beauty and skincare advisor providing cosmetic guidance. Analyze a user's "
        "beauty journey for enhancement purposes only. This is NOT medical diagnosis. Provide "
        "personalized, actionable beauty insights.",
        "",
        "## USER DATA",
        "",
        "### SHORT-TERM ANALYSIS (Last 5 Days)",
    ]
    if data.recent_photos:
        lines += [
            f"Photos: {len(data.recent_photos)}",
            f"- Hydration: {trends.hydration.current}% ({trends.hydration.trend} {abs(trends.hydration.change)}%)",
            f"- Texture: {trends.texture.current}% ({trends.texture.trend} {abs(trends.texture.change)}%)",
            f"- Brightness: {trends.brightness.current}% ({trends.brightness.trend} {abs(trends.brightness.change)}%)",
            f"- Acne/Clarity: {100 - trends.acne.current}%",
        ]
    else:
        lines.append("No photos taken in last 5 days")

    lines += [
        "",
        "### CONSISTENCY TRACKING (Last 7 Days)",
        f"- Overall Consistency: {consistency.consistency_percentage}%",
        f"- Photo Streak: {consistency.current_photo_streak} days",
        f"- Journal Streak: {consistency.current_journal_streak} days",
        f"- Days Tracked: {consistency.total_days_tracked} of {consistency.total_possible_days}",
        "",
        "Daily Breakdown:",
    ]
    for day in consistency.last_7_days:
        lines.append(f"- {day.day_name}: Photo {'yes' if day.has_photo else 'no'}, "
                     f"Journal {'yes' if day.has_journal else 'no'}")

    lines += _comparison_section(data.thirty_day_comparison)

    mood = habits.mood
    lines += [
        "",
        "### LIFESTYLE & HABITS (Last 5 Days)",
        f"Journal Entries: {len(data.recent_journal)} days",
        f"- Sleep: {habits.sleep:.1f} hours/night (avg)",
        f"- Water: {habits.water:.1f} glasses/day (avg)",
        f"- Stress: {habits.stress:.1f}/5 (avg)",
        f"- Mood: {_pct(mood.great)}% great, {_pct(mood.good)}% good, "
        f"{_pct(mood.okay)}% okay, {_pct(mood.bad)}% bad",
        "",
        "Recent Skin Feelings:",
    ]
    if data.recent_journal:
        for entry in data.recent_journal:
            day = clock.local_date(entry.timestamp).isoformat()
            lines.append(f'- {day}: "{entry.skin_feeling or "No notes"}"')
    else:
        lines.append("No notes")

    lines += ["", "### PRODUCTS IN USE"]
    if data.active_products:
        for analysis in data.product_analyses:
            imp = analysis.impact
            ev = analysis.evidence
            lines += [
                f"- {analysis.product.display_name}:",
                f"  * Impact: Hydration {signed(imp.hydration)}%, Texture {signed(imp.texture)}%, "
                f"Brightness {signed(imp.brightness)}%",
                f"  * Used: {ev.days_used} days",
                f"  * Rating: {ev.avg_rating:.1f}/5",
                f"  * Issues: {ev.negative_events}",
                f"  * Verdict: {analysis.verdict}",
            ]
        routine = data.current_routine
        lines += ["", f"Active Routine: {f'{routine.name} ({routine.type})' if routine else 'None'}"]
    else:
        lines.append("No products tracked")

    lines += ["", "### DETECTED PATTERNS"]
    if data.correlations:
        for c in data.correlations:
            lines.append(f"- {c.factor} -> {c.impact} ({_pct(c.confidence * 100)}% confidence)")
    else:
        lines.append("Insufficient data for pattern detection")

    lines += [
        "",
        "## YOUR TASK",
        "Analyze BOTH short-term (5 days) and long-term (30 days) data. Generate insights in JSON format:",
        "",
        RESPONSE_SCHEMA,
        "",
        "CRITICAL ANALYSIS REQUIRED:",
        "1. Compare 30-day transformation with 5-day trends - are they consistent?",
        "2. Identify which products drove the 30-day improvements",
        "3. Tell user EXACTLY what's working (keep doing) and what needs to change",
        "4. Connect product usage to 30-day results - which products caused the improvements?",
        '5. Be specific: "CeraVe Moisturizer used 28/30 days = +13% hydration improvement"',
        "",
        "IMPORTANT: Focus on insights that will make REAL CHANGE. Tell user what to KEEP, "
        "what to CHANGE, and what to ADD.",
    ]
    return "\n".join(lines)
