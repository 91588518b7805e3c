"""
Shared constants used across multiple modules.
Single source of truth for the heuristic thresholds of the insights engine.

None of these are statistically derived; they are fixed heuristics whose
defaults must not drift, because rule-based reports are compared byte for byte.
"""

METRICS = ("hydration", "texture", "brightness", "acne")
# Metrics where a lower value is better
INVERTED_METRICS = {"acne"}
# Metrics attributed to product use (acne is excluded from impact scoring)
IMPACT_METRICS = ("hydration", "texture", "brightness")

# ─── Windows ───────────────────────────────────────────────
RECENT_WINDOW_DAYS = 5
CONSISTENCY_WINDOW_DAYS = 7
ATTRIBUTION_WINDOW_HOURS = 48
STREAK_MAX_GAP_DAYS = 1

# ─── Trend classification ─────────────────────────────────
TREND_STABLE_THRESHOLD = 2

# ─── Product verdicts ─────────────────────────────────────
KEEP_MIN_OVERALL_IMPACT = 5
KEEP_MIN_AVG_RATING = 4
REPLACE_MAX_OVERALL_IMPACT = -3
REPLACE_MAX_NEGATIVE_EVENTS = 2
REPLACE_MIN_AVG_RATING = 2.5
NEGATIVE_RATING_BELOW = 2
DEFAULT_PRODUCT_RATING = 3
MIN_USAGE_FOR_CONFIDENCE = 5
MONITOR_TARGET_DAYS = 7
NEGATIVE_SKIN_CONDITION = "poor"
NEGATIVE_NOTE_KEYWORDS = ("irritation", "burning", "breakout", "redness")

CONFIDENCE_BASE = 0.5
CONFIDENCE_CAP = 0.9
KEEP_CONFIDENCE_USAGE_DIVISOR = 20
REPLACE_CONFIDENCE_EVENTS_DIVISOR = 5
MONITOR_LOW_CONFIDENCE = 0.3
MONITOR_CONFIDENCE = 0.6

# ─── Correlations ─────────────────────────────────────────
CORRELATION_MIN_PHOTOS = 3
CORRELATION_MIN_JOURNALS = 5
CORRELATION_MIN_DIFF = 5
CORRELATION_CONFIDENCE_DIVISOR = 10
WATER_HIGH_GLASSES = 8
SLEEP_GOOD_HOURS = 7
SLEEP_POOR_HOURS = 6
STRESS_LOW_MAX = 2
STRESS_HIGH_MIN = 4

# ─── Long-horizon comparison ──────────────────────────────
COMPARISON_MIN_DAYS = 20

# ─── Minimum-data gate ────────────────────────────────────
MIN_PHOTOS = 5
MIN_JOURNALS = 5

# ─── Report synthesis ─────────────────────────────────────
MAX_WINS = 3
MAX_INSIGHTS = 3
MAX_RECOMMENDATIONS = 5
WIN_STREAK_DAYS = 3
HIGH_CONSISTENCY_PCT = 80
LOW_CONSISTENCY_PCT = 50
PRODUCT_WIN_CONSISTENCY_PCT = 70
IMPROVEMENT_WIN_THRESHOLD = 5
CORRELATION_INSIGHT_CONFIDENCE = 0.7
HABIT_MIN_JOURNALS = 3
HIGH_STRESS_AVG = 3.5

DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# ─── Weekly summary ───────────────────────────────────────
WEEKLY_MOOD_SCORES = {"great": 4, "good": 3, "okay": 2, "bad": 1}
# Symmetric bands on week-over-week differences
WEEKLY_TREND_BANDS = {
    "mood": 0.2,
    "sleep": 0.5,
    "water": 1,
    "consistency": 1,
}
WEEKLY_FULL_DAYS = 7
WEEKLY_GOOD_DAYS = 5
WEEKLY_STREAK_HIGHLIGHT_DAYS = 7
WEEKLY_GOOD_MOOD_AVG = 3.5
WEEKLY_LOW_WATER_GLASSES = 6
WEEKLY_GLOW_WIN_POINTS = 5
WEEKLY_PHOTO_PRAISE_MIN = 3
WEEKLY_MIN_PHOTOS = 2
WEEKLY_MIN_JOURNALS = 5
WEEKLY_TOP_IMPROVEMENTS = 5
WEEKLY_MAX_ADVICE = 5
# Rule-based advice is dropped when this many leading characters already
# appear in a collaborator item
WEEKLY_DEDUP_PREFIX_CHARS = 20
WEEKLY_AI_WIN_PREFIX = "🎉 "
