"""
Data models shared by the insights engine.

Input entities are read-only snapshots handed over by the persistence layer;
everything else is a transient view-model recomputed on every call.  JSON
uses camelCase field names, Python code uses snake_case attributes.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Trend = Literal["up", "down", "stable"]
Verdict = Literal["keep", "monitor", "replace"]
WeeklyTrend = Literal["improving", "stable", "declining"]


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _Entity(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ─── Input entities ────────────────────────────────────────


class Mood(str, Enum):
    GREAT = "great"
    GOOD = "good"
    OKAY = "okay"
    BAD = "bad"


class AnalysisMetrics(_Entity):
    hydration: int
    texture: int
    brightness: int
    acne: int
    improvements: List[str] = Field(default_factory=list)


class Photo(_Entity):
    id: str
    uri: str = ""
    timestamp: datetime
    analysis: Optional[AnalysisMetrics] = None
    notes: Optional[str] = None


class JournalEntry(_Entity):
    id: str
    timestamp: datetime
    mood: Mood
    sleep_hours: float
    water_intake: float
    stress_level: int
    notes: Optional[str] = None
    skin_feeling: Optional[str] = None


class Product(_Entity):
    id: str
    name: str
    brand: str = ""
    rating: Optional[float] = None

    @property
    def display_name(self) -> str:
        return f"{self.brand} {self.name}".strip()


class ProductUsageEntry(_Entity):
    product_id: str
    timestamp: datetime
    rating: Optional[float] = None
    skin_condition: Optional[str] = None
    notes: Optional[str] = None


class ProductRoutine(_Entity):
    id: str
    name: str
    type: str = ""
    is_active: bool = False


class InsightSnapshot(_Entity):
    """Everything the engine reads for one invocation."""

    photos: List[Photo] = Field(default_factory=list)
    journal_entries: List[JournalEntry] = Field(default_factory=list)
    products: List[Product] = Field(default_factory=list)
    usage_history: List[ProductUsageEntry] = Field(default_factory=list)
    routines: List[ProductRoutine] = Field(default_factory=list)
    daily_completions: List[date] = Field(default_factory=list)
    current_streak: int = 0
    now: Optional[datetime] = None
    timezone: Optional[str] = None


# ─── Aggregates ────────────────────────────────────────────


class MetricTrend(_Model):
    current: int = 0
    change: int = 0
    trend: Trend = "stable"


class PhotoTrends(_Model):
    hydration: MetricTrend
    texture: MetricTrend
    brightness: MetricTrend
    acne: MetricTrend


class MoodDistribution(_Model):
    great: float = 0.0
    good: float = 0.0
    okay: float = 0.0
    bad: float = 0.0


class HabitAverages(_Model):
    sleep: float = 0.0
    water: float = 0.0
    stress: float = 0.0
    mood: MoodDistribution = Field(default_factory=MoodDistribution)


class ProductImpact(_Model):
    hydration: float = 0.0
    texture: float = 0.0
    brightness: float = 0.0
    overall: float = 0.0


class ProductEvidence(_Model):
    days_used: int = 0
    avg_rating: float = 0.0
    negative_events: int = 0
    photos_analyzed: int = 0


class ProductAnalysis(_Model):
    product: Product
    impact: ProductImpact
    verdict: Verdict
    confidence: float
    evidence: ProductEvidence
    recommendation: str


class Correlation(_Model):
    factor: str
    impact: str
    confidence: float


class MetricDelta(_Model):
    hydration: float = 0.0
    texture: float = 0.0
    brightness: float = 0.0
    acne: float = 0.0


class LongHorizonComparison(_Model):
    day1_photo: Optional[Photo] = None
    day30_photo: Optional[Photo] = None
    improvement: MetricDelta = Field(default_factory=MetricDelta)
    days_between: int = 0
    has_comparison: bool = False


class DailyTracking(_Model):
    date: str
    day_name: str
    has_photo: bool
    has_journal: bool
    has_product: bool


class ConsistencyData(_Model):
    photo_streak: int = 0
    journal_streak: int = 0
    current_photo_streak: int = 0
    current_journal_streak: int = 0
    consistency_percentage: int = 0
    last_7_days: List[DailyTracking] = Field(default_factory=list)
    total_days_tracked: int = 0
    total_possible_days: int = 0


class InsightData(_Model):
    recent_photos: List[Photo]
    photo_trends: PhotoTrends
    recent_journal: List[JournalEntry]
    habit_averages: HabitAverages
    active_products: List[Product]
    recent_usage: List[ProductUsageEntry]
    current_routine: Optional[ProductRoutine] = None
    product_analyses: List[ProductAnalysis]
    correlations: List[Correlation]
    thirty_day_comparison: LongHorizonComparison
    consistency: ConsistencyData


# ─── Reports ───────────────────────────────────────────────


class ProductReportItem(_Model):
    product: str
    impact: str
    recommendation: str


class ReplaceReportItem(_Model):
    product: str
    reason: str
    alternative: Optional[str] = None


class ProductReport(_Model):
    working: List[ProductReportItem] = Field(default_factory=list)
    monitoring: List[ProductReportItem] = Field(default_factory=list)
    replace: List[ReplaceReportItem] = Field(default_factory=list)


class CollaboratorReport(_Model):
    """Shape the text-generation collaborator must return."""

    wins: List[str]
    insights: List[str]
    recommendations: List[str]
    product_report: ProductReport
    summary: str


class AIInsightResult(_Model):
    consistency: ConsistencyData
    wins: List[str]
    insights: List[str]
    recommendations: List[str]
    product_report: ProductReport
    summary: str
    generated_at: str
    source: Literal["ai", "rule_based"] = "rule_based"


class MinimumRequirements(_Model):
    met: bool
    photos_count: int
    journals_count: int
    message: str = ""


class InsightOutcome(_Model):
    status: Literal["ok", "insufficient_data"]
    requirements: MinimumRequirements
    report: Optional[AIInsightResult] = None


# ─── Weekly summary ────────────────────────────────────────


class WeeklyStats(_Model):
    week_number: int
    start_date: str
    end_date: str
    days_completed: int = 0
    photos_taken: int = 0
    journal_entries: int = 0
    average_mood: float = 0.0
    average_sleep: float = 0.0
    average_water: float = 0.0
    average_stress: float = 0.0
    routine_completion_rate: float = 0.0
    streak_days: int = 0
    glow_score_change: Optional[float] = None
    top_improvements: List[str] = Field(default_factory=list)
    highlights: List[str] = Field(default_factory=list)


class WeeklyTrends(_Model):
    mood_trend: WeeklyTrend = "stable"
    sleep_trend: WeeklyTrend = "stable"
    water_trend: WeeklyTrend = "stable"
    consistency_trend: WeeklyTrend = "stable"


class WeeklySummary(_Model):
    stats: WeeklyStats
    previous_week: Optional[WeeklyStats] = None
    trends: WeeklyTrends
    insights: List[str]
    recommendations: List[str]
