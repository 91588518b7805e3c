"""Aggregation primitives shared by every analytics layer."""

from __future__ import annotations

import math
from typing import Iterable, Optional

import numpy as np

from constants import TREND_STABLE_THRESHOLD
from models import Photo, Trend


def average(values: Iterable[float]) -> float:
    """Arithmetic mean; 0.0 for an empty input."""
    vals = [float(v) for v in values]
    if not vals:
        return 0.0
    return float(np.mean(vals))


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves away from -inf (x.5 -> x+1), unlike Python's banker's rounding."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def classify_trend(current: float, previous: float,
                   threshold: float = TREND_STABLE_THRESHOLD) -> Trend:
    diff = current - previous
    if abs(diff) < threshold:
        return "stable"
    return "up" if diff > 0 else "down"


def metric_value(photo: Optional[Photo], metric: str) -> int:
    """Read one metric from a photo, treating missing analysis as 0."""
    if photo is None or photo.analysis is None:
        return 0
    return getattr(photo.analysis, metric)


def signed(value: float, digits: int = 1) -> str:
    """Format with an explicit '+' for positive values."""
    text = f"{value:.{digits}f}"
    return f"+{text}" if value > 0 else text
