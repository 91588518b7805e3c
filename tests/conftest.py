"""
Shared test configuration.

Adds src/ to sys.path so flat modules (models, clock, insight_agents, ...)
and the analytics/pipeline/routes packages import the way the app does.
Also provides a fixed clock and small factories for snapshot entities.
"""

import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_src_dir = os.path.join(_project_root, "src")

if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from clock import Clock
from models import AnalysisMetrics, JournalEntry, Photo, Product, ProductUsageEntry

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def make_photo(pid, ts, hydration=60, texture=60, brightness=60, acne=20,
               improvements=None, analysed=True):
    analysis = None
    if analysed:
        analysis = AnalysisMetrics(
            hydration=hydration,
            texture=texture,
            brightness=brightness,
            acne=acne,
            improvements=improvements or [],
        )
    return Photo(id=pid, uri=f"file:///{pid}.jpg", timestamp=ts, analysis=analysis)


def make_entry(eid, ts, mood="good", sleep=7.0, water=8.0, stress=2):
    return JournalEntry(
        id=eid,
        timestamp=ts,
        mood=mood,
        sleep_hours=sleep,
        water_intake=water,
        stress_level=stress,
    )


def make_usage(product_id, ts, rating=None, skin_condition=None, notes=None):
    return ProductUsageEntry(
        product_id=product_id,
        timestamp=ts,
        rating=rating,
        skin_condition=skin_condition,
        notes=notes,
    )


def days_ago(n, hour=12):
    return (NOW - timedelta(days=n)).replace(hour=hour)


@pytest.fixture
def clock():
    return Clock.for_timezone("UTC", now=NOW)


@pytest.fixture
def serum():
    return Product(id="p1", name="Hydra Serum", brand="Glow", rating=4)
