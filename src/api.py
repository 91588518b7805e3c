"""
FastAPI surface over the insights engine.

Route handlers are defined here; shared utilities live in routes/helpers.py.
Every insights route takes a full `InsightSnapshot` body; nothing is persisted.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import load_settings
from models import InsightSnapshot
from routes.helpers import (
    _get_pipeline,
    _snapshot_summary,
    _to_payload,
    _with_snapshot_clock,
)

log = logging.getLogger("api")


# ─── App setup ─────────────────────────────────────────────

app = FastAPI(title="Glow Insights API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=load_settings().frontend_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# ─── Routes ────────────────────────────────────────────────

@app.get("/")
def root() -> Dict[str, Any]:
    return {"service": "glow-insights-api", "status": "ok"}


@app.get("/health-check")
def health_check() -> Dict[str, Any]:
    pipeline = _get_pipeline()
    collaborator = pipeline.generator.name if pipeline.generator else "rule_based"
    return {"status": "Online", "collaborator": collaborator}


@app.post("/api/v1/insights/requirements")
def insights_requirements(snapshot: InsightSnapshot) -> Dict[str, Any]:
    return _to_payload(_get_pipeline().requirements(snapshot))


@app.post("/api/v1/insights/data")
def insights_data(snapshot: InsightSnapshot) -> Dict[str, Any]:
    log.info("Collecting insight data (%s)", _snapshot_summary(snapshot))
    data = _with_snapshot_clock(lambda: _get_pipeline().collect(snapshot))
    return _to_payload(data)


@app.post("/api/v1/insights")
def insights(snapshot: InsightSnapshot, rule_based: bool = False) -> Dict[str, Any]:
    """Gated report; `?rule_based=true` skips the text-generation model."""
    log.info("Generating insights (%s, rule_based=%s)", _snapshot_summary(snapshot), rule_based)
    outcome = _with_snapshot_clock(lambda: _get_pipeline().run(snapshot, rule_based=rule_based))
    return _to_payload(outcome)


@app.post("/api/v1/insights/weekly")
def insights_weekly(snapshot: InsightSnapshot, rule_based: bool = False) -> Dict[str, Any]:
    summary = _with_snapshot_clock(lambda: _get_pipeline().weekly(snapshot, rule_based=rule_based))
    return _to_payload(summary)
