"""
Shared helpers for API routes.
Contains: pipeline access, response serialization, request validation.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, TypeVar

from fastapi import HTTPException
from pydantic import BaseModel

from models import InsightSnapshot
from pipeline.insight_pipeline import InsightPipeline

log = logging.getLogger("api")

T = TypeVar("T")

_pipeline: Optional[InsightPipeline] = None


# ─── Pipeline ───────────────────────────────────────────────

def _get_pipeline() -> InsightPipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = InsightPipeline()
    return _pipeline


# ─── Serialization ──────────────────────────────────────────

def _to_payload(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def _snapshot_summary(snapshot: InsightSnapshot) -> str:
    return (
        f"photos={len(snapshot.photos)} journal={len(snapshot.journal_entries)} "
        f"products={len(snapshot.products)} usage={len(snapshot.usage_history)}"
    )


# ─── Validation ─────────────────────────────────────────────

def _with_snapshot_clock(fn: Callable[[], T]) -> T:
    """Run fn, mapping an unknown snapshot timezone to a 422."""
    try:
        return fn()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
