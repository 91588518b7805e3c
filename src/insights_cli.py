"""
Glow Insights - command line runner
===================================
Runs the insights engine over a JSON snapshot exported by the app.

Usage:
    python insights_cli.py snapshot.json                 # Gated report
    python insights_cli.py snapshot.json --rule-based    # Skip the text model
    python insights_cli.py snapshot.json --data-only     # Aggregates only
    python insights_cli.py snapshot.json --weekly        # Weekly summary

Exit codes: 0 ok, 1 unreadable snapshot, 2 not enough data for a report.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
log = logging.getLogger("insights_cli")

from models import InsightSnapshot
from pipeline.insight_pipeline import InsightPipeline


def load_snapshot(path: Path, now: Optional[str] = None, tz: Optional[str] = None) -> InsightSnapshot:
    snapshot = InsightSnapshot.model_validate_json(path.read_text(encoding="utf-8"))
    overrides = {}
    if now:
        overrides["now"] = datetime.fromisoformat(now)
    if tz:
        overrides["timezone"] = tz
    return snapshot.model_copy(update=overrides) if overrides else snapshot


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Glow insights engine")
    parser.add_argument("snapshot", type=Path, help="Snapshot JSON file")
    parser.add_argument("--rule-based", action="store_true",
                        help="Deterministic report only, never call the text model")
    parser.add_argument("--data-only", action="store_true",
                        help="Print the computed aggregates instead of a report")
    parser.add_argument("--weekly", action="store_true",
                        help="Print the weekly summary")
    parser.add_argument("--now", help="Override the clock (ISO-8601)")
    parser.add_argument("--tz", help="IANA timezone for calendar-day matching")
    parser.add_argument("--output", type=Path, help="Write JSON here instead of stdout")
    args = parser.parse_args(argv)

    try:
        snapshot = load_snapshot(args.snapshot, now=args.now, tz=args.tz)
    except (OSError, ValueError, ValidationError) as e:
        log.error("Could not read snapshot %s: %s", args.snapshot, e)
        return 1

    pipeline = InsightPipeline(use_collaborator=not args.rule_based)
    exit_code = 0
    try:
        if args.data_only:
            result = pipeline.collect(snapshot)
        elif args.weekly:
            result = pipeline.weekly(snapshot, rule_based=args.rule_based)
        else:
            result = pipeline.run(snapshot, rule_based=args.rule_based)
            if result.status == "insufficient_data":
                log.warning("Not enough data: %s", result.requirements.message)
                exit_code = 2
    except ValueError as e:
        log.error("Invalid snapshot settings: %s", e)
        return 1

    text = json.dumps(result.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(text + "\n", encoding="utf-8")
        log.info("Wrote %s", args.output)
    else:
        print(text)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
