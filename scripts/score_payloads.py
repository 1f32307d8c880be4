#!/usr/bin/env python3
"""
Score judgment payloads offline (no DB/API needed).
Reads a JSON list of {"rubric_id": ..., "payload": {...}} and prints the
overrides applied and the final score for each.
Usage: python scripts/score_payloads.py payloads.json [--out scored.json]
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from voxqa.engine.catalog import get_rubric
from voxqa.engine.judgments import parse_judgment_payload
from voxqa.engine.overrides import apply_overrides
from voxqa.engine.scoring import score
from voxqa.errors import VoxQAError


def score_entry(entry: dict) -> dict:
    rubric = get_rubric(entry["rubric_id"])
    judgments = parse_judgment_payload(entry["payload"], rubric)
    outcome = apply_overrides(rubric, judgments)
    result = score(rubric, outcome.judgments)
    return {
        "rubric_id": rubric.id.value,
        "score": result.score,
        "high_impact_failed": result.high_impact_failed,
        "applied_overrides": outcome.applied,
        "failed": [r.key for r in result.general if not r.satisfied and not r.not_applicable],
    }


def main():
    parser = argparse.ArgumentParser(description="Score judgment payloads offline")
    parser.add_argument("path", type=Path)
    parser.add_argument("--out", type=Path, default=None)
    args = parser.parse_args()

    if not args.path.exists():
        print(f"Error: {args.path} not found")
        sys.exit(1)

    with open(args.path) as f:
        entries = json.load(f)

    scored = []
    for i, entry in enumerate(entries):
        try:
            scored.append(score_entry(entry))
        except VoxQAError as exc:
            scored.append({"rubric_id": entry.get("rubric_id"), "error": str(exc)})
            print(f"[{i}] {exc}")
            continue
        print(f"[{i}] {scored[-1]['rubric_id']}: {scored[-1]['score']}")

    if args.out:
        with open(args.out, "w") as f:
            json.dump(scored, f, indent=2)
        print(f"Scored {len(scored)} payloads -> {args.out}")


if __name__ == "__main__":
    main()
