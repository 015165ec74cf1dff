#!/usr/bin/env python3
"""Score one user against a candidate pool and write match records."""

import argparse
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from couple_compass.config import EngineConfig, load_config
from couple_compass.matching.engine import CompatibilityEngine, to_match_record
from couple_compass.matching.match_profile import generate_match_profile
from couple_compass.profiles.datasets import load_profiles, save_match_records
from couple_compass.reporting.metrics import dimension_means, recommendation_counts, score_summary
from couple_compass.reporting.tables import format_ranked_table, format_summary_table
from couple_compass.utils import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Score a user against a candidate pool")
    parser.add_argument("--profiles", type=str, default="data/profiles.json")
    parser.add_argument("--user-id", type=str, required=True)
    parser.add_argument("--config", type=str, default=None)
    parser.add_argument("--top", type=int, default=10)
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument("--all", action="store_true", help="skip the life-stage eligibility filter")
    parser.add_argument("--output", type=str, default=None)
    args = parser.parse_args()

    log = setup_logging()
    cfg = load_config(args.config) if args.config else EngineConfig()
    log.info(f"Engine config: {cfg.name}")

    profiles = load_profiles(args.profiles)
    by_id = {p.user_id: p for p in profiles}
    if args.user_id not in by_id:
        log.error(f"User {args.user_id} not found in {args.profiles}")
        sys.exit(1)
    user = by_id[args.user_id]

    engine = CompatibilityEngine(cfg)
    ranked = engine.score_candidates(
        user, profiles, eligible_only=not args.all, max_workers=args.workers
    )
    if not ranked:
        log.warning("No eligible candidates")
        return

    print(format_ranked_table(ranked, limit=args.top))
    print()
    results = [r for _, r in ranked]
    summary = score_summary(results)
    summary.update({f"mean_{d}": v for d, v in dimension_means(results).items()})
    print(format_summary_table(summary, recommendation_counts(results)))

    best, best_result = ranked[0]
    profile = generate_match_profile(best_result, user, best, rng=random.Random(), bands=cfg.life_stage)
    log.info(f"\n--- Top match: {best.user_id} ---")
    log.info(profile.introduction)
    for line in profile.highlights:
        log.info(f"  * {line}")
    for line in profile.conversation_starters:
        log.info(f"  > {line}")

    output = args.output or f"results/{args.user_id}_matches.json"
    records = [to_match_record(user, c, r) for c, r in ranked[:args.top]]
    save_match_records(output, records)
    log.info(f"Match records saved to {output}")


if __name__ == "__main__":
    main()
