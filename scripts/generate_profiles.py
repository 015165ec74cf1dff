#!/usr/bin/env python3
"""Generate a synthetic profile pool."""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from couple_compass.profiles.datasets import save_profiles
from couple_compass.profiles.generators import generate_profiles
from couple_compass.utils import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Generate synthetic profiles")
    parser.add_argument("--n", type=int, default=500)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--complete-prob", type=float, default=0.8)
    parser.add_argument("--output", type=str, default="data/profiles.json")
    args = parser.parse_args()

    log = setup_logging()

    log.info(f"Generating {args.n} profiles with seed={args.seed}")
    profiles = generate_profiles(args.n, seed=args.seed, complete_prob=args.complete_prob)

    complete = sum(1 for p in profiles if len(p.compass_answers) == 6)
    log.info(f"  Complete quizzes: {complete}/{len(profiles)}")

    save_profiles(args.output, profiles)
    log.info(f"Saved to {args.output}")


if __name__ == "__main__":
    main()
