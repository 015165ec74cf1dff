"""Pure summary functions over a batch of compatibility results."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

import numpy as np

from ..profiles.schema import DIMENSIONS, CompatibilityResult


def score_summary(results: Sequence[CompatibilityResult]) -> dict[str, float]:
    """Distribution of overall scores for one batch.

    Args:
        results: Results from a single batch run.

    Returns:
        count, mean, median, p90, max, and the fraction of pairs that were
        disqualified by a dealbreaker (score 0 with every dimension 0).
    """
    if not results:
        return {"count": 0}

    scores = np.array([r.overall_score for r in results], dtype=float)
    disqualified = sum(
        1 for r in results
        if r.overall_score == 0 and not any(r.dimension_scores.values())
    )
    return {
        "count": len(results),
        "mean": float(scores.mean()),
        "median": float(np.median(scores)),
        "p90": float(np.percentile(scores, 90)),
        "max": float(scores.max()),
        "disqualified_rate": disqualified / len(results),
    }


def dimension_means(results: Sequence[CompatibilityResult]) -> dict[str, float]:
    if not results:
        return {}
    matrix = np.array([[r.dimension_scores[d] for d in DIMENSIONS] for r in results], dtype=float)
    return {d: float(v) for d, v in zip(DIMENSIONS, matrix.mean(axis=0))}


def recommendation_counts(results: Sequence[CompatibilityResult]) -> dict[str, int]:
    """Histogram of labels; every dealbreaker message collapses to one bucket."""
    counts = Counter()
    for r in results:
        label = r.recommendation
        if r.overall_score == 0 and not any(r.dimension_scores.values()):
            label = "Not Compatible"
        counts[label] += 1
    return dict(counts.most_common())
