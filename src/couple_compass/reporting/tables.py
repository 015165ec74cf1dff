"""Console table formatting for ranked candidates and batch summaries."""

from __future__ import annotations

from typing import Sequence

from tabulate import tabulate

from ..profiles.schema import CompatibilityResult, UserMatchProfile

SHORT_NAMES = {
    "values": "Values",
    "emotional": "Emotional",
    "lifestyle": "Lifestyle",
    "life_stage": "Life Stage",
}


def format_ranked_table(
    ranked: Sequence[tuple[UserMatchProfile, CompatibilityResult]],
    limit: int | None = None,
) -> str:
    """Format ranked (candidate, result) pairs as a console table."""
    headers = ["#", "Candidate", "Age", "Score"] + list(SHORT_NAMES.values()) + ["Recommendation"]
    rows = []
    for i, (candidate, result) in enumerate(ranked[:limit] if limit else ranked, start=1):
        row = [i, candidate.user_id or "-", candidate.age if candidate.age is not None else "-",
               result.overall_score]
        row.extend(result.dimension_scores[d] for d in SHORT_NAMES)
        row.append(result.recommendation)
        rows.append(row)

    return tabulate(rows, headers=headers, tablefmt="grid")


def format_summary_table(summary: dict[str, float], counts: dict[str, int]) -> str:
    rows = []
    for k, v in summary.items():
        rows.append([k, f"{v:.4f}" if isinstance(v, float) else str(v)])
    for label, n in counts.items():
        rows.append([label, str(n)])
    return tabulate(rows, headers=["Metric", "Value"], tablefmt="grid", disable_numparse=True)
