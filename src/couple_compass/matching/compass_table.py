"""Hand-curated "compatible but different" answers per compass question.

Entries are one-directional; ``is_compatible`` checks both directions so the
result doesn't depend on which user is passed first. Bump ``TABLE_VERSION``
whenever an entry changes.
"""

from __future__ import annotations

from typing import Optional

TABLE_VERSION = "2024.1"

COMPASS_COMPATIBILITY: dict[str, dict[str, frozenset[str]]] = {
    "living_arrangement": {
        "with_parents": frozenset({"near_parents"}),
        "near_parents": frozenset({"with_parents", "flexible"}),
        "new_city": frozenset({"flexible"}),
        "flexible": frozenset({"near_parents", "new_city"}),
    },
    "financial_style": {
        "provider": frozenset({"lead_share"}),
        "lead_share": frozenset({"provider", "equal"}),
        "equal": frozenset({"lead_share", "emotional"}),
        "emotional": frozenset({"equal"}),
    },
    "children_vision": {
        "yes_involved": frozenset({"yes_support"}),
        "yes_support": frozenset({"yes_involved", "maybe"}),
        "maybe": frozenset({"yes_support"}),
    },
    "conflict_style": {
        "talk_out": frozenset({"need_space", "mediator"}),
        "need_space": frozenset({"talk_out"}),
        "mediator": frozenset({"talk_out", "need_space"}),
    },
    "ambition_balance": {
        "high_ambition": frozenset({"balanced"}),
        "balanced": frozenset({"high_ambition", "family_first"}),
        "family_first": frozenset({"balanced", "simple_life"}),
        "simple_life": frozenset({"family_first"}),
    },
    # "mismatch" has no entry and is listed nowhere: it never reaches the
    # middle tier, not even against itself through this table.
    "big_mismatch": {
        "discuss": frozenset({"flexible", "unsure"}),
        "unsure": frozenset({"discuss"}),
        "flexible": frozenset({"discuss"}),
    },
}


def compatible_values(question: str, value: Optional[str]) -> frozenset[str]:
    """Outgoing compatible set for one answer; empty for anything unknown."""
    if not isinstance(value, str):
        return frozenset()
    return COMPASS_COMPATIBILITY.get(question, {}).get(value, frozenset())


def is_compatible(question: str, a: Optional[str], b: Optional[str]) -> bool:
    if a is None or b is None:
        return False
    return b in compatible_values(question, a) or a in compatible_values(question, b)
