"""Dealbreaker and red-flag rules over two sets of compass answers.

Rules are plain records evaluated in list order by ``first_match``; adding a
rule means appending a record, not touching the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

from ..profiles.schema import CompassAnswers

Predicate = Callable[[CompassAnswers, CompassAnswers], bool]


class RuleKind(str, Enum):
    DEALBREAKER = "dealbreaker"
    RED_FLAG = "red_flag"


@dataclass(frozen=True)
class Rule:
    name: str
    kind: RuleKind
    predicate: Predicate
    message: str
    score_ceiling: Optional[int] = None

    def matches(self, a: CompassAnswers, b: CompassAnswers) -> bool:
        return self.predicate(a, b)


@dataclass(frozen=True)
class RuleOutcome:
    dealbreaker: Optional[Rule] = None
    red_flag: Optional[Rule] = None

    @property
    def disqualified(self) -> bool:
        return self.dealbreaker is not None


def _either_way(a: CompassAnswers, b: CompassAnswers, key: str,
                left: set[str], right: set[str]) -> bool:
    va, vb = a.get(key), b.get(key)
    if not isinstance(va, str) or not isinstance(vb, str):
        return False
    return (va in left and vb in right) or (vb in left and va in right)


def _children_mismatch(a: CompassAnswers, b: CompassAnswers) -> bool:
    return _either_way(a, b, "children_vision", {"yes_involved", "yes_support"}, {"no"})


def _both_avoid_conflict(a: CompassAnswers, b: CompassAnswers) -> bool:
    return a.get("conflict_style") == "avoid" and b.get("conflict_style") == "avoid"


def _ambition_mismatch(a: CompassAnswers, b: CompassAnswers) -> bool:
    return _either_way(a, b, "ambition_balance", {"high_ambition"}, {"simple_life"})


DEALBREAKERS: tuple[Rule, ...] = (
    Rule(
        name="children_mismatch",
        kind=RuleKind.DEALBREAKER,
        predicate=_children_mismatch,
        message="Different visions about having children",
    ),
    Rule(
        name="both_avoid_conflict",
        kind=RuleKind.DEALBREAKER,
        predicate=_both_avoid_conflict,
        message="Both tend to avoid conflict, so issues may go unresolved",
    ),
)

RED_FLAGS: tuple[Rule, ...] = (
    Rule(
        name="ambition_mismatch",
        kind=RuleKind.RED_FLAG,
        predicate=_ambition_mismatch,
        message="Very different ambition levels may create friction",
        score_ceiling=20,
    ),
)


def first_match(rules: Sequence[Rule], a: CompassAnswers, b: CompassAnswers) -> Optional[Rule]:
    for rule in rules:
        if rule.matches(a, b):
            return rule
    return None


def evaluate(
    a: CompassAnswers,
    b: CompassAnswers,
    dealbreakers: Sequence[Rule] = DEALBREAKERS,
    red_flags: Sequence[Rule] = RED_FLAGS,
) -> RuleOutcome:
    """Dealbreakers first; red flags are only consulted when none matched."""
    a = a or {}
    b = b or {}
    hit = first_match(dealbreakers, a, b)
    if hit is not None:
        return RuleOutcome(dealbreaker=hit)
    return RuleOutcome(red_flag=first_match(red_flags, a, b))
