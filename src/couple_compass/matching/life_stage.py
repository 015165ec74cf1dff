"""Life-stage banding: age -> band, band distance, and eligibility windows."""

from __future__ import annotations

from typing import Any, Optional

from ..config import FlexibilityConfig, LifeStageConfig
from ..profiles.schema import (
    LIFE_STAGE_ORDER,
    FlexibilityMode,
    LifeStage,
    UserMatchProfile,
)

_DEFAULT_BANDS = LifeStageConfig()
_DEFAULT_FLEX = FlexibilityConfig()


def classify(age: Optional[int], cfg: LifeStageConfig = _DEFAULT_BANDS) -> LifeStage:
    """Map an age to its band. Missing ages and ages under the floor are unknown."""
    if age is None or age < cfg.early_career_min:
        return LifeStage.UNKNOWN
    if age < cfg.establishing_min:
        return LifeStage.EARLY_CAREER
    if age < cfg.established_min:
        return LifeStage.ESTABLISHING
    if age < cfg.mature_min:
        return LifeStage.ESTABLISHED
    return LifeStage.MATURE


def _index(stage: LifeStage) -> int:
    return LIFE_STAGE_ORDER.index(stage)


def distance(stage_a: Any, stage_b: Any) -> Optional[int]:
    """Band-index distance, or None when either stage is unknown."""
    a = LifeStage.coerce(stage_a)
    b = LifeStage.coerce(stage_b)
    if a is LifeStage.UNKNOWN or b is LifeStage.UNKNOWN:
        return None
    return abs(_index(a) - _index(b))


def compatible_bands(
    stage: Any,
    flexibility: FlexibilityMode = FlexibilityMode.ADJACENT,
) -> frozenset[LifeStage]:
    stage = LifeStage.coerce(stage)
    if stage is LifeStage.UNKNOWN:
        return frozenset()
    reach = 2 if FlexibilityMode(flexibility) is FlexibilityMode.FLEXIBLE else 1
    i = _index(stage)
    lo, hi = max(0, i - reach), min(len(LIFE_STAGE_ORDER) - 1, i + reach)
    return frozenset(LIFE_STAGE_ORDER[lo:hi + 1])


def flexibility_mode(
    a: UserMatchProfile,
    b: UserMatchProfile,
    cfg: FlexibilityConfig = _DEFAULT_FLEX,
) -> FlexibilityMode:
    """Widen the window when neither user is set on raising children, or when
    either user matches the configured gender and minimum age."""
    open_answers = set(cfg.open_children_answers)
    if (
        a.answer("children_vision") in open_answers
        and b.answer("children_vision") in open_answers
    ):
        return FlexibilityMode.FLEXIBLE

    for p in (a, b):
        if (
            p.gender is not None
            and p.gender.lower() == cfg.flexible_gender
            and p.age is not None
            and p.age >= cfg.flexible_min_age
        ):
            return FlexibilityMode.FLEXIBLE
    return FlexibilityMode.ADJACENT


def stages_compatible(
    stage_a: Any,
    stage_b: Any,
    flexibility: FlexibilityMode = FlexibilityMode.ADJACENT,
) -> bool:
    """Both stages known and each inside the other's window."""
    a = LifeStage.coerce(stage_a)
    b = LifeStage.coerce(stage_b)
    return b in compatible_bands(a, flexibility) and a in compatible_bands(b, flexibility)


def is_eligible_pair(
    a: UserMatchProfile,
    b: UserMatchProfile,
    bands: LifeStageConfig = _DEFAULT_BANDS,
    flex: FlexibilityConfig = _DEFAULT_FLEX,
) -> bool:
    """Candidate-pool eligibility: the filter applied before scoring."""
    mode = flexibility_mode(a, b, flex)
    return stages_compatible(classify(a.age, bands), classify(b.age, bands), mode)
