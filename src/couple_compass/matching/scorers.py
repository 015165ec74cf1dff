"""Per-dimension scorers. Each returns an int in [0, 100].

Absent data never raises; every scorer has a neutral fallback.
"""

from __future__ import annotations

import math

from ..config import EmotionalConfig, EngineConfig, LifestyleConfig, TierConfig
from ..profiles.schema import LifeStage, UserMatchProfile
from . import life_stage
from .compass_table import is_compatible

_DEFAULT = EngineConfig()

# Keyed by the sorted style pair so argument order never matters.
ATTACHMENT_SCORES: dict[tuple[str, str], int] = {
    ("secure", "secure"): 90,
    ("anxious", "secure"): 75,
    ("avoidant", "secure"): 70,
    ("anxious", "anxious"): 60,
    ("anxious", "avoidant"): 50,
    ("avoidant", "avoidant"): 55,
}


def round_half_up(x: float) -> int:
    # Snap float noise first so 57.4999999 and 57.5000001 both land on 58.
    return int(math.floor(round(x, 6) + 0.5))


def clamp_score(x: float) -> int:
    return max(0, min(100, round_half_up(x)))


def values_alignment(
    a: UserMatchProfile,
    b: UserMatchProfile,
    cfg: TierConfig = _DEFAULT.tiers,
) -> int:
    """Answer-by-answer agreement over questions both users have answered."""
    shared = sorted(k for k in a.compass_answers if k in b.compass_answers)
    if not shared:
        return cfg.no_shared_keys_score

    total = 0.0
    for key in shared:
        va, vb = a.compass_answers[key], b.compass_answers[key]
        if va == vb:
            total += cfg.identical
        elif is_compatible(key, va, vb):
            total += cfg.compatible
        else:
            total += cfg.different
    return clamp_score(100 * total / len(shared))


def attachment_score(style_a, style_b, default: int = 65) -> int:
    if not style_a or not style_b:
        return default
    pair = tuple(sorted((str(style_a).lower(), str(style_b).lower())))
    return ATTACHMENT_SCORES.get(pair, default)


def love_language_score(a: UserMatchProfile, b: UserMatchProfile,
                        cfg: EmotionalConfig = _DEFAULT.emotional) -> int:
    if not a.love_languages or not b.love_languages:
        return cfg.love_language_missing_score
    shared = len(a.love_languages & b.love_languages)
    scores = cfg.love_language_shared_scores
    return scores[min(shared, len(scores) - 1)]


def emotional_fit(
    a: UserMatchProfile,
    b: UserMatchProfile,
    cfg: EmotionalConfig = _DEFAULT.emotional,
) -> int:
    attachment = attachment_score(a.attachment_style, b.attachment_style,
                                  cfg.default_attachment_score)
    love = love_language_score(a, b, cfg)
    return clamp_score(cfg.attachment_weight * attachment + cfg.love_language_weight * love)


def lifestyle_match(
    a: UserMatchProfile,
    b: UserMatchProfile,
    cfg: LifestyleConfig = _DEFAULT.lifestyle,
) -> int:
    shared = len(a.interests & b.interests)
    return clamp_score(cfg.base + cfg.per_shared_interest * shared)


def life_stage_fit(
    a: UserMatchProfile,
    b: UserMatchProfile,
    cfg: EngineConfig = _DEFAULT,
) -> int:
    """Re-applies the eligibility window; callers may skip the pool filter."""
    stage_a = life_stage.classify(a.age, cfg.life_stage)
    stage_b = life_stage.classify(b.age, cfg.life_stage)
    if LifeStage.UNKNOWN in (stage_a, stage_b):
        return 0

    mode = life_stage.flexibility_mode(a, b, cfg.flexibility)
    if not life_stage.stages_compatible(stage_a, stage_b, mode):
        return 0

    d = life_stage.distance(stage_a, stage_b)
    scores = cfg.life_stage.distance_scores
    return scores[d] if d < len(scores) else 0
