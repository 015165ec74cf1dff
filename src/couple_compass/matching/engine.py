"""Compatibility engine: gate, score, cap, explain."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from ..config import EngineConfig
from ..profiles.schema import (
    DIMENSIONS,
    CompatibilityResult,
    InvalidProfileError,
    UserMatchProfile,
)
from . import life_stage, rules, scorers

logger = logging.getLogger("couple_compass")


class CompatibilityEngine:
    """Stateless apart from its config; safe to share across threads."""

    def __init__(
        self,
        cfg: Optional[EngineConfig] = None,
        dealbreakers: Sequence[rules.Rule] = rules.DEALBREAKERS,
        red_flags: Sequence[rules.Rule] = rules.RED_FLAGS,
    ):
        self.cfg = cfg or EngineConfig()
        self.dealbreakers = tuple(dealbreakers)
        self.red_flags = tuple(red_flags)

    # ── Single pair ──────────────────────────────────────────────────────────

    def score(self, user1: UserMatchProfile, user2: UserMatchProfile) -> CompatibilityResult:
        _validate(user1, "user1")
        _validate(user2, "user2")

        outcome = rules.evaluate(
            user1.compass_answers, user2.compass_answers,
            self.dealbreakers, self.red_flags,
        )
        if outcome.disqualified:
            logger.debug(f"Dealbreaker '{outcome.dealbreaker.name}' for "
                         f"{user1.user_id} / {user2.user_id}")
            return self._disqualified(outcome.dealbreaker)

        dims = self.dimension_scores(user1, user2)
        overall = self.weighted_score(dims)

        capped_by = None
        flag = outcome.red_flag
        if flag is not None and flag.score_ceiling is not None and overall > flag.score_ceiling:
            logger.debug(f"Red flag '{flag.name}' caps {overall} at {flag.score_ceiling}")
            overall = flag.score_ceiling
            capped_by = flag

        return CompatibilityResult(
            overall_score=overall,
            dimension_scores=dims,
            top_reasons=self.top_reasons(dims, capped_by),
            recommendation=self.recommendation_for(overall),
        )

    def dimension_scores(self, a: UserMatchProfile, b: UserMatchProfile) -> dict[str, int]:
        cfg = self.cfg
        return {
            "values": scorers.values_alignment(a, b, cfg.tiers),
            "emotional": scorers.emotional_fit(a, b, cfg.emotional),
            "lifestyle": scorers.lifestyle_match(a, b, cfg.lifestyle),
            "life_stage": scorers.life_stage_fit(a, b, cfg),
        }

    def weighted_score(self, dims: dict[str, int]) -> int:
        w = self.cfg.weights
        total = (
            dims["values"] * w.values
            + dims["emotional"] * w.emotional
            + dims["lifestyle"] * w.lifestyle
            + dims["life_stage"] * w.life_stage
        )
        return scorers.clamp_score(total)

    def top_reasons(self, dims: dict[str, int], red_flag: Optional[rules.Rule] = None) -> tuple[str, ...]:
        """Up to ``max_reasons`` lines; ``red_flag`` is the rule that lowered the score, if any."""
        r = self.cfg.reasons
        reasons = []
        if red_flag is not None:
            reasons.append(red_flag.message)
        if dims["values"] > r.values_threshold:
            reasons.append(r.values)
        if dims["emotional"] > r.emotional_threshold:
            reasons.append(r.emotional)
        if dims["lifestyle"] > r.lifestyle_threshold:
            reasons.append(r.lifestyle)
        return tuple(reasons[:r.max_reasons])

    def recommendation_for(self, score: int) -> str:
        t, labels = self.cfg.thresholds, self.cfg.labels
        if score >= t.exceptional:
            return labels.exceptional
        if score >= t.strong:
            return labels.strong
        if score >= t.good:
            return labels.good
        if score >= t.moderate:
            return labels.moderate
        if score >= t.low:
            return labels.low
        return labels.not_recommended

    def _disqualified(self, rule: rules.Rule) -> CompatibilityResult:
        return CompatibilityResult(
            overall_score=0,
            dimension_scores={d: 0 for d in DIMENSIONS},
            top_reasons=(rule.message,),
            recommendation=self.cfg.labels.not_compatible_prefix + rule.message,
        )

    # ── Candidate pools ──────────────────────────────────────────────────────

    def eligible_candidates(
        self,
        user: UserMatchProfile,
        pool: Sequence[UserMatchProfile],
    ) -> list[UserMatchProfile]:
        """Drop the user themself and anyone outside the life-stage window."""
        _validate(user, "user")
        out = []
        for candidate in pool:
            _validate(candidate, "candidate")
            if candidate is user:
                continue
            if user.user_id is not None and candidate.user_id == user.user_id:
                continue
            if life_stage.is_eligible_pair(user, candidate, self.cfg.life_stage, self.cfg.flexibility):
                out.append(candidate)
        return out

    def score_candidates(
        self,
        user: UserMatchProfile,
        candidates: Sequence[UserMatchProfile],
        eligible_only: bool = True,
        max_workers: Optional[int] = None,
    ) -> list[tuple[UserMatchProfile, CompatibilityResult]]:
        """Score one user against a pool, best first.

        Pairs are independent, so ``max_workers`` > 1 fans out over a thread
        pool with identical results. Ties keep pool order.
        """
        _validate(user, "user")
        if eligible_only:
            pool = self.eligible_candidates(user, candidates)
        else:
            pool = list(candidates)
            for candidate in pool:
                _validate(candidate, "candidate")
        logger.info(f"Scoring {user.user_id} against {len(pool)}/{len(candidates)} candidates")

        if max_workers and max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as ex:
                results = list(ex.map(lambda c: self.score(user, c), pool))
        else:
            results = [self.score(user, c) for c in pool]

        ranked = list(zip(pool, results))
        ranked.sort(key=lambda pair: pair[1].overall_score, reverse=True)
        return ranked


def _validate(profile: Any, label: str) -> None:
    if profile is None:
        raise InvalidProfileError(f"{label} profile is missing")
    if not isinstance(profile, UserMatchProfile):
        raise InvalidProfileError(
            f"{label} must be a UserMatchProfile, got {type(profile).__name__}"
        )


def to_match_record(
    user1: UserMatchProfile,
    user2: UserMatchProfile,
    result: CompatibilityResult,
) -> dict[str, Any]:
    """Storage shape: score as a 0.0-1.0 fraction plus the full result."""
    return {
        "user1_id": user1.user_id,
        "user2_id": user2.user_id,
        "compatibility_score": result.overall_score / 100,
        "match_data": result.to_dict(),
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
