"""Pydantic engine config models + YAML loading."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator


class WeightsConfig(BaseModel):
    values: float = 0.35
    emotional: float = 0.25
    lifestyle: float = 0.20
    life_stage: float = 0.20

    @model_validator(mode="after")
    def _sum_to_one(self) -> "WeightsConfig":
        total = self.values + self.emotional + self.lifestyle + self.life_stage
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Dimension weights must sum to 1.0, got {total:.4f}")
        return self


class TierConfig(BaseModel):
    """Per-question weights used by values alignment."""

    identical: float = 1.0
    compatible: float = 0.7
    different: float = 0.3
    no_shared_keys_score: int = 50


class EmotionalConfig(BaseModel):
    attachment_weight: float = 0.6
    love_language_weight: float = 0.4
    default_attachment_score: int = 65
    love_language_missing_score: int = 50
    love_language_shared_scores: list[int] = [60, 85, 100]  # 0, 1, 2+ shared


class LifestyleConfig(BaseModel):
    base: int = 70
    per_shared_interest: int = 5


class LifeStageConfig(BaseModel):
    """Lower age bound of each band; ages below the first are unknown."""

    early_career_min: int = 20
    establishing_min: int = 28
    established_min: int = 36
    mature_min: int = 46
    distance_scores: list[int] = [100, 85, 70]


class FlexibilityConfig(BaseModel):
    open_children_answers: list[str] = ["no", "maybe"]
    flexible_gender: str = "male"
    flexible_min_age: int = 36


class ThresholdsConfig(BaseModel):
    exceptional: int = 85
    strong: int = 75
    good: int = 65
    moderate: int = 55
    low: int = 20


class LabelsConfig(BaseModel):
    exceptional: str = "Exceptional Match"
    strong: str = "Strong Match"
    good: str = "Good Match"
    moderate: str = "Moderate Match"
    low: str = "Low Compatibility"
    not_recommended: str = "Not Recommended"
    not_compatible_prefix: str = "Not Compatible - "


class ReasonsConfig(BaseModel):
    values_threshold: int = 80
    emotional_threshold: int = 75
    lifestyle_threshold: int = 70
    values: str = "Your visions for the future align beautifully"
    emotional: str = "Your emotional styles complement each other"
    lifestyle: str = "Your lifestyle rhythms sync naturally"
    max_reasons: int = Field(default=3, ge=1)


class EngineConfig(BaseModel):
    name: str = "default"
    weights: WeightsConfig = WeightsConfig()
    tiers: TierConfig = TierConfig()
    emotional: EmotionalConfig = EmotionalConfig()
    lifestyle: LifestyleConfig = LifestyleConfig()
    life_stage: LifeStageConfig = LifeStageConfig()
    flexibility: FlexibilityConfig = FlexibilityConfig()
    thresholds: ThresholdsConfig = ThresholdsConfig()
    labels: LabelsConfig = LabelsConfig()
    reasons: ReasonsConfig = ReasonsConfig()


def load_config(path: str | Path) -> EngineConfig:
    """Load config from YAML, merging with defaults."""
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return EngineConfig(**raw)
