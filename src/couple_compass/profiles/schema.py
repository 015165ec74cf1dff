"""Profile, life-stage and result types shared by the matching engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class CompatibilityError(ValueError):
    """Base class for input validation failures raised before scoring."""


class InvalidProfileError(CompatibilityError):
    pass


class InvalidLifeStageError(CompatibilityError):
    pass


# ── Compass vocabulary ───────────────────────────────────────────────────────

class CompassQuestion(str, Enum):
    LIVING_ARRANGEMENT = "living_arrangement"
    FINANCIAL_STYLE = "financial_style"
    CHILDREN_VISION = "children_vision"
    CONFLICT_STYLE = "conflict_style"
    AMBITION_BALANCE = "ambition_balance"
    BIG_MISMATCH = "big_mismatch"


QUESTION_KEYS = tuple(q.value for q in CompassQuestion)

# Mirrors the quiz shown to users; four answers per question.
COMPASS_VOCABULARY: dict[str, tuple[str, ...]] = {
    "living_arrangement": ("with_parents", "near_parents", "new_city", "flexible"),
    "financial_style": ("provider", "lead_share", "equal", "emotional"),
    "children_vision": ("yes_involved", "yes_support", "maybe", "no"),
    "conflict_style": ("talk_out", "need_space", "mediator", "avoid"),
    "ambition_balance": ("high_ambition", "balanced", "family_first", "simple_life"),
    "big_mismatch": ("discuss", "unsure", "mismatch", "flexible"),
}

ATTACHMENT_STYLES = ("secure", "anxious", "avoidant")
LOVE_LANGUAGES = (
    "words_of_affirmation", "quality_time", "acts_of_service",
    "physical_touch", "receiving_gifts",
)

CompassAnswers = Mapping[str, str]


# ── Life stage ───────────────────────────────────────────────────────────────

class LifeStage(str, Enum):
    EARLY_CAREER = "early_career"
    ESTABLISHING = "establishing"
    ESTABLISHED = "established"
    MATURE = "mature"
    UNKNOWN = "unknown"

    @classmethod
    def coerce(cls, value: Any) -> "LifeStage":
        """Accept a LifeStage or its string value; anything else is invalid."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidLifeStageError(f"Unknown life stage: {value!r}") from None


# Band order drives distance; UNKNOWN has no position.
LIFE_STAGE_ORDER = (
    LifeStage.EARLY_CAREER,
    LifeStage.ESTABLISHING,
    LifeStage.ESTABLISHED,
    LifeStage.MATURE,
)


class FlexibilityMode(str, Enum):
    ADJACENT = "adjacent"
    FLEXIBLE = "flexible"


# ── Profiles ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class UserMatchProfile:
    """Read-only, scoring-relevant projection of a user record.

    ``life_stage`` is always derived from ``age``; it is never stored.
    """

    user_id: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[int] = None
    attachment_style: Optional[str] = None
    love_languages: frozenset[str] = field(default_factory=frozenset)
    interests: frozenset[str] = field(default_factory=frozenset)
    compass_answers: CompassAnswers = field(default_factory=dict)

    def __post_init__(self):
        # Unparseable ages become unknown rather than failing later comparisons.
        if self.age is not None:
            try:
                object.__setattr__(self, "age", int(self.age))
            except (TypeError, ValueError, OverflowError):
                object.__setattr__(self, "age", None)
        # Freeze collections so a snapshot can't be changed under the engine.
        object.__setattr__(self, "love_languages", frozenset(self.love_languages or ()))
        object.__setattr__(self, "interests", frozenset(self.interests or ()))
        # Only string answers are comparable; anything else counts as unanswered.
        answers = {
            k: v for k, v in dict(self.compass_answers or {}).items()
            if isinstance(k, str) and isinstance(v, str)
        }
        object.__setattr__(self, "compass_answers", MappingProxyType(answers))

    @property
    def life_stage(self) -> LifeStage:
        """Stage under the default age bands. Use ``stage(bands)`` for custom ones."""
        return self.stage()

    def stage(self, bands=None) -> LifeStage:
        from ..matching.life_stage import classify

        if bands is None:
            return classify(self.age)
        return classify(self.age, bands)

    def answer(self, question: str) -> Optional[str]:
        return self.compass_answers.get(question)

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "gender": self.gender,
            "age": self.age,
            "attachment_style": self.attachment_style,
            "love_languages": sorted(self.love_languages),
            "interests": sorted(self.interests),
            "compass_answers": dict(self.compass_answers),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserMatchProfile":
        return cls(
            user_id=data.get("user_id"),
            gender=data.get("gender"),
            age=data.get("age"),
            attachment_style=data.get("attachment_style"),
            love_languages=data.get("love_languages") or (),
            interests=data.get("interests") or (),
            compass_answers=data.get("compass_answers") or {},
        )

    @classmethod
    def from_user_record(cls, record: Mapping[str, Any]) -> "UserMatchProfile":
        """Project a persisted user row into a profile.

        Quiz answers may live at the top level or inside ``personality_data``;
        hint lists collected by the chat flow take precedence over single
        values.
        """
        personality = record.get("personality_data") or {}

        compass = record.get("couple_compass_data") or personality.get("couple_compass_data") or {}

        if personality.get("love_language_hints"):
            love_languages = personality["love_language_hints"]
        elif personality.get("love_language"):
            love_languages = [personality["love_language"]]
        else:
            love_languages = []

        if personality.get("attachment_hints"):
            attachment = personality["attachment_hints"][0]
        else:
            attachment = personality.get("attachment_style")

        user_id = record.get("user_id")
        return cls(
            user_id=str(user_id) if user_id is not None else None,
            gender=record.get("user_gender") or record.get("gender"),
            age=record.get("age"),
            attachment_style=attachment,
            love_languages=love_languages,
            interests=personality.get("interests") or [],
            compass_answers=compass,
        )


# ── Results ──────────────────────────────────────────────────────────────────

DIMENSIONS = ("values", "emotional", "lifestyle", "life_stage")


@dataclass(frozen=True)
class CompatibilityResult:
    overall_score: int
    dimension_scores: Mapping[str, int]
    top_reasons: tuple[str, ...]
    recommendation: str

    def __post_init__(self):
        object.__setattr__(self, "dimension_scores", MappingProxyType(dict(self.dimension_scores)))
        object.__setattr__(self, "top_reasons", tuple(self.top_reasons))

    def to_dict(self) -> dict[str, Any]:
        """camelCase wire shape stored alongside match records."""
        return {
            "overallScore": self.overall_score,
            "dimensionScores": {
                "values": self.dimension_scores["values"],
                "emotional": self.dimension_scores["emotional"],
                "lifestyle": self.dimension_scores["lifestyle"],
                "lifeStage": self.dimension_scores["life_stage"],
            },
            "topReasons": list(self.top_reasons),
            "recommendation": self.recommendation,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CompatibilityResult":
        dims = data["dimensionScores"]
        return cls(
            overall_score=int(data["overallScore"]),
            dimension_scores={
                "values": dims["values"],
                "emotional": dims["emotional"],
                "lifestyle": dims["lifestyle"],
                "life_stage": dims["lifeStage"],
            },
            top_reasons=tuple(data["topReasons"]),
            recommendation=data["recommendation"],
        )
