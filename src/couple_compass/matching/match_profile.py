"""Narrative copy for a scored match: intro, highlights, reasons, openers.

Pure presentation over a ``CompatibilityResult``; nothing here scores.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from ..config import LifeStageConfig
from ..profiles.schema import CompatibilityResult, UserMatchProfile

OPENING_LINES = [
    "I found someone I think you should meet.",
    "Someone new caught my attention for you.",
    "I have a feeling about this one.",
    "Here's a match worth a closer look.",
]

ATTACHMENT_PHRASES = {
    ("secure", "secure"): "You both bring a steady, secure way of loving.",
    ("anxious", "secure"): "Their steadiness can give the reassurance that helps you both relax.",
    ("avoidant", "secure"): "There's room here for closeness without pressure.",
    ("anxious", "anxious"): "You both care deeply and will notice when the other needs more.",
    ("anxious", "avoidant"): "You'll balance closeness and space differently, which takes open talk.",
    ("avoidant", "avoidant"): "You both value independence and personal space.",
}
DEFAULT_ATTACHMENT_PHRASE = "You'll discover how you each show up in a relationship."

LOVE_LANGUAGE_LABELS = {
    "words_of_affirmation": "words of affirmation",
    "quality_time": "quality time",
    "acts_of_service": "acts of service",
    "physical_touch": "physical touch",
    "receiving_gifts": "thoughtful gifts",
}

COMPASS_TOPICS = {
    "living_arrangement": "where you each see yourselves living",
    "financial_style": "how you like to handle money as a couple",
    "children_vision": "what family looks like to you",
    "conflict_style": "how you work through disagreements",
    "ambition_balance": "how you balance ambition and home life",
    "big_mismatch": "how you handle big differences",
}

INTEREST_STARTERS = [
    "You both love {interest}. What got you into it?",
    "Ask about their favorite {interest} memory.",
    "Plan something around {interest} together?",
]


@dataclass(frozen=True)
class MatchProfile:
    introduction: str
    highlights: tuple[str, ...]
    why_you_match: tuple[str, ...]
    conversation_starters: tuple[str, ...]


def _attachment_phrase(a: Optional[str], b: Optional[str]) -> str:
    if not a or not b:
        return DEFAULT_ATTACHMENT_PHRASE
    pair = tuple(sorted((a.lower(), b.lower())))
    return ATTACHMENT_PHRASES.get(pair, DEFAULT_ATTACHMENT_PHRASE)


def _highlights(result: CompatibilityResult, user: UserMatchProfile,
                match: UserMatchProfile, bands=None) -> list[str]:
    lines = [f"{result.overall_score}% compatible ({result.recommendation})"]
    if match.age is not None:
        lines.append(f"{match.age}, {match.stage(bands).value.replace('_', ' ')}")
    shared_love = sorted(user.love_languages & match.love_languages)
    if shared_love:
        labels = [LOVE_LANGUAGE_LABELS.get(l, l.replace("_", " ")) for l in shared_love]
        lines.append(f"You both feel loved through {', '.join(labels)}")
    shared_interests = sorted(user.interests & match.interests)
    if shared_interests:
        lines.append(f"Shared interests: {', '.join(shared_interests)}")
    return lines


def _conversation_starters(user: UserMatchProfile, match: UserMatchProfile,
                           rng: random.Random, limit: int = 3) -> list[str]:
    starters = []
    for interest in sorted(user.interests & match.interests):
        starters.append(rng.choice(INTEREST_STARTERS).format(interest=interest))
    for key, topic in COMPASS_TOPICS.items():
        if key in user.compass_answers and user.answer(key) == match.answer(key):
            starters.append(f"You answered the same on {topic}. Ask what shaped that.")
    if not starters:
        starters.append("Ask what a perfect weekend looks like to them.")
    return starters[:limit]


def generate_match_profile(
    result: CompatibilityResult,
    user: UserMatchProfile,
    match: UserMatchProfile,
    rng: Optional[random.Random] = None,
    bands: Optional[LifeStageConfig] = None,
) -> MatchProfile:
    """Render the narrative card for one scored pair.

    Pass the engine's ``cfg.life_stage`` as ``bands`` so the stage shown
    matches the one that was scored.
    """
    rng = rng or random.Random()
    intro = f"{rng.choice(OPENING_LINES)} {_attachment_phrase(user.attachment_style, match.attachment_style)}"

    return MatchProfile(
        introduction=intro,
        highlights=tuple(_highlights(result, user, match, bands)),
        why_you_match=tuple(result.top_reasons) or (DEFAULT_ATTACHMENT_PHRASE,),
        conversation_starters=tuple(_conversation_starters(user, match, rng)),
    )
