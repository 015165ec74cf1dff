"""Synthetic profile generation for batch runs and property tests.

Attributes are loosely coherent: children answers lean on age, ambition
leans on life stage, and quizzes are sometimes left unfinished so the
engine sees partial answer sets the way production does.
"""

from __future__ import annotations

import random

from .schema import (
    ATTACHMENT_STYLES,
    COMPASS_VOCABULARY,
    LOVE_LANGUAGES,
    QUESTION_KEYS,
    UserMatchProfile,
)

# ── Attribute pools ──────────────────────────────────────────────────────────

INTERESTS = [
    "hiking", "cooking", "reading", "gaming", "music", "photography",
    "yoga", "travel", "movies", "dancing", "volunteering", "gardening",
    "sports", "art", "writing", "meditation", "board games", "running",
    "cycling", "camping", "theater", "podcasts",
]

GENDERS = ["male", "female"]


def _sample(pool: list[str] | tuple[str, ...], k: int, rng: random.Random) -> list[str]:
    return rng.sample(list(pool), min(k, len(pool)))


def _children_vision(age: int, rng: random.Random) -> str:
    if age >= 45:
        return rng.choices(COMPASS_VOCABULARY["children_vision"], weights=[10, 15, 30, 45])[0]
    return rng.choices(COMPASS_VOCABULARY["children_vision"], weights=[40, 25, 25, 10])[0]


def _compass_answers(age: int, rng: random.Random, complete_prob: float) -> dict[str, str]:
    answers = {}
    for key in QUESTION_KEYS:
        if key == "children_vision":
            answers[key] = _children_vision(age, rng)
        elif key == "conflict_style":
            # Avoiders are rarer; keeps the both-avoid dealbreaker realistic.
            answers[key] = rng.choices(COMPASS_VOCABULARY[key], weights=[40, 25, 25, 10])[0]
        else:
            answers[key] = rng.choice(COMPASS_VOCABULARY[key])

    if rng.random() >= complete_prob:
        # Unfinished quiz: keep a prefix of the questions in quiz order.
        answered = rng.randint(0, len(QUESTION_KEYS) - 1)
        answers = {k: answers[k] for k in QUESTION_KEYS[:answered]}
    return answers


def generate_profiles(
    n: int,
    seed: int = 42,
    min_age: int = 20,
    max_age: int = 55,
    complete_prob: float = 0.8,
) -> list[UserMatchProfile]:
    """Generate n synthetic profiles, deterministic for a given seed."""
    rng = random.Random(seed)
    profiles = []

    for i in range(n):
        age = rng.randint(min_age, max_age)
        attachment = rng.choices(list(ATTACHMENT_STYLES) + [None], weights=[50, 20, 20, 10])[0]

        profile = UserMatchProfile(
            user_id=f"user-{i:04d}",
            gender=rng.choice(GENDERS),
            age=age,
            attachment_style=attachment,
            love_languages=_sample(LOVE_LANGUAGES, rng.randint(0, 2), rng),
            interests=_sample(INTERESTS, rng.randint(0, 5), rng),
            compass_answers=_compass_answers(age, rng, complete_prob),
        )
        profiles.append(profile)

    return profiles
