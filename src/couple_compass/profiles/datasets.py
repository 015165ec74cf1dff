"""JSON persistence for profile pools and match records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .schema import UserMatchProfile


def save_profiles(path: str | Path, profiles: list[UserMatchProfile]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump([p.to_dict() for p in profiles], f, indent=2)


def load_profiles(path: str | Path) -> list[UserMatchProfile]:
    """Load a pool saved by ``save_profiles`` or exported user rows.

    Rows carrying ``couple_compass_data``/``personality_data`` are treated as
    raw user records and projected through ``from_user_record``.
    """
    with open(Path(path)) as f:
        rows = json.load(f)
    profiles = []
    for row in rows:
        if "couple_compass_data" in row or "personality_data" in row:
            profiles.append(UserMatchProfile.from_user_record(row))
        else:
            profiles.append(UserMatchProfile.from_dict(row))
    return profiles


def save_match_records(path: str | Path, records: list[dict[str, Any]]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(records, f, indent=2)


def load_match_records(path: str | Path) -> list[dict[str, Any]]:
    with open(Path(path)) as f:
        return json.load(f)
