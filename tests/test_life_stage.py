"""Tests for life-stage banding and eligibility."""

import pytest

from couple_compass.matching.life_stage import (
    classify,
    compatible_bands,
    distance,
    flexibility_mode,
    is_eligible_pair,
)
from couple_compass.profiles.schema import (
    FlexibilityMode,
    InvalidLifeStageError,
    LifeStage,
    UserMatchProfile,
)

EC = LifeStage.EARLY_CAREER
EG = LifeStage.ESTABLISHING
ED = LifeStage.ESTABLISHED
MA = LifeStage.MATURE


def _profile(age=None, gender=None, children=None):
    answers = {"children_vision": children} if children else {}
    return UserMatchProfile(age=age, gender=gender, compass_answers=answers)


class TestClassify:
    @pytest.mark.parametrize("age,stage", [
        (None, LifeStage.UNKNOWN),
        (0, LifeStage.UNKNOWN),
        (19, LifeStage.UNKNOWN),
        (20, EC),
        (27, EC),
        (28, EG),
        (35, EG),
        (36, ED),
        (45, ED),
        (46, MA),
        (80, MA),
    ])
    def test_band_boundaries(self, age, stage):
        assert classify(age) is stage

    def test_profile_life_stage_follows_age(self):
        assert _profile(age=30).life_stage is EG
        assert _profile().life_stage is LifeStage.UNKNOWN


class TestDistance:
    def test_same_band(self):
        assert distance(EG, EG) == 0

    def test_ends_of_range(self):
        assert distance(EC, MA) == 3
        assert distance(MA, EC) == 3

    def test_accepts_string_values(self):
        assert distance("early_career", "established") == 2

    def test_unknown_is_incompatible(self):
        assert distance(LifeStage.UNKNOWN, EG) is None
        assert distance(EG, LifeStage.UNKNOWN) is None

    def test_invalid_stage_raises(self):
        with pytest.raises(InvalidLifeStageError):
            distance("retired", EG)


class TestCompatibleBands:
    def test_adjacent_clipped_at_start(self):
        assert compatible_bands(EC) == {EC, EG}

    def test_adjacent_middle(self):
        assert compatible_bands(EG, FlexibilityMode.ADJACENT) == {EC, EG, ED}

    def test_flexible_adds_two_steps(self):
        assert compatible_bands(EC, FlexibilityMode.FLEXIBLE) == {EC, EG, ED}
        assert compatible_bands(ED, FlexibilityMode.FLEXIBLE) == {EC, EG, ED, MA}

    def test_flexible_clipped_at_end(self):
        assert compatible_bands(MA, FlexibilityMode.FLEXIBLE) == {EG, ED, MA}

    def test_always_contains_itself(self):
        for stage in (EC, EG, ED, MA):
            for mode in FlexibilityMode:
                assert stage in compatible_bands(stage, mode)

    def test_unknown_has_no_bands(self):
        assert compatible_bands(LifeStage.UNKNOWN) == frozenset()

    def test_invalid_stage_raises(self):
        with pytest.raises(InvalidLifeStageError):
            compatible_bands("teenager")


class TestFlexibilityMode:
    def test_default_is_adjacent(self):
        assert flexibility_mode(_profile(30), _profile(32)) is FlexibilityMode.ADJACENT

    def test_both_open_on_children(self):
        a = _profile(25, children="no")
        b = _profile(40, children="maybe")
        assert flexibility_mode(a, b) is FlexibilityMode.FLEXIBLE

    def test_one_side_wants_children(self):
        a = _profile(25, children="no")
        b = _profile(40, children="yes_support")
        assert flexibility_mode(a, b) is FlexibilityMode.ADJACENT

    def test_older_male_widens(self):
        a = _profile(38, gender="male")
        b = _profile(26, gender="female")
        assert flexibility_mode(a, b) is FlexibilityMode.FLEXIBLE
        assert flexibility_mode(b, a) is FlexibilityMode.FLEXIBLE

    def test_younger_male_does_not_widen(self):
        a = _profile(35, gender="male")
        b = _profile(26, gender="female")
        assert flexibility_mode(a, b) is FlexibilityMode.ADJACENT


class TestEligibility:
    def test_adjacent_bands_eligible(self):
        assert is_eligible_pair(_profile(25), _profile(30))

    def test_two_bands_apart_needs_flexibility(self):
        assert not is_eligible_pair(_profile(24), _profile(40))
        assert is_eligible_pair(_profile(24, children="no"), _profile(40, children="no"))

    def test_three_bands_never_eligible(self):
        a = _profile(22, gender="male", children="no")
        b = _profile(50, gender="male", children="no")
        assert not is_eligible_pair(a, b)

    def test_unknown_age_never_eligible(self):
        assert not is_eligible_pair(_profile(None), _profile(30))
        assert not is_eligible_pair(_profile(18), _profile(21))
