"""Tests for the compass compatibility table and dealbreaker/red-flag rules."""

import pytest

from couple_compass.matching.compass_table import (
    COMPASS_COMPATIBILITY,
    compatible_values,
    is_compatible,
)
from couple_compass.matching.rules import (
    DEALBREAKERS,
    RED_FLAGS,
    Rule,
    RuleKind,
    evaluate,
    first_match,
)
from couple_compass.profiles.schema import COMPASS_VOCABULARY, QUESTION_KEYS


class TestCompassTable:
    def test_covers_every_question(self):
        assert set(COMPASS_COMPATIBILITY) == set(QUESTION_KEYS)

    def test_entries_use_known_vocabulary(self):
        for question, table in COMPASS_COMPATIBILITY.items():
            vocab = set(COMPASS_VOCABULARY[question])
            for value, others in table.items():
                assert value in vocab
                assert others <= vocab
                assert value not in others

    @pytest.mark.parametrize("question,value,expected", [
        ("living_arrangement", "with_parents", {"near_parents"}),
        ("living_arrangement", "near_parents", {"with_parents", "flexible"}),
        ("living_arrangement", "new_city", {"flexible"}),
        ("living_arrangement", "flexible", {"near_parents", "new_city"}),
        ("financial_style", "provider", {"lead_share"}),
        ("financial_style", "lead_share", {"provider", "equal"}),
        ("financial_style", "equal", {"lead_share", "emotional"}),
        ("financial_style", "emotional", {"equal"}),
        ("children_vision", "yes_involved", {"yes_support"}),
        ("children_vision", "yes_support", {"yes_involved", "maybe"}),
        ("children_vision", "maybe", {"yes_support"}),
        ("children_vision", "no", set()),
        ("conflict_style", "talk_out", {"need_space", "mediator"}),
        ("conflict_style", "need_space", {"talk_out"}),
        ("conflict_style", "mediator", {"talk_out", "need_space"}),
        ("conflict_style", "avoid", set()),
        ("ambition_balance", "high_ambition", {"balanced"}),
        ("ambition_balance", "balanced", {"high_ambition", "family_first"}),
        ("ambition_balance", "family_first", {"balanced", "simple_life"}),
        ("ambition_balance", "simple_life", {"family_first"}),
        ("big_mismatch", "discuss", {"flexible", "unsure"}),
        ("big_mismatch", "unsure", {"discuss"}),
        ("big_mismatch", "flexible", {"discuss"}),
        ("big_mismatch", "mismatch", set()),
    ])
    def test_entry(self, question, value, expected):
        assert compatible_values(question, value) == expected

    def test_lookup_is_order_independent(self):
        for question, vocab in COMPASS_VOCABULARY.items():
            for a in vocab:
                for b in vocab:
                    assert is_compatible(question, a, b) == is_compatible(question, b, a)

    def test_mismatch_never_compatible(self):
        for other in COMPASS_VOCABULARY["big_mismatch"]:
            assert not is_compatible("big_mismatch", "mismatch", other)

    def test_unknown_values_not_compatible(self):
        assert not is_compatible("living_arrangement", "on_a_boat", "flexible")
        assert not is_compatible("favourite_colour", "blue", "green")
        assert not is_compatible("living_arrangement", None, "flexible")

    @pytest.mark.parametrize("bad", [["flexible"], {"x": 1}, 7])
    def test_non_string_values_not_compatible(self, bad):
        assert compatible_values("living_arrangement", bad) == frozenset()
        assert not is_compatible("living_arrangement", bad, "flexible")
        assert not is_compatible("living_arrangement", "flexible", bad)


class TestRules:
    def test_rule_lists_are_ordered(self):
        assert [r.name for r in DEALBREAKERS] == ["children_mismatch", "both_avoid_conflict"]
        assert [r.name for r in RED_FLAGS] == ["ambition_mismatch"]
        assert all(r.kind is RuleKind.DEALBREAKER for r in DEALBREAKERS)
        assert RED_FLAGS[0].score_ceiling == 20

    @pytest.mark.parametrize("wants", ["yes_involved", "yes_support"])
    def test_children_mismatch_both_directions(self, wants):
        a = {"children_vision": wants}
        b = {"children_vision": "no"}
        assert evaluate(a, b).dealbreaker.name == "children_mismatch"
        assert evaluate(b, a).dealbreaker.name == "children_mismatch"

    def test_maybe_is_not_children_mismatch(self):
        out = evaluate({"children_vision": "maybe"}, {"children_vision": "no"})
        assert not out.disqualified

    def test_both_avoid(self):
        out = evaluate({"conflict_style": "avoid"}, {"conflict_style": "avoid"})
        assert out.dealbreaker.name == "both_avoid_conflict"

    def test_one_avoid_is_fine(self):
        out = evaluate({"conflict_style": "avoid"}, {"conflict_style": "talk_out"})
        assert out.dealbreaker is None and out.red_flag is None

    def test_first_dealbreaker_wins(self):
        a = {"children_vision": "no", "conflict_style": "avoid"}
        b = {"children_vision": "yes_involved", "conflict_style": "avoid"}
        assert evaluate(a, b).dealbreaker.name == "children_mismatch"

    def test_ambition_red_flag_both_directions(self):
        a = {"ambition_balance": "high_ambition"}
        b = {"ambition_balance": "simple_life"}
        for x, y in ((a, b), (b, a)):
            out = evaluate(x, y)
            assert not out.disqualified
            assert out.red_flag.name == "ambition_mismatch"

    def test_dealbreaker_suppresses_red_flag(self):
        a = {"children_vision": "no", "ambition_balance": "high_ambition"}
        b = {"children_vision": "yes_support", "ambition_balance": "simple_life"}
        out = evaluate(a, b)
        assert out.dealbreaker is not None
        assert out.red_flag is None

    @pytest.mark.parametrize("bad", [["yes_involved"], {"yes_involved": True}])
    def test_non_string_answers_match_nothing(self, bad):
        for x, y in (({"children_vision": bad}, {"children_vision": "no"}),
                     ({"children_vision": "no"}, {"children_vision": bad})):
            out = evaluate(x, y)
            assert not out.disqualified
            assert out.red_flag is None

    def test_missing_answers_match_nothing(self):
        out = evaluate({}, None)
        assert out.dealbreaker is None and out.red_flag is None

    def test_custom_rules(self):
        both_provider = Rule(
            name="both_provider",
            kind=RuleKind.RED_FLAG,
            predicate=lambda a, b: a.get("financial_style") == b.get("financial_style") == "provider",
            message="Both expect to be the provider",
            score_ceiling=50,
        )
        a = b = {"financial_style": "provider"}
        assert first_match([both_provider], a, b) is both_provider
        assert evaluate(a, b, red_flags=RED_FLAGS + (both_provider,)).red_flag is both_provider
