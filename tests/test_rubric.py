# tests/test_rubric.py

"""
Rubric & Utility Tests - grade thresholds, rule evaluation, numeric helpers
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.models.enumerations import EntityType, Grade, ScoreTier
from app.scoring.rubric import (
    Tier,
    WeightedRubric,
    flag_rule,
    grade_for,
    lookup_rule,
    score_tier,
    tiered_rule,
)
from app.scoring.utils import (
    clamp,
    round_half_up,
    round_int,
    safe_ratio,
    to_decimal,
    whole_days_between,
)



# GRADE / TIER TESTS


class TestGradeThresholds:
    """Tests for grade_for() and score_tier()."""

    @pytest.mark.parametrize(
        "total, grade",
        [
            (100, Grade.A), (80, Grade.A),
            (79, Grade.B), (60, Grade.B),
            (59, Grade.C), (40, Grade.C),
            (39, Grade.D), (20, Grade.D),
            (19, Grade.F), (0, Grade.F),
        ],
    )
    def test_grade_boundaries(self, total, grade):
        assert grade_for(total) == grade

    @pytest.mark.parametrize(
        "total, tier",
        [(100, ScoreTier.HIGH), (80, ScoreTier.HIGH), (79, ScoreTier.MEDIUM),
         (50, ScoreTier.MEDIUM), (49, ScoreTier.LOW), (0, ScoreTier.LOW)],
    )
    def test_tier_boundaries(self, total, tier):
        assert score_tier(total) == tier



# WEIGHTED RUBRIC TESTS


class _Entity:
    def __init__(self, **fields):
        self.__dict__.update(fields)


class TestWeightedRubric:
    """Tests for WeightedRubric.evaluate()."""

    @pytest.fixture
    def rubric(self):
        return WeightedRubric(
            EntityType.LEAD,
            [
                flag_rule("flag", 40, "Flag set", lambda e: getattr(e, "flag", False)),
                lookup_rule("kind", "kind", {"GOLD": 50, "LEAD": 0}, "Kind: {value}"),
                tiered_rule(
                    "size",
                    lambda e, now: getattr(e, "size", None),
                    (Tier(lambda v: v >= 10, 30, "Big"), Tier(lambda v: v >= 1, 5, "Small")),
                ),
            ],
        )

    def test_contributions_recorded_in_order(self, rubric):
        result = rubric.evaluate(_Entity(flag=True, kind="GOLD", size=3), datetime.now(timezone.utc))
        assert result.breakdown == {"flag": 40, "kind": 50, "size": 5}
        assert result.factors == ["Flag set", "Kind: GOLD", "Small"]
        assert result.total == 95

    def test_total_is_capped(self, rubric):
        result = rubric.evaluate(_Entity(flag=True, kind="GOLD", size=50), datetime.now(timezone.utc))
        assert result.total == 100
        assert sum(result.breakdown.values()) == 120

    def test_zero_point_lookup_abstains(self, rubric):
        result = rubric.evaluate(_Entity(kind="LEAD"), datetime.now(timezone.utc))
        assert result.breakdown == {}
        assert result.total == 0

    def test_missing_attributes_never_raise(self, rubric):
        result = rubric.evaluate(_Entity(), datetime.now(timezone.utc))
        assert result.total == 0
        assert result.grade == Grade.F

    def test_first_matching_tier_wins(self, rubric):
        result = rubric.evaluate(_Entity(size=10), datetime.now(timezone.utc))
        assert result.breakdown == {"size": 30}



# NUMERIC UTILITY TESTS


class TestUtils:
    """Tests for app.scoring.utils."""

    @pytest.mark.parametrize(
        "value, expected",
        [(1.005, 1.01), (2.675, 2.68), (33.333333, 33.33), (66.666666, 66.67),
         (-2.345, -2.35), (0, 0.0)],
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value, 2) == expected

    @pytest.mark.parametrize("value, expected", [(67.5, 68), (62.4999, 62), (0.5, 1), (-0.5, -1)])
    def test_round_int(self, value, expected):
        assert round_int(value) == expected

    def test_to_decimal_quantizes(self):
        assert to_decimal(0.123456) == Decimal("0.1235")

    def test_safe_ratio_guards_zero(self):
        assert safe_ratio(5, 0) == 0.0
        assert safe_ratio(1, 4) == 0.25

    def test_clamp(self):
        assert clamp(120) == 100
        assert clamp(-3) == 0
        assert clamp(42) == 42

    def test_whole_days_floor(self):
        start = datetime(2026, 1, 1, tzinfo=timezone.utc)
        assert whole_days_between(start, start + timedelta(days=6, hours=23)) == 6
        assert whole_days_between(start, start - timedelta(hours=1)) == -1

    @pytest.mark.parametrize("value", [1e26, 5e31, -4.2e40, 10**30])
    def test_round_half_up_large_magnitudes(self, value):
        assert round_half_up(value, 2) == pytest.approx(float(value), rel=1e-15)

    def test_round_int_large_magnitude(self):
        assert round_int(1e35) == int(Decimal("1E+35"))

    def test_to_decimal_keeps_places_for_large_values(self):
        assert to_decimal(1e30, 2) == Decimal("1000000000000000000000000000000.00")
