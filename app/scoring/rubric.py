"""
Weighted Rubric
app/scoring/rubric.py

Shared point-accumulation engine behind the lead, contact and deal scorers.

A rubric is an ordered list of rules. Each rule looks at the entity (and the
reference time) and either contributes ``(points, factor)`` under its
breakdown key or abstains. Rules that would contribute zero points abstain,
so ``UNQUALIFIED`` or ``CHURNED`` never show up in the breakdown.

    total = min(Σ points, 100)
    grade = A ≥ 80 > B ≥ 60 > C ≥ 40 > D ≥ 20 > F
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

import structlog

from app.models.enumerations import EntityType, Grade, ScoreTier
from app.scoring.utils import clamp

logger = structlog.get_logger(__name__)

MAX_SCORE = 100

GRADE_THRESHOLDS: Tuple[Tuple[int, Grade], ...] = (
    (80, Grade.A),
    (60, Grade.B),
    (40, Grade.C),
    (20, Grade.D),
)

TIER_THRESHOLDS: Tuple[Tuple[int, ScoreTier], ...] = (
    (80, ScoreTier.HIGH),
    (50, ScoreTier.MEDIUM),
)

Contribution = Optional[Tuple[int, str]]
RuleFn = Callable[[Any, datetime], Contribution]


def grade_for(total: int) -> Grade:
    """Letter grade for a score in [0, 100]."""
    for threshold, grade in GRADE_THRESHOLDS:
        if total >= threshold:
            return grade
    return Grade.F


def score_tier(total: int) -> ScoreTier:
    """Coarse HIGH / MEDIUM / LOW label written back onto leads."""
    for threshold, tier in TIER_THRESHOLDS:
        if total >= threshold:
            return tier
    return ScoreTier.LOW


@dataclass
class ScoreResult:
    """Output of a rubric evaluation."""
    total: int                       # clamped to [0, 100]
    breakdown: Dict[str, int]        # rule key → points, in rule order
    grade: Grade
    factors: List[str]               # human-readable, in rule order
    entity_type: EntityType

    @property
    def tier(self) -> ScoreTier:
        return score_tier(self.total)


@dataclass(frozen=True)
class RubricRule:
    """One named scoring factor."""
    key: str
    evaluate: RuleFn


@dataclass(frozen=True)
class Tier:
    """First-match-wins band of a tiered rule."""
    matches: Callable[[float], bool]
    points: int
    label: str


def flag_rule(key: str, points: int, label: str, predicate: Callable[[Any], bool]) -> RubricRule:
    """Fixed bonus when predicate(entity) holds."""

    def evaluate(entity: Any, now: datetime) -> Contribution:
        return (points, label) if predicate(entity) else None

    return RubricRule(key=key, evaluate=evaluate)


def lookup_rule(
    key: str,
    attribute: str,
    table: Mapping[str, int],
    label: str,
) -> RubricRule:
    """
    Points from a fixed table keyed by an enum-like attribute.

    ``label`` is formatted with ``value``. Missing or unmapped values abstain.
    """

    def evaluate(entity: Any, now: datetime) -> Contribution:
        value = getattr(entity, attribute, None)
        if not value:
            return None
        points = table.get(value, 0)
        if not points:
            return None
        return points, label.format(value=value)

    return RubricRule(key=key, evaluate=evaluate)


def tiered_rule(
    key: str,
    measure: Callable[[Any, datetime], Optional[float]],
    tiers: Sequence[Tier],
) -> RubricRule:
    """Points from the first tier whose predicate matches the measured value."""

    def evaluate(entity: Any, now: datetime) -> Contribution:
        value = measure(entity, now)
        if value is None:
            return None
        for tier in tiers:
            if tier.matches(value):
                return tier.points, tier.label
        return None

    return RubricRule(key=key, evaluate=evaluate)


@dataclass
class WeightedRubric:
    """Ordered rule list evaluated into a ScoreResult."""
    entity_type: EntityType
    rules: List[RubricRule] = field(default_factory=list)

    def evaluate(self, entity: Any, now: datetime) -> ScoreResult:
        raw = 0
        breakdown: Dict[str, int] = {}
        factors: List[str] = []

        for rule in self.rules:
            contribution = rule.evaluate(entity, now)
            if contribution is None:
                continue
            points, factor = contribution
            if not points:
                continue
            raw += points
            breakdown[rule.key] = points
            factors.append(factor)

        total = int(clamp(raw, 0, MAX_SCORE))
        grade = grade_for(total)

        logger.debug(
            "rubric_evaluated",
            entity_type=self.entity_type.value,
            raw_score=raw,
            total=total,
            grade=grade.value,
            breakdown=breakdown,
        )

        return ScoreResult(
            total=total,
            breakdown=breakdown,
            grade=grade,
            factors=factors,
            entity_type=self.entity_type,
        )
