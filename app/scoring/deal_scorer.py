"""
scoring/deal_scorer.py — Deal Scoring

    value        ≥100,000 → 30, ≥50,000 → 25, ≥10,000 → 15, >0 → 8
    stage        CLOSED_WON 35, NEGOTIATION 30, PROPOSAL 25, QUALIFIED 20,
                 LEAD 10, CLOSED_LOST 0
    priority     URGENT 25, HIGH 20, MEDIUM 12, LOW 5
    probability  ≥80 → 15, ≥50 → 10, ≥20 → 5
    close_date   closing in 0–30 days → 10, 0–90 days → 5 (overdue scores 0)
"""

from datetime import datetime
from typing import Dict, Optional

import structlog

from app.models.enumerations import DealPriority, DealStage, EntityType
from app.models.scoring import DealSnapshot
from app.scoring.rubric import ScoreResult, Tier, WeightedRubric, lookup_rule, tiered_rule
from app.scoring.utils import utc_now, whole_days_between

logger = structlog.get_logger(__name__)

STAGE_POINTS: Dict[str, int] = {
    DealStage.NEGOTIATION.value: 30,
    DealStage.PROPOSAL.value: 25,
    DealStage.QUALIFIED.value: 20,
    DealStage.LEAD.value: 10,
    DealStage.CLOSED_WON.value: 35,
    DealStage.CLOSED_LOST.value: 0,
}

PRIORITY_POINTS: Dict[str, int] = {
    DealPriority.URGENT.value: 25,
    DealPriority.HIGH.value: 20,
    DealPriority.MEDIUM.value: 12,
    DealPriority.LOW.value: 5,
}

VALUE_TIERS = (
    Tier(lambda value: value >= 100000, 30, "High-value deal"),
    Tier(lambda value: value >= 50000, 25, "Medium-high value deal"),
    Tier(lambda value: value >= 10000, 15, "Medium value deal"),
    Tier(lambda value: value > 0, 8, "Low value deal"),
)

PROBABILITY_TIERS = (
    Tier(lambda p: p >= 80, 15, "High probability"),
    Tier(lambda p: p >= 50, 10, "Medium probability"),
    Tier(lambda p: p >= 20, 5, "Low probability"),
)

CLOSE_DATE_TIERS = (
    Tier(lambda days: 0 <= days <= 30, 10, "Closing soon"),
    Tier(lambda days: 0 <= days <= 90, 5, "Closing this quarter"),
)


def _days_to_close(deal: DealSnapshot, now: datetime) -> Optional[float]:
    if deal.expected_close_date is None:
        return None
    return whole_days_between(now, deal.expected_close_date)


class DealScorer:
    """Score a single deal snapshot."""

    def __init__(self) -> None:
        self._rubric = WeightedRubric(
            EntityType.DEAL,
            [
                tiered_rule("value", lambda deal, now: deal.value, VALUE_TIERS),
                lookup_rule("stage", "stage", STAGE_POINTS, "Stage: {value}"),
                lookup_rule("priority", "priority", PRIORITY_POINTS, "Priority: {value}"),
                tiered_rule("probability", lambda deal, now: deal.probability, PROBABILITY_TIERS),
                tiered_rule("close_date", _days_to_close, CLOSE_DATE_TIERS),
            ],
        )

    def score(self, deal: DealSnapshot, now: Optional[datetime] = None) -> ScoreResult:
        """
        Args:
            deal: Deal snapshot; absent fields contribute nothing.
            now: Reference time for the close-date rule (defaults to UTC now).
        """
        result = self._rubric.evaluate(deal, utc_now(now))
        logger.info(
            "deal_scored",
            deal_id=deal.id,
            total=result.total,
            grade=result.grade.value,
        )
        return result
