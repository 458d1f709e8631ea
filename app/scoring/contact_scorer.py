"""
scoring/contact_scorer.py — Contact Scoring

    deal_value    aggregate deal value  >50,000 → 30, >10,000 → 20, >0 → 10
    interactions  interaction count     ≥10 → 25, ≥5 → 15, ≥2 → 8
    status        VIP 25, ACTIVE 20, NEW 15, INACTIVE 5, CHURNED 0
    type          CUSTOMER 20, PARTNER 18, PROSPECT 12, VENDOR 8
    company       +10 when a company is on file
"""

import logging
from datetime import datetime
from typing import Dict, Optional

from app.models.enumerations import ContactStatus, ContactType, EntityType
from app.models.scoring import ContactSnapshot
from app.scoring.rubric import ScoreResult, Tier, WeightedRubric, flag_rule, lookup_rule, tiered_rule
from app.scoring.utils import utc_now

logger = logging.getLogger(__name__)

STATUS_POINTS: Dict[str, int] = {
    ContactStatus.VIP.value: 25,
    ContactStatus.ACTIVE.value: 20,
    ContactStatus.NEW.value: 15,
    ContactStatus.INACTIVE.value: 5,
    ContactStatus.CHURNED.value: 0,
}

TYPE_POINTS: Dict[str, int] = {
    ContactType.CUSTOMER.value: 20,
    ContactType.PARTNER.value: 18,
    ContactType.PROSPECT.value: 12,
    ContactType.VENDOR.value: 8,
}

DEAL_VALUE_TIERS = (
    Tier(lambda total: total > 50000, 30, "High-value deals"),
    Tier(lambda total: total > 10000, 20, "Medium-value deals"),
    Tier(lambda total: total > 0, 10, "Low-value deals"),
)

INTERACTION_TIERS = (
    Tier(lambda count: count >= 10, 25, "High engagement"),
    Tier(lambda count: count >= 5, 15, "Medium engagement"),
    Tier(lambda count: count >= 2, 8, "Low engagement"),
)


class ContactScorer:
    """Score a contact with its deals and interactions already joined."""

    def __init__(self) -> None:
        self._rubric = WeightedRubric(
            EntityType.CONTACT,
            [
                tiered_rule("deal_value", lambda c, now: c.total_deal_value, DEAL_VALUE_TIERS),
                tiered_rule("interactions", lambda c, now: c.total_interactions, INTERACTION_TIERS),
                lookup_rule("status", "status", STATUS_POINTS, "Status: {value}"),
                lookup_rule("type", "type", TYPE_POINTS, "Type: {value}"),
                flag_rule("company", 10, "Company information", lambda c: bool(c.company)),
            ],
        )

    def score(self, contact: ContactSnapshot, now: Optional[datetime] = None) -> ScoreResult:
        result = self._rubric.evaluate(contact, utc_now(now))
        logger.info(
            "contact_scored",
            extra={
                "contact_id": contact.id,
                "total": result.total,
                "grade": result.grade.value,
            },
        )
        return result
