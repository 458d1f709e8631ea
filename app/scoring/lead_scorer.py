"""
scoring/lead_scorer.py — Lead Scoring

Point table (raw maximum 110, total capped at 100):

    email_domain     +10  business (non-freemail) email domain
    company_info     +15  company provided
    source           table  REFERRAL 25, CONTENT 22, WEBSITE 20, PHONE 18,
                            PAID_AD 15, EMAIL 12, SOCIAL 10, OTHER 5
    status           table  CONVERTED 25, QUALIFIED 20, CONTACTED 10, NEW 5
    assigned_user    +10  assigned to a sales rep
    recent_activity  +15  created within 7 days, +10 within 30 days
    phone_provided   +10  phone number provided
"""

from datetime import datetime
from typing import Dict, Optional

import structlog

from app.models.enumerations import EntityType, LeadSource, LeadStatus
from app.models.scoring import LeadSnapshot
from app.scoring.rubric import (
    ScoreResult,
    Tier,
    WeightedRubric,
    flag_rule,
    lookup_rule,
    tiered_rule,
)
from app.scoring.utils import utc_now, whole_days_between

logger = structlog.get_logger(__name__)

SOURCE_POINTS: Dict[str, int] = {
    LeadSource.WEBSITE.value: 20,
    LeadSource.REFERRAL.value: 25,
    LeadSource.PAID_AD.value: 15,
    LeadSource.SOCIAL.value: 10,
    LeadSource.EMAIL.value: 12,
    LeadSource.PHONE.value: 18,
    LeadSource.CONTENT.value: 22,
    LeadSource.OTHER.value: 5,
}

STATUS_POINTS: Dict[str, int] = {
    LeadStatus.NEW.value: 5,
    LeadStatus.CONTACTED.value: 10,
    LeadStatus.QUALIFIED.value: 20,
    LeadStatus.CONVERTED.value: 25,
    LeadStatus.UNQUALIFIED.value: 0,
}

FREEMAIL_MARKERS = ("gmail", "yahoo", "hotmail")


def has_business_email(lead: LeadSnapshot) -> bool:
    """True when the email has a domain that is not a freemail provider."""
    if not lead.email:
        return False
    parts = lead.email.split("@")
    if len(parts) < 2:
        return False
    domain = parts[1].lower()
    return bool(domain) and not any(marker in domain for marker in FREEMAIL_MARKERS)


def _days_since_creation(lead: LeadSnapshot, now: datetime) -> Optional[float]:
    if lead.created_at is None:
        return None
    return whole_days_between(lead.created_at, now)


class LeadScorer:
    """Score a lead snapshot against the lead rubric."""

    def __init__(self) -> None:
        rules = [
            flag_rule("email_domain", 10, "Professional email domain", has_business_email),
            flag_rule("company_info", 15, "Company provided", lambda lead: bool(lead.company)),
            lookup_rule("source", "source", SOURCE_POINTS, "Quality source: {value}"),
            lookup_rule("status", "status", STATUS_POINTS, "Status: {value}"),
            flag_rule("assigned_user", 10, "Assigned to sales rep", lambda lead: bool(lead.assigned_to)),
            tiered_rule(
                "recent_activity",
                _days_since_creation,
                (
                    Tier(lambda days: days <= 7, 15, "Recent lead (within 7 days)"),
                    Tier(lambda days: days <= 30, 10, "Recent lead (within 30 days)"),
                ),
            ),
            flag_rule("phone_provided", 10, "Phone number provided", lambda lead: bool(lead.phone)),
        ]
        self._rubric = WeightedRubric(EntityType.LEAD, rules)

    def score(self, lead: LeadSnapshot, now: Optional[datetime] = None) -> ScoreResult:
        """
        Args:
            lead: Lead snapshot; absent fields contribute nothing.
            now: Reference time for the recency rule (defaults to UTC now).

        Returns:
            ScoreResult with total in [0, 100].

        Examples:
            >>> lead = LeadSnapshot(email="x@gmail.com", source="REFERRAL", status="QUALIFIED")
            >>> LeadScorer().score(lead).breakdown
            {'source': 25, 'status': 20}
        """
        result = self._rubric.evaluate(lead, utc_now(now))
        logger.info(
            "lead_scored",
            lead_id=lead.id,
            total=result.total,
            grade=result.grade.value,
        )
        return result
