from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional, List, Dict, Any


def _normalize_code(value: Optional[str]) -> Optional[str]:
    return value.strip().upper() if value else None


class LeadSnapshot(BaseModel):
    """
    Read-only view of a lead as loaded by the caller.

    Every field is optional; absent fields contribute no points.
    """

    id: Optional[str] = Field(default=None, description="Lead identifier")
    email: Optional[str] = Field(default=None, description="Lead email address")
    company: Optional[str] = Field(default=None, description="Company name")
    source: Optional[str] = Field(
        default=None,
        description="Acquisition source (WEBSITE, REFERRAL, PAID_AD, ...)"
    )
    status: Optional[str] = Field(
        default=None,
        description="Pipeline status (NEW, CONTACTED, QUALIFIED, ...)"
    )
    assigned_to: Optional[str] = Field(
        default=None,
        description="Identifier of the assigned sales rep"
    )
    created_at: Optional[datetime] = Field(default=None, description="Lead creation time")
    phone: Optional[str] = Field(default=None, description="Phone number")

    @field_validator("source", "status")
    @classmethod
    def uppercase_codes(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_code(value)


class DealValue(BaseModel):
    """Deal joined onto a contact; only the value is scored."""

    value: Optional[float] = None


class ContactSnapshot(BaseModel):
    """
    Read-only view of a contact with its deals and interactions joined.
    """

    id: Optional[str] = None
    deals: List[DealValue] = Field(default_factory=list)
    interactions: List[Dict[str, Any]] = Field(default_factory=list)
    interaction_count: Optional[int] = Field(
        default=None,
        ge=0,
        description="Pre-aggregated interaction count; overrides len(interactions)"
    )
    status: Optional[str] = Field(default=None, description="VIP, ACTIVE, NEW, INACTIVE, CHURNED")
    type: Optional[str] = Field(default=None, description="CUSTOMER, PARTNER, PROSPECT, VENDOR")
    company: Optional[str] = None

    @field_validator("status", "type")
    @classmethod
    def uppercase_codes(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_code(value)

    @property
    def total_deal_value(self) -> float:
        return sum(deal.value or 0 for deal in self.deals)

    @property
    def total_interactions(self) -> int:
        if self.interaction_count is not None:
            return self.interaction_count
        return len(self.interactions)


class DealSnapshot(BaseModel):
    """Read-only view of a single deal."""

    id: Optional[str] = None
    value: Optional[float] = None
    stage: Optional[str] = Field(default=None, description="LEAD, QUALIFIED, PROPOSAL, ...")
    priority: Optional[str] = Field(default=None, description="LOW, MEDIUM, HIGH, URGENT")
    probability: Optional[float] = Field(default=None, description="Win probability in percent")
    expected_close_date: Optional[datetime] = None

    @field_validator("stage", "priority")
    @classmethod
    def uppercase_codes(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_code(value)


class ScoreRequest(BaseModel):
    """Score exactly one of a lead, contact, or deal (first present wins)."""

    lead: Optional[LeadSnapshot] = None
    contact: Optional[ContactSnapshot] = None
    deal: Optional[DealSnapshot] = None
    as_of: Optional[datetime] = Field(
        default=None,
        description="Reference time for recency rules; defaults to now"
    )


class ScoreResponse(BaseModel):
    """Score record returned to the caller for upsert."""

    entity_type: str
    entity_id: Optional[str] = None
    score: int = Field(ge=0, le=100)
    grade: str
    tier: str
    score_breakdown: Dict[str, int]
    factors: List[str]
    last_calculated: datetime
