"""
routers/scoring.py — Lead / Contact / Deal Scoring Endpoints

Endpoints:
  POST /api/v1/scoring            — Score whichever of lead / contact / deal is present
  POST /api/v1/scoring/leads      — Score a lead snapshot
  POST /api/v1/scoring/contacts   — Score a contact snapshot (deals + interactions joined)
  POST /api/v1/scoring/deals      — Score a deal snapshot
  GET  /api/v1/scoring/grades     — Grade / tier thresholds and point tables

The caller persists the returned record (upsert keyed by entity id).
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.dependencies import get_contact_scorer, get_deal_scorer, get_lead_scorer
from app.core.exceptions import InvalidScoringRequestException
from app.models.scoring import (
    ContactSnapshot,
    DealSnapshot,
    LeadSnapshot,
    ScoreRequest,
    ScoreResponse,
)
from app.routers.errors import error_responses
from app.scoring import contact_scorer, deal_scorer, lead_scorer
from app.scoring.contact_scorer import ContactScorer
from app.scoring.deal_scorer import DealScorer
from app.scoring.lead_scorer import LeadScorer
from app.scoring.rubric import GRADE_THRESHOLDS, TIER_THRESHOLDS, ScoreResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/scoring", tags=["Scoring"])


def _to_response(result: ScoreResult, entity_id: Optional[str]) -> ScoreResponse:
    return ScoreResponse(
        entity_type=result.entity_type.value,
        entity_id=entity_id,
        score=result.total,
        grade=result.grade.value,
        tier=result.tier.value,
        score_breakdown=result.breakdown,
        factors=result.factors,
        last_calculated=datetime.now(timezone.utc),
    )


@router.post(
    "",
    response_model=ScoreResponse,
    summary="Score a lead, contact, or deal",
    description="Scores the first entity present in the body (lead, then contact, then deal).",
    responses=error_responses("INVALID_SCORING_REQUEST", "Lead, contact, or deal snapshot is required"),
)
async def score_entity(
    request: ScoreRequest,
    leads: LeadScorer = Depends(get_lead_scorer),
    contacts: ContactScorer = Depends(get_contact_scorer),
    deals: DealScorer = Depends(get_deal_scorer),
) -> ScoreResponse:
    if request.lead is not None:
        return _to_response(leads.score(request.lead, request.as_of), request.lead.id)
    if request.contact is not None:
        return _to_response(contacts.score(request.contact, request.as_of), request.contact.id)
    if request.deal is not None:
        return _to_response(deals.score(request.deal, request.as_of), request.deal.id)

    logger.warning("Scoring request without lead, contact, or deal")
    raise InvalidScoringRequestException()


@router.post(
    "/leads",
    response_model=ScoreResponse,
    summary="Score a lead",
    responses=error_responses(),
)
async def score_lead(
    lead: LeadSnapshot,
    as_of: Optional[datetime] = Query(default=None, description="Reference time for recency"),
    scorer: LeadScorer = Depends(get_lead_scorer),
) -> ScoreResponse:
    return _to_response(scorer.score(lead, as_of), lead.id)


@router.post(
    "/contacts",
    response_model=ScoreResponse,
    summary="Score a contact",
    responses=error_responses(),
)
async def score_contact(
    contact: ContactSnapshot,
    scorer: ContactScorer = Depends(get_contact_scorer),
) -> ScoreResponse:
    return _to_response(scorer.score(contact), contact.id)


@router.post(
    "/deals",
    response_model=ScoreResponse,
    summary="Score a deal",
    responses=error_responses(),
)
async def score_deal(
    deal: DealSnapshot,
    as_of: Optional[datetime] = Query(default=None, description="Reference time for close-date proximity"),
    scorer: DealScorer = Depends(get_deal_scorer),
) -> ScoreResponse:
    return _to_response(scorer.score(deal, as_of), deal.id)


@router.get("/grades", summary="Grade thresholds and point tables")
async def get_grades():
    return {
        "grades": {grade.value: threshold for threshold, grade in GRADE_THRESHOLDS},
        "tiers": {tier.value: threshold for threshold, tier in TIER_THRESHOLDS},
        "tables": {
            "lead_source": lead_scorer.SOURCE_POINTS,
            "lead_status": lead_scorer.STATUS_POINTS,
            "contact_status": contact_scorer.STATUS_POINTS,
            "contact_type": contact_scorer.TYPE_POINTS,
            "deal_stage": deal_scorer.STAGE_POINTS,
            "deal_priority": deal_scorer.PRIORITY_POINTS,
        },
    }
