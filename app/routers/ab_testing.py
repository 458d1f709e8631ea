"""
routers/ab_testing.py — A/B Test Statistics Endpoints

Endpoints:
  POST /api/v1/ab-tests/stats     — Conversion statistics for a running or completed test
  POST /api/v1/ab-tests/complete  — Winner + confidence for a RUNNING test

Completing only computes the verdict; the caller writes status=COMPLETED,
end_date, winner and confidence back to its store.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.core.dependencies import get_ab_test_calculator
from app.core.exceptions import InvalidTestStateException
from app.models.ab_test import (
    ABTestCompleteRequest,
    ABTestSnapshot,
    ABTestStatsResponse,
    ABTestVerdictResponse,
)
from app.models.enumerations import ABTestStatus
from app.routers.errors import error_responses
from app.scoring.ab_test_calculator import ABTestCalculator, ABTestStats, can_complete

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ab-tests", tags=["A/B Testing"])


def _stats_response(stats: ABTestStats) -> ABTestStatsResponse:
    return ABTestStatsResponse(
        conversion_rate_a=stats.conversion_rate_a,
        conversion_rate_b=stats.conversion_rate_b,
        total_impressions=stats.total_impressions,
        total_conversions=stats.total_conversions,
        overall_conversion_rate=stats.overall_conversion_rate,
        improvement=stats.improvement,
    )


@router.post(
    "/stats",
    response_model=ABTestStatsResponse,
    summary="A/B conversion statistics",
    responses=error_responses(),
)
async def ab_test_stats(
    snapshot: ABTestSnapshot,
    calculator: ABTestCalculator = Depends(get_ab_test_calculator),
) -> ABTestStatsResponse:
    return _stats_response(calculator.compute_stats(snapshot))


@router.post(
    "/complete",
    response_model=ABTestVerdictResponse,
    summary="Complete an A/B test",
    description="Determines winner and Z-test confidence. Only RUNNING tests can be completed.",
    responses=error_responses(
        "INVALID_TEST_STATE",
        "A/B test test-1 is PAUSED; only running tests can be completed",
    ),
)
async def complete_ab_test(
    request: ABTestCompleteRequest,
    calculator: ABTestCalculator = Depends(get_ab_test_calculator),
) -> ABTestVerdictResponse:
    if not can_complete(request.status):
        logger.warning(f"Refusing to complete A/B test {request.id} in status {request.status.value}")
        raise InvalidTestStateException(request.id or "unknown", request.status.value)

    verdict = calculator.evaluate(request)
    logger.info(
        f"A/B test {request.id} completed: winner={verdict.winner.value} "
        f"confidence={verdict.confidence}"
    )

    return ABTestVerdictResponse(
        id=request.id,
        status=ABTestStatus.COMPLETED,
        winner=verdict.winner,
        confidence=verdict.confidence,
        stats=_stats_response(verdict.stats),
        end_date=datetime.now(timezone.utc),
    )
