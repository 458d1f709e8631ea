"""
routers/analytics.py — Behavioral Analytics Endpoints

Endpoints:
  POST /api/v1/analytics/heatmap  — Click / movement heatmap grids
  POST /api/v1/analytics/flow     — Session flows and average session duration
  POST /api/v1/analytics/summary  — Events, sessions, bounce / engagement rate, top and exit pages
"""

import logging

from fastapi import APIRouter, Depends

from app.core.dependencies import get_behavior_analyzer
from app.models.behavior import (
    BehaviorFlowResponse,
    BehaviorRequest,
    BehaviorSummaryResponse,
    HeatmapCellResponse,
    HeatmapResponse,
    PageCountResponse,
    SessionFlowResponse,
)
from app.routers.errors import error_responses
from app.scoring.behavior_analyzer import BehaviorAnalyzer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/analytics", tags=["Analytics"])


@router.post(
    "/heatmap",
    response_model=HeatmapResponse,
    summary="Heatmap grids",
    responses=error_responses(),
)
async def heatmap(
    request: BehaviorRequest,
    analyzer: BehaviorAnalyzer = Depends(get_behavior_analyzer),
) -> HeatmapResponse:
    result = analyzer.heatmap_by_type(request.events, request.grid_size)
    return HeatmapResponse(
        clicks=[HeatmapCellResponse(x=c.x, y=c.y, intensity=c.intensity) for c in result.clicks],
        movements=[HeatmapCellResponse(x=c.x, y=c.y, intensity=c.intensity) for c in result.movements],
        scroll_depth=result.scroll_depth,
        total_events=result.total_events,
    )


@router.post(
    "/flow",
    response_model=BehaviorFlowResponse,
    summary="Session flows",
    responses=error_responses(),
)
async def behavior_flow(
    request: BehaviorRequest,
    analyzer: BehaviorAnalyzer = Depends(get_behavior_analyzer),
) -> BehaviorFlowResponse:
    flows = analyzer.session_flows(request.events)
    return BehaviorFlowResponse(
        session_flows=[
            SessionFlowResponse(
                session_id=f.session_id,
                pages=f.pages,
                duration=f.duration,
                events=f.events,
            )
            for f in flows
        ],
        avg_session_duration=analyzer.avg_session_duration(request.events),
        total_sessions=analyzer.unique_sessions(request.events),
    )


@router.post(
    "/summary",
    response_model=BehaviorSummaryResponse,
    summary="Engagement summary",
    responses=error_responses(),
)
async def behavior_summary(
    request: BehaviorRequest,
    analyzer: BehaviorAnalyzer = Depends(get_behavior_analyzer),
) -> BehaviorSummaryResponse:
    summary = analyzer.summarize(request.events)
    return BehaviorSummaryResponse(
        total_events=summary.total_events,
        unique_sessions=summary.unique_sessions,
        bounce_rate=summary.bounce_rate,
        engagement_rate=summary.engagement_rate,
        top_pages=[PageCountResponse(page=p.page, count=p.count) for p in summary.top_pages],
        exit_pages=[PageCountResponse(page=p.page, count=p.count) for p in summary.exit_pages],
    )
