"""
Health Check Router - CRM Insight Engine
app/routers/health.py

The engine has no external dependencies; health reports the loaded
configuration instead of connection checks.
"""
from fastapi import APIRouter
from pydantic import BaseModel
from typing import Dict
from datetime import datetime, timezone

from app.config import get_settings

router = APIRouter(tags=["Health"])



#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    environment: str
    parameters: Dict[str, float]


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Liveness check with the active forecast and analytics parameters.",
)
async def health_check():
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
        parameters={
            "forecast_aged_deal_days": settings.FORECAST_AGED_DEAL_DAYS,
            "forecast_aged_confidence_discount": settings.FORECAST_AGED_CONFIDENCE_DISCOUNT,
            "forecast_aged_close_discount": settings.FORECAST_AGED_CLOSE_DISCOUNT,
            "heatmap_grid_size": settings.HEATMAP_GRID_SIZE,
            "session_flow_limit": settings.SESSION_FLOW_LIMIT,
        },
    )
