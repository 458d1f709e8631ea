"""
routers/sales_forecast.py — Sales Forecast Endpoints

Endpoints:
  POST /api/v1/sales-forecast            — Generate a forecast for one period (201)
  POST /api/v1/sales-forecast/pipeline   — Current pipeline metrics

One forecast per period is the caller's rule; this endpoint does not check it.
"""

import logging

from fastapi import APIRouter, Depends, status

from app.config import get_settings
from app.core.dependencies import get_forecast_calculator
from app.core.exceptions import InvalidForecastRequestException
from app.models.forecast import (
    ForecastRequest,
    ForecastResponse,
    PipelineMetricsResponse,
    PipelineRequest,
)
from app.routers.errors import error_responses
from app.scoring.forecast_calculator import SalesForecastCalculator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/sales-forecast", tags=["Sales Forecast"])


@router.post(
    "",
    response_model=ForecastResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generate sales forecast",
    responses=error_responses("INVALID_FORECAST_REQUEST", "Period is required"),
)
async def generate_forecast(
    request: ForecastRequest,
    calculator: SalesForecastCalculator = Depends(get_forecast_calculator),
) -> ForecastResponse:
    period = request.period.strip()
    if not period:
        raise InvalidForecastRequestException("Period is required")

    model = request.model or get_settings().FORECAST_DEFAULT_MODEL
    result = calculator.forecast(
        period,
        request.historical_deals,
        request.open_deals,
        model=model,
        now=request.as_of,
    )
    logger.info(
        f"Forecast {period} ({result.model.value}): "
        f"revenue={result.predicted_revenue} confidence={result.confidence}"
    )

    return ForecastResponse(
        period=result.period,
        model=result.model.value,
        predicted_revenue=result.predicted_revenue,
        confidence=result.confidence,
        deal_count=result.deal_count,
        avg_deal_size=result.avg_deal_size,
        win_rate=result.win_rate,
    )


@router.post(
    "/pipeline",
    response_model=PipelineMetricsResponse,
    summary="Pipeline metrics",
    responses=error_responses(),
)
async def pipeline_metrics(
    request: PipelineRequest,
    calculator: SalesForecastCalculator = Depends(get_forecast_calculator),
) -> PipelineMetricsResponse:
    metrics = calculator.pipeline_metrics(request.open_deals)
    return PipelineMetricsResponse(
        total_pipeline_value=metrics.total_pipeline_value,
        weighted_pipeline_value=metrics.weighted_pipeline_value,
        total_deals=metrics.total_deals,
        avg_deal_size=metrics.avg_deal_size,
        deals_by_stage=metrics.deals_by_stage,
    )
