"""
scoring/forecast_calculator.py — Sales Forecast Ensemble

Inputs:
    historical deals  closed deals (value, status WON / LOST)
    open deals        pipeline (value, probability %, stage, created_at)

Pipeline figures:
    win_rate          = |WON| / |historical|                       (0 if none)
    avg_deal_size     = mean value of WON deals                    (0 if none)
    total_pipeline    = Σ value
    weighted_pipeline = Σ value × probability / 100
    aged_ratio        = |open deals older than 90 days| / |open|   (0 if none)

Models:
    conservative  weighted_pipeline × win_rate × 0.8                 conf 75
    aggressive    total_pipeline × 0.3                               conf 60
    ensemble      mean(conservative, aggressive, Σ value × stage_rate) conf 70

Adjustments:
    confidence  ×= 1 − aged_ratio × 0.2
    deal_count   = |open| × win_rate × (1 − aged_ratio × 0.3)
"""

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Sequence

import structlog

from app.models.enumerations import DealStatus, ForecastModel, PipelineStage
from app.models.forecast import HistoricalDeal, OpenDeal
from app.scoring.utils import (
    clamp,
    fractional_days_between,
    round_half_up,
    round_int,
    safe_ratio,
    utc_now,
)

logger = structlog.get_logger(__name__)

STAGE_CONVERSION_RATES: Dict[str, float] = {
    PipelineStage.PROSPECTING.value: 0.1,
    PipelineStage.QUALIFICATION.value: 0.25,
    PipelineStage.NEED_ANALYSIS.value: 0.4,
    PipelineStage.VALUE_PROPOSITION.value: 0.6,
    PipelineStage.PROPOSAL.value: 0.75,
    PipelineStage.NEGOTIATION.value: 0.9,
}

BASE_CONFIDENCE: Dict[ForecastModel, float] = {
    ForecastModel.CONSERVATIVE: 75,
    ForecastModel.AGGRESSIVE: 60,
    ForecastModel.ENSEMBLE: 70,
}

CONSERVATIVE_FACTOR = 0.8
AGGRESSIVE_FACTOR = 0.3


@dataclass
class ForecastResult:
    """Output of SalesForecastCalculator.forecast()."""
    period: str
    model: ForecastModel
    predicted_revenue: float   # 2 dp
    confidence: int            # [0, 100]
    deal_count: int
    avg_deal_size: float
    win_rate: int              # percent, [0, 100]


@dataclass
class PipelineMetrics:
    """Snapshot of the open pipeline."""
    total_pipeline_value: float
    weighted_pipeline_value: float
    total_deals: int
    avg_deal_size: float
    deals_by_stage: Dict[str, int]


def resolve_model(name: Optional[str]) -> ForecastModel:
    """Map a model name to ForecastModel; unknown or missing → ensemble."""
    if isinstance(name, ForecastModel):
        return name
    try:
        return ForecastModel((name or "").strip().lower())
    except ValueError:
        return ForecastModel.ENSEMBLE


def _value(deal) -> float:
    return deal.value or 0


class SalesForecastCalculator:
    """Blend pipeline models into a revenue forecast for one period."""

    def __init__(
        self,
        aged_deal_days: int = 90,
        aged_confidence_discount: float = 0.2,
        aged_close_discount: float = 0.3,
    ) -> None:
        self.aged_deal_days = aged_deal_days
        self.aged_confidence_discount = aged_confidence_discount
        self.aged_close_discount = aged_close_discount

    # ------------------------------------------------------------------
    # Pipeline figures
    # ------------------------------------------------------------------

    @staticmethod
    def historical_win_rate(historical_deals: Sequence[HistoricalDeal]) -> float:
        won = sum(1 for deal in historical_deals if deal.status == DealStatus.WON.value)
        return safe_ratio(won, len(historical_deals))

    @staticmethod
    def avg_won_deal_size(historical_deals: Sequence[HistoricalDeal]) -> float:
        won = [deal for deal in historical_deals if deal.status == DealStatus.WON.value]
        return safe_ratio(sum(_value(deal) for deal in won), len(won))

    @staticmethod
    def total_pipeline_value(open_deals: Sequence[OpenDeal]) -> float:
        return sum(_value(deal) for deal in open_deals)

    @staticmethod
    def weighted_pipeline_value(open_deals: Sequence[OpenDeal]) -> float:
        return sum(_value(deal) * ((deal.probability or 0) / 100) for deal in open_deals)

    @staticmethod
    def stage_based_value(open_deals: Sequence[OpenDeal]) -> float:
        return sum(
            _value(deal) * STAGE_CONVERSION_RATES.get(deal.stage or "", 0)
            for deal in open_deals
        )

    def aged_deal_ratio(self, open_deals: Sequence[OpenDeal], now: datetime) -> float:
        aged = sum(
            1
            for deal in open_deals
            if deal.created_at is not None
            and fractional_days_between(deal.created_at, now) > self.aged_deal_days
        )
        return safe_ratio(aged, len(open_deals))

    def model_revenues(
        self,
        historical_deals: Sequence[HistoricalDeal],
        open_deals: Sequence[OpenDeal],
    ) -> Dict[str, float]:
        """Unrounded revenue of each constituent model."""
        win_rate = self.historical_win_rate(historical_deals)
        return {
            ForecastModel.CONSERVATIVE.value: (
                self.weighted_pipeline_value(open_deals) * win_rate * CONSERVATIVE_FACTOR
            ),
            ForecastModel.AGGRESSIVE.value: (
                self.total_pipeline_value(open_deals) * AGGRESSIVE_FACTOR
            ),
            "stage_based": self.stage_based_value(open_deals),
        }

    # ------------------------------------------------------------------
    # Forecast
    # ------------------------------------------------------------------

    def forecast(
        self,
        period: str,
        historical_deals: Sequence[HistoricalDeal],
        open_deals: Sequence[OpenDeal],
        model: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ForecastResult:
        """
        Args:
            period: Label of the forecast period (uniqueness is the caller's concern).
            historical_deals: Closed deals.
            open_deals: Current pipeline.
            model: conservative, aggressive or ensemble; anything else → ensemble.
            now: Reference time for deal aging (defaults to UTC now).
        """
        now = utc_now(now)
        selected = resolve_model(model)

        win_rate = self.historical_win_rate(historical_deals)
        revenues = self.model_revenues(historical_deals, open_deals)

        if selected == ForecastModel.CONSERVATIVE:
            predicted_revenue = revenues[ForecastModel.CONSERVATIVE.value]
        elif selected == ForecastModel.AGGRESSIVE:
            predicted_revenue = revenues[ForecastModel.AGGRESSIVE.value]
        else:
            predicted_revenue = sum(revenues.values()) / len(revenues)

        aged_ratio = self.aged_deal_ratio(open_deals, now)
        confidence = BASE_CONFIDENCE[selected] * (1 - aged_ratio * self.aged_confidence_discount)
        expected_deals = len(open_deals) * win_rate * (1 - aged_ratio * self.aged_close_discount)

        result = ForecastResult(
            period=period,
            model=selected,
            predicted_revenue=round_half_up(predicted_revenue, 2),
            confidence=int(clamp(round_int(confidence), 0, 100)),
            deal_count=round_int(expected_deals),
            avg_deal_size=self.avg_won_deal_size(historical_deals),
            win_rate=int(clamp(round_int(win_rate * 100), 0, 100)),
        )

        logger.info(
            "forecast_generated",
            period=period,
            model=selected.value,
            historical_deals=len(historical_deals),
            open_deals=len(open_deals),
            aged_deal_ratio=round(aged_ratio, 4),
            predicted_revenue=result.predicted_revenue,
            confidence=result.confidence,
            deal_count=result.deal_count,
        )

        return result

    def pipeline_metrics(self, open_deals: Sequence[OpenDeal]) -> PipelineMetrics:
        total = self.total_pipeline_value(open_deals)
        by_stage = Counter(deal.stage or "UNKNOWN" for deal in open_deals)
        return PipelineMetrics(
            total_pipeline_value=total,
            weighted_pipeline_value=self.weighted_pipeline_value(open_deals),
            total_deals=len(open_deals),
            avg_deal_size=safe_ratio(total, len(open_deals)),
            deals_by_stage=dict(by_stage),
        )
