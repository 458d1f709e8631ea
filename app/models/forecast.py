from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional, List, Dict


class HistoricalDeal(BaseModel):
    """Closed deal used to derive win rate and average deal size."""

    value: Optional[float] = None
    status: Optional[str] = Field(default=None, description="WON or LOST")
    actual_close_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @field_validator("status")
    @classmethod
    def uppercase_status(cls, value: Optional[str]) -> Optional[str]:
        return value.strip().upper() if value else None


class OpenDeal(BaseModel):
    """Deal still in the pipeline."""

    value: Optional[float] = None
    probability: Optional[float] = Field(default=None, description="Win probability in percent")
    stage: Optional[str] = None
    expected_close_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @field_validator("stage")
    @classmethod
    def uppercase_stage(cls, value: Optional[str]) -> Optional[str]:
        return value.strip().upper() if value else None


class ForecastRequest(BaseModel):
    period: str = Field(default="", description="Forecast period label, e.g. 2026-Q4")
    model: Optional[str] = Field(
        default=None,
        description="conservative, aggressive or ensemble (default)"
    )
    historical_deals: List[HistoricalDeal] = Field(default_factory=list)
    open_deals: List[OpenDeal] = Field(default_factory=list)
    as_of: Optional[datetime] = None


class PipelineRequest(BaseModel):
    open_deals: List[OpenDeal] = Field(default_factory=list)


class ForecastResponse(BaseModel):
    period: str
    model: str
    predicted_revenue: float
    confidence: int = Field(ge=0, le=100)
    deal_count: int
    avg_deal_size: float
    win_rate: int = Field(ge=0, le=100)


class PipelineMetricsResponse(BaseModel):
    total_pipeline_value: float
    weighted_pipeline_value: float
    total_deals: int
    avg_deal_size: float
    deals_by_stage: Dict[str, int]
