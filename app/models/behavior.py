from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional, List


class BehaviorEvent(BaseModel):
    """A single tracked visitor interaction."""

    session_id: str
    event_type: str = Field(default="CLICK", description="CLICK, MOVE, SCROLL, ...")
    position_x: Optional[float] = None
    position_y: Optional[float] = None
    viewport_width: Optional[float] = None
    viewport_height: Optional[float] = None
    timestamp: datetime
    page_url: Optional[str] = None

    @field_validator("event_type")
    @classmethod
    def uppercase_event_type(cls, value: str) -> str:
        return value.strip().upper()


class BehaviorRequest(BaseModel):
    events: List[BehaviorEvent] = Field(default_factory=list)
    grid_size: Optional[int] = Field(default=None, ge=1, le=500)


class HeatmapCellResponse(BaseModel):
    x: int
    y: int
    intensity: int


class HeatmapResponse(BaseModel):
    clicks: List[HeatmapCellResponse]
    movements: List[HeatmapCellResponse]
    scroll_depth: int
    total_events: int


class SessionFlowResponse(BaseModel):
    session_id: str
    pages: List[str]
    duration: int
    events: int


class BehaviorFlowResponse(BaseModel):
    session_flows: List[SessionFlowResponse]
    avg_session_duration: float
    total_sessions: int


class PageCountResponse(BaseModel):
    page: str
    count: int


class BehaviorSummaryResponse(BaseModel):
    total_events: int
    unique_sessions: int
    bounce_rate: float
    engagement_rate: float
    top_pages: List[PageCountResponse]
    exit_pages: List[PageCountResponse]
