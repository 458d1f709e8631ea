"""
scoring/behavior_analyzer.py — Behavioral Aggregation

Heatmap bucketing, session flows and engagement rates over tracked visitor
events. Events are taken in arrival order; nothing is re-sorted by timestamp.

    cell        = (⌊x / viewport_width × N⌋, ⌊y / viewport_height × N⌋)
    duration    = last.timestamp − first.timestamp   (ms, 0 for one event)
    bounce_rate = |sessions with one event| / |sessions| × 100
"""

import math
from collections import Counter, OrderedDict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import structlog

from app.models.behavior import BehaviorEvent
from app.models.enumerations import BehaviorEventType
from app.scoring.utils import as_utc, safe_ratio

logger = structlog.get_logger(__name__)


@dataclass
class HeatmapCell:
    x: int
    y: int
    intensity: int


@dataclass
class SessionFlow:
    session_id: str
    pages: List[str]
    duration: int   # milliseconds
    events: int


@dataclass
class PageCount:
    page: str
    count: int


@dataclass
class HeatmapByType:
    clicks: List[HeatmapCell]
    movements: List[HeatmapCell]
    scroll_depth: int
    total_events: int


@dataclass
class BehaviorSummary:
    total_events: int
    unique_sessions: int
    bounce_rate: float
    engagement_rate: float
    top_pages: List[PageCount] = field(default_factory=list)
    exit_pages: List[PageCount] = field(default_factory=list)


def _is_bucketable(event: BehaviorEvent) -> bool:
    return (
        event.position_x is not None
        and event.position_y is not None
        and event.viewport_width is not None
        and event.viewport_height is not None
        and event.viewport_width > 0
        and event.viewport_height > 0
    )


def _group_sessions(events: Iterable[BehaviorEvent]) -> "OrderedDict[str, List[BehaviorEvent]]":
    sessions: "OrderedDict[str, List[BehaviorEvent]]" = OrderedDict()
    for event in events:
        sessions.setdefault(event.session_id, []).append(event)
    return sessions


def _duration_ms(session: Sequence[BehaviorEvent]) -> int:
    if len(session) < 2:
        return 0
    delta = as_utc(session[-1].timestamp) - as_utc(session[0].timestamp)
    return int(delta.total_seconds() * 1000)


class BehaviorAnalyzer:
    """Aggregate raw behaviour events into heatmaps, flows and rates."""

    def __init__(self, grid_size: int = 50, flow_limit: int = 100, top_pages_limit: int = 10) -> None:
        if grid_size < 1:
            raise ValueError(f"grid_size must be >= 1, got {grid_size}")
        self.grid_size = grid_size
        self.flow_limit = flow_limit
        self.top_pages_limit = top_pages_limit

    # ------------------------------------------------------------------
    # Heatmaps
    # ------------------------------------------------------------------

    def heatmap_grid(
        self,
        events: Iterable[BehaviorEvent],
        grid_size: Optional[int] = None,
    ) -> List[HeatmapCell]:
        """
        Sparse N×N grid of event counts.

        Events without a position or with a missing / non-positive viewport
        are skipped. Positions outside the viewport land in the edge cells.
        """
        size = grid_size or self.grid_size
        grid: Dict[Tuple[int, int], int] = {}

        for event in events:
            if not _is_bucketable(event):
                continue
            x = math.floor(event.position_x / event.viewport_width * size)
            y = math.floor(event.position_y / event.viewport_height * size)
            key = (min(max(x, 0), size - 1), min(max(y, 0), size - 1))
            grid[key] = grid.get(key, 0) + 1

        return [HeatmapCell(x=x, y=y, intensity=count) for (x, y), count in grid.items()]

    def heatmap_by_type(
        self,
        events: Sequence[BehaviorEvent],
        grid_size: Optional[int] = None,
    ) -> HeatmapByType:
        """Separate click and movement grids plus the number of scroll events."""
        clicks = [e for e in events if e.event_type == BehaviorEventType.CLICK.value]
        movements = [e for e in events if e.event_type == BehaviorEventType.MOVE.value]
        scrolls = sum(1 for e in events if e.event_type == BehaviorEventType.SCROLL.value)

        return HeatmapByType(
            clicks=self.heatmap_grid(clicks, grid_size),
            movements=self.heatmap_grid(movements, grid_size),
            scroll_depth=scrolls,
            total_events=len(events),
        )

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def session_flows(
        self,
        events: Iterable[BehaviorEvent],
        limit: Optional[int] = None,
    ) -> List[SessionFlow]:
        """Per-session page path and duration, longest sessions first."""
        flows = []
        for session_id, session in _group_sessions(events).items():
            pages = list(dict.fromkeys(e.page_url for e in session if e.page_url))
            flows.append(
                SessionFlow(
                    session_id=session_id,
                    pages=pages,
                    duration=_duration_ms(session),
                    events=len(session),
                )
            )

        flows.sort(key=lambda flow: flow.duration, reverse=True)
        return flows[: limit or self.flow_limit]

    def unique_sessions(self, events: Iterable[BehaviorEvent]) -> int:
        return len({event.session_id for event in events})

    def bounce_rate(self, events: Iterable[BehaviorEvent]) -> float:
        """Percentage of sessions with exactly one recorded event."""
        counts = Counter(event.session_id for event in events)
        bounced = sum(1 for count in counts.values() if count == 1)
        return safe_ratio(bounced, len(counts)) * 100

    def avg_session_duration(self, events: Iterable[BehaviorEvent]) -> float:
        """Mean duration (ms) over sessions with more than one event."""
        durations = [
            _duration_ms(session)
            for session in _group_sessions(events).values()
            if len(session) > 1
        ]
        return safe_ratio(sum(durations), len(durations))

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def top_pages(self, events: Iterable[BehaviorEvent], limit: Optional[int] = None) -> List[PageCount]:
        counts = Counter(event.page_url for event in events if event.page_url)
        return [
            PageCount(page=page, count=count)
            for page, count in counts.most_common(limit or self.top_pages_limit)
        ]

    def exit_pages(self, events: Iterable[BehaviorEvent], limit: Optional[int] = None) -> List[PageCount]:
        """Count the latest page of each session (by timestamp)."""
        last_seen: Dict[str, BehaviorEvent] = {}
        for event in events:
            current = last_seen.get(event.session_id)
            if current is None or as_utc(event.timestamp) > as_utc(current.timestamp):
                last_seen[event.session_id] = event

        counts = Counter(e.page_url for e in last_seen.values() if e.page_url)
        return [
            PageCount(page=page, count=count)
            for page, count in counts.most_common(limit or self.top_pages_limit)
        ]

    def summarize(self, events: Sequence[BehaviorEvent]) -> BehaviorSummary:
        bounce = self.bounce_rate(events)
        summary = BehaviorSummary(
            total_events=len(events),
            unique_sessions=self.unique_sessions(events),
            bounce_rate=bounce,
            engagement_rate=100 - bounce,
            top_pages=self.top_pages(events),
            exit_pages=self.exit_pages(events),
        )

        logger.info(
            "behavior_summarized",
            total_events=summary.total_events,
            unique_sessions=summary.unique_sessions,
            bounce_rate=round(bounce, 2),
        )

        return summary
