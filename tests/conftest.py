# tests/conftest.py

"""
Pytest Fixtures - Shared test configurations and data for the scoring engine and API

All time-dependent rules are evaluated against FIXED_NOW so results do not
drift with the wall clock.
"""

import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient

from app.main import app
from app.models.ab_test import ABTestSnapshot
from app.models.behavior import BehaviorEvent
from app.models.forecast import HistoricalDeal, OpenDeal
from app.models.scoring import ContactSnapshot, DealSnapshot, DealValue, LeadSnapshot


FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture(scope="module")
def client():
    """Create a TestClient for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# TIME FIXTURES
# =============================================================================

@pytest.fixture
def now():
    """Reference time shared by scorers and forecasts."""
    return FIXED_NOW


@pytest.fixture
def days_ago(now):
    """Build a timestamp N days before FIXED_NOW."""
    def _days_ago(days: float) -> datetime:
        return now - timedelta(days=days)
    return _days_ago


# =============================================================================
# SCORING FIXTURES
# =============================================================================

@pytest.fixture
def referral_lead():
    """Freemail REFERRAL / QUALIFIED lead with no other signals."""
    return LeadSnapshot(
        email="x@gmail.com",
        company=None,
        source="REFERRAL",
        status="QUALIFIED",
        assigned_to=None,
        phone=None,
    )


@pytest.fixture
def complete_lead(days_ago):
    """Lead that earns every lead factor."""
    return LeadSnapshot(
        id="lead-001",
        email="dana@acme.io",
        company="Acme Corp",
        source="WEBSITE",
        status="CONVERTED",
        assigned_to="user-42",
        created_at=days_ago(3),
        phone="+1-555-0100",
    )


@pytest.fixture
def vip_contact():
    """Contact that earns every contact factor."""
    return ContactSnapshot(
        id="contact-001",
        deals=[DealValue(value=40000), DealValue(value=25000)],
        interactions=[{"type": "call"}] * 12,
        status="VIP",
        type="CUSTOMER",
        company="Globex",
    )


@pytest.fixture
def hot_deal(now):
    """Deal that earns every deal factor."""
    return DealSnapshot(
        id="deal-001",
        value=150000,
        stage="CLOSED_WON",
        priority="URGENT",
        probability=90,
        expected_close_date=now + timedelta(days=10),
    )


# =============================================================================
# A/B TEST FIXTURES
# =============================================================================

@pytest.fixture
def ab_snapshot():
    """1000 impressions per variant, 5% vs 8% conversion."""
    return ABTestSnapshot(
        impressions_a=1000,
        conversions_a=50,
        impressions_b=1000,
        conversions_b=80,
    )


# =============================================================================
# FORECAST FIXTURES
# =============================================================================

@pytest.fixture
def historical_deals():
    """Two won (10k, 30k) and two lost deals: win rate 0.5, avg won 20k."""
    return [
        HistoricalDeal(value=10000, status="WON"),
        HistoricalDeal(value=30000, status="WON"),
        HistoricalDeal(value=5000, status="LOST"),
        HistoricalDeal(value=1000, status="LOST"),
    ]


@pytest.fixture
def open_deals(days_ago):
    """One fresh negotiation deal and one aged prospecting deal."""
    return [
        OpenDeal(value=100000, probability=50, stage="NEGOTIATION", created_at=days_ago(10)),
        OpenDeal(value=50000, probability=20, stage="PROSPECTING", created_at=days_ago(120)),
    ]


# =============================================================================
# BEHAVIOR FIXTURES
# =============================================================================

@pytest.fixture
def behavior_events(now):
    """Session s1: three events over 10s (/a, /b, /a); session s2: one event on /c."""
    return [
        BehaviorEvent(
            session_id="s1", event_type="CLICK",
            position_x=500, position_y=250, viewport_width=1000, viewport_height=500,
            timestamp=now, page_url="/a",
        ),
        BehaviorEvent(
            session_id="s1", event_type="MOVE",
            position_x=10, position_y=10, viewport_width=1000, viewport_height=500,
            timestamp=now + timedelta(seconds=5), page_url="/b",
        ),
        BehaviorEvent(
            session_id="s2", event_type="SCROLL",
            timestamp=now + timedelta(seconds=6), page_url="/c",
        ),
        BehaviorEvent(
            session_id="s1", event_type="CLICK",
            position_x=500, position_y=250, viewport_width=1000, viewport_height=500,
            timestamp=now + timedelta(seconds=10), page_url="/a",
        ),
    ]
