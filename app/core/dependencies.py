"""
Dependencies - CRM Insight Engine
app/core/dependencies.py

FastAPI dependency injection for the scoring engine calculators.
"""

from functools import lru_cache

from app.config import get_settings
from app.scoring.ab_test_calculator import ABTestCalculator
from app.scoring.behavior_analyzer import BehaviorAnalyzer
from app.scoring.contact_scorer import ContactScorer
from app.scoring.deal_scorer import DealScorer
from app.scoring.forecast_calculator import SalesForecastCalculator
from app.scoring.lead_scorer import LeadScorer


@lru_cache()
def get_lead_scorer() -> LeadScorer:
    """Get cached LeadScorer instance."""
    return LeadScorer()


@lru_cache()
def get_contact_scorer() -> ContactScorer:
    """Get cached ContactScorer instance."""
    return ContactScorer()


@lru_cache()
def get_deal_scorer() -> DealScorer:
    """Get cached DealScorer instance."""
    return DealScorer()


@lru_cache()
def get_ab_test_calculator() -> ABTestCalculator:
    """Get cached ABTestCalculator instance."""
    return ABTestCalculator()


@lru_cache()
def get_forecast_calculator() -> SalesForecastCalculator:
    """Get SalesForecastCalculator configured from settings."""
    settings = get_settings()
    return SalesForecastCalculator(
        aged_deal_days=settings.FORECAST_AGED_DEAL_DAYS,
        aged_confidence_discount=settings.FORECAST_AGED_CONFIDENCE_DISCOUNT,
        aged_close_discount=settings.FORECAST_AGED_CLOSE_DISCOUNT,
    )


@lru_cache()
def get_behavior_analyzer() -> BehaviorAnalyzer:
    """Get BehaviorAnalyzer configured from settings."""
    settings = get_settings()
    return BehaviorAnalyzer(
        grid_size=settings.HEATMAP_GRID_SIZE,
        flow_limit=settings.SESSION_FLOW_LIMIT,
        top_pages_limit=settings.TOP_PAGES_LIMIT,
    )
