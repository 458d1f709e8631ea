"""
Core Package - CRM Insight Engine
app/core/__init__.py

Core infrastructure: dependencies, exceptions.
"""

from app.core.dependencies import (
    get_ab_test_calculator,
    get_behavior_analyzer,
    get_contact_scorer,
    get_deal_scorer,
    get_forecast_calculator,
    get_lead_scorer,
)
from app.core.exceptions import (
    InsightEngineException,
    InvalidForecastRequestException,
    InvalidScoringRequestException,
    InvalidTestStateException,
)

__all__ = [
    # Dependencies
    "get_ab_test_calculator",
    "get_behavior_analyzer",
    "get_contact_scorer",
    "get_deal_scorer",
    "get_forecast_calculator",
    "get_lead_scorer",
    # Exceptions
    "InsightEngineException",
    "InvalidForecastRequestException",
    "InvalidScoringRequestException",
    "InvalidTestStateException",
]
