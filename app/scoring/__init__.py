"""
scoring/ — CRM Scoring & Inference Engine

Modules:
    utils.py                  - Rounding, clamping and zero-guarded division
    rubric.py                 - Weighted rubric, grade and tier thresholds
    lead_scorer.py            - Lead scoring table
    contact_scorer.py         - Contact scoring table
    deal_scorer.py            - Deal scoring table
    normal_cdf.py             - Abramowitz–Stegun erf / normal CDF
    ab_test_calculator.py     - A/B conversion stats, winner, Z-test confidence
    forecast_calculator.py    - Sales forecast ensemble and pipeline metrics
    behavior_analyzer.py      - Heatmap grid, session flows, bounce rate
"""

from app.scoring.ab_test_calculator import ABTestCalculator, ABTestStats, ABTestVerdict
from app.scoring.behavior_analyzer import BehaviorAnalyzer
from app.scoring.contact_scorer import ContactScorer
from app.scoring.deal_scorer import DealScorer
from app.scoring.forecast_calculator import ForecastResult, SalesForecastCalculator
from app.scoring.lead_scorer import LeadScorer
from app.scoring.rubric import ScoreResult, grade_for, score_tier

__all__ = [
    "ABTestCalculator",
    "ABTestStats",
    "ABTestVerdict",
    "BehaviorAnalyzer",
    "ContactScorer",
    "DealScorer",
    "ForecastResult",
    "LeadScorer",
    "SalesForecastCalculator",
    "ScoreResult",
    "grade_for",
    "score_tier",
]
