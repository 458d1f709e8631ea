"""
scoring/ab_test_calculator.py — A/B Test Statistics

Conversion statistics, winner selection and two-proportion Z-test confidence
for a two-variant test.

Formulas:
    rate_X      = conversions_X / impressions_X × 100     (0 if no impressions)
    improvement = (rate_B − rate_A) / rate_A × 100         (0 if rate_A = 0)
    p̂           = (conv_A + conv_B) / (imp_A + imp_B)
    SE          = √(p̂ (1 − p̂) (1/imp_A + 1/imp_B))
    Z           = |p_A − p_B| / SE
    confidence  = round((1 − 2 (1 − Φ(Z))) × 100)          clamped to [0, 100]

p_A and p_B are the *rounded* percentage rates divided by 100, matching the
figures shown to users.
"""

import math
from dataclasses import dataclass

import structlog

from app.models.ab_test import ABTestSnapshot
from app.models.enumerations import ABTestStatus, Winner
from app.scoring.normal_cdf import normal_cdf
from app.scoring.utils import clamp, round_half_up, round_int, safe_ratio

logger = structlog.get_logger(__name__)


@dataclass
class ABTestStats:
    """Output of ABTestCalculator.compute_stats(); rates are percentages (2 dp)."""
    conversion_rate_a: float
    conversion_rate_b: float
    total_impressions: int
    total_conversions: int
    overall_conversion_rate: float
    improvement: float


@dataclass
class ABTestVerdict:
    """Winner and confidence, plus the stats they were derived from."""
    winner: Winner
    confidence: int   # [0, 100]
    stats: ABTestStats


def can_complete(status: ABTestStatus) -> bool:
    """Only a RUNNING test may transition to COMPLETED."""
    return status == ABTestStatus.RUNNING


class ABTestCalculator:
    """Pure calculator; callers own the RUNNING → COMPLETED transition."""

    def compute_stats(self, snapshot: ABTestSnapshot) -> ABTestStats:
        rate_a = safe_ratio(snapshot.conversions_a, snapshot.impressions_a) * 100
        rate_b = safe_ratio(snapshot.conversions_b, snapshot.impressions_b) * 100

        total_impressions = snapshot.impressions_a + snapshot.impressions_b
        total_conversions = snapshot.conversions_a + snapshot.conversions_b
        overall_rate = safe_ratio(total_conversions, total_impressions) * 100

        improvement = (rate_b - rate_a) / rate_a * 100 if rate_a > 0 else 0

        return ABTestStats(
            conversion_rate_a=round_half_up(rate_a, 2),
            conversion_rate_b=round_half_up(rate_b, 2),
            total_impressions=total_impressions,
            total_conversions=total_conversions,
            overall_conversion_rate=round_half_up(overall_rate, 2),
            improvement=round_half_up(improvement, 2),
        )

    def determine_winner(self, stats: ABTestStats) -> Winner:
        if stats.conversion_rate_a > stats.conversion_rate_b:
            return Winner.A
        if stats.conversion_rate_b > stats.conversion_rate_a:
            return Winner.B
        return Winner.INCONCLUSIVE

    def compute_confidence(self, snapshot: ABTestSnapshot, stats: ABTestStats) -> int:
        """
        Two-proportion Z-test confidence in [0, 100].

        Returns 0 when either variant has no impressions or the pooled
        standard error is 0 (pooled rate of exactly 0 or 1).
        """
        n1 = snapshot.impressions_a
        n2 = snapshot.impressions_b
        if n1 == 0 or n2 == 0:
            return 0

        p1 = stats.conversion_rate_a / 100
        p2 = stats.conversion_rate_b / 100

        pooled = (snapshot.conversions_a + snapshot.conversions_b) / (n1 + n2)
        variance = pooled * (1 - pooled) * (1 / n1 + 1 / n2)
        # Conversions above impressions make the variance negative
        if variance <= 0:
            return 0
        standard_error = math.sqrt(variance)

        z_score = abs(p1 - p2) / standard_error
        confidence = round_int((1 - 2 * (1 - normal_cdf(z_score))) * 100)

        return int(clamp(confidence, 0, 100))

    def evaluate(self, snapshot: ABTestSnapshot) -> ABTestVerdict:
        """Stats, winner and confidence in one pass."""
        stats = self.compute_stats(snapshot)
        winner = self.determine_winner(stats)
        confidence = self.compute_confidence(snapshot, stats)

        logger.info(
            "ab_test_evaluated",
            impressions_a=snapshot.impressions_a,
            impressions_b=snapshot.impressions_b,
            conversion_rate_a=stats.conversion_rate_a,
            conversion_rate_b=stats.conversion_rate_b,
            winner=winner.value,
            confidence=confidence,
        )

        return ABTestVerdict(winner=winner, confidence=confidence, stats=stats)
