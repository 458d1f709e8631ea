"""
scoring/normal_cdf.py — Standard Normal CDF

Abramowitz & Stegun formula 7.1.26 for the error function
(|error| ≤ 1.5 × 10⁻⁷):

    t      = 1 / (1 + p·|x|)
    erf(x) = sign(x) · (1 − (a1·t + a2·t² + a3·t³ + a4·t⁴ + a5·t⁵) · e^(−x²))
    Φ(z)   = ½ · (1 + erf(z / √2))

A/B confidence figures are defined against this polynomial, not math.erf.
"""

import math

A1 = 0.254829592
A2 = -0.284496736
A3 = 1.421413741
A4 = -1.453152027
A5 = 1.061405429
P = 0.3275911


def erf(x: float) -> float:
    sign = 1 if x >= 0 else -1
    x = abs(x)

    t = 1.0 / (1.0 + P * x)
    # Horner form, same evaluation order as the published polynomial
    y = 1.0 - (((((A5 * t + A4) * t) + A3) * t + A2) * t + A1) * t * math.exp(-x * x)

    return sign * y


def normal_cdf(z: float) -> float:
    """Standard normal cumulative distribution Φ(z)."""
    return 0.5 * (1 + erf(z / math.sqrt(2)))
