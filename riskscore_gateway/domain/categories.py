"""Total-score normalization and risk category bands"""

import math
from dataclasses import dataclass

# Fixed normalization constant. Larger than the attainable raw maximum (115),
# so the worst possible input normalizes to 77, not 100.
NORMALIZATION_DIVISOR = 150
MAX_TOTAL_SCORE = 100

LOW_RISK_CEILING = 50
MODERATE_RISK_CEILING = 75


@dataclass(frozen=True)
class RiskCategory:
    """Three-tier label derived from the total score"""

    label: str
    color: str


LOW_RISK = RiskCategory(label="Low Risk", color="#10b981")
MODERATE_RISK = RiskCategory(label="Moderate Risk", color="#facc15")
HIGH_RISK = RiskCategory(label="High Risk", color="#ef4444")


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (round() would round to even)"""
    return int(math.floor(value + 0.5))


def normalize_total(raw_total: int) -> int:
    """Scale the sub-score sum to 0-100, clamped at 100"""
    return round_half_up(min(MAX_TOTAL_SCORE, raw_total / NORMALIZATION_DIVISOR * MAX_TOTAL_SCORE))


def risk_category(total_score: int) -> RiskCategory:
    """
    Map a normalized total score to its category.

    Bands:
    - < 50:    Low Risk
    - 50 - 74: Moderate Risk
    - >= 75:   High Risk
    """
    if total_score < LOW_RISK_CEILING:
        return LOW_RISK
    elif total_score < MODERATE_RISK_CEILING:
        return MODERATE_RISK
    else:
        return HIGH_RISK
