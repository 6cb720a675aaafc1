"""Risk scoring engine - fixed weighted-sum formula over the questionnaire"""

from typing import Dict, List
from riskscore_gateway.domain.models import (
    RiskInput,
    ScoreResult,
    ScoreCard,
    YesNo,
    IncomeRange,
    EducationLevel,
    InvestmentTimeline,
)

# Lower income means less capacity to absorb losses
INCOME_POINTS: Dict[IncomeRange, int] = {
    IncomeRange.BELOW_5L: 10,
    IncomeRange.FROM_5_TO_10L: 7,
    IncomeRange.FROM_10_TO_20L: 5,
    IncomeRange.ABOVE_20L: 3,
}

TIMELINE_POINTS: Dict[InvestmentTimeline, int] = {
    InvestmentTimeline.SHORT: 10,
    InvestmentTimeline.MEDIUM: 7,
    InvestmentTimeline.LONG: 5,
}

EDUCATION_POINTS: Dict[EducationLevel, int] = {
    EducationLevel.HIGHSCHOOL: 3,
    EducationLevel.BACHELOR: 5,
    EducationLevel.MASTER: 7,
    EducationLevel.PHD: 10,
}

SMOKER_PENALTY = 15
CHRONIC_ILLNESS_PENALTY = 15

CARD_DESCRIPTIONS = {
    "Financial Score": "Based on income, expenses, and loan obligations.",
    "Health Score": "Based on age, smoking status, and chronic illness.",
    "Time Horizon Score": "Based on investment timeline and education level.",
}


def age_points(age: int) -> int:
    """Base health points by age band: [18,30) -> 5, [30,50] -> 10, above 50 -> 20"""
    if age < 30:
        return 5
    elif age <= 50:
        return 10
    else:
        return 20


def expense_points(monthly_expenses: float) -> int:
    """Strictly-greater thresholds, highest first; exact boundaries fall to the lower band"""
    if monthly_expenses > 50_000:
        return 20
    elif monthly_expenses > 30_000:
        return 15
    elif monthly_expenses > 10_000:
        return 10
    else:
        return 5


def loan_points(loan_amount: float) -> int:
    if loan_amount > 500_000:
        return 15
    elif loan_amount > 200_000:
        return 10
    else:
        return 5


def calculate_health_score(risk_input: RiskInput) -> int:
    """Health score in [5, 50]"""
    score = age_points(risk_input.age)
    if risk_input.smoker == YesNo.YES:
        score += SMOKER_PENALTY
    if risk_input.chronic_illness == YesNo.YES:
        score += CHRONIC_ILLNESS_PENALTY
    return score


def calculate_financial_score(risk_input: RiskInput) -> int:
    """Financial score in [13, 45]"""
    return (
        INCOME_POINTS[risk_input.income_range]
        + expense_points(risk_input.monthly_expenses)
        + loan_points(risk_input.loan_amount)
    )


def calculate_time_score(risk_input: RiskInput) -> int:
    """Time-horizon score in [8, 20]"""
    return TIMELINE_POINTS[risk_input.investment_timeline] + EDUCATION_POINTS[risk_input.education_level]


def calculate_scores(risk_input: RiskInput) -> ScoreResult:
    """
    Main entry point: compute all sub-scores for a validated questionnaire.

    Pure and deterministic; the total score and risk category are derived
    from the returned sub-scores.
    """
    return ScoreResult(
        financial_score=calculate_financial_score(risk_input),
        health_score=calculate_health_score(risk_input),
        time_score=calculate_time_score(risk_input),
    )


def score_cards(result: ScoreResult) -> List[ScoreCard]:
    """Sub-scores in display order with their descriptions"""
    values = {
        "Financial Score": result.financial_score,
        "Health Score": result.health_score,
        "Time Horizon Score": result.time_score,
    }
    return [
        ScoreCard(label=label, value=values[label], description=description)
        for label, description in CARD_DESCRIPTIONS.items()
    ]
