"""Single-pass questionnaire validation"""

from typing import List
from riskscore_gateway.domain.models import RiskForm, RiskInput
from riskscore_gateway.domain.exceptions import ValidationError

MIN_AGE = 18
MAX_AGE = 100

REQUIRED_SELECTORS = (
    "smoker",
    "chronic_illness",
    "income_range",
    "education_level",
    "investment_timeline",
)

MISSING_FIELDS_MESSAGE = "Please answer all required fields before submitting."
INVALID_EXPENSES_MESSAGE = "Please enter valid monthly expenses."
INVALID_AGE_MESSAGE = f"Please enter an age between {MIN_AGE} and {MAX_AGE}."


def validate_form(form: RiskForm) -> RiskInput:
    """
    Turn a draft form into a fully populated RiskInput.

    Requirements:
    - All five selectors set
    - Monthly expenses strictly positive
    - Age within the questionnaire's range
    - Loan amount is not checked for positivity

    Raises:
        ValidationError: listing every offending field; the message names
            the first failing condition in the order above
    """
    missing: List[str] = [name for name in REQUIRED_SELECTORS if getattr(form, name) is None]
    invalid: List[str] = []

    if form.monthly_expenses <= 0:
        invalid.append("monthly_expenses")
    if not MIN_AGE <= form.age <= MAX_AGE:
        invalid.append("age")

    if missing:
        raise ValidationError(MISSING_FIELDS_MESSAGE, missing + invalid)
    if "monthly_expenses" in invalid:
        raise ValidationError(INVALID_EXPENSES_MESSAGE, invalid)
    if invalid:
        raise ValidationError(INVALID_AGE_MESSAGE, invalid)

    return RiskInput(
        age=form.age,
        smoker=form.smoker,
        chronic_illness=form.chronic_illness,
        income_range=form.income_range,
        education_level=form.education_level,
        investment_timeline=form.investment_timeline,
        monthly_expenses=form.monthly_expenses,
        loan_amount=form.loan_amount,
    )
