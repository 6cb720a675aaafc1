"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import List, Optional
from riskscore_gateway.domain.models import (
    RiskForm,
    YesNo,
    IncomeRange,
    EducationLevel,
    InvestmentTimeline,
)


class AssessmentRequest(BaseModel):
    """Questionnaire answers; unset selectors are null or omitted"""

    age: int = Field(30, description="Age in years (18-100)")
    smoker: Optional[YesNo] = None
    chronic_illness: Optional[YesNo] = None
    income_range: Optional[IncomeRange] = None
    education_level: Optional[EducationLevel] = None
    investment_timeline: Optional[InvestmentTimeline] = None
    monthly_expenses: float = Field(0, ge=0, description="Monthly expenses in rupees")
    loan_amount: float = Field(0, ge=0, description="Outstanding loan amount in rupees")

    def to_form(self) -> RiskForm:
        return RiskForm(
            age=self.age,
            smoker=self.smoker,
            chronic_illness=self.chronic_illness,
            income_range=self.income_range,
            education_level=self.education_level,
            investment_timeline=self.investment_timeline,
            monthly_expenses=self.monthly_expenses,
            loan_amount=self.loan_amount,
        )


class ScoreCardSchema(BaseModel):
    """Single sub-score card"""

    label: str
    value: int
    description: str


class ScoreResponse(BaseModel):
    """Response for POST /v1/score"""

    total_score: int
    financial_score: int
    health_score: int
    time_score: int
    risk_category: str
    category_color: str
    cards: List[ScoreCardSchema]
    assistant_url: str


class AssessmentResponse(ScoreResponse):
    """Response for POST /v1/assessment"""

    persisted: bool
    error_kind: Optional[str] = None
    message: Optional[str] = None


class ValidationErrorResponse(BaseModel):
    """422 body when the questionnaire is incomplete"""

    detail: str
    fields: List[str]
