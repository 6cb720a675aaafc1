"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from riskscore_gateway.api.main import create_app
from riskscore_gateway.domain.models import (
    RiskForm,
    YesNo,
    IncomeRange,
    EducationLevel,
    InvestmentTimeline,
)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def low_risk_form() -> RiskForm:
    """Young non-smoker with moderate income and low obligations"""
    return RiskForm(
        age=25,
        smoker=YesNo.NO,
        chronic_illness=YesNo.NO,
        income_range=IncomeRange.FROM_10_TO_20L,
        education_level=EducationLevel.BACHELOR,
        investment_timeline=InvestmentTimeline.MEDIUM,
        monthly_expenses=12000,
        loan_amount=100000,
    )


@pytest.fixture
def high_risk_form() -> RiskForm:
    """Worst case on every dimension"""
    return RiskForm(
        age=60,
        smoker=YesNo.YES,
        chronic_illness=YesNo.YES,
        income_range=IncomeRange.BELOW_5L,
        education_level=EducationLevel.PHD,
        investment_timeline=InvestmentTimeline.SHORT,
        monthly_expenses=60000,
        loan_amount=600000,
    )


@pytest.fixture
def low_risk_payload() -> dict:
    """JSON body matching low_risk_form"""
    return {
        "age": 25,
        "smoker": "no",
        "chronic_illness": "no",
        "income_range": "10-20L",
        "education_level": "bachelor",
        "investment_timeline": "medium",
        "monthly_expenses": 12000,
        "loan_amount": 100000,
    }
