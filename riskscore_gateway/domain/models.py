"""Domain models - pure Python dataclasses and enums for the risk questionnaire"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from riskscore_gateway.domain.categories import RiskCategory, normalize_total, risk_category


class YesNo(str, Enum):
    YES = "yes"
    NO = "no"


class IncomeRange(str, Enum):
    """Annual income band in lakhs"""

    BELOW_5L = "<5L"
    FROM_5_TO_10L = "5-10L"
    FROM_10_TO_20L = "10-20L"
    ABOVE_20L = "20L+"


class EducationLevel(str, Enum):
    HIGHSCHOOL = "highschool"
    BACHELOR = "bachelor"
    MASTER = "master"
    PHD = "phd"


class InvestmentTimeline(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


@dataclass
class RiskForm:
    """Questionnaire draft as edited by the user; None means the selector is unset"""

    age: int = 30
    smoker: Optional[YesNo] = None
    chronic_illness: Optional[YesNo] = None
    income_range: Optional[IncomeRange] = None
    education_level: Optional[EducationLevel] = None
    investment_timeline: Optional[InvestmentTimeline] = None
    monthly_expenses: float = 0
    loan_amount: float = 0


@dataclass(frozen=True)
class RiskInput:
    """Fully populated questionnaire, produced only by validation"""

    age: int
    smoker: YesNo
    chronic_illness: YesNo
    income_range: IncomeRange
    education_level: EducationLevel
    investment_timeline: InvestmentTimeline
    monthly_expenses: float
    loan_amount: float


@dataclass(frozen=True)
class ScoreCard:
    """One sub-score as presented on the result cards"""

    label: str
    value: int
    description: str


@dataclass(frozen=True)
class ScoreResult:
    """Sub-scores of one assessment; total and category are always derived"""

    financial_score: int
    health_score: int
    time_score: int

    @property
    def raw_total(self) -> int:
        return self.financial_score + self.health_score + self.time_score

    @property
    def total_score(self) -> int:
        return normalize_total(self.raw_total)

    @property
    def category(self) -> RiskCategory:
        return risk_category(self.total_score)


@dataclass(frozen=True)
class SubmissionRecord:
    """Scores sent to the score-record API together with the bearer credential"""

    total_score: int
    financial_score: int
    health_score: int
    time_score: int
    token: str

    @classmethod
    def from_result(cls, result: ScoreResult, token: str) -> "SubmissionRecord":
        return cls(
            total_score=result.total_score,
            financial_score=result.financial_score,
            health_score=result.health_score,
            time_score=result.time_score,
            token=token,
        )

    def to_payload(self) -> Dict[str, int]:
        """JSON body expected by the score-record endpoint (credential excluded)"""
        return {
            "Tscore": self.total_score,
            "Financial": self.financial_score,
            "Health": self.health_score,
            "TimeHori": self.time_score,
        }
