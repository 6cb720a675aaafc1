"""Display parameters passed to the assistant view"""

from dataclasses import dataclass
from typing import Dict
from urllib.parse import urlencode
from riskscore_gateway.domain.models import ScoreResult


@dataclass(frozen=True)
class AssistantHandoff:
    """Four scalar scores the assistant view displays; nothing flows back"""

    risk_score: int
    financial: int
    health: int
    time: int

    @classmethod
    def from_result(cls, result: ScoreResult) -> "AssistantHandoff":
        return cls(
            risk_score=result.total_score,
            financial=result.financial_score,
            health=result.health_score,
            time=result.time_score,
        )

    def query_params(self) -> Dict[str, int]:
        return {
            "riskScore": self.risk_score,
            "financial": self.financial,
            "health": self.health,
            "time": self.time,
        }

    def url(self, path: str) -> str:
        return f"{path}?{urlencode(self.query_params())}"
