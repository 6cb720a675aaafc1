"""Score-record API HTTP client for persisting assessment results"""

import logging
import httpx
from typing import Any, Dict
from riskscore_gateway.domain.models import SubmissionRecord
from riskscore_gateway.domain.exceptions import PersistRejected, TransportError
from riskscore_gateway.config import settings
from riskscore_gateway.infrastructure.observability.metrics import persist_latency_histogram

logger = logging.getLogger(__name__)


class ScoreRecordClient:
    """Client for the remote scoring-records endpoint"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.score_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}{settings.score_records_path}"

    async def save_score(self, record: SubmissionRecord) -> Dict[str, Any]:
        """
        POST one score record. Exactly one attempt, no retry.

        Returns:
            Parsed JSON body of the 2xx response

        Raises:
            PersistRejected: Non-2xx response (body is logged, not surfaced)
            TransportError: Timeout, connection failure, or unparseable body
        """
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {record.token}",
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with persist_latency_histogram.time():
                    response = await client.post(self.endpoint, json=record.to_payload(), headers=headers)
            except httpx.TimeoutException as e:
                raise TransportError(f"Score API timeout after {self.timeout}s") from e
            except httpx.RequestError as e:
                raise TransportError(f"Score API unreachable: {e}") from e

        if not response.is_success:
            logger.error(
                "Error saving score",
                extra={"status_code": response.status_code, "response_body": response.text},
            )
            raise PersistRejected(f"Score API error: {response.status_code}", response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid response from score API: {e}") from e
