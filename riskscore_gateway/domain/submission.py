"""Submission controller - validate, score, persist once, classify the outcome"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set, Tuple
from riskscore_gateway.config import settings
from riskscore_gateway.domain.models import RiskForm, ScoreResult, SubmissionRecord
from riskscore_gateway.domain.exceptions import (
    DomainException,
    ValidationError,
    UnauthenticatedError,
    PersistRejected,
    TransportError,
)
from riskscore_gateway.domain.handoff import AssistantHandoff
from riskscore_gateway.domain.scoring import calculate_scores
from riskscore_gateway.domain.validation import validate_form
from riskscore_gateway.infrastructure.clients.score_records import ScoreRecordClient
from riskscore_gateway.infrastructure.credentials import CredentialStore
from riskscore_gateway.infrastructure.observability.metrics import (
    record_assessment,
    record_persist_outcome,
    validation_failure_counter,
)

logger = logging.getLogger(__name__)

SUCCESS_NOTICE = "Form submitted successfully!"

PERSIST_ERROR_MESSAGES = {
    UnauthenticatedError.kind: "Failed to save score: please log in first.",
    PersistRejected.kind: "Failed to save score to database",
    TransportError.kind: "Unexpected error occurred while saving score",
}


class SubmissionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SCORED = "scored"
    PERSISTING = "persisting"
    PERSISTED_OK = "persisted_ok"
    PERSISTED_ERROR = "persisted_error"


@dataclass
class SubmissionOutcome:
    """What happened to one submit call"""

    result: Optional[ScoreResult]
    state: SubmissionState
    error_kind: Optional[str] = None
    message: Optional[str] = None
    stale: bool = False
    fields: List[str] = field(default_factory=list)

    @property
    def persisted(self) -> bool:
        return self.state == SubmissionState.PERSISTED_OK


class SubmissionController:
    """
    Explicit state machine for the questionnaire submit flow.

    IDLE -> VALIDATING -> SCORED -> PERSISTING -> PERSISTED_OK | PERSISTED_ERROR -> IDLE

    Each scored result gets a generation number. A persistence response for
    an older generation is dropped without touching the current state, so a
    slow first save can never overwrite the outcome of a later submit.
    Failures are terminal; nothing is retried until the next submit.
    """

    def __init__(
        self,
        score_client: ScoreRecordClient,
        credentials: CredentialStore,
        notice_seconds: float | None = None,
    ):
        self.score_client = score_client
        self.credentials = credentials
        self.notice_seconds = settings.success_notice_seconds if notice_seconds is None else notice_seconds

        self.state = SubmissionState.IDLE
        self.result: Optional[ScoreResult] = None
        self.error: Optional[str] = None
        self.error_kind: Optional[str] = None
        self.notice: Optional[str] = None
        self.pending = False
        self.transitions: List[Tuple[SubmissionState, SubmissionState]] = []

        self._generation = 0
        self._in_flight: Set[int] = set()
        self._notice_handle: Optional[asyncio.TimerHandle] = None

    @property
    def generation(self) -> int:
        return self._generation

    def _transition(self, new_state: SubmissionState) -> None:
        self.transitions.append((self.state, new_state))
        logger.debug(
            "Submission state change",
            extra={"from_state": self.state.value, "to_state": new_state.value, "generation": self._generation},
        )
        self.state = new_state

    async def submit(self, form: RiskForm) -> SubmissionOutcome:
        """
        Handle an explicit user submit.

        Flow:
        1. Validate the form; on failure return to IDLE without scoring
        2. Score synchronously and mark the result pending
        3. Issue the persist command for that result
        """
        self._transition(SubmissionState.VALIDATING)
        try:
            risk_input = validate_form(form)
        except ValidationError as e:
            validation_failure_counter.inc()
            self.error = e.message
            self.error_kind = e.kind
            self._transition(SubmissionState.IDLE)
            return SubmissionOutcome(
                result=None,
                state=SubmissionState.IDLE,
                error_kind=e.kind,
                message=e.message,
                fields=e.fields,
            )

        self.error = None
        self.error_kind = None

        result = calculate_scores(risk_input)
        record_assessment(result.category.label)

        self._generation += 1
        self.result = result
        self.pending = True
        self._transition(SubmissionState.SCORED)

        return await self._persist(self._generation, result)

    async def persist_pending(self) -> Optional[SubmissionOutcome]:
        """
        Save the current result if it is pending and no request for it is in flight.

        Returns None when there is nothing to send.
        """
        if not self.pending or self.result is None or self._generation in self._in_flight:
            return None
        return await self._persist(self._generation, self.result)

    async def _persist(self, generation: int, result: ScoreResult) -> SubmissionOutcome:
        self._transition(SubmissionState.PERSISTING)
        self._in_flight.add(generation)
        error: Optional[DomainException] = None
        try:
            token = self.credentials.get_token()
            if token is None:
                raise UnauthenticatedError("User not logged in")
            await self.score_client.save_score(SubmissionRecord.from_result(result, token))
        except (UnauthenticatedError, PersistRejected, TransportError) as e:
            error = e
        except Exception as e:
            logger.exception("Unexpected error while saving score", extra={"generation": generation})
            error = TransportError(f"Unexpected error while saving score: {e}")
            error.__cause__ = e
        finally:
            self._in_flight.discard(generation)
            if generation == self._generation:
                self.pending = False

        return self._settle(generation, result, error)

    def _settle(
        self,
        generation: int,
        result: ScoreResult,
        error: Optional[DomainException],
    ) -> SubmissionOutcome:
        terminal = SubmissionState.PERSISTED_OK if error is None else SubmissionState.PERSISTED_ERROR
        error_kind = error.kind if error else None
        message = PERSIST_ERROR_MESSAGES[error.kind] if error else SUCCESS_NOTICE

        if generation != self._generation:
            record_persist_outcome("stale")
            logger.info(
                "Discarding stale persistence response",
                extra={"generation": generation, "current_generation": self._generation, "outcome": terminal.value},
            )
            return SubmissionOutcome(result, terminal, error_kind, message, stale=True)

        if error is None:
            record_persist_outcome("saved")
            self._transition(SubmissionState.PERSISTED_OK)
            self._show_notice(message)
        else:
            record_persist_outcome(error.kind)
            logger.warning(f"Score not saved: {error}", extra={"error_kind": error.kind, "generation": generation})
            self.error = message
            self.error_kind = error.kind
            self._transition(SubmissionState.PERSISTED_ERROR)

        # Result stays displayed after either terminal state
        self._transition(SubmissionState.IDLE)
        return SubmissionOutcome(result, terminal, error_kind, message)

    def _show_notice(self, message: str) -> None:
        if self._notice_handle is not None:
            self._notice_handle.cancel()
            self._notice_handle = None
        # Zero delay means no one is watching (request-scoped controller)
        if self.notice_seconds <= 0:
            return
        self.notice = message
        loop = asyncio.get_running_loop()
        self._notice_handle = loop.call_later(self.notice_seconds, self._dismiss_notice)

    def _dismiss_notice(self) -> None:
        self.notice = None
        self._notice_handle = None

    def assistant_handoff(self) -> Optional[AssistantHandoff]:
        """Scores for the assistant view, taken from the last computed result"""
        if self.result is None:
            return None
        return AssistantHandoff.from_result(self.result)
