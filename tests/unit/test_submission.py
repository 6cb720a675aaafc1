"""Unit tests for the submission state machine"""

import asyncio
import httpx
import pytest
from dataclasses import replace
from unittest.mock import AsyncMock, Mock
from riskscore_gateway.domain.models import RiskForm, SubmissionRecord
from riskscore_gateway.domain.exceptions import PersistRejected, TransportError
from riskscore_gateway.domain.submission import (
    SubmissionController,
    SubmissionState,
    SUCCESS_NOTICE,
    PERSIST_ERROR_MESSAGES,
)
from riskscore_gateway.domain.validation import MISSING_FIELDS_MESSAGE
from riskscore_gateway.infrastructure.credentials import CredentialStore

S = SubmissionState


@pytest.fixture
def score_client() -> AsyncMock:
    client = AsyncMock()
    client.save_score.return_value = {"message": "Score saved"}
    return client


@pytest.fixture
def controller(score_client: AsyncMock) -> SubmissionController:
    return SubmissionController(score_client, CredentialStore({"token": "abc123"}), notice_seconds=0.05)


async def test_successful_submit_walks_every_state(controller: SubmissionController, score_client: AsyncMock, low_risk_form: RiskForm):
    outcome = await controller.submit(low_risk_form)

    assert outcome.persisted is True
    assert outcome.message == SUCCESS_NOTICE
    assert outcome.result.total_score == 25
    assert controller.transitions == [
        (S.IDLE, S.VALIDATING),
        (S.VALIDATING, S.SCORED),
        (S.SCORED, S.PERSISTING),
        (S.PERSISTING, S.PERSISTED_OK),
        (S.PERSISTED_OK, S.IDLE),
    ]
    assert controller.state == S.IDLE
    assert controller.result == outcome.result
    assert controller.pending is False
    assert controller.error is None

    score_client.save_score.assert_awaited_once()
    record = score_client.save_score.await_args.args[0]
    assert record == SubmissionRecord(total_score=25, financial_score=20, health_score=5, time_score=12, token="abc123")


async def test_success_notice_dismisses_itself(controller: SubmissionController, low_risk_form: RiskForm):
    await controller.submit(low_risk_form)
    assert controller.notice == SUCCESS_NOTICE

    await asyncio.sleep(0.1)
    assert controller.notice is None


async def test_validation_failure_never_scores_or_persists(controller: SubmissionController, score_client: AsyncMock, low_risk_form: RiskForm):
    outcome = await controller.submit(replace(low_risk_form, smoker=None))

    assert outcome.result is None
    assert outcome.error_kind == "validation"
    assert outcome.message == MISSING_FIELDS_MESSAGE
    assert outcome.fields == ["smoker"]
    assert controller.result is None
    assert controller.error == MISSING_FIELDS_MESSAGE
    assert controller.transitions == [(S.IDLE, S.VALIDATING), (S.VALIDATING, S.IDLE)]
    score_client.save_score.assert_not_awaited()


async def test_missing_credential_makes_no_network_call(score_client: AsyncMock, low_risk_form: RiskForm):
    controller = SubmissionController(score_client, CredentialStore({}))

    outcome = await controller.submit(low_risk_form)

    assert outcome.state == S.PERSISTED_ERROR
    assert outcome.error_kind == "unauthenticated"
    assert controller.error == PERSIST_ERROR_MESSAGES["unauthenticated"]
    assert controller.result is not None  # scores still displayed
    assert controller.pending is False
    score_client.save_score.assert_not_awaited()


@pytest.mark.parametrize(
    "error,kind",
    [
        (PersistRejected("Score API error: 500", 500, "{}"), "rejected"),
        (TransportError("Score API unreachable"), "transport"),
    ],
)
async def test_persist_failure_is_terminal(controller: SubmissionController, score_client: AsyncMock, low_risk_form: RiskForm, error, kind):
    score_client.save_score.side_effect = error

    outcome = await controller.submit(low_risk_form)

    assert outcome.persisted is False
    assert outcome.error_kind == kind
    assert controller.error == PERSIST_ERROR_MESSAGES[kind]
    assert controller.error_kind == kind
    assert controller.notice is None
    assert controller.pending is False
    assert controller.transitions[-2:] == [(S.PERSISTING, S.PERSISTED_ERROR), (S.PERSISTED_ERROR, S.IDLE)]
    # No retry
    score_client.save_score.assert_awaited_once()
    assert await controller.persist_pending() is None
    score_client.save_score.assert_awaited_once()


async def test_resubmit_after_failure_clears_error(controller: SubmissionController, score_client: AsyncMock, low_risk_form: RiskForm):
    score_client.save_score.side_effect = TransportError("down")
    await controller.submit(low_risk_form)

    score_client.save_score.side_effect = None
    outcome = await controller.submit(low_risk_form)

    assert outcome.persisted is True
    assert controller.error is None
    assert score_client.save_score.await_count == 2


async def test_persist_pending_skips_result_already_in_flight(score_client: AsyncMock, low_risk_form: RiskForm):
    release = asyncio.Event()

    async def slow_save(record):
        await release.wait()
        return {}

    score_client.save_score.side_effect = slow_save
    controller = SubmissionController(score_client, CredentialStore({"token": "abc"}), notice_seconds=0.01)

    first = asyncio.create_task(controller.submit(low_risk_form))
    await asyncio.sleep(0)
    assert controller.state == S.PERSISTING
    assert controller.pending is True

    assert await controller.persist_pending() is None

    release.set()
    await first
    score_client.save_score.assert_awaited_once()


async def test_stale_response_does_not_overwrite_newer_result(score_client: AsyncMock, low_risk_form: RiskForm, high_risk_form: RiskForm):
    first_release = asyncio.Event()

    async def save(record):
        if record.total_score == 25:
            await first_release.wait()
            raise PersistRejected("Score API error: 500", 500, "{}")
        return {"message": "Score saved"}

    score_client.save_score.side_effect = save
    controller = SubmissionController(score_client, CredentialStore({"token": "abc"}), notice_seconds=1.0)

    first = asyncio.create_task(controller.submit(low_risk_form))
    await asyncio.sleep(0)
    assert controller.state == S.PERSISTING

    second = await controller.submit(high_risk_form)
    assert second.persisted is True
    assert controller.result.total_score == 77

    first_release.set()
    first_outcome = await first

    assert first_outcome.stale is True
    assert first_outcome.error_kind == "rejected"
    # Newer result and its success state untouched
    assert controller.result.total_score == 77
    assert controller.error is None
    assert controller.notice == SUCCESS_NOTICE
    assert controller.state == S.IDLE
    assert controller.pending is False
    assert score_client.save_score.await_count == 2


async def test_assistant_handoff_uses_last_result(controller: SubmissionController, high_risk_form: RiskForm):
    assert controller.assistant_handoff() is None

    await controller.submit(high_risk_form)

    handoff = controller.assistant_handoff()
    assert handoff.query_params() == {"riskScore": 77, "financial": 45, "health": 50, "time": 20}


@pytest.mark.parametrize(
    "error",
    [httpx.InvalidURL("bad url"), RuntimeError("store unavailable")],
)
async def test_unexpected_client_error_settles_as_transport(controller: SubmissionController, score_client: AsyncMock, low_risk_form: RiskForm, error):
    score_client.save_score.side_effect = error

    outcome = await controller.submit(low_risk_form)

    assert outcome.state == S.PERSISTED_ERROR
    assert outcome.error_kind == "transport"
    assert controller.error == PERSIST_ERROR_MESSAGES["transport"]
    assert controller.state == S.IDLE
    assert controller.pending is False
    assert controller.result.total_score == 25


async def test_failing_credential_lookup_settles_as_transport(score_client: AsyncMock, low_risk_form: RiskForm):
    credentials = Mock(spec=CredentialStore)
    credentials.get_token.side_effect = OSError("keyring locked")
    controller = SubmissionController(score_client, credentials)

    outcome = await controller.submit(low_risk_form)

    assert outcome.error_kind == "transport"
    assert controller.state == S.IDLE
    score_client.save_score.assert_not_awaited()


async def test_zero_notice_delay_schedules_no_timer(score_client: AsyncMock, low_risk_form: RiskForm):
    """Request-scoped controllers report success in the outcome only"""
    controller = SubmissionController(score_client, CredentialStore({"token": "abc"}), notice_seconds=0)

    outcome = await controller.submit(low_risk_form)

    assert outcome.persisted is True
    assert outcome.message == SUCCESS_NOTICE
    assert controller.notice is None
    assert controller._notice_handle is None
