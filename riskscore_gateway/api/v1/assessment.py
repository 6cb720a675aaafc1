"""POST /v1/score and POST /v1/assessment - questionnaire scoring endpoints"""

import time
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from riskscore_gateway.api.v1.schemas import (
    AssessmentRequest,
    AssessmentResponse,
    ScoreCardSchema,
    ScoreResponse,
    ValidationErrorResponse,
)
from riskscore_gateway.api.dependencies import get_credential_store, get_request_id, get_score_record_client
from riskscore_gateway.config import settings
from riskscore_gateway.domain.exceptions import ValidationError
from riskscore_gateway.domain.handoff import AssistantHandoff
from riskscore_gateway.domain.models import ScoreResult
from riskscore_gateway.domain.scoring import calculate_scores, score_cards
from riskscore_gateway.domain.submission import SubmissionController
from riskscore_gateway.domain.validation import validate_form
from riskscore_gateway.infrastructure.clients.score_records import ScoreRecordClient
from riskscore_gateway.infrastructure.credentials import CredentialStore
from riskscore_gateway.infrastructure.observability.logging import log_submission
from riskscore_gateway.infrastructure.observability.metrics import record_assessment, validation_failure_counter

router = APIRouter()

VALIDATION_RESPONSES = {422: {"model": ValidationErrorResponse}}


def _validation_error_response(message: str, fields: list[str]) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=ValidationErrorResponse(detail=message, fields=fields).model_dump(),
    )


def _score_fields(result: ScoreResult) -> dict:
    category = result.category
    return {
        "total_score": result.total_score,
        "financial_score": result.financial_score,
        "health_score": result.health_score,
        "time_score": result.time_score,
        "risk_category": category.label,
        "category_color": category.color,
        "cards": [
            ScoreCardSchema(label=card.label, value=card.value, description=card.description)
            for card in score_cards(result)
        ],
        "assistant_url": AssistantHandoff.from_result(result).url(settings.assistant_path),
    }


@router.post("/score", response_model=ScoreResponse, responses=VALIDATION_RESPONSES)
def score_assessment(request_body: AssessmentRequest, request: Request):
    """
    Score a questionnaire without persisting it.

    Returns:
        Sub-scores, normalized total, risk category and the assistant link
    """
    try:
        risk_input = validate_form(request_body.to_form())
    except ValidationError as e:
        validation_failure_counter.inc()
        logging.info(f"Validation failed: {e}", extra={"request_id": get_request_id(request), "fields": e.fields})
        return _validation_error_response(e.message, e.fields)

    result = calculate_scores(risk_input)
    record_assessment(result.category.label)
    return ScoreResponse(**_score_fields(result))


@router.post("/assessment", response_model=AssessmentResponse, responses=VALIDATION_RESPONSES)
async def submit_assessment(
    request_body: AssessmentRequest,
    request: Request,
    score_client: ScoreRecordClient = Depends(get_score_record_client),
    credentials: CredentialStore = Depends(get_credential_store),
):
    """
    Score a questionnaire and save the result to the score-record API.

    Flow:
    1. Validate and score (422 on an incomplete questionnaire)
    2. Save the scores with the caller's bearer token, one attempt
    3. Return the scores together with the save outcome

    A failed save is reported in the body, not as an HTTP error: the
    scores are valid either way.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    controller = SubmissionController(score_client, credentials, notice_seconds=0)
    outcome = await controller.submit(request_body.to_form())

    if outcome.result is None:
        logging.info(f"Validation failed: {outcome.message}", extra={"request_id": request_id, "fields": outcome.fields})
        return _validation_error_response(outcome.message, outcome.fields)

    duration_ms = (time.time() - start_time) * 1000
    log_submission(
        request_id,
        outcome.result.total_score,
        outcome.result.category.label,
        outcome.persisted,
        outcome.error_kind,
        duration_ms,
    )

    return AssessmentResponse(
        **_score_fields(outcome.result),
        persisted=outcome.persisted,
        error_kind=outcome.error_kind,
        message=outcome.message,
    )
