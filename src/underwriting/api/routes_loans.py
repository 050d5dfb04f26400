from __future__ import annotations

import logging
from typing import Any

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    HTTPException,
    Request,
    Security,
)
from pydantic import ValidationError

from underwriting.core.auth import require_api_key
from underwriting.core.metrics import (
    DECISIONS_METRIC,
    INVALID_INPUT_METRIC,
    PERSIST_FAILURES_METRIC,
    increment_metric,
)
from underwriting.core.request_id import request_id_from
from underwriting.core.settings import get_settings
from underwriting.domain.mortgage.ratios import InvalidInputError
from underwriting.domain.mortgage.records import (
    LoanApplicationRequest,
    LoanDecisionResponse,
    NewLoanRecord,
)
from underwriting.domain.mortgage.rules import KNOWN_OCCUPANCIES
from underwriting.domain.mortgage.underwrite import underwrite_application
from underwriting.repo.loan_records_repo import LoanRecordStore, get_record_store

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)

INVALID_REQUEST_DETAIL = "Invalid request, please check your inputs"


def persist_loan_record(
    store: LoanRecordStore, record: NewLoanRecord, request_id: str
) -> None:
    """Write one decision record; failures are logged and counted only."""
    try:
        stored = store.append(record)
    except Exception as exc:
        increment_metric(PERSIST_FAILURES_METRIC)
        logger.error(
            "loan_record_persist_failed",
            extra={
                "event": "loan_record_persist_failed",
                "request_id": request_id,
                "decision": record.decision,
                "error_type": exc.__class__.__name__,
                "error_message": str(exc),
            },
        )
        return

    logger.info(
        "loan_record_persisted",
        extra={
            "event": "loan_record_persisted",
            "request_id": request_id,
            "record_id": stored.id,
        },
    )


@router.post("/request-loan")
async def request_loan(
    request: Request,
    background_tasks: BackgroundTasks,
    store: LoanRecordStore = Depends(get_record_store),
) -> dict[str, Any]:
    try:
        payload = await request.json()
    except Exception as exc:
        raise HTTPException(status_code=400, detail=INVALID_REQUEST_DETAIL) from exc

    try:
        application_request = LoanApplicationRequest.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=INVALID_REQUEST_DETAIL) from exc

    if (
        get_settings().strict_occupancy
        and application_request.occupancy not in KNOWN_OCCUPANCIES
    ):
        raise HTTPException(
            status_code=422,
            detail="'occupancy' must be one of: " + ", ".join(KNOWN_OCCUPANCIES),
        )

    request_id = request_id_from(request)
    application = application_request.to_application()
    try:
        outcome = underwrite_application(application)
    except InvalidInputError as exc:
        increment_metric(INVALID_INPUT_METRIC)
        raise HTTPException(
            status_code=400, detail=f"Error calculating {exc.ratio}: {exc}"
        ) from exc

    decision = outcome.decision
    increment_metric(DECISIONS_METRIC, f'decision="{decision.outcome.value}"')
    logger.info(
        "loan_decision_made",
        extra={
            "event": "loan_decision_made",
            "request_id": request_id,
            "decision": decision.outcome.value,
            "rule_id": decision.rule_id,
        },
    )

    background_tasks.add_task(
        persist_loan_record,
        store,
        NewLoanRecord.from_outcome(application, outcome),
        request_id,
    )

    return LoanDecisionResponse(
        decision=decision.outcome.value,
        dti=outcome.ratios.dti,
        ltv=outcome.ratios.ltv,
        reason=decision.reason,
        request_id=request_id,
    ).model_dump()


@router.get("/loan-history", dependencies=[Security(require_api_key)])
def loan_history(
    request: Request,
    store: LoanRecordStore = Depends(get_record_store),
) -> list[dict[str, Any]]:
    try:
        records = store.list_all()
    except Exception as exc:
        logger.error(
            "loan_history_read_failed",
            extra={
                "event": "loan_history_read_failed",
                "request_id": request_id_from(request),
                "error_type": exc.__class__.__name__,
                "error_message": str(exc),
            },
        )
        raise HTTPException(
            status_code=500, detail="Error retrieving loan records"
        ) from exc

    return [record.model_dump(mode="json") for record in records]
