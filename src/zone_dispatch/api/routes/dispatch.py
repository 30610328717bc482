"""API routes for restaurant assignment."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from ...models.domain import NotAssignable
from ...models.errors import CoordinateValidationError, RepositoryError
from ...schemas.dispatch import AssignmentRequest, AssignmentResponse, NotAssignableResponse
from ...services.dispatch.engine import build_engine
from ...services.outputs.formatter import assignment_to_response, not_assignable_to_response

router = APIRouter(prefix="/dispatch", tags=["dispatch"])


@router.post(
    "/assign",
    response_model=AssignmentResponse,
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_404_NOT_FOUND: {"model": NotAssignableResponse}},
)
def assign_restaurant(payload: AssignmentRequest):
    """Assign the nearest restaurant sharing a zone with the delivery location.

    A location no restaurant serves is answered with 404 and a
    ``NOT_ASSIGNABLE`` body; callers should reject the order rather than retry.
    """
    try:
        outcome = build_engine().assign(payload.latitude, payload.longitude)
    except CoordinateValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except RepositoryError as exc:
        logging.error(f"Assignment failed for ({payload.latitude}, {payload.longitude}): {exc}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc

    if isinstance(outcome, NotAssignable):
        body = not_assignable_to_response(outcome)
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=body.model_dump())
    return assignment_to_response(outcome)
