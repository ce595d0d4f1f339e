"""Participation endpoints."""
import logging
from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from meetup.api.deps import get_db, get_current_user_id
from meetup.schemas import (
    Applicant,
    ParticipationDecision,
    ParticipationState,
    SuccessResponse,
)
from meetup.services.participation import (
    apply_decisions,
    list_applicants,
    request_join,
    withdraw_or_remove,
)
from meetup.core.rate_limit import limiter, RATE_LIMITS

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/meetings/{meeting_id}/participations", response_model=ParticipationState, status_code=201)
@limiter.limit(RATE_LIMITS["join_request"])
async def request_join_endpoint(
    request: Request,
    meeting_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Ask to join a meeting.

    Creates a PENDING participation and notifies the host.

    Raises:
        404 meeting not found, 410 meeting cancelled, 400 meeting already
        took place / host joining own meeting / meeting full (when intake
        capacity checking is enabled), 409 already requested

    Example:
        Request:
            POST /api/v1/meetings/42/participations
            Authorization: Bearer eyJhbGc...

        Response (201):
            {
                "participation_id": 7,
                "meeting_id": 42,
                "user_id": 3,
                "status": "PENDING"
            }
    """
    return request_join(db, meeting_id, user_id)


@router.get("/meetings/{meeting_id}/participations", response_model=List[Applicant])
@limiter.limit(RATE_LIMITS["read"])
async def list_applicants_endpoint(
    request: Request,
    meeting_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """List applicants of a meeting with their profile and status (host only)."""
    return list_applicants(db, meeting_id, user_id)


@router.patch("/meetings/{meeting_id}/participations", response_model=List[ParticipationState])
@limiter.limit(RATE_LIMITS["decision"])
async def apply_decisions_endpoint(
    request: Request,
    meeting_id: int,
    decisions: List[ParticipationDecision],
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Accept or reject a batch of join requests (host only).

    The batch is all-or-nothing: if accepting any item would exceed the
    meeting's capacity, nothing in the batch is applied and the response is
    400 CAPACITY_EXCEEDED. Items whose status already matches, or that do not
    exist, are skipped.

    Example:
        Request:
            PATCH /api/v1/meetings/42/participations
            [
                {"participationId": 7, "status": "ACCEPTED"},
                {"participationId": 8, "status": "REJECTED"}
            ]

        Response (200):
            [
                {"participation_id": 7, "meeting_id": 42, "user_id": 3, "status": "ACCEPTED"},
                {"participation_id": 8, "meeting_id": 42, "user_id": 5, "status": "REJECTED"}
            ]
    """
    applied = apply_decisions(
        db,
        meeting_id,
        user_id,
        [(d.participation_id, d.status) for d in decisions],
    )
    logger.info(f"Applied {len(applied)} of {len(decisions)} decisions (meeting_id={meeting_id})")
    return applied


@router.delete("/meetings/{meeting_id}/participations/{participation_id}", response_model=SuccessResponse)
@limiter.limit(RATE_LIMITS["withdraw"])
async def withdraw_or_remove_endpoint(
    request: Request,
    meeting_id: int,
    participation_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
) -> SuccessResponse:
    """
    Withdraw your own participation, or remove someone from your meeting as host.

    A removed participant receives a rejection notification. An accepted
    participation frees its seat.
    """
    withdraw_or_remove(db, meeting_id, participation_id, user_id)
    return SuccessResponse(success=True)
