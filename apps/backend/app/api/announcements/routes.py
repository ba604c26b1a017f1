"""HR announcement API routes."""

from fastapi import APIRouter, status

from packages.core.announcements import AnnouncementFeed

from app.api.errors import to_http_exception
from app.core.dependencies import AsyncSessionDep, CallerContextDep
from app.schemas.announcements import (
    AnnouncementSendRequest,
    AnnouncementSendResponse,
    RecipientDirectoryResponse,
)
from app.services.announcements import AnnouncementService
from app.services.errors import ServiceError

router = APIRouter()


@router.get("", response_model=AnnouncementFeed)
async def list_announcements(
    caller: CallerContextDep,
    session: AsyncSessionDep,
) -> AnnouncementFeed:
    """
    List the organization's announcement history.

    Raises:
        HTTPException 403: If the caller is not an HR admin or has no
            organization.
    """
    try:
        return await AnnouncementService(session).list_announcements(caller)
    except ServiceError as e:
        raise to_http_exception(e)


@router.get("/recipients", response_model=RecipientDirectoryResponse)
async def list_recipients(
    caller: CallerContextDep,
    session: AsyncSessionDep,
) -> RecipientDirectoryResponse:
    """List teammates that can receive an announcement."""
    try:
        employees = await AnnouncementService(session).list_recipients(caller)
    except ServiceError as e:
        raise to_http_exception(e)
    return RecipientDirectoryResponse(employees=employees)


@router.post(
    "",
    response_model=AnnouncementSendResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_announcement(
    payload: AnnouncementSendRequest,
    caller: CallerContextDep,
    session: AsyncSessionDep,
) -> AnnouncementSendResponse:
    """
    Send an announcement to the whole organization or to selected teammates.

    Raises:
        HTTPException 400: If no recipient or an unknown recipient is named.
        HTTPException 403: If the caller is not an HR admin or has no
            organization.
    """
    try:
        result = await AnnouncementService(session).send_announcement(caller, payload)
    except ServiceError as e:
        raise to_http_exception(e)
    return AnnouncementSendResponse(
        delivered_count=result.delivered_count,
        batch_id=result.batch_id,
    )
