"""
TASKNEST API - Session Router

Introspection of the caller's own sessions. A session that belongs to
someone else is reported exactly like a missing one.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends

from tasknest.auth.dependencies import CurrentAuth, get_session_service
from tasknest.errors import NotFoundError
from tasknest.responses import ApiResponse, DeletedData
from tasknest.sessions.models import Session
from tasknest.sessions.schemas import SessionResponse
from tasknest.sessions.service import SessionService


router = APIRouter(prefix="/auth-sessions", tags=["Sessions"])


async def _get_owned_session(service: SessionService, session_id: str, subject: str) -> Session:
    session = await service.find_by_id(session_id)
    if session is None or session.user_id != subject:
        raise NotFoundError("Session not found")
    return session


@router.get(
    "",
    response_model=ApiResponse[List[SessionResponse]],
    summary="List the current user's sessions",
)
async def list_sessions(
    auth: CurrentAuth,
    service: Annotated[SessionService, Depends(get_session_service)],
) -> ApiResponse[List[SessionResponse]]:
    sessions = await service.list_by_user(auth.subject)
    return ApiResponse(data=[SessionResponse.from_session(s) for s in sessions])


@router.get(
    "/{session_id}",
    response_model=ApiResponse[SessionResponse],
    summary="Get one of the current user's sessions",
)
async def get_session(
    session_id: str,
    auth: CurrentAuth,
    service: Annotated[SessionService, Depends(get_session_service)],
) -> ApiResponse[SessionResponse]:
    session = await _get_owned_session(service, session_id, auth.subject)
    return ApiResponse(data=SessionResponse.from_session(session))


@router.delete(
    "/{session_id}",
    response_model=ApiResponse[DeletedData],
    summary="Delete one of the current user's sessions",
)
async def delete_session(
    session_id: str,
    auth: CurrentAuth,
    service: Annotated[SessionService, Depends(get_session_service)],
) -> ApiResponse[DeletedData]:
    await _get_owned_session(service, session_id, auth.subject)
    await service.delete_by_id(session_id)
    return ApiResponse(data=DeletedData(id=session_id))
