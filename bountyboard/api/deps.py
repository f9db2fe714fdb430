"""
BountyBoard - Shared API dependencies

Authentication happens in front of this service; the authenticated user id
arrives in the X-User-Id header.
"""
from typing import Optional
from fastapi import Header, HTTPException

from bountyboard.core.errors import (
    BountyBoardError,
    IssueNotFoundError,
    PermissionDeniedError,
    ProjectClosedError,
    ProjectNotFoundError,
    SettlementLockedError,
    UserNotFoundError,
)

_STATUS_CODES = {
    ProjectNotFoundError: 404,
    IssueNotFoundError: 404,
    UserNotFoundError: 404,
    PermissionDeniedError: 403,
    ProjectClosedError: 409,
    SettlementLockedError: 409,
}


async def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Require an authenticated user"""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id


async def get_viewer_id(x_user_id: Optional[str] = Header(None)) -> Optional[str]:
    """Anonymous viewers are allowed; they only see public projects"""
    return x_user_id or None


def to_http_error(exc: BountyBoardError) -> HTTPException:
    status_code = _STATUS_CODES.get(type(exc), 400)
    return HTTPException(status_code=status_code, detail=str(exc))
