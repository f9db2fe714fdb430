"""
BountyBoard - Issues API Endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bountyboard.api.deps import get_current_user_id, get_viewer_id, to_http_error
from bountyboard.core.errors import BountyBoardError
from bountyboard.db.database import get_db
from bountyboard.schemas.issue import IssueCreate, IssueResponse, IssueUpdate
from bountyboard.services.issue_service import IssueService

router = APIRouter()


@router.post("", response_model=IssueResponse)
async def create_issue(
    issue_data: IssueCreate,
    current_user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Report a vulnerability against an active project"""
    try:
        issue = await IssueService(db).create(current_user_id, issue_data)
    except BountyBoardError as e:
        raise to_http_error(e)
    return IssueResponse.model_validate(issue)


@router.get("", response_model=List[IssueResponse])
async def list_issues(
    project_id: Optional[str] = None,
    reporter_id: Optional[str] = None,
    viewer_id: Optional[str] = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db)
):
    issues = await IssueService(db).list_issues(
        project_id=project_id, reporter_id=reporter_id, viewer_id=viewer_id
    )
    return [IssueResponse.model_validate(i) for i in issues]


@router.patch("/{issue_id}", response_model=IssueResponse)
async def update_issue(
    issue_id: str,
    update: IssueUpdate,
    current_user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Triage status/severity (project owner only)"""
    try:
        issue = await IssueService(db).update(issue_id, current_user_id, update)
    except BountyBoardError as e:
        raise to_http_error(e)
    return IssueResponse.model_validate(issue)
