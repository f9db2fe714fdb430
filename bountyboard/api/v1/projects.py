"""
BountyBoard - Projects API Endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from bountyboard.api.deps import get_current_user_id, get_viewer_id, to_http_error
from bountyboard.core.errors import BountyBoardError
from bountyboard.db.database import get_db
from bountyboard.schemas.project import (
    ProjectCreate,
    ProjectOrganizationsUpdate,
    ProjectResponse,
    ProjectStatusUpdate,
    ProjectVisibilityUpdate,
)
from bountyboard.services.project_service import ProjectService
from bountyboard.services.reward_service import RewardService

router = APIRouter()


@router.post("", response_model=ProjectResponse)
async def create_project(
    project_data: ProjectCreate,
    current_user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Register a mission; the tier pools must sum to the total pool"""
    try:
        project = await ProjectService(db).create(current_user_id, project_data)
    except BountyBoardError as e:
        raise to_http_error(e)
    return ProjectResponse.model_validate(project)


@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    viewer_id: Optional[str] = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db)
):
    """Projects visible to the caller, newest first"""
    projects = await ProjectService(db).list_visible(viewer_id)
    return [ProjectResponse.model_validate(p) for p in projects]


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    viewer_id: Optional[str] = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db)
):
    try:
        project = await ProjectService(db).get(project_id, viewer_id)
    except BountyBoardError as e:
        raise to_http_error(e)
    return ProjectResponse.model_validate(project)


@router.patch("/{project_id}/status", response_model=ProjectResponse)
async def update_project_status(
    project_id: str,
    update: ProjectStatusUpdate,
    current_user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Close (freezing the settlement) or re-open a project"""
    try:
        project = await ProjectService(db).update_status(project_id, current_user_id, update.status)
    except BountyBoardError as e:
        raise to_http_error(e)
    return ProjectResponse.model_validate(project)


@router.patch("/{project_id}/visibility", response_model=ProjectResponse)
async def update_project_visibility(
    project_id: str,
    update: ProjectVisibilityUpdate,
    current_user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    try:
        project = await ProjectService(db).update_visibility(project_id, current_user_id, update.visibility)
    except BountyBoardError as e:
        raise to_http_error(e)
    return ProjectResponse.model_validate(project)


@router.patch("/{project_id}/organizations", response_model=ProjectResponse)
async def update_project_organizations(
    project_id: str,
    update: ProjectOrganizationsUpdate,
    current_user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    try:
        project = await ProjectService(db).update_organizations(
            project_id, current_user_id, update.allowed_organizations
        )
    except BountyBoardError as e:
        raise to_http_error(e)
    return ProjectResponse.model_validate(project)


# ---------------------------------------------------------------------------
# Reward views
# ---------------------------------------------------------------------------

@router.get("/{project_id}/leaderboard")
async def get_leaderboard(
    project_id: str,
    viewer_id: Optional[str] = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db)
):
    """Reporters ranked by qualifying issues, with estimated rewards"""
    try:
        await ProjectService(db).get(project_id, viewer_id)
        entries = await RewardService(db).get_leaderboard(project_id)
    except BountyBoardError as e:
        raise to_http_error(e)
    return {"project_id": project_id, "entries": [e.to_dict() for e in entries]}


@router.get("/{project_id}/rewards")
async def get_reward_breakdown(
    project_id: str,
    viewer_id: Optional[str] = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db)
):
    """Per-severity pool, qualifying issue count and per-issue share"""
    try:
        await ProjectService(db).get(project_id, viewer_id)
        tiers = await RewardService(db).get_reward_breakdown(project_id)
    except BountyBoardError as e:
        raise to_http_error(e)
    return {"project_id": project_id, "tiers": [t.to_dict() for t in tiers]}


@router.get("/{project_id}/settlement")
async def get_settlement(
    project_id: str,
    live: bool = Query(False, description="Recompute from current issues instead of the frozen roster"),
    viewer_id: Optional[str] = Depends(get_viewer_id),
    db: AsyncSession = Depends(get_db)
):
    """Payable roster; reporters without a wallet are listed under missing_wallets"""
    try:
        await ProjectService(db).get(project_id, viewer_id)
        roster = await RewardService(db).get_settlement(project_id, live=live)
    except BountyBoardError as e:
        raise to_http_error(e)
    return roster.to_dict()
