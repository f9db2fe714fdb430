"""
BountyBoard - Issue Service
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bountyboard.core.errors import (
    IssueNotFoundError,
    PermissionDeniedError,
    ProjectClosedError,
    SettlementLockedError,
)
from bountyboard.core.rewards.types import IssueStatus, ProjectStatus, enum_value
from bountyboard.models import Issue
from bountyboard.schemas.issue import IssueCreate, IssueUpdate
from bountyboard.services.project_service import ProjectService
from bountyboard.services.reward_service import RewardService
from bountyboard.services.user_service import UserService

logger = logging.getLogger(__name__)


class IssueService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.projects = ProjectService(db)
        self.rewards = RewardService(db)
        self.users = UserService(db)

    async def create(self, reporter_id: str, data: IssueCreate) -> Issue:
        await self.users.get(reporter_id)
        project = await self.projects.get(data.project_id, reporter_id)
        if project.status == ProjectStatus.CLOSED.value:
            raise ProjectClosedError(project.id)

        issue = Issue(
            project_id=project.id,
            reporter_id=reporter_id,
            title=data.title,
            description=data.description,
            severity=enum_value(data.severity),
            status=IssueStatus.OPEN.value,
            github_issue_url=data.github_issue_url,
        )
        self.db.add(issue)
        await self.db.flush()
        await self.db.refresh(issue)
        logger.info(f"Issue reported: {issue.id} ({issue.severity}) on project {project.id}")
        return issue

    async def get(self, issue_id: str) -> Issue:
        result = await self.db.execute(select(Issue).where(Issue.id == issue_id))
        issue = result.scalar_one_or_none()
        if not issue:
            raise IssueNotFoundError(issue_id)
        return issue

    async def list_issues(
        self,
        project_id: Optional[str] = None,
        reporter_id: Optional[str] = None,
        viewer_id: Optional[str] = None,
    ) -> List[Issue]:
        """Issues filtered by project and/or reporter, limited to projects the viewer can see"""
        query = select(Issue).order_by(Issue.created_at.desc())
        if project_id:
            query = query.where(Issue.project_id == project_id)
        if reporter_id:
            query = query.where(Issue.reporter_id == reporter_id)
        result = await self.db.execute(query)
        issues = list(result.scalars().all())

        visible = {p.id for p in await self.projects.list_visible(viewer_id)}
        return [i for i in issues if i.project_id in visible]

    async def update(self, issue_id: str, actor_id: str, data: IssueUpdate) -> Issue:
        """Owner triage of an issue's status and severity.

        Rejected once the project's payouts have been frozen.
        """
        issue = await self.get(issue_id)
        project = await self.projects.get(issue.project_id, actor_id)
        if project.owner_id != actor_id:
            raise PermissionDeniedError(f"Only the project owner can triage issue {issue_id}")
        if project.status == ProjectStatus.CLOSED.value and await self.rewards.get_snapshot(project.id):
            raise SettlementLockedError(project.id)

        if data.status is not None:
            issue.status = enum_value(data.status)
        if data.severity is not None:
            issue.severity = enum_value(data.severity)
        await self.db.flush()
        await self.db.refresh(issue)
        logger.info(f"Issue {issue.id} triaged: status={issue.status} severity={issue.severity}")
        return issue
