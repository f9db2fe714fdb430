"""
BountyBoard - Project Service

Mission CRUD plus the close/re-open lifecycle. Closing freezes the settlement
roster; re-opening discards it so payouts can be recomputed.
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bountyboard.core.access import can_view_project, organizations_to_string
from bountyboard.core.errors import PermissionDeniedError, ProjectNotFoundError
from bountyboard.core.rewards.types import ProjectStatus, enum_value
from bountyboard.models import Project
from bountyboard.schemas.project import ProjectCreate
from bountyboard.services.reward_service import RewardService
from bountyboard.services.user_service import UserService

logger = logging.getLogger(__name__)


class ProjectService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserService(db)
        self.rewards = RewardService(db)

    async def create(self, owner_id: str, data: ProjectCreate) -> Project:
        await self.users.get(owner_id)

        fields = data.model_dump(exclude={"allowed_organizations", "reward_currency"})
        project = Project(
            **fields,
            owner_id=owner_id,
            reward_currency=enum_value(data.reward_currency),
            allowed_organizations=organizations_to_string(data.allowed_organizations),
            status=ProjectStatus.ACTIVE.value,
        )
        self.db.add(project)
        await self.db.flush()
        await self.db.refresh(project)
        logger.info(
            f"Project created: {project.title} ({project.id}) "
            f"pool={project.total_reward_pool:g} {project.reward_currency}"
        )
        return project

    async def list_visible(self, viewer_id: Optional[str] = None) -> List[Project]:
        viewer = await self.users.find(viewer_id)
        organization = viewer.organization if viewer else None
        result = await self.db.execute(select(Project).order_by(Project.created_at.desc()))
        return [p for p in result.scalars().all() if can_view_project(p, viewer_id, organization)]

    async def get(self, project_id: str, viewer_id: Optional[str] = None) -> Project:
        """Fetch a project the viewer may see; hidden projects read as missing."""
        result = await self.db.execute(select(Project).where(Project.id == project_id))
        project = result.scalar_one_or_none()
        if not project:
            raise ProjectNotFoundError(project_id)
        viewer = await self.users.find(viewer_id)
        organization = viewer.organization if viewer else None
        if not can_view_project(project, viewer_id, organization):
            raise ProjectNotFoundError(project_id)
        return project

    async def _owned(self, project_id: str, actor_id: str) -> Project:
        project = await self.get(project_id, actor_id)
        if project.owner_id != actor_id:
            raise PermissionDeniedError(f"Only the project owner can change project {project_id}")
        return project

    async def update_status(self, project_id: str, actor_id: str, status) -> Project:
        project = await self._owned(project_id, actor_id)
        status = enum_value(status)
        previous = project.status
        project.status = status
        await self.db.flush()

        if status == ProjectStatus.CLOSED.value and previous != status:
            await self.rewards.snapshot_settlement(project_id)
        elif status == ProjectStatus.ACTIVE.value and previous == ProjectStatus.CLOSED.value:
            await self.rewards.discard_settlement(project_id)
            logger.info(f"Project {project_id} re-opened; settlement snapshot discarded")

        await self.db.refresh(project)
        return project

    async def update_visibility(self, project_id: str, actor_id: str, visibility: str) -> Project:
        project = await self._owned(project_id, actor_id)
        project.visibility = visibility
        await self.db.flush()
        await self.db.refresh(project)
        return project

    async def update_organizations(self, project_id: str, actor_id: str, organizations: List[str]) -> Project:
        project = await self._owned(project_id, actor_id)
        project.allowed_organizations = organizations_to_string(organizations)
        await self.db.flush()
        await self.db.refresh(project)
        return project
