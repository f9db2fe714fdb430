"""
BountyBoard - Reward Service

Fetches a project/issue/user snapshot from the store and hands it to the
reward engine. The reads are not wrapped in a transaction: a severity or
status edit landing between them shows up on the next refresh.
"""
import logging
from datetime import datetime
from typing import Dict, Iterable, List

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bountyboard.core.errors import ProjectNotFoundError
from bountyboard.core.rewards import dashboard_totals, leaderboard, reward_breakdown, settlement
from bountyboard.core.rewards.types import (
    DashboardTotals,
    LeaderboardEntry,
    ProjectStatus,
    SettlementEntry,
    SettlementRoster,
    TierBreakdown,
)
from bountyboard.models import Issue, Project, SettlementSnapshot, User

logger = logging.getLogger(__name__)


class RewardService:
    """Store-backed entry points for the dashboard, leaderboard and settlement views"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_project(self, project_id: str) -> Project:
        result = await self.db.execute(select(Project).where(Project.id == project_id))
        project = result.scalar_one_or_none()
        if not project:
            raise ProjectNotFoundError(project_id)
        return project

    async def _project_issues(self, project_id: str) -> List[Issue]:
        result = await self.db.execute(select(Issue).where(Issue.project_id == project_id))
        return list(result.scalars().all())

    async def _reporters(self, user_ids: Iterable[str]) -> Dict[str, User]:
        ids = set(user_ids)
        if not ids:
            return {}
        result = await self.db.execute(select(User).where(User.id.in_(ids)))
        return {user.id: user for user in result.scalars().all()}

    async def get_dashboard_stats(self, user_id: str) -> DashboardTotals:
        """Earned/pending bounty for one hunter across every project they reported into."""
        result = await self.db.execute(select(Issue).where(Issue.reporter_id == user_id))
        reporter_issues = list(result.scalars().all())

        project_ids = {i.project_id for i in reporter_issues}
        projects: Dict[str, Project] = {}
        project_issues: Dict[str, List[Issue]] = {pid: [] for pid in project_ids}
        if project_ids:
            result = await self.db.execute(select(Project).where(Project.id.in_(project_ids)))
            projects = {p.id: p for p in result.scalars().all()}
            result = await self.db.execute(select(Issue).where(Issue.project_id.in_(project_ids)))
            for issue in result.scalars().all():
                project_issues[issue.project_id].append(issue)

        active_result = await self.db.execute(
            select(func.count()).select_from(Project).where(
                Project.owner_id == user_id,
                Project.status == ProjectStatus.ACTIVE.value,
            )
        )
        active_projects = active_result.scalar() or 0

        return dashboard_totals(
            user_id,
            reporter_issues,
            projects,
            project_issues,
            active_projects=active_projects,
        )

    async def get_leaderboard(self, project_id: str) -> List[LeaderboardEntry]:
        project = await self._get_project(project_id)
        issues = await self._project_issues(project_id)
        reporters = await self._reporters(i.reporter_id for i in issues)
        return leaderboard(project, issues, reporters)

    async def get_reward_breakdown(self, project_id: str) -> List[TierBreakdown]:
        project = await self._get_project(project_id)
        issues = await self._project_issues(project_id)
        reporters = await self._reporters(i.reporter_id for i in issues)
        return reward_breakdown(project, issues, reporters)

    async def compute_settlement(self, project_id: str) -> SettlementRoster:
        """Live roster from the current issue state"""
        project = await self._get_project(project_id)
        issues = await self._project_issues(project_id)
        reporters = await self._reporters(i.reporter_id for i in issues)
        return settlement(project, issues, reporters)

    async def get_snapshot(self, project_id: str):
        result = await self.db.execute(
            select(SettlementSnapshot).where(SettlementSnapshot.project_id == project_id)
        )
        return result.scalar_one_or_none()

    async def get_settlement(self, project_id: str, live: bool = False) -> SettlementRoster:
        """Payable roster for a project.

        A closed project returns the roster frozen when it was closed unless
        ``live`` is set.
        """
        project = await self._get_project(project_id)
        if not live and project.status == ProjectStatus.CLOSED.value:
            snapshot = await self.get_snapshot(project_id)
            if snapshot:
                return SettlementRoster(
                    project_id=project_id,
                    reward_currency=snapshot.reward_currency,
                    entries=[SettlementEntry.from_dict(e) for e in snapshot.entries or []],
                    frozen=True,
                    frozen_at=snapshot.created_at.isoformat() if snapshot.created_at else None,
                )
        return await self.compute_settlement(project_id)

    async def snapshot_settlement(self, project_id: str) -> SettlementSnapshot:
        """Freeze the current roster, replacing any earlier snapshot."""
        roster = await self.compute_settlement(project_id)
        await self.discard_settlement(project_id)

        snapshot = SettlementSnapshot(
            project_id=project_id,
            reward_currency=roster.reward_currency,
            entries=[e.to_dict() for e in roster.entries],
            total_distributed=roster.total_distributed,
            created_at=datetime.utcnow(),
        )
        self.db.add(snapshot)
        await self.db.flush()
        logger.info(
            f"Settlement frozen for project {project_id}: "
            f"{len(roster.entries)} reporter(s), {roster.total_distributed} {roster.reward_currency}"
        )
        return snapshot

    async def discard_settlement(self, project_id: str) -> None:
        await self.db.execute(
            delete(SettlementSnapshot).where(SettlementSnapshot.project_id == project_id)
        )
