"""
BountyBoard - Dashboard API Endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bountyboard.api.deps import get_current_user_id
from bountyboard.db.database import get_db
from bountyboard.services.reward_service import RewardService

router = APIRouter()


@router.get("/stats")
async def get_dashboard_stats(
    current_user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Active projects, reported issues and earned/pending bounty per currency"""
    totals = await RewardService(db).get_dashboard_stats(current_user_id)
    return totals.to_dict()
