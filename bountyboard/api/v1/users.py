"""
BountyBoard - Users API Endpoints
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from bountyboard.api.deps import get_current_user_id, to_http_error
from bountyboard.core.access import AllowedOrganizations, is_organization_allowed
from bountyboard.core.cache import TTLCache
from bountyboard.core.errors import BountyBoardError
from bountyboard.db.database import get_db
from bountyboard.schemas.user import UserCreate, UserResponse, WalletUpdate
from bountyboard.services.user_service import UserService

router = APIRouter()

ORGANIZATIONS_CACHE_KEY = "organizations"


def _cache(request: Request) -> TTLCache:
    return request.app.state.listing_cache


def _allowlist(request: Request) -> AllowedOrganizations:
    return request.app.state.allowed_organizations


@router.post("", response_model=UserResponse)
async def create_user(user_data: UserCreate, request: Request, db: AsyncSession = Depends(get_db)):
    """Register a user from the auth layer's GitHub profile.

    Sign-in is refused for organizations outside the configured allowlist.
    """
    if not is_organization_allowed(user_data.organization, _allowlist(request)):
        raise HTTPException(status_code=403, detail="Your organization is not allowed to use this service")
    user = await UserService(db).create(user_data)
    # New user may bring a new organization
    _cache(request).invalidate(ORGANIZATIONS_CACHE_KEY)
    return UserResponse.model_validate(user)


@router.get("/organizations", response_model=List[str])
async def list_organizations(request: Request, db: AsyncSession = Depends(get_db)):
    """Organizations that can be granted access to organization-only projects"""
    cache = _cache(request)
    cached = cache.get(ORGANIZATIONS_CACHE_KEY)
    if cached is not None:
        return cached
    organizations = await UserService(db).list_organizations()
    cache.set(ORGANIZATIONS_CACHE_KEY, organizations)
    return organizations


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, db: AsyncSession = Depends(get_db)):
    try:
        user = await UserService(db).get(user_id)
    except BountyBoardError as e:
        raise to_http_error(e)
    return UserResponse.model_validate(user)


@router.patch("/{user_id}/wallet", response_model=UserResponse)
async def update_wallet(
    user_id: str,
    wallet: WalletUpdate,
    current_user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Link or unlink the payout wallet; users can only change their own"""
    if user_id != current_user_id:
        raise HTTPException(status_code=403, detail="Cannot change another user's wallet")
    try:
        user = await UserService(db).update_wallet(user_id, wallet.wallet_address)
    except BountyBoardError as e:
        raise to_http_error(e)
    return UserResponse.model_validate(user)
