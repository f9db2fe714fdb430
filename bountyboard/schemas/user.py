"""
BountyBoard - User Schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    """Schema for registering a user from the auth layer's GitHub profile"""
    github_id: Optional[int] = None
    username: str = Field(..., min_length=1, max_length=255)
    avatar_url: str = ""
    email: str = ""
    organization: str = ""
    wallet_address: Optional[str] = None


class WalletUpdate(BaseModel):
    wallet_address: Optional[str] = Field(None, max_length=128, description="Payout address; null to unlink")

    @field_validator("wallet_address")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class UserResponse(BaseModel):
    id: str
    github_id: Optional[int]
    username: str
    avatar_url: str
    email: str
    organization: str
    wallet_address: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
