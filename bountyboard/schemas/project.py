"""
BountyBoard - Project Schemas
"""
from datetime import datetime
from typing import Annotated, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator
import re

from bountyboard.config import settings
from bountyboard.core.rewards.engine import to_decimal
from bountyboard.core.rewards.types import ProjectStatus, RewardCurrency, SEVERITIES
from bountyboard.core.access import VISIBILITIES

GITHUB_REPO_PATTERN = re.compile(r"github\.com/([^/]+)/([^/]+)", re.IGNORECASE)

# Finite amount; inf and nan cannot be split into tier shares
Amount = Annotated[float, Field(allow_inf_nan=False)]


class ProjectCreate(BaseModel):
    """Schema for registering a mission.

    The tier pools must add up to the total pool exactly.
    """
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    repository_url: str = Field(..., description="GitHub repository URL")
    branch_name: str = "main"
    selected_files: List[str] = Field(default_factory=list)
    total_lines_of_code: int = Field(0, ge=0)
    total_reward_pool: float = Field(..., ge=0, allow_inf_nan=False)
    reward_distribution: Dict[str, Amount] = Field(..., description="Pool per severity tier")
    reward_currency: RewardCurrency = Field(
        default_factory=lambda: RewardCurrency(settings.DEFAULT_REWARD_CURRENCY)
    )
    visibility: str = "public"
    allowed_organizations: List[str] = Field(default_factory=list)

    @field_validator("repository_url")
    @classmethod
    def validate_repository_url(cls, v: str) -> str:
        v = v.strip()
        if not GITHUB_REPO_PATTERN.search(v):
            raise ValueError(f"Invalid GitHub repository URL: {v}")
        return v

    @field_validator("reward_distribution")
    @classmethod
    def validate_tiers(cls, v: Dict[str, float]) -> Dict[str, float]:
        unknown = set(v) - set(SEVERITIES)
        if unknown:
            raise ValueError(f"Unknown severity tiers: {', '.join(sorted(unknown))}")
        negative = [s for s, amount in v.items() if amount < 0]
        if negative:
            raise ValueError(f"Tier pools must be non-negative: {', '.join(sorted(negative))}")
        return {s: v.get(s, 0) for s in SEVERITIES}

    @field_validator("visibility")
    @classmethod
    def validate_visibility(cls, v: str) -> str:
        if v not in VISIBILITIES:
            raise ValueError(f"Visibility must be one of: {', '.join(VISIBILITIES)}")
        return v

    @model_validator(mode="after")
    def distribution_matches_pool(self) -> "ProjectCreate":
        # Compared as Decimal so 0.1 + 0.2 matches a pool of 0.3
        total = sum(to_decimal(v) for v in self.reward_distribution.values())
        pool = to_decimal(self.total_reward_pool)
        if total != pool:
            raise ValueError(
                f"The total reward distribution ({total:g}) does not match "
                f"the total reward pool ({pool:g})"
            )
        return self


class ProjectStatusUpdate(BaseModel):
    status: ProjectStatus


class ProjectVisibilityUpdate(BaseModel):
    visibility: str

    @field_validator("visibility")
    @classmethod
    def validate_visibility(cls, v: str) -> str:
        if v not in VISIBILITIES:
            raise ValueError(f"Visibility must be one of: {', '.join(VISIBILITIES)}")
        return v


class ProjectOrganizationsUpdate(BaseModel):
    allowed_organizations: List[str] = Field(default_factory=list)


class ProjectResponse(BaseModel):
    id: str
    title: str
    description: str
    owner_id: str
    repository_url: str
    branch_name: str
    selected_files: List[str]
    total_lines_of_code: int
    total_reward_pool: float
    reward_distribution: Dict[str, float]
    reward_currency: str
    status: str
    visibility: str
    allowed_organizations: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
