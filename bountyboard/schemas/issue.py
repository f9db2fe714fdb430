"""
BountyBoard - Issue Schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from bountyboard.core.rewards.types import IssueStatus, Severity


class IssueCreate(BaseModel):
    project_id: str
    title: str = Field(..., min_length=1, max_length=500)
    description: str = ""
    severity: Severity
    github_issue_url: Optional[str] = None


class IssueUpdate(BaseModel):
    """Project-owner triage: change status and/or severity"""
    status: Optional[IssueStatus] = None
    severity: Optional[Severity] = None

    @model_validator(mode="after")
    def at_least_one_field(self) -> "IssueUpdate":
        if self.status is None and self.severity is None:
            raise ValueError("Provide status and/or severity")
        return self


class IssueResponse(BaseModel):
    id: str
    project_id: str
    reporter_id: str
    title: str
    description: str
    severity: str
    status: str
    github_issue_url: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
