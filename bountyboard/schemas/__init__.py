from bountyboard.schemas.user import (
    UserCreate,
    UserResponse,
    WalletUpdate
)
from bountyboard.schemas.project import (
    ProjectCreate,
    ProjectResponse,
    ProjectStatusUpdate,
    ProjectVisibilityUpdate,
    ProjectOrganizationsUpdate
)
from bountyboard.schemas.issue import (
    IssueCreate,
    IssueUpdate,
    IssueResponse
)

__all__ = [
    "UserCreate", "UserResponse", "WalletUpdate",
    "ProjectCreate", "ProjectResponse", "ProjectStatusUpdate", "ProjectVisibilityUpdate", "ProjectOrganizationsUpdate",
    "IssueCreate", "IssueUpdate", "IssueResponse",
]
