from bountyboard.models.user import User
from bountyboard.models.project import Project
from bountyboard.models.issue import Issue
from bountyboard.models.settlement import SettlementSnapshot

__all__ = [
    "User",
    "Project",
    "Issue",
    "SettlementSnapshot",
]
