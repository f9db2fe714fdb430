"""
BountyBoard - Domain errors

Raised by the store-facing service layer and translated to HTTP errors by the
API routers. The reward engine itself never raises these.
"""


class BountyBoardError(Exception):
    """Base class for all BountyBoard errors."""


class ProjectNotFoundError(BountyBoardError):
    def __init__(self, project_id: str):
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id


class IssueNotFoundError(BountyBoardError):
    def __init__(self, issue_id: str):
        super().__init__(f"Issue not found: {issue_id}")
        self.issue_id = issue_id


class UserNotFoundError(BountyBoardError):
    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class SettlementLockedError(BountyBoardError):
    """An edit would change the payouts of an already settled project."""

    def __init__(self, project_id: str):
        super().__init__(
            f"Project {project_id} is settled; re-open it before editing issue severity or status"
        )
        self.project_id = project_id


class ProjectClosedError(BountyBoardError):
    def __init__(self, project_id: str):
        super().__init__(f"Project {project_id} is closed and no longer accepts reports")
        self.project_id = project_id


class PermissionDeniedError(BountyBoardError):
    """The acting user does not own the resource they are changing."""
