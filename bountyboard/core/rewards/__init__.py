"""
BountyBoard - Reward Engine

Pure computation over issue/project snapshots. No I/O.
"""

from bountyboard.core.rewards.engine import (
    compute_project_rewards,
    compute_reporter_rewards,
    compute_reward_per_issue,
    compute_severity_totals,
    round_amount,
)
from bountyboard.core.rewards.types import (
    IssueRecord,
    IssueStatus,
    ProjectRewardConfig,
    ProjectStatus,
    ReporterProfile,
    RewardCurrency,
    Severity,
)
from bountyboard.core.rewards.views import (
    dashboard_totals,
    leaderboard,
    reward_breakdown,
    settlement,
)

__all__ = [
    "compute_project_rewards",
    "compute_reporter_rewards",
    "compute_reward_per_issue",
    "compute_severity_totals",
    "round_amount",
    "IssueRecord",
    "IssueStatus",
    "ProjectRewardConfig",
    "ProjectStatus",
    "ReporterProfile",
    "RewardCurrency",
    "Severity",
    "dashboard_totals",
    "leaderboard",
    "reward_breakdown",
    "settlement",
]
