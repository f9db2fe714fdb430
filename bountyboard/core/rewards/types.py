"""
Reward engine value types.

Severity, status and currency are plain strings at the engine boundary so that
ORM rows, pydantic models and the dataclasses below can all be fed in as-is.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class IssueStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    SOLVED = "solved"
    ACKNOWLEDGED = "acknowledged"
    INVALID = "invalid"
    DUPLICATED = "duplicated"


class RewardCurrency(str, Enum):
    TON = "TON"
    USDC = "USDC"


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"


# Highest tier first; used for every per-severity iteration
SEVERITIES = tuple(s.value for s in Severity)
CURRENCIES = tuple(c.value for c in RewardCurrency)

QUALIFYING_STATUSES = frozenset({IssueStatus.SOLVED.value, IssueStatus.ACKNOWLEDGED.value})
PENDING_STATUSES = frozenset({IssueStatus.OPEN.value, IssueStatus.IN_PROGRESS.value})
EXCLUDED_STATUSES = frozenset({IssueStatus.INVALID.value, IssueStatus.DUPLICATED.value})


def enum_value(value) -> str:
    """Return the raw string for an Enum member or pass a string through."""
    return value.value if isinstance(value, Enum) else value


@dataclass(frozen=True)
class IssueRecord:
    """The issue fields the engine reads."""
    id: str
    project_id: str
    reporter_id: str
    severity: str
    status: str


@dataclass(frozen=True)
class ProjectRewardConfig:
    """The project fields the engine reads."""
    id: str
    reward_distribution: Dict[str, float]
    reward_currency: str = RewardCurrency.TON.value
    title: str = ""
    total_reward_pool: float = 0
    status: str = ProjectStatus.ACTIVE.value


@dataclass(frozen=True)
class ReporterProfile:
    id: str
    username: str = ""
    avatar_url: str = ""
    wallet_address: Optional[str] = None


@dataclass
class CurrencyTotals:
    earned: int = 0
    pending: int = 0
    total: int = 0

    def to_dict(self) -> dict:
        return {"earned": self.earned, "pending": self.pending, "total": self.total}


@dataclass
class DashboardTotals:
    """Cross-project bounty figures for a single reporter."""
    reporter_id: str
    active_projects: int = 0
    reported_issues: int = 0
    combined: CurrencyTotals = field(default_factory=CurrencyTotals)
    by_currency: Dict[str, CurrencyTotals] = field(
        default_factory=lambda: {c: CurrencyTotals() for c in CURRENCIES}
    )

    def to_dict(self) -> dict:
        return {
            "reporter_id": self.reporter_id,
            "active_projects": self.active_projects,
            "reported_issues": self.reported_issues,
            "earned": self.combined.earned,
            "pending": self.combined.pending,
            "total": self.combined.total,
            "by_currency": {c: t.to_dict() for c, t in self.by_currency.items()},
        }


@dataclass
class LeaderboardEntry:
    project_id: str
    project_title: str
    user_id: str
    username: str
    avatar_url: str
    total_issues: int = 0
    valid_issues: int = 0
    critical_issues: int = 0
    high_issues: int = 0
    medium_issues: int = 0
    low_issues: int = 0
    estimated_reward: int = 0
    reward_currency: str = RewardCurrency.TON.value

    def to_dict(self) -> dict:
        return {
            "project_id": self.project_id,
            "project_title": self.project_title,
            "user_id": self.user_id,
            "username": self.username,
            "avatar_url": self.avatar_url,
            "total_issues": self.total_issues,
            "valid_issues": self.valid_issues,
            "critical_issues": self.critical_issues,
            "high_issues": self.high_issues,
            "medium_issues": self.medium_issues,
            "low_issues": self.low_issues,
            "estimated_reward": self.estimated_reward,
            "reward_currency": self.reward_currency,
        }


@dataclass
class SettlementEntry:
    user_id: str
    username: str
    avatar_url: str
    wallet_address: Optional[str]
    total_reward: int = 0
    critical_issues: int = 0
    high_issues: int = 0
    medium_issues: int = 0
    low_issues: int = 0

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "avatar_url": self.avatar_url,
            "wallet_address": self.wallet_address,
            "total_reward": self.total_reward,
            "critical_issues": self.critical_issues,
            "high_issues": self.high_issues,
            "medium_issues": self.medium_issues,
            "low_issues": self.low_issues,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SettlementEntry":
        return cls(
            user_id=data["user_id"],
            username=data.get("username", ""),
            avatar_url=data.get("avatar_url", ""),
            wallet_address=data.get("wallet_address"),
            total_reward=data.get("total_reward", 0),
            critical_issues=data.get("critical_issues", 0),
            high_issues=data.get("high_issues", 0),
            medium_issues=data.get("medium_issues", 0),
            low_issues=data.get("low_issues", 0),
        )


@dataclass
class SettlementRoster:
    """Payable roster for one project."""
    project_id: str
    reward_currency: str
    entries: List[SettlementEntry] = field(default_factory=list)
    frozen: bool = False
    frozen_at: Optional[str] = None

    @property
    def total_distributed(self) -> int:
        return sum(e.total_reward for e in self.entries)

    @property
    def missing_wallets(self) -> List[str]:
        return [e.user_id for e in self.entries if not e.wallet_address]

    def to_dict(self) -> dict:
        return {
            "project_id": self.project_id,
            "reward_currency": self.reward_currency,
            "frozen": self.frozen,
            "frozen_at": self.frozen_at,
            "total_distributed": self.total_distributed,
            "missing_wallets": self.missing_wallets,
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass
class TierBreakdown:
    severity: str
    total_pool: Decimal
    issue_count: int
    individual_reward: int
    issues: List[Dict[str, object]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "severity": self.severity,
            "total_pool": float(self.total_pool),
            "issue_count": self.issue_count,
            "individual_reward": self.individual_reward,
            "issues": list(self.issues),
        }
