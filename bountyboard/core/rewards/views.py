"""
Reward views - the three read models built on the engine pipeline.

- dashboard_totals: one reporter, every project they reported into
- leaderboard: one project, every reporter, ranked by qualifying issues
- settlement: one project, payable roster with wallet addresses

Plus reward_breakdown, the per-tier explanation shown next to a project.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

from bountyboard.core.rewards.engine import (
    ZERO,
    compute_project_rewards,
    compute_reporter_rewards,
    compute_reward_per_issue,
    compute_severity_totals,
    round_amount,
    to_decimal,
)
from bountyboard.core.rewards.types import (
    CURRENCIES,
    PENDING_STATUSES,
    QUALIFYING_STATUSES,
    SEVERITIES,
    CurrencyTotals,
    DashboardTotals,
    LeaderboardEntry,
    RewardCurrency,
    SettlementEntry,
    SettlementRoster,
    TierBreakdown,
    enum_value,
)

logger = logging.getLogger(__name__)

UNKNOWN_USER = "Unknown User"
UNKNOWN_PROJECT = "Unknown Project"


def _currency_of(project: Any) -> str:
    return enum_value(getattr(project, "reward_currency", None)) or RewardCurrency.TON.value


def _totals(earned: Decimal, pending: Decimal) -> CurrencyTotals:
    return CurrencyTotals(
        earned=round_amount(earned),
        pending=round_amount(pending),
        total=round_amount(earned + pending),
    )


# ---------------------------------------------------------------------------
# View A - dashboard
# ---------------------------------------------------------------------------

def _pending_projection(
    reporter_id: str,
    distribution: Optional[Mapping[str, Any]],
    qualifying_totals: Mapping[str, int],
    reporter_issues: List[Any],
) -> Decimal:
    """What the reporter's open issues would earn if they qualified now.

    Each pending issue joins its tier's denominator, so a reporter who is
    first to find a tier still sees a projected share instead of zero.
    """
    pending_counts = compute_severity_totals(reporter_issues, statuses=PENDING_STATUSES)
    projected_totals = {
        s: qualifying_totals.get(s, 0) + pending_counts[s] for s in SEVERITIES
    }
    per_issue = compute_reward_per_issue(distribution, projected_totals)
    return compute_reporter_rewards(
        reporter_issues, per_issue, statuses=PENDING_STATUSES
    ).get(reporter_id, ZERO)


def dashboard_totals(
    reporter_id: str,
    reporter_issues: Iterable[Any],
    projects: Mapping[str, Any],
    project_issues: Mapping[str, Iterable[Any]],
    active_projects: int = 0,
) -> DashboardTotals:
    """Earned and pending bounty for one reporter across all their projects.

    ``project_issues`` maps project id to that project's full issue set; the
    reporter's share of each tier depends on everyone else's qualifying issues.
    Pools in different currencies are kept apart.
    """
    mine = [i for i in reporter_issues if i.reporter_id == reporter_id]
    by_project: Dict[str, List[Any]] = defaultdict(list)
    for issue in mine:
        by_project[issue.project_id].append(issue)

    earned_raw: Dict[str, Decimal] = {c: ZERO for c in CURRENCIES}
    pending_raw: Dict[str, Decimal] = {c: ZERO for c in CURRENCIES}

    for project_id, issues in by_project.items():
        project = projects.get(project_id)
        if project is None:
            logger.debug(f"Skipping issues of unknown project {project_id}")
            continue
        if not project.reward_distribution:
            continue

        everyone = [i for i in project_issues.get(project_id, issues) if i.project_id == project_id]
        qualifying_totals = compute_severity_totals(everyone)
        per_issue = compute_reward_per_issue(project.reward_distribution, qualifying_totals)
        earned = compute_reporter_rewards(everyone, per_issue).get(reporter_id, ZERO)
        pending = _pending_projection(
            reporter_id, project.reward_distribution, qualifying_totals, issues
        )

        currency = _currency_of(project)
        earned_raw[currency] = earned_raw.get(currency, ZERO) + earned
        pending_raw[currency] = pending_raw.get(currency, ZERO) + pending

    result = DashboardTotals(
        reporter_id=reporter_id,
        active_projects=active_projects,
        reported_issues=len(mine),
    )
    result.by_currency = {c: _totals(earned_raw[c], pending_raw[c]) for c in earned_raw}
    result.combined = _totals(sum(earned_raw.values(), ZERO), sum(pending_raw.values(), ZERO))
    return result


# ---------------------------------------------------------------------------
# Views B and C - per-project rankings
# ---------------------------------------------------------------------------

@dataclass
class _ReporterTally:
    total_issues: int = 0
    valid_issues: int = 0
    critical_issues: int = 0
    high_issues: int = 0
    medium_issues: int = 0
    low_issues: int = 0

    def add(self, issue: Any) -> None:
        self.total_issues += 1
        if enum_value(issue.status) not in QUALIFYING_STATUSES:
            return
        self.valid_issues += 1
        severity = enum_value(issue.severity)
        if severity in SEVERITIES:
            field_name = f"{severity}_issues"
            setattr(self, field_name, getattr(self, field_name) + 1)


def _tally(project: Any, issues: Iterable[Any]):
    project_issues = [i for i in issues if i.project_id == project.id]
    tallies: Dict[str, _ReporterTally] = defaultdict(_ReporterTally)
    for issue in project_issues:
        tallies[issue.reporter_id].add(issue)
    rewards = compute_project_rewards(project, project_issues)
    return tallies, rewards


def _profile_field(reporters: Mapping[str, Any], user_id: str, name: str, default=None):
    profile = reporters.get(user_id)
    if profile is None:
        return default
    value = getattr(profile, name, None)
    return value if value else default


def leaderboard(
    project: Any,
    issues: Iterable[Any],
    reporters: Optional[Mapping[str, Any]] = None,
) -> List[LeaderboardEntry]:
    """Rank a project's reporters by qualifying issues, then by raw issue count."""
    reporters = reporters or {}
    tallies, rewards = _tally(project, issues)
    currency = _currency_of(project)

    entries = []
    for user_id, tally in tallies.items():
        if tally.valid_issues == 0:
            continue
        entries.append(LeaderboardEntry(
            project_id=project.id,
            project_title=getattr(project, "title", "") or UNKNOWN_PROJECT,
            user_id=user_id,
            username=_profile_field(reporters, user_id, "username", UNKNOWN_USER),
            avatar_url=_profile_field(reporters, user_id, "avatar_url", ""),
            total_issues=tally.total_issues,
            valid_issues=tally.valid_issues,
            critical_issues=tally.critical_issues,
            high_issues=tally.high_issues,
            medium_issues=tally.medium_issues,
            low_issues=tally.low_issues,
            estimated_reward=round_amount(rewards.get(user_id, ZERO)),
            reward_currency=currency,
        ))

    entries.sort(key=lambda e: (-e.valid_issues, -e.total_issues, e.user_id))
    return entries


def settlement(
    project: Any,
    issues: Iterable[Any],
    reporters: Optional[Mapping[str, Any]] = None,
) -> SettlementRoster:
    """Payable roster: every reporter with a qualifying issue, wallet or not."""
    reporters = reporters or {}
    tallies, rewards = _tally(project, issues)

    entries = []
    for user_id, tally in tallies.items():
        if tally.valid_issues == 0:
            continue
        entries.append(SettlementEntry(
            user_id=user_id,
            username=_profile_field(reporters, user_id, "username", UNKNOWN_USER),
            avatar_url=_profile_field(reporters, user_id, "avatar_url", ""),
            wallet_address=_profile_field(reporters, user_id, "wallet_address", None),
            total_reward=round_amount(rewards.get(user_id, ZERO)),
            critical_issues=tally.critical_issues,
            high_issues=tally.high_issues,
            medium_issues=tally.medium_issues,
            low_issues=tally.low_issues,
        ))

    entries.sort(key=lambda e: (-e.total_reward, e.user_id))
    roster = SettlementRoster(
        project_id=project.id,
        reward_currency=_currency_of(project),
        entries=entries,
    )
    if roster.missing_wallets:
        logger.info(
            f"Settlement for project {project.id}: "
            f"{len(roster.missing_wallets)} reporter(s) without a wallet address"
        )
    return roster


def reward_breakdown(
    project: Any,
    issues: Iterable[Any],
    reporters: Optional[Mapping[str, Any]] = None,
) -> List[TierBreakdown]:
    """Per-tier pool, qualifying issue count and equal per-issue share."""
    reporters = reporters or {}
    distribution = project.reward_distribution or {}
    qualifying = [
        i for i in issues
        if i.project_id == project.id and enum_value(i.status) in QUALIFYING_STATUSES
    ]
    totals = compute_severity_totals(qualifying)
    per_issue = compute_reward_per_issue(distribution, totals)

    breakdown = []
    for severity in SEVERITIES:
        # Display only; reporter totals are rounded from unrounded shares
        individual = round_amount(per_issue[severity])
        breakdown.append(TierBreakdown(
            severity=severity,
            total_pool=to_decimal(distribution.get(severity)),
            issue_count=totals[severity],
            individual_reward=individual,
            issues=[
                {
                    "issue_id": i.id,
                    "reporter_id": i.reporter_id,
                    "reporter": _profile_field(reporters, i.reporter_id, "username", UNKNOWN_USER),
                    "avatar_url": _profile_field(reporters, i.reporter_id, "avatar_url", ""),
                    "reward": individual,
                }
                for i in qualifying if enum_value(i.severity) == severity
            ],
        ))
    return breakdown
