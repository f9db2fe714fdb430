"""
Reward Engine - severity-tier pool splitting.

A project's pool is split per severity tier. Each tier's pool is shared
equally between that tier's qualifying issues, and a reporter earns one share
per qualifying issue they reported. Everything here is pure: callers fetch a
snapshot from the store and pass in the materialized records.

Amounts are carried as ``Decimal`` at full precision and rounded exactly once,
on the final per-reporter figure (see ``round_amount``).
"""
import logging
from collections import defaultdict
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Mapping, Optional

from bountyboard.core.rewards.types import (
    QUALIFYING_STATUSES,
    SEVERITIES,
    enum_value,
)

logger = logging.getLogger(__name__)

ZERO = Decimal(0)


def to_decimal(amount: Any) -> Decimal:
    """Coerce a pool amount to Decimal; anything unusable counts as zero."""
    if amount is None or isinstance(amount, bool):
        return ZERO
    try:
        # str() keeps 0.1 as 0.1 instead of its binary float expansion
        result = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        logger.debug(f"Ignoring non-numeric reward amount: {amount!r}")
        return ZERO
    if not result.is_finite():
        logger.debug(f"Ignoring non-finite reward amount: {amount!r}")
        return ZERO
    return result


def round_amount(value: Any) -> int:
    """Round half-up to a whole currency unit."""
    return int(to_decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def compute_severity_totals(
    issues: Iterable[Any],
    statuses: frozenset = QUALIFYING_STATUSES,
) -> Dict[str, int]:
    """Count issues per severity tier.

    Only issues whose status is in ``statuses`` are counted (qualifying
    statuses by default). Unknown severities are ignored. All four tiers are
    always present in the result.
    """
    totals = {severity: 0 for severity in SEVERITIES}
    for issue in issues:
        if enum_value(issue.status) not in statuses:
            continue
        severity = enum_value(issue.severity)
        if severity in totals:
            totals[severity] += 1
    return totals


def compute_reward_per_issue(
    distribution: Optional[Mapping[str, Any]],
    totals: Mapping[str, int],
) -> Dict[str, Decimal]:
    """Share of each tier's pool earned by a single qualifying issue.

    A tier with no qualifying issue, or with no pool configured, yields zero.
    """
    distribution = distribution or {}
    per_issue = {}
    for severity in SEVERITIES:
        count = totals.get(severity, 0)
        pool = to_decimal(distribution.get(severity))
        per_issue[severity] = pool / count if count > 0 else ZERO
    return per_issue


def compute_reporter_rewards(
    issues: Iterable[Any],
    per_issue_reward: Mapping[str, Decimal],
    statuses: frozenset = QUALIFYING_STATUSES,
) -> Dict[str, Decimal]:
    """Sum per-issue rewards by reporter.

    Reporters with no issue in ``statuses`` do not appear. Amounts are
    unrounded.
    """
    rewards: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for issue in issues:
        if enum_value(issue.status) not in statuses:
            continue
        severity = enum_value(issue.severity)
        rewards[issue.reporter_id] += per_issue_reward.get(severity, ZERO)
    return dict(rewards)


def compute_project_rewards(project: Any, issues: Iterable[Any]) -> Dict[str, Decimal]:
    """Run the full tier-count -> per-issue -> per-reporter pipeline for one project."""
    project_issues = [i for i in issues if i.project_id == project.id]
    totals = compute_severity_totals(project_issues)
    per_issue = compute_reward_per_issue(project.reward_distribution, totals)
    logger.debug(f"Project {project.id} tier counts={totals} per-issue={per_issue}")
    return compute_reporter_rewards(project_issues, per_issue)
