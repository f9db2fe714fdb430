"""Tests for the dashboard, leaderboard, settlement and reward-breakdown
views built on the reward engine.
"""

from bountyboard.core.rewards.types import ProjectRewardConfig, ReporterProfile
from bountyboard.core.rewards.views import (
    dashboard_totals,
    leaderboard,
    reward_breakdown,
    settlement,
)


def _group(issues):
    grouped = {}
    for issue in issues:
        grouped.setdefault(issue.project_id, []).append(issue)
    return grouped


# ===========================================================================
# Dashboard
# ===========================================================================

class TestDashboardTotals:

    def _projects(self):
        return {
            "ton": ProjectRewardConfig(
                id="ton", reward_currency="TON",
                reward_distribution={"critical": 1000, "high": 0, "medium": 0, "low": 100},
            ),
            "usdc": ProjectRewardConfig(
                id="usdc", reward_currency="USDC",
                reward_distribution={"critical": 0, "high": 600, "medium": 0, "low": 0},
            ),
        }

    def test_currencies_are_kept_apart(self, make_issue):
        mine = [
            make_issue("a", "critical", "solved", project_id="ton"),
            make_issue("a", "high", "acknowledged", project_id="usdc"),
            make_issue("a", "low", "open", project_id="ton"),
        ]
        others = [make_issue("b", "high", "solved", project_id="usdc")]

        result = dashboard_totals("a", mine, self._projects(), _group(mine + others))

        assert result.by_currency["TON"].to_dict() == {"earned": 1000, "pending": 100, "total": 1100}
        assert result.by_currency["USDC"].to_dict() == {"earned": 300, "pending": 0, "total": 300}
        assert (result.combined.earned, result.combined.pending, result.combined.total) == (1300, 100, 1400)
        assert result.reported_issues == 3

    def test_share_depends_on_other_reporters(self, make_issue):
        mine = [make_issue("a", "critical", "solved", project_id="ton")]
        others = [make_issue(r, "critical", "solved", project_id="ton") for r in ("b", "c", "d")]

        result = dashboard_totals("a", mine, self._projects(), _group(mine + others))

        assert result.by_currency["TON"].earned == 250

    def test_pending_is_projected_as_if_qualifying(self, make_issue):
        mine = [make_issue("a", "low", "in_progress", project_id="ton")]
        others = [make_issue("b", "low", "solved", project_id="ton")]

        result = dashboard_totals("a", mine, self._projects(), _group(mine + others))

        # b's qualifying issue plus a's pending one share the 100 low pool
        assert result.by_currency["TON"].pending == 50
        assert result.by_currency["TON"].earned == 0

    def test_excluded_issues_are_neither_earned_nor_pending(self, make_issue):
        mine = [
            make_issue("a", "critical", "invalid", project_id="ton"),
            make_issue("a", "critical", "duplicated", project_id="ton"),
        ]
        result = dashboard_totals("a", mine, self._projects(), _group(mine))

        assert result.combined.total == 0
        assert result.reported_issues == 2

    def test_unknown_project_is_skipped(self, make_issue):
        mine = [make_issue("a", "critical", "solved", project_id="gone")]
        result = dashboard_totals("a", mine, self._projects(), _group(mine))
        assert result.combined.total == 0

    def test_rounds_once_across_projects(self, make_issue):
        projects = {
            "p1": ProjectRewardConfig(id="p1", reward_distribution={"critical": 1000}),
            "p2": ProjectRewardConfig(id="p2", reward_distribution={"critical": 1000}),
        }
        mine = [
            make_issue("a", "critical", project_id="p1"),
            make_issue("a", "critical", project_id="p2"),
        ]
        others = [
            make_issue(r, "critical", project_id=p) for p in ("p1", "p2") for r in ("b", "c")
        ]
        result = dashboard_totals("a", mine, projects, _group(mine + others))
        # 333.33 + 333.33 -> 667, not 333 + 333
        assert result.by_currency["TON"].earned == 667

    def test_active_projects_is_passed_through(self):
        result = dashboard_totals("a", [], {}, {}, active_projects=2)
        data = result.to_dict()
        assert data["active_projects"] == 2
        assert data["by_currency"]["TON"] == {"earned": 0, "pending": 0, "total": 0}
        assert data["by_currency"]["USDC"] == {"earned": 0, "pending": 0, "total": 0}


# ===========================================================================
# Leaderboard
# ===========================================================================

class TestLeaderboard:

    def test_scenario_order_and_rewards(self, tiered_project, scenario_issues, reporters):
        entries = leaderboard(tiered_project, scenario_issues, reporters)

        assert [e.user_id for e in entries] == ["user-a", "user-b"]
        alice, bob = entries
        assert alice.valid_issues == 2
        assert alice.critical_issues == 1 and alice.high_issues == 1
        assert alice.estimated_reward == 5000
        assert alice.username == "alice"
        assert alice.reward_currency == "TON"
        assert alice.project_title == "Vault contracts"
        assert bob.estimated_reward == 2000

    def test_tie_break_on_raw_issue_count(self, tiered_project, make_issue):
        issues = [
            make_issue("a", "high"),
            make_issue("b", "high"),
            make_issue("b", "low", "open"),
        ]
        entries = leaderboard(tiered_project, issues)
        assert [e.user_id for e in entries] == ["b", "a"]
        assert entries[0].total_issues == 2

    def test_reporters_without_qualifying_issues_are_hidden(self, tiered_project, make_issue):
        issues = [make_issue("a", "high"), make_issue("b", "critical", "open")]
        assert [e.user_id for e in leaderboard(tiered_project, issues)] == ["a"]

    def test_missing_profile_falls_back(self, tiered_project, make_issue):
        entry = leaderboard(tiered_project, [make_issue("ghost", "low")])[0]
        assert entry.username == "Unknown User"
        assert entry.avatar_url == ""

    def test_non_finite_pool_degrades_to_zero(self, make_issue):
        project = ProjectRewardConfig(id="p1", reward_distribution={"critical": float("inf")})
        issues = [make_issue("a", "critical")]
        assert leaderboard(project, issues)[0].estimated_reward == 0
        assert settlement(project, issues).entries[0].total_reward == 0
        tiers = {t.severity: t for t in reward_breakdown(project, issues)}
        assert tiers["critical"].individual_reward == 0
        assert tiers["critical"].to_dict()["total_pool"] == 0


# ===========================================================================
# Settlement
# ===========================================================================

class TestSettlement:

    def test_reporter_without_wallet_is_included(self, tiered_project, scenario_issues, reporters):
        roster = settlement(tiered_project, scenario_issues, reporters)

        by_user = {e.user_id: e for e in roster.entries}
        assert by_user["user-b"].wallet_address is None
        assert by_user["user-b"].total_reward == 2000
        assert roster.missing_wallets == ["user-b"]

    def test_sorted_by_reward_descending(self, tiered_project, scenario_issues, reporters):
        roster = settlement(tiered_project, scenario_issues, reporters)
        assert [e.total_reward for e in roster.entries] == [5000, 2000]
        assert roster.total_distributed == 7000

    def test_unfunded_tier_reporter_listed_with_zero(self, make_issue):
        project = ProjectRewardConfig(id="p1", reward_distribution={"critical": 500, "low": 0})
        roster = settlement(project, [make_issue("a", "critical"), make_issue("b", "low")])

        assert [(e.user_id, e.total_reward) for e in roster.entries] == [("a", 500), ("b", 0)]

    def test_excluded_reporter_is_not_listed(self, tiered_project, scenario_issues, reporters):
        roster = settlement(tiered_project, scenario_issues, reporters)
        assert "user-c" not in {e.user_id for e in roster.entries}

    def test_blank_wallet_reads_as_missing(self, tiered_project, make_issue):
        profiles = {"a": ReporterProfile(id="a", username="a", wallet_address="")}
        roster = settlement(tiered_project, [make_issue("a", "low")], profiles)
        assert roster.entries[0].wallet_address is None

    def test_to_dict_shape(self, tiered_project, scenario_issues, reporters):
        data = settlement(tiered_project, scenario_issues, reporters).to_dict()
        assert data["reward_currency"] == "TON"
        assert data["frozen"] is False
        assert data["entries"][0]["wallet_address"] == "EQAlice"


# ===========================================================================
# Reward breakdown
# ===========================================================================

class TestRewardBreakdown:

    def test_scenario_tiers(self, tiered_project, scenario_issues, reporters):
        tiers = {t.severity: t for t in reward_breakdown(tiered_project, scenario_issues, reporters)}

        assert list(tiers) == ["critical", "high", "medium", "low"]
        assert tiers["critical"].issue_count == 2
        assert tiers["critical"].individual_reward == 2000
        assert {i["reporter"] for i in tiers["critical"].issues} == {"alice", "bob"}
        assert tiers["medium"].issue_count == 0
        assert tiers["medium"].individual_reward == 0
        assert tiers["low"].to_dict()["total_pool"] == 1000.0
