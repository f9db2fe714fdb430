"""
Tests for the HTTP layer.

Covers:
  - Routers expose the expected paths and are registered in the main app
  - Header-based identity dependencies
  - Domain errors map to HTTP status codes
  - Endpoint functions called directly against an in-memory session
"""

from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from bountyboard.api.deps import get_current_user_id, get_viewer_id, to_http_error
from bountyboard.api.v1 import dashboard, issues, projects, users
from bountyboard.core.access import AllowedOrganizations
from bountyboard.core.cache import TTLCache
from bountyboard.core.errors import (
    IssueNotFoundError,
    PermissionDeniedError,
    ProjectNotFoundError,
    SettlementLockedError,
)
from bountyboard.schemas.issue import IssueCreate, IssueUpdate
from bountyboard.schemas.project import ProjectCreate, ProjectStatusUpdate
from bountyboard.schemas.user import UserCreate


def _request(allowed=None):
    """Stand-in for the Request; endpoints only touch app.state."""
    state = SimpleNamespace(
        allowed_organizations=AllowedOrganizations(allowed or []),
        listing_cache=TTLCache(),
    )
    return SimpleNamespace(app=SimpleNamespace(state=state))


# ===================================================================
# Routing
# ===================================================================

class TestRouters:

    def test_project_routes(self):
        paths = {r.path for r in projects.router.routes}
        assert {
            "/{project_id}/leaderboard",
            "/{project_id}/settlement",
            "/{project_id}/rewards",
            "/{project_id}/status",
        } <= paths

    def test_dashboard_route(self):
        assert "/stats" in {r.path for r in dashboard.router.routes}

    def test_routers_registered_in_main_app(self):
        from bountyboard.main import app
        paths = app.openapi()["paths"]
        assert "/api/v1/dashboard/stats" in paths
        assert "/api/v1/projects/{project_id}/settlement" in paths
        assert "/api/v1/issues/{issue_id}" in paths
        assert "/api/v1/users/organizations" in paths
        assert "/api/health" in paths

    def test_app_state_configured_at_startup(self):
        from bountyboard.main import app
        assert isinstance(app.state.allowed_organizations, AllowedOrganizations)
        assert isinstance(app.state.listing_cache, TTLCache)


# ===================================================================
# Dependencies and error mapping
# ===================================================================

class TestDependencies:

    @pytest.mark.asyncio
    async def test_current_user_required(self):
        with pytest.raises(HTTPException) as exc:
            await get_current_user_id(None)
        assert exc.value.status_code == 401

    @pytest.mark.asyncio
    async def test_viewer_optional(self):
        assert await get_viewer_id(None) is None
        assert await get_viewer_id("u1") == "u1"

    @pytest.mark.parametrize("error,status", [
        (ProjectNotFoundError("p"), 404),
        (IssueNotFoundError("i"), 404),
        (PermissionDeniedError("nope"), 403),
        (SettlementLockedError("p"), 409),
    ])
    def test_error_mapping(self, error, status):
        assert to_http_error(error).status_code == status


# ===================================================================
# Endpoints
# ===================================================================

class TestEndpoints:

    @pytest.mark.asyncio
    async def test_user_outside_allowlist_refused(self, db_session):
        with pytest.raises(HTTPException) as exc:
            await users.create_user(
                UserCreate(username="mallory", organization="initech"),
                _request(["acme"]), db=db_session,
            )
        assert exc.value.status_code == 403

    @pytest.mark.asyncio
    async def test_organizations_listing_is_cached(self, db_session):
        request = _request()
        await users.create_user(UserCreate(username="a", organization="acme"), request, db=db_session)
        assert await users.list_organizations(request, db=db_session) == ["acme"]

        # Inserted behind the cache's back: still served from cache
        from bountyboard.services.user_service import UserService
        await UserService(db_session).create(UserCreate(username="b", organization="globex"))
        assert await users.list_organizations(request, db=db_session) == ["acme"]

        # Registering through the API invalidates it
        await users.create_user(UserCreate(username="c", organization="initech"), request, db=db_session)
        assert await users.list_organizations(request, db=db_session) == ["acme", "globex", "initech"]

    @pytest.mark.asyncio
    async def test_missing_project_is_404(self, db_session):
        with pytest.raises(HTTPException) as exc:
            await projects.get_settlement("missing", live=False, viewer_id=None, db=db_session)
        assert exc.value.status_code == 404

    @pytest.mark.asyncio
    async def test_full_flow(self, db_session):
        request = _request()
        owner = await users.create_user(UserCreate(username="owner"), request, db=db_session)
        hunter = await users.create_user(UserCreate(username="hunter"), request, db=db_session)

        project = await projects.create_project(
            ProjectCreate(
                title="Vault",
                repository_url="https://github.com/acme/vault",
                total_reward_pool=1000,
                reward_distribution={"critical": 1000},
                reward_currency="USDC",
            ),
            current_user_id=owner.id, db=db_session,
        )
        issue = await issues.create_issue(
            IssueCreate(project_id=project.id, title="Reentrancy", severity="critical"),
            current_user_id=hunter.id, db=db_session,
        )
        await issues.update_issue(
            issue.id, IssueUpdate(status="solved"), current_user_id=owner.id, db=db_session,
        )

        board = await projects.get_leaderboard(project.id, viewer_id=None, db=db_session)
        assert board["entries"][0]["estimated_reward"] == 1000
        assert board["entries"][0]["reward_currency"] == "USDC"

        stats = await dashboard.get_dashboard_stats(current_user_id=hunter.id, db=db_session)
        assert stats["by_currency"]["USDC"]["earned"] == 1000
        assert stats["by_currency"]["TON"]["earned"] == 0

        await projects.update_project_status(
            project.id, ProjectStatusUpdate(status="closed"), current_user_id=owner.id, db=db_session,
        )
        roster = await projects.get_settlement(project.id, live=False, viewer_id=None, db=db_session)
        assert roster["frozen"] is True
        assert roster["missing_wallets"] == [hunter.id]

        with pytest.raises(HTTPException) as exc:
            await issues.update_issue(
                issue.id, IssueUpdate(severity="low"), current_user_id=owner.id, db=db_session,
            )
        assert exc.value.status_code == 409

    @pytest.mark.asyncio
    async def test_health(self):
        from bountyboard.main import health_check
        result = await health_check()
        assert result["status"] == "healthy"
