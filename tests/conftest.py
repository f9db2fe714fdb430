"""
BountyBoard - Shared test fixtures

Builders for in-memory reward-engine records, plus an isolated in-memory
SQLite session for the store-backed service and API tests.
"""

import sys
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Ensure the project root is on sys.path so `bountyboard.*` imports resolve
PROJECT_ROOT = str(Path(__file__).resolve().parent.parent)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from bountyboard.core.rewards.types import IssueRecord, ProjectRewardConfig, ReporterProfile


# ---------------------------------------------------------------------------
# Engine record builders
# ---------------------------------------------------------------------------

@pytest.fixture
def make_issue():
    """Factory fixture that creates IssueRecord instances with sequential ids."""
    counter = {"n": 0}

    def _make(reporter_id: str, severity: str, status: str = "solved", project_id: str = "p1"):
        counter["n"] += 1
        return IssueRecord(
            id=f"issue-{counter['n']}",
            project_id=project_id,
            reporter_id=reporter_id,
            severity=severity,
            status=status,
        )

    return _make


@pytest.fixture
def tiered_project():
    """The canonical 4000/3000/2000/1000 TON project."""
    return ProjectRewardConfig(
        id="p1",
        title="Vault contracts",
        reward_distribution={"critical": 4000, "high": 3000, "medium": 2000, "low": 1000},
        reward_currency="TON",
        total_reward_pool=10000,
    )


@pytest.fixture
def scenario_issues(make_issue):
    """2 critical (A, B) solved, 1 high (A) acknowledged, 1 medium (C) invalid."""
    return [
        make_issue("user-a", "critical", "solved"),
        make_issue("user-b", "critical", "solved"),
        make_issue("user-a", "high", "acknowledged"),
        make_issue("user-c", "medium", "invalid"),
    ]


@pytest.fixture
def reporters():
    return {
        "user-a": ReporterProfile(id="user-a", username="alice", avatar_url="https://a.example/a.png",
                                  wallet_address="EQAlice"),
        "user-b": ReporterProfile(id="user-b", username="bob", avatar_url="", wallet_address=None),
        "user-c": ReporterProfile(id="user-c", username="carol", wallet_address="EQCarol"),
    }


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def db_session():
    """Fresh in-memory database per test."""
    from bountyboard.db.database import Base
    import bountyboard.models  # noqa: F401

    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()
