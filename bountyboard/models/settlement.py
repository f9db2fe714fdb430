"""
BountyBoard - Settlement Snapshot Model

Frozen payout roster written when a project is closed. Later issue edits do
not change it; re-opening the project discards it.
"""
from datetime import datetime
from typing import List
from sqlalchemy import String, Integer, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from bountyboard.db.database import Base
import uuid


class SettlementSnapshot(Base):
    __tablename__ = "settlement_snapshots"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    project_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("projects.id", ondelete="CASCADE"), unique=True, index=True
    )
    reward_currency: Mapped[str] = mapped_column(String(10), default="TON")
    entries: Mapped[List[dict]] = mapped_column(JSON, default=list)
    total_distributed: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "reward_currency": self.reward_currency,
            "entries": self.entries or [],
            "total_distributed": self.total_distributed,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
