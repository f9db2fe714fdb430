"""
BountyBoard - Project (mission) Model
"""
from datetime import datetime
from typing import List, Optional
from sqlalchemy import String, Integer, Float, DateTime, Text, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from bountyboard.db.database import Base
import uuid


class Project(Base):
    """A registered repository with a severity-tiered reward pool"""
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text, default="")
    owner_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True)

    # Audit scope
    repository_url: Mapped[str] = mapped_column(String(2048))
    branch_name: Mapped[str] = mapped_column(String(255), default="main")
    selected_files: Mapped[List[str]] = mapped_column(JSON, default=list)
    total_lines_of_code: Mapped[int] = mapped_column(Integer, default=0)

    # Rewards
    total_reward_pool: Mapped[float] = mapped_column(Float, default=0)
    reward_distribution: Mapped[dict] = mapped_column(JSON, default=dict)  # {critical, high, medium, low} -> amount
    reward_currency: Mapped[str] = mapped_column(String(10), default="TON")  # TON, USDC

    # Lifecycle / access
    status: Mapped[str] = mapped_column(String(20), default="active")  # active, closed
    visibility: Mapped[str] = mapped_column(String(20), default="public")  # public, organization, private
    allowed_organizations: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # comma-separated

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    issues: Mapped[List["Issue"]] = relationship("Issue", back_populates="project", cascade="all, delete-orphan")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "owner_id": self.owner_id,
            "repository_url": self.repository_url,
            "branch_name": self.branch_name,
            "selected_files": self.selected_files or [],
            "total_lines_of_code": self.total_lines_of_code,
            "total_reward_pool": self.total_reward_pool,
            "reward_distribution": self.reward_distribution or {},
            "reward_currency": self.reward_currency,
            "status": self.status,
            "visibility": self.visibility,
            "allowed_organizations": self.allowed_organizations,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
