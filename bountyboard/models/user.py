"""
BountyBoard - User Model
"""
from datetime import datetime
from typing import Optional
from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from bountyboard.db.database import Base
import uuid


class User(Base):
    """Hunter or organizer, mirrored from the GitHub identity"""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    github_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, unique=True)
    username: Mapped[str] = mapped_column(String(255))
    avatar_url: Mapped[str] = mapped_column(String(2048), default="")
    email: Mapped[str] = mapped_column(String(255), default="")
    organization: Mapped[str] = mapped_column(String(255), default="", index=True)

    # Payout address; may be missing until the hunter links a wallet
    wallet_address: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "github_id": self.github_id,
            "username": self.username,
            "avatar_url": self.avatar_url,
            "email": self.email,
            "organization": self.organization,
            "wallet_address": self.wallet_address,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
