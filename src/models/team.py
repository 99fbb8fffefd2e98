"""teams table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, SmallInteger, String, func
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, new_id


class TeamRecord(Base):
    """Team catalog row with star and skill ratings."""

    __tablename__ = "teams"
    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_teams_rating"),
        CheckConstraint(
            "overall_rating >= 0 AND overall_rating <= 99",
            name="ck_teams_overall_rating",
        ),
        CheckConstraint(
            "attack_rating >= 0 AND attack_rating <= 99",
            name="ck_teams_attack_rating",
        ),
        CheckConstraint(
            "midfield_rating >= 0 AND midfield_rating <= 99",
            name="ck_teams_midfield_rating",
        ),
        CheckConstraint(
            "defend_rating >= 0 AND defend_rating <= 99",
            name="ck_teams_defend_rating",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    league: Mapped[str] = mapped_column(String(128), nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    overall_rating: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    attack_rating: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    midfield_rating: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    defend_rating: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    version: Mapped[str] = mapped_column(String(16), nullable=False, default="FC25")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
