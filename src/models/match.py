"""matches and match_players table models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, new_id


class MatchRecord(Base):
    """One pairing; scores stay NULL until a result is entered."""

    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("team1_score IS NULL OR team1_score >= 0", name="ck_matches_team1_score"),
        CheckConstraint("team2_score IS NULL OR team2_score >= 0", name="ck_matches_team2_score"),
        CheckConstraint(
            "penalties_winner IS NULL OR penalties_winner IN (1, 2)",
            name="ck_matches_penalties_winner",
        ),
        Index("idx_matches_played_at", "played_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    team1_id: Mapped[str] = mapped_column(ForeignKey("teams.id", ondelete="RESTRICT"), nullable=False)
    team2_id: Mapped[str] = mapped_column(ForeignKey("teams.id", ondelete="RESTRICT"), nullable=False)
    team1_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    team2_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    penalties_winner: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    played_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


class MatchPlayerRecord(Base):
    """Roster entry: which side of a match a player was on."""

    __tablename__ = "match_players"
    __table_args__ = (
        UniqueConstraint("match_id", "player_id", name="uq_match_players_match_player"),
        CheckConstraint("team_number IN (1, 2)", name="ck_match_players_team_number"),
        Index("idx_match_players_match_id", "match_id"),
        Index("idx_match_players_player_id", "player_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    match_id: Mapped[str] = mapped_column(ForeignKey("matches.id", ondelete="CASCADE"), nullable=False)
    player_id: Mapped[str] = mapped_column(ForeignKey("players.id", ondelete="CASCADE"), nullable=False)
    team_number: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
