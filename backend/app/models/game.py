from datetime import datetime

from sqlalchemy import DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin


class Game(TimestampMixin, Base):
    __tablename__ = "games"
    __table_args__ = (Index("ix_games_status_date", "status", "game_date"),)

    game_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    status: Mapped[str] = mapped_column(String(20), default="scheduled")
    game_date: Mapped[str] = mapped_column(String(32))
    venue: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Team names are copied in at create/update time; ids are not foreign keys
    home_team_id: Mapped[str] = mapped_column(String(64), index=True)
    away_team_id: Mapped[str] = mapped_column(String(64), index=True)
    home_team_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    away_team_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    current_period: Mapped[int] = mapped_column(default=1)
    current_game_time: Mapped[str] = mapped_column(String(8), default="20:00")
    home_score: Mapped[int] = mapped_column(default=0)
    away_score: Mapped[int] = mapped_column(default=0)

    start_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
