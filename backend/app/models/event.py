from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin


class Event(TimestampMixin, Base):
    __tablename__ = "events"
    __table_args__ = (Index("ix_events_game_created", "game_id", "created_at"),)

    event_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    game_id: Mapped[str] = mapped_column(String(64))
    event_type: Mapped[str] = mapped_column(String(50), index=True)

    player_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    player_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    player_number: Mapped[str | None] = mapped_column(String(10), nullable=True)
    team_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    team_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Snapshot of the game when the event happened
    game_time: Mapped[str | None] = mapped_column(String(8), nullable=True)
    period: Mapped[int | None] = mapped_column(nullable=True)
    home_score: Mapped[int | None] = mapped_column(nullable=True)
    away_score: Mapped[int | None] = mapped_column(nullable=True)

    penalty_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    penalty_duration: Mapped[str | None] = mapped_column(String(20), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    generated_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    template_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
