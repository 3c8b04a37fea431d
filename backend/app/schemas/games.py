from datetime import datetime

from app.schemas.base import ApiModel


class GameCreate(ApiModel):
    game_id: str | None = None
    home_team_id: str | None = None
    away_team_id: str | None = None
    game_date: str | None = None
    venue: str | None = None


class GameUpdate(ApiModel):
    home_team_id: str | None = None
    away_team_id: str | None = None
    game_date: str | None = None
    venue: str | None = None
    status: str | None = None


class ScoreUpdate(ApiModel):
    home_score: int | None = None
    away_score: int | None = None


class TimeUpdate(ApiModel):
    current_game_time: str | None = None


class GameResponse(ApiModel):
    game_id: str
    status: str
    game_date: str
    venue: str | None = None
    home_team_id: str
    away_team_id: str
    home_team_name: str | None = None
    away_team_name: str | None = None
    current_period: int
    current_game_time: str
    home_score: int
    away_score: int
    start_time: datetime | None = None
    end_time: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
