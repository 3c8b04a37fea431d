from datetime import datetime

from app.schemas.base import ApiModel


class PlayerCreate(ApiModel):
    player_id: str | None = None
    team_id: str | None = None
    player_name: str | None = None
    jersey_number: str | None = None
    position: str | None = None


class PlayerUpdate(ApiModel):
    team_id: str | None = None
    player_name: str | None = None
    jersey_number: str | None = None
    position: str | None = None


class PlayerResponse(ApiModel):
    player_id: str
    team_id: str
    player_name: str
    jersey_number: str | None = None
    position: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
