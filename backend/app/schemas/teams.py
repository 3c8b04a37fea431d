from datetime import datetime

from app.schemas.base import ApiModel


class TeamCreate(ApiModel):
    team_id: str | None = None
    team_name: str | None = None
    division: str | None = None
    abbreviation: str | None = None
    logo_url: str | None = None


class TeamUpdate(ApiModel):
    team_name: str | None = None
    division: str | None = None
    abbreviation: str | None = None
    logo_url: str | None = None


class TeamResponse(ApiModel):
    team_id: str
    team_name: str
    division: str | None = None
    abbreviation: str | None = None
    logo_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
