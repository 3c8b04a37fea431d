from datetime import datetime

from pydantic import ConfigDict

from app.schemas.base import ApiModel


class EventCreate(ApiModel):
    event_id: str | None = None
    game_id: str | None = None
    event_type: str | None = None
    player_id: str | None = None
    team_id: str | None = None
    game_time: str | None = None
    period: int | None = None
    penalty_type: str | None = None
    penalty_duration: str | None = None
    description: str | None = None


class EventUpdate(ApiModel):
    event_type: str | None = None
    player_id: str | None = None
    player_name: str | None = None
    player_number: str | None = None
    team_id: str | None = None
    team_name: str | None = None
    game_time: str | None = None
    period: int | None = None
    home_score: int | None = None
    away_score: int | None = None
    penalty_type: str | None = None
    penalty_duration: str | None = None
    description: str | None = None
    generated_text: str | None = None
    template_id: str | None = None


class GenerateTextRequest(ApiModel):
    """Body for text generation.

    With ``eventId`` the stored event is rendered. Otherwise the body describes
    a manual, unsaved event and ``templateId`` is required. Extra keys of the
    form ``var_<name>`` override context variables.
    """

    model_config = ConfigDict(extra="allow")

    event_id: str | None = None
    template_id: str | None = None
    game_id: str | None = None
    event_type: str | None = None
    player_name: str | None = None
    player_number: str | None = None
    team_name: str | None = None
    home_score: int | None = None
    away_score: int | None = None
    game_time: str | None = None
    period: int | None = None
    penalty_type: str | None = None
    penalty_duration: str | None = None


class GeneratedTextResponse(ApiModel):
    text: str
    template_id: str
    template_name: str | None = None


class EventResponse(ApiModel):
    event_id: str
    game_id: str
    event_type: str
    player_id: str | None = None
    player_name: str | None = None
    player_number: str | None = None
    team_id: str | None = None
    team_name: str | None = None
    game_time: str | None = None
    period: int | None = None
    home_score: int | None = None
    away_score: int | None = None
    penalty_type: str | None = None
    penalty_duration: str | None = None
    description: str | None = None
    generated_text: str | None = None
    template_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
