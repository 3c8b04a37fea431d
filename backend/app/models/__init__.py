from app.models.base import Base
from app.models.team import Team
from app.models.player import Player
from app.models.game import Game
from app.models.event import Event
from app.models.template import Template, TemplateCategory, TemplateVariable

# Table name -> mapped class, used by the document store
TABLES: dict[str, type[Base]] = {
    model.__tablename__: model
    for model in (Team, Player, Game, Event, Template, TemplateCategory, TemplateVariable)
}

__all__ = [
    "Base",
    "Team",
    "Player",
    "Game",
    "Event",
    "Template",
    "TemplateCategory",
    "TemplateVariable",
    "TABLES",
]
