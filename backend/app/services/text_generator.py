"""Broadcast text generation for game events.

A template's ``text`` holds ``{{variableName}}`` placeholders. Generation
resolves a template (explicit id, or the default for the event type), builds a
context from the event and its game, and substitutes the placeholders.
"""

import logging
import re
from typing import Any

from app.config import settings
from app.errors import NoTemplateError, ReferenceNotFoundError, ValidationError
from app.schemas.events import GenerateTextRequest
from app.services.templates import TemplateService, normalize_event_type
from app.store import DocumentStore

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^{}]+?)\}\}")
OVERRIDE_PREFIX = "var_"

PERIOD_NAMES = {
    1: "first period",
    2: "second period",
    3: "third period",
    4: "overtime",
    5: "shootout",
}

# (name, category, description, example) for every key build_context produces
CONTEXT_VARIABLES = [
    ("playerName", "player", "Name of the player involved", "Jane Smith"),
    ("playerNumber", "player", "Jersey number of the player involved", "17"),
    ("team", "team", "Team credited with the event", "Perth Thunder"),
    ("homeTeam", "team", "Home team name", "Perth Thunder"),
    ("awayTeam", "team", "Away team name", "Melbourne Ice"),
    ("homeScore", "score", "Home score at the time of the event", "2"),
    ("awayScore", "score", "Away score at the time of the event", "1"),
    ("scoreStatus", "score", "lead, trail or tied from the home side's view", "lead"),
    ("timeRemaining", "time", "Clock remaining in the period", "12:34"),
    ("period", "time", "Period as words", "second period"),
    ("periodNumber", "time", "Period as a number", "2"),
    ("penaltyType", "penalty", "Penalty infraction", "tripping"),
    ("penaltyDuration", "penalty", "Penalty length", "2 minutes"),
    ("venue", "location", "Game venue", "Perth Ice Arena"),
]


def determine_score_status(home_score: int, away_score: int) -> str:
    if home_score > away_score:
        return "lead"
    if home_score < away_score:
        return "trail"
    return "tied"


def period_text(period: int) -> str:
    return PERIOD_NAMES.get(period, f"period {period}")


def _first_present(*values: Any, default: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return default


def build_context(
    event: dict,
    game: dict | None = None,
    overrides: dict[str, Any] | None = None,
    home_team_name: str = settings.default_home_team_name,
    venue: str = settings.default_venue,
) -> dict[str, Any]:
    """Map an event and its game onto substitution values.

    Scores prefer the event's snapshot over the live game. Overrides are
    applied last and win over the standard keys.
    """
    game = game or {}

    home_score = _first_present(event.get("home_score"), game.get("home_score"), default=0)
    away_score = _first_present(event.get("away_score"), game.get("away_score"), default=0)
    period = event.get("period") or game.get("current_period") or 1

    context = {
        "playerName": event.get("player_name") or "",
        "playerNumber": event.get("player_number") or "",
        "team": event.get("team_name") or home_team_name,
        "homeTeam": game.get("home_team_name") or home_team_name,
        "awayTeam": game.get("away_team_name") or "",
        "homeScore": home_score,
        "awayScore": away_score,
        "scoreStatus": determine_score_status(home_score, away_score),
        "timeRemaining": event.get("game_time") or game.get("current_game_time") or "",
        "period": period_text(period),
        "periodNumber": period,
        "penaltyType": event.get("penalty_type") or "",
        "penaltyDuration": event.get("penalty_duration") or "",
        "venue": game.get("venue") or venue,
    }
    if overrides:
        context.update(overrides)
    return context


def fill_template(text: str, context: dict[str, Any]) -> str:
    """Substitute ``{{key}}`` for every key in ``context``.

    Placeholders with no matching key are left as they are.
    """

    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if key not in context:
            return match.group(0)
        return str(context[key])

    return PLACEHOLDER_PATTERN.sub(_replace, text)


def extract_overrides(extra: dict[str, Any] | None) -> dict[str, Any]:
    """Pull ``var_<name>`` keys out of a request body, prefix stripped."""
    return {
        key[len(OVERRIDE_PREFIX):]: value
        for key, value in (extra or {}).items()
        if key.startswith(OVERRIDE_PREFIX) and len(key) > len(OVERRIDE_PREFIX)
    }


class EventTextGenerator:
    def __init__(
        self,
        store: DocumentStore,
        home_team_name: str = settings.default_home_team_name,
        venue: str = settings.default_venue,
    ) -> None:
        self.store = store
        self.templates = TemplateService(store)
        self.home_team_name = home_team_name
        self.venue = venue

    async def resolve_template(
        self, event_type: str | None, template_id: str | None = None
    ) -> dict:
        """Pick the template to render.

        An explicit id must exist. Otherwise the templates for the event type
        are consulted: the one flagged default wins, and without a default the
        first row the store returns is used. That fallback order is whatever
        the backing store yields and is not otherwise guaranteed.
        """
        if template_id:
            return await self.templates.get_template(template_id)

        if not event_type:
            raise ValidationError("Event type is required to select a template")

        candidates = await self.templates.templates_for_event_type(event_type)
        if not candidates:
            raise NoTemplateError(f"No template found for event type: {event_type}")

        for template in candidates:
            if template.get("is_default"):
                return template
        return candidates[0]

    async def _load_game(self, game_id: str | None) -> dict | None:
        if not game_id:
            return None
        game = await self.store.get("games", game_id)
        if game is None:
            raise ReferenceNotFoundError(f"Game with ID {game_id} not found")
        return game

    def _render(self, template: dict, context: dict[str, Any]) -> dict:
        return {
            "text": fill_template(template["text"], context),
            "template_id": template["template_id"],
            "template_name": template.get("name"),
        }

    async def generate_text(
        self, event: dict, template_id: str | None = None, game: dict | None = None
    ) -> dict:
        """Render text for a stored or about-to-be-stored event."""
        if game is None:
            game = await self._load_game(event.get("game_id"))
        event_type = event.get("event_type")
        template = await self.resolve_template(
            normalize_event_type(event_type) if event_type else None, template_id
        )
        context = build_context(event, game, home_team_name=self.home_team_name, venue=self.venue)
        return self._render(template, context)

    async def generate_manual_text(self, data: GenerateTextRequest) -> dict:
        """Render text for an event described in the request and never saved."""
        if not data.template_id:
            raise ValidationError("Template ID is required")

        template = await self.resolve_template(data.event_type, data.template_id)
        game = await self._load_game(data.game_id)
        event = data.model_dump(exclude={"event_id", "template_id"}, exclude_none=True)
        overrides = extract_overrides(data.model_extra)

        context = build_context(
            event,
            game,
            overrides,
            home_team_name=self.home_team_name,
            venue=self.venue,
        )
        return self._render(template, context)


async def seed_template_variables(store: DocumentStore) -> int:
    """Store the documented context variables that are not there yet."""
    created = 0
    for name, category, description, example in CONTEXT_VARIABLES:
        if await store.get("template_variables", name) is not None:
            continue
        await store.put(
            "template_variables",
            {
                "variable_name": name,
                "category": category,
                "description": description,
                "example": example,
            },
        )
        created += 1
    if created:
        logger.info("Seeded %d template variables", created)
    return created
