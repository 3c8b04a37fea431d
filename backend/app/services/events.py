import logging

from app.errors import (
    AppError,
    ConflictError,
    NotFoundError,
    ReferenceNotFoundError,
    StateError,
    ValidationError,
)
from app.schemas.events import EventCreate, EventUpdate, GenerateTextRequest
from app.services.game_state_machine import IN_PROGRESS, GameStateMachine
from app.services.players import PlayerService
from app.services.records import build_changes, new_id, utc_now
from app.services.teams import TeamService
from app.services.text_generator import EventTextGenerator
from app.store import ConditionalCheckFailedError, DocumentStore

logger = logging.getLogger(__name__)

TABLE = "events"
GOAL = "GOAL"
DEFAULT_LIST_LIMIT = 50


class EventService:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store
        self.games = GameStateMachine(store)
        self.players = PlayerService(store)
        self.teams = TeamService(store)
        self.text_generator = EventTextGenerator(store)

    async def get_event(self, event_id: str) -> dict:
        event = await self.store.get(TABLE, event_id)
        if event is None:
            raise NotFoundError(f"Event with ID {event_id} not found")
        return event

    async def list_events(
        self,
        game_id: str | None = None,
        event_type: str | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        if game_id:
            events = await self.store.query(
                TABLE, "game_id", game_id, sort_field="created_at", descending=True
            )
            if event_type:
                events = [e for e in events if e["event_type"] == event_type]
            return events[:limit] if limit else events

        if event_type:
            return await self.store.scan(TABLE, {"event_type": event_type}, limit=limit)

        events = await self.store.scan(TABLE)
        events.sort(key=lambda e: e["created_at"], reverse=True)
        return events[: limit or DEFAULT_LIST_LIMIT]

    async def create_event(self, data: EventCreate) -> dict:
        """Record an event against a running game.

        A GOAL bumps the scoring side's score on the game first, and the event
        keeps the post-goal score. The game update and the event write are
        separate, so a failed event write leaves the score changed.
        """
        if not data.game_id:
            raise ValidationError("Game ID is required")
        if not data.event_type:
            raise ValidationError("Event type is required")

        game = await self.store.get("games", data.game_id)
        if game is None:
            raise ReferenceNotFoundError(f"Game with ID {data.game_id} not found")
        if game["status"] != IN_PROGRESS:
            raise StateError("Events can only be created for games in progress")

        now = utc_now()
        event = {
            **data.model_dump(exclude_none=True),
            "event_id": data.event_id or new_id(),
            "created_at": now,
            "updated_at": now,
        }
        if not event.get("game_time"):
            event["game_time"] = game["current_game_time"]
        if not event.get("period"):
            event["period"] = game["current_period"]

        if data.event_id and await self.store.get(TABLE, data.event_id) is not None:
            raise ConflictError(f"Event with ID {data.event_id} already exists")

        # Validate references before touching the score
        player = None
        if data.player_id:
            player = await self.players.require_player(data.player_id)
            event["player_name"] = player["player_name"]
            event["player_number"] = player.get("jersey_number")
            event.setdefault("team_id", player["team_id"])

        if data.event_type == GOAL:
            team_id = data.team_id
            if not team_id:
                raise ValidationError("Team ID is required for goal events")
            if team_id == game["home_team_id"]:
                home_score, away_score = game["home_score"] + 1, game["away_score"]
            elif team_id == game["away_team_id"]:
                home_score, away_score = game["home_score"], game["away_score"] + 1
            else:
                raise ValidationError("Invalid team ID for this game")

        if event.get("team_id"):
            team = await self.teams.require_team(event["team_id"])
            event["team_name"] = team["team_name"]

        if data.event_type == GOAL:
            game = await self.games.update_score(game["game_id"], home_score, away_score)
        event["home_score"] = game["home_score"]
        event["away_score"] = game["away_score"]

        try:
            generated = await self.text_generator.generate_text(event, game=game)
        except AppError as exc:
            logger.warning(
                "Failed to generate text for event %s (%s): %s",
                event["event_id"],
                data.event_type,
                exc.message,
            )
        else:
            event["generated_text"] = generated["text"]
            event["template_id"] = generated["template_id"]

        try:
            created = await self.store.put(TABLE, event, if_not_exists=True)
        except ConditionalCheckFailedError:
            raise ConflictError(f"Event with ID {event['event_id']} already exists") from None

        logger.info(
            "Created %s event %s for game %s",
            created["event_type"],
            created["event_id"],
            created["game_id"],
        )
        return created

    async def update_event(self, event_id: str, data: EventUpdate) -> dict:
        await self.get_event(event_id)
        changes = build_changes(data.model_dump(exclude_unset=True), "event_id")
        return await self.store.update(TABLE, event_id, changes)

    async def delete_event(self, event_id: str) -> None:
        await self.get_event(event_id)
        await self.store.delete(TABLE, event_id)
        logger.info("Deleted event %s", event_id)

    async def generate_text_for_event(self, event_id: str, template_id: str | None = None) -> dict:
        event = await self.get_event(event_id)
        return await self.text_generator.generate_text(event, template_id)

    async def generate_text(self, data: GenerateTextRequest) -> dict:
        if data.event_id:
            return await self.generate_text_for_event(data.event_id, data.template_id)
        if not data.template_id:
            raise ValidationError(
                "Either eventId or manual event details with templateId are required"
            )
        return await self.text_generator.generate_manual_text(data)
