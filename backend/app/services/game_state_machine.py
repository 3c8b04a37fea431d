import logging
import re

from app.errors import ConflictError, NotFoundError, StateError, ValidationError
from app.schemas.games import GameCreate, GameUpdate
from app.services.records import build_changes, new_id, utc_now
from app.services.teams import TeamService
from app.store import ConditionalCheckFailedError, DocumentStore

logger = logging.getLogger(__name__)

TABLE = "games"

SCHEDULED = "scheduled"
IN_PROGRESS = "in_progress"
COMPLETED = "completed"
CANCELLED = "cancelled"
STATUSES = (SCHEDULED, IN_PROGRESS, COMPLETED, CANCELLED)

# Lifecycle transitions: {current_status: {action: next_status}}
TRANSITIONS = {
    SCHEDULED: {"start": IN_PROGRESS, "cancel": CANCELLED},
    IN_PROGRESS: {"stop": COMPLETED},
    COMPLETED: {},
    CANCELLED: {},
}

# Three regulation periods, then overtime (4) and shootout (5)
REGULATION_PERIODS = 3
MAX_PERIOD = 5
REGULATION_CLOCK = "20:00"
OVERTIME_CLOCK = "5:00"

GAME_TIME_PATTERN = re.compile(r"^([0-9]{1,2}):([0-5][0-9])$")


def period_clock(period: int) -> str:
    """Clock a period starts with."""
    return REGULATION_CLOCK if period <= REGULATION_PERIODS else OVERTIME_CLOCK


def is_valid_game_time(value: str) -> bool:
    return bool(GAME_TIME_PATTERN.match(value))


def can_transition(status: str, action: str) -> bool:
    return action in TRANSITIONS.get(status, {})


class GameStateMachine:
    """Owns a game's lifecycle and its in-progress period, clock and score.

    Every operation reads the game fresh from the store, checks the current
    status, and writes a partial update back. There is no locking, so two
    concurrent requests against the same game can interleave.
    """

    def __init__(self, store: DocumentStore) -> None:
        self.store = store
        self.teams = TeamService(store)

    async def get_game(self, game_id: str) -> dict:
        game = await self.store.get(TABLE, game_id)
        if game is None:
            raise NotFoundError(f"Game with ID {game_id} not found")
        return game

    async def list_games(
        self,
        status: str | None = None,
        team_id: str | None = None,
        date: str | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        if status:
            # Ordered by game date; date narrows to a single day
            games = await self.store.query(
                TABLE, "status", status, sort_field="game_date", sort_value=date
            )
        else:
            filters = {"game_date": date} if date else None
            games = await self.store.scan(TABLE, filters)

        if team_id:
            games = [g for g in games if team_id in (g["home_team_id"], g["away_team_id"])]
        return games[:limit] if limit else games

    async def create_game(self, data: GameCreate) -> dict:
        if not data.home_team_id:
            raise ValidationError("Home team ID is required")
        if not data.away_team_id:
            raise ValidationError("Away team ID is required")
        if not data.game_date:
            raise ValidationError("Game date is required")

        home_team = await self.teams.require_team(data.home_team_id)
        away_team = await self.teams.require_team(data.away_team_id)

        now = utc_now()
        game = {
            **data.model_dump(exclude_none=True),
            "game_id": data.game_id or new_id(),
            "home_team_name": home_team["team_name"],
            "away_team_name": away_team["team_name"],
            "status": SCHEDULED,
            "current_period": 1,
            "current_game_time": period_clock(1),
            "home_score": 0,
            "away_score": 0,
            "created_at": now,
            "updated_at": now,
        }
        try:
            created = await self.store.put(TABLE, game, if_not_exists=True)
        except ConditionalCheckFailedError:
            raise ConflictError(f"Game with ID {game['game_id']} already exists") from None

        logger.info(
            "Created game %s: %s vs %s on %s",
            created["game_id"],
            created["home_team_name"],
            created["away_team_name"],
            created["game_date"],
        )
        return created

    async def update_game(self, game_id: str, data: GameUpdate) -> dict:
        """Update scheduling details. Score and clock go through the transitions."""
        game = await self.get_game(game_id)
        payload = data.model_dump(exclude_unset=True)

        if data.status is not None and data.status != game["status"]:
            if data.status != CANCELLED:
                raise ValidationError(
                    "Status can only be changed to cancelled; use start/stop for other transitions"
                )
            if not can_transition(game["status"], "cancel"):
                raise StateError(f"Cannot cancel a game that is {game['status']}")

        if data.home_team_id and data.home_team_id != game["home_team_id"]:
            home_team = await self.teams.require_team(data.home_team_id)
            payload["home_team_name"] = home_team["team_name"]
        if data.away_team_id and data.away_team_id != game["away_team_id"]:
            away_team = await self.teams.require_team(data.away_team_id)
            payload["away_team_name"] = away_team["team_name"]

        changes = build_changes(payload, "game_id")
        return await self.store.update(TABLE, game_id, changes)

    async def delete_game(self, game_id: str) -> None:
        await self.get_game(game_id)
        await self.store.delete(TABLE, game_id)
        logger.info("Deleted game %s", game_id)

    async def start_game(self, game_id: str) -> dict:
        game = await self.get_game(game_id)
        status = game["status"]
        if status == IN_PROGRESS:
            raise StateError("Game is already in progress")
        if status == COMPLETED:
            raise StateError("Cannot start a completed game")
        if not can_transition(status, "start"):
            raise StateError(f"Cannot start a game that is {status}")

        now = utc_now()
        updated = await self.store.update(
            TABLE, game_id, {"status": IN_PROGRESS, "start_time": now, "updated_at": now}
        )
        logger.info("Game %s started", game_id)
        return updated

    async def stop_game(self, game_id: str) -> dict:
        game = await self.get_game(game_id)
        if not can_transition(game["status"], "stop"):
            raise StateError("Can only stop a game that is in progress")

        now = utc_now()
        updated = await self.store.update(
            TABLE, game_id, {"status": COMPLETED, "end_time": now, "updated_at": now}
        )
        logger.info(
            "Game %s completed, final score %s-%s",
            game_id,
            updated["home_score"],
            updated["away_score"],
        )
        return updated

    @staticmethod
    def _require_in_progress(game: dict, action: str) -> None:
        if game["status"] != IN_PROGRESS:
            raise StateError(f"Can only {action} for a game in progress")

    async def update_score(
        self,
        game_id: str,
        home_score: int | None = None,
        away_score: int | None = None,
    ) -> dict:
        game = await self.get_game(game_id)
        self._require_in_progress(game, "update score")

        if home_score is None and away_score is None:
            raise ValidationError("Either homeScore or awayScore must be provided")

        changes = {}
        try:
            if home_score is not None:
                changes["home_score"] = int(home_score)
            if away_score is not None:
                changes["away_score"] = int(away_score)
        except (TypeError, ValueError):
            raise ValidationError("Scores must be integers") from None
        if any(score < 0 for score in changes.values()):
            raise ValidationError("Scores cannot be negative")

        changes["updated_at"] = utc_now()
        updated = await self.store.update(TABLE, game_id, changes)
        logger.info(
            "Game %s score now %s-%s", game_id, updated["home_score"], updated["away_score"]
        )
        return updated

    async def update_time(self, game_id: str, current_game_time: str | None) -> dict:
        game = await self.get_game(game_id)
        self._require_in_progress(game, "update time")

        if not current_game_time:
            raise ValidationError("currentGameTime must be provided")
        if not is_valid_game_time(current_game_time):
            raise ValidationError("currentGameTime must be in MM:SS format")

        return await self.store.update(
            TABLE,
            game_id,
            {"current_game_time": current_game_time, "updated_at": utc_now()},
        )

    async def advance_period(self, game_id: str) -> dict:
        game = await self.get_game(game_id)
        self._require_in_progress(game, "change period")

        if game["current_period"] >= MAX_PERIOD:
            raise StateError("Already at maximum period")

        next_period = game["current_period"] + 1
        updated = await self.store.update(
            TABLE,
            game_id,
            {
                "current_period": next_period,
                "current_game_time": period_clock(next_period),
                "updated_at": utc_now(),
            },
        )
        logger.info("Game %s advanced to period %d", game_id, next_period)
        return updated
