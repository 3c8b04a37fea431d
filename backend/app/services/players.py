import logging

from app.errors import ConflictError, NotFoundError, ReferenceNotFoundError, ValidationError
from app.schemas.players import PlayerCreate, PlayerUpdate
from app.services.records import build_changes, new_id, utc_now
from app.services.teams import TeamService
from app.store import ConditionalCheckFailedError, DocumentStore

logger = logging.getLogger(__name__)

TABLE = "players"


class PlayerService:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store
        self.teams = TeamService(store)

    async def get_player(self, player_id: str) -> dict:
        player = await self.store.get(TABLE, player_id)
        if player is None:
            raise NotFoundError(f"Player with ID {player_id} not found")
        return player

    async def require_player(self, player_id: str) -> dict:
        player = await self.store.get(TABLE, player_id)
        if player is None:
            raise ReferenceNotFoundError(f"Player with ID {player_id} not found")
        return player

    async def list_players(
        self,
        team_id: str | None = None,
        position: str | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        if team_id:
            players = await self.store.query(TABLE, "team_id", team_id)
            if position:
                players = [p for p in players if p.get("position") == position]
            return players[:limit] if limit else players

        filters = {"position": position} if position else None
        return await self.store.scan(TABLE, filters, limit=limit)

    async def create_player(self, data: PlayerCreate) -> dict:
        if not data.player_name:
            raise ValidationError("Player name is required")
        if not data.team_id:
            raise ValidationError("Team ID is required")
        await self.teams.require_team(data.team_id)

        now = utc_now()
        player = {
            **data.model_dump(exclude_none=True),
            "player_id": data.player_id or new_id(),
            "created_at": now,
            "updated_at": now,
        }
        try:
            created = await self.store.put(TABLE, player, if_not_exists=True)
        except ConditionalCheckFailedError:
            raise ConflictError(f"Player with ID {player['player_id']} already exists") from None
        logger.info("Created player %s for team %s", created["player_id"], created["team_id"])
        return created

    async def update_player(self, player_id: str, data: PlayerUpdate) -> dict:
        existing = await self.get_player(player_id)
        if data.team_id and data.team_id != existing["team_id"]:
            await self.teams.require_team(data.team_id)
        changes = build_changes(data.model_dump(exclude_unset=True), "player_id")
        return await self.store.update(TABLE, player_id, changes)

    async def delete_player(self, player_id: str) -> None:
        await self.get_player(player_id)
        await self.store.delete(TABLE, player_id)
        logger.info("Deleted player %s", player_id)
