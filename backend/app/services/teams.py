import logging

from app.errors import ConflictError, NotFoundError, ReferenceNotFoundError, ValidationError
from app.schemas.teams import TeamCreate, TeamUpdate
from app.services.records import build_changes, new_id, utc_now
from app.store import ConditionalCheckFailedError, DocumentStore

logger = logging.getLogger(__name__)

TABLE = "teams"


class TeamService:
    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def get_team(self, team_id: str) -> dict:
        team = await self.store.get(TABLE, team_id)
        if team is None:
            raise NotFoundError(f"Team with ID {team_id} not found")
        return team

    async def require_team(self, team_id: str) -> dict:
        """Look up a team referenced from another entity."""
        team = await self.store.get(TABLE, team_id)
        if team is None:
            raise ReferenceNotFoundError(f"Team with ID {team_id} not found")
        return team

    async def list_teams(self, division: str | None = None, limit: int | None = None) -> list[dict]:
        filters = {"division": division} if division else None
        return await self.store.scan(TABLE, filters, limit=limit)

    async def create_team(self, data: TeamCreate) -> dict:
        if not data.team_name:
            raise ValidationError("Team name is required")

        now = utc_now()
        team = {
            **data.model_dump(exclude_none=True),
            "team_id": data.team_id or new_id(),
            "created_at": now,
            "updated_at": now,
        }
        try:
            created = await self.store.put(TABLE, team, if_not_exists=True)
        except ConditionalCheckFailedError:
            raise ConflictError(f"Team with ID {team['team_id']} already exists") from None
        logger.info("Created team %s (%s)", created["team_id"], created["team_name"])
        return created

    async def update_team(self, team_id: str, data: TeamUpdate) -> dict:
        await self.get_team(team_id)
        changes = build_changes(data.model_dump(exclude_unset=True), "team_id")
        return await self.store.update(TABLE, team_id, changes)

    async def delete_team(self, team_id: str) -> None:
        await self.get_team(team_id)
        await self.store.delete(TABLE, team_id)
        logger.info("Deleted team %s", team_id)
